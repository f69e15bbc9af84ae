"""Pydantic models for Todoist MCP."""

from todoist_mcp.models.entities import (
    ActivityEventModel,
    CollaboratorModel,
    CommentModel,
    ProjectModel,
    SectionModel,
    TaskModel,
    UserModel,
)
from todoist_mcp.models.inputs import (
    AddCommentsInput,
    AddProjectsInput,
    AddSectionsInput,
    AddTasksInput,
    ApiLimits,
    CommentSpec,
    CommentUpdateSpec,
    CompleteTasksInput,
    DeleteObjectInput,
    FetchInput,
    FindActivityInput,
    FindCommentsInput,
    FindCompletedTasksInput,
    FindProjectCollaboratorsInput,
    FindProjectsInput,
    FindSectionsInput,
    FindTasksByDateInput,
    FindTasksInput,
    GetOverviewInput,
    ManageAssignmentsInput,
    ProjectSpec,
    ProjectUpdateSpec,
    SearchInput,
    SectionSpec,
    SectionUpdateSpec,
    TaskSpec,
    TaskUpdateSpec,
    ToolInput,
    UpdateCommentsInput,
    UpdateProjectsInput,
    UpdateSectionsInput,
    UpdateTasksInput,
    UserInfoInput,
)
from todoist_mcp.models.output import (
    ChangeKind,
    FieldChange,
    PageRequest,
    PageResult,
    ResolvedUser,
    SummaryReport,
    ToolOutput,
)

__all__ = [
    # Entity models
    "TaskModel",
    "ProjectModel",
    "SectionModel",
    "CommentModel",
    "CollaboratorModel",
    "ActivityEventModel",
    "UserModel",
    # Input models
    "ApiLimits",
    "ToolInput",
    "TaskSpec",
    "TaskUpdateSpec",
    "AddTasksInput",
    "UpdateTasksInput",
    "CompleteTasksInput",
    "FindTasksInput",
    "FindTasksByDateInput",
    "FindCompletedTasksInput",
    "ProjectSpec",
    "ProjectUpdateSpec",
    "AddProjectsInput",
    "UpdateProjectsInput",
    "FindProjectsInput",
    "SectionSpec",
    "SectionUpdateSpec",
    "AddSectionsInput",
    "UpdateSectionsInput",
    "FindSectionsInput",
    "CommentSpec",
    "CommentUpdateSpec",
    "AddCommentsInput",
    "UpdateCommentsInput",
    "FindCommentsInput",
    "FindProjectCollaboratorsInput",
    "ManageAssignmentsInput",
    "FindActivityInput",
    "SearchInput",
    "FetchInput",
    "DeleteObjectInput",
    "GetOverviewInput",
    "UserInfoInput",
    # Result models
    "PageRequest",
    "PageResult",
    "ResolvedUser",
    "SummaryReport",
    "ToolOutput",
    "ChangeKind",
    "FieldChange",
]
