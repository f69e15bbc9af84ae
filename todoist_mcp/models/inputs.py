"""Input models for Todoist MCP tools."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from todoist_mcp.enums import (
    ActivityEventType,
    ActivityObjectType,
    AssignmentOperation,
    CompletedGetBy,
    LabelsOperator,
    ObjectType,
    OverdueOption,
    Priority,
    ResponseFormat,
    ResponsibleUserFiltering,
    ViewStyle,
)


class ApiLimits:
    """Per-tool defaults and maxima for list sizes."""

    TASKS_DEFAULT = 10
    TASKS_MAX = 100
    COMPLETED_TASKS_DEFAULT = 50
    COMPLETED_TASKS_MAX = 200
    PROJECTS_DEFAULT = 50
    PROJECTS_MAX = 100
    COMMENTS_DEFAULT = 10
    COMMENTS_MAX = 10
    ACTIVITY_DEFAULT = 20
    ACTIVITY_MAX = 100
    BATCH_MAX = 25
    ASSIGNMENTS_MAX = 50


class ToolInput(BaseModel):
    """Base for every tool input."""

    model_config = ConfigDict(str_strip_whitespace=True)

    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' for human-readable or 'json' for machine-readable",
    )


class LabelsFilterMixin(BaseModel):
    labels: list[str] | None = Field(default=None, description="Labels to filter by (without '@')", max_length=20)
    labels_operator: LabelsOperator = Field(
        default=LabelsOperator.OR,
        description="How labels combine: 'or' (any label) or 'and' (all labels)",
    )


# ============================================================================
# Task Input Models
# ============================================================================


class TaskSpec(BaseModel):
    """One task to create."""

    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(..., description="Task name/title (supports Markdown)", min_length=1, max_length=500)
    description: str | None = Field(default=None, description="Additional details (supports Markdown)")
    due_string: str | None = Field(default=None, description="Due date in natural language ('tomorrow', 'every monday')")
    deadline_date: str | None = Field(
        default=None, description="Deadline date (YYYY-MM-DD)", pattern=r"^\d{4}-\d{2}-\d{2}$"
    )
    duration: str | None = Field(default=None, description="Duration such as '2h', '90m' or '2h30m' (max 24h)")
    priority: Priority | None = Field(default=None, description="Priority: p1 (highest) to p4 (default)")
    labels: list[str] | None = Field(default=None, description="Labels to attach")
    project_id: str | None = Field(default=None, description="Project to add the task to (defaults to Inbox)")
    section_id: str | None = Field(default=None, description="Section to add the task to")
    parent_id: str | None = Field(default=None, description="Parent task ID, to create a subtask")
    responsible_user: str | None = Field(default=None, description="Assignee: user ID, name, or email")


class AddTasksInput(ToolInput):
    """Input model for adding tasks."""

    tasks: list[TaskSpec] = Field(..., description="Tasks to add", min_length=1, max_length=ApiLimits.BATCH_MAX)


class TaskUpdateSpec(BaseModel):
    """
    One task update.

    Clearable fields take the string "remove" (due_string, deadline_date,
    duration) or "unassign" (responsible_user) to clear them.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(..., description="Task ID to update", min_length=1)
    content: str | None = Field(default=None, description="New task name/title", min_length=1)
    description: str | None = Field(default=None, description="New description")
    due_string: str | None = Field(default=None, description="New due date in natural language, or 'remove'")
    deadline_date: str | None = Field(default=None, description="New deadline (YYYY-MM-DD), or 'remove'")
    duration: str | None = Field(default=None, description="New duration ('2h'), or 'remove'")
    priority: Priority | None = Field(default=None, description="New priority (p1-p4)")
    labels: list[str] | None = Field(default=None, description="Replacement label list")
    project_id: str | None = Field(default=None, description="Move to this project")
    section_id: str | None = Field(default=None, description="Move to this section")
    parent_id: str | None = Field(default=None, description="Move under this parent task")
    responsible_user: str | None = Field(default=None, description="New assignee (ID, name, email), or 'unassign'")

    @model_validator(mode="after")
    def single_destination(self) -> "TaskUpdateSpec":
        moves = [v for v in (self.project_id, self.section_id, self.parent_id) if v]
        if len(moves) > 1:
            raise ValueError("Only one of project_id, section_id or parent_id can be set to move a task")
        return self


class UpdateTasksInput(ToolInput):
    """Input model for updating tasks."""

    tasks: list[TaskUpdateSpec] = Field(
        ..., description="Task updates", min_length=1, max_length=ApiLimits.BATCH_MAX
    )


class CompleteTasksInput(ToolInput):
    """Input model for completing tasks."""

    ids: list[str] = Field(..., description="Task IDs to complete", min_length=1, max_length=ApiLimits.ASSIGNMENTS_MAX)

    @field_validator("ids")
    @classmethod
    def validate_ids(cls, v: list[str]) -> list[str]:
        cleaned = [tid.strip() for tid in v if tid.strip()]
        if not cleaned:
            raise ValueError("At least one valid task ID is required")
        return cleaned


class FindTasksInput(ToolInput, LabelsFilterMixin):
    """Input model for finding tasks by text, container, labels or assignee."""

    search_text: str | None = Field(default=None, description="Text to search for in task content")
    project_id: str | None = Field(default=None, description="Find tasks in this project")
    section_id: str | None = Field(default=None, description="Find tasks in this section")
    parent_id: str | None = Field(default=None, description="Find subtasks of this parent task")
    responsible_user: str | None = Field(default=None, description="Find tasks assigned to this user (ID, name, email)")
    responsible_user_filtering: ResponsibleUserFiltering | None = Field(
        default=None,
        description="When no responsible_user is given: 'assigned', 'unassignedOrMe' (default) or 'all'",
    )
    limit: int = Field(
        default=ApiLimits.TASKS_DEFAULT, description="Maximum number of tasks to return", ge=1, le=ApiLimits.TASKS_MAX
    )
    cursor: str | None = Field(default=None, description="Cursor from a previous call with the same parameters")


class FindTasksByDateInput(ToolInput, LabelsFilterMixin):
    """Input model for finding tasks in a due-date range."""

    start_date: str | None = Field(
        default=None,
        description="Start date: 'today' or YYYY-MM-DD",
        pattern=r"^(\d{4}-\d{2}-\d{2}|today)$",
    )
    overdue_option: OverdueOption | None = Field(
        default=None,
        description="'overdue-only', 'include-overdue' (default) or 'exclude-overdue'",
    )
    days_count: int = Field(default=1, description="Number of days from the start date", ge=1, le=30)
    limit: int = Field(
        default=ApiLimits.TASKS_DEFAULT, description="Maximum number of tasks to return", ge=1, le=ApiLimits.TASKS_MAX
    )
    cursor: str | None = Field(default=None, description="Cursor from a previous call with the same parameters")
    responsible_user: str | None = Field(default=None, description="Find tasks assigned to this user (ID, name, email)")
    responsible_user_filtering: ResponsibleUserFiltering | None = Field(
        default=None,
        description="When no responsible_user is given: 'assigned', 'unassignedOrMe' (default) or 'all'",
    )


class FindCompletedTasksInput(ToolInput, LabelsFilterMixin):
    """Input model for finding completed tasks."""

    get_by: CompletedGetBy = Field(
        default=CompletedGetBy.COMPLETION,
        description="'completion' to search by completion date, 'due' to search by due date",
    )
    since: str = Field(..., description="Start date (YYYY-MM-DD)", pattern=r"^\d{4}-\d{2}-\d{2}$")
    until: str = Field(..., description="End date, inclusive (YYYY-MM-DD)", pattern=r"^\d{4}-\d{2}-\d{2}$")
    workspace_id: str | None = Field(default=None, description="Workspace to search in")
    project_id: str | None = Field(default=None, description="Project to search in")
    section_id: str | None = Field(default=None, description="Section to search in")
    parent_id: str | None = Field(default=None, description="Parent task to search under")
    responsible_user: str | None = Field(default=None, description="Only tasks assigned to this user (ID, name, email)")
    limit: int = Field(
        default=ApiLimits.COMPLETED_TASKS_DEFAULT,
        description="Maximum number of tasks to return",
        ge=1,
        le=ApiLimits.COMPLETED_TASKS_MAX,
    )
    cursor: str | None = Field(default=None, description="Cursor from a previous call with the same parameters")


# ============================================================================
# Project, Section and Comment Input Models
# ============================================================================


class ProjectSpec(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., description="Project name", min_length=1, max_length=120)
    parent_id: str | None = Field(default=None, description="Parent project ID, for a sub-project")
    is_favorite: bool | None = Field(default=None, description="Mark as favorite")
    view_style: ViewStyle | None = Field(default=None, description="View style: list, board or calendar")


class AddProjectsInput(ToolInput):
    projects: list[ProjectSpec] = Field(..., min_length=1, max_length=ApiLimits.BATCH_MAX)


class ProjectUpdateSpec(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(..., description="Project ID to update", min_length=1)
    name: str | None = Field(default=None, description="New project name", min_length=1)
    is_favorite: bool | None = Field(default=None, description="New favorite status")
    view_style: ViewStyle | None = Field(default=None, description="New view style")


class UpdateProjectsInput(ToolInput):
    projects: list[ProjectUpdateSpec] = Field(..., min_length=1, max_length=ApiLimits.BATCH_MAX)


class FindProjectsInput(ToolInput):
    search: str | None = Field(default=None, description="Case-insensitive partial match on the project name")
    limit: int = Field(
        default=ApiLimits.PROJECTS_DEFAULT, description="Maximum results", ge=1, le=ApiLimits.PROJECTS_MAX
    )
    cursor: str | None = Field(default=None, description="Pagination cursor")


class SectionSpec(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., description="Section name", min_length=1)
    project_id: str = Field(..., description="Project the section belongs to", min_length=1)


class AddSectionsInput(ToolInput):
    sections: list[SectionSpec] = Field(..., min_length=1, max_length=ApiLimits.BATCH_MAX)


class SectionUpdateSpec(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(..., description="Section ID to update", min_length=1)
    name: str = Field(..., description="New section name", min_length=1)


class UpdateSectionsInput(ToolInput):
    sections: list[SectionUpdateSpec] = Field(..., min_length=1, max_length=ApiLimits.BATCH_MAX)


class FindSectionsInput(ToolInput):
    project_id: str = Field(..., description="Project to list sections for", min_length=1)
    search: str | None = Field(default=None, description="Case-insensitive partial match on the section name")


class CommentSpec(BaseModel):
    """One comment; attach it to exactly one of a task or a project."""

    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(..., description="Comment content (supports Markdown)", min_length=1)
    task_id: str | None = Field(default=None, description="Task to comment on")
    project_id: str | None = Field(default=None, description="Project to comment on")

    @model_validator(mode="after")
    def exactly_one_target(self) -> "CommentSpec":
        if bool(self.task_id) == bool(self.project_id):
            raise ValueError("Specify exactly one of task_id or project_id")
        return self


class AddCommentsInput(ToolInput):
    comments: list[CommentSpec] = Field(..., min_length=1, max_length=ApiLimits.BATCH_MAX)


class CommentUpdateSpec(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(..., description="Comment ID to update", min_length=1)
    content: str = Field(..., description="New comment content", min_length=1)


class UpdateCommentsInput(ToolInput):
    comments: list[CommentUpdateSpec] = Field(..., min_length=1, max_length=ApiLimits.BATCH_MAX)


class FindCommentsInput(ToolInput):
    task_id: str | None = Field(default=None, description="Find comments on this task")
    project_id: str | None = Field(default=None, description="Find comments on this project")
    comment_id: str | None = Field(default=None, description="Get one comment by ID")
    limit: int = Field(
        default=ApiLimits.COMMENTS_DEFAULT, description="Maximum results", ge=1, le=ApiLimits.COMMENTS_MAX
    )
    cursor: str | None = Field(default=None, description="Pagination cursor")


# ============================================================================
# Collaboration, Activity and General Input Models
# ============================================================================


class FindProjectCollaboratorsInput(ToolInput):
    project_id: str = Field(..., description="Shared project to list collaborators for", min_length=1)
    search_term: str | None = Field(default=None, description="Case-insensitive match on name or email")


class ManageAssignmentsInput(ToolInput):
    operation: AssignmentOperation = Field(..., description="assign, unassign or reassign")
    task_ids: list[str] = Field(..., description="Task IDs", min_length=1, max_length=ApiLimits.ASSIGNMENTS_MAX)
    responsible_user: str | None = Field(
        default=None, description="User to assign to (ID, name, email); required for assign and reassign"
    )
    from_assignee_user: str | None = Field(
        default=None, description="For reassign: only change tasks currently assigned to this user"
    )
    dry_run: bool = Field(default=False, description="Validate and report without making changes")


class FindActivityInput(ToolInput):
    object_type: ActivityObjectType | None = Field(default=None, description="task, project or comment")
    object_id: str | None = Field(default=None, description="Specific object ID")
    event_type: ActivityEventType | None = Field(default=None, description="Event type, e.g. 'completed'")
    project_id: str | None = Field(default=None, description="Only events inside this project")
    task_id: str | None = Field(default=None, description="Only events on this task and its comments")
    initiator_id: str | None = Field(default=None, description="Only events caused by this user")
    limit: int = Field(
        default=ApiLimits.ACTIVITY_DEFAULT, description="Maximum results", ge=1, le=ApiLimits.ACTIVITY_MAX
    )
    cursor: str | None = Field(default=None, description="Pagination cursor")


class SearchInput(ToolInput):
    query: str = Field(..., description="Text to search for in tasks and projects", min_length=1)


class FetchInput(ToolInput):
    id: str = Field(..., description="'task:{id}' or 'project:{id}'", pattern=r"^(task|project):\S+$")


class DeleteObjectInput(ToolInput):
    type: ObjectType = Field(..., description="task, project, section or comment")
    id: str = Field(..., description="ID of the object to delete", min_length=1)


class GetOverviewInput(ToolInput):
    project_id: str | None = Field(default=None, description="Project to describe; omit for the whole account")


class UserInfoInput(ToolInput):
    """No parameters besides the response format."""
