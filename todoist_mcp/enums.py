"""Enums for Todoist MCP."""

from enum import Enum


class ResponseFormat(str, Enum):
    """Output format for tool responses."""

    MARKDOWN = "markdown"  # Human-readable (default)
    JSON = "json"  # Machine-readable structured content


class ToolName(str, Enum):
    """Registered tool names, referenced by next-step hints."""

    ADD_TASKS = "add_tasks"
    UPDATE_TASKS = "update_tasks"
    COMPLETE_TASKS = "complete_tasks"
    FIND_TASKS = "find_tasks"
    FIND_TASKS_BY_DATE = "find_tasks_by_date"
    FIND_COMPLETED_TASKS = "find_completed_tasks"
    ADD_PROJECTS = "add_projects"
    UPDATE_PROJECTS = "update_projects"
    FIND_PROJECTS = "find_projects"
    ADD_SECTIONS = "add_sections"
    UPDATE_SECTIONS = "update_sections"
    FIND_SECTIONS = "find_sections"
    ADD_COMMENTS = "add_comments"
    UPDATE_COMMENTS = "update_comments"
    FIND_COMMENTS = "find_comments"
    FIND_PROJECT_COLLABORATORS = "find_project_collaborators"
    MANAGE_ASSIGNMENTS = "manage_assignments"
    FIND_ACTIVITY = "find_activity"
    SEARCH = "search"
    FETCH = "fetch"
    DELETE_OBJECT = "delete_object"
    GET_OVERVIEW = "get_overview"
    USER_INFO = "user_info"


class OverdueOption(str, Enum):
    """How overdue tasks are treated by date queries."""

    OVERDUE_ONLY = "overdue-only"
    INCLUDE_OVERDUE = "include-overdue"
    EXCLUDE_OVERDUE = "exclude-overdue"


class LabelsOperator(str, Enum):
    """How multiple labels combine in a filter."""

    AND = "and"
    OR = "or"


class ResponsibleUserFiltering(str, Enum):
    """Assignment filtering used when no explicit responsible user is given."""

    ASSIGNED = "assigned"  # Only tasks assigned to others
    UNASSIGNED_OR_ME = "unassignedOrMe"  # Unassigned, or assigned to me (default)
    ALL = "all"


class CompletedGetBy(str, Enum):
    """Which date completed tasks are looked up by."""

    COMPLETION = "completion"
    DUE = "due"


class Priority(str, Enum):
    """Task priority as shown in the Todoist apps (p1 is the most urgent)."""

    P1 = "p1"
    P2 = "p2"
    P3 = "p3"
    P4 = "p4"


class ViewStyle(str, Enum):
    """Project view styles."""

    LIST = "list"
    BOARD = "board"
    CALENDAR = "calendar"


class ObjectType(str, Enum):
    """Object kinds that can be deleted or fetched."""

    TASK = "task"
    PROJECT = "project"
    SECTION = "section"
    COMMENT = "comment"


class ActivityObjectType(str, Enum):
    """Object kinds recorded in the activity log."""

    TASK = "task"
    PROJECT = "project"
    COMMENT = "comment"


class ActivityEventType(str, Enum):
    """Activity log event types."""

    ADDED = "added"
    UPDATED = "updated"
    DELETED = "deleted"
    COMPLETED = "completed"
    UNCOMPLETED = "uncompleted"
    ARCHIVED = "archived"
    UNARCHIVED = "unarchived"
    SHARED = "shared"
    LEFT = "left"


class AssignmentOperation(str, Enum):
    """Bulk assignment operations."""

    ASSIGN = "assign"
    UNASSIGN = "unassign"
    REASSIGN = "reassign"
