"""
MCP server and CLI for Todoist.

This package wraps the Todoist API as a set of tool objects that can be
called from the `todoist` command line, registered with an MCP server, or
used directly from Python:

    async with TodoistClient(token) as client:
        output = await find_tasks_by_date_tool.run(client, {"start_date": "today"})
        print(output.text)
"""

__version__ = "0.1.0"

# Re-export enums
from todoist_mcp.enums import (
    LabelsOperator,
    OverdueOption,
    Priority,
    ResponseFormat,
    ResponsibleUserFiltering,
    ToolName,
)

# Re-export errors
from todoist_mcp.errors import (
    AmbiguousUserError,
    InvalidArgumentError,
    MalformedBatchInputError,
    RemoteApiError,
    TodoistError,
    UserNotFoundError,
)

# Re-export the API client and configuration
from todoist_mcp.client import TodoistClient
from todoist_mcp.config import Settings, configure_logging, load_settings

# Re-export result models
from todoist_mcp.models import FieldChange, PageResult, ResolvedUser, ToolOutput

# Re-export MCP server factory
from todoist_mcp.server import create_server

# Re-export tools
from todoist_mcp.tools import (
    ALL_TOOLS,
    TOOLS_BY_NAME,
    TodoistTool,
    add_comments_tool,
    add_projects_tool,
    add_sections_tool,
    add_tasks_tool,
    complete_tasks_tool,
    delete_object_tool,
    fetch_tool,
    find_activity_tool,
    find_comments_tool,
    find_completed_tasks_tool,
    find_project_collaborators_tool,
    find_projects_tool,
    find_sections_tool,
    find_tasks_by_date_tool,
    find_tasks_tool,
    get_overview_tool,
    manage_assignments_tool,
    search_tool,
    update_comments_tool,
    update_projects_tool,
    update_sections_tool,
    update_tasks_tool,
    user_info_tool,
)

__all__ = [
    "__version__",
    # Enums
    "LabelsOperator",
    "OverdueOption",
    "Priority",
    "ResponseFormat",
    "ResponsibleUserFiltering",
    "ToolName",
    # Errors
    "TodoistError",
    "InvalidArgumentError",
    "UserNotFoundError",
    "AmbiguousUserError",
    "RemoteApiError",
    "MalformedBatchInputError",
    # Client and configuration
    "TodoistClient",
    "Settings",
    "configure_logging",
    "load_settings",
    # Result models
    "FieldChange",
    "PageResult",
    "ResolvedUser",
    "ToolOutput",
    # MCP server
    "create_server",
    # Tools
    "ALL_TOOLS",
    "TOOLS_BY_NAME",
    "TodoistTool",
    "add_tasks_tool",
    "update_tasks_tool",
    "complete_tasks_tool",
    "find_tasks_tool",
    "find_tasks_by_date_tool",
    "find_completed_tasks_tool",
    "add_projects_tool",
    "update_projects_tool",
    "find_projects_tool",
    "add_sections_tool",
    "update_sections_tool",
    "find_sections_tool",
    "add_comments_tool",
    "update_comments_tool",
    "find_comments_tool",
    "find_project_collaborators_tool",
    "manage_assignments_tool",
    "find_activity_tool",
    "search_tool",
    "fetch_tool",
    "delete_object_tool",
    "get_overview_tool",
    "user_info_tool",
]
