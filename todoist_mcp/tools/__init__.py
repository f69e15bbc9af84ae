"""Todoist MCP tool objects."""

from todoist_mcp.tools.activity import find_activity_tool
from todoist_mcp.tools.base import TodoistTool
from todoist_mcp.tools.collaboration import find_project_collaborators_tool, manage_assignments_tool
from todoist_mcp.tools.comments import add_comments_tool, find_comments_tool, update_comments_tool
from todoist_mcp.tools.general import delete_object_tool, get_overview_tool, user_info_tool
from todoist_mcp.tools.projects import add_projects_tool, find_projects_tool, update_projects_tool
from todoist_mcp.tools.search import fetch_tool, search_tool
from todoist_mcp.tools.sections import add_sections_tool, find_sections_tool, update_sections_tool
from todoist_mcp.tools.tasks import (
    add_tasks_tool,
    complete_tasks_tool,
    find_completed_tasks_tool,
    find_tasks_by_date_tool,
    find_tasks_tool,
    update_tasks_tool,
)

ALL_TOOLS: list[TodoistTool] = [
    add_tasks_tool,
    update_tasks_tool,
    complete_tasks_tool,
    find_tasks_tool,
    find_tasks_by_date_tool,
    find_completed_tasks_tool,
    add_projects_tool,
    update_projects_tool,
    find_projects_tool,
    add_sections_tool,
    update_sections_tool,
    find_sections_tool,
    add_comments_tool,
    update_comments_tool,
    find_comments_tool,
    find_project_collaborators_tool,
    manage_assignments_tool,
    find_activity_tool,
    search_tool,
    fetch_tool,
    delete_object_tool,
    get_overview_tool,
    user_info_tool,
]

TOOLS_BY_NAME: dict[str, TodoistTool] = {tool.name.value: tool for tool in ALL_TOOLS}

__all__ = [
    "ALL_TOOLS",
    "TOOLS_BY_NAME",
    "TodoistTool",
    "add_comments_tool",
    "add_projects_tool",
    "add_sections_tool",
    "add_tasks_tool",
    "complete_tasks_tool",
    "delete_object_tool",
    "fetch_tool",
    "find_activity_tool",
    "find_comments_tool",
    "find_completed_tasks_tool",
    "find_project_collaborators_tool",
    "find_projects_tool",
    "find_sections_tool",
    "find_tasks_by_date_tool",
    "find_tasks_tool",
    "get_overview_tool",
    "manage_assignments_tool",
    "search_tool",
    "update_comments_tool",
    "update_projects_tool",
    "update_sections_tool",
    "update_tasks_tool",
    "user_info_tool",
]
