"""Utility functions for Todoist MCP."""

from todoist_mcp.utils.filters import (
    append_group_to_query,
    append_to_query,
    build_date_filter,
    build_labels_filter,
    build_responsible_user_filter,
    build_search_filter,
)
from todoist_mcp.utils.formatters import summarize_batch, summarize_list
from todoist_mcp.utils.pagination import collect_all, collect_pages
from todoist_mcp.utils.parsers import map_task, parse_batch, parse_duration, priority_to_api
from todoist_mcp.utils.users import match_user, resolve_responsible_user

__all__ = [
    "append_to_query",
    "append_group_to_query",
    "build_date_filter",
    "build_labels_filter",
    "build_responsible_user_filter",
    "build_search_filter",
    "summarize_list",
    "summarize_batch",
    "collect_pages",
    "collect_all",
    "map_task",
    "parse_batch",
    "parse_duration",
    "priority_to_api",
    "match_user",
    "resolve_responsible_user",
]
