"""Typer CLI for Todoist MCP."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Annotated, Any, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from todoist_mcp import __version__
from todoist_mcp.client import TodoistClient
from todoist_mcp.config import configure_logging, load_settings
from todoist_mcp.errors import InvalidArgumentError, TodoistError
from todoist_mcp.models.inputs import (
    CommentSpec,
    CommentUpdateSpec,
    ProjectSpec,
    ProjectUpdateSpec,
    SectionSpec,
    SectionUpdateSpec,
    TaskSpec,
    TaskUpdateSpec,
)
from todoist_mcp.models.output import ToolOutput
from todoist_mcp.tools import (
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
from todoist_mcp.utils.parsers import parse_batch

err_console = Console(stderr=True)


def _help_epilog(*sections: tuple[str, list[str]]) -> str:
    """Render help sections as click paragraphs that are never rewrapped."""
    blocks = []
    for title, lines in sections:
        body = "\n".join(f"  {line}" for line in lines)
        blocks.append(f"\b\n{title}:\n{body}")
    return "\n\n".join(blocks)


app = typer.Typer(
    name="todoist",
    help="Todoist CLI - Manage your Todoist tasks, projects, and more.",
    no_args_is_help=True,
    rich_markup_mode=None,
    epilog=_help_epilog(
        (
            "Examples",
            [
                "$ todoist tasks find-by-date --start today",
                '$ todoist tasks add --content "Review PR #123" --due tomorrow',
                "$ todoist --json projects find",
                "$ todoist tasks --help",
            ],
        )
    ),
)


@dataclass
class CliState:
    """Per-invocation options shared with every command through ctx.obj."""

    json_output: bool = False
    token: Optional[str] = None
    client: Optional[TodoistClient] = None


def _split(value: Optional[str]) -> Optional[list[str]]:
    """Split a comma-separated option value."""
    if value is None:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def _compact(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


@contextmanager
def cli_errors() -> Iterator[None]:
    """Print operation errors in red and exit with status 1."""
    try:
        yield
    except (TodoistError, ValidationError) as e:
        err_console.print(f"Error: {e}", style="red", markup=False, highlight=False)
        raise typer.Exit(1) from e


async def _execute(state: CliState, tool: TodoistTool, payload: dict[str, Any]) -> ToolOutput:
    if state.client is not None:
        return await tool.run(state.client, payload)

    settings = load_settings(state.token)
    configure_logging(settings.log_level)
    async with TodoistClient(settings.api_token, base_url=settings.base_url) as client:
        return await tool.run(client, payload)


def _run(ctx: typer.Context, tool: TodoistTool, payload: dict[str, Any]) -> None:
    """Execute a tool and print its text, or its structured content with --json."""
    state: CliState = ctx.obj
    output = asyncio.run(_execute(state, tool, _compact(payload)))
    if state.json_output:
        typer.echo(json.dumps(output.structured, indent=2))
    else:
        typer.echo(output.text)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"todoist {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    json_output: Annotated[bool, typer.Option("--json", help="Output in JSON format")] = False,
    token: Annotated[
        Optional[str], typer.Option("--token", help="Todoist API token (or use the TODOIST_API_KEY env var)")
    ] = None,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit"),
    ] = None,
) -> None:
    """Todoist CLI - Manage your Todoist tasks, projects, and more."""
    state = ctx.ensure_object(CliState)
    state.json_output = json_output
    state.token = token or state.token


# ---------------------------------------------------------------------------
# tasks
# ---------------------------------------------------------------------------

tasks_app = typer.Typer(
    help="Manage Todoist tasks.",
    no_args_is_help=True,
    rich_markup_mode=None,
    epilog=_help_epilog(
        (
            "Available Commands",
            [
                "add              Add one or more tasks",
                "update           Update existing tasks",
                "complete         Mark tasks as completed",
                "find             Find tasks by search criteria",
                "find-by-date     Find tasks by due date range",
                "find-completed   Find completed tasks",
            ],
        ),
        (
            "Examples",
            [
                '$ todoist tasks add --content "Review PR #123"',
                '$ todoist tasks find --search "urgent" --labels "work"',
                "$ todoist tasks find-by-date --start today --days 7",
            ],
        ),
    ),
)
app.add_typer(tasks_app, name="tasks")


@tasks_app.command(
    "add",
    epilog=_help_epilog(
        (
            "Examples",
            [
                "# Add a simple task",
                '$ todoist tasks add --content "Buy milk"',
                "# Add a task with due date, priority and labels",
                '$ todoist tasks add --content "Ship release" --due "next Monday" --priority p1 --labels work,release',
                "# Add a subtask",
                '$ todoist tasks add --content "Write notes" --parent-id 12345',
                "# Add several tasks at once",
                '$ todoist tasks add --batch \'[{"content":"Task 1"},{"content":"Task 2","due_string":"tomorrow"}]\'',
            ],
        )
    ),
)
def tasks_add(
    ctx: typer.Context,
    content: Annotated[Optional[str], typer.Option(help="Task name/title (required, supports Markdown)")] = None,
    description: Annotated[Optional[str], typer.Option(help="Additional details (supports Markdown)")] = None,
    due: Annotated[Optional[str], typer.Option(help='Due date in natural language (e.g. "tomorrow")')] = None,
    deadline: Annotated[Optional[str], typer.Option(help="Deadline date (YYYY-MM-DD)")] = None,
    duration: Annotated[Optional[str], typer.Option(help='Task duration (e.g. "2h", "90m", "2h30m")')] = None,
    project_id: Annotated[Optional[str], typer.Option(help="Project ID to add the task to")] = None,
    section_id: Annotated[Optional[str], typer.Option(help="Section ID to add the task to")] = None,
    parent_id: Annotated[Optional[str], typer.Option(help="Parent task ID (for subtasks)")] = None,
    priority: Annotated[Optional[str], typer.Option(help="Priority: p1 (highest), p2, p3, p4 (default)")] = None,
    labels: Annotated[Optional[str], typer.Option(help="Labels to attach (comma-separated)")] = None,
    assign: Annotated[Optional[str], typer.Option(help="Assign to user (ID, name, or email)")] = None,
    batch: Annotated[Optional[str], typer.Option(help="JSON array of tasks to create")] = None,
) -> None:
    """Add one or more tasks to Todoist."""
    with cli_errors():
        if batch:
            tasks = parse_batch(batch, TaskSpec)
        elif content:
            spec = {
                "content": content,
                "description": description,
                "due_string": due,
                "deadline_date": deadline,
                "duration": duration,
                "project_id": project_id,
                "section_id": section_id,
                "parent_id": parent_id,
                "priority": priority,
                "labels": _split(labels),
                "responsible_user": assign,
            }
            tasks = [_compact(spec)]
        else:
            raise InvalidArgumentError("--content is required when not using --batch")
        _run(ctx, add_tasks_tool, {"tasks": tasks})


@tasks_app.command(
    "update",
    epilog=_help_epilog(
        (
            "Examples",
            [
                "# Reschedule a task",
                '$ todoist tasks update --id 12345 --due "next Friday"',
                "# Remove the due date and the assignee",
                "$ todoist tasks update --id 12345 --due remove --assign unassign",
                "# Move a task to another project",
                "$ todoist tasks update --id 12345 --project-id 67890",
            ],
        ),
        ("Clearing values", ['--due, --deadline and --duration accept "remove"', '--assign accepts "unassign"']),
    ),
)
def tasks_update(
    ctx: typer.Context,
    id: Annotated[Optional[str], typer.Option("--id", help="Task ID to update (required)")] = None,
    content: Annotated[Optional[str], typer.Option(help="New task name/title")] = None,
    description: Annotated[Optional[str], typer.Option(help="New description")] = None,
    due: Annotated[Optional[str], typer.Option(help='New due date in natural language, or "remove"')] = None,
    deadline: Annotated[Optional[str], typer.Option(help='New deadline (YYYY-MM-DD), or "remove"')] = None,
    duration: Annotated[Optional[str], typer.Option(help='New duration (e.g. "2h"), or "remove"')] = None,
    project_id: Annotated[Optional[str], typer.Option(help="Move to project")] = None,
    section_id: Annotated[Optional[str], typer.Option(help="Move to section")] = None,
    parent_id: Annotated[Optional[str], typer.Option(help="Move under parent task")] = None,
    priority: Annotated[Optional[str], typer.Option(help="New priority (p1-p4)")] = None,
    labels: Annotated[Optional[str], typer.Option(help="New labels (comma-separated)")] = None,
    assign: Annotated[Optional[str], typer.Option(help='Assign to user (or "unassign")')] = None,
    batch: Annotated[Optional[str], typer.Option(help="JSON array of task updates")] = None,
) -> None:
    """Update existing tasks."""
    with cli_errors():
        if batch:
            tasks = parse_batch(batch, TaskUpdateSpec)
        elif id:
            spec = {
                "id": id,
                "content": content,
                "description": description,
                "due_string": due,
                "deadline_date": deadline,
                "duration": duration,
                "project_id": project_id,
                "section_id": section_id,
                "parent_id": parent_id,
                "priority": priority,
                "labels": _split(labels),
                "responsible_user": assign,
            }
            tasks = [_compact(spec)]
        else:
            raise InvalidArgumentError("--id is required when not using --batch")
        _run(ctx, update_tasks_tool, {"tasks": tasks})


@tasks_app.command(
    "complete",
    epilog=_help_epilog(("Examples", ["$ todoist tasks complete --ids 12345", "$ todoist tasks complete --ids 123,456"])),
)
def tasks_complete(
    ctx: typer.Context,
    ids: Annotated[Optional[str], typer.Option(help="Task IDs to complete (comma-separated)")] = None,
) -> None:
    """Mark tasks as completed."""
    with cli_errors():
        if not ids:
            raise InvalidArgumentError("--ids is required")
        _run(ctx, complete_tasks_tool, {"ids": _split(ids)})


@tasks_app.command(
    "find",
    epilog=_help_epilog(
        ("Notes", ["At least one filter must be provided."]),
        (
            "Examples",
            [
                '# Search for tasks containing "urgent"',
                '$ todoist tasks find --search "urgent"',
                "# Find all tasks in a project",
                "$ todoist tasks find --project-id 12345",
                "# Find tasks with both labels",
                '$ todoist tasks find --labels "work,urgent" --labels-operator and',
                "# Find tasks assigned to a user",
                '$ todoist tasks find --assigned-to "john@example.com"',
            ],
        ),
    ),
)
def tasks_find(
    ctx: typer.Context,
    search: Annotated[Optional[str], typer.Option(help="Search text to find in tasks")] = None,
    project_id: Annotated[Optional[str], typer.Option(help="Find tasks in this project")] = None,
    section_id: Annotated[Optional[str], typer.Option(help="Find tasks in this section")] = None,
    parent_id: Annotated[Optional[str], typer.Option(help="Find subtasks of this parent")] = None,
    assigned_to: Annotated[Optional[str], typer.Option(help="Find tasks assigned to user (ID, name, or email)")] = None,
    assignment_filter: Annotated[
        Optional[str], typer.Option(help="Assignment filter: assigned, unassignedOrMe (default), all")
    ] = None,
    labels: Annotated[Optional[str], typer.Option(help="Filter by labels (comma-separated)")] = None,
    labels_operator: Annotated[Optional[str], typer.Option(help="Labels operator: and, or (default: or)")] = None,
    limit: Annotated[Optional[int], typer.Option(help="Maximum number of tasks to return (default: 10)")] = None,
    cursor: Annotated[Optional[str], typer.Option(help="Cursor for pagination")] = None,
) -> None:
    """Find tasks by search criteria."""
    with cli_errors():
        payload = {
            "search_text": search,
            "project_id": project_id,
            "section_id": section_id,
            "parent_id": parent_id,
            "responsible_user": assigned_to,
            "responsible_user_filtering": assignment_filter,
            "labels": _split(labels),
            "labels_operator": labels_operator,
            "limit": limit,
            "cursor": cursor,
        }
        _run(ctx, find_tasks_tool, payload)


@tasks_app.command(
    "find-by-date",
    epilog=_help_epilog(
        (
            "Examples",
            [
                "# Get today's tasks (includes overdue by default)",
                "$ todoist tasks find-by-date --start today",
                "# Get the next 7 days of tasks",
                "$ todoist tasks find-by-date --start today --days 7",
                "# Get only overdue tasks",
                "$ todoist tasks find-by-date --overdue overdue-only",
                "# Get tasks for a specific date range",
                "$ todoist tasks find-by-date --start 2025-01-15 --days 14",
            ],
        )
    ),
)
def tasks_find_by_date(
    ctx: typer.Context,
    start: Annotated[
        Optional[str], typer.Option(help='Start date: "today" or YYYY-MM-DD (required unless --overdue overdue-only)')
    ] = None,
    overdue: Annotated[
        Optional[str], typer.Option(help="Overdue handling: overdue-only, include-overdue, exclude-overdue")
    ] = None,
    days: Annotated[Optional[int], typer.Option(help="Number of days from start (1-30, default: 1)")] = None,
    assigned_to: Annotated[Optional[str], typer.Option(help="Filter by assigned user")] = None,
    assignment_filter: Annotated[
        Optional[str], typer.Option(help="Assignment filter: assigned, unassignedOrMe (default), all")
    ] = None,
    labels: Annotated[Optional[str], typer.Option(help="Filter by labels (comma-separated)")] = None,
    labels_operator: Annotated[Optional[str], typer.Option(help="Labels operator: and, or (default: or)")] = None,
    limit: Annotated[Optional[int], typer.Option(help="Maximum results (default: 10)")] = None,
    cursor: Annotated[Optional[str], typer.Option(help="Pagination cursor")] = None,
) -> None:
    """Find tasks by due date range."""
    with cli_errors():
        payload = {
            "start_date": start,
            "overdue_option": overdue,
            "days_count": days,
            "responsible_user": assigned_to,
            "responsible_user_filtering": assignment_filter,
            "labels": _split(labels),
            "labels_operator": labels_operator,
            "limit": limit,
            "cursor": cursor,
        }
        _run(ctx, find_tasks_by_date_tool, payload)


@tasks_app.command(
    "find-completed",
    epilog=_help_epilog(
        (
            "Examples",
            [
                "# Get tasks completed in a week",
                "$ todoist tasks find-completed --since 2025-01-20 --until 2025-01-27",
                "# Get completed tasks by original due date",
                "$ todoist tasks find-completed --get-by due --since 2025-01-01 --until 2025-01-31",
                "# Get completed tasks in a project",
                "$ todoist tasks find-completed --project-id 12345 --since 2025-01-01 --until 2025-01-31",
            ],
        )
    ),
)
def tasks_find_completed(
    ctx: typer.Context,
    get_by: Annotated[Optional[str], typer.Option(help="Search by: completion or due (default: completion)")] = None,
    since: Annotated[Optional[str], typer.Option(help="Start date (YYYY-MM-DD, required)")] = None,
    until: Annotated[Optional[str], typer.Option(help="End date, inclusive (YYYY-MM-DD, required)")] = None,
    workspace_id: Annotated[Optional[str], typer.Option(help="Filter by workspace")] = None,
    project_id: Annotated[Optional[str], typer.Option(help="Filter by project")] = None,
    section_id: Annotated[Optional[str], typer.Option(help="Filter by section")] = None,
    parent_id: Annotated[Optional[str], typer.Option(help="Filter by parent task")] = None,
    assigned_to: Annotated[Optional[str], typer.Option(help="Filter by assigned user")] = None,
    labels: Annotated[Optional[str], typer.Option(help="Filter by labels (comma-separated)")] = None,
    labels_operator: Annotated[Optional[str], typer.Option(help="Labels operator: and, or (default: or)")] = None,
    limit: Annotated[Optional[int], typer.Option(help="Maximum results (default: 50)")] = None,
    cursor: Annotated[Optional[str], typer.Option(help="Pagination cursor")] = None,
) -> None:
    """Find completed tasks."""
    with cli_errors():
        if not since:
            raise InvalidArgumentError("--since is required")
        if not until:
            raise InvalidArgumentError("--until is required")
        payload = {
            "get_by": get_by,
            "since": since,
            "until": until,
            "workspace_id": workspace_id,
            "project_id": project_id,
            "section_id": section_id,
            "parent_id": parent_id,
            "responsible_user": assigned_to,
            "labels": _split(labels),
            "labels_operator": labels_operator,
            "limit": limit,
            "cursor": cursor,
        }
        _run(ctx, find_completed_tasks_tool, payload)


# ---------------------------------------------------------------------------
# projects
# ---------------------------------------------------------------------------

projects_app = typer.Typer(
    help="Manage Todoist projects.",
    no_args_is_help=True,
    rich_markup_mode=None,
    epilog=_help_epilog(
        (
            "Available Commands",
            [
                "add         Add one or more projects",
                "update      Update existing projects",
                "find        Find projects by name",
            ],
        ),
        (
            "Examples",
            [
                '$ todoist projects add --name "Work Projects"',
                '$ todoist projects find --search "work"',
                '$ todoist projects update --id 12345 --name "Updated Name"',
            ],
        ),
    ),
)
app.add_typer(projects_app, name="projects")


@projects_app.command(
    "add",
    epilog=_help_epilog(
        (
            "Examples",
            [
                "# Add a simple project",
                '$ todoist projects add --name "My New Project"',
                "# Add a favorite project with board view",
                '$ todoist projects add --name "Kanban Board" --favorite --view board',
                "# Add a sub-project",
                '$ todoist projects add --name "Sub-project" --parent-id 12345',
                "# Batch add projects",
                '$ todoist projects add --batch \'[{"name":"Project 1"},{"name":"Project 2"}]\'',
            ],
        )
    ),
)
def projects_add(
    ctx: typer.Context,
    name: Annotated[Optional[str], typer.Option(help="Project name (required)")] = None,
    parent_id: Annotated[Optional[str], typer.Option(help="Parent project ID (for sub-projects)")] = None,
    favorite: Annotated[bool, typer.Option("--favorite", help="Mark as favorite")] = False,
    view: Annotated[Optional[str], typer.Option(help="View style: list, board, calendar (default: list)")] = None,
    batch: Annotated[Optional[str], typer.Option(help="JSON array of projects to create")] = None,
) -> None:
    """Add one or more projects."""
    with cli_errors():
        if batch:
            projects = parse_batch(batch, ProjectSpec)
        elif name:
            projects = [_compact({"name": name, "parent_id": parent_id, "is_favorite": favorite or None, "view_style": view})]
        else:
            raise InvalidArgumentError("--name is required when not using --batch")
        _run(ctx, add_projects_tool, {"projects": projects})


@projects_app.command(
    "update",
    epilog=_help_epilog(
        (
            "Examples",
            [
                "# Rename a project",
                '$ todoist projects update --id 12345 --name "Renamed Project"',
                "# Mark as favorite",
                "$ todoist projects update --id 12345 --favorite",
                "# Remove from favorites",
                "$ todoist projects update --id 12345 --no-favorite",
                "# Change view style",
                "$ todoist projects update --id 12345 --view board",
            ],
        )
    ),
)
def projects_update(
    ctx: typer.Context,
    id: Annotated[Optional[str], typer.Option("--id", help="Project ID to update (required)")] = None,
    name: Annotated[Optional[str], typer.Option(help="New project name")] = None,
    favorite: Annotated[Optional[bool], typer.Option("--favorite/--no-favorite", help="Set favorite status")] = None,
    view: Annotated[Optional[str], typer.Option(help="New view style: list, board, calendar")] = None,
    batch: Annotated[Optional[str], typer.Option(help="JSON array of project updates")] = None,
) -> None:
    """Update existing projects."""
    with cli_errors():
        if batch:
            projects = parse_batch(batch, ProjectUpdateSpec)
        elif id:
            projects = [_compact({"id": id, "name": name, "is_favorite": favorite, "view_style": view})]
        else:
            raise InvalidArgumentError("--id is required when not using --batch")
        _run(ctx, update_projects_tool, {"projects": projects})


@projects_app.command(
    "find",
    epilog=_help_epilog(
        (
            "Examples",
            [
                "# List all projects",
                "$ todoist projects find",
                "# Search for projects",
                '$ todoist projects find --search "work"',
                "# Limit results",
                "$ todoist projects find --limit 10",
            ],
        )
    ),
)
def projects_find(
    ctx: typer.Context,
    search: Annotated[Optional[str], typer.Option(help="Search text (case-insensitive partial match)")] = None,
    limit: Annotated[Optional[int], typer.Option(help="Maximum results (default: 50)")] = None,
    cursor: Annotated[Optional[str], typer.Option(help="Pagination cursor")] = None,
) -> None:
    """Find projects by name."""
    with cli_errors():
        _run(ctx, find_projects_tool, {"search": search, "limit": limit, "cursor": cursor})


# ---------------------------------------------------------------------------
# sections
# ---------------------------------------------------------------------------

sections_app = typer.Typer(
    help="Manage sections within projects.",
    no_args_is_help=True,
    rich_markup_mode=None,
    epilog=_help_epilog(
        (
            "Available Commands",
            [
                "add         Add one or more sections to a project",
                "update      Update existing sections",
                "find        Find sections in a project",
            ],
        ),
        (
            "Examples",
            [
                '$ todoist sections add --name "In Progress" --project-id 12345',
                "$ todoist sections find --project-id 12345",
                '$ todoist sections update --id 67890 --name "Done"',
            ],
        ),
    ),
)
app.add_typer(sections_app, name="sections")


@sections_app.command(
    "add",
    epilog=_help_epilog(
        (
            "Examples",
            [
                '$ todoist sections add --name "To Do" --project-id 12345',
                '$ todoist sections add --batch \'[{"name":"To Do","project_id":"12345"},{"name":"Done","project_id":"12345"}]\'',
            ],
        )
    ),
)
def sections_add(
    ctx: typer.Context,
    name: Annotated[Optional[str], typer.Option(help="Section name (required)")] = None,
    project_id: Annotated[Optional[str], typer.Option(help="Project ID (required)")] = None,
    batch: Annotated[Optional[str], typer.Option(help="JSON array of sections to create")] = None,
) -> None:
    """Add one or more sections to a project."""
    with cli_errors():
        if batch:
            sections = parse_batch(batch, SectionSpec)
        elif name and project_id:
            sections = [{"name": name, "project_id": project_id}]
        else:
            raise InvalidArgumentError("--name and --project-id are required when not using --batch")
        _run(ctx, add_sections_tool, {"sections": sections})


@sections_app.command(
    "update",
    epilog=_help_epilog(("Examples", ['$ todoist sections update --id 67890 --name "Review"'])),
)
def sections_update(
    ctx: typer.Context,
    id: Annotated[Optional[str], typer.Option("--id", help="Section ID to update (required)")] = None,
    name: Annotated[Optional[str], typer.Option(help="New section name (required)")] = None,
    batch: Annotated[Optional[str], typer.Option(help="JSON array of section updates")] = None,
) -> None:
    """Update existing sections."""
    with cli_errors():
        if batch:
            sections = parse_batch(batch, SectionUpdateSpec)
        elif id and name:
            sections = [{"id": id, "name": name}]
        else:
            raise InvalidArgumentError("--id and --name are required when not using --batch")
        _run(ctx, update_sections_tool, {"sections": sections})


@sections_app.command(
    "find",
    epilog=_help_epilog(
        (
            "Examples",
            [
                "$ todoist sections find --project-id 12345",
                '$ todoist sections find --project-id 12345 --search "progress"',
            ],
        )
    ),
)
def sections_find(
    ctx: typer.Context,
    project_id: Annotated[Optional[str], typer.Option(help="Project ID (required)")] = None,
    search: Annotated[Optional[str], typer.Option(help="Search text (case-insensitive partial match)")] = None,
) -> None:
    """Find sections in a project."""
    with cli_errors():
        if not project_id:
            raise InvalidArgumentError("--project-id is required")
        _run(ctx, find_sections_tool, {"project_id": project_id, "search": search})


# ---------------------------------------------------------------------------
# comments
# ---------------------------------------------------------------------------

comments_app = typer.Typer(
    help="Manage comments on tasks and projects.",
    no_args_is_help=True,
    rich_markup_mode=None,
    epilog=_help_epilog(
        (
            "Available Commands",
            [
                "add         Add comments to tasks or projects",
                "update      Update existing comments",
                "find        Find comments",
            ],
        ),
        (
            "Examples",
            [
                '$ todoist comments add --task-id 12345 --content "Looks good"',
                "$ todoist comments find --task-id 12345",
                '$ todoist comments update --id 67890 --content "Edited"',
            ],
        ),
    ),
)
app.add_typer(comments_app, name="comments")


@comments_app.command(
    "add",
    epilog=_help_epilog(
        (
            "Examples",
            [
                "# Comment on a task",
                '$ todoist comments add --task-id 12345 --content "Waiting on review"',
                "# Comment on a project",
                '$ todoist comments add --project-id 67890 --content "Kickoff notes"',
            ],
        )
    ),
)
def comments_add(
    ctx: typer.Context,
    task_id: Annotated[Optional[str], typer.Option(help="Task ID to comment on")] = None,
    project_id: Annotated[Optional[str], typer.Option(help="Project ID to comment on")] = None,
    content: Annotated[Optional[str], typer.Option(help="Comment content (required)")] = None,
    batch: Annotated[Optional[str], typer.Option(help="JSON array of comments to create")] = None,
) -> None:
    """Add comments to tasks or projects."""
    with cli_errors():
        if batch:
            comments = parse_batch(batch, CommentSpec)
        elif content:
            comments = [_compact({"content": content, "task_id": task_id, "project_id": project_id})]
        else:
            raise InvalidArgumentError("--content is required when not using --batch")
        _run(ctx, add_comments_tool, {"comments": comments})


@comments_app.command(
    "update",
    epilog=_help_epilog(("Examples", ['$ todoist comments update --id 67890 --content "Updated note"'])),
)
def comments_update(
    ctx: typer.Context,
    id: Annotated[Optional[str], typer.Option("--id", help="Comment ID to update (required)")] = None,
    content: Annotated[Optional[str], typer.Option(help="New comment content (required)")] = None,
    batch: Annotated[Optional[str], typer.Option(help="JSON array of comment updates")] = None,
) -> None:
    """Update existing comments."""
    with cli_errors():
        if batch:
            comments = parse_batch(batch, CommentUpdateSpec)
        elif id and content:
            comments = [{"id": id, "content": content}]
        else:
            raise InvalidArgumentError("--id and --content are required when not using --batch")
        _run(ctx, update_comments_tool, {"comments": comments})


@comments_app.command(
    "find",
    epilog=_help_epilog(
        (
            "Examples",
            [
                "$ todoist comments find --task-id 12345",
                "$ todoist comments find --project-id 67890",
                "$ todoist comments find --comment-id 11111",
            ],
        )
    ),
)
def comments_find(
    ctx: typer.Context,
    task_id: Annotated[Optional[str], typer.Option(help="Find comments on this task")] = None,
    project_id: Annotated[Optional[str], typer.Option(help="Find comments on this project")] = None,
    comment_id: Annotated[Optional[str], typer.Option(help="Get a specific comment by ID")] = None,
    limit: Annotated[Optional[int], typer.Option(help="Maximum results (default: 10)")] = None,
    cursor: Annotated[Optional[str], typer.Option(help="Pagination cursor")] = None,
) -> None:
    """Find comments."""
    with cli_errors():
        payload = {
            "task_id": task_id,
            "project_id": project_id,
            "comment_id": comment_id,
            "limit": limit,
            "cursor": cursor,
        }
        _run(ctx, find_comments_tool, payload)


# ---------------------------------------------------------------------------
# search
# ---------------------------------------------------------------------------

search_app = typer.Typer(
    help="Search across tasks and projects.",
    no_args_is_help=True,
    rich_markup_mode=None,
    epilog=_help_epilog(
        (
            "Available Commands",
            ["query       Search across tasks and projects", "fetch       Fetch full contents by ID"],
        ),
        ("Examples", ['$ todoist search query "meeting notes"', '$ todoist search fetch "task:12345"']),
    ),
)
app.add_typer(search_app, name="search")


@search_app.command(
    "query",
    epilog=_help_epilog(
        ("Notes", ["Returns results with IDs of the form task:{id} or project:{id}."]),
        ("Examples", ['$ todoist search query "meeting"', '$ todoist search query "urgent bug fix"']),
    ),
)
def search_query(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Search query")],
) -> None:
    """Search across tasks and projects."""
    with cli_errors():
        _run(ctx, search_tool, {"query": query})


@search_app.command(
    "fetch",
    epilog=_help_epilog(("Examples", ['$ todoist search fetch "task:12345"', '$ todoist search fetch "project:67890"'])),
)
def search_fetch(
    ctx: typer.Context,
    id: Annotated[str, typer.Argument(help='ID in the form "task:{id}" or "project:{id}"')],
) -> None:
    """Fetch the full contents of a task or project."""
    with cli_errors():
        _run(ctx, fetch_tool, {"id": id})


# ---------------------------------------------------------------------------
# collaborators / assignments / activity
# ---------------------------------------------------------------------------

collaborators_app = typer.Typer(
    help="Find project collaborators.",
    no_args_is_help=True,
    rich_markup_mode=None,
    epilog=_help_epilog(
        ("Available Commands", ["find        Find collaborators in a shared project"]),
        ("Examples", ['$ todoist collaborators find --project-id 12345 --search "john"']),
    ),
)
app.add_typer(collaborators_app, name="collaborators")


@collaborators_app.command(
    "find",
    epilog=_help_epilog(
        (
            "Examples",
            [
                "$ todoist collaborators find --project-id 12345",
                '$ todoist collaborators find --project-id 12345 --search "example.com"',
            ],
        )
    ),
)
def collaborators_find(
    ctx: typer.Context,
    project_id: Annotated[Optional[str], typer.Option(help="Project ID (required)")] = None,
    search: Annotated[Optional[str], typer.Option(help="Search by name or email (case-insensitive)")] = None,
) -> None:
    """Find collaborators in a project."""
    with cli_errors():
        if not project_id:
            raise InvalidArgumentError("--project-id is required")
        _run(ctx, find_project_collaborators_tool, {"project_id": project_id, "search_term": search})


assignments_app = typer.Typer(
    help="Bulk assign, unassign or reassign tasks.",
    no_args_is_help=True,
    rich_markup_mode=None,
    epilog=_help_epilog(
        ("Available Commands", ["manage      Bulk assignment operations (assign/unassign/reassign)"]),
        ("Examples", ["$ todoist assignments manage --operation assign --task-ids 123,456 --user john@example.com"]),
    ),
)
app.add_typer(assignments_app, name="assignments")


@assignments_app.command(
    "manage",
    epilog=_help_epilog(
        (
            "Operations",
            [
                "assign      Assign tasks to a user",
                "unassign    Remove assignment from tasks",
                "reassign    Change assignment from one user to another",
            ],
        ),
        (
            "Examples",
            [
                "# Assign multiple tasks to a user",
                "$ todoist assignments manage --operation assign --task-ids 123,456,789 --user john@example.com",
                "# Unassign tasks",
                "$ todoist assignments manage --operation unassign --task-ids 123,456",
                "# Reassign tasks from one user to another",
                "$ todoist assignments manage --operation reassign --task-ids 123,456 --user jane@example.com "
                "--from-user john@example.com",
                "# Dry run to validate",
                "$ todoist assignments manage --operation assign --task-ids 123 --user john@example.com --dry-run",
            ],
        ),
    ),
)
def assignments_manage(
    ctx: typer.Context,
    operation: Annotated[Optional[str], typer.Option(help="Operation: assign, unassign, reassign (required)")] = None,
    task_ids: Annotated[Optional[str], typer.Option(help="Task IDs (comma-separated, max 50, required)")] = None,
    user: Annotated[Optional[str], typer.Option(help="User to assign to (ID, name, or email)")] = None,
    from_user: Annotated[Optional[str], typer.Option(help="Reassign only from this user")] = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Validate without making changes")] = False,
) -> None:
    """Bulk assignment operations."""
    with cli_errors():
        if not operation:
            raise InvalidArgumentError("--operation is required")
        if not task_ids:
            raise InvalidArgumentError("--task-ids is required")
        payload = {
            "operation": operation,
            "task_ids": _split(task_ids),
            "responsible_user": user,
            "from_assignee_user": from_user,
            "dry_run": dry_run,
        }
        _run(ctx, manage_assignments_tool, payload)


activity_app = typer.Typer(
    help="View activity logs and audit history.",
    no_args_is_help=True,
    rich_markup_mode=None,
    epilog=_help_epilog(
        ("Available Commands", ["find        Find activity logs for monitoring and auditing"]),
        ("Examples", ["$ todoist activity find --event-type completed --limit 20"]),
    ),
)
app.add_typer(activity_app, name="activity")


@activity_app.command(
    "find",
    epilog=_help_epilog(
        (
            "Examples",
            [
                "# Recent activity",
                "$ todoist activity find",
                "# Completed tasks in a project",
                "$ todoist activity find --object-type task --event-type completed --project-id 12345",
                "# Everything that happened to one task",
                "$ todoist activity find --task-id 67890",
            ],
        )
    ),
)
def activity_find(
    ctx: typer.Context,
    object_type: Annotated[Optional[str], typer.Option(help="Object type: task, project, comment")] = None,
    object_id: Annotated[Optional[str], typer.Option(help="Specific object ID")] = None,
    event_type: Annotated[
        Optional[str], typer.Option(help="Event type: added, updated, deleted, completed, uncompleted, ...")
    ] = None,
    project_id: Annotated[Optional[str], typer.Option(help="Filter by project")] = None,
    task_id: Annotated[Optional[str], typer.Option(help="Filter by task")] = None,
    initiator_id: Annotated[Optional[str], typer.Option(help="Filter by user who initiated the action")] = None,
    limit: Annotated[Optional[int], typer.Option(help="Maximum results (default: 20)")] = None,
    cursor: Annotated[Optional[str], typer.Option(help="Pagination cursor")] = None,
) -> None:
    """Find activity logs for monitoring and auditing."""
    with cli_errors():
        payload = {
            "object_type": object_type,
            "object_id": object_id,
            "event_type": event_type,
            "project_id": project_id,
            "task_id": task_id,
            "initiator_id": initiator_id,
            "limit": limit,
            "cursor": cursor,
        }
        _run(ctx, find_activity_tool, payload)


# ---------------------------------------------------------------------------
# Standalone commands
# ---------------------------------------------------------------------------


@app.command(
    "delete",
    epilog=_help_epilog(
        (
            "Examples",
            [
                "# Delete a task",
                "$ todoist delete --type task --id 12345",
                "# Delete a project (cascades to tasks/sections)",
                "$ todoist delete --type project --id 67890",
                "# Delete a section",
                "$ todoist delete --type section --id 11111",
                "# Delete a comment",
                "$ todoist delete --type comment --id 22222",
            ],
        )
    ),
)
def delete(
    ctx: typer.Context,
    type: Annotated[Optional[str], typer.Option("--type", help="Object type: task, project, section, comment")] = None,
    id: Annotated[Optional[str], typer.Option("--id", help="Object ID to delete (required)")] = None,
) -> None:
    """Delete any object (task, project, section, or comment)."""
    with cli_errors():
        if not type:
            raise InvalidArgumentError("--type is required")
        if not id:
            raise InvalidArgumentError("--id is required")
        _run(ctx, delete_object_tool, {"type": type, "id": id})


@app.command(
    "overview",
    epilog=_help_epilog(
        (
            "Examples",
            [
                "# Get account overview (all projects)",
                "$ todoist overview",
                "# Get a project overview with all tasks",
                "$ todoist overview --project-id 12345",
            ],
        )
    ),
)
def overview(
    ctx: typer.Context,
    project_id: Annotated[Optional[str], typer.Option(help="Project ID (omit for account overview)")] = None,
) -> None:
    """Get a Markdown overview of your account or a specific project."""
    with cli_errors():
        _run(ctx, get_overview_tool, {"project_id": project_id})


@app.command(
    "user",
    epilog=_help_epilog(
        ("Returns", ["user ID, name, email, timezone, week settings, goals, and plan type."]),
        ("Examples", ["$ todoist user", "$ todoist --json user"]),
    ),
)
def user(ctx: typer.Context) -> None:
    """Get your user information and settings."""
    with cli_errors():
        _run(ctx, user_info_tool, {})


if __name__ == "__main__":
    app()
