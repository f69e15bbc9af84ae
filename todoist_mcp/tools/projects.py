"""Project tools: add, update and find."""

from typing import Any

from todoist_mcp.client import TodoistClient
from todoist_mcp.enums import ToolName
from todoist_mcp.models.entities import ProjectModel
from todoist_mcp.models.inputs import AddProjectsInput, ApiLimits, FindProjectsInput, UpdateProjectsInput
from todoist_mcp.models.output import SummaryReport, ToolOutput
from todoist_mcp.tools.base import TodoistTool
from todoist_mcp.utils.formatters import format_project_line, preview_lines, summarize_batch, summarize_list
from todoist_mcp.utils.pagination import collect_all, collect_pages
from todoist_mcp.utils.parsers import map_project


def _dump_projects(projects: list[ProjectModel]) -> list[dict[str, Any]]:
    return [p.model_dump(mode="json") for p in projects]


async def add_projects(client: TodoistClient, params: AddProjectsInput) -> ToolOutput:
    """
    Add one or more projects.

    USE THIS WHEN:
    - Creating a new project or a sub-project (set parent_id)

    DO NOT USE WHEN:
    - Grouping tasks inside an existing project → use add_sections instead
    """
    added: list[ProjectModel] = []
    for spec in params.projects:
        body: dict[str, Any] = {"name": spec.name}
        if spec.parent_id:
            body["parent_id"] = spec.parent_id
        if spec.is_favorite is not None:
            body["is_favorite"] = spec.is_favorite
        if spec.view_style:
            body["view_style"] = spec.view_style.value
        added.append(map_project(await client.add_project(body)))

    text = summarize_batch(
        "Added",
        "project",
        len(added),
        [format_project_line(p) for p in added],
        [
            f"Use {ToolName.ADD_SECTIONS.value} to organize the new project.",
            f"Use {ToolName.ADD_TASKS.value} with project_id to fill it with tasks.",
        ],
    )
    return ToolOutput(text=text, structured={"projects": _dump_projects(added), "total_count": len(added)})


async def update_projects(client: TodoistClient, params: UpdateProjectsInput) -> ToolOutput:
    """
    Update existing projects: rename, (un)favorite or change the view style.

    Only the fields you pass are changed.
    """
    updated: list[ProjectModel] = []
    for spec in params.projects:
        body: dict[str, Any] = {}
        if spec.name is not None:
            body["name"] = spec.name
        if spec.is_favorite is not None:
            body["is_favorite"] = spec.is_favorite
        if spec.view_style:
            body["view_style"] = spec.view_style.value
        raw = await client.update_project(spec.id, body) if body else await client.get_project(spec.id)
        updated.append(map_project(raw))

    text = summarize_batch("Updated", "project", len(updated), [format_project_line(p) for p in updated])
    return ToolOutput(text=text, structured={"projects": _dump_projects(updated), "total_count": len(updated)})


async def find_projects(client: TodoistClient, params: FindProjectsInput) -> ToolOutput:
    """
    List projects, optionally filtered by a case-insensitive name match.

    USE THIS WHEN:
    - Looking up a project ID by name before adding or finding tasks
    - Getting an overview of all projects

    Archived projects are not included.
    """
    if params.search:
        # The API has no name filter; match locally over every project.
        needle = params.search.lower()
        projects = [
            p for p in (map_project(raw) for raw in await collect_all(client.get_projects)) if needle in p.name.lower()
        ]
        next_cursor = None
        projects = projects[: params.limit]
    else:

        async def fetch(cursor: str | None):
            return await client.get_projects(cursor=cursor, limit=params.limit)

        page = await collect_pages(fetch, params.limit, params.cursor, ApiLimits.PROJECTS_MAX)
        projects = [map_project(raw) for raw in page.items]
        next_cursor = page.next_cursor

    zero_reason_hints = []
    if not projects and params.search:
        zero_reason_hints.append("Try a shorter or different search term")

    text = summarize_list(
        SummaryReport(
            subject="Projects",
            count=len(projects),
            limit=params.limit,
            next_cursor=next_cursor,
            filter_hints=[f'name contains "{params.search}"'] if params.search else [],
            preview_lines=preview_lines([format_project_line(p) for p in projects], limit=10),
            zero_reason_hints=zero_reason_hints,
            next_steps=[f"Use {ToolName.FIND_TASKS.value} with project_id to see a project's tasks."] if projects else [],
        )
    )
    structured = {
        "projects": _dump_projects(projects),
        "next_cursor": next_cursor,
        "total_count": len(projects),
        "has_more": bool(next_cursor),
    }
    return ToolOutput(text=text, structured=structured)


add_projects_tool = TodoistTool(
    name=ToolName.ADD_PROJECTS,
    title="Add Projects",
    input_model=AddProjectsInput,
    execute=add_projects,
)

update_projects_tool = TodoistTool(
    name=ToolName.UPDATE_PROJECTS,
    title="Update Projects",
    input_model=UpdateProjectsInput,
    execute=update_projects,
    idempotent=True,
)

find_projects_tool = TodoistTool(
    name=ToolName.FIND_PROJECTS,
    title="Find Projects",
    input_model=FindProjectsInput,
    execute=find_projects,
    read_only=True,
    idempotent=True,
)
