"""Search and fetch tools in the shape generic MCP connectors expect."""

import logging
from typing import Any

from todoist_mcp.client import TodoistClient
from todoist_mcp.enums import ToolName
from todoist_mcp.errors import InvalidArgumentError
from todoist_mcp.models.entities import ProjectModel, TaskModel
from todoist_mcp.models.inputs import ApiLimits, FetchInput, SearchInput
from todoist_mcp.models.output import ToolOutput
from todoist_mcp.tools.base import TodoistTool
from todoist_mcp.utils.filters import build_search_filter
from todoist_mcp.utils.pagination import collect_all, collect_pages
from todoist_mcp.utils.parsers import map_project, map_task, map_tasks

logger = logging.getLogger(__name__)

APP_URL = "https://app.todoist.com/app"


def task_url(task_id: str) -> str:
    return f"{APP_URL}/task/{task_id}"


def project_url(project_id: str) -> str:
    return f"{APP_URL}/project/{project_id}"


def _task_result(task: TaskModel) -> dict[str, Any]:
    return {"id": f"task:{task.id}", "title": task.content, "url": task_url(task.id)}


def _project_result(project: ProjectModel) -> dict[str, Any]:
    return {"id": f"project:{project.id}", "title": project.name, "url": project_url(project.id)}


async def search(client: TodoistClient, params: SearchInput) -> ToolOutput:
    """
    Search tasks and projects by text.

    Returns result IDs of the form 'task:{id}' or 'project:{id}' that can be
    passed to fetch for full details.
    """
    query = build_search_filter(params.query)

    async def fetch_tasks(cursor: str | None):
        return await client.filter_tasks(query, cursor=cursor, limit=ApiLimits.TASKS_MAX)

    page = await collect_pages(fetch_tasks, ApiLimits.TASKS_MAX, max_limit=ApiLimits.TASKS_MAX)
    tasks = map_tasks(page.items)

    needle = params.query.lower()
    projects = [p for p in (map_project(raw) for raw in await collect_all(client.get_projects)) if needle in p.name.lower()]

    results = [_task_result(t) for t in tasks] + [_project_result(p) for p in projects]
    logger.debug(f"search '{params.query}': {len(tasks)} task(s), {len(projects)} project(s)")

    lines = [f'Search results for "{params.query}": {len(results)}.']
    lines.extend(f"    {r['title']} • {r['id']}" for r in results[:20])
    if len(results) > 20:
        lines.append(f"    …and {len(results) - 20} more")
    if results:
        lines.append(f"Possible suggested next step: Use {ToolName.FETCH.value} with a result id for full details.")
    return ToolOutput(text="\n".join(lines), structured={"results": results})


async def fetch(client: TodoistClient, params: FetchInput) -> ToolOutput:
    """
    Fetch the full contents of a task or project by search result ID.

    Accepts 'task:{id}' or 'project:{id}'.
    """
    kind, _, object_id = params.id.partition(":")
    if kind == "task":
        task = map_task(await client.get_task(object_id))
        body = [task.content]
        if task.description:
            body.extend(["", task.description])
        details = [
            f"Due: {task.due_date}" if task.due_date else None,
            f"Deadline: {task.deadline_date}" if task.deadline_date else None,
            f"Priority: {task.priority}",
            f"Labels: {', '.join(task.labels)}" if task.labels else None,
            f"Duration: {task.duration}" if task.duration else None,
        ]
        text = "\n".join(body + [""] + [d for d in details if d])
        document = {
            "id": params.id,
            "title": task.content,
            "text": text,
            "url": task_url(task.id),
            "metadata": task.model_dump(mode="json", exclude={"content", "description"}, exclude_none=True),
        }
    elif kind == "project":
        project = map_project(await client.get_project(object_id))
        flags = [name for name, on in (("favorite", project.is_favorite), ("shared", project.is_shared)) if on]
        text = f"{project.name}\n\nView: {project.view_style}" + (f"\nFlags: {', '.join(flags)}" if flags else "")
        document = {
            "id": params.id,
            "title": project.name,
            "text": text,
            "url": project_url(project.id),
            "metadata": project.model_dump(mode="json", exclude={"name"}, exclude_none=True),
        }
    else:
        raise InvalidArgumentError(f"Unsupported id '{params.id}'. Use 'task:{{id}}' or 'project:{{id}}'.")

    return ToolOutput(text=document["text"], structured=document)


search_tool = TodoistTool(
    name=ToolName.SEARCH,
    title="Search",
    input_model=SearchInput,
    execute=search,
    read_only=True,
    idempotent=True,
)

fetch_tool = TodoistTool(
    name=ToolName.FETCH,
    title="Fetch",
    input_model=FetchInput,
    execute=fetch,
    read_only=True,
    idempotent=True,
)
