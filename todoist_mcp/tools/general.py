"""Account-wide tools: delete_object, get_overview and user_info."""

import logging
from collections import defaultdict

from todoist_mcp.client import TodoistClient
from todoist_mcp.enums import ObjectType, ToolName
from todoist_mcp.models.entities import ProjectModel, TaskModel
from todoist_mcp.models.inputs import DeleteObjectInput, GetOverviewInput, UserInfoInput
from todoist_mcp.models.output import ToolOutput
from todoist_mcp.tools.base import TodoistTool
from todoist_mcp.utils.pagination import collect_all
from todoist_mcp.utils.parsers import map_project, map_section, map_tasks, map_user

logger = logging.getLogger(__name__)

_WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


async def delete_object(client: TodoistClient, params: DeleteObjectInput) -> ToolOutput:
    """
    Delete a task, project, section or comment by ID.

    Deleting a project also deletes its sections and tasks. This cannot be undone.
    """
    deleters = {
        ObjectType.TASK: client.delete_task,
        ObjectType.PROJECT: client.delete_project,
        ObjectType.SECTION: client.delete_section,
        ObjectType.COMMENT: client.delete_comment,
    }
    await deleters[params.type](params.id)
    logger.info(f"Deleted {params.type.value} {params.id}")

    return ToolOutput(
        text=f"Deleted {params.type.value}: id={params.id}",
        structured={"deleted_entity": {"type": params.type.value, "id": params.id}, "success": True},
    )


def _project_tree_lines(projects: list[ProjectModel]) -> list[str]:
    children: dict[str | None, list[ProjectModel]] = defaultdict(list)
    known = {p.id for p in projects}
    for project in sorted(projects, key=lambda p: p.child_order):
        parent = project.parent_id if project.parent_id in known else None
        children[parent].append(project)

    lines: list[str] = []

    def walk(parent_id: str | None, depth: int) -> None:
        for project in children.get(parent_id, []):
            marker = " (Inbox)" if project.is_inbox else ""
            lines.append(f"{'  ' * depth}- {project.name}{marker} (id={project.id})")
            walk(project.id, depth + 1)

    walk(None, 0)
    return lines


def _task_tree_lines(tasks: list[TaskModel]) -> list[str]:
    children: dict[str | None, list[TaskModel]] = defaultdict(list)
    known = {t.id for t in tasks}
    for task in tasks:
        children[task.parent_id if task.parent_id in known else None].append(task)

    lines: list[str] = []

    def walk(parent_id: str | None, depth: int) -> None:
        for task in children.get(parent_id, []):
            extras = [f"due {task.due_date}"] if task.due_date else []
            if task.priority != "p4":
                extras.append(task.priority)
            suffix = f" ({', '.join(extras)})" if extras else ""
            lines.append(f"{'  ' * depth}- [ ] {task.content}{suffix} (id={task.id})")
            walk(task.id, depth + 1)

    walk(None, 0)
    return lines


async def get_overview(client: TodoistClient, params: GetOverviewInput) -> ToolOutput:
    """
    Get a Markdown overview of the account or of one project.

    Without project_id: the project hierarchy. With project_id: the
    project's sections and every open task, nested by subtask.
    """
    if not params.project_id:
        projects = [map_project(raw) for raw in await collect_all(client.get_projects)]
        lines = ["# Projects", "", *_project_tree_lines(projects)]
        if not projects:
            lines.append("_No projects._")
        lines.extend(["", f"Use {ToolName.GET_OVERVIEW.value} with project_id to see a project's tasks."])
        structured = {
            "type": "account_overview",
            "projects": [p.model_dump(mode="json") for p in projects],
            "total_projects": len(projects),
        }
        return ToolOutput(text="\n".join(lines), structured=structured)

    project = map_project(await client.get_project(params.project_id))

    async def fetch_sections(cursor: str | None):
        return await client.get_sections(project_id=project.id, cursor=cursor)

    async def fetch_tasks(cursor: str | None):
        return await client.get_tasks(project_id=project.id, cursor=cursor)

    sections = [map_section(raw) for raw in await collect_all(fetch_sections)]
    tasks = map_tasks(await collect_all(fetch_tasks))

    by_section: dict[str | None, list[TaskModel]] = defaultdict(list)
    for task in tasks:
        by_section[task.section_id].append(task)

    lines = [f"# {project.name}", ""]
    if by_section.get(None):
        lines.extend(_task_tree_lines(by_section[None]))
        lines.append("")
    for section in sorted(sections, key=lambda s: s.order):
        lines.append(f"## {section.name}")
        lines.append("")
        section_tasks = by_section.get(section.id, [])
        lines.extend(_task_tree_lines(section_tasks) if section_tasks else ["_No tasks._"])
        lines.append("")
    if not tasks:
        lines.append("_No open tasks._")

    structured = {
        "type": "project_overview",
        "project": project.model_dump(mode="json"),
        "sections": [s.model_dump(mode="json") for s in sections],
        "tasks": [t.model_dump(mode="json") for t in tasks],
        "total_tasks": len(tasks),
    }
    return ToolOutput(text="\n".join(lines).rstrip(), structured=structured)


async def user_info(client: TodoistClient, params: UserInfoInput) -> ToolOutput:
    """
    Get the current user's profile and settings.

    Returns: user ID, name, email, timezone, week settings, goals, and plan type.
    """
    user = map_user(await client.get_user())
    start_day = _WEEKDAYS[(user.start_day - 1) % 7]
    next_week = _WEEKDAYS[(user.next_week - 1) % 7]
    lines = [
        "# User Information",
        "",
        f"**User ID:** {user.id}",
        f"**Name:** {user.full_name}",
        f"**Email:** {user.email}",
        f"**Timezone:** {user.timezone} (UTC{user.gmt_offset})",
        f"**Week start:** {start_day}",
        f"**Next week starts:** {next_week}",
        f"**Daily goal:** {user.daily_goal} tasks",
        f"**Weekly goal:** {user.weekly_goal} tasks",
        f"**Plan:** {user.premium_status.replace('_', ' ')}",
    ]
    structured = user.model_dump(mode="json")
    structured.update({"start_day_name": start_day, "next_week_name": next_week})
    return ToolOutput(text="\n".join(lines), structured=structured)


delete_object_tool = TodoistTool(
    name=ToolName.DELETE_OBJECT,
    title="Delete Object",
    input_model=DeleteObjectInput,
    execute=delete_object,
    destructive=True,
    idempotent=True,
)

get_overview_tool = TodoistTool(
    name=ToolName.GET_OVERVIEW,
    title="Get Overview",
    input_model=GetOverviewInput,
    execute=get_overview,
    read_only=True,
    idempotent=True,
)

user_info_tool = TodoistTool(
    name=ToolName.USER_INFO,
    title="User Info",
    input_model=UserInfoInput,
    execute=user_info,
    read_only=True,
    idempotent=True,
)
