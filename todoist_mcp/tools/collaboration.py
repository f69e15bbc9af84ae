"""Collaboration tools: list collaborators and manage task assignments."""

import logging
from typing import Any

from todoist_mcp.client import TodoistClient
from todoist_mcp.enums import AssignmentOperation, ToolName
from todoist_mcp.errors import InvalidArgumentError
from todoist_mcp.models.inputs import FindProjectCollaboratorsInput, ManageAssignmentsInput
from todoist_mcp.models.output import SummaryReport, ToolOutput
from todoist_mcp.tools.base import TodoistTool
from todoist_mcp.utils.formatters import format_collaborator_line, preview_lines, summarize_list
from todoist_mcp.utils.pagination import collect_all
from todoist_mcp.utils.parsers import map_collaborator, map_project, map_task
from todoist_mcp.utils.users import resolve_responsible_user

logger = logging.getLogger(__name__)


async def find_project_collaborators(client: TodoistClient, params: FindProjectCollaboratorsInput) -> ToolOutput:
    """
    List the collaborators of a shared project.

    USE THIS WHEN:
    - Finding who a task can be assigned to
    - Looking up a user ID or email before assigning tasks

    Optionally narrow the list with search_term (name or email, case-insensitive).
    """
    project = map_project(await client.get_project(params.project_id))
    if not project.is_shared:
        text = (
            f'Project "{project.name}" is not shared and has no collaborators.\n'
            "Share the project in Todoist to assign tasks to other people."
        )
        return ToolOutput(text=text, structured={"collaborators": [], "total_count": 0, "project_id": project.id})

    async def fetch(cursor: str | None):
        return await client.get_project_collaborators(params.project_id, cursor=cursor)

    collaborators = [map_collaborator(raw) for raw in await collect_all(fetch)]
    if params.search_term:
        needle = params.search_term.lower()
        collaborators = [c for c in collaborators if needle in c.name.lower() or needle in c.email.lower()]

    text = summarize_list(
        SummaryReport(
            subject=f'Collaborators of "{project.name}"',
            count=len(collaborators),
            filter_hints=[f'matching "{params.search_term}"'] if params.search_term else [],
            preview_lines=preview_lines([format_collaborator_line(c) for c in collaborators], limit=20),
            zero_reason_hints=["Try a different search term"] if params.search_term else [],
            next_steps=[f"Use {ToolName.MANAGE_ASSIGNMENTS.value} to assign tasks."] if collaborators else [],
        )
    )
    structured = {
        "collaborators": [c.model_dump(mode="json") for c in collaborators],
        "total_count": len(collaborators),
        "project_id": project.id,
    }
    return ToolOutput(text=text, structured=structured)


async def manage_assignments(client: TodoistClient, params: ManageAssignmentsInput) -> ToolOutput:
    """
    Assign, unassign or reassign up to 50 tasks at once.

    USE THIS WHEN:
    - Handing a set of tasks to a collaborator (operation='assign')
    - Clearing assignees (operation='unassign')
    - Moving work from one person to another (operation='reassign',
      optionally only tasks currently held by from_assignee_user)

    Set dry_run=true to see what would change without changing anything.
    """
    if params.operation != AssignmentOperation.UNASSIGN and not params.responsible_user:
        raise InvalidArgumentError(f"responsible_user is required for the '{params.operation.value}' operation.")
    if params.from_assignee_user and params.operation != AssignmentOperation.REASSIGN:
        raise InvalidArgumentError("from_assignee_user can only be used with the 'reassign' operation.")

    target = None
    if params.operation != AssignmentOperation.UNASSIGN:
        target = await resolve_responsible_user(client, params.responsible_user)
    source = await resolve_responsible_user(client, params.from_assignee_user)

    results: list[dict[str, Any]] = []
    for task_id in params.task_ids:
        if source is not None:
            task = map_task(await client.get_task(task_id))
            if task.responsible_uid != source.user_id:
                results.append({"task_id": task_id, "status": "skipped", "reason": "not assigned to source user"})
                continue

        assignee_id = target.user_id if target else None
        if params.dry_run:
            results.append({"task_id": task_id, "status": "would_change", "assignee_id": assignee_id})
            continue

        await client.update_task(task_id, {"assignee_id": assignee_id})
        results.append({"task_id": task_id, "status": "changed", "assignee_id": assignee_id})

    changed = [r for r in results if r["status"] != "skipped"]
    skipped = [r for r in results if r["status"] == "skipped"]
    logger.info(f"{params.operation.value}: {len(changed)} changed, {len(skipped)} skipped, dry_run={params.dry_run}")

    verb = {
        AssignmentOperation.ASSIGN: "assign",
        AssignmentOperation.UNASSIGN: "unassign",
        AssignmentOperation.REASSIGN: "reassign",
    }[params.operation]
    who = f" to {target.name or target.email}" if target else ""
    prefix = "Dry run: would " if params.dry_run else "Did "
    lines = [f"{prefix}{verb} {len(changed)} task{'s' if len(changed) != 1 else ''}{who}."]
    if skipped:
        lines.append(f"Skipped {len(skipped)} task(s) not assigned to {source.email if source else 'the source user'}.")
    if params.dry_run and changed:
        lines.append("Run again with dry_run=false to apply.")

    structured = {
        "operation": params.operation.value,
        "dry_run": params.dry_run,
        "results": results,
        "changed_count": len(changed),
        "skipped_count": len(skipped),
    }
    return ToolOutput(text="\n".join(lines), structured=structured)


find_project_collaborators_tool = TodoistTool(
    name=ToolName.FIND_PROJECT_COLLABORATORS,
    title="Find Project Collaborators",
    input_model=FindProjectCollaboratorsInput,
    execute=find_project_collaborators,
    read_only=True,
    idempotent=True,
)

manage_assignments_tool = TodoistTool(
    name=ToolName.MANAGE_ASSIGNMENTS,
    title="Manage Assignments",
    input_model=ManageAssignmentsInput,
    execute=manage_assignments,
    idempotent=True,
)
