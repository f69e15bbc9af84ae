"""Task tools: add, update, complete and find."""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any

from todoist_mcp.client import TodoistClient
from todoist_mcp.enums import (
    CompletedGetBy,
    LabelsOperator,
    OverdueOption,
    ResponsibleUserFiltering,
    ToolName,
)
from todoist_mcp.errors import InvalidArgumentError
from todoist_mcp.models.entities import TaskModel
from todoist_mcp.models.inputs import (
    AddTasksInput,
    ApiLimits,
    CompleteTasksInput,
    FindCompletedTasksInput,
    FindTasksByDateInput,
    FindTasksInput,
    TaskSpec,
    TaskUpdateSpec,
    UpdateTasksInput,
)
from todoist_mcp.models.output import FieldChange, ResolvedUser, SummaryReport, ToolOutput
from todoist_mcp.tools.base import TodoistTool
from todoist_mcp.utils.filters import (
    append_group_to_query,
    append_to_query,
    build_date_filter,
    build_labels_filter,
    build_responsible_user_filter,
    build_search_filter,
    parse_iso_date,
)
from todoist_mcp.utils.formatters import (
    format_task_line,
    preview_tasks,
    summarize_batch,
    summarize_list,
    task_next_steps,
)
from todoist_mcp.utils.pagination import collect_pages
from todoist_mcp.utils.parsers import map_task, map_tasks, map_user, parse_duration, priority_to_api
from todoist_mcp.utils.users import resolve_responsible_user

logger = logging.getLogger(__name__)


def _dump_tasks(tasks: list[TaskModel]) -> list[dict[str, Any]]:
    return [t.model_dump(mode="json") for t in tasks]


def _list_structured(tasks: list[TaskModel], next_cursor: str | None, params: Any) -> dict[str, Any]:
    return {
        "tasks": _dump_tasks(tasks),
        "next_cursor": next_cursor,
        "total_count": len(tasks),
        "has_more": bool(next_cursor),
        "applied_filters": params.model_dump(mode="json", exclude={"response_format"}, exclude_none=True),
    }


def _labels_hint(labels: list[str] | None, operator: LabelsOperator) -> str | None:
    if not labels:
        return None
    joiner = " & " if operator == LabelsOperator.AND else " | "
    return "labels: " + joiner.join(f"@{label}" for label in labels)


class _UserCache:
    """Resolve each identifier at most once per tool call."""

    def __init__(self, client: TodoistClient):
        self._client = client
        self._resolved: dict[str, ResolvedUser | None] = {}

    async def resolve(self, identifier: str | None) -> ResolvedUser | None:
        if identifier is None:
            return None
        if identifier not in self._resolved:
            self._resolved[identifier] = await resolve_responsible_user(self._client, identifier)
        return self._resolved[identifier]


# ============================================================================
# add_tasks / update_tasks / complete_tasks
# ============================================================================


def _add_task_body(spec: TaskSpec) -> dict[str, Any]:
    body: dict[str, Any] = {"content": spec.content}
    if spec.description is not None:
        body["description"] = spec.description
    if spec.due_string:
        body["due_string"] = spec.due_string
    if spec.deadline_date:
        body["deadline_date"] = parse_iso_date(spec.deadline_date, "deadline date").isoformat()
    if spec.duration:
        body["duration"] = parse_duration(spec.duration)
        body["duration_unit"] = "minute"
    if spec.priority:
        body["priority"] = priority_to_api(spec.priority.value)
    if spec.labels is not None:
        body["labels"] = spec.labels
    if spec.project_id:
        body["project_id"] = spec.project_id
    if spec.section_id:
        body["section_id"] = spec.section_id
    if spec.parent_id:
        body["parent_id"] = spec.parent_id
    return body


async def add_tasks(client: TodoistClient, params: AddTasksInput) -> ToolOutput:
    """
    Add one or more tasks.

    USE THIS WHEN:
    - Capturing new tasks, optionally with due dates, priorities, labels or assignees
    - Creating subtasks (set parent_id) or tasks inside a project/section

    DO NOT USE WHEN:
    - Changing an existing task → use update_tasks instead
    - Adding a note to a task → use add_comments instead

    Every item is validated and its assignee resolved before the first task
    is created. Tasks are then created in order; a remote failure stops the
    batch.
    """
    bodies = [_add_task_body(spec) for spec in params.tasks]
    users = _UserCache(client)
    for spec, body in zip(params.tasks, bodies):
        resolved = await users.resolve(spec.responsible_user)
        if resolved:
            body["assignee_id"] = resolved.user_id

    added: list[TaskModel] = []
    for body in bodies:
        added.append(map_task(await client.add_task(body)))

    text = summarize_batch(
        "Added",
        "task",
        len(added),
        [format_task_line(t) for t in added],
        task_next_steps("added", added, date.today()),
    )
    return ToolOutput(text=text, structured={"tasks": _dump_tasks(added), "total_count": len(added)})


def _update_task_body(spec: TaskUpdateSpec) -> dict[str, Any]:
    body: dict[str, Any] = {}
    if spec.content is not None:
        body["content"] = spec.content
    if spec.description is not None:
        body["description"] = spec.description

    due = FieldChange.parse(spec.due_string)
    if due.is_clear:
        body["due_string"] = "no date"
    elif due.is_set:
        body["due_string"] = due.value

    deadline = FieldChange.parse(spec.deadline_date)
    if deadline.is_clear:
        body["deadline_date"] = None
    elif deadline.is_set:
        body["deadline_date"] = parse_iso_date(deadline.value, "deadline date").isoformat()

    duration = FieldChange.parse(spec.duration)
    if duration.is_clear:
        body["duration"] = None
        body["duration_unit"] = None
    elif duration.is_set:
        body["duration"] = parse_duration(duration.value)
        body["duration_unit"] = "minute"

    if spec.priority:
        body["priority"] = priority_to_api(spec.priority.value)
    if spec.labels is not None:
        body["labels"] = spec.labels

    if FieldChange.parse(spec.responsible_user, clear_token="unassign").is_clear:
        body["assignee_id"] = None
    return body


async def update_tasks(client: TodoistClient, params: UpdateTasksInput) -> ToolOutput:
    """
    Update existing tasks.

    USE THIS WHEN:
    - Renaming, rescheduling, reprioritizing or relabeling tasks
    - Moving a task to another project, section or parent
    - Assigning or unassigning a task

    CLEARING VALUES: due_string, deadline_date and duration accept "remove";
    responsible_user accepts "unassign". Omitted fields are left unchanged.

    DO NOT USE WHEN:
    - Marking tasks done → use complete_tasks instead
    - Changing assignees of many tasks at once → use manage_assignments
    """
    bodies = [_update_task_body(spec) for spec in params.tasks]
    users = _UserCache(client)
    for spec, body in zip(params.tasks, bodies):
        assignee = FieldChange.parse(spec.responsible_user, clear_token="unassign")
        if assignee.is_set:
            resolved = await users.resolve(assignee.value)
            body["assignee_id"] = resolved.user_id if resolved else None

    updated: list[TaskModel] = []
    for spec, body in zip(params.tasks, bodies):
        if spec.project_id or spec.section_id or spec.parent_id:
            await client.move_task(
                spec.id,
                project_id=spec.project_id,
                section_id=spec.section_id,
                parent_id=spec.parent_id,
            )
        if body:
            raw = await client.update_task(spec.id, body)
        else:
            raw = await client.get_task(spec.id)
        updated.append(map_task(raw))

    text = summarize_batch(
        "Updated",
        "task",
        len(updated),
        [format_task_line(t) for t in updated],
        task_next_steps("updated", updated, date.today()),
    )
    return ToolOutput(text=text, structured={"tasks": _dump_tasks(updated), "total_count": len(updated)})


async def complete_tasks(client: TodoistClient, params: CompleteTasksInput) -> ToolOutput:
    """
    Mark tasks as completed.

    Recurring tasks move to their next occurrence instead of closing.
    """
    for task_id in params.ids:
        await client.close_task(task_id)

    text = summarize_batch(
        "Completed",
        "task",
        len(params.ids),
        [f"    id={task_id}" for task_id in params.ids],
        [f"Use {ToolName.FIND_COMPLETED_TASKS.value} to review completed work."],
    )
    return ToolOutput(text=text, structured={"completed": params.ids, "total_count": len(params.ids)})


# ============================================================================
# find_tasks
# ============================================================================


def _matches_locally(
    task: TaskModel,
    params: FindTasksInput,
    resolved: ResolvedUser | None,
    me_id: str | None,
) -> bool:
    if params.search_text:
        needle = params.search_text.lower()
        if needle not in task.content.lower() and needle not in task.description.lower():
            return False
    if params.labels:
        wanted = {label.lstrip("@") for label in params.labels}
        have = set(task.labels)
        if params.labels_operator == LabelsOperator.AND and not wanted <= have:
            return False
        if params.labels_operator == LabelsOperator.OR and not wanted & have:
            return False
    if resolved is not None:
        return task.responsible_uid == resolved.user_id
    filtering = params.responsible_user_filtering or ResponsibleUserFiltering.UNASSIGNED_OR_ME
    if filtering == ResponsibleUserFiltering.ASSIGNED:
        return task.responsible_uid is not None and task.responsible_uid != me_id
    if filtering == ResponsibleUserFiltering.UNASSIGNED_OR_ME:
        return task.responsible_uid is None or task.responsible_uid == me_id
    return True


async def find_tasks(client: TodoistClient, params: FindTasksInput) -> ToolOutput:
    """
    Find tasks by text, container, labels or assignee.

    USE THIS WHEN:
    - Searching tasks by text ("search_text")
    - Listing the tasks of a project, section or parent task
    - Finding tasks with given labels or assigned to someone

    DO NOT USE WHEN:
    - You want tasks for a date or date range → use find_tasks_by_date
    - You want finished tasks → use find_completed_tasks

    At least one filter must be provided.
    """
    has_container = bool(params.project_id or params.section_id or params.parent_id)
    if not (has_container or params.search_text or params.labels or params.responsible_user):
        raise InvalidArgumentError(
            "At least one filter must be provided: search_text, project_id, section_id, parent_id, "
            "labels or responsible_user."
        )

    resolved = await resolve_responsible_user(client, params.responsible_user)

    if has_container:
        me_id = None
        if resolved is None and params.responsible_user_filtering != ResponsibleUserFiltering.ALL:
            me_id = map_user(await client.get_user()).id

        async def fetch(cursor: str | None):
            return await client.get_tasks(
                project_id=params.project_id,
                section_id=params.section_id,
                parent_id=params.parent_id,
                cursor=cursor,
                limit=params.limit,
            )

        page = await collect_pages(fetch, params.limit, params.cursor, ApiLimits.TASKS_MAX)
        tasks = [t for t in map_tasks(page.items) if _matches_locally(t, params, resolved, me_id)]
    else:
        query = build_search_filter(params.search_text)
        query = append_to_query(query, build_responsible_user_filter(resolved, params.responsible_user_filtering))
        query = append_group_to_query(query, build_labels_filter(params.labels, params.labels_operator))
        logger.debug(f"find_tasks query: {query}")

        async def fetch(cursor: str | None):
            return await client.filter_tasks(query, cursor=cursor, limit=params.limit)

        page = await collect_pages(fetch, params.limit, params.cursor, ApiLimits.TASKS_MAX)
        tasks = map_tasks(page.items)

    filter_hints: list[str] = []
    if params.search_text:
        filter_hints.append(f'search: "{params.search_text}"')
    if params.project_id:
        filter_hints.append(f"project: {params.project_id}")
    if params.section_id:
        filter_hints.append(f"section: {params.section_id}")
    if params.parent_id:
        filter_hints.append(f"parent: {params.parent_id}")
    labels_hint = _labels_hint(params.labels, params.labels_operator)
    if labels_hint:
        filter_hints.append(labels_hint)
    if resolved:
        filter_hints.append(f"assigned to: {resolved.email}")

    if params.search_text:
        subject = f'Search results for "{params.search_text}"'
    elif params.parent_id:
        subject = "Subtasks"
    elif params.section_id:
        subject = "Tasks in section"
    elif params.project_id:
        subject = "Tasks in project"
    else:
        subject = "Tasks"

    zero_reason_hints: list[str] = []
    if not tasks:
        if params.search_text:
            zero_reason_hints.append("Try a shorter or different search term")
        if params.labels:
            zero_reason_hints.append("Check label spelling or switch labels_operator to 'or'")
        if params.responsible_user_filtering != ResponsibleUserFiltering.ALL:
            zero_reason_hints.append("Try responsible_user_filtering='all' to include every assignee")
        if has_container:
            zero_reason_hints.append(f"Verify the container IDs with {ToolName.FIND_PROJECTS.value}")

    text = summarize_list(
        SummaryReport(
            subject=subject,
            count=len(tasks),
            limit=params.limit,
            next_cursor=page.next_cursor,
            filter_hints=filter_hints,
            preview_lines=preview_tasks(tasks),
            zero_reason_hints=zero_reason_hints,
            next_steps=task_next_steps("listed", tasks, date.today()),
        )
    )
    return ToolOutput(text=text, structured=_list_structured(tasks, page.next_cursor, params))


# ============================================================================
# find_tasks_by_date
# ============================================================================


def build_tasks_by_date_query(params: FindTasksByDateInput, resolved: ResolvedUser | None) -> str:
    """Combine the date, label and assignment facets of a date query."""
    query = build_date_filter(params.start_date, params.days_count, params.overdue_option)
    query = append_to_query(query, build_responsible_user_filter(resolved, params.responsible_user_filtering))
    return append_group_to_query(query, build_labels_filter(params.labels, params.labels_operator))


def describe_tasks_by_date(
    params: FindTasksByDateInput,
    tasks: list[TaskModel],
    next_cursor: str | None,
    assignee_email: str | None,
    today: date,
) -> SummaryReport:
    """Build the subject, hints and suggestions for a date query result."""
    overdue_only = params.overdue_option == OverdueOption.OVERDUE_ONLY
    exclude_overdue = params.overdue_option == OverdueOption.EXCLUDE_OVERDUE
    is_today = params.start_date == "today"

    filter_hints: list[str] = []
    if overdue_only:
        filter_hints.append("overdue tasks only")
    elif is_today:
        overdue_text = "" if exclude_overdue else " + overdue tasks"
        more_days = f" + {params.days_count - 1} more days" if params.days_count > 1 else ""
        filter_hints.append(f"today{overdue_text}{more_days}")
    elif params.start_date:
        start = parse_iso_date(params.start_date, "start date")
        date_range = f" to {(start + timedelta(days=params.days_count)).isoformat()}" if params.days_count > 1 else ""
        filter_hints.append(f"{params.start_date}{date_range}")

    labels_hint = _labels_hint(params.labels, params.labels_operator)
    if labels_hint:
        filter_hints.append(labels_hint)

    email = assignee_email or params.responsible_user
    if params.responsible_user:
        filter_hints.append(f"assigned to: {email}")

    if overdue_only:
        subject = "Overdue tasks"
    elif is_today:
        subject = "Today's tasks" if exclude_overdue else "Today's tasks + overdue"
    elif params.start_date:
        subject = f"Tasks for {params.start_date}"
    else:
        subject = "Tasks"
    if params.responsible_user:
        subject += f" assigned to {email}"

    zero_reason_hints: list[str] = []
    if not tasks:
        if overdue_only:
            zero_reason_hints.append("Great job! No overdue tasks")
        elif is_today:
            overdue_note = "" if exclude_overdue else " or overdue"
            zero_reason_hints.append(f"Great job! No tasks for today{overdue_note}")
        else:
            zero_reason_hints.append("Expand date range with larger 'days_count'")
            zero_reason_hints.append("Check today's tasks with start_date='today'")

    today_str = today.isoformat()
    next_steps = task_next_steps(
        "listed",
        tasks,
        today,
        has_today=is_today or any(t.due_date == today_str for t in tasks),
        has_overdue=overdue_only or is_today,
    )

    return SummaryReport(
        subject=subject,
        count=len(tasks),
        limit=params.limit,
        next_cursor=next_cursor,
        filter_hints=filter_hints,
        preview_lines=preview_tasks(tasks),
        zero_reason_hints=zero_reason_hints,
        next_steps=next_steps,
    )


async def find_tasks_by_date(client: TodoistClient, params: FindTasksByDateInput) -> ToolOutput:
    """
    Get tasks by due date or date range.

    USE THIS WHEN:
    - Planning the day: start_date='today' includes overdue tasks by default
    - Looking ahead: start_date='YYYY-MM-DD' with days_count up to 30
    - Listing only overdue tasks: overdue_option='overdue-only'

    DO NOT USE WHEN:
    - Searching by text, project or label only → use find_tasks
    - Looking at finished work → use find_completed_tasks

    Either start_date or overdue_option='overdue-only' is required.
    """
    if not params.start_date and params.overdue_option != OverdueOption.OVERDUE_ONLY:
        raise InvalidArgumentError("Either start_date must be provided or overdue_option must be set to overdue-only")

    if params.start_date and params.start_date != "today":
        parse_iso_date(params.start_date, "start date")

    resolved = await resolve_responsible_user(client, params.responsible_user)
    query = build_tasks_by_date_query(params, resolved)
    logger.debug(f"find_tasks_by_date query: {query}")

    async def fetch(cursor: str | None):
        return await client.filter_tasks(query, cursor=cursor, limit=params.limit)

    page = await collect_pages(fetch, params.limit, params.cursor, ApiLimits.TASKS_MAX)
    tasks = map_tasks(page.items)

    report = describe_tasks_by_date(
        params, tasks, page.next_cursor, resolved.email if resolved else None, date.today()
    )
    return ToolOutput(text=summarize_list(report), structured=_list_structured(tasks, page.next_cursor, params))


# ============================================================================
# find_completed_tasks
# ============================================================================


def local_day_bounds_to_utc(since: str, until: str, gmt_offset: str) -> tuple[str, str]:
    """
    Convert local calendar days into UTC timestamps covering them entirely.

    Example: ("2025-01-01", "2025-01-01", "+02:00")
        -> ("2024-12-31T22:00:00Z", "2025-01-01T21:59:59Z")
    """
    parse_iso_date(since, "since date")
    parse_iso_date(until, "until date")
    try:
        start = datetime.fromisoformat(f"{since}T00:00:00{gmt_offset}")
        end = datetime.fromisoformat(f"{until}T23:59:59{gmt_offset}")
    except ValueError:
        raise InvalidArgumentError(f"Unsupported timezone offset '{gmt_offset}'") from None
    fmt = "%Y-%m-%dT%H:%M:%SZ"
    return start.astimezone(timezone.utc).strftime(fmt), end.astimezone(timezone.utc).strftime(fmt)


async def find_completed_tasks(client: TodoistClient, params: FindCompletedTasksInput) -> ToolOutput:
    """
    Get completed tasks (includes all collaborators by default; use responsible_user to narrow).

    USE THIS WHEN:
    - Reviewing what was done in a period (get_by='completion')
    - Checking which tasks due in a period were finished (get_by='due')

    DO NOT USE WHEN:
    - Looking for open tasks → use find_tasks or find_tasks_by_date

    Dates are the user's local calendar days; since and until are inclusive.
    """
    since = parse_iso_date(params.since, "since date")
    until = parse_iso_date(params.until, "until date")
    if until < since:
        raise InvalidArgumentError(f"'until' ({params.until}) is before 'since' ({params.since})")

    resolved = await resolve_responsible_user(client, params.responsible_user)

    filter_query = build_labels_filter(params.labels, params.labels_operator)
    if resolved:
        if filter_query:
            filter_query = f"({filter_query})"
        filter_query = append_to_query(filter_query, f"assigned to: {resolved.email}")

    user = map_user(await client.get_user())
    since_utc, until_utc = local_day_bounds_to_utc(params.since, params.until, user.gmt_offset)

    async def fetch(cursor: str | None):
        return await client.get_completed_tasks(
            by=params.get_by.value,
            since=since_utc,
            until=until_utc,
            project_id=params.project_id,
            section_id=params.section_id,
            parent_id=params.parent_id,
            workspace_id=params.workspace_id,
            filter_query=filter_query or None,
            cursor=cursor,
            limit=params.limit,
        )

    page = await collect_pages(fetch, params.limit, params.cursor, ApiLimits.COMPLETED_TASKS_MAX)
    tasks = map_tasks(page.items)

    get_by_text = "completed" if params.get_by == CompletedGetBy.COMPLETION else "due"
    filter_hints = [f"{get_by_text} date: {params.since} to {params.until}"]
    if params.project_id:
        filter_hints.append(f"project: {params.project_id}")
    if params.section_id:
        filter_hints.append(f"section: {params.section_id}")
    if params.parent_id:
        filter_hints.append(f"parent: {params.parent_id}")
    if params.workspace_id:
        filter_hints.append(f"workspace: {params.workspace_id}")
    labels_hint = _labels_hint(params.labels, params.labels_operator)
    if labels_hint:
        filter_hints.append(labels_hint)
    if params.responsible_user:
        filter_hints.append(f"assigned to: {resolved.email if resolved else params.responsible_user}")

    zero_reason_hints: list[str] = []
    if not tasks:
        zero_reason_hints.append("No tasks completed in this date range")
        zero_reason_hints.append("Try expanding the date range")
        if params.project_id or params.section_id or params.parent_id:
            zero_reason_hints.append("Try removing project/section/parent filters")
        if params.get_by == CompletedGetBy.DUE:
            zero_reason_hints.append('Try switching to "completion" date instead')

    next_steps: list[str] = []
    if tasks:
        next_steps.append(
            f"Use {ToolName.FIND_TASKS_BY_DATE.value} for active tasks or "
            f"{ToolName.GET_OVERVIEW.value} for current productivity."
        )
        if any(t.recurring for t in tasks):
            next_steps.append("Recurring tasks will automatically create new instances.")

    text = summarize_list(
        SummaryReport(
            subject=f"Completed tasks (by {get_by_text} date)",
            count=len(tasks),
            limit=params.limit,
            next_cursor=page.next_cursor,
            filter_hints=filter_hints,
            preview_lines=preview_tasks(tasks),
            zero_reason_hints=zero_reason_hints,
            next_steps=next_steps,
        )
    )
    return ToolOutput(text=text, structured=_list_structured(tasks, page.next_cursor, params))


# ============================================================================
# Tool objects
# ============================================================================

add_tasks_tool = TodoistTool(
    name=ToolName.ADD_TASKS,
    title="Add Tasks",
    input_model=AddTasksInput,
    execute=add_tasks,
)

update_tasks_tool = TodoistTool(
    name=ToolName.UPDATE_TASKS,
    title="Update Tasks",
    input_model=UpdateTasksInput,
    execute=update_tasks,
    idempotent=True,
)

complete_tasks_tool = TodoistTool(
    name=ToolName.COMPLETE_TASKS,
    title="Complete Tasks",
    input_model=CompleteTasksInput,
    execute=complete_tasks,
)

find_tasks_tool = TodoistTool(
    name=ToolName.FIND_TASKS,
    title="Find Tasks",
    input_model=FindTasksInput,
    execute=find_tasks,
    read_only=True,
    idempotent=True,
)

find_tasks_by_date_tool = TodoistTool(
    name=ToolName.FIND_TASKS_BY_DATE,
    title="Find Tasks by Date",
    input_model=FindTasksByDateInput,
    execute=find_tasks_by_date,
    read_only=True,
    idempotent=True,
)

find_completed_tasks_tool = TodoistTool(
    name=ToolName.FIND_COMPLETED_TASKS,
    title="Find Completed Tasks",
    input_model=FindCompletedTasksInput,
    execute=find_completed_tasks,
    read_only=True,
    idempotent=True,
)
