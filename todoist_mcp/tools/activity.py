"""Activity log tool."""

from todoist_mcp.client import TodoistClient
from todoist_mcp.enums import ActivityObjectType, ToolName
from todoist_mcp.models.inputs import ApiLimits, FindActivityInput
from todoist_mcp.models.output import SummaryReport, ToolOutput
from todoist_mcp.tools.base import TodoistTool
from todoist_mcp.utils.formatters import format_activity_line, preview_lines, summarize_list
from todoist_mcp.utils.pagination import collect_pages
from todoist_mcp.utils.parsers import map_activity_event

# The activity log still uses the legacy object names.
_API_OBJECT_TYPES = {
    ActivityObjectType.TASK: "item",
    ActivityObjectType.PROJECT: "project",
    ActivityObjectType.COMMENT: "note",
}


async def find_activity(client: TodoistClient, params: FindActivityInput) -> ToolOutput:
    """
    Browse the activity log, newest first.

    USE THIS WHEN:
    - Auditing who changed, completed or deleted something
    - Reviewing recent activity in a project or on a task

    All filters are optional and combine with AND.
    """

    async def fetch(cursor: str | None):
        return await client.get_activities(
            object_type=_API_OBJECT_TYPES[params.object_type] if params.object_type else None,
            object_id=params.object_id,
            event_type=params.event_type.value if params.event_type else None,
            parent_project_id=params.project_id,
            parent_item_id=params.task_id,
            initiator_id=params.initiator_id,
            cursor=cursor,
            limit=params.limit,
        )

    page = await collect_pages(fetch, params.limit, params.cursor, ApiLimits.ACTIVITY_MAX)
    events = [map_activity_event(raw) for raw in page.items]

    filter_hints = []
    if params.object_type:
        filter_hints.append(f"type: {params.object_type.value}")
    if params.object_id:
        filter_hints.append(f"object: {params.object_id}")
    if params.event_type:
        filter_hints.append(f"event: {params.event_type.value}")
    if params.project_id:
        filter_hints.append(f"project: {params.project_id}")
    if params.task_id:
        filter_hints.append(f"task: {params.task_id}")
    if params.initiator_id:
        filter_hints.append(f"by: {params.initiator_id}")

    text = summarize_list(
        SummaryReport(
            subject="Activity events",
            count=len(events),
            limit=params.limit,
            next_cursor=page.next_cursor,
            filter_hints=filter_hints,
            preview_lines=preview_lines([format_activity_line(e) for e in events], limit=10),
            zero_reason_hints=["Try removing filters"] if filter_hints else [],
            next_steps=[f"Use {ToolName.FETCH.value} with 'task:<id>' to inspect a task."] if events else [],
        )
    )
    structured = {
        "events": [e.model_dump(mode="json") for e in events],
        "next_cursor": page.next_cursor,
        "total_count": len(events),
        "has_more": bool(page.next_cursor),
    }
    return ToolOutput(text=text, structured=structured)


find_activity_tool = TodoistTool(
    name=ToolName.FIND_ACTIVITY,
    title="Find Activity",
    input_model=FindActivityInput,
    execute=find_activity,
    read_only=True,
    idempotent=True,
)
