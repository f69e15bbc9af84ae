"""Comment tools: add, update and find."""

from todoist_mcp.client import TodoistClient
from todoist_mcp.enums import ToolName
from todoist_mcp.errors import InvalidArgumentError
from todoist_mcp.models.entities import CommentModel
from todoist_mcp.models.inputs import AddCommentsInput, ApiLimits, FindCommentsInput, UpdateCommentsInput
from todoist_mcp.models.output import SummaryReport, ToolOutput
from todoist_mcp.tools.base import TodoistTool
from todoist_mcp.utils.formatters import format_comment_line, preview_lines, summarize_batch, summarize_list
from todoist_mcp.utils.pagination import collect_pages
from todoist_mcp.utils.parsers import map_comment


def _structured(comments: list[CommentModel], **extra) -> dict:
    return {"comments": [c.model_dump(mode="json") for c in comments], "total_count": len(comments), **extra}


async def add_comments(client: TodoistClient, params: AddCommentsInput) -> ToolOutput:
    """
    Add comments to tasks or projects.

    Each comment targets exactly one of task_id or project_id.
    """
    added: list[CommentModel] = []
    for spec in params.comments:
        body = {"content": spec.content}
        if spec.task_id:
            body["task_id"] = spec.task_id
        else:
            body["project_id"] = spec.project_id
        added.append(map_comment(await client.add_comment(body)))

    text = summarize_batch("Added", "comment", len(added), [format_comment_line(c) for c in added])
    return ToolOutput(text=text, structured=_structured(added))


async def update_comments(client: TodoistClient, params: UpdateCommentsInput) -> ToolOutput:
    """Replace the content of existing comments."""
    updated: list[CommentModel] = []
    for spec in params.comments:
        updated.append(map_comment(await client.update_comment(spec.id, {"content": spec.content})))

    text = summarize_batch("Updated", "comment", len(updated), [format_comment_line(c) for c in updated])
    return ToolOutput(text=text, structured=_structured(updated))


async def find_comments(client: TodoistClient, params: FindCommentsInput) -> ToolOutput:
    """
    Find comments on a task or project, or fetch one comment by ID.

    Exactly one of task_id, project_id or comment_id is required.
    """
    given = [v for v in (params.task_id, params.project_id, params.comment_id) if v]
    if len(given) != 1:
        raise InvalidArgumentError("Provide exactly one of task_id, project_id or comment_id.")

    if params.comment_id:
        comment = map_comment(await client.get_comment(params.comment_id))
        text = summarize_batch("Found", "comment", 1, [format_comment_line(comment)])
        return ToolOutput(text=text, structured=_structured([comment], next_cursor=None, has_more=False))

    async def fetch(cursor: str | None):
        return await client.get_comments(
            task_id=params.task_id, project_id=params.project_id, cursor=cursor, limit=params.limit
        )

    page = await collect_pages(fetch, params.limit, params.cursor, ApiLimits.COMMENTS_MAX)
    comments = [map_comment(raw) for raw in page.items]

    target = f"task {params.task_id}" if params.task_id else f"project {params.project_id}"
    text = summarize_list(
        SummaryReport(
            subject=f"Comments on {target}",
            count=len(comments),
            limit=params.limit,
            next_cursor=page.next_cursor,
            preview_lines=preview_lines([format_comment_line(c) for c in comments], limit=params.limit),
            next_steps=[f"Use {ToolName.ADD_COMMENTS.value} to reply."] if comments else [],
        )
    )
    return ToolOutput(
        text=text,
        structured=_structured(comments, next_cursor=page.next_cursor, has_more=bool(page.next_cursor)),
    )


add_comments_tool = TodoistTool(
    name=ToolName.ADD_COMMENTS,
    title="Add Comments",
    input_model=AddCommentsInput,
    execute=add_comments,
)

update_comments_tool = TodoistTool(
    name=ToolName.UPDATE_COMMENTS,
    title="Update Comments",
    input_model=UpdateCommentsInput,
    execute=update_comments,
    idempotent=True,
)

find_comments_tool = TodoistTool(
    name=ToolName.FIND_COMMENTS,
    title="Find Comments",
    input_model=FindCommentsInput,
    execute=find_comments,
    read_only=True,
    idempotent=True,
)
