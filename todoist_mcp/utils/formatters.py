"""Formatting utilities for tool output."""

from datetime import date

from todoist_mcp.enums import ToolName
from todoist_mcp.models.entities import (
    ActivityEventModel,
    CollaboratorModel,
    CommentModel,
    ProjectModel,
    SectionModel,
    TaskModel,
)
from todoist_mcp.models.output import SummaryReport
from todoist_mcp.utils.parsers import is_overdue

PREVIEW_LIMIT = 5


def format_task_line(task: TaskModel) -> str:
    """
    Format a task for a preview list.

    Output: "    Write docs • due 2025-01-15 • p1 • @work • id=123"
    """
    parts = [task.content or "(no content)"]
    if task.due_date:
        parts.append(f"due {task.due_date}")
    if task.recurring:
        parts.append("recurring")
    if task.deadline_date:
        parts.append(f"deadline {task.deadline_date}")
    if task.priority != "p4":
        parts.append(task.priority)
    if task.labels:
        parts.append(" ".join(f"@{label}" for label in task.labels))
    if task.responsible_uid:
        parts.append(f"assigned {task.responsible_uid}")
    parts.append(f"id={task.id}")
    return "    " + " • ".join(parts)


def format_project_line(project: ProjectModel) -> str:
    flags = []
    if project.is_inbox:
        flags.append("inbox")
    if project.is_favorite:
        flags.append("★")
    if project.is_shared:
        flags.append("shared")
    if project.view_style != "list":
        flags.append(project.view_style)
    suffix = f" • {' • '.join(flags)}" if flags else ""
    return f"    {project.name}{suffix} • id={project.id}"


def format_section_line(section: SectionModel) -> str:
    return f"    {section.name} • id={section.id}"


def format_comment_line(comment: CommentModel) -> str:
    content = comment.content if len(comment.content) <= 80 else comment.content[:77] + "..."
    attachment = " • 📎" if comment.file_attachment else ""
    posted = f" • {comment.posted_at[:10]}" if comment.posted_at else ""
    return f"    {content}{posted}{attachment} • id={comment.id}"


def format_collaborator_line(user: CollaboratorModel) -> str:
    return f"    {user.name} <{user.email}> • id={user.id}"


def format_activity_line(event: ActivityEventModel) -> str:
    name = event.extra_data.get("content") or event.extra_data.get("name") or ""
    label = f" \"{name}\"" if name else ""
    when = event.event_date[:16].replace("T", " ") if event.event_date else "?"
    by = f" by {event.initiator_id}" if event.initiator_id else ""
    return f"    [{when}] {event.event_type} {event.object_type}{label} (id={event.object_id}){by}"


def preview_lines(lines: list[str], limit: int = PREVIEW_LIMIT) -> list[str]:
    """Keep the first `limit` lines and note how many were left out."""
    if len(lines) <= limit:
        return lines
    return lines[:limit] + [f"    …and {len(lines) - limit} more"]


def preview_tasks(tasks: list[TaskModel], limit: int = PREVIEW_LIMIT) -> list[str]:
    return preview_lines([format_task_line(t) for t in tasks], limit)


def format_next_steps(next_steps: list[str]) -> str:
    if not next_steps:
        return ""
    if len(next_steps) == 1:
        return f"Possible suggested next step: {next_steps[0]}"
    return "Possible suggested next steps:\n" + "\n".join(f"- {step}" for step in next_steps)


def summarize_list(report: SummaryReport) -> str:
    """
    Render a list result as compact text.

    Output:
    Tasks for 2025-01-15: 2 (limit 10), more available.
    Filter: 2025-01-15; labels: @work.
    Preview:
        Write docs • due 2025-01-15 • id=1
    Possible suggested next step: ...
    Pass cursor 'abc' to fetch more results.
    """
    header = f"{report.subject}: {report.count}"
    if report.limit is not None:
        header += f" (limit {report.limit})"
    if report.next_cursor:
        header += ", more available"
    lines = [header + "."]

    if report.filter_hints:
        lines.append(f"Filter: {'; '.join(report.filter_hints)}.")

    if report.preview_lines:
        lines.append("Preview:")
        lines.extend(report.preview_lines)

    if report.count == 0 and report.zero_reason_hints:
        lines.append(f"No results. {'; '.join(report.zero_reason_hints)}.")

    next_steps = format_next_steps(report.next_steps)
    if next_steps:
        lines.append(next_steps)

    if report.next_cursor:
        lines.append(f"Pass cursor '{report.next_cursor}' to fetch more results.")

    return "\n".join(lines)


def summarize_batch(
    action: str,
    subject: str,
    count: int,
    preview: list[str] | None = None,
    next_steps: list[str] | None = None,
) -> str:
    """
    Render the result of a batch write.

    Output:
    Added 2 tasks:
        Write docs • id=1
        Review PR • id=2
    Possible suggested next step: ...
    """
    noun = subject if count == 1 else f"{subject}s"
    lines = [f"{action} {count} {noun}" + (":" if preview else ".")]
    lines.extend(preview_lines(preview or []))
    steps = format_next_steps(next_steps or [])
    if steps:
        lines.append(steps)
    return "\n".join(lines)


def task_next_steps(
    operation: str,
    tasks: list[TaskModel],
    today: date,
    has_today: bool = False,
    has_overdue: bool = False,
) -> list[str]:
    """Contextual suggestions after tasks were listed, added, updated or completed."""
    steps: list[str] = []
    if not tasks:
        return steps

    if operation == "listed":
        if has_overdue or any(is_overdue(t, today) for t in tasks):
            steps.append(f"Use {ToolName.UPDATE_TASKS.value} to reschedule overdue tasks.")
        if has_today:
            steps.append(f"Use {ToolName.COMPLETE_TASKS.value} to mark today's finished tasks done.")
        steps.append(f"Use {ToolName.FIND_COMPLETED_TASKS.value} to review what was already done.")
    elif operation == "added":
        steps.append(f"Use {ToolName.FIND_TASKS_BY_DATE.value} with startDate 'today' to see today's plan.")
        if any(not t.due_date for t in tasks):
            steps.append(f"Use {ToolName.UPDATE_TASKS.value} to schedule tasks added without a due date.")
    elif operation == "updated":
        steps.append(f"Use {ToolName.FIND_TASKS.value} to verify the changes.")
    elif operation == "completed":
        steps.append(f"Use {ToolName.FIND_COMPLETED_TASKS.value} to review completed work.")

    if any(t.recurring for t in tasks) and operation in ("completed", "listed"):
        steps.append("Recurring tasks will automatically create new instances.")
    return steps
