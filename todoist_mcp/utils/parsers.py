"""Parsers that shape raw Todoist API records into models."""

import json
import re
from datetime import date
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from todoist_mcp.errors import InvalidArgumentError, MalformedBatchInputError
from todoist_mcp.models.entities import (
    ActivityEventModel,
    CollaboratorModel,
    CommentModel,
    ProjectModel,
    SectionModel,
    TaskModel,
    UserModel,
)

# The API counts priority upwards (4 is the most urgent); the apps show p1..p4.
_API_TO_PRIORITY = {4: "p1", 3: "p2", 2: "p3", 1: "p4"}
_PRIORITY_TO_API = {v: k for k, v in _API_TO_PRIORITY.items()}

_DURATION_RE = re.compile(r"^(?:(?P<hours>\d+(?:\.\d+)?)h)?\s*(?:(?P<minutes>\d+)m)?$")
MAX_DURATION_MINUTES = 24 * 60

_OBJECT_TYPE_NAMES = {"item": "task", "note": "comment", "project": "project"}


def _str_or_none(value: Any) -> str | None:
    return str(value) if value not in (None, "") else None


def priority_to_api(priority: str) -> int:
    """Convert 'p1'..'p4' into the API's 4..1 scale."""
    try:
        return _PRIORITY_TO_API[priority.lower()]
    except KeyError:
        raise InvalidArgumentError(f"Invalid priority '{priority}'. Use p1, p2, p3 or p4.") from None


def parse_duration(value: str) -> int:
    """
    Parse a duration such as "2h", "90m", "1.5h" or "2h30m" into minutes.

    Raises:
        InvalidArgumentError: If the format is unknown or the duration exceeds 24h
    """
    match = _DURATION_RE.match(value.strip().lower())
    if not value.strip() or not match or not (match.group("hours") or match.group("minutes")):
        raise InvalidArgumentError(f"Invalid duration '{value}'. Use formats like '2h', '90m' or '2h30m'.")

    minutes = round(float(match.group("hours") or 0) * 60) + int(match.group("minutes") or 0)
    if minutes <= 0:
        raise InvalidArgumentError(f"Duration '{value}' must be greater than zero.")
    if minutes > MAX_DURATION_MINUTES:
        raise InvalidArgumentError(f"Duration '{value}' exceeds the 24h maximum.")
    return minutes


def format_duration(duration: dict[str, Any] | None) -> str | None:
    """Render an API duration record as "2h30m"."""
    if not duration or not duration.get("amount"):
        return None
    amount = int(duration["amount"])
    if duration.get("unit") == "day":
        return f"{amount}d"
    hours, minutes = divmod(amount, 60)
    if hours and minutes:
        return f"{hours}h{minutes}m"
    if hours:
        return f"{hours}h"
    return f"{minutes}m"


def map_task(raw: dict[str, Any]) -> TaskModel:
    """Shape a raw task (active or completed)."""
    due = raw.get("due") or {}
    deadline = raw.get("deadline") or {}
    return TaskModel(
        id=str(raw.get("id") or raw.get("task_id") or ""),
        content=raw.get("content") or "",
        description=raw.get("description") or "",
        due_date=(due.get("date") or "")[:10] or None,
        due_string=due.get("string") or None,
        recurring=bool(due.get("is_recurring")),
        deadline_date=deadline.get("date") or None,
        priority=_API_TO_PRIORITY.get(raw.get("priority") or 1, "p4"),
        project_id=_str_or_none(raw.get("project_id")),
        section_id=_str_or_none(raw.get("section_id")),
        parent_id=_str_or_none(raw.get("parent_id")),
        labels=list(raw.get("labels") or []),
        duration=format_duration(raw.get("duration")),
        responsible_uid=_str_or_none(raw.get("responsible_uid")),
        assigned_by_uid=_str_or_none(raw.get("assigned_by_uid")),
        checked=bool(raw.get("checked")),
        completed_at=raw.get("completed_at") or None,
    )


def map_tasks(raws: list[dict[str, Any]]) -> list[TaskModel]:
    return [map_task(raw) for raw in raws]


def map_project(raw: dict[str, Any]) -> ProjectModel:
    return ProjectModel(
        id=str(raw.get("id") or ""),
        name=raw.get("name") or "",
        color=raw.get("color"),
        parent_id=_str_or_none(raw.get("parent_id")),
        view_style=raw.get("view_style") or "list",
        is_favorite=bool(raw.get("is_favorite")),
        is_shared=bool(raw.get("is_shared")),
        is_archived=bool(raw.get("is_archived")),
        is_inbox=bool(raw.get("inbox_project") or raw.get("is_inbox_project")),
        child_order=raw.get("child_order") or 0,
    )


def map_section(raw: dict[str, Any]) -> SectionModel:
    return SectionModel(
        id=str(raw.get("id") or ""),
        name=raw.get("name") or "",
        project_id=_str_or_none(raw.get("project_id")),
        order=raw.get("section_order") or raw.get("order") or 0,
    )


def map_comment(raw: dict[str, Any]) -> CommentModel:
    return CommentModel(
        id=str(raw.get("id") or ""),
        content=raw.get("content") or "",
        task_id=_str_or_none(raw.get("item_id") or raw.get("task_id")),
        project_id=_str_or_none(raw.get("project_id")),
        posted_at=raw.get("posted_at"),
        posted_uid=_str_or_none(raw.get("posted_uid")),
        file_attachment=raw.get("file_attachment"),
    )


def map_collaborator(raw: dict[str, Any]) -> CollaboratorModel:
    return CollaboratorModel(
        id=str(raw.get("id") or ""),
        name=raw.get("name") or raw.get("full_name") or "",
        email=raw.get("email") or "",
    )


def map_activity_event(raw: dict[str, Any]) -> ActivityEventModel:
    object_type = raw.get("object_type") or ""
    return ActivityEventModel(
        id=_str_or_none(raw.get("id")),
        object_type=_OBJECT_TYPE_NAMES.get(object_type, object_type),
        object_id=str(raw.get("object_id") or ""),
        event_type=raw.get("event_type") or "",
        event_date=raw.get("event_date"),
        parent_project_id=_str_or_none(raw.get("parent_project_id")),
        parent_item_id=_str_or_none(raw.get("parent_item_id")),
        initiator_id=_str_or_none(raw.get("initiator_id")),
        extra_data=raw.get("extra_data") or {},
    )


def map_user(raw: dict[str, Any]) -> UserModel:
    tz_info = raw.get("tz_info") or {}
    return UserModel(
        id=str(raw.get("id") or ""),
        full_name=raw.get("full_name") or "",
        email=raw.get("email") or "",
        timezone=tz_info.get("timezone") or "UTC",
        gmt_offset=tz_info.get("gmt_string") or "+00:00",
        start_day=raw.get("start_day") or 1,
        next_week=raw.get("next_week") or 1,
        daily_goal=raw.get("daily_goal") or 0,
        weekly_goal=raw.get("weekly_goal") or 0,
        premium_status=raw.get("premium_status") or "not_premium",
    )


def is_overdue(task: TaskModel, today: date) -> bool:
    """Whether an open task's due date lies before today."""
    if task.checked or not task.due_date:
        return False
    try:
        return date.fromisoformat(task.due_date) < today
    except ValueError:
        return False


SpecT = TypeVar("SpecT", bound=BaseModel)


def parse_batch(raw: str, model: type[SpecT], field_name: str = "batch") -> list[SpecT]:
    """
    Parse a JSON array of records and validate each against `model`.

    Raises:
        MalformedBatchInputError: If the text is not JSON, not a non-empty array,
            or any element fails validation
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedBatchInputError(field_name, f"not valid JSON ({e.msg} at position {e.pos})") from e

    if not isinstance(data, list) or not data:
        raise MalformedBatchInputError(field_name, "expected a non-empty JSON array")

    try:
        return TypeAdapter(list[model]).validate_python(data)
    except ValidationError as e:
        problems = "; ".join(
            f"item {'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise MalformedBatchInputError(field_name, problems) from e
