"""Shaped projections of Todoist API records."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TaskModel(BaseModel):
    """Normalized view of a Todoist task."""

    model_config = ConfigDict(extra="ignore")

    id: str
    content: str = ""
    description: str = ""
    due_date: str | None = None
    due_string: str | None = None
    recurring: bool = False
    deadline_date: str | None = None
    priority: str = "p4"
    project_id: str | None = None
    section_id: str | None = None
    parent_id: str | None = None
    labels: list[str] = Field(default_factory=list)
    duration: str | None = None
    responsible_uid: str | None = None
    assigned_by_uid: str | None = None
    checked: bool = False
    completed_at: str | None = None


class ProjectModel(BaseModel):
    """Normalized view of a Todoist project."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str = ""
    color: str | None = None
    parent_id: str | None = None
    view_style: str = "list"
    is_favorite: bool = False
    is_shared: bool = False
    is_archived: bool = False
    is_inbox: bool = False
    child_order: int = 0


class SectionModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str = ""
    project_id: str | None = None
    order: int = 0


class CommentModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    content: str = ""
    task_id: str | None = None
    project_id: str | None = None
    posted_at: str | None = None
    posted_uid: str | None = None
    file_attachment: dict[str, Any] | None = None


class CollaboratorModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str = ""
    email: str = ""


class ActivityEventModel(BaseModel):
    """One entry from the activity log."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    object_type: str = ""
    object_id: str = ""
    event_type: str = ""
    event_date: str | None = None
    parent_project_id: str | None = None
    parent_item_id: str | None = None
    initiator_id: str | None = None
    extra_data: dict[str, Any] = Field(default_factory=dict)


class UserModel(BaseModel):
    """The authenticated user and their settings."""

    model_config = ConfigDict(extra="ignore")

    id: str
    full_name: str = ""
    email: str = ""
    timezone: str = "UTC"
    gmt_offset: str = "+00:00"
    start_day: int = 1
    next_week: int = 1
    daily_goal: int = 0
    weekly_goal: int = 0
    premium_status: str = "not_premium"
