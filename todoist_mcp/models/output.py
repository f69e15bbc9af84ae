"""Result and intermediate models shared by every tool."""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from todoist_mcp.enums import ResponseFormat


class PageRequest(BaseModel):
    """One paged request; limit is clamped into [1, max_limit]."""

    cursor: str | None = None
    max_limit: int = 200
    limit: int = 50

    @field_validator("limit")
    @classmethod
    def clamp_limit(cls, v: int, info: ValidationInfo) -> int:
        max_limit = info.data.get("max_limit", 200)
        return max(1, min(v, max_limit))


class PageResult(BaseModel):
    """A page of raw records. A missing next_cursor means the source is exhausted."""

    items: list[Any] = Field(default_factory=list)
    next_cursor: str | None = None


class ResolvedUser(BaseModel):
    """A responsible-user identifier resolved against known collaborators."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    email: str
    name: str = ""


class SummaryReport(BaseModel):
    """Everything summarize_list needs to render a list result."""

    subject: str
    count: int
    limit: int | None = None
    next_cursor: str | None = None
    filter_hints: list[str] = Field(default_factory=list)
    preview_lines: list[str] = Field(default_factory=list)
    zero_reason_hints: list[str] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list)


class ToolOutput(BaseModel):
    """Dual result of an operation: human text plus structured content."""

    text: str
    structured: dict[str, Any] = Field(default_factory=dict)

    def render(self, response_format: ResponseFormat = ResponseFormat.MARKDOWN) -> str:
        if response_format == ResponseFormat.JSON:
            return json.dumps(self.structured, indent=2)
        return self.text


class ChangeKind(str, Enum):
    UNCHANGED = "unchanged"
    CLEAR = "clear"
    SET = "set"


class FieldChange(BaseModel):
    """Explicit tri-state for clearable update fields."""

    model_config = ConfigDict(frozen=True)

    kind: ChangeKind = ChangeKind.UNCHANGED
    value: Any = None

    @classmethod
    def parse(cls, raw: str | None, clear_token: str = "remove") -> "FieldChange":
        """
        Read the single accepted wire form.

        None means unchanged, the clear token (case-insensitive) means clear,
        and anything else is a new value.
        """
        if raw is None:
            return cls()
        if raw.strip().lower() == clear_token:
            return cls(kind=ChangeKind.CLEAR)
        return cls(kind=ChangeKind.SET, value=raw)

    @property
    def is_set(self) -> bool:
        return self.kind == ChangeKind.SET

    @property
    def is_clear(self) -> bool:
        return self.kind == ChangeKind.CLEAR
