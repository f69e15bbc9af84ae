"""Tests for parsers, shaping and update-field conventions."""

from datetime import date

import pytest

from todoist_mcp.errors import InvalidArgumentError, MalformedBatchInputError
from todoist_mcp.models.inputs import TaskSpec
from todoist_mcp.models.output import ChangeKind, FieldChange
from todoist_mcp.utils.parsers import (
    format_duration,
    is_overdue,
    map_activity_event,
    map_comment,
    map_project,
    map_task,
    map_user,
    parse_batch,
    parse_duration,
    priority_to_api,
)


class TestPriority:
    def test_priority_to_api(self):
        assert priority_to_api("p1") == 4
        assert priority_to_api("p4") == 1
        assert priority_to_api("P2") == 3

    def test_invalid_priority(self):
        with pytest.raises(InvalidArgumentError):
            priority_to_api("p5")


class TestDuration:
    """Tests for duration strings."""

    @pytest.mark.parametrize(
        "value,minutes",
        [("2h", 120), ("90m", 90), ("2h30m", 150), ("1.5h", 90), ("24h", 1440)],
    )
    def test_parse_duration(self, value, minutes):
        assert parse_duration(value) == minutes

    @pytest.mark.parametrize("value", ["", "abc", "25h", "0m", "2 hours"])
    def test_invalid_duration(self, value):
        with pytest.raises(InvalidArgumentError):
            parse_duration(value)

    def test_format_duration(self):
        assert format_duration({"amount": 150, "unit": "minute"}) == "2h30m"
        assert format_duration({"amount": 60, "unit": "minute"}) == "1h"
        assert format_duration({"amount": 45, "unit": "minute"}) == "45m"
        assert format_duration({"amount": 2, "unit": "day"}) == "2d"
        assert format_duration(None) is None


class TestMapping:
    """Tests for shaping raw records."""

    def test_map_task(self, raw_tasks):
        task = map_task(raw_tasks[1])
        assert task.id == "2"
        assert task.priority == "p4"
        assert task.recurring is True
        assert task.due_date == "2025-01-16"
        assert task.responsible_uid == "100"

    def test_map_task_truncates_datetime_due(self):
        task = map_task({"id": 7, "content": "Call", "due": {"date": "2025-01-15T10:00:00"}})
        assert task.id == "7"
        assert task.due_date == "2025-01-15"

    def test_map_task_ignores_unknown_fields(self):
        task = map_task({"id": "1", "content": "x", "day_order": 3, "v2_id": "abc"})
        assert not hasattr(task, "day_order")

    def test_map_project_inbox(self, raw_projects):
        assert map_project(raw_projects[0]).is_inbox is True
        assert map_project(raw_projects[2]).parent_id == "p1"

    def test_map_comment_item_id(self):
        comment = map_comment({"id": "c1", "content": "hi", "item_id": "42"})
        assert comment.task_id == "42"

    def test_map_activity_event_renames_object_types(self):
        event = map_activity_event({"object_type": "item", "object_id": "1", "event_type": "completed"})
        assert event.object_type == "task"
        event = map_activity_event({"object_type": "note", "object_id": "2", "event_type": "added"})
        assert event.object_type == "comment"

    def test_map_user(self, raw_user):
        user = map_user(raw_user)
        assert user.gmt_offset == "+02:00"
        assert user.timezone == "Europe/Berlin"

    def test_is_overdue(self, raw_tasks):
        task = map_task(raw_tasks[0])
        assert is_overdue(task, date(2025, 1, 16)) is True
        assert is_overdue(task, date(2025, 1, 15)) is False
        assert is_overdue(map_task(raw_tasks[2]), date(2025, 1, 16)) is False


class TestParseBatch:
    """Tests for JSON batch input."""

    def test_valid_batch(self):
        specs = parse_batch('[{"content": "A"}, {"content": "B", "priority": "p1"}]', TaskSpec)
        assert [s.content for s in specs] == ["A", "B"]
        assert specs[1].priority.value == "p1"

    def test_not_json(self):
        with pytest.raises(MalformedBatchInputError, match="Invalid batch: not valid JSON"):
            parse_batch("[{content: A}]", TaskSpec)

    def test_not_an_array(self):
        with pytest.raises(MalformedBatchInputError, match="non-empty JSON array"):
            parse_batch('{"content": "A"}', TaskSpec)
        with pytest.raises(MalformedBatchInputError):
            parse_batch("[]", TaskSpec)

    def test_element_fails_validation(self):
        with pytest.raises(MalformedBatchInputError) as exc_info:
            parse_batch('[{"content": "A"}, {"description": "no content"}]', TaskSpec, field_name="tasks")
        assert exc_info.value.field_name == "tasks"
        assert "1.content" in str(exc_info.value)


class TestFieldChange:
    """Tests for the clearing convention."""

    def test_absent_is_unchanged(self):
        change = FieldChange.parse(None)
        assert change.kind == ChangeKind.UNCHANGED
        assert not change.is_set and not change.is_clear

    def test_remove_clears(self):
        assert FieldChange.parse("remove").is_clear
        assert FieldChange.parse(" REMOVE ").is_clear

    def test_value_sets(self):
        change = FieldChange.parse("tomorrow")
        assert change.is_set
        assert change.value == "tomorrow"

    def test_custom_clear_token(self):
        assert FieldChange.parse("unassign", clear_token="unassign").is_clear
        assert FieldChange.parse("remove", clear_token="unassign").is_set
