"""Tests for the task tools."""

import json

import pytest
from pydantic import ValidationError

from todoist_mcp.enums import ResponseFormat
from todoist_mcp.errors import InvalidArgumentError, RemoteApiError, UserNotFoundError
from todoist_mcp.models.inputs import (
    AddTasksInput,
    CompleteTasksInput,
    FindCompletedTasksInput,
    FindTasksByDateInput,
    FindTasksInput,
    UpdateTasksInput,
)
from todoist_mcp.models.output import PageResult
from todoist_mcp.tools.tasks import (
    add_tasks_tool,
    complete_tasks_tool,
    find_completed_tasks_tool,
    find_tasks_by_date_tool,
    find_tasks_tool,
    local_day_bounds_to_utc,
    update_tasks_tool,
)


class TestTaskInputModels:
    """Tests for task input validation."""

    def test_add_tasks_requires_content(self):
        with pytest.raises(ValidationError):
            AddTasksInput(tasks=[{"description": "no content"}])

    def test_add_tasks_batch_limit(self):
        with pytest.raises(ValidationError):
            AddTasksInput(tasks=[{"content": f"t{i}"} for i in range(26)])

    def test_update_allows_single_destination(self):
        with pytest.raises(ValidationError, match="Only one of"):
            UpdateTasksInput(tasks=[{"id": "1", "project_id": "p1", "section_id": "s1"}])

    def test_complete_tasks_strips_ids(self):
        params = CompleteTasksInput(ids=[" 1 ", "", "2"])
        assert params.ids == ["1", "2"]

    def test_find_tasks_by_date_start_pattern(self):
        assert FindTasksByDateInput(start_date="today").start_date == "today"
        with pytest.raises(ValidationError):
            FindTasksByDateInput(start_date="tomorrow")

    def test_find_tasks_limit_bounds(self):
        with pytest.raises(ValidationError):
            FindTasksInput(search_text="x", limit=101)


class TestAddTasks:
    """Tests for add_tasks."""

    @pytest.mark.asyncio
    async def test_builds_api_body(self, mock_client):
        mock_client.add_task.return_value = {"id": "10", "content": "Ship", "priority": 4}
        params = {
            "tasks": [
                {
                    "content": "Ship",
                    "priority": "p1",
                    "duration": "2h30m",
                    "labels": ["work"],
                    "due_string": "tomorrow",
                    "responsible_user": "john",
                }
            ]
        }
        output = await add_tasks_tool.run(mock_client, params)

        body = mock_client.add_task.call_args.args[0]
        assert body == {
            "content": "Ship",
            "due_string": "tomorrow",
            "duration": 150,
            "duration_unit": "minute",
            "priority": 4,
            "labels": ["work"],
            "assignee_id": "1",
        }
        assert output.text.startswith("Added 1 task:")
        assert output.structured["tasks"][0]["priority"] == "p1"

    @pytest.mark.asyncio
    async def test_resolves_each_assignee_once(self, mock_client):
        mock_client.add_task.side_effect = [{"id": "1", "content": "A"}, {"id": "2", "content": "B"}]
        await add_tasks_tool.run(
            mock_client,
            {"tasks": [{"content": "A", "responsible_user": "john"}, {"content": "B", "responsible_user": "john"}]},
        )
        assert mock_client.get_user.call_count == 1

    @pytest.mark.asyncio
    async def test_unknown_assignee_creates_nothing(self, mock_client):
        with pytest.raises(UserNotFoundError):
            await add_tasks_tool.run(
                mock_client,
                {"tasks": [{"content": "A"}, {"content": "B", "responsible_user": "nobody"}]},
            )
        mock_client.add_task.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_later_item_creates_nothing(self, mock_client):
        with pytest.raises(InvalidArgumentError, match="duration"):
            await add_tasks_tool.run(mock_client, {"tasks": [{"content": "ok"}, {"content": "bad", "duration": "abc"}]})
        mock_client.add_task.assert_not_called()

    @pytest.mark.asyncio
    async def test_remote_failure_stops_batch(self, mock_client):
        mock_client.add_task.side_effect = [{"id": "1", "content": "A"}, RemoteApiError(500, "boom")]
        with pytest.raises(RemoteApiError):
            await add_tasks_tool.run(mock_client, {"tasks": [{"content": "A"}, {"content": "B"}, {"content": "C"}]})
        assert mock_client.add_task.call_count == 2

    @pytest.mark.asyncio
    async def test_nonexistent_deadline(self, mock_client):
        with pytest.raises(InvalidArgumentError, match="deadline date"):
            await add_tasks_tool.run(mock_client, {"tasks": [{"content": "A", "deadline_date": "2025-02-30"}]})
        mock_client.add_task.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_duration(self, mock_client):
        with pytest.raises(InvalidArgumentError, match="duration"):
            await add_tasks_tool.run(mock_client, {"tasks": [{"content": "A", "duration": "forever"}]})
        mock_client.add_task.assert_not_called()


class TestUpdateTasks:
    """Tests for update_tasks and the clearing convention."""

    @pytest.mark.asyncio
    async def test_clearing_values(self, mock_client):
        mock_client.update_task.return_value = {"id": "1", "content": "A"}
        params = {
            "tasks": [
                {
                    "id": "1",
                    "due_string": "remove",
                    "deadline_date": "remove",
                    "duration": "remove",
                    "responsible_user": "unassign",
                }
            ]
        }
        await update_tasks_tool.run(mock_client, params)

        body = mock_client.update_task.call_args.args[1]
        assert body == {
            "due_string": "no date",
            "deadline_date": None,
            "duration": None,
            "duration_unit": None,
            "assignee_id": None,
        }
        mock_client.get_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_omitted_fields_are_unchanged(self, mock_client):
        mock_client.update_task.return_value = {"id": "1", "content": "Renamed"}
        await update_tasks_tool.run(mock_client, {"tasks": [{"id": "1", "content": "Renamed"}]})
        assert mock_client.update_task.call_args.args == ("1", {"content": "Renamed"})

    @pytest.mark.asyncio
    async def test_move_only_fetches_task(self, mock_client):
        mock_client.get_task.return_value = {"id": "1", "content": "A", "project_id": "p2"}
        output = await update_tasks_tool.run(mock_client, {"tasks": [{"id": "1", "project_id": "p2"}]})

        mock_client.move_task.assert_called_once_with("1", project_id="p2", section_id=None, parent_id=None)
        mock_client.update_task.assert_not_called()
        assert output.structured["tasks"][0]["project_id"] == "p2"

    @pytest.mark.asyncio
    async def test_invalid_deadline(self, mock_client):
        with pytest.raises(InvalidArgumentError):
            await update_tasks_tool.run(mock_client, {"tasks": [{"id": "1", "deadline_date": "next week"}]})
        mock_client.update_task.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_field_prevents_move(self, mock_client):
        with pytest.raises(InvalidArgumentError, match="exceeds the 24h maximum"):
            await update_tasks_tool.run(mock_client, {"tasks": [{"id": "1", "project_id": "p2", "duration": "99h"}]})
        mock_client.move_task.assert_not_called()
        mock_client.update_task.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_assignee_later_in_batch_writes_nothing(self, mock_client):
        with pytest.raises(UserNotFoundError):
            await update_tasks_tool.run(
                mock_client,
                {
                    "tasks": [
                        {"id": "1", "section_id": "s2", "content": "A"},
                        {"id": "2", "responsible_user": "nobody"},
                    ]
                },
            )
        mock_client.move_task.assert_not_called()
        mock_client.update_task.assert_not_called()

    @pytest.mark.asyncio
    async def test_assigns_resolved_user(self, mock_client):
        mock_client.update_task.return_value = {"id": "1", "content": "A", "responsible_uid": "200"}
        await update_tasks_tool.run(mock_client, {"tasks": [{"id": "1", "responsible_user": "grace"}]})
        assert mock_client.update_task.call_args.args == ("1", {"assignee_id": "200"})


class TestCompleteTasks:
    @pytest.mark.asyncio
    async def test_closes_each_task(self, mock_client):
        output = await complete_tasks_tool.run(mock_client, {"ids": ["1", "2"]})
        assert [c.args[0] for c in mock_client.close_task.call_args_list] == ["1", "2"]
        assert output.text.startswith("Completed 2 tasks:")
        assert output.structured == {"completed": ["1", "2"], "total_count": 2}


class TestFindTasks:
    """Tests for find_tasks."""

    @pytest.mark.asyncio
    async def test_requires_a_filter(self, mock_client):
        with pytest.raises(InvalidArgumentError, match="At least one filter"):
            await find_tasks_tool.run(mock_client, FindTasksInput())
        mock_client.filter_tasks.assert_not_called()

    @pytest.mark.asyncio
    async def test_search_uses_filter_endpoint(self, mock_client, raw_tasks):
        mock_client.filter_tasks.return_value = PageResult(items=raw_tasks[:1], next_cursor="more")
        params = FindTasksInput(search_text="report", labels=["work", "home"], limit=1)
        output = await find_tasks_tool.run(mock_client, params)

        query = mock_client.filter_tasks.call_args.args[0]
        assert query == "search: report & !assigned to: others & (@work | @home)"
        assert output.text.startswith('Search results for "report": 1 (limit 1), more available.')
        assert output.structured["next_cursor"] == "more"
        assert output.structured["has_more"] is True

    @pytest.mark.asyncio
    async def test_container_filters_locally(self, mock_client, raw_tasks):
        mock_client.get_tasks.return_value = PageResult(items=raw_tasks)
        output = await find_tasks_tool.run(mock_client, FindTasksInput(project_id="p1"))

        mock_client.filter_tasks.assert_not_called()
        ids = [t["id"] for t in output.structured["tasks"]]
        # task 3 belongs to someone else; the default keeps unassigned tasks and mine
        assert ids == ["1", "2"]

    @pytest.mark.asyncio
    async def test_container_with_all_assignees(self, mock_client, raw_tasks):
        mock_client.get_tasks.return_value = PageResult(items=raw_tasks)
        output = await find_tasks_tool.run(
            mock_client, FindTasksInput(project_id="p1", responsible_user_filtering="all", labels=["urgent"])
        )
        assert [t["id"] for t in output.structured["tasks"]] == ["3"]
        mock_client.get_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_zero_results_hint(self, mock_client):
        output = await find_tasks_tool.run(mock_client, FindTasksInput(search_text="nothing"))
        assert "No results. Try a shorter or different search term" in output.text


class TestFindTasksByDate:
    """Tests for find_tasks_by_date."""

    @pytest.mark.asyncio
    async def test_requires_start_or_overdue_only(self, mock_client):
        with pytest.raises(InvalidArgumentError):
            await find_tasks_by_date_tool.run(mock_client, FindTasksByDateInput())

    @pytest.mark.asyncio
    async def test_nonexistent_start_date_fails_before_any_request(self, mock_client):
        params = FindTasksByDateInput(start_date="2025-13-45", responsible_user="john")
        with pytest.raises(InvalidArgumentError, match="start date"):
            await find_tasks_by_date_tool.run(mock_client, params)
        mock_client.get_user.assert_not_called()
        mock_client.get_projects.assert_not_called()
        mock_client.filter_tasks.assert_not_called()

    @pytest.mark.asyncio
    async def test_date_range_query(self, mock_client, raw_tasks):
        mock_client.filter_tasks.return_value = PageResult(items=raw_tasks[:2])
        params = FindTasksByDateInput(start_date="2025-01-15", days_count=7, response_format=ResponseFormat.JSON)
        output = await find_tasks_by_date_tool.run(mock_client, params)

        query = mock_client.filter_tasks.call_args.args[0]
        assert query == "(due after: 2025-01-15 | due: 2025-01-15) & due before: 2025-01-22 & !assigned to: others"
        data = json.loads(output.render(params.response_format))
        assert data["total_count"] == 2
        assert data["applied_filters"]["start_date"] == "2025-01-15"
        assert output.text.startswith("Tasks for 2025-01-15: 2 (limit 10).")

    @pytest.mark.asyncio
    async def test_walks_pages_up_to_limit(self, mock_client):
        pages = [
            PageResult(items=[{"id": str(i), "content": f"t{i}"} for i in range(6)], next_cursor="c1"),
            PageResult(items=[{"id": str(i), "content": f"t{i}"} for i in range(6, 12)], next_cursor="c2"),
        ]
        mock_client.filter_tasks.side_effect = pages
        output = await find_tasks_by_date_tool.run(mock_client, FindTasksByDateInput(start_date="today", limit=10))

        assert mock_client.filter_tasks.call_count == 2
        assert len(output.structured["tasks"]) == 10
        assert output.structured["next_cursor"] == "c2"

    @pytest.mark.asyncio
    async def test_overdue_only_zero_results(self, mock_client):
        output = await find_tasks_by_date_tool.run(mock_client, {"overdue_option": "overdue-only"})
        assert output.text.startswith("Overdue tasks: 0")
        assert "Great job! No overdue tasks" in output.text


class TestFindCompletedTasks:
    """Tests for find_completed_tasks."""

    def test_local_day_bounds(self):
        assert local_day_bounds_to_utc("2025-01-01", "2025-01-01", "+02:00") == (
            "2024-12-31T22:00:00Z",
            "2025-01-01T21:59:59Z",
        )
        assert local_day_bounds_to_utc("2025-01-01", "2025-01-02", "-05:00") == (
            "2025-01-01T05:00:00Z",
            "2025-01-03T04:59:59Z",
        )

    @pytest.mark.asyncio
    async def test_converts_dates_and_builds_filter(self, mock_client, raw_tasks):
        mock_client.get_completed_tasks.return_value = PageResult(items=raw_tasks[1:2])
        params = FindCompletedTasksInput(
            since="2025-01-01", until="2025-01-07", labels=["work", "home"], responsible_user="john"
        )
        output = await find_completed_tasks_tool.run(mock_client, params)

        kwargs = mock_client.get_completed_tasks.call_args.kwargs
        assert kwargs["by"] == "completion"
        assert kwargs["since"] == "2024-12-31T22:00:00Z"
        assert kwargs["until"] == "2025-01-07T21:59:59Z"
        assert kwargs["filter_query"] == "(@work | @home) & assigned to: john@example.com"
        assert output.text.startswith("Completed tasks (by completed date): 1 (limit 50).")
        assert "Recurring tasks will automatically create new instances." in output.text

    @pytest.mark.asyncio
    async def test_until_before_since(self, mock_client):
        with pytest.raises(InvalidArgumentError):
            await find_completed_tasks_tool.run(mock_client, {"since": "2025-01-07", "until": "2025-01-01"})
        mock_client.get_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_nonexistent_since_fails_before_any_request(self, mock_client):
        with pytest.raises(InvalidArgumentError, match="since date"):
            await find_completed_tasks_tool.run(
                mock_client, {"since": "2025-02-30", "until": "2025-03-02", "responsible_user": "john"}
            )
        mock_client.get_user.assert_not_called()
        mock_client.get_projects.assert_not_called()
        mock_client.get_completed_tasks.assert_not_called()

    @pytest.mark.asyncio
    async def test_single_label_and_assignee_filter(self, mock_client):
        await find_completed_tasks_tool.run(
            mock_client,
            {"since": "2025-01-01", "until": "2025-01-01", "labels": ["work"], "responsible_user": "john"},
        )
        kwargs = mock_client.get_completed_tasks.call_args.kwargs
        assert kwargs["filter_query"] == "(@work) & assigned to: john@example.com"

    @pytest.mark.asyncio
    async def test_assignee_only_filter(self, mock_client):
        await find_completed_tasks_tool.run(
            mock_client, {"since": "2025-01-01", "until": "2025-01-01", "responsible_user": "john"}
        )
        assert mock_client.get_completed_tasks.call_args.kwargs["filter_query"] == "assigned to: john@example.com"

    @pytest.mark.asyncio
    async def test_zero_results_by_due(self, mock_client):
        mock_client.get_completed_tasks.return_value = PageResult(items=[])
        output = await find_completed_tasks_tool.run(
            mock_client, {"since": "2025-01-01", "until": "2025-01-07", "get_by": "due", "project_id": "p1"}
        )
        assert "Try removing project/section/parent filters" in output.text
        assert 'Try switching to "completion" date instead' in output.text
