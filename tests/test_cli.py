"""Tests for the todoist command line interface."""

import json

import pytest
from typer.testing import CliRunner

from todoist_mcp import __version__
from todoist_mcp.cli import CliState, app
from todoist_mcp.errors import RemoteApiError
from todoist_mcp.models.output import PageResult

runner = CliRunner()


@pytest.fixture
def invoke(mock_client):
    """Invoke the CLI with the mock client injected."""

    def _invoke(*args: str):
        return runner.invoke(app, list(args), obj=CliState(client=mock_client))

    return _invoke


class TestHelp:
    """Help is available at the root, group and command level without a token."""

    def test_root_help(self, monkeypatch):
        monkeypatch.delenv("TODOIST_API_KEY", raising=False)
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "tasks" in result.stdout
        assert "Examples:" in result.stdout
        assert "$ todoist tasks --help" in result.stdout

    def test_group_help_lists_commands(self):
        result = runner.invoke(app, ["tasks", "--help"])
        assert result.exit_code == 0
        assert "Available Commands:" in result.stdout
        assert "find-by-date     Find tasks by due date range" in result.stdout

    def test_command_help_shows_examples(self):
        result = runner.invoke(app, ["tasks", "update", "--help"])
        assert result.exit_code == 0
        assert "--batch" in result.stdout
        assert "$ todoist tasks update --id 12345 --due remove --assign unassign" in result.stdout
        assert "Clearing values:" in result.stdout

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestTaskCommands:
    """Tests for the tasks command group."""

    def test_add_builds_tool_input(self, invoke, mock_client):
        mock_client.add_task.return_value = {"id": "10", "content": "Ship", "priority": 4}
        result = invoke("tasks", "add", "--content", "Ship", "--priority", "p1", "--labels", "work, release")

        assert result.exit_code == 0, result.output
        body = mock_client.add_task.call_args.args[0]
        assert body == {"content": "Ship", "priority": 4, "labels": ["work", "release"]}
        assert "Added 1 task:" in result.stdout

    def test_add_batch(self, invoke, mock_client):
        mock_client.add_task.side_effect = [{"id": "1", "content": "A"}, {"id": "2", "content": "B"}]
        result = invoke("tasks", "add", "--batch", '[{"content": "A"}, {"content": "B", "due_string": "tomorrow"}]')

        assert result.exit_code == 0, result.output
        assert mock_client.add_task.call_count == 2
        assert mock_client.add_task.call_args.args[0] == {"content": "B", "due_string": "tomorrow"}

    def test_malformed_batch(self, invoke, mock_client):
        result = invoke("tasks", "add", "--batch", "[{content: A}]")
        assert result.exit_code == 1
        assert "Error: Invalid batch" in result.output
        mock_client.add_task.assert_not_called()

    def test_add_requires_content(self, invoke):
        result = invoke("tasks", "add")
        assert result.exit_code == 1
        assert "Error: --content is required" in result.output

    def test_update_remove_due(self, invoke, mock_client):
        mock_client.update_task.return_value = {"id": "1", "content": "A"}
        result = invoke("tasks", "update", "--id", "1", "--due", "remove")
        assert result.exit_code == 0, result.output
        mock_client.update_task.assert_called_once_with("1", {"due_string": "no date"})

    def test_complete_json(self, invoke):
        result = invoke("--json", "tasks", "complete", "--ids", "1,2")
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {"completed": ["1", "2"], "total_count": 2}

    def test_find_without_filters_fails(self, invoke):
        result = invoke("tasks", "find")
        assert result.exit_code == 1
        assert "Error: At least one filter must be provided" in result.output

    def test_find_by_date_requires_start_or_overdue_only(self, invoke, mock_client):
        result = invoke("tasks", "find-by-date")
        assert result.exit_code == 1
        assert "Error: Either start_date must be provided" in result.output
        mock_client.filter_tasks.assert_not_called()

    def test_find_by_date_today(self, invoke, mock_client):
        result = invoke("tasks", "find-by-date", "--start", "today")
        assert result.exit_code == 0, result.output
        assert mock_client.filter_tasks.call_args.args[0] == "(today | overdue) & !assigned to: others"
        assert "Today's tasks + overdue: 0" in result.stdout

    def test_find_by_date_overdue_only(self, invoke, mock_client):
        result = invoke("tasks", "find-by-date", "--overdue", "overdue-only")
        assert result.exit_code == 0, result.output
        assert mock_client.filter_tasks.call_args.args[0] == "overdue & !assigned to: others"

    def test_invalid_choice_is_reported(self, invoke):
        result = invoke("tasks", "find-by-date", "--overdue", "sometimes")
        assert result.exit_code == 1
        assert result.output.startswith("Error:")

    def test_find_completed_requires_since(self, invoke):
        result = invoke("tasks", "find-completed")
        assert result.exit_code == 1
        assert "Error: --since is required" in result.output

    def test_find_completed_requires_until(self, invoke, mock_client):
        result = invoke("tasks", "find-completed", "--since", "2025-01-01")
        assert result.exit_code == 1
        assert "Error: --until is required" in result.output
        mock_client.get_completed_tasks.assert_not_called()

    def test_find_completed_passes_dates_through(self, invoke, mock_client):
        result = invoke("tasks", "find-completed", "--since", "2025-01-01", "--until", "2025-01-07")
        assert result.exit_code == 0, result.output
        kwargs = mock_client.get_completed_tasks.call_args.kwargs
        assert kwargs["since"] == "2024-12-31T22:00:00Z"
        assert kwargs["until"] == "2025-01-07T21:59:59Z"

    def test_remote_error_exits_with_status_one(self, invoke, mock_client):
        mock_client.close_task.side_effect = RemoteApiError(404, "Task not found")
        result = invoke("tasks", "complete", "--ids", "9")
        assert result.exit_code == 1
        assert "Error: Todoist API Error 404: Task not found" in result.output


class TestOtherCommands:
    def test_projects_find(self, invoke):
        result = invoke("projects", "find", "--search", "work")
        assert result.exit_code == 0, result.output
        assert "Projects: 1" in result.stdout

    def test_search_query_argument(self, invoke, mock_client, raw_tasks):
        mock_client.filter_tasks.return_value = PageResult(items=raw_tasks[:1])
        result = invoke("--json", "search", "query", "report")
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["results"][0]["id"] == "task:1"

    def test_assignments_dry_run(self, invoke, mock_client):
        result = invoke("assignments", "manage", "--operation", "unassign", "--task-ids", "1,2", "--dry-run")
        assert result.exit_code == 0, result.output
        mock_client.update_task.assert_not_called()
        assert "Dry run: would unassign 2 tasks." in result.stdout

    def test_delete(self, invoke, mock_client):
        result = invoke("delete", "--type", "section", "--id", "s1")
        assert result.exit_code == 0, result.output
        mock_client.delete_section.assert_called_once_with("s1")

    def test_user(self, invoke):
        result = invoke("user")
        assert result.exit_code == 0, result.output
        assert "# User Information" in result.stdout

    def test_missing_token(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("TODOIST_API_KEY", raising=False)
        monkeypatch.delenv("TODOIST_API_TOKEN", raising=False)
        result = runner.invoke(app, ["user"])
        assert result.exit_code == 1
        assert "TODOIST_API_KEY" in result.output
