"""Tests for response shaping."""

from datetime import date

from todoist_mcp.enums import OverdueOption
from todoist_mcp.models.entities import TaskModel
from todoist_mcp.models.inputs import FindTasksByDateInput
from todoist_mcp.models.output import SummaryReport
from todoist_mcp.tools.tasks import describe_tasks_by_date
from todoist_mcp.utils.formatters import (
    format_next_steps,
    format_task_line,
    preview_lines,
    summarize_batch,
    summarize_list,
    task_next_steps,
)

TODAY = date(2025, 1, 15)


class TestFormatTaskLine:
    def test_minimal_task(self):
        assert format_task_line(TaskModel(id="1", content="Buy milk")) == "    Buy milk • id=1"

    def test_full_task(self):
        task = TaskModel(
            id="9",
            content="Ship",
            due_date="2025-01-15",
            recurring=True,
            deadline_date="2025-01-20",
            priority="p1",
            labels=["work", "release"],
            responsible_uid="200",
        )
        line = format_task_line(task)
        assert line == (
            "    Ship • due 2025-01-15 • recurring • deadline 2025-01-20 • p1 • @work @release • assigned 200 • id=9"
        )


class TestSummarizeList:
    """Tests for list summaries."""

    def test_header_and_cursor(self):
        report = SummaryReport(
            subject="Tasks for 2025-01-15",
            count=2,
            limit=10,
            next_cursor="abc",
            filter_hints=["2025-01-15", "labels: @work"],
            preview_lines=["    A • id=1", "    B • id=2"],
        )
        text = summarize_list(report)
        lines = text.splitlines()
        assert lines[0] == "Tasks for 2025-01-15: 2 (limit 10), more available."
        assert lines[1] == "Filter: 2025-01-15; labels: @work."
        assert lines[2] == "Preview:"
        assert lines[-1] == "Pass cursor 'abc' to fetch more results."

    def test_zero_results_show_hints(self):
        report = SummaryReport(subject="Overdue tasks", count=0, limit=10, zero_reason_hints=["Great job! No overdue tasks"])
        text = summarize_list(report)
        assert "No results. Great job! No overdue tasks." in text
        assert "more available" not in text

    def test_hints_hidden_when_results_exist(self):
        report = SummaryReport(subject="Tasks", count=1, zero_reason_hints=["Try something"])
        assert "No results" not in summarize_list(report)

    def test_idempotent(self):
        report = SummaryReport(subject="Tasks", count=3, limit=5, filter_hints=["today"], next_steps=["Do it."])
        assert summarize_list(report) == summarize_list(report)


class TestPreviewAndSteps:
    def test_preview_truncates(self):
        lines = [f"    t{i}" for i in range(8)]
        preview = preview_lines(lines)
        assert len(preview) == 6
        assert preview[-1] == "    …and 3 more"

    def test_next_steps_singular_and_plural(self):
        assert format_next_steps([]) == ""
        assert format_next_steps(["Do A."]) == "Possible suggested next step: Do A."
        assert format_next_steps(["Do A.", "Do B."]) == "Possible suggested next steps:\n- Do A.\n- Do B."

    def test_recurring_note_for_listed_tasks(self):
        tasks = [TaskModel(id="1", content="Daily", due_date="2025-01-15", recurring=True)]
        steps = task_next_steps("listed", tasks, TODAY)
        assert "Recurring tasks will automatically create new instances." in steps

    def test_overdue_suggests_rescheduling(self):
        tasks = [TaskModel(id="1", content="Late", due_date="2025-01-10")]
        steps = task_next_steps("listed", tasks, TODAY)
        assert any("reschedule" in step for step in steps)

    def test_no_steps_without_tasks(self):
        assert task_next_steps("listed", [], TODAY) == []

    def test_summarize_batch(self):
        text = summarize_batch("Added", "task", 2, ["    A • id=1", "    B • id=2"], ["Check it."])
        assert text.splitlines()[0] == "Added 2 tasks:"
        assert text.endswith("Possible suggested next step: Check it.")
        assert summarize_batch("Completed", "task", 1) == "Completed 1 task."


class TestTasksByDateReport:
    """Tests for date-query subjects and hints."""

    def test_overdue_only_zero_hint(self):
        params = FindTasksByDateInput(overdue_option=OverdueOption.OVERDUE_ONLY)
        report = describe_tasks_by_date(params, [], None, None, TODAY)
        assert report.subject == "Overdue tasks"
        assert report.zero_reason_hints == ["Great job! No overdue tasks"]

    def test_today_zero_hint(self):
        params = FindTasksByDateInput(start_date="today")
        report = describe_tasks_by_date(params, [], None, None, TODAY)
        assert report.subject == "Today's tasks + overdue"
        assert report.zero_reason_hints == ["Great job! No tasks for today or overdue"]

    def test_today_excluding_overdue(self):
        params = FindTasksByDateInput(start_date="today", overdue_option=OverdueOption.EXCLUDE_OVERDUE, days_count=3)
        report = describe_tasks_by_date(params, [], None, None, TODAY)
        assert report.subject == "Today's tasks"
        assert report.filter_hints == ["today + 2 more days"]
        assert report.zero_reason_hints == ["Great job! No tasks for today"]

    def test_explicit_date_hints_differ_from_overdue_only(self):
        params = FindTasksByDateInput(start_date="2025-01-20", days_count=7)
        report = describe_tasks_by_date(params, [], None, None, TODAY)
        assert report.subject == "Tasks for 2025-01-20"
        assert report.filter_hints == ["2025-01-20 to 2025-01-27"]
        assert "Expand date range with larger 'days_count'" in report.zero_reason_hints
        assert "Check today's tasks with start_date='today'" in report.zero_reason_hints

    def test_assignee_in_subject(self):
        params = FindTasksByDateInput(start_date="2025-01-20", responsible_user="john")
        report = describe_tasks_by_date(params, [], None, "john@example.com", TODAY)
        assert report.subject == "Tasks for 2025-01-20 assigned to john@example.com"
        assert "assigned to: john@example.com" in report.filter_hints
