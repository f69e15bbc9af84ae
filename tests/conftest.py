"""Pytest configuration and fixtures for todoist-mcp tests."""

from unittest.mock import AsyncMock

import pytest

from todoist_mcp.client import TodoistClient
from todoist_mcp.models.output import PageResult


@pytest.fixture
def raw_user():
    """The authenticated user as returned by GET /user."""
    return {
        "id": "100",
        "full_name": "Ada Lovelace",
        "email": "ada@example.com",
        "tz_info": {"timezone": "Europe/Berlin", "gmt_string": "+02:00"},
        "start_day": 1,
        "next_week": 1,
        "daily_goal": 5,
        "weekly_goal": 25,
        "premium_status": "current_personal_plan",
    }


@pytest.fixture
def raw_tasks():
    """A list of raw API tasks."""
    return [
        {
            "id": "1",
            "content": "Write report",
            "description": "Quarterly numbers",
            "priority": 4,
            "project_id": "p1",
            "labels": ["work"],
            "due": {"date": "2025-01-15", "string": "Jan 15", "is_recurring": False},
            "responsible_uid": None,
        },
        {
            "id": "2",
            "content": "Water plants",
            "priority": 1,
            "project_id": "p1",
            "labels": [],
            "due": {"date": "2025-01-16", "string": "every day", "is_recurring": True},
            "responsible_uid": "100",
        },
        {
            "id": "3",
            "content": "Review PR",
            "priority": 2,
            "project_id": "p1",
            "labels": ["work", "urgent"],
            "responsible_uid": "200",
        },
    ]


@pytest.fixture
def raw_projects():
    return [
        {"id": "p0", "name": "Inbox", "inbox_project": True, "child_order": 0},
        {"id": "p1", "name": "Work", "is_shared": True, "child_order": 1},
        {"id": "p2", "name": "Reports", "parent_id": "p1", "child_order": 0},
    ]


@pytest.fixture
def raw_collaborators():
    return [
        {"id": "1", "name": "John Doe", "email": "john@example.com"},
        {"id": "200", "name": "Grace Hopper", "email": "grace@example.com"},
    ]


@pytest.fixture
def mock_client(raw_user, raw_projects, raw_collaborators):
    """An AsyncMock TodoistClient with a user, projects and collaborators."""
    client = AsyncMock(spec=TodoistClient)
    client.get_user.return_value = raw_user
    client.get_projects.return_value = PageResult(items=raw_projects)
    client.get_project_collaborators.return_value = PageResult(items=raw_collaborators)
    client.get_tasks.return_value = PageResult(items=[])
    client.filter_tasks.return_value = PageResult(items=[])
    client.get_completed_tasks.return_value = PageResult(items=[])
    return client
