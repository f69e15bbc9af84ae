"""
Todoist API client for the unified v1 REST endpoints.

Base URL: https://api.todoist.com/api/v1
Documentation: https://developer.todoist.com/api/v1/
"""

import logging
from typing import Any

import httpx

from todoist_mcp.config import DEFAULT_BASE_URL
from todoist_mcp.errors import RemoteApiError
from todoist_mcp.models.output import PageResult

logger = logging.getLogger(__name__)


def _compact(params: dict[str, Any]) -> dict[str, Any]:
    """Drop absent query parameters."""
    return {key: value for key, value in params.items() if value is not None}


class TodoistClient:
    """
    Async client for the Todoist API.

    The client is the only component that talks HTTP. It returns raw JSON
    records; shaping happens in todoist_mcp.utils.parsers.

    Endpoints implemented:
    - Tasks: list, filter, get, add, update, move, close, delete, completed
    - Projects: list, get, add, update, delete, collaborators
    - Sections: list, add, update, delete
    - Comments: list, get, add, update, delete
    - User and activity log
    """

    def __init__(
        self,
        api_token: str,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ):
        self.api_token = api_token
        self.base_url = base_url.rstrip("/")
        self._transport = transport
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "TodoistClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_token}",
            "Content-Type": "application/json",
        }

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers(),
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        endpoint: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make an API request.

        Returns:
            Response JSON, or None for empty responses

        Raises:
            RemoteApiError: If the request fails or the API returns an error status
        """
        client = self._get_client()

        try:
            response = await client.request(
                method=method,
                url=endpoint,
                json=json,
                params=_compact(params) if params else None,
            )
        except httpx.RequestError as e:
            logger.error(f"Request error: {e}")
            raise RemoteApiError(status_code=0, message=f"Request failed: {e}") from e

        logger.debug(f"{method} {endpoint} -> {response.status_code}")

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            raise RemoteApiError(
                status_code=response.status_code,
                message=f"{method} {endpoint} failed: {_error_text(body)}",
                response_body=body,
            )

        if response.status_code == 204 or not response.content:
            return None

        return response.json()

    async def _get_page(self, endpoint: str, params: dict[str, Any], items_key: str = "results") -> PageResult:
        data = await self._request("GET", endpoint, params=params) or {}
        return PageResult(items=data.get(items_key) or [], next_cursor=data.get("next_cursor") or None)

    # ==================== User ====================

    async def get_user(self) -> dict[str, Any]:
        """Get the authenticated user, including tz_info."""
        return await self._request("GET", "/user")

    # ==================== Tasks ====================

    async def get_tasks(
        self,
        project_id: str | None = None,
        section_id: str | None = None,
        parent_id: str | None = None,
        label: str | None = None,
        ids: list[str] | None = None,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> PageResult:
        """List active tasks, optionally scoped to a container."""
        params = {
            "project_id": project_id,
            "section_id": section_id,
            "parent_id": parent_id,
            "label": label,
            "ids": ",".join(ids) if ids else None,
            "cursor": cursor,
            "limit": limit,
        }
        return await self._get_page("/tasks", params)

    async def filter_tasks(
        self,
        query: str,
        cursor: str | None = None,
        limit: int | None = None,
        lang: str = "en",
    ) -> PageResult:
        """List active tasks matching a filter query."""
        params = {"query": query, "lang": lang, "cursor": cursor, "limit": limit}
        return await self._get_page("/tasks/filter", params)

    async def get_task(self, task_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/tasks/{task_id}")

    async def add_task(self, body: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/tasks", json=body)

    async def update_task(self, task_id: str, body: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", f"/tasks/{task_id}", json=body)

    async def move_task(
        self,
        task_id: str,
        project_id: str | None = None,
        section_id: str | None = None,
        parent_id: str | None = None,
    ) -> dict[str, Any]:
        """Move a task; exactly one destination is honoured by the API."""
        body = _compact({"project_id": project_id, "section_id": section_id, "parent_id": parent_id})
        return await self._request("POST", f"/tasks/{task_id}/move", json=body)

    async def close_task(self, task_id: str) -> bool:
        await self._request("POST", f"/tasks/{task_id}/close")
        return True

    async def delete_task(self, task_id: str) -> bool:
        await self._request("DELETE", f"/tasks/{task_id}")
        return True

    async def get_completed_tasks(
        self,
        by: str,
        since: str,
        until: str,
        project_id: str | None = None,
        section_id: str | None = None,
        parent_id: str | None = None,
        workspace_id: str | None = None,
        filter_query: str | None = None,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> PageResult:
        """
        List completed tasks by completion date or by due date.

        Args:
            by: "completion" or "due"
            since: UTC ISO 8601 lower bound
            until: UTC ISO 8601 upper bound
        """
        endpoint = "/tasks/completed/by_completion_date" if by == "completion" else "/tasks/completed/by_due_date"
        params = {
            "since": since,
            "until": until,
            "project_id": project_id,
            "section_id": section_id,
            "parent_id": parent_id,
            "workspace_id": workspace_id,
            "filter_query": filter_query,
            "filter_lang": "en" if filter_query else None,
            "cursor": cursor,
            "limit": limit,
        }
        return await self._get_page(endpoint, params, items_key="items")

    # ==================== Projects ====================

    async def get_projects(self, cursor: str | None = None, limit: int | None = None) -> PageResult:
        return await self._get_page("/projects", {"cursor": cursor, "limit": limit})

    async def get_project(self, project_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/projects/{project_id}")

    async def add_project(self, body: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/projects", json=body)

    async def update_project(self, project_id: str, body: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", f"/projects/{project_id}", json=body)

    async def delete_project(self, project_id: str) -> bool:
        await self._request("DELETE", f"/projects/{project_id}")
        return True

    async def get_project_collaborators(
        self,
        project_id: str,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> PageResult:
        return await self._get_page(f"/projects/{project_id}/collaborators", {"cursor": cursor, "limit": limit})

    # ==================== Sections ====================

    async def get_sections(
        self,
        project_id: str | None = None,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> PageResult:
        return await self._get_page("/sections", {"project_id": project_id, "cursor": cursor, "limit": limit})

    async def add_section(self, body: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/sections", json=body)

    async def update_section(self, section_id: str, body: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", f"/sections/{section_id}", json=body)

    async def delete_section(self, section_id: str) -> bool:
        await self._request("DELETE", f"/sections/{section_id}")
        return True

    # ==================== Comments ====================

    async def get_comments(
        self,
        task_id: str | None = None,
        project_id: str | None = None,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> PageResult:
        params = {"task_id": task_id, "project_id": project_id, "cursor": cursor, "limit": limit}
        return await self._get_page("/comments", params)

    async def get_comment(self, comment_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/comments/{comment_id}")

    async def add_comment(self, body: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/comments", json=body)

    async def update_comment(self, comment_id: str, body: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", f"/comments/{comment_id}", json=body)

    async def delete_comment(self, comment_id: str) -> bool:
        await self._request("DELETE", f"/comments/{comment_id}")
        return True

    # ==================== Activity ====================

    async def get_activities(
        self,
        object_type: str | None = None,
        object_id: str | None = None,
        event_type: str | None = None,
        parent_project_id: str | None = None,
        parent_item_id: str | None = None,
        initiator_id: str | None = None,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> PageResult:
        """List activity log events, newest first."""
        params = {
            "object_type": object_type,
            "object_id": object_id,
            "event_type": event_type,
            "parent_project_id": parent_project_id,
            "parent_item_id": parent_item_id,
            "initiator_id": initiator_id,
            "cursor": cursor,
            "limit": limit,
        }
        return await self._get_page("/activities", params)


def _error_text(body: Any) -> str:
    if isinstance(body, dict):
        return str(body.get("error") or body.get("message") or body)
    return str(body)[:200]
