"""Tests for the FastMCP server wiring."""

import json

import pytest
from mcp.server.fastmcp.exceptions import ToolError

from todoist_mcp.enums import ResponseFormat
from todoist_mcp.errors import RemoteApiError
from todoist_mcp.models.inputs import CompleteTasksInput, FindTasksInput, UserInfoInput
from todoist_mcp.server import SERVER_NAME, _make_handler, create_server
from todoist_mcp.tools import ALL_TOOLS, TOOLS_BY_NAME


class TestCreateServer:
    """Tests for tool registration."""

    @pytest.mark.asyncio
    async def test_registers_every_tool(self, mock_client):
        mcp = create_server(mock_client)
        tools = await mcp.list_tools()

        assert mcp.name == SERVER_NAME
        assert sorted(t.name for t in tools) == sorted(tool.name.value for tool in ALL_TOOLS)

    @pytest.mark.asyncio
    async def test_tool_metadata(self, mock_client):
        mcp = create_server(mock_client)
        tools = {t.name: t for t in await mcp.list_tools()}

        delete = tools["delete_object"]
        assert delete.annotations.destructiveHint is True
        assert delete.annotations.title == "Delete Object"
        assert "cannot be undone" in delete.description

        find = tools["find_tasks"]
        assert find.annotations.readOnlyHint is True
        assert "params" in find.inputSchema["properties"]

    @pytest.mark.asyncio
    async def test_subset_of_tools(self, mock_client):
        mcp = create_server(mock_client, tools=[TOOLS_BY_NAME["user_info"]])
        assert [t.name for t in await mcp.list_tools()] == ["user_info"]


class TestHandlers:
    """Tests for the bound tool handlers."""

    @pytest.mark.asyncio
    async def test_markdown_output(self, mock_client):
        handler = _make_handler(TOOLS_BY_NAME["user_info"], mock_client)
        result = await handler(UserInfoInput())
        assert result.startswith("# User Information")

    @pytest.mark.asyncio
    async def test_json_output(self, mock_client):
        handler = _make_handler(TOOLS_BY_NAME["complete_tasks"], mock_client)
        result = await handler(CompleteTasksInput(ids=["1"], response_format=ResponseFormat.JSON))
        assert json.loads(result) == {"completed": ["1"], "total_count": 1}

    @pytest.mark.asyncio
    async def test_todoist_errors_become_tool_errors(self, mock_client):
        handler = _make_handler(TOOLS_BY_NAME["find_tasks"], mock_client)
        with pytest.raises(ToolError, match="At least one filter"):
            await handler(FindTasksInput())

    @pytest.mark.asyncio
    async def test_remote_errors_keep_the_api_message(self, mock_client):
        mock_client.filter_tasks.side_effect = RemoteApiError(500, "Internal error")
        handler = _make_handler(TOOLS_BY_NAME["find_tasks"], mock_client)
        with pytest.raises(ToolError, match="Todoist API Error 500: Internal error"):
            await handler(FindTasksInput(search_text="x"))

    def test_handler_signature(self, mock_client):
        handler = _make_handler(TOOLS_BY_NAME["find_tasks"], mock_client)
        assert handler.__name__ == "find_tasks"
        assert handler.__signature__.parameters["params"].annotation is FindTasksInput
