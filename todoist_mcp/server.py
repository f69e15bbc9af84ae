"""FastMCP server initialization for Todoist MCP."""

import inspect
import logging
import sys

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from todoist_mcp.client import TodoistClient
from todoist_mcp.config import configure_logging, load_settings
from todoist_mcp.errors import TodoistError
from todoist_mcp.tools import ALL_TOOLS, TodoistTool

logger = logging.getLogger(__name__)

SERVER_NAME = "todoist_mcp"

INSTRUCTIONS = """\
Tools for managing a Todoist account: tasks, projects, sections, comments,
assignments and the activity log. Start with get_overview or
find_tasks_by_date(start_date='today') to orient yourself. Every tool accepts
response_format='json' for machine-readable output.
"""


def _make_handler(tool: TodoistTool, client: TodoistClient):
    """Bind a tool to a client as a FastMCP-compatible async function taking `params`."""

    async def handler(params):
        try:
            output = await tool.run(client, params)
        except TodoistError as e:
            logger.warning(f"{tool.name.value} failed: {e}")
            raise ToolError(str(e)) from e
        return output.render(params.response_format)

    handler.__name__ = tool.name.value
    handler.__doc__ = tool.description
    handler.__annotations__ = {"params": tool.input_model, "return": str}
    handler.__signature__ = inspect.Signature(
        [inspect.Parameter("params", inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=tool.input_model)],
        return_annotation=str,
    )
    return handler


def create_server(client: TodoistClient, tools: list[TodoistTool] | None = None) -> FastMCP:
    """Build a FastMCP server exposing every tool bound to `client`."""
    mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS)
    for tool in tools if tools is not None else ALL_TOOLS:
        mcp.add_tool(
            _make_handler(tool, client),
            name=tool.name.value,
            title=tool.title,
            description=tool.description,
            annotations=tool.annotations,
        )
    return mcp


def run() -> None:
    """Run the MCP server over stdio."""
    try:
        settings = load_settings()
    except TodoistError as e:
        sys.exit(f"Error: {e}")

    configure_logging(settings.log_level)
    client = TodoistClient(settings.api_token, base_url=settings.base_url)
    logger.info(f"Starting {SERVER_NAME} with {len(ALL_TOOLS)} tools")
    create_server(client).run()


if __name__ == "__main__":
    run()
