"""The tool object contract shared by the CLI and the MCP server."""

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from mcp.types import ToolAnnotations

from todoist_mcp.client import TodoistClient
from todoist_mcp.enums import ToolName
from todoist_mcp.models.inputs import ToolInput
from todoist_mcp.models.output import ToolOutput

logger = logging.getLogger(__name__)

Executor = Callable[[TodoistClient, Any], Awaitable[ToolOutput]]


@dataclass(frozen=True)
class TodoistTool:
    """
    A callable Todoist operation.

    The client is always passed in explicitly; a tool holds no state between
    calls. The executor's docstring doubles as the tool description shown to
    agents.
    """

    name: ToolName
    title: str
    input_model: type[ToolInput]
    execute: Executor
    read_only: bool = False
    destructive: bool = False
    idempotent: bool = False

    @property
    def description(self) -> str:
        return inspect.getdoc(self.execute) or self.title

    @property
    def annotations(self) -> ToolAnnotations:
        return ToolAnnotations(
            title=self.title,
            readOnlyHint=self.read_only,
            destructiveHint=self.destructive,
            idempotentHint=self.idempotent,
            openWorldHint=True,
        )

    async def run(self, client: TodoistClient, params: ToolInput | dict[str, Any]) -> ToolOutput:
        """Validate params (if given as a dict) and execute the tool."""
        if not isinstance(params, self.input_model):
            params = self.input_model.model_validate(params)
        logger.info(f"Running tool {self.name.value}")
        return await self.execute(client, params)
