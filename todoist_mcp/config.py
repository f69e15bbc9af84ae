"""Settings and logging setup for Todoist MCP."""

import logging
import os
import sys
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

from todoist_mcp.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.todoist.com/api/v1"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseModel):
    """Resolved runtime settings."""

    api_token: str = Field(..., min_length=1)
    base_url: str = DEFAULT_BASE_URL
    log_level: str = "WARNING"


def configure_logging(level: str = "WARNING") -> None:
    """Send log records to stderr; stdout carries tool output and MCP stdio traffic."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, stream=sys.stderr)


def load_settings(token: str | None = None, dotenv_path: Path | None = None) -> Settings:
    """
    Build Settings from an explicit token, the environment, and an optional .env file.

    Args:
        token: Token passed on the command line; wins over the environment
        dotenv_path: Explicit .env file; defaults to one in the working directory

    Raises:
        InvalidArgumentError: If no API token can be found
    """
    loaded = load_dotenv(dotenv_path=dotenv_path or find_dotenv(usecwd=True))
    if loaded:
        logger.info("Loaded environment variables from .env")

    api_token = token or os.getenv("TODOIST_API_KEY") or os.getenv("TODOIST_API_TOKEN")
    if not api_token:
        raise InvalidArgumentError(
            "Todoist API token not found. Set the TODOIST_API_KEY environment variable or use --token."
        )

    return Settings(
        api_token=api_token,
        base_url=os.getenv("TODOIST_BASE_URL") or DEFAULT_BASE_URL,
        log_level=os.getenv("TODOIST_LOG_LEVEL") or "WARNING",
    )
