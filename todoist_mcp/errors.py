"""Error types raised by Todoist MCP operations."""

from typing import Any


class TodoistError(Exception):
    """Base class for every error surfaced to the CLI or an MCP client."""


class InvalidArgumentError(TodoistError):
    """Missing or contradictory arguments, detected before any network call."""


class UserNotFoundError(TodoistError):
    """No collaborator matched a responsible-user identifier."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(
            f"User '{identifier}' not found among collaborators. "
            "Use find_project_collaborators to list valid users."
        )


class AmbiguousUserError(TodoistError):
    """A responsible-user identifier matched more than one collaborator."""

    def __init__(self, identifier: str, matches: list[str]):
        self.identifier = identifier
        self.matches = matches
        super().__init__(
            f"User '{identifier}' is ambiguous, it matches: {', '.join(matches)}. "
            "Use a user ID or full email address instead."
        )


class RemoteApiError(TodoistError):
    """The Todoist API call failed or returned an error status."""

    def __init__(self, status_code: int, message: str, response_body: Any = None):
        self.status_code = status_code
        self.message = message
        self.response_body = response_body
        super().__init__(f"Todoist API Error {status_code}: {message}")


class MalformedBatchInputError(TodoistError):
    """A caller-supplied batch (e.g. a JSON array of tasks) failed validation."""

    def __init__(self, field_name: str, detail: str):
        self.field_name = field_name
        self.detail = detail
        super().__init__(f"Invalid {field_name}: {detail}")
