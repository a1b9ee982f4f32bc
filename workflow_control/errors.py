"""Error taxonomy for workflow control operations."""

from typing import Any

STATUS_HINTS = {
    401: "Authentication failed. Check your GITHUB_TOKEN.",
    403: "Permission denied. Ensure your token has repo and workflow scopes.",
    404: "Not found. Check the repository and workflow names.",
}


class WorkflowControlError(Exception):
    """Base class for every error surfaced to the operator."""


class ConfigurationError(WorkflowControlError):
    """Raised when local configuration is missing or invalid.

    Detected before any request is sent.
    """


class TransportError(WorkflowControlError):
    """Raised when a request fails below the HTTP layer."""


class ApiError(WorkflowControlError):
    """Raised when the forge API answers with an unexpected status.

    Attributes:
        status: HTTP status code exactly as returned by the API
        message: The API's ``message`` field, or the raw body
        body: Raw response body text

    """

    def __init__(self, status: int, message: str, body: str = "") -> None:
        super().__init__(f"HTTP {status}: {message}")
        self.status = status
        self.message = message
        self.body = body

    @classmethod
    def from_body(cls, status: int, body: str, payload: Any = None) -> "ApiError":
        """Build an error, preferring the JSON ``message`` field when present."""
        message = body
        if isinstance(payload, dict) and isinstance(payload.get("message"), str):
            message = payload["message"]
        return cls(status, message or "<empty body>", body)

    @property
    def hint(self) -> str | None:
        """Operator-facing advice for well-known statuses."""
        return STATUS_HINTS.get(self.status)
