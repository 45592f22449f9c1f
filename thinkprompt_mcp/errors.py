"""
ThinkPrompt MCP exceptions.
"""

from __future__ import annotations

from typing import Optional


class ThinkPromptError(RuntimeError):
    """Base class for all ThinkPrompt MCP errors."""


class ConfigError(ThinkPromptError):
    """Raised when required settings are missing or invalid."""


class ThinkPromptConnectionError(ThinkPromptError):
    """Raised when the ThinkPrompt API cannot be reached."""


class ApiRequestError(ThinkPromptError):
    """Raised when the ThinkPrompt API answers with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        body: str,
        *,
        method: Optional[str] = None,
        path: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.method = method
        self.path = path
        super().__init__(f"API request failed: {status_code} - {body}")


class UnknownToolError(ThinkPromptError):
    """Raised when a tool name is not in the catalog."""


class InvalidArgumentsError(ThinkPromptError):
    """Raised when tool arguments do not satisfy the tool's input contract."""


class InvalidResourceUriError(ThinkPromptError):
    """Raised for resource URIs outside the prompt:// scheme."""
