"""
ThinkPrompt MCP server public exports.
"""

__version__ = "1.1.0"

from thinkprompt_mcp.client import ThinkPromptClient, WorkspaceSession
from thinkprompt_mcp.errors import (
    ApiRequestError,
    ConfigError,
    InvalidArgumentsError,
    InvalidResourceUriError,
    ThinkPromptConnectionError,
    ThinkPromptError,
    UnknownToolError,
)

__all__ = [
    "__version__",
    "ThinkPromptClient",
    "WorkspaceSession",
    "ThinkPromptError",
    "ConfigError",
    "ApiRequestError",
    "ThinkPromptConnectionError",
    "UnknownToolError",
    "InvalidArgumentsError",
    "InvalidResourceUriError",
]
