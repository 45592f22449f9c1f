"""
ThinkPrompt MCP configuration.

Settings are read from environment variables:

  THINKPROMPT_API_URL    API base URL (default: http://localhost:3000/api/v1)
  THINKPROMPT_API_KEY    API key (required)
  THINKPROMPT_TIMEOUT    Per-request timeout in seconds (default: 120)
  THINKPROMPT_LOG_LEVEL  Logging level (default: INFO)
"""

import logging
import os
import sys
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from thinkprompt_mcp.errors import ConfigError

DEFAULT_API_URL = "http://localhost:3000/api/v1"
REQUEST_TIMEOUT = 120.0
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseModel):
    """Runtime settings for the MCP server."""
    model_config = ConfigDict(frozen=True)

    api_url: str = Field(default=DEFAULT_API_URL, min_length=1)
    api_key: str = Field(..., min_length=1)
    timeout: float = Field(default=REQUEST_TIMEOUT, gt=0)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level '{value}'")
        return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment.

    Raises:
        ConfigError: If THINKPROMPT_API_KEY is missing or a value is invalid.
    """
    env = os.environ if environ is None else environ

    api_key = env.get("THINKPROMPT_API_KEY", "").strip()
    if not api_key:
        raise ConfigError("THINKPROMPT_API_KEY environment variable is required")

    raw_timeout = env.get("THINKPROMPT_TIMEOUT", "").strip()
    try:
        timeout = float(raw_timeout) if raw_timeout else REQUEST_TIMEOUT
    except ValueError:
        raise ConfigError(
            f"Invalid THINKPROMPT_TIMEOUT: {raw_timeout!r}. Must be a number of seconds."
        ) from None

    try:
        return Settings(
            api_url=env.get("THINKPROMPT_API_URL", "").strip() or DEFAULT_API_URL,
            api_key=api_key,
            timeout=timeout,
            log_level=env.get("THINKPROMPT_LOG_LEVEL", "").strip() or "INFO",
        )
    except ValueError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def configure_logging(level: str = "INFO") -> None:
    """Route log records to stderr; stdout carries the MCP stdio transport."""
    logging.basicConfig(stream=sys.stderr, level=level, format=LOG_FORMAT)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
