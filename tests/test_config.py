"""Tests for settings loading."""

import pytest

from thinkprompt_mcp.config import DEFAULT_API_URL, REQUEST_TIMEOUT, load_settings
from thinkprompt_mcp.errors import ConfigError


def test_defaults():
    settings = load_settings({"THINKPROMPT_API_KEY": "key"})
    assert settings.api_url == DEFAULT_API_URL
    assert settings.api_key == "key"
    assert settings.timeout == REQUEST_TIMEOUT
    assert settings.log_level == "INFO"


def test_overrides():
    settings = load_settings({
        "THINKPROMPT_API_KEY": "key",
        "THINKPROMPT_API_URL": "https://thinkprompt.example/api/v1",
        "THINKPROMPT_TIMEOUT": "15",
        "THINKPROMPT_LOG_LEVEL": "debug",
    })
    assert settings.api_url == "https://thinkprompt.example/api/v1"
    assert settings.timeout == 15.0
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("environ", [{}, {"THINKPROMPT_API_KEY": ""}, {"THINKPROMPT_API_KEY": "   "}])
def test_missing_api_key(environ):
    with pytest.raises(ConfigError, match="THINKPROMPT_API_KEY environment variable is required"):
        load_settings(environ)


def test_invalid_timeout():
    with pytest.raises(ConfigError, match="Invalid THINKPROMPT_TIMEOUT"):
        load_settings({"THINKPROMPT_API_KEY": "key", "THINKPROMPT_TIMEOUT": "soon"})


def test_non_positive_timeout():
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_settings({"THINKPROMPT_API_KEY": "key", "THINKPROMPT_TIMEOUT": "0"})


def test_unknown_log_level():
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_settings({"THINKPROMPT_API_KEY": "key", "THINKPROMPT_LOG_LEVEL": "chatty"})


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("THINKPROMPT_API_KEY", "from-env")
    monkeypatch.delenv("THINKPROMPT_API_URL", raising=False)
    assert load_settings().api_key == "from-env"
