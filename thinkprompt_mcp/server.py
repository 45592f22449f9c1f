#!/usr/bin/env python3
"""
ThinkPrompt MCP Server
Connects MCP hosts (Claude Desktop and others) to the ThinkPrompt API:
prompts, workspaces, projects, features, tasks and task comments.

Setup:
  1. pip install thinkprompt-mcp
  2. Create an API key in ThinkPrompt
  3. Set THINKPROMPT_API_KEY (and THINKPROMPT_API_URL for a non-local API)
  4. Add to claude_desktop_config.json:
       {"mcpServers": {"thinkprompt": {"command": "thinkprompt-mcp",
                                       "env": {"THINKPROMPT_API_KEY": "..."}}}}
"""

import asyncio
import logging
import sys
from typing import Any, Dict, Iterable, List, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from pydantic import AnyUrl

from thinkprompt_mcp import __version__
from thinkprompt_mcp.client import ThinkPromptClient
from thinkprompt_mcp.config import Settings, configure_logging, load_settings
from thinkprompt_mcp.errors import ConfigError
from thinkprompt_mcp.resources import PROMPT_MIME_TYPE, list_prompt_resources, read_prompt_resource
from thinkprompt_mcp.tools import dispatch, tool_definitions

SERVER_NAME = "thinkprompt-mcp"

logger = logging.getLogger(__name__)


def create_server(client: ThinkPromptClient) -> Server:
    """Build the MCP server with tool and resource handlers bound to ``client``."""
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        return tool_definitions()

    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> types.CallToolResult:
        return await dispatch(client, name, arguments)

    @server.list_resources()
    async def handle_list_resources() -> List[types.Resource]:
        return await list_prompt_resources(client)

    @server.read_resource()
    async def handle_read_resource(uri: AnyUrl) -> Iterable[ReadResourceContents]:
        text = await read_prompt_resource(client, str(uri))
        return [ReadResourceContents(content=text, mime_type=PROMPT_MIME_TYPE)]

    return server


async def serve(settings: Settings) -> None:
    """Run the server on stdio until the host disconnects."""
    client = ThinkPromptClient(settings.api_url, settings.api_key, timeout=settings.timeout)
    server = create_server(client)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("ThinkPrompt MCP Server running on stdio (API: %s)", client.base_url)
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.log_level)
    asyncio.run(serve(settings))


# ─── Entry Point ─────────────────────────────────────────────────────────────

if __name__ == "__main__":
    main()
