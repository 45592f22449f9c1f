"""
Prompts exposed as read-only MCP resources (``prompt://<id>``).
"""

import logging
from typing import List

import mcp.types as types

from thinkprompt_mcp.client import ThinkPromptClient
from thinkprompt_mcp.errors import InvalidResourceUriError
from thinkprompt_mcp.models import Prompt, PromptQuery

logger = logging.getLogger(__name__)

PROMPT_URI_SCHEME = "prompt://"
PROMPT_MIME_TYPE = "text/plain"
RESOURCE_PAGE_SIZE = 100


def prompt_uri(prompt_id: str) -> str:
    return f"{PROMPT_URI_SCHEME}{prompt_id}"


def parse_prompt_uri(uri: str) -> str:
    """Return the prompt id addressed by a ``prompt://`` URI."""
    if not uri.startswith(PROMPT_URI_SCHEME):
        raise InvalidResourceUriError(f"Unknown resource URI: {uri}")
    prompt_id = uri[len(PROMPT_URI_SCHEME):].rstrip("/")
    if not prompt_id:
        raise InvalidResourceUriError(f"Missing prompt id in resource URI: {uri}")
    return prompt_id


async def list_prompt_resources(client: ThinkPromptClient) -> List[types.Resource]:
    """Describe up to one page of prompts as resources.

    Any failure yields an empty list so hosts can still list resources while
    the API is unavailable.
    """
    try:
        page = await client.list_prompts(PromptQuery(limit=RESOURCE_PAGE_SIZE))
        return [
            types.Resource(
                uri=prompt_uri(prompt["id"]),
                name=prompt["title"],
                description=prompt.get("description") or None,
                mimeType=PROMPT_MIME_TYPE,
            )
            for prompt in page["data"]
        ]
    except Exception as exc:
        logger.warning("Listing prompt resources failed: %s", exc)
        return []


def render_prompt(prompt: Prompt) -> str:
    """Format a prompt as a plain-text document."""
    variables = prompt.get("variables") or []
    if variables:
        variable_lines = "\n".join(
            f"- **{v.get('name')}** ({v.get('type')}): {v.get('description') or 'No description'}"
            for v in variables
        )
    else:
        variable_lines = "No variables required"

    return (
        f"# {prompt.get('title', '')}\n"
        f"\n"
        f"{prompt.get('description') or ''}\n"
        f"\n"
        f"## Content\n"
        f"{prompt.get('content', '')}\n"
        f"\n"
        f"## Variables\n"
        f"{variable_lines}\n"
        f"\n"
        f"## Statistics\n"
        f"- Usage count: {prompt.get('usageCount', 0)}\n"
        f"- Created: {prompt.get('createdAt', 'N/A')}\n"
        f"- Updated: {prompt.get('updatedAt', 'N/A')}\n"
    )


async def read_prompt_resource(client: ThinkPromptClient, uri: str) -> str:
    """Fetch and render the prompt behind ``uri``."""
    prompt_id = parse_prompt_uri(uri)
    prompt = await client.get_prompt(prompt_id)
    return render_prompt(prompt)
