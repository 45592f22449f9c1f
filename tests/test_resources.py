"""Tests for prompt resources."""

import pytest

from thinkprompt_mcp.errors import InvalidResourceUriError
from thinkprompt_mcp.resources import (
    list_prompt_resources,
    parse_prompt_uri,
    read_prompt_resource,
    render_prompt,
)

PROMPT = {
    "id": "abc",
    "title": "Code Review",
    "description": "Reviews a diff",
    "content": "Review this {{language}} code:\n{{code}}",
    "variables": [
        {"name": "language", "type": "select", "description": "Source language"},
        {"name": "code", "type": "textarea"},
    ],
    "usageCount": 42,
    "createdAt": "2025-01-01T00:00:00Z",
    "updatedAt": "2025-02-01T00:00:00Z",
}


class TestListResources:

    @pytest.mark.asyncio
    async def test_prompts_become_resources(self, api, client):
        api.route("GET", "/prompts", {
            "data": [PROMPT, {"id": "def", "title": "Bare", "description": None}],
            "meta": {"total": 2, "page": 1, "limit": 100, "totalPages": 1},
        })

        resources = await list_prompt_resources(client)

        assert dict(api.last.url.params) == {"limit": "100"}
        assert [str(r.uri) for r in resources] == ["prompt://abc", "prompt://def"]
        assert [r.name for r in resources] == ["Code Review", "Bare"]
        assert resources[0].description == "Reviews a diff"
        assert resources[1].description is None
        assert all(r.mimeType == "text/plain" for r in resources)

    @pytest.mark.asyncio
    async def test_failure_yields_empty_list(self, api, client):
        api.fail_all(503, "down")

        assert await list_prompt_resources(client) == []


class TestReadResource:

    @pytest.mark.asyncio
    async def test_other_scheme_rejected_without_request(self, api, client):
        with pytest.raises(InvalidResourceUriError, match="Unknown resource URI: foo://123"):
            await read_prompt_resource(client, "foo://123")
        assert api.requests == []

    @pytest.mark.asyncio
    async def test_reads_single_prompt(self, api, client):
        api.route("GET", "/prompts/abc", PROMPT)

        text = await read_prompt_resource(client, "prompt://abc")

        assert len(api.requests) == 1
        assert api.last.url.path == "/api/v1/prompts/abc"
        assert text.startswith("# Code Review\n\nReviews a diff\n")

    def test_parse_uri(self):
        assert parse_prompt_uri("prompt://abc") == "abc"
        with pytest.raises(InvalidResourceUriError):
            parse_prompt_uri("prompt://")


class TestRenderPrompt:

    def test_full_document(self):
        assert render_prompt(PROMPT) == (
            "# Code Review\n"
            "\n"
            "Reviews a diff\n"
            "\n"
            "## Content\n"
            "Review this {{language}} code:\n{{code}}\n"
            "\n"
            "## Variables\n"
            "- **language** (select): Source language\n"
            "- **code** (textarea): No description\n"
            "\n"
            "## Statistics\n"
            "- Usage count: 42\n"
            "- Created: 2025-01-01T00:00:00Z\n"
            "- Updated: 2025-02-01T00:00:00Z\n"
        )

    def test_no_variables(self):
        text = render_prompt({**PROMPT, "variables": [], "description": None})

        assert "## Variables\nNo variables required\n" in text
        assert text.startswith("# Code Review\n\n\n\n## Content\n")
