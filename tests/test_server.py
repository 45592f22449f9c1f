"""Tests for MCP server wiring and startup."""

import mcp.types as types
import pytest

from thinkprompt_mcp import server as server_module
from thinkprompt_mcp.errors import InvalidResourceUriError
from thinkprompt_mcp.server import SERVER_NAME, create_server


def test_server_registers_tool_and_resource_handlers(client):
    server = create_server(client)

    assert server.name == SERVER_NAME
    for request_type in (
        types.ListToolsRequest,
        types.CallToolRequest,
        types.ListResourcesRequest,
        types.ReadResourceRequest,
    ):
        assert request_type in server.request_handlers


def test_server_advertises_tools_and_resources(client):
    options = create_server(client).create_initialization_options()

    assert options.server_name == SERVER_NAME
    assert options.capabilities.tools is not None
    assert options.capabilities.resources is not None


async def _call_tool(server, name, arguments):
    handler = server.request_handlers[types.CallToolRequest]
    request = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )
    return (await handler(request)).root


async def _read_resource(server, uri):
    handler = server.request_handlers[types.ReadResourceRequest]
    request = types.ReadResourceRequest(
        method="resources/read",
        params=types.ReadResourceRequestParams(uri=uri),
    )
    return (await handler(request)).root


class TestCallToolRequests:

    @pytest.mark.asyncio
    async def test_missing_required_argument_uses_error_envelope(self, api, client):
        result = await _call_tool(create_server(client), "get_prompt", {})

        assert result.isError is True
        assert result.content[0].text.startswith("Error: Invalid arguments for get_prompt: id")
        assert api.requests == []

    @pytest.mark.asyncio
    async def test_bad_enum_uses_error_envelope(self, api, client):
        result = await _call_tool(
            create_server(client), "update_task_status", {"id": "t1", "status": "finished"}
        )

        assert result.isError is True
        assert result.content[0].text.startswith("Error: Invalid arguments for update_task_status: status")
        assert api.requests == []

    @pytest.mark.asyncio
    async def test_remote_failure_uses_error_envelope(self, api, client):
        api.fail_all(500, "boom")

        result = await _call_tool(create_server(client), "list_projects", {})

        assert result.isError is True
        assert [c.text for c in result.content] == ["Error: API request failed: 500 - boom"]


class TestResourceRequests:

    @pytest.mark.asyncio
    async def test_read_prompt_resource(self, api, client):
        api.route("GET", "/prompts/abc", {
            "id": "abc", "title": "Greeting", "content": "Hi {{name}}",
            "variables": [], "usageCount": 1, "createdAt": "c", "updatedAt": "u",
        })

        result = await _read_resource(create_server(client), "prompt://abc")

        assert [(r.method, r.url.path) for r in api.requests] == [("GET", "/api/v1/prompts/abc")]
        assert len(result.contents) == 1
        assert result.contents[0].mimeType == "text/plain"
        assert result.contents[0].text.startswith("# Greeting\n")

    @pytest.mark.asyncio
    async def test_read_other_scheme_makes_no_request(self, api, client):
        with pytest.raises(InvalidResourceUriError):
            await _read_resource(create_server(client), "foo://1")
        assert api.requests == []

    @pytest.mark.asyncio
    async def test_list_resources_degrades_to_empty(self, api, client):
        api.fail_all(503, "down")
        handler = create_server(client).request_handlers[types.ListResourcesRequest]

        result = (await handler(types.ListResourcesRequest(method="resources/list"))).root

        assert result.resources == []


def test_main_exits_without_api_key(monkeypatch, capsys):
    monkeypatch.delenv("THINKPROMPT_API_KEY", raising=False)

    def fail_serve(settings):
        raise AssertionError("server must not start without an API key")

    monkeypatch.setattr(server_module, "serve", fail_serve)

    with pytest.raises(SystemExit) as excinfo:
        server_module.main()

    assert excinfo.value.code == 1
    assert "THINKPROMPT_API_KEY environment variable is required" in capsys.readouterr().err
