"""Shared fixtures: a scripted in-memory ThinkPrompt API behind httpx.MockTransport."""

import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from thinkprompt_mcp.client import ThinkPromptClient

BASE_URL = "https://thinkprompt.test/api/v1/"
API_PATH = "/api/v1"
API_KEY = "tp_test_key"


class FakeApi:
    """Records every request and answers from a route table."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.routes: Dict[Tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.fallback: Optional[Callable[[httpx.Request], httpx.Response]] = None

    def route(self, method: str, path: str, json_body: Any = None, status: int = 200, text: Optional[str] = None):
        def respond(request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status, text=text)
            return httpx.Response(status, json=json_body)

        self.routes[(method, API_PATH + path)] = respond

    def fail_all(self, status: int = 500, text: str = "boom") -> None:
        self.fallback = lambda request: httpx.Response(status, text=text)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        respond = self.routes.get((request.method, request.url.path)) or self.fallback
        if respond is None:
            return httpx.Response(404, text=f"no route for {request.method} {request.url.path}")
        return respond(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def client(api: FakeApi) -> ThinkPromptClient:
    return ThinkPromptClient(BASE_URL, API_KEY, transport=httpx.MockTransport(api.handler))
