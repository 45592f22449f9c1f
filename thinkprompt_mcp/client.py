"""
ThinkPrompt API client.

One async method per remote operation. Header injection, query-string
construction, JSON body encoding and error conversion live in the private
request helpers so every endpoint method stays a one-liner.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from thinkprompt_mcp.config import REQUEST_TIMEOUT
from thinkprompt_mcp.errors import ApiRequestError, ThinkPromptConnectionError
from thinkprompt_mcp.models import (
    ExecutionResult,
    Feature,
    FeatureCreate,
    FeatureQuery,
    FeatureUpdate,
    PaginatedResponse,
    Project,
    ProjectCreate,
    ProjectQuery,
    ProjectUpdate,
    Prompt,
    PromptCreate,
    PromptExecution,
    PromptQuery,
    PromptUpdate,
    PromptVariable,
    Task,
    TaskAiEdit,
    TaskComment,
    TaskCommentCreate,
    TaskCreate,
    TaskHistoryEntry,
    TaskQuery,
    TaskStatus,
    TaskUpdate,
    Workspace,
)

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"
WORKSPACE_HEADER = "X-Workspace-Id"
COMMENT_SOURCE = "mcp"


def _segment(value: str) -> str:
    """Percent-encode a single path segment."""
    return quote(str(value), safe="")


def _query(params: Optional[BaseModel], exclude: Iterable[str] = ()) -> Dict[str, str]:
    """Build query parameters from a parameter object.

    Only truthy values are kept, in declared field order. Lists are
    comma-joined into one value and booleans become ``true``.
    """
    if params is None:
        return {}
    skip = set(exclude)
    query: Dict[str, str] = {}
    for name, info in type(params).model_fields.items():
        if name in skip:
            continue
        value = getattr(params, name)
        if not value:
            continue
        key = info.alias or name
        if isinstance(value, (list, tuple)):
            query[key] = ",".join(str(item) for item in value)
        elif isinstance(value, bool):
            query[key] = "true"
        else:
            query[key] = str(value)
    return query


def _payload(data: BaseModel, exclude: Iterable[str] = ()) -> Dict[str, Any]:
    """Serialize a parameter object, dropping fields the caller never set."""
    return data.model_dump(
        mode="json",
        by_alias=True,
        exclude_unset=True,
        exclude=set(exclude) or None,
    )


@dataclass
class WorkspaceSession:
    """Session-scoped workspace state: the selected workspace and a snapshot
    of the caller's workspaces. The snapshot can go stale; ``list_workspaces``
    refreshes it."""

    current_workspace_id: Optional[str] = None
    workspaces: List[Workspace] = field(default_factory=list)

    def mark_default(self, workspace_id: str) -> None:
        for workspace in self.workspaces:
            workspace["isDefault"] = workspace.get("id") == workspace_id

    def resolve_current(self) -> Optional[Workspace]:
        if self.current_workspace_id:
            for workspace in self.workspaces:
                if workspace.get("id") == self.current_workspace_id:
                    return workspace
        for workspace in self.workspaces:
            if workspace.get("isDefault"):
                return workspace
        return self.workspaces[0] if self.workspaces else None


class ThinkPromptClient:
    """
    Async client for the ThinkPrompt REST API.

    Usage:
        client = ThinkPromptClient("https://thinkprompt.example/api/v1", api_key)
        page = await client.list_prompts(PromptQuery(search="review"))

    Args:
        base_url: API base URL; a trailing slash is stripped.
        api_key: Key sent in the X-API-Key header on every request.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport
        self.session = WorkspaceSession()

    @property
    def base_url(self) -> str:
        return self._base_url

    # ─── HTTP Helpers ────────────────────────────────────────────────────────

    def _headers(self) -> Dict[str, str]:
        headers = {
            API_KEY_HEADER: self._api_key,
            "Content-Type": "application/json",
        }
        if self.session.current_workspace_id:
            headers[WORKSPACE_HEADER] = self.session.current_workspace_id
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, str]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make an authenticated request and decode the JSON response."""
        url = f"{self._base_url}{path}"
        logger.debug("%s %s params=%s", method, url, params or {})
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.request(
                    method,
                    url,
                    headers=self._headers(),
                    params=params or None,
                    json=json_body,
                )
        except httpx.TransportError as exc:
            raise ThinkPromptConnectionError(
                f"Failed to connect to ThinkPrompt API at {self._base_url}: {exc}"
            ) from exc

        if not response.is_success:
            logger.warning("%s %s failed with status %s", method, path, response.status_code)
            raise ApiRequestError(response.status_code, response.text, method=method, path=path)

        if not response.content:
            return None
        return response.json()

    async def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        return await self._request("GET", path, params=params)

    async def _post(self, path: str, data: Dict[str, Any]) -> Any:
        return await self._request("POST", path, json_body=data)

    async def _patch(self, path: str, data: Dict[str, Any]) -> Any:
        return await self._request("PATCH", path, json_body=data)

    # ─── Prompts ─────────────────────────────────────────────────────────────

    async def list_prompts(self, params: Optional[PromptQuery] = None) -> PaginatedResponse:
        return await self._get("/prompts", _query(params))

    async def get_prompt(self, prompt_id: str) -> Prompt:
        return await self._get(f"/prompts/{_segment(prompt_id)}")

    async def execute_prompt(self, prompt_id: str, data: PromptExecution) -> ExecutionResult:
        return await self._post(
            f"/prompts/{_segment(prompt_id)}/execute",
            _payload(data, exclude={"id"}),
        )

    async def get_prompt_variables(self, prompt_id: str) -> List[PromptVariable]:
        return await self._get(f"/prompts/{_segment(prompt_id)}/variables")

    async def create_prompt(self, data: PromptCreate) -> Prompt:
        return await self._post("/prompts", _payload(data))

    async def update_prompt(self, prompt_id: str, data: PromptUpdate) -> Prompt:
        return await self._patch(f"/prompts/{_segment(prompt_id)}", _payload(data, exclude={"id"}))

    # ─── Workspaces ──────────────────────────────────────────────────────────

    def set_current_workspace(self, workspace_id: Optional[str]) -> None:
        self.session.current_workspace_id = workspace_id

    def get_current_workspace_id(self) -> Optional[str]:
        return self.session.current_workspace_id

    async def list_workspaces(self) -> List[Workspace]:
        """Fetch the caller's workspaces and refresh the cached snapshot."""
        workspaces = await self._get("/workspaces/list")
        self.session.workspaces = list(workspaces or [])
        return self.session.workspaces

    async def get_current_workspace(self) -> Optional[Workspace]:
        """Resolve the active workspace, fetching the list on first use."""
        if not self.session.workspaces:
            await self.list_workspaces()
        return self.session.resolve_current()

    async def switch_workspace(self, workspace_id: str) -> Any:
        """Switch workspaces remotely, then update local state.

        The cached default flags are recomputed locally, without re-fetching.
        """
        result = await self._post(f"/workspaces/{_segment(workspace_id)}/switch", {})
        self.session.current_workspace_id = workspace_id
        self.session.mark_default(workspace_id)
        logger.info("Switched to workspace %s", workspace_id)
        return result

    # ─── Projects ────────────────────────────────────────────────────────────

    async def list_projects(self, params: Optional[ProjectQuery] = None) -> List[Project]:
        return await self._get("/projects", _query(params))

    async def get_project(self, project_id: str) -> Project:
        return await self._get(f"/projects/{_segment(project_id)}")

    async def create_project(self, data: ProjectCreate) -> Project:
        return await self._post("/projects", _payload(data))

    async def update_project(self, project_id: str, data: ProjectUpdate) -> Project:
        return await self._patch(f"/projects/{_segment(project_id)}", _payload(data, exclude={"id"}))

    # ─── Features ────────────────────────────────────────────────────────────

    async def list_features(self, project_id: str, params: Optional[FeatureQuery] = None) -> List[Feature]:
        return await self._get(
            f"/projects/{_segment(project_id)}/features",
            _query(params, exclude={"project_id"}),
        )

    async def get_feature(self, feature_id: str) -> Feature:
        return await self._get(f"/features/{_segment(feature_id)}")

    async def create_feature(self, project_id: str, data: FeatureCreate) -> Feature:
        return await self._post(
            f"/projects/{_segment(project_id)}/features",
            _payload(data, exclude={"project_id"}),
        )

    async def update_feature(self, feature_id: str, data: FeatureUpdate) -> Feature:
        return await self._patch(f"/features/{_segment(feature_id)}", _payload(data, exclude={"id"}))

    # ─── Tasks ───────────────────────────────────────────────────────────────

    async def list_tasks(self, params: Optional[TaskQuery] = None) -> PaginatedResponse:
        return await self._get("/tasks", _query(params))

    async def get_task(self, task_id: str) -> Task:
        return await self._get(f"/tasks/{_segment(task_id)}")

    async def get_task_by_kuerzel(self, kuerzel: str) -> Task:
        return await self._get(f"/tasks/by-kuerzel/{_segment(kuerzel)}")

    async def create_task(self, data: TaskCreate) -> Task:
        return await self._post("/tasks", _payload(data))

    async def update_task(self, task_id: str, data: TaskUpdate) -> Task:
        return await self._patch(f"/tasks/{_segment(task_id)}", _payload(data, exclude={"id"}))

    async def update_task_status(self, task_id: str, status: TaskStatus) -> Task:
        return await self._patch(f"/tasks/{_segment(task_id)}/status", {"status": status})

    async def get_task_history(self, task_id: str) -> List[TaskHistoryEntry]:
        return await self._get(f"/tasks/{_segment(task_id)}/history")

    async def ai_edit_task(self, task_id: str, data: TaskAiEdit) -> Task:
        return await self._post(f"/tasks/{_segment(task_id)}/ai-edit", _payload(data, exclude={"id"}))

    # ─── Task Comments ───────────────────────────────────────────────────────

    async def list_task_comments(self, task_id: str) -> List[TaskComment]:
        return await self._get(f"/tasks/{_segment(task_id)}/comments")

    async def add_task_comment(self, task_id: str, data: TaskCommentCreate) -> TaskComment:
        """Post a comment; the source is always recorded as ``mcp``."""
        body = _payload(data, exclude={"task_id"})
        body["createdBySource"] = COMMENT_SOURCE
        return await self._post(f"/tasks/{_segment(task_id)}/comments", body)
