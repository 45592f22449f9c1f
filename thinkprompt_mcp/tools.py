"""
MCP tool catalog and dispatch.

Each tool is a ``ToolHandler``: a name, a description (the handler's
docstring), a pydantic input model whose JSON schema is the tool's
``inputSchema``, MCP annotations, and an async ``invoke`` that calls exactly
one ThinkPromptClient method. ``dispatch`` is the single boundary where
results and failures are turned into MCP envelopes.
"""

import inspect
import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

import mcp.types as types
from pydantic import BaseModel, Field, ValidationError

from thinkprompt_mcp.client import ThinkPromptClient
from thinkprompt_mcp.errors import InvalidArgumentsError, UnknownToolError
from thinkprompt_mcp.models import (
    ApiModel,
    FeatureCreate,
    FeatureQuery,
    FeatureUpdate,
    ProjectCreate,
    ProjectQuery,
    ProjectUpdate,
    PromptCreate,
    PromptExecution,
    PromptQuery,
    PromptUpdate,
    TaskAiEdit,
    TaskCommentCreate,
    TaskCreate,
    TaskQuery,
    TaskStatus,
    TaskUpdate,
)

logger = logging.getLogger(__name__)

Invoke = Callable[[ThinkPromptClient, Any], Awaitable[Any]]


# ─── Input Models ────────────────────────────────────────────────────────────


class NoInput(ApiModel):
    """Input for tools that take no arguments."""


class GetPromptInput(ApiModel):
    """Input for retrieving a single prompt."""

    id: str = Field(..., description="The UUID of the prompt to retrieve", min_length=1)


class PromptIdInput(ApiModel):
    """Input for tools addressing a prompt by ID."""

    id: str = Field(..., description="The UUID of the prompt", min_length=1)


class ExecutePromptInput(PromptExecution):
    """Input for executing a prompt."""

    id: str = Field(..., description="The UUID of the prompt to execute", min_length=1)


class UpdatePromptInput(PromptUpdate):
    """Input for updating a prompt."""

    id: str = Field(..., description="The UUID of the prompt to update", min_length=1)


class SwitchWorkspaceInput(ApiModel):
    """Input for switching workspaces."""

    workspace_id: str = Field(..., description="The UUID of the workspace to switch to", min_length=1)


class ProjectIdInput(ApiModel):
    """Input for retrieving a single project."""

    id: str = Field(..., description="The UUID of the project", min_length=1)


class UpdateProjectInput(ProjectUpdate):
    """Input for updating a project."""

    id: str = Field(..., description="The UUID of the project to update", min_length=1)


class ListFeaturesInput(FeatureQuery):
    """Input for listing a project's features."""

    project_id: str = Field(..., description="The UUID of the project", min_length=1)


class FeatureIdInput(ApiModel):
    """Input for retrieving a single feature."""

    id: str = Field(..., description="The UUID of the feature", min_length=1)


class CreateFeatureInput(FeatureCreate):
    """Input for creating a feature."""

    project_id: str = Field(..., description="The UUID of the project", min_length=1)


class UpdateFeatureInput(FeatureUpdate):
    """Input for updating a feature."""

    id: str = Field(..., description="The UUID of the feature to update", min_length=1)


class GetTaskInput(ApiModel):
    """Input for looking up a task by ID or Kürzel."""

    id: Optional[str] = Field(default=None, description="The UUID of the task")
    kuerzel: Optional[str] = Field(default=None, description='The task Kürzel (e.g., "TP-001")')


class TaskIdInput(ApiModel):
    """Input for tools addressing a task by ID."""

    id: str = Field(..., description="The UUID of the task", min_length=1)


class UpdateTaskInput(TaskUpdate):
    """Input for updating a task."""

    id: str = Field(..., description="The UUID of the task", min_length=1)


class UpdateTaskStatusInput(ApiModel):
    """Input for a quick status change."""

    id: str = Field(..., description="The UUID of the task", min_length=1)
    status: TaskStatus = Field(..., description="New status")


class AiEditTaskInput(TaskAiEdit):
    """Input for an AI-assisted task edit."""

    id: str = Field(..., description="The UUID of the task", min_length=1)


class AddTaskCommentInput(TaskCommentCreate):
    """Input for commenting on a task."""

    task_id: str = Field(..., description="The UUID of the task", min_length=1)


class TaskCommentsInput(ApiModel):
    """Input for listing a task's comments."""

    task_id: str = Field(..., description="The UUID of the task", min_length=1)


# ─── Registry ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ToolHandler:
    """A catalog entry: schema, description and the call it forwards to."""

    name: str
    title: str
    description: str
    input_model: Type[BaseModel]
    invoke: Invoke
    read_only: bool = False
    idempotent: bool = False
    destructive: bool = False

    def definition(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            title=self.title,
            description=self.description,
            inputSchema=self.input_model.model_json_schema(),
            annotations=types.ToolAnnotations(
                title=self.title,
                readOnlyHint=self.read_only,
                destructiveHint=self.destructive,
                idempotentHint=self.idempotent,
                openWorldHint=True,
            ),
        )

    def parse(self, arguments: Optional[Dict[str, Any]]) -> BaseModel:
        try:
            return self.input_model.model_validate(arguments or {})
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or 'arguments'}: {error['msg']}"
                for error in exc.errors()
            )
            raise InvalidArgumentsError(f"Invalid arguments for {self.name}: {problems}") from exc


TOOLS: Dict[str, ToolHandler] = {}


def tool(
    name: str,
    *,
    title: str,
    input_model: Type[BaseModel] = NoInput,
    read_only: bool = False,
    idempotent: bool = False,
    destructive: bool = False,
) -> Callable[[Invoke], Invoke]:
    """Register an invoke function in the catalog; its docstring is the description."""

    def decorator(fn: Invoke) -> Invoke:
        if name in TOOLS:
            raise ValueError(f"Duplicate tool name: {name}")
        TOOLS[name] = ToolHandler(
            name=name,
            title=title,
            description=inspect.cleandoc(fn.__doc__ or ""),
            input_model=input_model,
            invoke=fn,
            read_only=read_only,
            idempotent=idempotent or read_only,
            destructive=destructive,
        )
        return fn

    return decorator


def tool_definitions() -> List[types.Tool]:
    """The full catalog, in registration order."""
    return [handler.definition() for handler in TOOLS.values()]


# ─── Envelopes ───────────────────────────────────────────────────────────────


def success_result(value: Any) -> types.CallToolResult:
    text = json.dumps(value, indent=2, ensure_ascii=False, default=str)
    return types.CallToolResult(content=[types.TextContent(type="text", text=text)])


def error_result(exc: BaseException) -> types.CallToolResult:
    message = str(exc) or type(exc).__name__
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=f"Error: {message}")],
        isError=True,
    )


async def dispatch(
    client: ThinkPromptClient, name: str, arguments: Optional[Dict[str, Any]]
) -> types.CallToolResult:
    """Run one tool call. Failures never escape; they become error envelopes."""
    try:
        handler = TOOLS.get(name)
        if handler is None:
            raise UnknownToolError(f"Unknown tool: {name}")
        params = handler.parse(arguments)
        result = await handler.invoke(client, params)
    except Exception as exc:
        logger.warning("Tool %s failed: %s", name, exc)
        return error_result(exc)
    return success_result(result)


# ─── Prompt Tools ────────────────────────────────────────────────────────────


@tool("list_prompts", title="List Prompts", input_model=PromptQuery, read_only=True)
async def list_prompts(client: ThinkPromptClient, params: PromptQuery) -> Any:
    """List all available prompts from ThinkPrompt. Returns a paginated list of
    prompts with their titles, descriptions, and usage statistics."""
    return await client.list_prompts(params)


@tool("get_prompt", title="Get Prompt", input_model=GetPromptInput, read_only=True)
async def get_prompt(client: ThinkPromptClient, params: GetPromptInput) -> Any:
    """Get detailed information about a specific prompt, including its content
    and variables."""
    return await client.get_prompt(params.id)


@tool("execute_prompt", title="Execute Prompt", input_model=ExecutePromptInput)
async def execute_prompt(client: ThinkPromptClient, params: ExecutePromptInput) -> Any:
    """Execute a prompt with the specified variables. The prompt will be sent to
    the configured AI provider."""
    return await client.execute_prompt(params.id, params)


@tool("get_prompt_variables", title="Get Prompt Variables", input_model=PromptIdInput, read_only=True)
async def get_prompt_variables(client: ThinkPromptClient, params: PromptIdInput) -> Any:
    """Get the list of variables required by a prompt, with their types and
    descriptions."""
    return await client.get_prompt_variables(params.id)


@tool("create_prompt", title="Create Prompt", input_model=PromptCreate)
async def create_prompt(client: ThinkPromptClient, params: PromptCreate) -> Any:
    """Create a new prompt with title, content, and optional variables."""
    return await client.create_prompt(params)


@tool("update_prompt", title="Update Prompt", input_model=UpdatePromptInput, idempotent=True)
async def update_prompt(client: ThinkPromptClient, params: UpdatePromptInput) -> Any:
    """Update an existing prompt. Only include fields you want to change."""
    return await client.update_prompt(params.id, params)


# ─── Workspace Tools ─────────────────────────────────────────────────────────


@tool("list_workspaces", title="List Workspaces", read_only=True)
async def list_workspaces(client: ThinkPromptClient, params: NoInput) -> Any:
    """List all workspaces the user belongs to. Returns workspace names, roles,
    and which is the current default."""
    workspaces = await client.list_workspaces()
    return {
        "currentWorkspaceId": client.get_current_workspace_id(),
        "workspaces": workspaces,
    }


@tool("get_current_workspace", title="Get Current Workspace", read_only=True)
async def get_current_workspace(client: ThinkPromptClient, params: NoInput) -> Any:
    """Get the currently active workspace for this session."""
    workspace = await client.get_current_workspace()
    if workspace is None:
        return {"message": "No workspace selected or available"}
    return workspace


@tool("switch_workspace", title="Switch Workspace", input_model=SwitchWorkspaceInput, idempotent=True)
async def switch_workspace(client: ThinkPromptClient, params: SwitchWorkspaceInput) -> Any:
    """Switch to a different workspace. All subsequent API calls will use this
    workspace context."""
    return await client.switch_workspace(params.workspace_id)


# ─── Project Tools ───────────────────────────────────────────────────────────


@tool("list_projects", title="List Projects", input_model=ProjectQuery, read_only=True)
async def list_projects(client: ThinkPromptClient, params: ProjectQuery) -> Any:
    """List all projects in the current workspace."""
    return await client.list_projects(params)


@tool("get_project", title="Get Project", input_model=ProjectIdInput, read_only=True)
async def get_project(client: ThinkPromptClient, params: ProjectIdInput) -> Any:
    """Get detailed information about a project."""
    return await client.get_project(params.id)


@tool("create_project", title="Create Project", input_model=ProjectCreate)
async def create_project(client: ThinkPromptClient, params: ProjectCreate) -> Any:
    """Create a new project."""
    return await client.create_project(params)


@tool("update_project", title="Update Project", input_model=UpdateProjectInput, idempotent=True)
async def update_project(client: ThinkPromptClient, params: UpdateProjectInput) -> Any:
    """Update an existing project, or archive it. Only include fields you want
    to change."""
    return await client.update_project(params.id, params)


# ─── Feature Tools ───────────────────────────────────────────────────────────


@tool("list_features", title="List Features", input_model=ListFeaturesInput, read_only=True)
async def list_features(client: ThinkPromptClient, params: ListFeaturesInput) -> Any:
    """List all features/epics in a project (hierarchical)."""
    return await client.list_features(params.project_id, params)


@tool("get_feature", title="Get Feature", input_model=FeatureIdInput, read_only=True)
async def get_feature(client: ThinkPromptClient, params: FeatureIdInput) -> Any:
    """Get detailed information about a feature/epic."""
    return await client.get_feature(params.id)


@tool("create_feature", title="Create Feature", input_model=CreateFeatureInput)
async def create_feature(client: ThinkPromptClient, params: CreateFeatureInput) -> Any:
    """Create a new feature/epic in a project."""
    return await client.create_feature(params.project_id, params)


@tool("update_feature", title="Update Feature", input_model=UpdateFeatureInput, idempotent=True)
async def update_feature(client: ThinkPromptClient, params: UpdateFeatureInput) -> Any:
    """Update a feature/epic: rename, re-parent, reorder, or archive it."""
    return await client.update_feature(params.id, params)


# ─── Task Tools ──────────────────────────────────────────────────────────────


@tool("list_tasks", title="List Tasks", input_model=TaskQuery, read_only=True)
async def list_tasks(client: ThinkPromptClient, params: TaskQuery) -> Any:
    """List tasks with optional filters."""
    return await client.list_tasks(params)


@tool("get_task", title="Get Task", input_model=GetTaskInput, read_only=True)
async def get_task(client: ThinkPromptClient, params: GetTaskInput) -> Any:
    """Get detailed information about a task by ID or Kürzel."""
    if params.kuerzel:
        return await client.get_task_by_kuerzel(params.kuerzel)
    if params.id:
        return await client.get_task(params.id)
    raise InvalidArgumentsError("Either id or kuerzel must be provided")


@tool("create_task", title="Create Task", input_model=TaskCreate)
async def create_task(client: ThinkPromptClient, params: TaskCreate) -> Any:
    """Create a new task in a project."""
    return await client.create_task(params)


@tool("update_task", title="Update Task", input_model=UpdateTaskInput, idempotent=True)
async def update_task(client: ThinkPromptClient, params: UpdateTaskInput) -> Any:
    """Update an existing task."""
    return await client.update_task(params.id, params)


@tool("update_task_status", title="Update Task Status", input_model=UpdateTaskStatusInput, idempotent=True)
async def update_task_status(client: ThinkPromptClient, params: UpdateTaskStatusInput) -> Any:
    """Quick update of task status."""
    return await client.update_task_status(params.id, params.status)


@tool("ai_edit_task", title="AI Edit Task", input_model=AiEditTaskInput)
async def ai_edit_task(client: ThinkPromptClient, params: AiEditTaskInput) -> Any:
    """Edit task content using AI. Provide a prompt describing the changes."""
    return await client.ai_edit_task(params.id, params)


@tool("add_task_comment", title="Add Task Comment", input_model=AddTaskCommentInput)
async def add_task_comment(client: ThinkPromptClient, params: AddTaskCommentInput) -> Any:
    """Add a comment to a task."""
    return await client.add_task_comment(params.task_id, params)


@tool("list_task_comments", title="List Task Comments", input_model=TaskCommentsInput, read_only=True)
async def list_task_comments(client: ThinkPromptClient, params: TaskCommentsInput) -> Any:
    """List all comments on a task."""
    return await client.list_task_comments(params.task_id)


@tool("get_task_history", title="Get Task History", input_model=TaskIdInput, read_only=True)
async def get_task_history(client: ThinkPromptClient, params: TaskIdInput) -> Any:
    """Get the change history of a task."""
    return await client.get_task_history(params.id)
