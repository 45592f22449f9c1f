"""
ThinkPrompt API data shapes.

Response records are declared as TypedDicts and returned exactly as decoded
from JSON. Request parameters are pydantic models: their JSON schemas are the
MCP tool input contracts, and their "fields set" tracking decides which keys
go on the wire.
"""

from typing import Any, Dict, List, Literal, Optional, TypedDict, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

VariableType = Literal["text", "textarea", "number", "select", "date", "boolean"]
WorkspaceRole = Literal["admin", "editor", "viewer", "api_user"]
TaskStatus = Literal["open", "in_progress", "blocked", "review", "done"]
TaskPriority = Literal["low", "medium", "high", "urgent"]
TaskComplexity = Literal["trivial", "low", "medium", "high", "critical"]
CommentSource = Literal["user", "mcp", "ai"]
AiProvider = Literal["openai", "anthropic"]

VariableValue = Union[str, int, float, bool]


# ─── Response Records ────────────────────────────────────────────────────────


class PromptVariable(TypedDict, total=False):
    name: str
    type: VariableType
    label: str
    description: str
    required: bool
    defaultValue: VariableValue
    options: List[str]
    validation: Dict[str, Any]


class Prompt(TypedDict, total=False):
    id: str
    title: str
    description: Optional[str]
    content: str
    variables: List[PromptVariable]
    usageCount: int
    createdAt: str
    updatedAt: str


class PaginationMeta(TypedDict):
    total: int
    page: int
    limit: int
    totalPages: int


class PaginatedResponse(TypedDict):
    data: List[Any]
    meta: PaginationMeta


class TokenUsage(TypedDict):
    input: int
    output: int


class ExecutionResult(TypedDict, total=False):
    content: str
    tokensUsed: TokenUsage
    executionTimeMs: int


class Workspace(TypedDict, total=False):
    id: str
    name: str
    slug: str
    logo: Optional[str]
    role: WorkspaceRole
    isDefault: bool
    joinedAt: str


class ProjectLinkRecord(TypedDict, total=False):
    type: str
    url: str
    label: str


class Project(TypedDict, total=False):
    id: str
    tenantId: str
    name: str
    description: Optional[str]
    slug: str
    links: List[ProjectLinkRecord]
    isArchived: bool
    taskCounter: int
    createdBy: str
    createdAt: str
    updatedAt: str
    assignees: List[Dict[str, Any]]


class Feature(TypedDict, total=False):
    id: str
    projectId: str
    parentId: Optional[str]
    name: str
    description: Optional[str]
    sortOrder: int
    isArchived: bool
    children: List["Feature"]
    createdAt: str
    updatedAt: str


class Task(TypedDict, total=False):
    id: str
    projectId: str
    featureId: Optional[str]
    taskNumber: int
    kuerzel: str
    title: str
    description: Optional[str]
    content: Optional[str]
    status: TaskStatus
    complexity: TaskComplexity
    priority: TaskPriority
    estimationHours: Optional[float]
    sortOrder: int
    isArchived: bool
    createdBy: str
    createdAt: str
    updatedAt: str
    assignees: List[Dict[str, Any]]
    project: Dict[str, Any]
    feature: Dict[str, Any]


class TaskComment(TypedDict, total=False):
    id: str
    taskId: str
    content: str
    mentionedUsers: List[str]
    createdBy: str
    createdBySource: CommentSource
    isEdited: bool
    createdAt: str
    updatedAt: str


class TaskHistoryEntry(TypedDict, total=False):
    id: str
    taskId: str
    changeType: str
    fieldName: Optional[str]
    oldValue: Optional[str]
    newValue: Optional[str]
    changedBy: str
    changeSource: str
    createdAt: str


# ─── Request Parameters ──────────────────────────────────────────────────────


class ApiModel(BaseModel):
    """Base for request parameter objects (camelCase on the wire)."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class VariableValidation(ApiModel):
    """Advisory validation bounds for a prompt variable."""

    min: Optional[float] = Field(default=None, description="Minimum value or length")
    max: Optional[float] = Field(default=None, description="Maximum value or length")
    pattern: Optional[str] = Field(default=None, description="Regular expression the value should match")


class PromptVariableInput(ApiModel):
    """A variable declared by a prompt template."""

    name: str = Field(..., description="Variable name (without braces)", min_length=1)
    type: VariableType = Field(..., description="Variable type")
    label: Optional[str] = Field(default=None, description="Display label")
    description: Optional[str] = Field(default=None, description="Variable description")
    required: Optional[bool] = Field(default=None, description="Whether the variable is required")
    default_value: Optional[VariableValue] = Field(default=None, description="Default value for the variable")
    options: Optional[List[str]] = Field(default=None, description="Options for select type")
    validation: Optional[VariableValidation] = Field(default=None, description="Validation hints (min/max/pattern)")


class PromptQuery(ApiModel):
    """Filters for listing prompts."""

    limit: Optional[int] = Field(default=None, description="Maximum number of prompts to return (default: 20)", ge=1)
    page: Optional[int] = Field(default=None, description="Page number for pagination (default: 1)", ge=1)
    search: Optional[str] = Field(default=None, description="Search query to filter prompts by title or description")
    tags: Optional[List[str]] = Field(default=None, description="Filter prompts by tags")


class PromptCreate(ApiModel):
    """Fields for a new prompt."""

    title: str = Field(..., description="The title of the prompt", min_length=1)
    content: str = Field(..., description="The prompt content with {{variable}} placeholders", min_length=1)
    description: Optional[str] = Field(default=None, description="Optional description of the prompt")
    variables: Optional[List[PromptVariableInput]] = Field(default=None, description="List of variables used in the prompt")
    is_public: Optional[bool] = Field(default=None, description="Whether the prompt is publicly visible")


class PromptUpdate(ApiModel):
    """Partial prompt update; only fields that are set are sent."""

    title: Optional[str] = Field(default=None, description="New title for the prompt")
    content: Optional[str] = Field(default=None, description="New prompt content with {{variable}} placeholders")
    description: Optional[str] = Field(default=None, description="New description of the prompt")
    variables: Optional[List[PromptVariableInput]] = Field(default=None, description="Updated list of variables")
    is_public: Optional[bool] = Field(default=None, description="Whether the prompt is publicly visible")


class PromptExecution(ApiModel):
    """Variables and provider options for running a prompt."""

    variables: Dict[str, VariableValue] = Field(
        ...,
        description="Key-value pairs of variables to substitute in the prompt",
    )
    provider: Optional[str] = Field(default=None, description='AI provider to use (e.g., "openai", "anthropic")')
    model: Optional[str] = Field(default=None, description='Model to use (e.g., "gpt-4o", "claude-3-sonnet")')


class ProjectLink(ApiModel):
    """External link attached to a project (design, wiki, repository...)."""

    type: str = Field(..., description="Link type (e.g., 'design', 'wiki', 'repo')")
    url: str = Field(..., description="Link URL")
    label: Optional[str] = Field(default=None, description="Display label")


class ProjectQuery(ApiModel):
    """Filters for listing projects."""

    include_archived: Optional[bool] = Field(default=None, description="Include archived projects (default: false)")


class ProjectCreate(ApiModel):
    """Fields for a new project."""

    name: str = Field(..., description="Project name", min_length=1)
    slug: str = Field(..., description='Uppercase prefix for task numbering (e.g., "TP")', min_length=1)
    description: Optional[str] = Field(default=None, description="Project description")
    links: Optional[List[ProjectLink]] = Field(default=None, description="Links to design, wiki, etc.")


class ProjectUpdate(ApiModel):
    """Partial project update; only fields that are set are sent."""

    name: Optional[str] = Field(default=None, description="New project name")
    slug: Optional[str] = Field(default=None, description="New uppercase task prefix")
    description: Optional[str] = Field(default=None, description="New project description")
    links: Optional[List[ProjectLink]] = Field(default=None, description="Replacement list of links")
    is_archived: Optional[bool] = Field(default=None, description="Archive or restore the project")


class FeatureQuery(ApiModel):
    """Filters for listing a project's features."""

    include_archived: Optional[bool] = Field(default=None, description="Include archived features")


class FeatureCreate(ApiModel):
    """Fields for a new feature/epic."""

    name: str = Field(..., description="Feature name", min_length=1)
    description: Optional[str] = Field(default=None, description="Feature description")
    parent_id: Optional[str] = Field(default=None, description="Parent feature ID for hierarchy (Epic > Story)")


class FeatureUpdate(ApiModel):
    """Partial feature update; only fields that are set are sent."""

    name: Optional[str] = Field(default=None, description="New feature name")
    description: Optional[str] = Field(default=None, description="New feature description")
    parent_id: Optional[str] = Field(default=None, description="New parent feature ID")
    sort_order: Optional[int] = Field(default=None, description="Position among sibling features")
    is_archived: Optional[bool] = Field(default=None, description="Archive or restore the feature")


class TaskQuery(ApiModel):
    """Filters for listing tasks."""

    project_id: Optional[str] = Field(default=None, description="Filter by project")
    feature_id: Optional[str] = Field(default=None, description="Filter by feature")
    status: Optional[TaskStatus] = Field(default=None, description="Filter by status")
    priority: Optional[TaskPriority] = Field(default=None, description="Filter by priority")
    search: Optional[str] = Field(default=None, description="Search in title, description, kürzel")
    page: Optional[int] = Field(default=None, description="Page number", ge=1)
    limit: Optional[int] = Field(default=None, description="Items per page", ge=1)


class TaskCreate(ApiModel):
    """Fields for a new task."""

    project_id: str = Field(..., description="The UUID of the project", min_length=1)
    feature_id: Optional[str] = Field(default=None, description="Optional feature/epic to assign to")
    title: str = Field(..., description="Task title", min_length=1)
    description: Optional[str] = Field(default=None, description="Short description")
    content: Optional[str] = Field(default=None, description="Full markdown content (DB structure, SQL, etc.)")
    status: Optional[TaskStatus] = Field(default=None, description="Task status (default: open)")
    priority: Optional[TaskPriority] = Field(default=None, description="Task priority (default: medium)")
    complexity: Optional[TaskComplexity] = Field(default=None, description="Task complexity (default: medium)")
    estimation_hours: Optional[float] = Field(default=None, description="Estimated hours", ge=0)


class TaskUpdate(ApiModel):
    """Partial task update; only fields that are set are sent."""

    title: Optional[str] = Field(default=None, description="New task title")
    description: Optional[str] = Field(default=None, description="New short description")
    content: Optional[str] = Field(default=None, description="New markdown content")
    status: Optional[TaskStatus] = Field(default=None, description="New status")
    priority: Optional[TaskPriority] = Field(default=None, description="New priority")
    complexity: Optional[TaskComplexity] = Field(default=None, description="New complexity")
    estimation_hours: Optional[float] = Field(default=None, description="New estimate in hours", ge=0)
    feature_id: Optional[str] = Field(default=None, description="Move the task to this feature")


class TaskAiEdit(ApiModel):
    """Instructions for an AI-assisted task content edit."""

    prompt: str = Field(..., description="Instructions for AI to modify the task content", min_length=1)
    provider: Optional[AiProvider] = Field(default=None, description="AI provider")
    model: Optional[str] = Field(default=None, description="Model to use")


class TaskCommentCreate(ApiModel):
    """Fields for a new task comment."""

    content: str = Field(..., description="Comment content (markdown)", min_length=1)
    mentioned_users: Optional[List[str]] = Field(default=None, description="User IDs to mention")
