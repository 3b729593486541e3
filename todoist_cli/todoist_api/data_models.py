"""
Data models representing Todoist objects (tasks, projects, etc.).

Resources are immutable snapshots of what the API returned; they are never
reconciled with the server except by fetching them again.
"""

from typing import Any, ClassVar, Dict, FrozenSet, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


class Resource(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class Due(Resource):
    date: str = ""
    string: str = ""
    datetime: Optional[str] = None
    is_recurring: bool = False
    timezone: Optional[str] = None

    def display(self) -> str:
        return self.string or self.date

    def sort_key(self) -> str:
        return self.datetime or self.date


class Task(Resource):
    id: str
    content: str = ""
    description: str = ""
    project_id: str = ""
    section_id: Optional[str] = None
    parent_id: Optional[str] = None
    child_order: int = 0
    priority: int = 1
    due: Optional[Due] = None
    url: str = ""
    labels: List[str] = Field(default_factory=list)
    created_at: str = ""
    creator_id: str = ""
    assignee_id: Optional[str] = None
    assigner_id: Optional[str] = None
    is_completed: bool = False

    @field_validator("labels", mode="before")
    @classmethod
    def _null_labels(cls, v):
        return [] if v is None else v


class Project(Resource):
    id: str
    name: str = ""
    color: str = ""
    parent_id: Optional[str] = None
    child_order: int = 0
    comment_count: int = 0
    is_shared: bool = False
    is_favorite: bool = False
    is_inbox_project: bool = False
    is_team_inbox: bool = False
    view_style: str = ""
    url: str = ""


class Section(Resource):
    id: str
    project_id: str = ""
    section_order: int = 0
    name: str = ""


class Label(Resource):
    id: str
    name: str = ""
    color: str = ""
    item_order: int = 0
    is_favorite: bool = False


class Comment(Resource):
    id: str
    task_id: Optional[str] = None
    project_id: Optional[str] = None
    content: str = ""
    posted_at: str = ""


class Collaborator(Resource):
    id: str
    name: str = ""
    email: str = ""


class CompletedTask(Resource):
    id: str
    task_id: str = ""
    content: str = ""
    project_id: str = ""
    completed_at: str = ""


class CompletedTasksResponse(Resource):
    items: List[CompletedTask] = Field(default_factory=list)


_ANY_JSON = TypeAdapter(Any)


class Page(BaseModel, Generic[T]):
    """Cursor-paginated list envelope."""
    results: List[T]
    next_cursor: Optional[str] = None


def decode_list(data: bytes, model: Type[M]) -> List[M]:
    """Decode a list response.

    An object carrying ``results`` is read as the paginated envelope; anything
    else must be a bare array. Only the first page is read; ``next_cursor`` is
    not followed.
    """
    raw = _ANY_JSON.validate_json(data)
    if isinstance(raw, dict) and raw.get("results") is not None:
        return list(Page[model].model_validate(raw).results)
    return TypeAdapter(List[model]).validate_python(raw)


def decode_one(data: bytes, model: Type[M]) -> M:
    return model.model_validate_json(data)


# --- request parameters ----------------------------------------------------

class Params(BaseModel):
    """Request payloads. Empty fields are left out of the wire form."""

    always_sent: ClassVar[FrozenSet[str]] = frozenset()

    def to_payload(self) -> Dict[str, Any]:
        payload = {}
        for key, value in self.model_dump().items():
            if key in self.always_sent or value not in ("", 0, None, [], False):
                payload[key] = value
        return payload


class AddTaskParams(Params):
    always_sent: ClassVar[FrozenSet[str]] = frozenset({"content"})

    content: str
    description: str = ""
    due_string: str = ""
    due_date: str = ""
    priority: int = 0
    project_id: str = ""
    section_id: str = ""
    parent_id: str = ""
    labels: List[str] = Field(default_factory=list)
    assignee_id: str = ""


class UpdateTaskParams(Params):
    content: str = ""
    description: str = ""
    due_string: str = ""
    due_date: str = ""
    priority: int = 0
    labels: List[str] = Field(default_factory=list)
    assignee_id: str = ""


class AddProjectParams(Params):
    always_sent: ClassVar[FrozenSet[str]] = frozenset({"name"})

    name: str
    color: str = ""
    is_favorite: bool = False
