"""Typed Todoist resource operations built on the transport."""
from __future__ import annotations

import time
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..utils.logger import get_logger
from .cancel import CancelToken
from .data_models import (
    AddProjectParams,
    AddTaskParams,
    Collaborator,
    Comment,
    CompletedTasksResponse,
    Label,
    Project,
    Section,
    Task,
    UpdateTaskParams,
    decode_list,
    decode_one,
)
from .enrichment import DEFAULT_LIMIT, fetch_all
from .errors import MarshalError
from .resolve import find_by_name
from .transport import ClientConfig, Transport

log = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


def command_uuid() -> str:
    """Token for a command batch entry; unique within this process run."""
    return str(time.time_ns())


def _parse_list(data: bytes, model: Type[M], what: str) -> List[M]:
    try:
        return decode_list(data, model)
    except ValidationError as e:
        raise MarshalError(f"failed to parse {what}: {e}") from e


def _parse_one(data: bytes, model: Type[M], what: str) -> M:
    try:
        return decode_one(data, model)
    except ValidationError as e:
        raise MarshalError(f"failed to parse {what}: {e}") from e


class TodoistClient:
    """
    Todoist REST client.

    One instance per command invocation. Every method either returns decoded
    resources or raises a TodoistError subclass.
    """

    def __init__(self, config: ClientConfig, session=None):
        self.config = config
        self.transport = Transport(config, session=session)

    @property
    def cancel_token(self) -> CancelToken:
        return self.transport.cancel_token

    def close(self) -> None:
        self.transport.close()

    def _request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        cancel: Optional[CancelToken] = None,
    ) -> bytes:
        return self.transport.request(method, endpoint, data, cancel=cancel)

    def _sync(self, command_type: str, args: Dict[str, Any]) -> None:
        commands = [{"type": command_type, "uuid": command_uuid(), "args": args}]
        self._request("POST", "sync", {"commands": commands})

    # ========== Tasks ==========

    def get_tasks(self, project_id: str = "", filter: str = "", cancel: Optional[CancelToken] = None) -> List[Task]:
        """Active tasks, optionally scoped to a project and/or a filter query."""
        params = {}
        if project_id:
            params["project_id"] = project_id
        if filter:
            params["filter"] = filter
        resp = self._request("GET", "tasks", params or None, cancel=cancel)
        return _parse_list(resp, Task, "tasks")

    def get_task(self, task_id: str) -> Task:
        resp = self._request("GET", f"tasks/{task_id}")
        return _parse_one(resp, Task, "task")

    def add_task(self, params: AddTaskParams) -> Task:
        resp = self._request("POST", "tasks", params.to_payload())
        return _parse_one(resp, Task, "task")

    def update_task(self, task_id: str, params: UpdateTaskParams) -> Task:
        resp = self._request("POST", f"tasks/{task_id}", params.to_payload())
        return _parse_one(resp, Task, "task")

    def complete_task(self, task_id: str) -> None:
        self._request("POST", f"tasks/{task_id}/close")

    def reopen_task(self, task_id: str) -> None:
        self._request("POST", f"tasks/{task_id}/reopen")

    def delete_task(self, task_id: str) -> None:
        self._request("DELETE", f"tasks/{task_id}")

    def move_task(self, task_id: str, section_id: str = "", project_id: str = "") -> None:
        """Move a task to a section, or failing that to a project."""
        args = {"id": task_id}
        if section_id:
            args["section_id"] = section_id
        elif project_id:
            args["project_id"] = project_id
        self._sync("item_move", args)

    def reorder_task(self, task_id: str, order: int) -> None:
        self._sync("item_reorder", {"items": [{"id": task_id, "child_order": order}]})

    # ========== Projects ==========

    def get_projects(self) -> List[Project]:
        resp = self._request("GET", "projects")
        return _parse_list(resp, Project, "projects")

    def get_project(self, project_id: str) -> Project:
        resp = self._request("GET", f"projects/{project_id}")
        return _parse_one(resp, Project, "project")

    def find_project(self, name: str) -> Project:
        """First project whose name contains ``name``, case-insensitively."""
        return find_by_name(self.get_projects(), name, "project")

    def add_project(self, params: AddProjectParams) -> Project:
        resp = self._request("POST", "projects", params.to_payload())
        return _parse_one(resp, Project, "project")

    def delete_project(self, project_id: str) -> None:
        self._request("DELETE", f"projects/{project_id}")

    def get_collaborators(self, project_id: str) -> List[Collaborator]:
        resp = self._request("GET", f"projects/{project_id}/collaborators")
        return _parse_list(resp, Collaborator, "collaborators")

    # ========== Sections ==========

    def get_sections(self, project_id: str = "") -> List[Section]:
        data = {"project_id": project_id} if project_id else None
        resp = self._request("GET", "sections", data)
        return _parse_list(resp, Section, "sections")

    def find_section(self, name: str, project_id: str = "") -> Section:
        return find_by_name(self.get_sections(project_id), name, "section")

    def add_section(self, name: str, project_id: str) -> Section:
        resp = self._request("POST", "sections", {"name": name, "project_id": project_id})
        return _parse_one(resp, Section, "section")

    # ========== Labels ==========

    def get_labels(self) -> List[Label]:
        resp = self._request("GET", "labels")
        return _parse_list(resp, Label, "labels")

    def add_label(self, name: str, color: str = "") -> Label:
        params = {"name": name}
        if color:
            params["color"] = color
        resp = self._request("POST", "labels", params)
        return _parse_one(resp, Label, "label")

    # ========== Comments ==========

    def get_comments(self, task_id: str = "", project_id: str = "", cancel: Optional[CancelToken] = None) -> List[Comment]:
        params = {}
        if task_id:
            params["task_id"] = task_id
        elif project_id:
            params["project_id"] = project_id
        resp = self._request("GET", "comments", params, cancel=cancel)
        return _parse_list(resp, Comment, "comments")

    def add_comment(self, content: str, task_id: str = "", project_id: str = "") -> Comment:
        params = {"content": content}
        if task_id:
            params["task_id"] = task_id
        elif project_id:
            params["project_id"] = project_id
        resp = self._request("POST", "comments", params)
        return _parse_one(resp, Comment, "comment")

    def get_comments_for_tasks(
        self,
        tasks: Sequence[Task],
        limit: int = DEFAULT_LIMIT,
        cancel: Optional[CancelToken] = None,
    ) -> Dict[str, List[Comment]]:
        """Comments of every task, fetched concurrently and keyed by task ID."""
        return fetch_all(
            tasks,
            lambda task, token: self.get_comments(task.id, cancel=token),
            limit=limit,
            cancel=cancel if cancel is not None else self.cancel_token,
        )

    # ========== Completed tasks ==========

    def get_completed_tasks(
        self, project_id: str = "", since: str = "", until: str = "", limit: int = 30
    ) -> CompletedTasksResponse:
        params: Dict[str, Any] = {"limit": limit}
        if project_id:
            params["project_id"] = project_id
        if since:
            params["since"] = since
        if until:
            params["until"] = until
        resp = self._request("POST", "completed/get_all", params)
        return _parse_one(resp, CompletedTasksResponse, "completed tasks")
