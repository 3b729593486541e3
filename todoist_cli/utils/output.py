"""Human and JSON rendering of command results.

JSON mode wraps everything in an envelope::

    {"success": true, "data": ...}
    {"success": false, "error": "..."}
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel
from rich.console import Console
from rich.text import Text

from ..todoist_api.data_models import (
    Collaborator,
    Comment,
    CompletedTasksResponse,
    Label,
    Project,
    Section,
    Task,
)
from ..todoist_api.priority import priority_label

PRIORITY_STYLES = {4: "red", 3: "yellow", 2: "blue"}
DIM = "bright_black"


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    return value


def task_roots(tasks: Sequence[Task]) -> List[Task]:
    """Tasks without a parent, or whose parent is not in ``tasks``."""
    ids = {t.id for t in tasks}
    return [t for t in tasks if not t.parent_id or t.parent_id not in ids]


def _by_order(tasks: Iterable[Task]) -> List[Task]:
    return sorted(tasks, key=lambda t: t.child_order)


class Formatter:
    def __init__(self, as_json: bool = False, console: Optional[Console] = None,
                 err_console: Optional[Console] = None):
        self.as_json = as_json
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    # ---- envelope ----

    def json(self, data: Any) -> None:
        env: Dict[str, Any] = {"success": True}
        if data is not None:
            env["data"] = _jsonable(data)
        self.console.out(json.dumps(env), highlight=False)

    def write_error(self, err: BaseException) -> None:
        if self.as_json:
            self.console.out(json.dumps({"success": False, "error": str(err)}), highlight=False)
        else:
            self.err_console.print(Text(f"Error: {err}"), soft_wrap=True)

    def write_success(self, message: str) -> None:
        if self.as_json:
            self.json({"message": message})
        else:
            self._line(Text(message))

    def _line(self, text: Text) -> None:
        self.console.print(text, soft_wrap=True)

    # ---- tasks ----

    def format_task(self, t: Task) -> Text:
        parts = Text()
        marker = priority_label(t.priority)
        if marker:
            parts.append(f"[{marker}]", style=PRIORITY_STYLES.get(t.priority, ""))
            parts.append(" ")
        parts.append(t.content)
        if t.due is not None:
            parts.append(" ")
            parts.append(f"({t.due.display()})", style=DIM)
        if t.labels:
            parts.append(" ")
            parts.append("@" + " @".join(t.labels), style="cyan")
        return parts

    def format_task_line(self, t: Task) -> Text:
        return Text.assemble((t.id, DIM), "  ", self.format_task(t))

    def write_tasks(self, tasks: Sequence[Task]) -> None:
        if self.as_json:
            self.json(list(tasks))
            return
        if not tasks:
            self._line(Text("No tasks found."))
            return

        children: Dict[str, List[Task]] = {}
        for t in tasks:
            if t.parent_id:
                children.setdefault(t.parent_id, []).append(t)

        def walk(task: Task, level: int) -> None:
            self._line(Text("  " * level) + self.format_task_line(task))
            for child in _by_order(children.get(task.id, [])):
                walk(child, level + 1)

        for root in _by_order(task_roots(tasks)):
            walk(root, 0)

    def write_task(self, t: Task) -> None:
        if self.as_json:
            self.json(t)
            return
        self._line(self.format_task_line(t))
        if t.description:
            self._line(Text("    ") + Text(t.description, style=DIM))

    def write_task_details(self, t: Task, comments: Sequence[Comment]) -> None:
        if self.as_json:
            self.json(t)
            return
        self._line(Text(f"ID:       {t.id}"))
        self._line(Text(f"Content:  {t.content}"))
        if t.description:
            self._line(Text(f"Notes:    {t.description}"))
        if t.due is not None:
            self._line(Text(f"Due:      {t.due.display()}"))
        marker = priority_label(t.priority)
        if marker:
            self._line(Text(f"Priority: {marker}"))
        if t.labels:
            self._line(Text("Labels:   @" + " @".join(t.labels)))
        self._line(Text(f"URL:      {t.url}"))
        if comments:
            self._line(Text(f"\nComments ({len(comments)}):"))
            for c in comments:
                self._line(Text(f"  [{c.posted_at[:10]}] {c.content}"))

    def write_tasks_with_comments(self, tasks: Sequence[Task], comments: Dict[str, List[Comment]]) -> None:
        if not tasks:
            self._line(Text("No tasks found."))
            return
        for i, t in enumerate(tasks):
            self._line(self.format_task_line(t))
            if t.description:
                self._line(Text("    ") + Text(t.description, style=DIM))
            task_comments = comments.get(t.id, [])
            if task_comments:
                self._line(Text(f"    Comments ({len(task_comments)}):"))
                for c in task_comments:
                    self._line(Text(f"      [{c.posted_at[:10]}] {c.content}"))
            if i < len(tasks) - 1:
                self._line(Text(""))

    # ---- other resources ----

    def format_project(self, p: Project) -> Text:
        markers = []
        if p.is_favorite:
            markers.append("*")
        if p.is_inbox_project:
            markers.append("inbox")
        text = Text(p.name)
        if markers:
            text.append(" ")
            text.append("[" + ", ".join(markers) + "]", style=DIM)
        return text

    def write_projects(self, projects: Sequence[Project]) -> None:
        if self.as_json:
            self.json(list(projects))
            return
        if not projects:
            self._line(Text("No projects found."))
            return
        for p in projects:
            self.write_project(p)

    def write_project(self, p: Project) -> None:
        if self.as_json:
            self.json(p)
            return
        self._line(Text.assemble((p.id, DIM), "  ", self.format_project(p)))

    def write_sections(self, sections: Sequence[Section]) -> None:
        if self.as_json:
            self.json(list(sections))
            return
        if not sections:
            self._line(Text("No sections found."))
            return
        for s in sections:
            self._line(Text.assemble((s.id, DIM), "  ", s.name))

    def write_labels(self, labels: Sequence[Label]) -> None:
        if self.as_json:
            self.json(list(labels))
            return
        if not labels:
            self._line(Text("No labels found."))
            return
        for label in labels:
            self._line(Text.assemble((label.id, DIM), "  ", ("@" + label.name, "cyan")))

    def write_comments(self, comments: Sequence[Comment]) -> None:
        if self.as_json:
            self.json(list(comments))
            return
        if not comments:
            self._line(Text("No comments found."))
            return
        for c in comments:
            self._line(Text.assemble((c.posted_at, DIM), "  ", c.content))

    def write_collaborators(self, collaborators: Sequence[Collaborator]) -> None:
        if self.as_json:
            self.json(list(collaborators))
            return
        if not collaborators:
            self._line(Text("No collaborators found."))
            return
        for c in collaborators:
            self._line(Text.assemble((c.id, DIM), "  ", c.name, " ", (f"<{c.email}>", DIM)))

    def write_completed_tasks(self, resp: CompletedTasksResponse) -> None:
        if self.as_json:
            self.json(resp)
            return
        if not resp.items:
            self._line(Text("No completed tasks found."))
            return
        for t in resp.items:
            self._line(Text.assemble((t.completed_at[:10], DIM), "  ", (t.content, "strike")))
