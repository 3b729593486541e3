from typing import List, Optional

from ..todoist_api import TodoistClient
from ..todoist_api.data_models import UpdateTaskParams
from ..utils.output import Formatter
from . import api_priority


def handle_update(
    client: TodoistClient,
    out: Formatter,
    task_id: str,
    content: str = "",
    description: str = "",
    due: str = "",
    priority: int = 0,
    labels: Optional[List[str]] = None,
):
    """Update the given fields of a task; empty fields are left untouched."""
    params = UpdateTaskParams(
        content=content or "",
        description=description or "",
        due_string=due or "",
        priority=api_priority(priority),
        labels=list(labels or []),
    )
    out.write_task(client.update_task(task_id, params))


def handle_reopen(client: TodoistClient, out: Formatter, task_id: str):
    client.reopen_task(task_id)
    out.write_success("Task reopened")
