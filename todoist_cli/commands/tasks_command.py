from enum import Enum
from typing import List, Optional, Sequence

from ..todoist_api import TodoistClient
from ..todoist_api.data_models import Task
from ..utils.output import Formatter

TODAY_FILTER = "today | overdue"
OVERDUE_FILTER = "overdue"


class SortField(str, Enum):
    priority = "priority"
    due = "due"
    name = "name"
    created = "created"


def build_filter(
    filter: Optional[str],
    project: Optional[str],
    today: bool = False,
    overdue: bool = False,
    all_tasks: bool = False,
) -> str:
    """
    Resolve the filter query sent to the API.

    An explicit --filter wins, then --overdue, then --all. Without any of them
    the default is today's tasks, except when a project is given: then every
    active task of the project is listed unless --today was passed explicitly.
    """
    if filter:
        return filter
    if overdue:
        return OVERDUE_FILTER
    if all_tasks:
        return ""
    return TODAY_FILTER if today or not project else ""


def _due_key(task: Task):
    due = task.due.sort_key() if task.due is not None else ""
    # tasks without a due date go last
    return (due == "", due, task.child_order)


def sort_tasks(tasks: Sequence[Task], field: Optional[str]) -> List[Task]:
    field = SortField(field).value if field else ""
    if field == "priority":
        return sorted(tasks, key=lambda t: -t.priority)
    if field == "due":
        return sorted(tasks, key=_due_key)
    if field == "name":
        return sorted(tasks, key=lambda t: t.content.lower())
    if field == "created":
        return sorted(tasks, key=lambda t: t.created_at)
    return sorted(tasks, key=lambda t: t.child_order)


def handle_tasks(
    client: TodoistClient,
    out: Formatter,
    filter: Optional[str] = None,
    project: Optional[str] = None,
    today: bool = False,
    overdue: bool = False,
    all_tasks: bool = False,
    details: bool = False,
    sort_by: Optional[str] = None,
):
    """List tasks, optionally with their comments."""
    project_id = client.find_project(project).id if project else ""
    query = build_filter(filter, project, today, overdue, all_tasks)

    tasks = client.get_tasks(project_id, query)
    if sort_by:
        tasks = sort_tasks(tasks, sort_by)

    if details and not out.as_json:
        comments = client.get_comments_for_tasks(tasks)
        out.write_tasks_with_comments(tasks, comments)
        return

    out.write_tasks(tasks)
