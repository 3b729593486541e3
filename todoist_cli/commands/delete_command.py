from typing import Callable

from ..todoist_api import TodoistClient
from ..utils.output import Formatter


def handle_delete(
    client: TodoistClient,
    out: Formatter,
    task_id: str,
    force: bool,
    confirm: Callable[[str], bool],
):
    """Permanently delete a task, asking first unless forced or in JSON mode."""
    task = client.get_task(task_id)

    if not force and not out.as_json:
        if not confirm(f"Delete task: {task.content}\nThis cannot be undone. Continue?"):
            out.write_success("Cancelled")
            return

    client.delete_task(task_id)
    out.write_success(f"Deleted: {task.content}")
