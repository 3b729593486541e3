from ..todoist_api import TodoistClient
from ..utils.output import Formatter


def handle_complete(client: TodoistClient, out: Formatter, task_id: str):
    """Close a task. It is fetched first so the message can name it."""
    task = client.get_task(task_id)
    client.complete_task(task_id)
    out.write_success(f"Completed: {task.content}")
