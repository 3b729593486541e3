from typing import List, Optional

from ..todoist_api import TodoistClient
from ..utils.output import Formatter


def handle_comment(client: TodoistClient, out: Formatter, task_id: str, message: Optional[List[str]] = None):
    """Show the comments of a task, or add one when a message is given."""
    if message:
        comment = client.add_comment(" ".join(message), task_id=task_id)
        if out.as_json:
            out.json(comment)
            return
        out.write_success("Comment added")
        return

    out.write_comments(client.get_comments(task_id=task_id))
