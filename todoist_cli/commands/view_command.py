from ..todoist_api import RequestCancelled, TodoistClient, TodoistError
from ..utils.logger import get_logger
from ..utils.output import Formatter

log = get_logger(__name__)


def handle_view(client: TodoistClient, out: Formatter, task_id: str):
    """Show one task. Comments are extra detail: failing to load them is not an error."""
    task = client.get_task(task_id)
    if out.as_json:
        out.json(task)
        return

    try:
        comments = client.get_comments(task_id=task_id)
    except RequestCancelled:
        raise
    except TodoistError as e:
        log.debug("comments for task %s unavailable: %s", task_id, e)
        comments = []
    out.write_task_details(task, comments)
