from typing import List, Sequence

from ..todoist_api import TodoistClient
from ..todoist_api.data_models import Task
from ..utils.output import Formatter


def search_tasks(tasks: Sequence[Task], query: str) -> List[Task]:
    """Tasks whose content or description contains ``query``, ignoring case."""
    needle = query.lower()
    return [t for t in tasks if needle in t.content.lower() or needle in t.description.lower()]


def handle_search(client: TodoistClient, out: Formatter, query: str):
    """
    Search active tasks by text. The API has no text search, so every active
    task is fetched and filtered locally.
    """
    out.write_tasks(search_tasks(client.get_tasks(), query))
