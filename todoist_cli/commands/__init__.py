"""Command handlers.

Each ``handle_*`` function receives a TodoistClient (where it needs one) and a
Formatter, performs one command and renders the result.
"""

from ..todoist_api.errors import TodoistError
from ..todoist_api.priority import to_api_priority


class CommandError(TodoistError):
    """Invalid combination of command arguments."""
    pass


def api_priority(priority: int) -> int:
    """User priority (1 = highest) to the API scale, as a command error when out of range."""
    try:
        return to_api_priority(priority or 0)
    except ValueError as e:
        raise CommandError(str(e)) from e
