from typing import Optional

from dateutil import parser as date_parser

from ..todoist_api import TodoistClient
from ..utils.output import Formatter
from . import CommandError

API_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"


def normalize_date(value: Optional[str], flag: str) -> str:
    """Accept any date python-dateutil understands; send the API's datetime form."""
    if not value:
        return ""
    try:
        return date_parser.parse(value).strftime(API_DATETIME_FORMAT)
    except (ValueError, OverflowError) as e:
        raise CommandError(f"invalid {flag} date: {value}") from e


def handle_completed(
    client: TodoistClient,
    out: Formatter,
    project: Optional[str] = None,
    since: Optional[str] = None,
    until: Optional[str] = None,
    limit: int = 30,
):
    project_id = client.find_project(project).id if project else ""
    resp = client.get_completed_tasks(
        project_id=project_id,
        since=normalize_date(since, "--since"),
        until=normalize_date(until, "--until"),
        limit=limit,
    )
    out.write_completed_tasks(resp)
