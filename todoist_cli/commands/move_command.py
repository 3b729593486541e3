from typing import Optional

from ..todoist_api import TodoistClient
from ..utils.output import Formatter
from . import CommandError


def handle_move(
    client: TodoistClient,
    out: Formatter,
    task_id: str,
    section: Optional[str] = None,
    project: Optional[str] = None,
):
    """
    Move a task to another section or project.

    A section name is looked up among the sections of the task's current
    project (or of --project when both are given).
    """
    if not section and not project:
        raise CommandError("must specify either --section or --project")

    project_id = client.find_project(project).id if project else ""
    section_id = ""
    if section:
        scope = project_id or client.get_task(task_id).project_id
        section_id = client.find_section(section, scope).id

    client.move_task(task_id, section_id=section_id, project_id=project_id)

    if section:
        out.write_success(f"Moved task to section: {section}")
    else:
        out.write_success(f"Moved task to project: {project}")


def handle_reorder(client: TodoistClient, out: Formatter, task_id: str, order: int):
    if order < 0:
        raise CommandError("order must be zero or positive")
    client.reorder_task(task_id, order)
    out.write_success(f"Task order set to {order}")
