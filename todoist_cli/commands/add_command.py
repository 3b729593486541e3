from typing import List, Optional

from ..todoist_api import TodoistClient
from ..todoist_api.data_models import AddTaskParams
from ..utils.output import Formatter
from . import CommandError, api_priority


def handle_add(
    client: TodoistClient,
    out: Formatter,
    content: str,
    description: str = "",
    due: str = "",
    priority: int = 0,
    project: Optional[str] = None,
    section: Optional[str] = None,
    labels: Optional[List[str]] = None,
):
    """Create a task. Project and section are given by name."""
    if not content.strip():
        raise CommandError("task content cannot be empty")
    if section and not project:
        raise CommandError("--section requires --project")

    params = AddTaskParams(
        content=content,
        description=description or "",
        due_string=due or "",
        priority=api_priority(priority),
        labels=list(labels or []),
    )
    if project:
        project_id = client.find_project(project).id
        params = params.model_copy(update={"project_id": project_id})
        if section:
            section_id = client.find_section(section, project_id).id
            params = params.model_copy(update={"section_id": section_id})

    out.write_task(client.add_task(params))
