from typing import Optional

from ..todoist_api import TodoistClient
from ..utils.output import Formatter


def handle_sections(client: TodoistClient, out: Formatter, project: Optional[str] = None):
    """List sections, optionally only those of one project."""
    project_id = client.find_project(project).id if project else ""
    out.write_sections(client.get_sections(project_id))


def handle_section_add(client: TodoistClient, out: Formatter, name: str, project: str):
    found = client.find_project(project)
    section = client.add_section(name, found.id)
    if out.as_json:
        out.json(section)
        return
    out.write_success(f"Created section: {section.name}")
