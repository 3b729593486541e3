from ..todoist_api import TodoistClient
from ..todoist_api.data_models import AddProjectParams
from ..utils.output import Formatter


def handle_projects(client: TodoistClient, out: Formatter):
    out.write_projects(client.get_projects())


def handle_project_add(client: TodoistClient, out: Formatter, name: str, color: str = "", favorite: bool = False):
    params = AddProjectParams(name=name, color=color or "", is_favorite=favorite)
    out.write_project(client.add_project(params))


def handle_project_delete(client: TodoistClient, out: Formatter, project_id: str):
    found = client.get_project(project_id)
    client.delete_project(found.id)
    out.write_success(f"Deleted project: {found.name}")


def handle_collaborators(client: TodoistClient, out: Formatter, project: str):
    found = client.find_project(project)
    out.write_collaborators(client.get_collaborators(found.id))
