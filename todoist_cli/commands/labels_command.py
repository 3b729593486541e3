from ..todoist_api import TodoistClient
from ..utils.output import Formatter


def handle_labels(client: TodoistClient, out: Formatter):
    out.write_labels(client.get_labels())


def handle_label_add(client: TodoistClient, out: Formatter, name: str, color: str = ""):
    label = client.add_label(name.lstrip("@"), color or "")
    if out.as_json:
        out.json(label)
        return
    out.write_success(f"Created label: @{label.name}")
