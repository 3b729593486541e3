#!/usr/bin/env python3
import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable, List, Optional

import typer

from . import __version__
from .commands.add_command import handle_add
from .commands.auth_command import handle_auth, handle_auth_logout, handle_auth_status
from .commands.comment_command import handle_comment
from .commands.complete_command import handle_complete
from .commands.completed_command import handle_completed
from .commands.delete_command import handle_delete
from .commands.labels_command import handle_label_add, handle_labels
from .commands.move_command import handle_move, handle_reorder
from .commands.projects_command import (
    handle_collaborators,
    handle_project_add,
    handle_project_delete,
    handle_projects,
)
from .commands.search_command import handle_search
from .commands.sections_command import handle_section_add, handle_sections
from .commands.tasks_command import SortField, handle_tasks
from .commands.update_command import handle_reopen, handle_update
from .commands.view_command import handle_view
from .todoist_api import ClientConfig, RequestCancelled, TodoistClient, TodoistError
from .utils.config import debug_from_env, get_token, load_env_vars
from .utils.logger import configure_logging, get_logger
from .utils.output import Formatter

log = get_logger(__name__)


@dataclass
class State:
    as_json: bool = False
    debug: bool = False


app = typer.Typer(
    name="tdcli",
    help="tdcli - Manage Todoist tasks, projects, sections, labels and comments.",
    no_args_is_help=True,
)
auth_app = typer.Typer(help="Authenticate with a Todoist API token.")
projects_app = typer.Typer(help="List and manage projects.")
sections_app = typer.Typer(help="List and manage sections.")
labels_app = typer.Typer(help="List and manage labels.")


def make_client(debug: bool = False) -> TodoistClient:
    return TodoistClient(ClientConfig(token=get_token(), debug=debug))


def _state(ctx: typer.Context) -> State:
    return ctx.obj if isinstance(ctx.obj, State) else State()


def _run(ctx: typer.Context, handler: Callable, needs_client: bool = True) -> None:
    """Run a command handler, turning TodoistError into an error message and exit code 1."""
    state = _state(ctx)
    out = Formatter(as_json=state.as_json)
    client = None
    try:
        if needs_client:
            client = make_client(state.debug)
            handler(client, out)
        else:
            handler(out)
    except TodoistError as e:
        log.debug("command failed", exc_info=True)
        out.write_error(e)
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        if client is not None:
            client.cancel_token.cancel()
        out.write_error(RequestCancelled())
        raise typer.Exit(code=130)
    finally:
        if client is not None:
            client.close()


def _version_callback(value: bool):
    if value:
        typer.echo(f"tdcli {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format."),
    debug: bool = typer.Option(False, "--debug", help="Trace every HTTP attempt on stderr."),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."
    ),
):
    """tdcli - command-line client for Todoist."""
    load_env_vars()
    debug = debug or debug_from_env()
    configure_logging(logging.DEBUG if debug else logging.WARNING)
    ctx.obj = State(as_json=json_output, debug=debug)


# ========== Auth ==========

def _prompt_token() -> str:
    return typer.prompt("Enter your Todoist API token", hide_input=True, default="", show_default=False)


def _auth(ctx: typer.Context, token: Optional[str]) -> None:
    debug = _state(ctx).debug
    _run(
        ctx,
        partial(handle_auth, token=token, prompt=_prompt_token, client_factory=TodoistClient, debug=debug),
        needs_client=False,
    )


@auth_app.callback(invoke_without_command=True)
def auth_callback(
    ctx: typer.Context,
    token: Optional[str] = typer.Option(None, "--token", help="API token (prompted for when omitted)."),
):
    """Store an API token (find yours under Settings > Integrations > Developer)."""
    if ctx.invoked_subcommand is None:
        _auth(ctx, token)


@auth_app.command("login")
def auth_login(
    ctx: typer.Context,
    token: Optional[str] = typer.Argument(None, help="API token (prompted for when omitted)."),
):
    """Validate and store an API token."""
    _auth(ctx, token)


@auth_app.command("status")
def auth_status(ctx: typer.Context):
    """Show where the active token comes from."""
    _run(ctx, handle_auth_status, needs_client=False)


@auth_app.command("logout")
def auth_logout(ctx: typer.Context):
    """Remove stored credentials."""
    _run(ctx, handle_auth_logout, needs_client=False)


app.add_typer(auth_app, name="auth")


# ========== Tasks ==========

@app.command("tasks")
def tasks(
    ctx: typer.Context,
    today: bool = typer.Option(False, "--today", "-t", help="Show today's tasks, including overdue (default)."),
    overdue: bool = typer.Option(False, "--overdue", help="Show only overdue tasks."),
    all_tasks: bool = typer.Option(False, "--all", "-a", help="Show all active tasks."),
    filter: Optional[str] = typer.Option(None, "--filter", "-f", help="Todoist filter query."),
    project: Optional[str] = typer.Option(None, "--project", "-p", help="Filter by project name."),
    details: bool = typer.Option(False, "--details", help="Show descriptions and comments."),
    sort: Optional[SortField] = typer.Option(None, "--sort", help="Sort tasks by field."),
):
    """List tasks (today's and overdue by default)."""
    _run(ctx, partial(
        handle_tasks,
        filter=filter,
        project=project,
        today=today,
        overdue=overdue,
        all_tasks=all_tasks,
        details=details,
        sort_by=sort.value if sort else None,
    ))


app.command("list", hidden=True)(tasks)
app.command("ls", hidden=True)(tasks)


@app.command("add")
def add(
    ctx: typer.Context,
    content: List[str] = typer.Argument(..., help="Task content."),
    description: str = typer.Option("", "--description", help="Task description/notes."),
    due: str = typer.Option("", "--due", "-d", help="Due date, e.g. 'tomorrow' or 'next monday 3pm'."),
    priority: int = typer.Option(0, "--priority", "-P", min=0, max=4, help="Priority 1-4 (1 = highest)."),
    project: Optional[str] = typer.Option(None, "--project", "-p", help="Project name."),
    section: Optional[str] = typer.Option(None, "--section", "-s", help="Section name (requires --project)."),
    label: Optional[List[str]] = typer.Option(None, "--label", "-l", help="Add a label (repeatable)."),
):
    """Add a new task."""
    _run(ctx, partial(
        handle_add,
        content=" ".join(content),
        description=description,
        due=due,
        priority=priority,
        project=project,
        section=section,
        labels=label or [],
    ))


def _split_labels(labels: Optional[str]) -> List[str]:
    if not labels:
        return []
    return [name.strip() for name in labels.split(",") if name.strip()]


@app.command("update")
def update(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task ID."),
    content: str = typer.Option("", "--content", help="New content."),
    description: str = typer.Option("", "--description", help="New description."),
    due: str = typer.Option("", "--due", "-d", help="New due date."),
    priority: int = typer.Option(0, "--priority", "-P", min=0, max=4, help="New priority 1-4."),
    labels: Optional[str] = typer.Option(None, "--labels", "-l", help="Replace labels (comma-separated)."),
):
    """Update a task."""
    _run(ctx, partial(
        handle_update,
        task_id=task_id,
        content=content,
        description=description,
        due=due,
        priority=priority,
        labels=_split_labels(labels),
    ))


app.command("edit", hidden=True)(update)
app.command("modify", hidden=True)(update)


@app.command("view")
def view(ctx: typer.Context, task_id: str = typer.Argument(..., help="Task ID.")):
    """Show a task with its comments."""
    _run(ctx, partial(handle_view, task_id=task_id))


app.command("show", hidden=True)(view)
app.command("get", hidden=True)(view)


@app.command("complete")
def complete(ctx: typer.Context, task_id: str = typer.Argument(..., help="Task ID.")):
    """Mark a task as complete."""
    _run(ctx, partial(handle_complete, task_id=task_id))


app.command("done", hidden=True)(complete)


@app.command("reopen")
def reopen(ctx: typer.Context, task_id: str = typer.Argument(..., help="Task ID.")):
    """Reopen a completed task."""
    _run(ctx, partial(handle_reopen, task_id=task_id))


@app.command("delete")
def delete(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task ID."),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
):
    """Delete a task."""
    _run(ctx, partial(handle_delete, task_id=task_id, force=force, confirm=typer.confirm))


app.command("rm", hidden=True)(delete)
app.command("remove", hidden=True)(delete)


@app.command("move")
def move(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task ID."),
    section: Optional[str] = typer.Option(None, "--section", "-s", help="Target section name."),
    project: Optional[str] = typer.Option(None, "--project", "-p", help="Target project name."),
):
    """Move a task to another section or project."""
    _run(ctx, partial(handle_move, task_id=task_id, section=section, project=project))


@app.command("reorder")
def reorder(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task ID."),
    order: int = typer.Argument(..., help="New position among its siblings."),
):
    """Set the order of a task among its siblings."""
    _run(ctx, partial(handle_reorder, task_id=task_id, order=order))


@app.command("search")
def search(ctx: typer.Context, query: str = typer.Argument(..., help="Text to search for.")):
    """Search active tasks by content or description."""
    _run(ctx, partial(handle_search, query=query))


@app.command("comment")
def comment(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task ID."),
    message: Optional[List[str]] = typer.Argument(None, help="Comment text; lists comments when omitted."),
):
    """View or add comments on a task."""
    _run(ctx, partial(handle_comment, task_id=task_id, message=message))


app.command("note", hidden=True)(comment)


@app.command("completed")
def completed(
    ctx: typer.Context,
    project: Optional[str] = typer.Option(None, "--project", "-p", help="Filter by project name."),
    since: Optional[str] = typer.Option(None, "--since", help="Start date, e.g. 2024-01-31."),
    until: Optional[str] = typer.Option(None, "--until", help="End date."),
    limit: int = typer.Option(30, "--limit", "-n", min=1, help="Maximum number of results."),
):
    """Show completed tasks."""
    _run(ctx, partial(handle_completed, project=project, since=since, until=until, limit=limit))


app.command("history", hidden=True)(completed)


# ========== Projects ==========

@projects_app.callback(invoke_without_command=True)
def projects_callback(ctx: typer.Context):
    """List all projects."""
    if ctx.invoked_subcommand is None:
        _run(ctx, handle_projects)


@projects_app.command("add")
def project_add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Project name."),
    color: str = typer.Option("", "--color", help="Project color."),
    favorite: bool = typer.Option(False, "--favorite", help="Mark as favorite."),
):
    """Create a new project."""
    _run(ctx, partial(handle_project_add, name=name, color=color, favorite=favorite))


@projects_app.command("delete")
def project_delete(ctx: typer.Context, project_id: str = typer.Argument(..., help="Project ID.")):
    """Delete a project."""
    _run(ctx, partial(handle_project_delete, project_id=project_id))


@projects_app.command("collaborators")
def project_collaborators(ctx: typer.Context, project: str = typer.Argument(..., help="Project name.")):
    """List the collaborators of a shared project."""
    _run(ctx, partial(handle_collaborators, project=project))


app.add_typer(projects_app, name="projects")
app.add_typer(projects_app, name="project", hidden=True)
app.add_typer(projects_app, name="proj", hidden=True)


# ========== Sections ==========

@sections_app.callback(invoke_without_command=True)
def sections_callback(
    ctx: typer.Context,
    project: Optional[str] = typer.Option(None, "--project", "-p", help="Filter by project name."),
):
    """List sections."""
    if ctx.invoked_subcommand is None:
        _run(ctx, partial(handle_sections, project=project))


@sections_app.command("add")
def section_add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Section name."),
    project: str = typer.Option(..., "--project", "-p", help="Project name."),
):
    """Create a new section in a project."""
    _run(ctx, partial(handle_section_add, name=name, project=project))


app.add_typer(sections_app, name="sections")
app.add_typer(sections_app, name="section", hidden=True)


# ========== Labels ==========

@labels_app.callback(invoke_without_command=True)
def labels_callback(ctx: typer.Context):
    """List all labels."""
    if ctx.invoked_subcommand is None:
        _run(ctx, handle_labels)


@labels_app.command("add")
def label_add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Label name."),
    color: str = typer.Option("", "--color", help="Label color."),
):
    """Create a new label."""
    _run(ctx, partial(handle_label_add, name=name, color=color))


app.add_typer(labels_app, name="labels")
app.add_typer(labels_app, name="label", hidden=True)
app.add_typer(labels_app, name="tags", hidden=True)


def main():
    app()


if __name__ == "__main__":
    main()
