from typing import Callable, Optional

from ..todoist_api import ClientConfig, TodoistClient, TodoistError
from ..utils import config
from ..utils.output import Formatter
from . import CommandError


def handle_auth(
    out: Formatter,
    token: Optional[str],
    prompt: Callable[[], str],
    client_factory: Callable[[ClientConfig], TodoistClient] = TodoistClient,
    debug: bool = False,
):
    """Validate a token against the API and store it."""
    token = (token or prompt() or "").strip()
    if not token:
        raise CommandError("token cannot be empty")

    client = client_factory(ClientConfig(token=token, debug=debug))
    try:
        client.get_projects()
    except TodoistError as e:
        raise CommandError(f"invalid token: {e}") from e
    finally:
        client.close()

    path = config.save_token(token)
    out.write_success(f"Authenticated successfully. Config saved to {path}")


def handle_auth_status(out: Formatter):
    source = config.token_source()
    if source is None:
        # re-raise the precise reason (missing file, empty token, bad JSON)
        config.load_config()
    out.write_success(f"Authenticated (token from {source})")


def handle_auth_logout(out: Formatter):
    if config.remove_config():
        out.write_success("Logged out successfully.")
    else:
        out.write_success("No credentials stored.")
