"""
Configuration utilities for the tdcli tool.

The API token comes from TODOIST_API_TOKEN when set, otherwise from
~/.todoist-cli/config.json.
"""

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..todoist_api.errors import ConfigError, NotConfiguredError

TOKEN_ENV = "TODOIST_API_TOKEN"
DEBUG_ENV = "TODOIST_CLI_DEBUG"
CONFIG_DIR_NAME = ".todoist-cli"
CONFIG_FILE_NAME = "config.json"
ENV_FILE_NAME = ".tdcli.env"


@dataclass
class Config:
    api_token: str = ""


def load_env_vars() -> None:
    """
    Load environment variables from .env files in the following order:
    1. .tdcli.env in the current directory
    2. .tdcli.env in the user's home directory
    Variables already present in the environment are never overridden.
    """
    if os.path.exists(ENV_FILE_NAME):
        load_dotenv(ENV_FILE_NAME)

    home_env = Path.home() / ENV_FILE_NAME
    if home_env.exists():
        load_dotenv(home_env)


def config_dir() -> Path:
    return Path.home() / CONFIG_DIR_NAME


def config_path() -> Path:
    return config_dir() / CONFIG_FILE_NAME


def debug_from_env() -> bool:
    return os.getenv(DEBUG_ENV, "").strip().lower() in {"1", "true", "yes", "on"}


def load_config() -> Config:
    """Environment variable first, then the config file."""
    token = os.getenv(TOKEN_ENV)
    if token:
        return Config(api_token=token)

    path = config_path()
    try:
        with open(path, "r", encoding="utf-8") as cf:
            raw = json.load(cf)
    except FileNotFoundError:
        raise NotConfiguredError(
            f"not configured. Run 'todoist auth' or set {TOKEN_ENV}"
        ) from None
    except json.JSONDecodeError as e:
        raise ConfigError(f"failed to parse config: {e}") from e
    except OSError as e:
        raise ConfigError(f"failed to read config: {e}") from e

    cfg = Config(api_token=str(raw.get("api_token") or "")) if isinstance(raw, dict) else Config()
    if not cfg.api_token:
        raise NotConfiguredError("no API token configured. Run 'todoist auth'")
    return cfg


def save_config(cfg: Config) -> Path:
    """Write the config file (directory 0700, file 0600) and return its path."""
    directory = config_dir()
    try:
        directory.mkdir(mode=0o700, parents=True, exist_ok=True)
        path = config_path()
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as cf:
            json.dump(asdict(cfg), cf, indent=2)
        os.chmod(path, 0o600)
    except OSError as e:
        raise ConfigError(f"failed to write config: {e}") from e
    return path


def remove_config() -> bool:
    """Delete stored credentials. Returns False if there was nothing to delete."""
    try:
        config_path().unlink()
    except FileNotFoundError:
        return False
    except OSError as e:
        raise ConfigError(f"failed to remove config: {e}") from e
    return True


def get_token() -> str:
    return load_config().api_token


def save_token(token: str) -> Path:
    return save_config(Config(api_token=token))


def token_source() -> Optional[str]:
    """Where the active token comes from, or None when unconfigured."""
    if os.getenv(TOKEN_ENV):
        return "environment"
    try:
        load_config()
    except ConfigError:
        return None
    return str(config_path())
