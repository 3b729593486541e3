"""tdcli - command-line client for Todoist."""

__version__ = "1.0.0"
