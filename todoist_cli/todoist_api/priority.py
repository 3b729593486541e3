"""Priority conversion between the CLI scale and the API scale.

Users speak in p1..p4 where p1 is the most urgent; the API stores 4 for the
most urgent and 1 for the default. 0 means "not specified" and is never
converted.
"""

UNSET = 0
_VALID = (1, 2, 3, 4)


def to_api_priority(priority: int) -> int:
    if priority == UNSET:
        return UNSET
    if priority not in _VALID:
        raise ValueError(f"priority must be between 1 and 4, got {priority}")
    return 5 - priority


def from_api_priority(priority: int) -> int:
    """Inverse of to_api_priority."""
    return to_api_priority(priority)


def priority_label(api_priority: int) -> str:
    """Marker shown next to a task, empty for the default priority."""
    if api_priority in (2, 3, 4):
        return f"p{5 - api_priority}"
    return ""
