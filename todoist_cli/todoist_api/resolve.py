"""Turn human-supplied names into resource IDs."""
from typing import Iterable, Optional, TypeVar

from .errors import NotFoundError

R = TypeVar("R")


def match_name(items: Iterable[R], query: str) -> Optional[R]:
    """First item, in listing order, whose name contains ``query`` (case-insensitive).

    Several matches are not an error; the earliest one wins.
    """
    needle = query.lower()
    for item in items:
        if needle in getattr(item, "name", "").lower():
            return item
    return None


def find_by_name(items: Iterable[R], query: str, kind: str) -> R:
    found = match_name(items, query)
    if found is None:
        raise NotFoundError(f"{kind} not found: {query}")
    return found
