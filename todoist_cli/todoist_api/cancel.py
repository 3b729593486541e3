"""Cooperative cancellation shared between a command and its workers."""
from __future__ import annotations

import threading
from typing import List, Optional

from .errors import RequestCancelled


class CancelToken:
    """A cancellation signal that propagates from a parent to its children.

    Workers check it at every suspension point: before starting a request and
    while waiting between retries.
    """

    def __init__(self, parent: Optional["CancelToken"] = None):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._children: List[CancelToken] = []
        self._parent = parent
        if parent is not None:
            parent._adopt(self)

    def _adopt(self, child: "CancelToken") -> None:
        with self._lock:
            self._children.append(child)
            cancelled = self._event.is_set()
        if cancelled:
            child.cancel()

    def child(self) -> "CancelToken":
        return CancelToken(parent=self)

    def detach(self) -> None:
        """Stop following the parent. Used once the work this token guarded is over."""
        parent, self._parent = self._parent, None
        if parent is not None:
            with parent._lock:
                if self in parent._children:
                    parent._children.remove(self)

    def cancel(self) -> None:
        self._event.set()
        with self._lock:
            children = list(self._children)
        for child in children:
            child.cancel()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RequestCancelled()

    def wait(self, seconds: float) -> bool:
        """Sleep up to ``seconds``; return True if cancelled meanwhile."""
        return self._event.wait(timeout=max(0.0, seconds))
