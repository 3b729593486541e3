"""Bounded-parallelism fan-out: one dependent request per item."""
from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, Dict, Iterable, Optional, TypeVar

from ..utils.logger import get_logger
from .cancel import CancelToken

log = get_logger(__name__)

DEFAULT_LIMIT = 5

Item = TypeVar("Item")
R = TypeVar("R")


def fetch_all(
    items: Iterable[Item],
    fetch: Callable[[Item, CancelToken], R],
    key: Callable[[Item], str] = lambda item: item.id,
    limit: int = DEFAULT_LIMIT,
    cancel: Optional[CancelToken] = None,
) -> Dict[str, R]:
    """Run ``fetch(item, token)`` for every item with at most ``limit`` in flight.

    Returns ``{key(item): result}``. The first failure cancels the shared
    token, so running fetches abort at their next suspension point and queued
    ones never start; that failure is re-raised and nothing is returned.
    """
    items = list(items)
    if not items:
        return {}

    token = cancel.child() if cancel is not None else CancelToken()
    results: Dict[str, R] = {}
    lock = threading.Lock()
    failure: Dict[str, BaseException] = {}

    def worker(item: Item) -> None:
        if token.cancelled:
            return
        try:
            k = key(item)
            value = fetch(item, token)
        except Exception as e:
            with lock:
                if "first" not in failure:
                    failure["first"] = e
            token.cancel()
            return
        with lock:
            results[k] = value

    executor = ThreadPoolExecutor(max_workers=max(1, limit), thread_name_prefix="fetch")
    try:
        futures = [executor.submit(worker, item) for item in items]
        wait(futures)
    except BaseException:
        token.cancel()
        raise
    finally:
        executor.shutdown(wait=True, cancel_futures=True)
        token.detach()

    if "first" in failure:
        log.debug("fan-out aborted after %d of %d fetches", len(results), len(items))
        raise failure["first"]
    if token.cancelled:
        # cancelled from above before anything failed
        token.raise_if_cancelled()
    return results
