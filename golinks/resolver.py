"""
Short-name resolution and the redirect decision built on top of it.

``resolve`` asks the route store for a name under a bounded timeout and
classifies the result; ``dispatch`` turns that classification into the HTTP
response the redirect handlers send.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar, Union

from fastapi.responses import RedirectResponse

from golinks.db import RouteStore
from golinks.errors import BackendError, LookupSaturatedError
from golinks.names import EDIT_PREFIX, clean_name

logger = logging.getLogger(__name__)

DEFAULT_LOOKUP_TIMEOUT = 60.0
DEFAULT_LOOKUP_WORKERS = 64

T = TypeVar("T")


@dataclass(frozen=True)
class Found:
    url: str


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass(frozen=True)
class BackendFailure:
    error: BaseException


ResolveOutcome = Union[Found, NotFound, BackendFailure]


class LookupExecutor:
    """
    Thread pool for blocking store lookups.

    At most ``max_workers`` calls are in flight, counting calls whose caller
    already gave up. When every worker is busy a new call fails at once
    instead of queueing behind hung ones.
    """

    def __init__(self, max_workers: int = DEFAULT_LOOKUP_WORKERS):
        self.max_workers = max_workers
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="golinks-lookup"
        )
        self._slots = threading.BoundedSemaphore(max_workers)

    async def run(self, fn: Callable[..., T], *args) -> T:
        if not self._slots.acquire(blocking=False):
            raise LookupSaturatedError(self.max_workers)
        try:
            future = self._executor.submit(fn, *args)
        except BaseException:
            self._slots.release()
            raise
        future.add_done_callback(lambda _: self._slots.release())
        return await asyncio.wrap_future(future)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)


_default_executor: Optional[LookupExecutor] = None
_default_executor_lock = threading.Lock()


def default_executor() -> LookupExecutor:
    global _default_executor
    with _default_executor_lock:
        if _default_executor is None:
            _default_executor = LookupExecutor()
        return _default_executor


async def resolve(
    store: RouteStore,
    name: str,
    timeout: float = DEFAULT_LOOKUP_TIMEOUT,
    executor: Optional[LookupExecutor] = None,
) -> ResolveOutcome:
    """
    Look ``name`` up in ``store``.

    An empty name is never looked up. The store call runs on ``executor``
    and is abandoned after ``timeout`` seconds. The same deadline is handed to
    the store so it can stop its own work. Cancelling the caller cancels the
    wait and propagates.
    """
    if not name:
        return NotFound()

    executor = executor or default_executor()
    try:
        route = await asyncio.wait_for(executor.run(store.get, name, timeout), timeout)
    except asyncio.TimeoutError as exc:
        logger.error("route lookup for %r timed out after %ss", name, timeout)
        return BackendFailure(exc)
    except Exception as exc:
        logger.error("route lookup for %r failed: %r", name, exc)
        return BackendFailure(exc)

    if route is None:
        logger.debug("no route for %r", name)
        return NotFound()
    return Found(route.url)


def edit_path(name: str) -> str:
    return f"{EDIT_PREFIX}{clean_name(name)}"


def dispatch(outcome: ResolveOutcome, name: str) -> RedirectResponse:
    """
    Map a resolve outcome to a temporary redirect.

    Raises BackendError for BackendFailure; the application's exception
    handler answers those with a 500.
    """
    if isinstance(outcome, Found):
        return RedirectResponse(outcome.url, status_code=307)
    if isinstance(outcome, NotFound):
        return RedirectResponse(edit_path(name), status_code=307)
    if isinstance(outcome, BackendFailure):
        raise BackendError(name, outcome.error)
    raise TypeError(f"unknown resolve outcome: {outcome!r}")
