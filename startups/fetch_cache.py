from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable


logger = logging.getLogger(__name__)


class MissingIdentifier(ValueError):
    """Raised when a lookup is requested without a usable key."""


class MemoizedFetch:
    """
    One async lookup function plus the results it produced during a rendering pass.

    The first call for a key schedules the lookup as a task; later calls for the same
    key get that same task back (pending or settled), so every caller observes the
    same value or the same exception. Failures are not retried within the pass.
    """

    def __init__(self, name: str, fetch: Callable[[str], Awaitable[Any]]):
        self.name = name
        self._fetch = fetch
        self._results: dict[str, asyncio.Task] = {}
        self.calls = 0

    def get_or_fetch(self, key: str) -> asyncio.Task:
        if key is None or (isinstance(key, str) and not key.strip()):
            raise MissingIdentifier(f"Missing key for {self.name}")
        task = self._results.get(key)
        if task is None:
            self.calls += 1
            task = asyncio.ensure_future(self._fetch(key))
            task.add_done_callback(_consume_result)
            self._results[key] = task
            logger.debug("fetch scheduled: %s[%s]", self.name, key)
        return task

    def __contains__(self, key: str) -> bool:
        return key in self._results

    def pending(self) -> list[asyncio.Task]:
        return [t for t in self._results.values() if not t.done()]


def _consume_result(task: asyncio.Task) -> None:
    # Mark the exception as retrieved; callers that await the task still get it.
    if not task.cancelled():
        task.exception()


class FetchCache:
    """
    Per-request registry of memoized lookups.

    Build a fresh one for every request (``async with FetchCache() as cache``).
    Leaving the block discards whatever is still in flight; nothing survives into
    the next request.
    """

    def __init__(self):
        self._fetches: dict[str, MemoizedFetch] = {}
        self.closed = False

    def memoize(self, name: str, fetch: Callable[[str], Awaitable[Any]]) -> MemoizedFetch:
        if self.closed:
            raise RuntimeError("FetchCache used after its rendering pass ended")
        memo = self._fetches.get(name)
        if memo is None:
            memo = MemoizedFetch(name, fetch)
            self._fetches[name] = memo
        return memo

    def discard(self) -> int:
        dropped = 0
        for memo in self._fetches.values():
            for task in memo.pending():
                task.cancel()
                dropped += 1
        self._fetches.clear()
        self.closed = True
        if dropped:
            logger.debug("discarded %d unsettled fetches", dropped)
        return dropped

    async def __aenter__(self) -> "FetchCache":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.discard()
