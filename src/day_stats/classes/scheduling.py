"""Deferral hints for heavy work. A scheduler only changes when work runs, never its result."""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import Callable
from typing import Protocol

Callback = Callable[[], None]


class Scheduler(Protocol):
    def defer(self, callback: Callback) -> None: ...


class ImmediateScheduler:
    """Runs deferred work inline."""

    def defer(self, callback: Callback) -> None:
        callback()


class QueuedScheduler:
    """Holds deferred work until ``run_pending()`` is called (one call per frame)."""

    def __init__(self) -> None:
        self._pending: deque[Callback] = deque()

    def defer(self, callback: Callback) -> None:
        self._pending.append(callback)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run_pending(self) -> int:
        """Run the callbacks queued so far; work queued while running waits for the next call."""
        count = len(self._pending)
        for _ in range(count):
            self._pending.popleft()()
        return count


class LoopScheduler:
    """Defers work to the next iteration of an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def defer(self, callback: Callback) -> None:
        loop = self._loop or asyncio.get_running_loop()
        loop.call_soon(callback)
