"""Per-field debounce timers (core domain)."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Hashable

LOGGER = logging.getLogger(__name__)


class FieldDebouncer:
    """Schedule one delayed coroutine per key, replacing any pending one.

    Timers are plain `asyncio.TimerHandle`s, so re-triggering a key before its
    delay elapses cancels the earlier call. Once a timer fires, the coroutine
    runs as a task that is no longer cancelable through the debouncer.
    """

    def __init__(self, delay_ms: int = 0) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms must be non-negative")
        self._delay = delay_ms / 1000
        self._timers: dict[Hashable, asyncio.TimerHandle] = {}
        self._tasks: set[asyncio.Task[Any]] = set()

    def trigger(self, key: Hashable, factory: Callable[[], Awaitable[Any]]) -> None:
        """(Re)schedule `factory()` to run after the delay for `key`."""

        self.cancel(key)
        loop = asyncio.get_running_loop()
        self._timers[key] = loop.call_later(self._delay, self._fire, key, factory)

    def spawn(self, factory: Callable[[], Awaitable[Any]]) -> None:
        """Run `factory()` right away, tracked like a fired timer."""

        self._start(factory)

    def cancel(self, key: Hashable) -> bool:
        handle = self._timers.pop(key, None)
        if handle is None:
            return False
        handle.cancel()
        return True

    def cancel_all(self) -> None:
        for key in list(self._timers):
            self.cancel(key)

    def is_pending(self, key: Hashable) -> bool:
        return key in self._timers

    async def wait_idle(self) -> None:
        """Wait until no timer is pending and every fired task finished."""

        while self._timers or self._tasks:
            if self._tasks:
                await asyncio.gather(*list(self._tasks), return_exceptions=True)
            else:
                await asyncio.sleep(self._delay)

    def _fire(self, key: Hashable, factory: Callable[[], Awaitable[Any]]) -> None:
        self._timers.pop(key, None)
        self._start(factory)

    def _start(self, factory: Callable[[], Awaitable[Any]]) -> None:
        task = asyncio.ensure_future(factory())
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            LOGGER.error("Debounced task failed", exc_info=exc)
