"""Cancellable one-shot timer used to debounce search input."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class DebounceTimer:
    """Holds at most one pending callback.

    Scheduling again cancels the pending callback first, so a superseded timer
    never fires. The coroutine started by a fired timer is kept in `task` so it
    can be awaited or cancelled by the owner.
    """

    def __init__(self) -> None:
        self._handle: Optional[asyncio.TimerHandle] = None
        self.task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, delay_seconds: float, callback: Callable[[], Awaitable[None]]) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(delay_seconds, self._fire, callback)

    def _fire(self, callback: Callable[[], Awaitable[None]]) -> None:
        self._handle = None
        self.task = asyncio.ensure_future(callback())

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def close(self) -> None:
        self.cancel()
        if self.task is not None and not self.task.done():
            self.task.cancel()
