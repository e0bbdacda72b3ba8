"""Trailing-edge debounce for search input."""

import asyncio
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)


class Debouncer:
    """Collapse rapid input changes into a single settled value.

    Every ``push`` cancels the pending settle and schedules a new one
    ``delay`` seconds out, so ``callback`` only ever sees the last value
    pushed before a quiet period. Scheduling goes through the loop's
    ``call_later``; any object offering ``call_later`` can stand in for it.
    """

    def __init__(
        self,
        delay: float,
        callback: Callable[[Any], Any],
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        self.delay = delay
        self._callback = callback
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._closed = False

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def push(self, value: Any) -> None:
        if self._closed:
            raise RuntimeError("Debouncer is closed")
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._settle, value)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def close(self) -> None:
        """Drop any pending settle without emitting it."""
        self.cancel()
        self._closed = True

    def _settle(self, value: Any) -> None:
        self._handle = None
        logger.debug("Search term settled: %r", value)
        self._callback(value)
