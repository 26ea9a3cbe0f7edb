"""Rearmable idle timer."""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

_logger = logging.getLogger(__name__)


@dataclass
class Debouncer:
    """Run ``callback`` once ``delay`` seconds after the last trigger.

    Each trigger cancels a pending run and schedules a fresh one, so a burst
    of triggers fires the callback once. A run that has already started its
    callback is left to finish.
    """

    delay: float
    callback: Callable[[], Awaitable[None]]
    _pending: asyncio.Task[None] | None = field(default=None, init=False)
    _last: asyncio.Task[None] | None = field(default=None, init=False)

    @property
    def pending(self) -> bool:
        """True while a run is scheduled but has not started."""
        return self._pending is not None

    def trigger(self) -> None:
        """Cancel any pending run and schedule a new one."""
        self.cancel()
        task = asyncio.get_running_loop().create_task(self._wait_then_fire())
        self._pending = task
        self._last = task

    def cancel(self) -> None:
        """Drop the pending run, if any."""
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    async def wait(self) -> None:
        """Wait for the most recently scheduled run to finish or be cancelled."""
        if self._last is None:
            return
        with contextlib.suppress(asyncio.CancelledError):
            await self._last

    async def _wait_then_fire(self) -> None:
        await asyncio.sleep(self.delay)
        self._pending = None
        try:
            await self.callback()
        except Exception:
            _logger.exception("Debounced callback failed")
