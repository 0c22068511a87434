from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PeriodicJob:
    """
    Repeating callback on an asyncio loop. Each firing schedules the next one
    with ``call_later``, so everything runs on the loop's own thread.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop, interval: float, callback: Callable[[], None]):
        self._loop = loop
        self.interval = interval
        self._callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._schedule()

    def stop(self) -> None:
        self._running = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _schedule(self) -> None:
        self._handle = self._loop.call_later(self.interval, self._fire)

    def _fire(self) -> None:
        self._handle = None
        if not self._running:
            return
        try:
            self._callback()
        except Exception:
            logger.exception("[Scheduler] periodic job failed; stopping it")
            self.stop()
            raise
        # the callback may have stopped the job itself
        if self._running:
            self._schedule()


class LoopScheduler:
    """Hands out periodic jobs bound to one event loop (the running one by default)."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def every(self, interval: float, callback: Callable[[], None]) -> PeriodicJob:
        loop = self._loop or asyncio.get_running_loop()
        job = PeriodicJob(loop, interval, callback)
        job.start()
        return job
