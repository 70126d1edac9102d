"""Fixed-cadence scheduler that drives timer ticks"""
import asyncio
import logging
from typing import Callable, Optional

from taskflow import config

logger = logging.getLogger(__name__)


class TickDriver:
    """
    Calls `tick` once per interval on the event loop until stopped.

    Ticks are scheduled against the loop clock so a slow tick does not push
    every later tick back.
    """

    def __init__(self, tick: Callable[[], None], interval: float = config.TIMER_TICK_INTERVAL_SECONDS):
        if interval <= 0:
            raise ValueError("Tick interval must be positive")
        self._tick = tick
        self._interval = interval
        self._task: Optional[asyncio.Task] = None
        self.ticks = 0

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info(f"Tick driver started ({self._interval}s interval)")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Tick driver stopped")

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_at = loop.time() + self._interval
        while True:
            await asyncio.sleep(max(0.0, next_at - loop.time()))
            next_at += self._interval
            try:
                self._tick()
            except Exception as e:
                logger.error(f"Timer tick failed: {e}", exc_info=True)
            self.ticks += 1
