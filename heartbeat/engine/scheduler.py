from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)

TickHandler = Callable[[], Awaitable[None]]


class Scheduler:
    """Fixed-rate tick loop driving a single async handler.

    Ticks never overlap: the next one is scheduled only after the handler
    returns. A handler that raises is logged and the loop carries on.
    ``prime`` runs once before the warm-up delay; the first tick follows the
    warm-up immediately and later ticks land on ``interval`` boundaries.
    """

    name: str = "heartbeat"

    def __init__(
        self,
        handler: TickHandler,
        interval: float = 1.0,
        warmup_delay: float = 0.0,
        prime: Callable[[], None] | None = None,
        max_ticks: int | None = None,
    ) -> None:
        self._handler = handler
        self.interval = interval
        self.warmup_delay = warmup_delay
        self._prime = prime
        self.max_ticks = max_ticks
        self.ticks = 0
        self._running = False
        self._task: asyncio.Task | None = None

    # ── lifecycle ────────────────────────────────────────

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._loop())
        logger.info("Scheduler [%s] started (interval=%.1fs)", self.name, self.interval)

    async def stop(self) -> None:
        if not self._running and self._task is None:
            return
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Scheduler [%s] stopped after %d ticks", self.name, self.ticks)

    async def run(self) -> None:
        """Run the loop in the current task until stopped or ``max_ticks`` is reached."""
        self._running = True
        try:
            await self._loop()
        finally:
            self._running = False

    # ── internals ───────────────────────────────────────

    async def _loop(self) -> None:
        loop = asyncio.get_running_loop()
        if self._prime is not None:
            try:
                self._prime()
            except Exception:
                logger.exception("Scheduler [%s] error during warm-up refresh", self.name)
        if self.warmup_delay > 0:
            await asyncio.sleep(self.warmup_delay)

        next_tick = loop.time()
        while self._running:
            try:
                await self._handler()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Scheduler [%s] error during tick %d", self.name, self.ticks)
            self.ticks += 1
            if self.max_ticks is not None and self.ticks >= self.max_ticks:
                self._running = False
                break

            next_tick += self.interval
            now = loop.time()
            if next_tick < now:
                # Overran the boundary: fire once immediately, then realign to the interval.
                next_tick = now
            await asyncio.sleep(next_tick - now)

    @property
    def running(self) -> bool:
        return self._running
