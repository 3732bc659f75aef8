"""Fixed-period tick driver for a running workout."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from circuit_timer.core.engine import ProgressionEngine


logger = logging.getLogger(__name__)


class TickScheduler:
    """Calls ``engine.tick()`` once per interval while the workout runs.

    All ticks come from a single asyncio task, so state mutation stays on the
    event loop thread. ``start`` and ``stop`` are idempotent.
    """

    def __init__(self, engine: ProgressionEngine, interval_sec: float = 1.0) -> None:
        if interval_sec <= 0:
            raise ValueError("Tick interval must be > 0")
        self._engine = engine
        self._interval_sec = interval_sec
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def interval_sec(self) -> float:
        return self._interval_sec

    def start(self) -> None:
        """Begin ticking; requires a running event loop."""
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.debug("Tick scheduler started (%.2fs)", self._interval_sec)

    def stop(self) -> None:
        if self._task is None:
            return
        task = self._task
        self._task = None
        if task.done():
            return
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        # A tick that finishes the workout stops us from inside the loop.
        if task is not current:
            task.cancel()
        logger.debug("Tick scheduler stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval_sec)
            state = self._engine.state
            if not state.is_running or state.is_finished:
                return
            self._engine.tick()
            if self._engine.state.is_finished:
                return
