from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from opentelemetry import trace

from turnos.client.api import APIError
from turnos.queue.normalize import PayloadError

from .store import DashboardState

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

RefreshCallable = Callable[[], Awaitable[object]]


class QueuePoller:
    """Periodically refresh the dashboard cache from the backend.

    Collaborator failures are logged and recorded on the state; the loop keeps
    going so a display screen recovers on its own once the backend is back.
    """

    def __init__(self, refresh: RefreshCallable, *, interval: float = 5.0, state: DashboardState | None = None) -> None:
        if interval <= 0:
            raise ValueError("Poll interval must be positive")
        self._refresh = refresh
        self._interval = interval
        self._state = state
        self._task: asyncio.Task[None] | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> bool:
        with tracer.start_as_current_span("turnos.poll"):
            try:
                await self._refresh()
            except (APIError, PayloadError) as exc:
                logger.warning("Queue refresh failed: %s", exc)
                if self._state is not None:
                    self._state.record_error(str(exc))
                return False
        return True

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name="turnos-poller")
        logger.info("Queue poller started (every %.1fs)", self._interval)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("Queue poller task had already failed")
        logger.info("Queue poller stopped")

    async def _loop(self) -> None:
        while True:
            try:
                await self.run_once()
            except Exception as exc:
                logger.exception("Unexpected error while refreshing the queue")
                if self._state is not None:
                    self._state.record_error(str(exc) or type(exc).__name__)
            await asyncio.sleep(self._interval)
