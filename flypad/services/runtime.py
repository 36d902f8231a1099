"""Single-consumer event loop that owns the briefing state."""

from __future__ import annotations

import asyncio
import logging

from flypad.ingestors import FlightPlanIngestor, WeatherIngestor
from flypad.models.events import COMMAND_TYPES, Event
from flypad.models.state import AppState
from flypad.services.orchestrator import FetchOrchestrator
from flypad.services.reducer import StateReducer
from flypad.services.user_store import UserIdStore

logger = logging.getLogger("flypad.services.runtime")


class FlypadRuntime:
    """Feed queued events through the reducer and route its effects.

    Only ``process`` touches the state. Completed fetches come back as events
    on the same queue, so every write is serialized in arrival order.
    """

    def __init__(
        self,
        *,
        state: AppState | None = None,
        reducer: StateReducer | None = None,
        weather_ingestor: WeatherIngestor | None = None,
        flight_plan_ingestor: FlightPlanIngestor | None = None,
        user_store: UserIdStore | None = None,
    ) -> None:
        self._state = state or AppState()
        self._queue: asyncio.Queue[Event] = asyncio.Queue()
        self.reducer = reducer or StateReducer()
        self.orchestrator = FetchOrchestrator(
            self.dispatch,
            weather_ingestor=weather_ingestor,
            flight_plan_ingestor=flight_plan_ingestor,
            user_store=user_store,
        )

    def dispatch(self, event: Event) -> None:
        """Queue an event for the reducer."""

        self._queue.put_nowait(event)

    def process(self, event: Event) -> None:
        """Apply a single event and route the resulting effects."""

        for effect in self.reducer.apply(self._state, event):
            if isinstance(effect, COMMAND_TYPES):
                self.orchestrator.submit(effect)
            else:
                self.dispatch(effect)

    def snapshot(self) -> AppState:
        """Return a detached copy of the current state for readers."""

        return self._state.model_copy(deep=True)

    async def run(self) -> None:
        """Consume events until cancelled."""

        logger.info("Event loop started")
        try:
            while True:
                event = await self._queue.get()
                try:
                    self.process(event)
                except Exception:
                    logger.exception("Failed to apply %s", type(event).__name__)
        except asyncio.CancelledError:
            logger.info("Event loop cancelled")
            raise

    async def run_until_idle(self) -> None:
        """Process queued events and wait on fetches until nothing is left."""

        while True:
            while not self._queue.empty():
                self.process(self._queue.get_nowait())
            if not self.orchestrator.pending:
                return
            await self.orchestrator.wait_pending()

    async def aclose(self) -> None:
        await self.orchestrator.aclose()


__all__ = ["FlypadRuntime"]
