"""Run reducer commands as independent asyncio tasks."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Callable

from flypad.ingestors import FetchError, FlightPlanIngestor, WeatherIngestor
from flypad.models.events import (
    COMMAND_TYPES,
    Command,
    Event,
    FetchFlightPlan,
    FetchWeather,
    FlightPlanFetched,
    LoadUserId,
    SaveUserId,
    UserIdLoaded,
    UserIdSaved,
    WeatherFetched,
)
from flypad.services.user_store import UserIdStore

logger = logging.getLogger("flypad.services.orchestrator")


def _failure_event(command: Command, exc: Exception) -> Event:
    """The "no value" event for a command whose task failed unexpectedly."""

    if isinstance(command, FetchWeather):
        return WeatherFetched(slot=command.slot, record=None)
    if isinstance(command, FetchFlightPlan):
        return FlightPlanFetched(plan=None)
    if isinstance(command, LoadUserId):
        return UserIdLoaded(user_id=None)
    return UserIdSaved(error=str(exc) or type(exc).__name__)


class FetchOrchestrator:
    """Perform commands off the reducer's turn and deliver one event for each.

    Tasks are neither deduplicated nor cancelled: two fetches for the same
    station both complete and both deliver, and the reducer applies them in
    arrival order.
    """

    def __init__(
        self,
        deliver: Callable[[Event], None],
        *,
        weather_ingestor: WeatherIngestor | None = None,
        flight_plan_ingestor: FlightPlanIngestor | None = None,
        user_store: UserIdStore | None = None,
    ) -> None:
        self.deliver = deliver
        self.weather_ingestor = weather_ingestor or WeatherIngestor()
        self.flight_plan_ingestor = flight_plan_ingestor or FlightPlanIngestor()
        self.user_store = user_store or UserIdStore()
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return any(not task.done() for task in self._tasks)

    def submit(self, command: Command) -> asyncio.Task:
        """Schedule a command; must be called from within the running loop."""

        if not isinstance(command, COMMAND_TYPES):
            raise TypeError(f"Unsupported command: {command!r}")
        task = asyncio.create_task(self._perform(command))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait_pending(self) -> None:
        tasks = [task for task in self._tasks if not task.done()]
        if tasks:
            await asyncio.wait(tasks)

    async def aclose(self) -> None:
        """Cancel outstanding tasks; used only at application shutdown."""

        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def _perform(self, command: Command) -> None:
        try:
            event = await self._execute(command)
        except Exception as exc:
            logger.exception("Unexpected failure running %s", type(command).__name__)
            event = _failure_event(command, exc)
        self.deliver(event)

    async def _execute(self, command: Command) -> Event:
        if isinstance(command, FetchWeather):
            event = await self._fetch_weather(command)
        elif isinstance(command, FetchFlightPlan):
            event = await self._fetch_flight_plan(command)
        elif isinstance(command, LoadUserId):
            event = UserIdLoaded(user_id=await self.user_store.load())
        elif isinstance(command, SaveUserId):
            event = await self._save_user_id(command)
        else:
            raise TypeError(f"Unsupported command: {command!r}")
        return event

    async def _fetch_weather(self, command: FetchWeather) -> WeatherFetched:
        try:
            record = await self.weather_ingestor.get_weather(
                command.station_id, command.include_forecast
            )
        except FetchError as exc:
            logger.warning(
                "Weather fetch for %s (%s) failed [%s]: %s",
                command.station_id,
                command.slot.value,
                exc.kind.value,
                exc,
            )
            return WeatherFetched(slot=command.slot, record=None)
        return WeatherFetched(slot=command.slot, record=record)

    async def _fetch_flight_plan(self, command: FetchFlightPlan) -> FlightPlanFetched:
        try:
            plan = await self.flight_plan_ingestor.get_flight_plan(command.user_id)
        except FetchError as exc:
            logger.warning(
                "Flight plan fetch for user %s failed [%s]: %s",
                command.user_id,
                exc.kind.value,
                exc,
            )
            return FlightPlanFetched(plan=None)
        return FlightPlanFetched(plan=plan)

    async def _save_user_id(self, command: SaveUserId) -> UserIdSaved:
        try:
            await self.user_store.save(command.user_id)
        except (OSError, TypeError, ValueError) as exc:
            return UserIdSaved(error=str(exc))
        return UserIdSaved()


__all__ = ["FetchOrchestrator"]
