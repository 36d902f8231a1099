"""Apply events to the briefing state, one at a time."""

from __future__ import annotations

import logging
from typing import Callable

from flypad.config import settings
from flypad.models.events import (
    Effect,
    Event,
    FetchFlightPlan,
    FetchWeather,
    FlightPlanFetched,
    FlightPlanRequested,
    IdentifierEdited,
    LoadUserId,
    NotesEdited,
    SaveUserId,
    Slot,
    UserIdLoadRequested,
    UserIdLoaded,
    UserIdSaveRequested,
    UserIdSaved,
    UserIdSet,
    WeatherFetched,
    WeatherRefreshRequested,
)
from flypad.models.state import AppState

logger = logging.getLogger("flypad.services.reducer")


class StateReducer:
    """Transition function from (state, event) to follow-up effects.

    ``apply`` mutates only the state it is given and never awaits. Work that
    has to leave the process is returned as commands for the orchestrator;
    follow-up events are returned for the runtime to queue.
    """

    def __init__(
        self,
        *,
        include_forecast: bool | None = None,
        default_user_id: str | None = None,
    ) -> None:
        self.include_forecast = (
            settings.weather_include_taf if include_forecast is None else include_forecast
        )
        self.default_user_id = (
            settings.simbrief_default_user_id if default_user_id is None else default_user_id
        )
        self._handlers: dict[type, Callable[[AppState, Event], list[Effect]]] = {
            UserIdLoadRequested: self._on_user_id_load_requested,
            UserIdLoaded: self._on_user_id_loaded,
            UserIdSet: self._on_user_id_set,
            UserIdSaveRequested: self._on_user_id_save_requested,
            UserIdSaved: self._on_user_id_saved,
            FlightPlanRequested: self._on_flight_plan_requested,
            FlightPlanFetched: self._on_flight_plan_fetched,
            WeatherRefreshRequested: self._on_weather_refresh_requested,
            IdentifierEdited: self._on_identifier_edited,
            WeatherFetched: self._on_weather_fetched,
            NotesEdited: self._on_notes_edited,
        }

    def apply(self, state: AppState, event: Event) -> list[Effect]:
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"No transition for event {event!r}")
        logger.debug("Applying %s", type(event).__name__)
        return handler(state, event)

    # ----- User identifier -----

    def _on_user_id_load_requested(
        self, state: AppState, event: UserIdLoadRequested
    ) -> list[Effect]:
        return [LoadUserId()]

    def _on_user_id_loaded(self, state: AppState, event: UserIdLoaded) -> list[Effect]:
        if event.user_id is None:
            logger.info("No stored user id; keeping '%s'", state.user_id)
            return []
        return [UserIdSet(user_id=event.user_id)]

    def _on_user_id_set(self, state: AppState, event: UserIdSet) -> list[Effect]:
        state.user_id = event.user_id
        return []

    def _on_user_id_save_requested(
        self, state: AppState, event: UserIdSaveRequested
    ) -> list[Effect]:
        return [SaveUserId(user_id=state.user_id)]

    def _on_user_id_saved(self, state: AppState, event: UserIdSaved) -> list[Effect]:
        if event.error:
            logger.warning("Failed to save user id: %s", event.error)
        return []

    # ----- Flight plan -----

    def _on_flight_plan_requested(
        self, state: AppState, event: FlightPlanRequested
    ) -> list[Effect]:
        user_id = state.user_id or self.default_user_id
        if not user_id:
            logger.warning("Flight plan requested without a user id; skipping")
            return []
        return [FetchFlightPlan(user_id=user_id)]

    def _on_flight_plan_fetched(
        self, state: AppState, event: FlightPlanFetched
    ) -> list[Effect]:
        plan = event.plan
        if plan is None:
            logger.warning("No flight plan fetched")
            return []

        state.flight_plan = plan
        state.route_text = plan.overview.route_navigraph
        return [
            IdentifierEdited(slot=Slot.DEPARTURE, identifier=plan.origin.icao_code),
            IdentifierEdited(slot=Slot.ARRIVAL, identifier=plan.destination.icao_code),
        ]

    # ----- Airports and weather -----

    def _on_weather_refresh_requested(
        self, state: AppState, event: WeatherRefreshRequested
    ) -> list[Effect]:
        return [
            FetchWeather(
                slot=slot,
                station_id=state.slot(slot).icao,
                include_forecast=self.include_forecast,
            )
            for slot in (Slot.DEPARTURE, Slot.ARRIVAL)
        ]

    def _on_identifier_edited(
        self, state: AppState, event: IdentifierEdited
    ) -> list[Effect]:
        state.slot(event.slot).icao = event.identifier
        return []

    def _on_weather_fetched(
        self, state: AppState, event: WeatherFetched
    ) -> list[Effect]:
        if event.record is None:
            # failed fetch, keep the previous record
            return []
        airport = state.slot(event.slot)
        airport.weather = event.record
        airport.metar_text = event.record.metar
        return []

    def _on_notes_edited(self, state: AppState, event: NotesEdited) -> list[Effect]:
        state.slot(event.slot).notes = event.text
        return []


__all__ = ["StateReducer"]
