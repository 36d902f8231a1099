"""Application state owned by the reducer."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from flypad.models.events import Slot
from flypad.models.flightplan import FlightPlanRecord
from flypad.models.weather import WeatherRecord


class AirportSlot(BaseModel):
    """Station identifier plus the latest weather fetched for it."""

    icao: str = Field(default="", description="Station identifier as entered")
    weather: WeatherRecord = Field(
        default_factory=WeatherRecord,
        description="Most recent observation, all defaults before any fetch",
    )
    metar_text: str = Field(default="", description="Raw METAR shown to the user")
    notes: str = Field(default="", description="Free-text ATC notes")


class AppState(BaseModel):
    """Complete briefing state."""

    user_id: str = Field(default="", description="SimBrief user identifier")
    departure: AirportSlot = Field(default_factory=AirportSlot)
    arrival: AirportSlot = Field(default_factory=AirportSlot)
    flight_plan: Optional[FlightPlanRecord] = Field(
        default=None, description="Most recently fetched flight plan"
    )
    route_text: str = Field(default="", description="Route string shown to the user")

    def slot(self, slot: Slot) -> AirportSlot:
        if slot == Slot.DEPARTURE:
            return self.departure
        return self.arrival


__all__ = ["AirportSlot", "AppState"]
