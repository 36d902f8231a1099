"""Events consumed by the state reducer and commands it hands back."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from flypad.models.flightplan import FlightPlanRecord
from flypad.models.weather import WeatherRecord


class Slot(str, Enum):
    """Named airport holders in the briefing."""

    DEPARTURE = "departure"
    ARRIVAL = "arrival"


# ----- Events -----


@dataclass(frozen=True)
class UserIdLoadRequested:
    pass


@dataclass(frozen=True)
class UserIdLoaded:
    user_id: Optional[str]


@dataclass(frozen=True)
class UserIdSet:
    user_id: str


@dataclass(frozen=True)
class UserIdSaveRequested:
    pass


@dataclass(frozen=True)
class UserIdSaved:
    """Outcome of persisting the user identifier; ``error`` is set on failure."""

    error: Optional[str] = None


@dataclass(frozen=True)
class FlightPlanRequested:
    pass


@dataclass(frozen=True)
class FlightPlanFetched:
    """A completed flight plan fetch; ``plan`` is ``None`` when it failed."""

    plan: Optional[FlightPlanRecord]


@dataclass(frozen=True)
class WeatherRefreshRequested:
    pass


@dataclass(frozen=True)
class IdentifierEdited:
    slot: Slot
    identifier: str


@dataclass(frozen=True)
class WeatherFetched:
    """A completed weather fetch; ``record`` is ``None`` when it failed."""

    slot: Slot
    record: Optional[WeatherRecord]


@dataclass(frozen=True)
class NotesEdited:
    slot: Slot
    text: str


Event = Union[
    UserIdLoadRequested,
    UserIdLoaded,
    UserIdSet,
    UserIdSaveRequested,
    UserIdSaved,
    FlightPlanRequested,
    FlightPlanFetched,
    WeatherRefreshRequested,
    IdentifierEdited,
    WeatherFetched,
    NotesEdited,
]


# ----- Commands -----


@dataclass(frozen=True)
class FetchWeather:
    slot: Slot
    station_id: str
    include_forecast: bool = True


@dataclass(frozen=True)
class FetchFlightPlan:
    user_id: str


@dataclass(frozen=True)
class LoadUserId:
    pass


@dataclass(frozen=True)
class SaveUserId:
    user_id: str


Command = Union[FetchWeather, FetchFlightPlan, LoadUserId, SaveUserId]
COMMAND_TYPES = (FetchWeather, FetchFlightPlan, LoadUserId, SaveUserId)

Effect = Union[Event, Command]


__all__ = [
    "COMMAND_TYPES",
    "Command",
    "Effect",
    "Event",
    "FetchFlightPlan",
    "FetchWeather",
    "FlightPlanFetched",
    "FlightPlanRequested",
    "IdentifierEdited",
    "LoadUserId",
    "NotesEdited",
    "SaveUserId",
    "Slot",
    "UserIdLoadRequested",
    "UserIdLoaded",
    "UserIdSaveRequested",
    "UserIdSaved",
    "UserIdSet",
    "WeatherFetched",
    "WeatherRefreshRequested",
]
