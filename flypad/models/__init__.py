"""Pydantic and event models for the flypad backend."""

from .flightplan import AirportDescriptor, FlightOverview, FlightPlanRecord, FuelSummary
from .state import AirportSlot, AppState
from .weather import WeatherRecord
from .wire import PLACEHOLDER

__all__ = [
    "AirportDescriptor",
    "AirportSlot",
    "AppState",
    "FlightOverview",
    "FlightPlanRecord",
    "FuelSummary",
    "PLACEHOLDER",
    "WeatherRecord",
]
