"""Remote data ingestors for flypad."""

from .errors import (
    DecodeError,
    EmptyResponseError,
    FetchError,
    FetchErrorKind,
    NetworkError,
)
from .flightplan import FlightPlanIngestor, parse_flight_plan_response
from .weather import WeatherIngestor, parse_weather_response

__all__ = [
    "DecodeError",
    "EmptyResponseError",
    "FetchError",
    "FetchErrorKind",
    "FlightPlanIngestor",
    "NetworkError",
    "WeatherIngestor",
    "parse_flight_plan_response",
    "parse_weather_response",
]
