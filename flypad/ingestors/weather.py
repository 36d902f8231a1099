"""METAR/TAF ingestion from the aviationweather.gov data API."""

from __future__ import annotations

import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from flypad.config import settings
from flypad.ingestors.errors import DecodeError, EmptyResponseError, NetworkError
from flypad.models.weather import WeatherRecord

logger = logging.getLogger("flypad.ingestors.weather")

# The service answers with an array even for a single station
_observations = TypeAdapter(list[WeatherRecord])


def parse_weather_response(body: bytes | str) -> WeatherRecord:
    """Decode a weather response body and return the first observation.

    Raises ``EmptyResponseError`` when the body is empty or an empty array and
    ``DecodeError`` when it is not a JSON array of observation objects.
    """

    if not body or not body.strip():
        raise EmptyResponseError("Weather service returned no content")

    try:
        records = _observations.validate_json(body)
    except ValidationError as exc:
        raise DecodeError(f"Failed to decode weather response: {exc}") from exc

    if not records:
        raise EmptyResponseError("Weather service returned no observations")
    return records[0]


class WeatherIngestor:
    """Fetch the current observation for a station."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.weather_base_url
        self.timeout = timeout or settings.weather_timeout
        self.transport = transport

    async def get_weather(
        self, station_id: str, include_forecast: bool = True
    ) -> WeatherRecord:
        params = {
            "ids": station_id,
            "format": "json",
            "taf": "true" if include_forecast else "false",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(self.base_url, params=params)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.error("Weather request for %s timed out: %s", station_id, exc)
            raise NetworkError("Weather service timeout") from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Weather service returned error: status=%s body=%s",
                exc.response.status_code,
                exc.response.text,
            )
            raise NetworkError(
                "Weather service error", status_code=exc.response.status_code
            ) from exc
        except httpx.RequestError as exc:
            logger.error("Weather request for %s failed: %s", station_id, exc)
            raise NetworkError("Weather request failed") from exc

        record = parse_weather_response(response.content)
        logger.debug("Weather observation ingested for %s: %s", station_id, record.metar)
        return record


__all__ = ["WeatherIngestor", "parse_weather_response"]
