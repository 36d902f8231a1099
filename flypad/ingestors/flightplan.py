"""Flight plan ingestion from the SimBrief fetcher API."""

from __future__ import annotations

import json
import logging

import httpx
from pydantic import ValidationError

from flypad.config import settings
from flypad.ingestors.errors import DecodeError, NetworkError
from flypad.models.flightplan import FlightPlanRecord

logger = logging.getLogger("flypad.ingestors.flightplan")


def _service_status(text: str) -> str | None:
    """Extract SimBrief's ``fetch.status`` message from an error body."""

    try:
        payload = json.loads(text)
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    fetch = payload.get("fetch")
    if isinstance(fetch, dict) and isinstance(fetch.get("status"), str):
        return fetch["status"]
    return None


def parse_flight_plan_response(body: bytes | str) -> FlightPlanRecord:
    """Decode a flight plan body into a ``FlightPlanRecord``.

    Individual overview and fuel fields never fail decoding; only a body that
    is not JSON, or lacks the origin/destination/general/fuel objects, raises
    ``DecodeError``.
    """

    try:
        return FlightPlanRecord.model_validate_json(body)
    except ValidationError as exc:
        raise DecodeError(f"Failed to decode flight plan: {exc}") from exc


class FlightPlanIngestor:
    """Fetch the latest generated flight plan for a SimBrief user."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.simbrief_base_url
        self.timeout = timeout or settings.simbrief_timeout
        self.transport = transport

    async def get_flight_plan(self, user_id: str) -> FlightPlanRecord:
        params = {"userid": user_id, "json": "1"}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(self.base_url, params=params)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.error("Flight plan request timed out: %s", exc)
            raise NetworkError("Flight plan service timeout") from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Flight plan service returned error: status=%s message=%s",
                exc.response.status_code,
                _service_status(exc.response.text) or exc.response.text,
            )
            raise NetworkError(
                "Flight plan service error", status_code=exc.response.status_code
            ) from exc
        except httpx.RequestError as exc:
            logger.error("Flight plan request failed: %s", exc)
            raise NetworkError("Flight plan request failed") from exc

        plan = parse_flight_plan_response(response.content)
        logger.info(
            "Flight plan ingested for user %s: %s -> %s",
            user_id,
            plan.origin.icao_code,
            plan.destination.icao_code,
        )
        return plan


__all__ = ["FlightPlanIngestor", "parse_flight_plan_response"]
