"""Briefing endpoints: read the state and enqueue user actions."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from flypad.models import AppState
from flypad.models.events import (
    Event,
    FlightPlanRequested,
    IdentifierEdited,
    NotesEdited,
    Slot,
    UserIdSaveRequested,
    UserIdSet,
    WeatherRefreshRequested,
)
from flypad.services import FlypadRuntime

router = APIRouter(prefix="/api/v1", tags=["briefing"])

logger = logging.getLogger("flypad.api.briefing")


class UserIdUpdate(BaseModel):
    user_id: str = Field(..., description="SimBrief user identifier")


class IdentifierUpdate(BaseModel):
    icao: str = Field(..., description="Station identifier to use for this slot")


class NotesUpdate(BaseModel):
    text: str = Field(..., description="Free-text ATC notes")


class AcceptedResponse(BaseModel):
    status: str = Field(default="accepted")
    event: str = Field(..., description="Name of the queued event")


def get_runtime(request: Request) -> FlypadRuntime:
    runtime: FlypadRuntime | None = getattr(request.app.state, "runtime", None)
    if runtime is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Runtime not started",
        )
    return runtime


def _enqueue(runtime: FlypadRuntime, event: Event) -> AcceptedResponse:
    runtime.dispatch(event)
    logger.debug("Queued %s", type(event).__name__)
    return AcceptedResponse(event=type(event).__name__)


@router.get(
    "/state",
    response_model=AppState,
    response_model_by_alias=False,
    summary="Current briefing state",
)
async def read_state(runtime: FlypadRuntime = Depends(get_runtime)) -> AppState:
    return runtime.snapshot()


@router.put(
    "/user",
    response_model=AcceptedResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Set the user identifier",
)
async def set_user_id(
    payload: UserIdUpdate, runtime: FlypadRuntime = Depends(get_runtime)
) -> AcceptedResponse:
    return _enqueue(runtime, UserIdSet(user_id=payload.user_id))


@router.post(
    "/user/save",
    response_model=AcceptedResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Persist the user identifier",
)
async def save_user_id(runtime: FlypadRuntime = Depends(get_runtime)) -> AcceptedResponse:
    return _enqueue(runtime, UserIdSaveRequested())


@router.post(
    "/flightplan/fetch",
    response_model=AcceptedResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Fetch the latest flight plan",
)
async def fetch_flight_plan(
    runtime: FlypadRuntime = Depends(get_runtime),
) -> AcceptedResponse:
    return _enqueue(runtime, FlightPlanRequested())


@router.post(
    "/weather/refresh",
    response_model=AcceptedResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Refresh weather for both airports",
)
async def refresh_weather(
    runtime: FlypadRuntime = Depends(get_runtime),
) -> AcceptedResponse:
    return _enqueue(runtime, WeatherRefreshRequested())


@router.put(
    "/airports/{slot}",
    response_model=AcceptedResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Edit an airport identifier",
)
async def edit_identifier(
    slot: Slot,
    payload: IdentifierUpdate,
    runtime: FlypadRuntime = Depends(get_runtime),
) -> AcceptedResponse:
    return _enqueue(runtime, IdentifierEdited(slot=slot, identifier=payload.icao))


@router.put(
    "/airports/{slot}/notes",
    response_model=AcceptedResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Edit ATC notes for an airport",
)
async def edit_notes(
    slot: Slot,
    payload: NotesUpdate,
    runtime: FlypadRuntime = Depends(get_runtime),
) -> AcceptedResponse:
    return _enqueue(runtime, NotesEdited(slot=slot, text=payload.text))
