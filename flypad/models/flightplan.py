"""Models for flight plans fetched from the SimBrief planning service."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from flypad.models.wire import PLACEHOLDER, string_or_empty, string_or_placeholder

# SimBrief emits ``{}`` in place of empty strings; any non-string reads as the
# placeholder. Keys that are missing entirely read the same way.
PlanText = Annotated[str, BeforeValidator(string_or_placeholder)]
AirportText = Annotated[str, BeforeValidator(string_or_empty)]


def _plan_text(alias: str | None = None) -> Any:
    return Field(default=PLACEHOLDER, alias=alias)


class AirportDescriptor(BaseModel):
    """Origin or destination airport as planned."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    icao_code: AirportText = Field(default="", description="ICAO airport code")
    iata_code: AirportText = Field(default="", description="IATA airport code")
    name: AirportText = Field(default="", description="Airport name")
    plan_rwy: AirportText = Field(default="", description="Planned runway")
    trans_alt: AirportText = Field(default="", description="Transition altitude")
    trans_level: AirportText = Field(default="", description="Transition level")


class FlightOverview(BaseModel):
    """General flight information (the ``general`` block)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    icao_airline: PlanText = _plan_text()
    flight_number: PlanText = _plan_text()
    cost_index: PlanText = _plan_text("costindex")
    route_distance: PlanText = _plan_text()
    air_distance: PlanText = _plan_text()
    step_climb_string: PlanText = _plan_text("stepclimb_string")
    initial_altitude: PlanText = _plan_text()
    route_ifps: PlanText = _plan_text()
    route_navigraph: PlanText = _plan_text()
    sid_ident: PlanText = _plan_text()
    sid_trans: PlanText = _plan_text()
    star_ident: PlanText = _plan_text()
    star_trans: PlanText = _plan_text()


class FuelSummary(BaseModel):
    """Planned fuel quantities, kept as the service's text."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    taxi: PlanText = _plan_text()
    enroute_burn: PlanText = _plan_text()
    contingency: PlanText = _plan_text()
    alternate_burn: PlanText = _plan_text()
    reserve: PlanText = _plan_text()
    etops: PlanText = _plan_text()
    extra: PlanText = _plan_text()
    extra_required: PlanText = _plan_text()
    extra_optional: PlanText = _plan_text()
    min_takeoff: PlanText = _plan_text()
    plan_takeoff: PlanText = _plan_text()
    plan_ramp: PlanText = _plan_text()
    plan_landing: PlanText = _plan_text()
    avg_fuel_flow: PlanText = _plan_text()
    max_tanks: PlanText = _plan_text()


class FlightPlanRecord(BaseModel):
    """A complete fetched flight plan snapshot."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    origin: AirportDescriptor
    destination: AirportDescriptor
    overview: FlightOverview = Field(..., alias="general")
    fuel: FuelSummary


__all__ = [
    "AirportDescriptor",
    "FlightOverview",
    "FlightPlanRecord",
    "FuelSummary",
    "PlanText",
]
