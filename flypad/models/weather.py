"""Normalized METAR/TAF observation for a single station."""

from __future__ import annotations

from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from flypad.models.wire import (
    number_or_absent,
    number_or_zero,
    string_or_absent,
    string_or_empty,
    string_or_number,
)


def _visibility_text(value: Any) -> str:
    text = string_or_number(value)
    return text if text is not None else ""


Measurement = Annotated[float, BeforeValidator(number_or_zero)]
OptionalMeasurement = Annotated[Optional[float], BeforeValidator(number_or_absent)]
VisibilityText = Annotated[str, BeforeValidator(_visibility_text)]
RawText = Annotated[str, BeforeValidator(string_or_empty)]
OptionalRawText = Annotated[Optional[str], BeforeValidator(string_or_absent)]


class WeatherRecord(BaseModel):
    """One station observation as returned by the weather service.

    Every field has a defined value no matter what the service sent: numeric
    fields read 0 when omitted or mistyped, visibility reads as empty text, and
    the raw observation is kept verbatim. Only the wind gust and the forecast
    text keep ``None`` because their absence carries meaning.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    temperature: Measurement = Field(
        default=0.0, alias="temp", description="Air temperature in Celsius"
    )
    dew_point: Measurement = Field(
        default=0.0, alias="dewp", description="Dew point in Celsius"
    )
    wind_direction: Measurement = Field(
        default=0.0, alias="wdir", description="Wind direction in degrees"
    )
    wind_speed: Measurement = Field(
        default=0.0, alias="wspd", description="Wind speed in knots"
    )
    wind_gust: OptionalMeasurement = Field(
        default=None, alias="wgst", description="Wind gust in knots, if reported"
    )
    visibility: VisibilityText = Field(
        default="", alias="visib", description="Visibility as reported (e.g. '10+')"
    )
    altimeter: Measurement = Field(
        default=0.0, alias="altim", description="Altimeter setting (QNH)"
    )
    metar: RawText = Field(
        default="", alias="rawOb", description="Raw METAR text, verbatim"
    )
    taf: OptionalRawText = Field(
        default=None, alias="rawTaf", description="Raw TAF text when requested"
    )


__all__ = ["WeatherRecord"]
