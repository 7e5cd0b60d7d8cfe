"""Position and heading fix models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pytripmeter._constants import UNKNOWN_SPEED
from pytripmeter.ingestion.normalize import (
    clamp_latitude,
    parse_timestamp,
    safe_float,
    wrap_degrees,
    wrap_longitude,
)
from pytripmeter.models._base import SensorModel, utcnow


class PositionFix(SensorModel):
    """A single position reading from the positioning sensor.

    Parameters
    ----------
    latitude : float
        Latitude in degrees (WGS-84), clamped to ``[-90, 90]``.
    longitude : float
        Longitude in degrees (WGS-84), wrapped into ``[-180, 180)``.
    reported_speed : float
        Sensor speed in metres per second.  Negative means unknown; a
        missing or unparseable speed becomes ``-1.0``.
    timestamp : datetime
        UTC time of the reading.  Defaults to the time of construction.
    course : float or None
        Course over ground in degrees, when the sensor reports one.
    horizontal_accuracy : float or None
        Horizontal accuracy radius in metres; ``None`` when unknown.
    raw : dict
        Original sensor payload.
    """

    latitude: float = Field(validation_alias=AliasChoices("latitude", "lat", "gpsLatitude"))
    longitude: float = Field(validation_alias=AliasChoices("longitude", "lon", "lng", "gpsLongitude"))
    reported_speed: float = Field(
        default=UNKNOWN_SPEED,
        validation_alias=AliasChoices("reported_speed", "reportedSpeed", "speed"),
    )
    timestamp: datetime = Field(
        default_factory=utcnow,
        validation_alias=AliasChoices("timestamp", "time", "gpsTime"),
    )
    course: float | None = Field(default=None, validation_alias=AliasChoices("course", "track"))
    horizontal_accuracy: float | None = Field(
        default=None,
        validation_alias=AliasChoices("horizontal_accuracy", "horizontalAccuracy", "eph"),
    )

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coerce_coordinate(cls, value: Any) -> Any:
        parsed = safe_float(value)
        # Leave unparseable values alone so pydantic reports them.
        return value if parsed is None else parsed

    @field_validator("latitude")
    @classmethod
    def _clamp_latitude(cls, value: float) -> float:
        return clamp_latitude(value)

    @field_validator("longitude")
    @classmethod
    def _wrap_longitude(cls, value: float) -> float:
        return wrap_longitude(value)

    @field_validator("reported_speed", mode="before")
    @classmethod
    def _coerce_speed(cls, value: Any) -> float:
        # Non-finite readings are unknown, not clamped to the ceiling.
        parsed = safe_float(value)
        return UNKNOWN_SPEED if parsed is None else parsed

    @field_validator("timestamp", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value: Any) -> datetime:
        parsed = parse_timestamp(value)
        return utcnow() if parsed is None else parsed

    @field_validator("course", mode="before")
    @classmethod
    def _coerce_course(cls, value: Any) -> float | None:
        parsed = safe_float(value)
        if parsed is None or parsed < 0:
            return None
        return wrap_degrees(parsed)

    @field_validator("horizontal_accuracy", mode="before")
    @classmethod
    def _coerce_accuracy(cls, value: Any) -> float | None:
        parsed = safe_float(value)
        if parsed is None or parsed < 0:
            return None
        return parsed

    @property
    def is_moving(self) -> bool:
        """Whether the sensor reported a positive speed."""
        return self.reported_speed > 0


class HeadingFix(SensorModel):
    """A compass heading reading.

    Parameters
    ----------
    true_heading : float
        Heading relative to true north in degrees, wrapped into ``[0, 360)``.
    timestamp : datetime
        UTC time of the reading.
    raw : dict
        Original sensor payload.
    """

    true_heading: float = Field(
        validation_alias=AliasChoices("true_heading", "trueHeading", "heading", "direction"),
    )
    timestamp: datetime = Field(
        default_factory=utcnow,
        validation_alias=AliasChoices("timestamp", "time"),
    )

    @field_validator("true_heading", mode="before")
    @classmethod
    def _coerce_heading(cls, value: Any) -> Any:
        parsed = safe_float(value)
        return value if parsed is None else wrap_degrees(parsed)

    @field_validator("timestamp", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value: Any) -> datetime:
        parsed = parse_timestamp(value)
        return utcnow() if parsed is None else parsed
