"""Change notifications published by a trip session.

Listeners receive a :class:`TripUpdate` after every state change.  The
update carries a complete snapshot, so a listener never needs to call
back into the session.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pytripmeter.models.trip import TripSnapshot


class UpdateKind(StrEnum):
    POSITION = "position"
    HEADING = "heading"
    RESET = "reset"


class TripUpdate(BaseModel):
    """A state change of a trip session."""

    model_config = ConfigDict(frozen=True)

    kind: UpdateKind
    snapshot: TripSnapshot
    route_appended: bool = Field(default=False, description="Whether this update added a route point")
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("observed_at")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
