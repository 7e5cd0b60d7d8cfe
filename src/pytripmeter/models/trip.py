"""Trip metric models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pytripmeter.models.fix import PositionFix
from pytripmeter.models.heading import HeadingState


class TripState(BaseModel):
    """Immutable snapshot of the aggregated trip metrics.

    Parameters
    ----------
    current_speed_kmh : float
        Latest speed, clamped to ``[0, max_speed_kmh]``.
    average_speed_kmh : float
        ``speed_sum_kmh / speed_sample_count``, or ``0`` before the first
        moving sample.
    trip_distance_meters : float
        Cumulative distance; never decreases within a trip.
    speed_sum_kmh : float
        Sum of the unclamped speed samples counted toward the average.
    speed_sample_count : int
        Number of samples counted toward the average.
    last_accepted_fix : PositionFix or None
        Reference point for the next distance delta.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    current_speed_kmh: float = 0.0
    average_speed_kmh: float = 0.0
    trip_distance_meters: float = 0.0
    speed_sum_kmh: float = 0.0
    speed_sample_count: int = 0
    last_accepted_fix: PositionFix | None = None

    @property
    def trip_distance_km(self) -> float:
        return self.trip_distance_meters / 1000.0


class TripSnapshot(BaseModel):
    """Everything the dashboard reads, captured at one point in time."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    trip: TripState = Field(default_factory=TripState)
    heading: HeadingState = Field(default_factory=HeadingState)
    current_fix: PositionFix | None = None
    route_length: int = 0
