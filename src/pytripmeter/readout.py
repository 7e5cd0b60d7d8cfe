"""Dashboard readout formatting."""

from __future__ import annotations

from dataclasses import dataclass

from pytripmeter._constants import MAX_SPEED_KMH
from pytripmeter.models.trip import TripSnapshot


@dataclass(frozen=True, slots=True)
class DashboardReadout:
    """Strings and gauge fill exactly as the dashboard shows them."""

    speed: str
    average: str
    trip: str
    heading: str
    speed_fraction: float


def format_readout(snapshot: TripSnapshot, *, max_speed_kmh: float = MAX_SPEED_KMH) -> DashboardReadout:
    """Format a snapshot for display.

    Speed is truncated to whole km/h, the average rounded to whole km/h
    and the trip shown in kilometres with one decimal.
    """
    trip = snapshot.trip
    fraction = trip.current_speed_kmh / max_speed_kmh if max_speed_kmh > 0 else 0.0
    return DashboardReadout(
        speed=str(int(trip.current_speed_kmh)),
        average=f"{trip.average_speed_kmh:.0f}",
        trip=f"{trip.trip_distance_km:.1f}",
        heading=snapshot.heading.display,
        speed_fraction=max(0.0, min(1.0, fraction)),
    )
