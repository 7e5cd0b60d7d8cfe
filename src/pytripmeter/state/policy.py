"""Trip aggregation policy.

Small pure predicates deciding which readings count.  Kept apart from
the aggregator so the thresholds can be reasoned about and tested in
isolation.
"""

from __future__ import annotations

from pytripmeter._constants import MPS_TO_KMH


def observed_speed_kmh(reported_speed_mps: float) -> float:
    """Convert a sensor speed to km/h, mapping unknown (negative) to ``0``."""
    return max(0.0, reported_speed_mps * MPS_TO_KMH)


def clamp_display_speed(speed_kmh: float, max_speed_kmh: float) -> float:
    """Bound the displayed speed to the gauge ceiling."""
    return min(speed_kmh, max_speed_kmh)


def is_jitter(distance_m: float, threshold_m: float) -> bool:
    """Deltas at or below the threshold are GPS noise, not movement."""
    return not distance_m > threshold_m


def counts_toward_average(speed_kmh: float, threshold_kmh: float) -> bool:
    """Only samples strictly above the threshold are treated as moving."""
    return speed_kmh > threshold_kmh


def should_record_route_point(reported_speed_mps: float) -> bool:
    """The route track keeps fixes taken while the sensor reports motion."""
    return reported_speed_mps > 0
