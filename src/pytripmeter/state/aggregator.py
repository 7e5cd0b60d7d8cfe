"""Speed and distance aggregation.

This is the only component allowed to mutate the trip metrics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pytripmeter.config import TripConfig
from pytripmeter.geo import haversine_distance
from pytripmeter.models.fix import PositionFix
from pytripmeter.models.trip import TripState
from pytripmeter.state.policy import (
    clamp_display_speed,
    counts_toward_average,
    is_jitter,
    observed_speed_kmh,
)

_logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _TripAccumulator:
    current_speed_kmh: float = 0.0
    average_speed_kmh: float = 0.0
    trip_distance_meters: float = 0.0
    speed_sum_kmh: float = 0.0
    speed_sample_count: int = 0
    last_accepted_fix: PositionFix | None = None


class SpeedDistanceAggregator:
    """Stateful filter turning position fixes into trip metrics.

    Given the same sequence of fixes it always produces the same
    snapshots.  Fixes are never rejected; unknown speeds count as
    standing still.

    Note that the distance reference point moves with *every* fix, also
    when the delta to the previous fix is discarded as jitter.  A slow
    crawl made of sub-threshold steps therefore never adds distance.
    """

    def __init__(self, config: TripConfig | None = None) -> None:
        self._config = config or TripConfig()
        self._acc = _TripAccumulator()

    @property
    def config(self) -> TripConfig:
        return self._config

    def ingest(self, fix: PositionFix) -> TripState:
        """Fold one fix into the trip and return the updated snapshot."""
        acc = self._acc
        config = self._config

        observed = observed_speed_kmh(fix.reported_speed)
        acc.current_speed_kmh = clamp_display_speed(observed, config.max_speed_kmh)
        if observed > config.max_speed_kmh:
            _logger.debug("Speed %.1f km/h clamped to %.1f km/h", observed, config.max_speed_kmh)

        last = acc.last_accepted_fix
        if last is not None:
            distance = haversine_distance(last.latitude, last.longitude, fix.latitude, fix.longitude)
            if is_jitter(distance, config.jitter_threshold_m):
                _logger.debug("Discarded %.3f m position delta as jitter", distance)
            else:
                acc.trip_distance_meters += distance
        acc.last_accepted_fix = fix

        if counts_toward_average(observed, config.moving_speed_threshold_kmh):
            acc.speed_sum_kmh += observed
            acc.speed_sample_count += 1
            acc.average_speed_kmh = acc.speed_sum_kmh / acc.speed_sample_count

        return self.snapshot()

    def snapshot(self) -> TripState:
        acc = self._acc
        return TripState(
            current_speed_kmh=acc.current_speed_kmh,
            average_speed_kmh=acc.average_speed_kmh,
            trip_distance_meters=acc.trip_distance_meters,
            speed_sum_kmh=acc.speed_sum_kmh,
            speed_sample_count=acc.speed_sample_count,
            last_accepted_fix=acc.last_accepted_fix,
        )

    def reset(self) -> None:
        """Start a new trip."""
        self._acc = _TripAccumulator()
