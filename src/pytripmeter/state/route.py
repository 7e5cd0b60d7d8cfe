"""Route track: the fixes recorded while moving."""

from __future__ import annotations

import logging
import threading

from pytripmeter.models.fix import PositionFix
from pytripmeter.state.policy import should_record_route_point

_logger = logging.getLogger(__name__)


class RouteTrack:
    """Append-only, arrival-ordered list of moving fixes.

    The filter here is coarser than the aggregator's jitter filter and
    independent of it: the track shows where the vehicle was while it
    reported motion.  There is no eviction; the track grows for the
    lifetime of the trip.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._fixes: list[PositionFix] = []

    def append_if_moving(self, fix: PositionFix) -> bool:
        """Append *fix* when its reported speed is positive.

        Returns whether the fix was recorded.
        """
        if not should_record_route_point(fix.reported_speed):
            _logger.debug("Fix at %.6f,%.6f not recorded (speed %.2f m/s)", fix.latitude, fix.longitude, fix.reported_speed)
            return False
        with self._lock:
            self._fixes.append(fix)
        return True

    def current_route(self) -> tuple[PositionFix, ...]:
        """Copy of the route at call time; later appends do not show up in it."""
        with self._lock:
            return tuple(self._fixes)

    @property
    def last(self) -> PositionFix | None:
        with self._lock:
            return self._fixes[-1] if self._fixes else None

    def reset(self) -> None:
        with self._lock:
            self._fixes.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._fixes)
