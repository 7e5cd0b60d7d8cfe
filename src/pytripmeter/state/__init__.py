"""State layer.

The aggregator, the route track and the session notifications.  The
aggregator is the single owner of the trip metrics; the route track is
the single owner of the recorded fixes.
"""

from pytripmeter.state.aggregator import SpeedDistanceAggregator
from pytripmeter.state.events import TripUpdate, UpdateKind
from pytripmeter.state.route import RouteTrack

__all__ = [
    "RouteTrack",
    "SpeedDistanceAggregator",
    "TripUpdate",
    "UpdateKind",
]
