"""Data models for sensor readings and trip metrics."""

from pytripmeter.models._base import SensorModel
from pytripmeter.models.fix import HeadingFix, PositionFix
from pytripmeter.models.heading import HeadingLabel, HeadingState
from pytripmeter.models.trip import TripSnapshot, TripState

__all__ = [
    "HeadingFix",
    "HeadingLabel",
    "HeadingState",
    "PositionFix",
    "SensorModel",
    "TripSnapshot",
    "TripState",
]
