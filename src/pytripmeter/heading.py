"""Heading classification.

Maps a continuous compass bearing onto one of eight 45° sectors centred
on the cardinal and intercardinal points.
"""

from __future__ import annotations

import logging
import math

from pytripmeter.models.fix import HeadingFix
from pytripmeter.models.heading import HeadingLabel, HeadingState

_logger = logging.getLogger(__name__)

_SECTOR_DEGREES = 45.0
_LABELS: tuple[HeadingLabel, ...] = (
    HeadingLabel.N,
    HeadingLabel.NE,
    HeadingLabel.E,
    HeadingLabel.SE,
    HeadingLabel.S,
    HeadingLabel.SW,
    HeadingLabel.W,
    HeadingLabel.NW,
)


def classify(degrees: float) -> HeadingLabel:
    """Return the compass label for a bearing in degrees.

    Bearings outside ``[0, 360)`` wrap, so ``classify(-90)`` is ``W`` and
    ``classify(405)`` is ``NE``.  North covers ``[337.5, 360) ∪ [0, 22.5)``.
    """
    index = math.floor((degrees + _SECTOR_DEGREES / 2) / _SECTOR_DEGREES) % len(_LABELS)
    return _LABELS[index]


class HeadingTracker:
    """Holds the latest heading label and raw bearing."""

    def __init__(self) -> None:
        self._state = HeadingState()

    @property
    def state(self) -> HeadingState:
        return self._state

    def update(self, fix: HeadingFix) -> HeadingState:
        label = classify(fix.true_heading)
        if label != self._state.label:
            _logger.debug("Heading changed %s -> %s (%.1f°)", self._state.display, label, fix.true_heading)
        self._state = HeadingState(label=label, degrees=fix.true_heading)
        return self._state

    def reset(self) -> None:
        self._state = HeadingState()
