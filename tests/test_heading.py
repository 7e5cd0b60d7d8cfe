from __future__ import annotations

import pytest

from pytripmeter.heading import HeadingTracker, classify
from pytripmeter.models.fix import HeadingFix
from pytripmeter.models.heading import HeadingLabel


@pytest.mark.parametrize(
    ("degrees", "label"),
    [
        (0.0, HeadingLabel.N),
        (22.4, HeadingLabel.N),
        (22.5, HeadingLabel.NE),
        (46.0, HeadingLabel.NE),
        (90.0, HeadingLabel.E),
        (135.0, HeadingLabel.SE),
        (180.0, HeadingLabel.S),
        (225.0, HeadingLabel.SW),
        (270.0, HeadingLabel.W),
        (315.0, HeadingLabel.NW),
        (337.4, HeadingLabel.NW),
        (337.5, HeadingLabel.N),
        (359.0, HeadingLabel.N),
    ],
)
def test_sector_table(degrees: float, label: HeadingLabel) -> None:
    assert classify(degrees) == label


def test_sector_boundary_around_north_east() -> None:
    assert classify(22.0) == HeadingLabel.N
    assert classify(23.0) == HeadingLabel.NE
    # 44° lies in the NE sector [22.5, 67.5).
    assert classify(44.0) == HeadingLabel.NE


def test_negative_and_wrapped_bearings() -> None:
    assert classify(-90.0) == HeadingLabel.W
    assert classify(-1.0) == HeadingLabel.N
    assert classify(405.0) == HeadingLabel.NE
    assert classify(720.0) == HeadingLabel.N


@pytest.mark.parametrize("degrees", [0.0, 12.5, 44.0, 100.0, 200.0, 300.0, 359.9])
def test_classify_is_periodic(degrees: float) -> None:
    assert classify(degrees) == classify(degrees + 360.0) == classify(degrees - 360.0)


def test_tracker_keeps_label_and_raw_degrees() -> None:
    tracker = HeadingTracker()
    assert tracker.state.label is None
    assert tracker.state.display == "--"

    state = tracker.update(HeadingFix(true_heading=271.5))

    assert state.label == HeadingLabel.W
    assert state.degrees == 271.5
    assert state.display == "W"

    tracker.reset()
    assert tracker.state.degrees is None
