"""Tests for fix model parsing and sensor payload adapters."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from pytripmeter.ingestion.normalize import _SENTINELS, safe_float
from pytripmeter.ingestion.sensor import heading_fix_from_payload, position_fix_from_payload
from pytripmeter.models.fix import HeadingFix, PositionFix

# ------------------------------------------------------------------
# PositionFix
# ------------------------------------------------------------------


class TestPositionFix:
    GPSD_TPV: dict = {
        "class": "TPV",
        "device": "/dev/ttyACM0",
        "mode": 3,
        "time": "2026-01-01T12:00:00.000Z",
        "lat": 52.3702,
        "lon": 4.8952,
        "speed": 13.4,
        "track": 87.5,
        "eph": 3.2,
    }

    def test_gpsd_tpv_report(self) -> None:
        fix = position_fix_from_payload(self.GPSD_TPV)

        assert fix is not None
        assert fix.latitude == 52.3702
        assert fix.longitude == 4.8952
        assert fix.reported_speed == 13.4
        assert fix.course == 87.5
        assert fix.horizontal_accuracy == 3.2
        assert fix.timestamp == datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
        assert fix.raw["device"] == "/dev/ttyACM0"

    def test_gpsd_report_without_fix_is_skipped(self) -> None:
        assert position_fix_from_payload({**self.GPSD_TPV, "mode": 1}) is None

    def test_other_gpsd_classes_are_skipped(self) -> None:
        assert position_fix_from_payload({"class": "SKY", "satellites": []}) is None

    def test_nested_data_payload(self) -> None:
        fix = position_fix_from_payload({"data": {"latitude": "51.5", "longitude": "-0.12", "speed": "4.2"}})

        assert fix is not None
        assert fix.latitude == 51.5
        assert fix.longitude == -0.12
        assert fix.reported_speed == 4.2

    def test_missing_coordinates_return_none(self) -> None:
        assert position_fix_from_payload({"lat": 52.0, "speed": 3.0}) is None
        assert position_fix_from_payload({"lat": "--", "lon": 4.0}) is None
        assert position_fix_from_payload({"lat": "north", "lon": 4.0}) is None

    def test_constructor_rejects_missing_coordinates(self) -> None:
        with pytest.raises(ValidationError):
            PositionFix(latitude=float("nan"), longitude=4.0)
        with pytest.raises(ValidationError):
            PositionFix(latitude=float("inf"), longitude=4.0)

    @pytest.mark.parametrize(
        "speed", [None, "", "--", "fast", float("nan"), float("inf"), float("-inf"), "inf"]
    )
    def test_unknown_speed_defaults_to_negative(self, speed: object) -> None:
        fix = PositionFix(latitude=52.0, longitude=4.0, reported_speed=speed)

        assert fix.reported_speed == -1.0
        assert fix.is_moving is False

    @pytest.mark.parametrize("sentinel", sorted(_SENTINELS))
    def test_sentinel_strings_fall_back_to_defaults(self, sentinel: str) -> None:
        fix = PositionFix(latitude=52.0, longitude=4.0, reported_speed=sentinel, course=sentinel)

        assert fix.reported_speed == -1.0
        assert fix.course is None
        assert safe_float(sentinel) is None

    def test_coordinates_are_clamped_and_wrapped(self) -> None:
        fix = PositionFix(latitude=95.0, longitude=190.0)

        assert fix.latitude == 90.0
        assert fix.longitude == pytest.approx(-170.0)

    def test_epoch_timestamps_seconds_and_milliseconds(self) -> None:
        expected = datetime.fromtimestamp(1_770_928_447, tz=UTC)

        assert PositionFix(lat=0.0, lon=0.0, time=1_770_928_447).timestamp == expected
        assert PositionFix(lat=0.0, lon=0.0, time=1_770_928_447_000).timestamp == expected

    def test_naive_timestamp_is_assumed_utc(self) -> None:
        fix = PositionFix(latitude=0.0, longitude=0.0, timestamp=datetime(2026, 1, 1, 8, 30))

        assert fix.timestamp.tzinfo is not None
        assert fix.timestamp == datetime(2026, 1, 1, 8, 30, tzinfo=UTC)

    def test_missing_timestamp_defaults_to_now(self) -> None:
        before = datetime.now(UTC)
        fix = PositionFix(latitude=0.0, longitude=0.0, timestamp="--")

        assert fix.timestamp >= before

    def test_negative_course_and_accuracy_are_unknown(self) -> None:
        fix = PositionFix(latitude=0.0, longitude=0.0, course=-1, horizontal_accuracy=-1)

        assert fix.course is None
        assert fix.horizontal_accuracy is None

    def test_fix_is_frozen(self) -> None:
        fix = PositionFix(latitude=0.0, longitude=0.0)

        with pytest.raises(ValidationError):
            fix.latitude = 1.0  # type: ignore[misc]


# ------------------------------------------------------------------
# HeadingFix
# ------------------------------------------------------------------


class TestHeadingFix:
    def test_heading_is_wrapped(self) -> None:
        assert HeadingFix(true_heading=-90.0).true_heading == 270.0
        assert HeadingFix(true_heading=360.0).true_heading == 0.0
        assert HeadingFix(trueHeading=725.0).true_heading == pytest.approx(5.0)

    def test_gpsd_att_report(self) -> None:
        fix = heading_fix_from_payload({"class": "ATT", "heading": 181.0, "time": "2026-01-01T12:00:00Z"})

        assert fix is not None
        assert fix.true_heading == 181.0
        assert fix.timestamp == datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def test_unusable_heading_returns_none(self) -> None:
        assert heading_fix_from_payload({"heading": "--"}) is None
        assert heading_fix_from_payload({"heading": "west"}) is None
        assert heading_fix_from_payload({"class": "TPV", "heading": 10.0}) is None
