from __future__ import annotations

from datetime import UTC, datetime

import pytest

from pytripmeter.config import TripConfig
from pytripmeter.exceptions import TripConfigError
from pytripmeter.ingestion.normalize import (
    normalize_timestamp_seconds,
    parse_timestamp,
    safe_float,
    wrap_degrees,
    wrap_longitude,
)


def test_safe_float_sentinels() -> None:
    assert safe_float("12.5") == 12.5
    assert safe_float(3) == 3.0
    for value in (None, "", "--", "nan", float("nan"), float("inf"), "abc", True):
        assert safe_float(value) is None


def test_wrap_longitude() -> None:
    assert wrap_longitude(179.5) == 179.5
    assert wrap_longitude(180.0) == -180.0
    assert wrap_longitude(-181.0) == pytest.approx(179.0)
    assert wrap_longitude(540.0) == -180.0


def test_wrap_degrees() -> None:
    assert wrap_degrees(0.0) == 0.0
    assert wrap_degrees(360.0) == 0.0
    assert wrap_degrees(-45.0) == 315.0
    assert 0.0 <= wrap_degrees(-1e-20) < 360.0


def test_normalize_timestamp_seconds() -> None:
    assert normalize_timestamp_seconds(None) is None
    assert normalize_timestamp_seconds(0) is None
    assert normalize_timestamp_seconds(-5) is None
    assert normalize_timestamp_seconds(1_770_928_447) == 1_770_928_447.0
    assert normalize_timestamp_seconds("1770928447000") == 1_770_928_447.0


def test_parse_timestamp_iso_strings() -> None:
    assert parse_timestamp("2026-01-01T12:00:00.000Z") == datetime(2026, 1, 1, 12, tzinfo=UTC)
    assert parse_timestamp("2026-01-01T12:00:00") == datetime(2026, 1, 1, 12, tzinfo=UTC)
    assert parse_timestamp("yesterday") is None
    assert parse_timestamp("--") is None


def test_config_defaults() -> None:
    config = TripConfig()

    assert config.max_speed_kmh == 220.0
    assert config.jitter_threshold_m == 0.5
    assert config.moving_speed_threshold_kmh == 1.0
    assert config.export_size == 1200
    assert config.export_padding == 1000.0
    assert config.stroke_width == 5
    assert config.overlay_stroke_width == 4
    assert config.accent_color == (246, 166, 27)
    assert config.snapshot_timeout is None


def test_config_from_env(monkeypatch) -> None:
    monkeypatch.setenv("TRIPMETER_MAX_SPEED_KMH", "180")
    monkeypatch.setenv("TRIPMETER_EXPORT_SIZE", "800")
    monkeypatch.setenv("TRIPMETER_ACCENT_COLOR", "#ff0000")
    monkeypatch.setenv("TRIPMETER_SHOWS_BUILDINGS", "no")
    monkeypatch.setenv("TRIPMETER_SNAPSHOT_TIMEOUT", "2.5")
    monkeypatch.setenv("TRIPMETER_MAP_TYPE", "Satellite")
    monkeypatch.setenv("TRIPMETER_OVERLAY_STROKE_WIDTH", "6")

    config = TripConfig.from_env(export_size=640)

    assert config.max_speed_kmh == 180.0
    assert config.export_size == 640
    assert config.accent_color == (255, 0, 0)
    assert config.shows_buildings is False
    assert config.snapshot_timeout == 2.5
    assert config.map_type == "satellite"
    assert config.overlay_stroke_width == 6


def test_config_from_env_rejects_garbage(monkeypatch) -> None:
    monkeypatch.setenv("TRIPMETER_EXPORT_SIZE", "large")

    with pytest.raises(TripConfigError):
        TripConfig.from_env()


def test_config_from_env_overlay_width_override_wins(monkeypatch) -> None:
    monkeypatch.setenv("TRIPMETER_OVERLAY_STROKE_WIDTH", "6")

    assert TripConfig.from_env(overlay_stroke_width=3).overlay_stroke_width == 3


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_speed_kmh": 0},
        {"jitter_threshold_m": -0.1},
        {"export_size": 0},
        {"stroke_width": 0},
        {"overlay_stroke_width": 0},
        {"accent_color": (300, 0, 0)},
        {"map_type": "blueprint"},
        {"snapshot_timeout": 0},
    ],
)
def test_config_validation(kwargs: dict) -> None:
    with pytest.raises(TripConfigError):
        TripConfig(**kwargs)
