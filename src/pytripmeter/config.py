"""Trip configuration for pytripmeter."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pytripmeter._constants import (
    ACCENT_COLOR,
    EXPORT_PADDING_UNITS,
    EXPORT_SIZE_PX,
    EXPORT_STROKE_WIDTH,
    JITTER_THRESHOLD_M,
    MAP_TYPES,
    MAX_SPEED_KMH,
    MOVING_SPEED_THRESHOLD_KMH,
    OVERLAY_STROKE_WIDTH,
)
from pytripmeter.exceptions import TripConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _parse_color(value: str) -> tuple[int, int, int]:
    """Parse ``"#f6a61b"`` or ``"246,166,27"`` into an RGB tuple."""
    text = value.strip()
    try:
        if text.startswith("#") and len(text) == 7:
            return (int(text[1:3], 16), int(text[3:5], 16), int(text[5:7], 16))
        parts = [int(part) for part in text.split(",")]
    except ValueError as exc:
        raise TripConfigError(f"invalid color value: {value!r}") from exc
    if len(parts) != 3:
        raise TripConfigError(f"color needs three components, got {value!r}")
    return (parts[0], parts[1], parts[2])


@dataclasses.dataclass(frozen=True)
class TripConfig:
    """Trip aggregation and export configuration.

    Parameters
    ----------
    max_speed_kmh : float
        Display ceiling for the current speed.  Readings above it are
        clamped.  This guards the gauge against sensor spikes and is not
        a physical limit.
    jitter_threshold_m : float
        Position deltas at or below this distance are discarded as GPS
        noise.  The comparison is strictly greater-than.
    moving_speed_threshold_kmh : float
        Only speed samples strictly above this value count toward the
        running average.
    export_size : int
        Width and height of the exported route image in pixels.
    export_padding : float
        Padding added on every side of the route bounding box, in
        Web-Mercator map units.
    stroke_width : int
        Route stroke width in the exported image.
    overlay_stroke_width : int
        Width of the live route line a map view draws over the dashboard
        map.
    accent_color : tuple of int
        RGB color used for the route and the dashboard readouts.
    map_type : str
        Map style requested from the snapshot collaborator.
    shows_buildings : bool
        Ask the snapshot collaborator to render 3D buildings.
    dark_appearance : bool
        Ask the snapshot collaborator for the dark map appearance.
    snapshot_timeout : float or None
        Seconds to wait for a map snapshot.  ``None`` waits indefinitely.
    """

    max_speed_kmh: float = MAX_SPEED_KMH
    jitter_threshold_m: float = JITTER_THRESHOLD_M
    moving_speed_threshold_kmh: float = MOVING_SPEED_THRESHOLD_KMH
    export_size: int = EXPORT_SIZE_PX
    export_padding: float = EXPORT_PADDING_UNITS
    stroke_width: int = EXPORT_STROKE_WIDTH
    overlay_stroke_width: int = OVERLAY_STROKE_WIDTH
    accent_color: tuple[int, int, int] = ACCENT_COLOR
    map_type: str = "standard"
    shows_buildings: bool = True
    dark_appearance: bool = True
    snapshot_timeout: float | None = None

    def __post_init__(self) -> None:
        if self.max_speed_kmh <= 0:
            raise TripConfigError("max_speed_kmh must be positive")
        if self.jitter_threshold_m < 0:
            raise TripConfigError("jitter_threshold_m must not be negative")
        if self.moving_speed_threshold_kmh < 0:
            raise TripConfigError("moving_speed_threshold_kmh must not be negative")
        if self.export_size <= 0:
            raise TripConfigError("export_size must be positive")
        if self.export_padding < 0:
            raise TripConfigError("export_padding must not be negative")
        if self.stroke_width <= 0:
            raise TripConfigError("stroke_width must be positive")
        if self.overlay_stroke_width <= 0:
            raise TripConfigError("overlay_stroke_width must be positive")
        if len(self.accent_color) != 3 or not all(0 <= c <= 255 for c in self.accent_color):
            raise TripConfigError(f"accent_color must be an RGB triple, got {self.accent_color!r}")
        if self.map_type not in MAP_TYPES:
            raise TripConfigError(f"unsupported map_type {self.map_type!r}; expected one of {sorted(MAP_TYPES)}")
        if self.snapshot_timeout is not None and self.snapshot_timeout <= 0:
            raise TripConfigError("snapshot_timeout must be positive or None")

    @classmethod
    def from_env(cls, **overrides: Any) -> TripConfig:
        """Create configuration from ``TRIPMETER_*`` environment variables.

        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        TripConfig
            Populated configuration.

        Raises
        ------
        TripConfigError
            If an environment value cannot be parsed.
        """
        env = os.environ

        _ENV_FLOAT_MAP = {
            "TRIPMETER_MAX_SPEED_KMH": "max_speed_kmh",
            "TRIPMETER_JITTER_THRESHOLD_M": "jitter_threshold_m",
            "TRIPMETER_MOVING_SPEED_THRESHOLD_KMH": "moving_speed_threshold_kmh",
            "TRIPMETER_EXPORT_PADDING": "export_padding",
            "TRIPMETER_SNAPSHOT_TIMEOUT": "snapshot_timeout",
        }
        _ENV_INT_MAP = {
            "TRIPMETER_EXPORT_SIZE": "export_size",
            "TRIPMETER_STROKE_WIDTH": "stroke_width",
            "TRIPMETER_OVERLAY_STROKE_WIDTH": "overlay_stroke_width",
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = float(val)
            except ValueError as exc:
                raise TripConfigError(f"{env_key} must be a number, got {val!r}") from exc

        for env_key, field_name in _ENV_INT_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = int(val)
            except ValueError as exc:
                raise TripConfigError(f"{env_key} must be an integer, got {val!r}") from exc

        color_env = env.get("TRIPMETER_ACCENT_COLOR")
        if color_env is not None and "accent_color" not in overrides:
            config_kwargs["accent_color"] = _parse_color(color_env)

        map_type_env = env.get("TRIPMETER_MAP_TYPE")
        if map_type_env is not None and "map_type" not in overrides:
            config_kwargs["map_type"] = map_type_env.strip().lower()

        if "shows_buildings" not in overrides:
            config_kwargs["shows_buildings"] = _env_bool(env.get("TRIPMETER_SHOWS_BUILDINGS"), True)

        if "dark_appearance" not in overrides:
            config_kwargs["dark_appearance"] = _env_bool(env.get("TRIPMETER_DARK_APPEARANCE"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
