"""Internal constants shared across the library."""

#: Metres per second to kilometres per hour.
MPS_TO_KMH = 3.6

#: Mean Earth radius in metres used for great-circle distances.
EARTH_RADIUS_M = 6_371_000.0

# ------------------------------------------------------------------
# Trip aggregation defaults
# ------------------------------------------------------------------

#: Display ceiling for the current speed.  Sensor spikes above this are
#: clamped; it is a presentation bound, not a claim about the vehicle.
MAX_SPEED_KMH = 220.0

#: Position deltas at or below this distance are treated as GPS jitter.
JITTER_THRESHOLD_M = 0.5

#: Speed samples at or below this value do not count toward the average.
MOVING_SPEED_THRESHOLD_KMH = 1.0

#: Sentinel used for "speed unknown" on a position fix.
UNKNOWN_SPEED = -1.0

# ------------------------------------------------------------------
# Route export defaults
# ------------------------------------------------------------------

#: Width of the Web-Mercator plane in map units (2^28, zoom 20 at 256 px tiles).
MAP_WORLD_SIZE = 268_435_456.0

#: Largest latitude representable in Web-Mercator.
MERCATOR_MAX_LATITUDE = 85.05112878

EXPORT_SIZE_PX = 1200
EXPORT_PADDING_UNITS = 1000.0
EXPORT_STROKE_WIDTH = 5
#: Width of the live route line drawn over the dashboard map.
OVERLAY_STROKE_WIDTH = 4

#: Dashboard accent (amber) as an RGB tuple.
ACCENT_COLOR: tuple[int, int, int] = (246, 166, 27)

#: Background used by the offline snapshotter (dark map appearance).
PLAIN_BACKGROUND_DARK: tuple[int, int, int] = (35, 34, 35)
PLAIN_BACKGROUND_LIGHT: tuple[int, int, int] = (242, 239, 233)

MAP_TYPES: frozenset[str] = frozenset({"standard", "satellite", "hybrid", "muted"})

#: Placeholder shown before the first heading arrives.
NO_HEADING = "--"
