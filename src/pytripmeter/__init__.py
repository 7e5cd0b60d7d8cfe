"""pytripmeter - trip metrics and route export from a positioning sensor."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pytripmeter")
except PackageNotFoundError:
    __version__ = "0+local"
from pytripmeter.config import TripConfig
from pytripmeter.exceptions import (
    RouteExportError,
    SnapshotError,
    TripConfigError,
    TripMeterError,
)
from pytripmeter.export import (
    ExecutorSnapshotter,
    ExportImage,
    MapRegion,
    MapSnapshot,
    MapSnapshotter,
    PlainSnapshotter,
    RouteExporter,
    SnapshotRequest,
)
from pytripmeter.heading import HeadingTracker, classify
from pytripmeter.ingestion.feed import SensorFeed
from pytripmeter.ingestion.sensor import heading_fix_from_payload, position_fix_from_payload
from pytripmeter.models import (
    HeadingFix,
    HeadingLabel,
    HeadingState,
    PositionFix,
    TripSnapshot,
    TripState,
)
from pytripmeter.readout import DashboardReadout, format_readout
from pytripmeter.session import ExportConsumer, ExportResult, TripSession
from pytripmeter.state import RouteTrack, SpeedDistanceAggregator, TripUpdate, UpdateKind

__all__ = [
    "__version__",
    "DashboardReadout",
    "ExecutorSnapshotter",
    "ExportConsumer",
    "ExportImage",
    "ExportResult",
    "HeadingFix",
    "HeadingLabel",
    "HeadingState",
    "HeadingTracker",
    "MapRegion",
    "MapSnapshot",
    "MapSnapshotter",
    "PlainSnapshotter",
    "PositionFix",
    "RouteExportError",
    "RouteExporter",
    "RouteTrack",
    "SensorFeed",
    "SnapshotError",
    "SnapshotRequest",
    "SpeedDistanceAggregator",
    "TripConfig",
    "TripConfigError",
    "TripMeterError",
    "TripSession",
    "TripSnapshot",
    "TripState",
    "TripUpdate",
    "UpdateKind",
    "classify",
    "format_readout",
    "heading_fix_from_payload",
    "position_fix_from_payload",
]
