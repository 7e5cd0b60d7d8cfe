"""Route export: bounding region, map snapshot and polyline compositing."""

from pytripmeter.export.rasterizer import (
    ExportImage,
    RouteExporter,
    build_snapshot_request,
    compose_route_image,
    draw_polyline,
)
from pytripmeter.export.region import MapRegion, bounding_region, padded_region
from pytripmeter.export.snapshot import (
    ExecutorSnapshotter,
    MapSnapshot,
    MapSnapshotter,
    PlainSnapshotter,
    SnapshotRequest,
    fit_projection,
)

__all__ = [
    "ExecutorSnapshotter",
    "ExportImage",
    "MapRegion",
    "MapSnapshot",
    "MapSnapshotter",
    "PlainSnapshotter",
    "RouteExporter",
    "SnapshotRequest",
    "bounding_region",
    "build_snapshot_request",
    "compose_route_image",
    "draw_polyline",
    "fit_projection",
    "padded_region",
]
