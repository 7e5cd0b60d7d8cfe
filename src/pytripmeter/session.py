"""Trip session: the single owner of a trip's state."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
import weakref
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from typing import Any, Protocol

from pytripmeter.config import TripConfig
from pytripmeter.exceptions import RouteExportError
from pytripmeter.export.rasterizer import ExportImage, RouteExporter
from pytripmeter.heading import HeadingTracker
from pytripmeter.models.fix import HeadingFix, PositionFix
from pytripmeter.models.heading import HeadingState
from pytripmeter.models.trip import TripSnapshot, TripState
from pytripmeter.state.aggregator import SpeedDistanceAggregator
from pytripmeter.state.events import TripUpdate, UpdateKind
from pytripmeter.state.route import RouteTrack

_logger = logging.getLogger(__name__)

TripListener = Callable[[TripUpdate], None]


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Outcome of a background export.

    ``image`` is ``None`` both for an empty route and on failure; check
    ``error`` to tell them apart.
    """

    image: ExportImage | None = None
    error: RouteExportError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ExportConsumer(Protocol):
    def on_export_complete(self, result: ExportResult) -> None: ...


def _deliver_export_result(
    consumer_ref: weakref.ReferenceType[ExportConsumer],
    task: asyncio.Task[ExportImage | None],
) -> None:
    if task.cancelled():
        _logger.debug("Route export cancelled")
        return

    # Always retrieve the outcome so asyncio never reports it as unhandled.
    exc = task.exception()
    if exc is None:
        result = ExportResult(image=task.result())
    elif isinstance(exc, RouteExportError):
        result = ExportResult(error=exc)
    else:
        error = RouteExportError(f"route export failed: {exc}")
        error.__cause__ = exc
        result = ExportResult(error=error)

    consumer = consumer_ref()
    if consumer is None:
        _logger.debug("Export consumer went away before the export finished; dropping result")
        return
    consumer.on_export_complete(result)


class TripSession:
    """One trip, from start until :meth:`reset`.

    Owns the aggregator, the route track and the heading tracker.  The
    surrounding system calls :meth:`ingest` for every position fix and
    :meth:`update_heading` for every heading fix; each call completes
    its whole update before returning.

    Usage::

        session = TripSession(TripConfig.from_env())
        unsubscribe = session.subscribe(render)
        session.ingest(fix)
        image = await session.export_route(RouteExporter(snapshotter))
    """

    def __init__(self, config: TripConfig | None = None) -> None:
        self._config = config or TripConfig()
        self._lock = threading.RLock()
        self._aggregator = SpeedDistanceAggregator(self._config)
        self._route = RouteTrack()
        self._heading = HeadingTracker()
        self._current_fix: PositionFix | None = None
        self._listeners: list[TripListener] = []
        self._exports: set[asyncio.Task[ExportImage | None]] = set()

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> TripSession:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.cancel_exports()

    @property
    def config(self) -> TripConfig:
        return self._config

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def ingest(self, fix: PositionFix) -> TripState:
        """Apply a position fix to the trip metrics and the route."""
        with self._lock:
            state = self._aggregator.ingest(fix)
            appended = self._route.append_if_moving(fix)
            self._current_fix = fix
            snapshot = self._snapshot_locked(state)
        self._notify(TripUpdate(kind=UpdateKind.POSITION, snapshot=snapshot, route_appended=appended))
        return state

    def update_heading(self, fix: HeadingFix) -> HeadingState:
        """Apply a heading fix."""
        with self._lock:
            heading = self._heading.update(fix)
            snapshot = self._snapshot_locked(self._aggregator.snapshot())
        self._notify(TripUpdate(kind=UpdateKind.HEADING, snapshot=snapshot))
        return heading

    def reset(self) -> None:
        """End the current trip and start a new one.

        Clears the metrics, the route and the current position.  The
        heading is kept; it describes the vehicle, not the trip.
        """
        with self._lock:
            self._aggregator.reset()
            self._route.reset()
            self._current_fix = None
            snapshot = self._snapshot_locked(self._aggregator.snapshot())
        _logger.info("Trip session reset")
        self._notify(TripUpdate(kind=UpdateKind.RESET, snapshot=snapshot))

    # ------------------------------------------------------------------
    # Published state
    # ------------------------------------------------------------------

    def snapshot(self) -> TripSnapshot:
        with self._lock:
            return self._snapshot_locked(self._aggregator.snapshot())

    def current_route(self) -> tuple[PositionFix, ...]:
        """The route as of now; later fixes do not appear in the copy."""
        return self._route.current_route()

    def subscribe(self, listener: TripListener) -> Callable[[], None]:
        """Register *listener* for :class:`TripUpdate` notifications.

        Returns a callable that removes the listener again.
        """
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock, contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return _unsubscribe

    def _snapshot_locked(self, state: TripState) -> TripSnapshot:
        return TripSnapshot(
            trip=state,
            heading=self._heading.state,
            current_fix=self._current_fix,
            route_length=len(self._route),
        )

    def _notify(self, update: TripUpdate) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(update)
            except Exception:
                _logger.warning("Trip listener %r failed on %s update", listener, update.kind, exc_info=True)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    async def export_route(self, exporter: RouteExporter) -> ExportImage | None:
        """Export the route as of this call.

        Fixes ingested while the export runs are not part of the image.
        Returns ``None`` for an empty route; raises
        :class:`~pytripmeter.exceptions.RouteExportError` on failure.
        """
        return await exporter.export(self.current_route())

    def request_export(
        self,
        exporter: RouteExporter,
        consumer: ExportConsumer | None = None,
    ) -> asyncio.Task[ExportImage | None]:
        """Start a background export on the running loop.

        The result is delivered to ``consumer.on_export_complete`` on the
        loop.  Only a weak reference to *consumer* is kept: if it is
        garbage collected first, the result is dropped.  The returned
        task can be awaited or cancelled.
        """
        # Built first so an unreferenceable consumer fails before the export is scheduled.
        consumer_ref = weakref.ref(consumer) if consumer is not None else None
        route = self.current_route()
        loop = asyncio.get_running_loop()
        task = loop.create_task(exporter.export(route), name="pytripmeter-route-export")
        self._exports.add(task)
        task.add_done_callback(self._exports.discard)
        if consumer_ref is not None:
            task.add_done_callback(partial(_deliver_export_result, consumer_ref))
        return task

    async def cancel_exports(self) -> None:
        """Cancel background exports still in flight."""
        pending = list(self._exports)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
