"""Thread-safe sensor feed.

Sensor drivers usually deliver readings on their own thread.  The feed
parses each reading on that thread and re-posts the resulting fix onto
the event loop that owns the trip session, so all state changes happen
on one context, one fix at a time.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pytripmeter.ingestion.sensor import heading_fix_from_payload, position_fix_from_payload

if TYPE_CHECKING:
    from pytripmeter.session import TripSession

_logger = logging.getLogger(__name__)


class SensorFeed:
    """Bridge from a sensor thread to a :class:`TripSession` on a loop."""

    def __init__(
        self,
        session: TripSession,
        *,
        loop: asyncio.AbstractEventLoop,
    ) -> None:
        self._session = session
        self._loop = loop
        self._dropped = 0
        self._dropped_lock = threading.Lock()

    @property
    def dropped(self) -> int:
        """Payloads that produced no fix or arrived after the loop closed."""
        with self._dropped_lock:
            return self._dropped

    def _count_drop(self) -> None:
        with self._dropped_lock:
            self._dropped += 1

    def push_position(self, payload: Mapping[str, Any]) -> None:
        """Deliver a raw position payload; safe to call from any thread."""
        fix = position_fix_from_payload(payload)
        if fix is None:
            self._count_drop()
            return
        self._post(self._session.ingest, fix)

    def push_heading(self, payload: Mapping[str, Any]) -> None:
        """Deliver a raw heading payload; safe to call from any thread."""
        fix = heading_fix_from_payload(payload)
        if fix is None:
            self._count_drop()
            return
        self._post(self._session.update_heading, fix)

    def _post(self, callback: Any, fix: Any) -> None:
        try:
            self._loop.call_soon_threadsafe(callback, fix)
        except RuntimeError:
            # Loop closed: the session is gone with it.
            self._count_drop()
            _logger.debug("Sensor reading arrived after the event loop closed")
