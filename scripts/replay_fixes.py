#!/usr/bin/env python3
"""Replay a recorded fix log through a trip session.

Reads a JSON-lines file where every line is either a position payload
(``lat``/``lon``/``speed``/``time``, gpsd ``TPV`` reports work as-is) or a
heading payload (``heading`` or gpsd ``ATT``), prints the dashboard
readout after every position, and optionally writes the route image.

Usage
-----
::

    python scripts/replay_fixes.py drive.jsonl
    python scripts/replay_fixes.py drive.jsonl --export route.png --quiet

Options::

    --export FILE        Write the exported route PNG to FILE
    --quiet              Only print the final readout
    --debug              Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pytripmeter import (  # noqa: E402
    PlainSnapshotter,
    RouteExporter,
    TripConfig,
    TripSession,
    format_readout,
    heading_fix_from_payload,
    position_fix_from_payload,
)


def _is_heading_payload(payload: dict[str, Any]) -> bool:
    if payload.get("class") == "ATT":
        return True
    has_position = any(key in payload for key in ("lat", "latitude", "lon", "longitude"))
    return not has_position and any(key in payload for key in ("heading", "true_heading", "trueHeading"))


def _print_readout(session: TripSession, prefix: str = "") -> None:
    readout = format_readout(session.snapshot(), max_speed_kmh=session.config.max_speed_kmh)
    print(
        f"{prefix}{readout.speed:>4} km/h  avg {readout.average:>4}  "
        f"trip {readout.trip:>6} km  heading {readout.heading:<2}  "
        f"route {session.snapshot().route_length}"
    )


async def _replay(path: Path, export: Path | None, quiet: bool) -> int:
    session = TripSession(TripConfig.from_env())
    skipped = 0

    with path.open(encoding="utf-8") as handle:
        for line_no, line in enumerate(handle, start=1):
            text = line.strip()
            if not text:
                continue
            try:
                payload = json.loads(text)
            except json.JSONDecodeError as exc:
                print(f"line {line_no}: invalid JSON ({exc})", file=sys.stderr)
                skipped += 1
                continue
            if not isinstance(payload, dict):
                skipped += 1
                continue

            if _is_heading_payload(payload):
                heading = heading_fix_from_payload(payload)
                if heading is None:
                    skipped += 1
                    continue
                session.update_heading(heading)
                continue

            fix = position_fix_from_payload(payload)
            if fix is None:
                skipped += 1
                continue
            session.ingest(fix)
            if not quiet:
                _print_readout(session, prefix=f"{line_no:>6}: ")

    _print_readout(session, prefix="final: ")
    if skipped:
        print(f"skipped {skipped} unusable line(s)", file=sys.stderr)

    if export is not None:
        exporter = RouteExporter(PlainSnapshotter(), config=session.config)
        image = await session.export_route(exporter)
        if image is None:
            print("route is empty, no image written", file=sys.stderr)
            return 1
        image.save(export)
        print(f"wrote {export} ({len(image.pixel_points)} points)")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Replay a JSON-lines fix log through a trip session")
    parser.add_argument("log", type=Path, help="JSON-lines file with position/heading payloads")
    parser.add_argument("--export", type=Path, default=None, help="write the route image to this PNG file")
    parser.add_argument("--quiet", action="store_true", help="only print the final readout")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(_replay(args.log, args.export, args.quiet))


if __name__ == "__main__":
    sys.exit(main())
