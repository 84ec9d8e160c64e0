"""
FIT file location source: turns a recorded .fit activity into LocationSample values.

Each FIT 'record' message carrying a position becomes one sample, in file
order, ready to be pushed into a TrackingEngine (see tracking.replay).

Field mapping from FIT to LocationSample:
  FIT field                     → sample field
  timestamp                     → timestamp_ms (UTC epoch milliseconds)
  position_lat / position_long  → latitude / longitude (degrees, from semicircles)
  enhanced_speed / speed        → speed_ms
  enhanced_altitude / altitude  → altitude_m
FIT records carry no horizontal accuracy, so accuracy_m is always None.
"""
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List

import fitparse

from fittrack.tracking.models import LocationSample

logger = logging.getLogger(__name__)

# Garmin stores lat/lon as 32-bit signed integers in "semicircles"
# Degrees = semicircles * (180 / 2^31)
_SEMICIRCLE_TO_DEGREES = 180.0 / (2**31)


class FitParseError(Exception):
    """Raised when a FIT file cannot be turned into location samples."""


def _to_epoch_ms(timestamp: datetime) -> int:
    # fitparse yields naive datetimes in UTC
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return int(timestamp.timestamp() * 1000)


def read_fit_samples(path: Path) -> List[LocationSample]:
    """
    Parse a .fit file into positioned location samples.

    Args:
        path: Path to the .fit file

    Returns:
        Samples in file order. Records without a timestamp or position are skipped.

    Raises:
        FitParseError: if the file is missing, unreadable, or has no positioned records
    """
    if not path.exists():
        raise FitParseError(f"FIT file not found: {path}")

    try:
        fit = fitparse.FitFile(str(path))
        records = list(fit.get_messages("record"))
    except Exception as exc:
        raise FitParseError(f"Failed to parse FIT file {path}: {exc}") from exc

    samples: List[LocationSample] = []
    skipped = 0
    for record in records:
        values = record.get_values()
        timestamp = values.get("timestamp")
        raw_lat = values.get("position_lat")
        raw_lon = values.get("position_long")
        if timestamp is None or raw_lat is None or raw_lon is None:
            skipped += 1
            continue

        raw_speed = values.get("enhanced_speed")
        if raw_speed is None:
            raw_speed = values.get("speed")
        raw_alt = values.get("enhanced_altitude")
        if raw_alt is None:
            raw_alt = values.get("altitude")

        samples.append(LocationSample(
            latitude=raw_lat * _SEMICIRCLE_TO_DEGREES,
            longitude=raw_lon * _SEMICIRCLE_TO_DEGREES,
            timestamp_ms=_to_epoch_ms(timestamp),
            speed_ms=float(raw_speed) if raw_speed is not None else None,
            altitude_m=float(raw_alt) if raw_alt is not None else None,
        ))

    if not samples:
        raise FitParseError(f"No positioned 'record' messages found in FIT file: {path}")

    if skipped:
        logger.info("Skipped %d FIT records without timestamp or position in %s", skipped, path.name)
    return samples
