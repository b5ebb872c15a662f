"""Translate a batch of readings into EdgeX events.

Readings are grouped by asset name. Every asset present in the batch gets one
:class:`Envelope` holding a :class:`ReadingEntry` per datapoint, in the order
the readings and their datapoints were given. Assets are visited in
lexicographic order so the same batch always produces the same sequence of
events.
"""

import calendar
import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from edgex_north.reading import Reading

from .models import Envelope, ReadingEntry

logger = logging.getLogger(__name__)


def asset_names(readings: Sequence[Reading]) -> List[str]:
    """Distinct asset names in the batch, sorted."""
    return sorted({reading.asset_name for reading in readings})


def origin_timestamp(timestamp: datetime) -> int:
    # seconds * 1000 + microseconds, not epoch milliseconds
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    seconds = calendar.timegm(timestamp.astimezone(timezone.utc).utctimetuple())
    return seconds * 1000 + timestamp.microsecond


def build_reading_entries(reading: Reading) -> List[ReadingEntry]:
    origin = str(origin_timestamp(reading.timestamp))
    return [
        ReadingEntry(
            id=f"{datapoint.name}{reading.id}",
            origin=origin,
            name=datapoint.name,
            value=datapoint.render(),
        )
        for datapoint in reading.datapoints
    ]


def build_envelope(asset_name: str, readings: Sequence[Reading]) -> Optional[Envelope]:
    """
    Build the event for one asset from the readings of a batch.

    Args:
        asset_name: Asset whose readings are collected
        readings: The whole batch; readings of other assets are ignored

    Returns:
        The event, or None when the asset contributes no datapoints
    """
    envelope = None
    for reading in readings:
        if reading.asset_name != asset_name:
            continue
        if envelope is None:
            envelope = Envelope(device=asset_name, id=str(reading.id))
        envelope.readings.extend(build_reading_entries(reading))

    if envelope is None or not envelope.readings:
        return None
    return envelope


def build_envelopes(readings: Sequence[Reading]) -> List[Envelope]:
    envelopes = []
    for asset_name in asset_names(readings):
        envelope = build_envelope(asset_name, readings)
        if envelope is None:
            logger.warning("No datapoints for asset %s in this batch, nothing to send", asset_name)
            continue
        envelopes.append(envelope)
    return envelopes
