"""Reading data model.

A :class:`Reading` is one telemetry sample handed to the exporter by the
host pipeline: the asset (device or sensor) it came from, the identifier the
pipeline assigned to it, the time it was captured and an ordered list of
named :class:`Datapoint` values.

Typical usage:
    reading = Reading(
        asset_name="pump-1",
        reading_id=42,
        timestamp=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        datapoints=[Datapoint("temperature", 21.5), Datapoint("status", "ok")],
    )
    reading.to_dict()
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union


def render_value(value: Any) -> str:
    """Render a datapoint value as the string sent in the ``value`` field.

    Numbers keep full precision (``float`` uses ``repr``, which round-trips),
    strings are returned as-is and structured values become compact JSON.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, str):
        return value
    if value is None or isinstance(value, (list, tuple, dict)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def to_datetime(timestamp: Union[datetime, int, float, str]) -> datetime:
    """Convert a datetime, epoch seconds or ISO-8601 string to an aware UTC datetime."""
    if isinstance(timestamp, datetime):
        dt = timestamp
    elif isinstance(timestamp, bool):
        raise TypeError("timestamp must be a datetime, epoch seconds or an ISO-8601 string")
    elif isinstance(timestamp, (int, float)):
        dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    elif isinstance(timestamp, str):
        dt = datetime.fromisoformat(timestamp.strip().replace("Z", "+00:00"))
    else:
        raise TypeError("timestamp must be a datetime, epoch seconds or an ISO-8601 string")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class Datapoint:
    """One named value within a reading."""

    def __init__(self, name: str, value: Any) -> None:
        self.name = str(name)
        self.value = value

    def render(self) -> str:
        return render_value(self.value)

    def __eq__(self, other):
        if not isinstance(other, Datapoint):
            return NotImplemented
        return self.name == other.name and self.value == other.value

    def __repr__(self):
        return f"Datapoint({self.name!r}, {self.value!r})"


class Reading:
    """One telemetry sample for an asset.

    Instances belong to the caller; the exporter only reads them.
    """

    def __init__(self,
                 asset_name: str,
                 reading_id: Any,
                 timestamp: Union[datetime, int, float, str],
                 datapoints: Optional[List[Datapoint]] = None) -> None:
        """
        Args:
            asset_name: Name of the device or sensor the sample belongs to
            reading_id: Identifier assigned by the upstream pipeline
            timestamp: Capture time. Naive datetimes are taken as UTC
            datapoints: Ordered datapoints carried by the sample
        """
        self.asset_name = str(asset_name)
        self.id = reading_id
        self.timestamp = to_datetime(timestamp)
        self.datapoints = list(datapoints) if datapoints else []

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the host reading format"""
        return {
            'asset_code': self.asset_name,
            'id': self.id,
            'user_ts': self.timestamp.isoformat(),
            'reading': {dp.name: dp.value for dp in self.datapoints},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Reading':
        """Create a reading from a host reading dictionary.

        ``asset_code``/``id``/``user_ts``/``reading`` are the host keys;
        ``asset_name``, ``timestamp`` and a ``datapoints`` list of
        ``{"name", "value"}`` objects are accepted as well.
        """
        asset_name = data.get('asset_code', data.get('asset_name'))
        if not asset_name:
            raise ValueError("Reading has no asset_code")

        timestamp = data.get('user_ts', data.get('timestamp'))
        if timestamp is None:
            raise ValueError(f"Reading for asset {asset_name} has no user_ts")

        if 'reading' in data:
            datapoints = [Datapoint(name, value) for name, value in data['reading'].items()]
        else:
            datapoints = [Datapoint(dp['name'], dp.get('value')) for dp in data.get('datapoints', [])]

        return cls(
            asset_name=asset_name,
            reading_id=data.get('id', 0),
            timestamp=timestamp,
            datapoints=datapoints,
        )

    def __repr__(self):
        return (f"Reading(asset_name={self.asset_name!r}, id={self.id!r}, "
                f"timestamp={self.timestamp.isoformat()!r}, datapoints={self.datapoints!r})")
