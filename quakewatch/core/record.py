"""Seismic record model and serialization - Pure functions.

A SeismicRecord is one row of the PHIVOLCS earthquake information table,
converted into typed fields. Records are immutable once created.
"""

from dataclasses import dataclass
from typing import Any, Sequence


@dataclass(frozen=True)
class SeismicRecord:
    """Immutable seismic event record.

    Attributes:
        sequence_id: 1-based position of the source row within its batch
        date: Date cell as presented by the source
        time: Time cell as presented by the source
        latitude: Epicenter latitude in decimal degrees (0 if unparsed)
        longitude: Epicenter longitude in decimal degrees (0 if unparsed)
        depth_label: Depth cell as presented by the source (may embed units)
        magnitude: Event magnitude (0 if unparsed)
        location: Human-readable location description
        origin_type: Origin/source type of the event
        intensity_label: Reported intensity text
        occurred_at_ms: Epoch milliseconds of date+time, None if unparseable
    """
    sequence_id: int
    date: str
    time: str
    latitude: float
    longitude: float
    depth_label: str
    magnitude: float
    location: str
    origin_type: str
    intensity_label: str
    occurred_at_ms: int | None = None


def record_to_dict(record: SeismicRecord) -> dict[str, Any]:
    """Convert a record to the API response format.

    Pure function. Keys match the JSON shape the dashboard consumes.

    Args:
        record: Record to convert

    Returns:
        JSON-serializable dict
    """
    return {
        "id": record.sequence_id,
        "date": record.date,
        "time": record.time,
        "latitude": record.latitude,
        "longitude": record.longitude,
        "depth": record.depth_label,
        "magnitude": record.magnitude,
        "location": record.location,
        "origin": record.origin_type,
        "intensity": record.intensity_label,
        "timestamp": record.occurred_at_ms,
    }


def records_to_dicts(records: Sequence[SeismicRecord]) -> list[dict[str, Any]]:
    """Convert a list of records to API response format."""
    return [record_to_dict(r) for r in records]
