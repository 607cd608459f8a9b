"""Record set aggregation - Pure functions.

Derives the "latest event" view and summary statistics from a record set.
Nothing here raises on empty input; callers get None and decide how to
report that there is no data.
"""

from dataclasses import dataclass
from typing import Any, Sequence

from quakewatch.core.parsing import parse_number
from quakewatch.core.record import SeismicRecord


@dataclass(frozen=True)
class MagnitudeHistogram:
    """Event counts per magnitude class.

    Attributes:
        minor: magnitude < 3
        light: 3 <= magnitude < 4
        moderate: 4 <= magnitude < 5
        strong: 5 <= magnitude < 6
        major: magnitude >= 6
    """
    minor: int = 0
    light: int = 0
    moderate: int = 0
    strong: int = 0
    major: int = 0

    @property
    def total(self) -> int:
        return self.minor + self.light + self.moderate + self.strong + self.major


@dataclass(frozen=True)
class DepthHistogram:
    """Event counts per focal depth class (km).

    Attributes:
        shallow: depth <= 70
        intermediate: 70 < depth <= 300
        deep: depth > 300
    """
    shallow: int = 0
    intermediate: int = 0
    deep: int = 0

    @property
    def total(self) -> int:
        return self.shallow + self.intermediate + self.deep


@dataclass(frozen=True)
class StatsSummary:
    """Aggregate statistics over a non-empty record set.

    Attributes:
        total: Number of records
        average_magnitude: Mean magnitude, rounded to 2 decimals
        max_magnitude: Largest magnitude
        min_magnitude: Smallest magnitude
        distinct_location_count: Number of unique location strings
        by_magnitude: Magnitude histogram
        by_depth: Depth histogram (records with unparseable depth excluded)
    """
    total: int
    average_magnitude: float
    max_magnitude: float
    min_magnitude: float
    distinct_location_count: int
    by_magnitude: MagnitudeHistogram
    by_depth: DepthHistogram


def latest(records: Sequence[SeismicRecord]) -> SeismicRecord | None:
    """Return the most recent record.

    Pure function. Relies on the record set already being ordered newest
    first; no sorting happens here.

    Args:
        records: Record set, newest first

    Returns:
        First record, or None if the set is empty
    """
    if not records:
        return None
    return records[0]


def parse_depth_km(record: SeismicRecord) -> float | None:
    """Parse a record's depth label into kilometres, None if unparseable."""
    return parse_number(record.depth_label).value


def magnitude_histogram(records: Sequence[SeismicRecord]) -> MagnitudeHistogram:
    """Bucket records by magnitude.

    Pure function.
    """
    counts = {"minor": 0, "light": 0, "moderate": 0, "strong": 0, "major": 0}

    for record in records:
        mag = record.magnitude
        if mag < 3:
            counts["minor"] += 1
        elif mag < 4:
            counts["light"] += 1
        elif mag < 5:
            counts["moderate"] += 1
        elif mag < 6:
            counts["strong"] += 1
        else:
            counts["major"] += 1

    return MagnitudeHistogram(**counts)


def depth_histogram(records: Sequence[SeismicRecord]) -> DepthHistogram:
    """Bucket records by focal depth.

    Pure function. Records whose depth label cannot be parsed are left out
    of every bucket.
    """
    counts = {"shallow": 0, "intermediate": 0, "deep": 0}

    for record in records:
        depth = parse_depth_km(record)
        if depth is None:
            continue
        if depth <= 70:
            counts["shallow"] += 1
        elif depth <= 300:
            counts["intermediate"] += 1
        else:
            counts["deep"] += 1

    return DepthHistogram(**counts)


def summarize(records: Sequence[SeismicRecord]) -> StatsSummary | None:
    """Compute summary statistics for a record set.

    Pure function.

    Args:
        records: Record set to summarize

    Returns:
        StatsSummary, or None if the set is empty
    """
    if not records:
        return None

    magnitudes = [r.magnitude for r in records]

    return StatsSummary(
        total=len(records),
        average_magnitude=round(sum(magnitudes) / len(magnitudes), 2),
        max_magnitude=max(magnitudes),
        min_magnitude=min(magnitudes),
        distinct_location_count=len({r.location for r in records}),
        by_magnitude=magnitude_histogram(records),
        by_depth=depth_histogram(records),
    )


def stats_to_dict(stats: StatsSummary) -> dict[str, Any]:
    """Convert a summary to the API response format."""
    mag = stats.by_magnitude
    depth = stats.by_depth

    return {
        "total": stats.total,
        "averageMagnitude": stats.average_magnitude,
        "maxMagnitude": stats.max_magnitude,
        "minMagnitude": stats.min_magnitude,
        "regionsCount": stats.distinct_location_count,
        "byMagnitudeRange": {
            "minor": mag.minor,
            "light": mag.light,
            "moderate": mag.moderate,
            "strong": mag.strong,
            "major": mag.major,
        },
        "byDepth": {
            "shallow": depth.shallow,
            "intermediate": depth.intermediate,
            "deep": depth.deep,
        },
    }
