"""Cache freshness rules - Pure functions.

The cache itself (shared state) lives in the shell layer. This module only
defines the immutable entry it holds and the rule for when it is stale.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from quakewatch.core.record import SeismicRecord


DEFAULT_TTL = timedelta(minutes=5)


@dataclass(frozen=True)
class CacheEntry:
    """An immutable snapshot of one successful extraction.

    Attributes:
        records: Non-empty record set, newest first
        captured_at: When the fetch that produced the records ran
    """
    records: tuple[SeismicRecord, ...]
    captured_at: datetime


def entry_age(entry: CacheEntry, now: datetime) -> timedelta:
    """Return how old an entry is at `now`."""
    return now - entry.captured_at


def is_fresh(
    entry: CacheEntry | None,
    now: datetime,
    ttl: timedelta = DEFAULT_TTL,
) -> bool:
    """Determine whether a cache entry can be served without refetching.

    Pure function. An entry exactly `ttl` old is already stale.

    Args:
        entry: Cached entry, or None if nothing is cached
        now: Current time
        ttl: Maximum age of a fresh entry

    Returns:
        True if the entry exists and is younger than ttl
    """
    if entry is None:
        return False
    return entry_age(entry, now) < ttl
