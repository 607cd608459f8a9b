"""Record Cache - Imperative Shell.

Holds the most recent successfully extracted record set for the lifetime
of the process. Readers always see a whole CacheEntry: writes swap the
reference under a lock and never mutate an entry in place.
"""

import logging
import threading
from datetime import datetime, timedelta

from quakewatch.core.freshness import DEFAULT_TTL, CacheEntry, entry_age, is_fresh
from quakewatch.core.record import SeismicRecord


logger = logging.getLogger(__name__)


class RecordCache:
    """Process-wide, thread-safe holder of the last good record set."""

    def __init__(self, ttl: timedelta = DEFAULT_TTL) -> None:
        """Initialize an empty cache.

        Args:
            ttl: Maximum age of an entry that is still fresh
        """
        self.ttl = ttl
        self._entry: CacheEntry | None = None
        self._lock = threading.Lock()

    def get(self) -> CacheEntry | None:
        """Return the current entry, or None if nothing has been cached."""
        with self._lock:
            return self._entry

    def is_fresh(self, now: datetime) -> bool:
        """Return True if an entry exists and is younger than the TTL."""
        return is_fresh(self.get(), now, self.ttl)

    def put(self, records: list[SeismicRecord], captured_at: datetime) -> bool:
        """Replace the cached entry with a new record set.

        Empty record sets are rejected so a bad fetch never erases good data.

        Args:
            records: Freshly extracted records
            captured_at: When the fetch that produced them ran

        Returns:
            True if the entry was replaced
        """
        if not records:
            logger.debug("Ignoring empty record set, keeping current entry")
            return False

        entry = CacheEntry(records=tuple(records), captured_at=captured_at)
        with self._lock:
            self._entry = entry

        logger.debug("Cached %d records captured at %s", len(records), captured_at.isoformat())
        return True

    def age_seconds(self, now: datetime) -> float | None:
        """Seconds since the current entry was captured, or None if empty."""
        entry = self.get()
        if entry is None:
            return None
        return round(entry_age(entry, now).total_seconds(), 1)
