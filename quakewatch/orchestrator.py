"""Orchestrator - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure functional
core and the I/O-performing shell components:

    cache check -> page fetch -> extraction -> ordering -> cache update

with a fallback to the previous (stale) record set when a refresh fails.
"""

import logging
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

import requests

from quakewatch.core.config import Config
from quakewatch.core.extractor import extract_records, sort_newest_first
from quakewatch.core.freshness import CacheEntry, is_fresh
from quakewatch.core.record import SeismicRecord
from quakewatch.shell.phivolcs_client import PhivolcsClient
from quakewatch.shell.record_cache import RecordCache


logger = logging.getLogger(__name__)


STALE_FETCH_MESSAGE = "Failed to fetch fresh data, serving cached data"
STALE_EMPTY_MESSAGE = "Source page contained no valid records, serving cached data"


class UpstreamUnavailableError(Exception):
    """Raised when the source cannot be fetched and nothing is cached."""


@dataclass(frozen=True)
class RecordSet:
    """Records returned to request handlers.

    Attributes:
        records: Records, newest first
        cached: True if served from the cache rather than a fetch just made
        last_update: Capture time of the records
        error: Note explaining why stale data is being served (optional)
    """
    records: tuple[SeismicRecord, ...]
    cached: bool
    last_update: datetime
    error: str | None = None

    @property
    def count(self) -> int:
        return len(self.records)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FetchOrchestrator:
    """Serves record sets from the cache, refreshing from PHIVOLCS when stale.

    Concurrent callers that find the cache stale share a single in-flight
    fetch per source URL instead of each hitting the source.
    """

    def __init__(
        self,
        config: Config,
        client: PhivolcsClient | None = None,
        cache: RecordCache | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize orchestrator with configuration.

        Args:
            config: Application configuration
            client: PHIVOLCS client (created if not provided)
            cache: Record cache (created if not provided)
            clock: Returns the current time (injectable for tests)
        """
        self.config = config
        self.client = client or PhivolcsClient(
            url=config.source_url,
            timeout=config.fetch_timeout_seconds,
            user_agent=config.user_agent,
        )
        self.cache = cache or RecordCache(ttl=config.cache_ttl)
        self.clock = clock
        self._inflight: dict[str, Future] = {}
        self._inflight_lock = threading.Lock()

    def get_record_set(self, now: datetime | None = None) -> RecordSet:
        """Return the current record set, fetching if the cache is stale.

        Args:
            now: Current time (defaults to the orchestrator's clock)

        Returns:
            RecordSet, fresh or cached

        Raises:
            UpstreamUnavailableError: If the fetch failed and nothing is cached
        """
        if now is None:
            now = self.clock()

        entry = self.cache.get()
        if is_fresh(entry, now, self.cache.ttl):
            logger.info("Serving cached data (%d records)", len(entry.records))
            return RecordSet(
                records=entry.records,
                cached=True,
                last_update=entry.captured_at,
            )

        return self._refresh_shared(now)

    def _refresh_shared(self, now: datetime) -> RecordSet:
        """Run a refresh, or wait for the one already in flight."""
        key = self.client.url

        with self._inflight_lock:
            future = self._inflight.get(key)
            leader = future is None
            if leader:
                future = Future()
                self._inflight[key] = future

        if not leader:
            logger.debug("Waiting on in-flight fetch for %s", key)
            return future.result()

        try:
            result = self._refresh(now)
        except BaseException as e:
            future.set_exception(e)
            raise
        else:
            future.set_result(result)
            return result
        finally:
            with self._inflight_lock:
                self._inflight.pop(key, None)

    def _refresh(self, now: datetime) -> RecordSet:
        """Fetch, extract, and cache a new record set.

        Performs at most one fetch and at most one cache update.
        """
        logger.info("Scraping fresh data from %s", self.client.url)

        try:
            html = self.client.fetch_page()
        except requests.RequestException as e:
            return self._fall_back(e, STALE_FETCH_MESSAGE)

        try:
            extraction = extract_records(
                html,
                row_selector=self.config.row_selector,
                timezone_name=self.config.source_timezone,
            )
        except Exception as e:
            logger.exception("Failed to parse earthquake page")
            return self._fall_back(e, STALE_FETCH_MESSAGE)

        for verdict in extraction.skipped:
            logger.debug("Skipped row %d: %s", verdict.position, verdict.reason)

        records = sort_newest_first(extraction.records)

        if not records:
            logger.warning(
                "No valid records in %d rows from %s",
                extraction.rows_seen,
                self.client.url,
            )
            if self.cache.get() is not None:
                return self._fall_back(None, STALE_EMPTY_MESSAGE)
            return RecordSet(records=(), cached=False, last_update=now)

        self.cache.put(records, captured_at=now)

        logger.info(
            "Successfully scraped %d earthquakes (%d rows skipped)",
            len(records),
            len(extraction.skipped),
        )

        return RecordSet(records=tuple(records), cached=False, last_update=now)

    def _fall_back(self, error: Exception | None, message: str) -> RecordSet:
        """Serve the stale cache entry, or raise if there is none."""
        entry: CacheEntry | None = self.cache.get()

        if entry is None:
            logger.error("Error scraping earthquake data: %s", error)
            raise UpstreamUnavailableError(str(error)) from error

        logger.warning(
            "%s (captured at %s)%s",
            message,
            entry.captured_at.isoformat(),
            f": {error}" if error is not None else "",
        )

        return RecordSet(
            records=entry.records,
            cached=True,
            last_update=entry.captured_at,
            error=message,
        )
