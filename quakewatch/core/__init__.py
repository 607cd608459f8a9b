"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Lenient cell parsing
- Record extraction from the source page
- Cache freshness rules
- Latest-record and statistics aggregation

All functions here are deterministic and have no I/O.
"""

from quakewatch.core.record import SeismicRecord, record_to_dict, records_to_dicts
from quakewatch.core.parsing import ParsedNumber, parse_number, parse_occurred_at
from quakewatch.core.extractor import (
    ExtractionResult,
    RowVerdict,
    extract_records,
    sort_newest_first,
)
from quakewatch.core.freshness import CacheEntry, is_fresh
from quakewatch.core.stats import StatsSummary, latest, summarize, stats_to_dict

__all__ = [
    # Record
    "SeismicRecord",
    "record_to_dict",
    "records_to_dicts",
    # Parsing
    "ParsedNumber",
    "parse_number",
    "parse_occurred_at",
    # Extraction
    "ExtractionResult",
    "RowVerdict",
    "extract_records",
    "sort_newest_first",
    # Freshness
    "CacheEntry",
    "is_fresh",
    # Stats
    "StatsSummary",
    "latest",
    "summarize",
    "stats_to_dict",
]
