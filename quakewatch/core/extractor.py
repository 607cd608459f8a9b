"""Record extraction from the source page - Pure functions.

Turns the PHIVOLCS earthquake information HTML into SeismicRecords.
The page is treated as a loose table: the first row is a header, every
other row is a candidate record. Rows that fail a shape or validity check
are skipped with a verdict explaining why; extraction itself never raises.
"""

from dataclasses import dataclass, field

from bs4 import BeautifulSoup
from bs4.element import Tag

from quakewatch.core.parsing import parse_number, parse_occurred_at
from quakewatch.core.record import SeismicRecord


DEFAULT_ROW_SELECTOR = "table tr"

# date, time, latitude, longitude, depth, magnitude, location, origin, intensity
MIN_CELLS = 9

REASON_TOO_FEW_CELLS = "too_few_cells"
REASON_INVALID_COORDINATES = "invalid_coordinates"


@dataclass(frozen=True)
class RowVerdict:
    """Validity verdict for a single source row.

    Attributes:
        position: 1-based position of the row, header excluded
        valid: Whether the row produced a record
        reason: Why the row was skipped (None if valid)
    """
    position: int
    valid: bool
    reason: str | None = None


@dataclass
class ExtractionResult:
    """Outcome of one extraction pass.

    Attributes:
        records: Valid records, in source row order
        skipped: Verdicts for rows that were dropped
    """
    records: list[SeismicRecord] = field(default_factory=list)
    skipped: list[RowVerdict] = field(default_factory=list)

    @property
    def rows_seen(self) -> int:
        """Total non-header rows examined."""
        return len(self.records) + len(self.skipped)


def has_enough_cells(position: int, cells: list[str]) -> RowVerdict:
    """Check that a row carries every expected column.

    Pure function.
    """
    if len(cells) < MIN_CELLS:
        return RowVerdict(position, False, REASON_TOO_FEW_CELLS)
    return RowVerdict(position, True)


def has_valid_coordinates(record: SeismicRecord) -> RowVerdict:
    """Check that a record's coordinates were extracted.

    Pure function. A zero latitude or longitude means the cell could not be
    parsed; genuine equatorial or prime-meridian readings do not occur in
    the source's coverage area.
    """
    if record.latitude == 0 or record.longitude == 0:
        return RowVerdict(record.sequence_id, False, REASON_INVALID_COORDINATES)
    return RowVerdict(record.sequence_id, True)


def _cell_texts(row: Tag) -> list[str]:
    """Read trimmed text of every data cell in a row."""
    return [td.get_text().strip() for td in row.find_all("td")]


def build_record(
    position: int,
    cells: list[str],
    timezone_name: str = "Asia/Manila",
) -> SeismicRecord:
    """Build a record from a row's cell texts.

    Pure function. Numeric cells that cannot be parsed become 0.

    Args:
        position: Row position used as the record's sequence_id
        cells: Trimmed cell texts (at least MIN_CELLS)
        timezone_name: Timezone the source reports times in

    Returns:
        SeismicRecord built from the cells
    """
    date, time, latitude, longitude, depth, magnitude, location, origin, intensity = (
        cells[:MIN_CELLS]
    )

    return SeismicRecord(
        sequence_id=position,
        date=date,
        time=time,
        latitude=parse_number(latitude).or_zero(),
        longitude=parse_number(longitude).or_zero(),
        depth_label=depth,
        magnitude=parse_number(magnitude).or_zero(),
        location=location,
        origin_type=origin,
        intensity_label=intensity,
        occurred_at_ms=parse_occurred_at(date, time, timezone_name),
    )


def extract_records(
    html: str,
    row_selector: str = DEFAULT_ROW_SELECTOR,
    timezone_name: str = "Asia/Manila",
) -> ExtractionResult:
    """Extract seismic records from the source page.

    Pure function. The first selected row is treated as the header. Each
    remaining row is numbered by its position among all remaining rows, so
    sequence_id values keep gaps where rows were skipped.

    Args:
        html: Raw page body
        row_selector: CSS selector matching table rows
        timezone_name: Timezone the source reports times in

    Returns:
        ExtractionResult with records in source order and skip verdicts
    """
    result = ExtractionResult()
    if not html:
        return result

    soup = BeautifulSoup(html, "html.parser")
    rows = soup.select(row_selector)[1:]

    for position, row in enumerate(rows, start=1):
        cells = _cell_texts(row)

        verdict = has_enough_cells(position, cells)
        if not verdict.valid:
            result.skipped.append(verdict)
            continue

        record = build_record(position, cells, timezone_name)

        verdict = has_valid_coordinates(record)
        if not verdict.valid:
            result.skipped.append(verdict)
            continue

        result.records.append(record)

    return result


def sort_newest_first(records: list[SeismicRecord]) -> list[SeismicRecord]:
    """Order records by occurrence time, newest first.

    Pure function. The sort is stable; records without a parseable time
    keep their relative order after all timed records.
    """
    timed = [r for r in records if r.occurred_at_ms is not None]
    untimed = [r for r in records if r.occurred_at_ms is None]
    return sorted(timed, key=lambda r: r.occurred_at_ms, reverse=True) + untimed
