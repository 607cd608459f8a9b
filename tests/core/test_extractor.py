"""Unit tests for record extraction.

Pages are built from small HTML fragments, so no network or fixtures
files are needed.
"""

import pytest

from quakewatch.core.extractor import (
    MIN_CELLS,
    REASON_INVALID_COORDINATES,
    REASON_TOO_FEW_CELLS,
    RowVerdict,
    build_record,
    extract_records,
    has_enough_cells,
    has_valid_coordinates,
    sort_newest_first,
)
from quakewatch.core.record import SeismicRecord


HEADER = (
    "<tr><th>Date</th><th>Time</th><th>Latitude</th><th>Longitude</th>"
    "<th>Depth</th><th>Mag</th><th>Location</th><th>Origin</th><th>Intensity</th></tr>"
)


def _row(*cells: str) -> str:
    return "<tr>" + "".join(f"<td>{c}</td>" for c in cells) + "</tr>"


def _page(*rows: str) -> str:
    return "<html><body><table>" + HEADER + "".join(rows) + "</table></body></html>"


VALID_ROW_A = _row(
    "2024-01-15", "10:30 PM", "14.52", "121.07", "010", "4.5",
    "012 km N 45° E of Manila", "TECTONIC", "III",
)
VALID_ROW_B = _row(
    "2024-01-15", "08:05 AM", "9.85", "126.40", "025 km", "2.8",
    "Surigao Del Sur", "TECTONIC", "",
)
SHORT_ROW = _row("2024-01-15", "09:00 AM", "10.0", "122.0", "5")


def _record(sequence_id: int, occurred_at_ms: int | None) -> SeismicRecord:
    return SeismicRecord(
        sequence_id=sequence_id,
        date="2024-01-15",
        time="10:30 PM",
        latitude=14.5,
        longitude=121.0,
        depth_label="10",
        magnitude=3.0,
        location="Somewhere",
        origin_type="TECTONIC",
        intensity_label="",
        occurred_at_ms=occurred_at_ms,
    )


class TestExtractRecords:
    """Tests for extract_records() pure function."""

    def test_extracts_valid_rows(self):
        """Should build one record per valid data row."""
        result = extract_records(_page(VALID_ROW_A, VALID_ROW_B))

        assert len(result.records) == 2
        assert result.skipped == []

    def test_parses_fields(self):
        """Should map cells to typed fields."""
        record = extract_records(_page(VALID_ROW_A)).records[0]

        assert record.sequence_id == 1
        assert record.date == "2024-01-15"
        assert record.time == "10:30 PM"
        assert record.latitude == 14.52
        assert record.longitude == 121.07
        assert record.depth_label == "010"
        assert record.magnitude == 4.5
        assert record.location == "012 km N 45° E of Manila"
        assert record.origin_type == "TECTONIC"
        assert record.intensity_label == "III"
        assert record.occurred_at_ms is not None

    def test_skips_header_row(self):
        """The first row is never treated as data."""
        result = extract_records(_page())

        assert result.records == []
        assert result.rows_seen == 0

    def test_short_row_is_dropped_and_numbering_keeps_gap(self):
        """Rows with too few cells are dropped but still consume a position."""
        result = extract_records(_page(VALID_ROW_A, SHORT_ROW, VALID_ROW_B))

        assert [r.sequence_id for r in result.records] == [1, 3]
        assert result.skipped == [RowVerdict(2, False, REASON_TOO_FEW_CELLS)]

    def test_drops_rows_with_unparseable_coordinates(self):
        """Rows whose coordinates parse to zero are dropped."""
        bad = _row("2024-01-15", "10:30 PM", "N/A", "121.07", "10", "3.1", "X", "TECTONIC", "")
        result = extract_records(_page(bad, VALID_ROW_A))

        assert [r.sequence_id for r in result.records] == [2]
        assert result.skipped == [RowVerdict(1, False, REASON_INVALID_COORDINATES)]

    def test_drops_rows_with_zero_longitude(self):
        """A zero longitude is treated as an extraction failure."""
        bad = _row("2024-01-15", "10:30 PM", "14.5", "0", "10", "3.1", "X", "TECTONIC", "")
        result = extract_records(_page(bad))

        assert result.records == []

    def test_every_record_has_nonzero_coordinates(self):
        """No output record may carry a zero coordinate."""
        rows = [
            VALID_ROW_A,
            _row("d", "t", "0", "0", "", "", "", "", ""),
            _row("d", "t", "abc", "121", "", "", "", "", ""),
            VALID_ROW_B,
        ]
        result = extract_records(_page(*rows))

        assert all(r.latitude != 0 and r.longitude != 0 for r in result.records)

    def test_trims_cell_whitespace(self):
        """Cell text is trimmed before use."""
        row = _row(
            " 2024-01-15 ", "\n10:30 PM ", " 14.52", "121.07 ", " 10 ", " 4.5 ",
            "  Batangas  ", " TECTONIC", " IV ",
        )
        record = extract_records(_page(row)).records[0]

        assert record.location == "Batangas"
        assert record.intensity_label == "IV"
        assert record.magnitude == 4.5

    def test_unparseable_magnitude_becomes_zero(self):
        """A bad magnitude does not drop the row."""
        row = _row("2024-01-15", "10:30 PM", "14.5", "121.0", "10", "-", "X", "TECTONIC", "")
        record = extract_records(_page(row)).records[0]

        assert record.magnitude == 0.0

    def test_unparseable_date_keeps_record_without_timestamp(self):
        """A bad date leaves occurred_at_ms unset rather than dropping the row."""
        row = _row("??", "10:30 PM", "14.5", "121.0", "10", "2.0", "X", "TECTONIC", "")
        record = extract_records(_page(row)).records[0]

        assert record.occurred_at_ms is None

    def test_extra_cells_are_ignored(self):
        """Rows with more than the expected cells are accepted."""
        row = _row(
            "2024-01-15", "10:30 PM", "14.5", "121.0", "10", "2.0", "X", "TECTONIC", "I",
            "extra", "more",
        )
        assert len(extract_records(_page(row)).records) == 1

    def test_keeps_source_order(self):
        """Records come out in row order, not time order."""
        result = extract_records(_page(VALID_ROW_B, VALID_ROW_A))

        assert [r.location for r in result.records] == [
            "Surigao Del Sur",
            "012 km N 45° E of Manila",
        ]

    @pytest.mark.parametrize("html", ["", "<html></html>", "<p>No table here</p>", "<table>"])
    def test_empty_or_malformed_document_yields_nothing(self, html):
        """Malformed pages produce no records and no error."""
        result = extract_records(html)

        assert result.records == []

    def test_custom_row_selector(self):
        """Only rows matched by the selector are considered."""
        html = (
            "<table id='nav'><tr><td>menu</td></tr></table>"
            "<table class='quakes'>" + HEADER + VALID_ROW_A + "</table>"
        )
        result = extract_records(html, row_selector="table.quakes tr")

        assert len(result.records) == 1
        assert result.records[0].sequence_id == 1


class TestRowPredicates:
    """Tests for the named row validity predicates."""

    def test_has_enough_cells_accepts_full_row(self):
        verdict = has_enough_cells(1, ["x"] * MIN_CELLS)
        assert verdict == RowVerdict(1, True)

    def test_has_enough_cells_rejects_short_row(self):
        verdict = has_enough_cells(4, ["x"] * (MIN_CELLS - 1))
        assert verdict.valid is False
        assert verdict.reason == REASON_TOO_FEW_CELLS
        assert verdict.position == 4

    def test_has_valid_coordinates_rejects_zero_latitude(self):
        cells = ["d", "t", "0", "121", "10", "2", "X", "T", ""]
        verdict = has_valid_coordinates(build_record(7, cells))
        assert verdict == RowVerdict(7, False, REASON_INVALID_COORDINATES)

    def test_has_valid_coordinates_accepts_negative_values(self):
        cells = ["d", "t", "-14.5", "-121", "10", "2", "X", "T", ""]
        assert has_valid_coordinates(build_record(1, cells)).valid is True


class TestSortNewestFirst:
    """Tests for sort_newest_first() pure function."""

    def test_orders_by_time_descending(self):
        records = [_record(1, 1000), _record(2, 3000), _record(3, 2000)]

        result = sort_newest_first(records)

        assert [r.sequence_id for r in result] == [2, 3, 1]

    def test_untimed_records_go_last_in_original_order(self):
        records = [_record(1, None), _record(2, 1000), _record(3, None), _record(4, 5000)]

        result = sort_newest_first(records)

        assert [r.sequence_id for r in result] == [4, 2, 1, 3]

    def test_empty_input(self):
        assert sort_newest_first([]) == []
