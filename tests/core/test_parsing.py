"""Unit tests for lenient cell parsing."""

from datetime import datetime, timezone

from quakewatch.core.parsing import ParsedNumber, parse_number, parse_occurred_at


class TestParseNumber:
    """Tests for parse_number() pure function."""

    def test_parses_plain_decimal(self):
        """Should parse a plain decimal string."""
        assert parse_number("14.52").value == 14.52

    def test_parses_negative_number(self):
        """Should keep the sign."""
        assert parse_number("-3.25").value == -3.25

    def test_ignores_surrounding_whitespace(self):
        """Should trim whitespace before parsing."""
        assert parse_number("  121.07\n").value == 121.07

    def test_discards_trailing_units(self):
        """Should parse the leading number and drop trailing text."""
        assert parse_number("015 km").value == 15.0
        assert parse_number("12.5km").value == 12.5

    def test_parses_leading_dot(self):
        """Should parse numbers without an integer part."""
        assert parse_number(".5").value == 0.5

    def test_parses_exponent(self):
        """Should parse scientific notation."""
        assert parse_number("1.5e2").value == 150.0

    def test_unparseable_text(self):
        """Should report failure for text without a leading number."""
        result = parse_number("N/A")
        assert result.value is None
        assert result.ok is False

    def test_empty_and_none(self):
        """Should report failure for empty input."""
        assert parse_number("").ok is False
        assert parse_number(None).ok is False

    def test_zero_is_a_valid_parse(self):
        """A literal zero is parsed, not confused with failure."""
        result = parse_number("0")
        assert result.ok is True
        assert result.value == 0.0


class TestParsedNumber:
    """Tests for ParsedNumber."""

    def test_or_zero_returns_value(self):
        assert ParsedNumber(4.2).or_zero() == 4.2

    def test_or_zero_defaults_failures_to_zero(self):
        assert ParsedNumber(None).or_zero() == 0.0


class TestParseOccurredAt:
    """Tests for parse_occurred_at() pure function."""

    def test_combines_date_and_time_in_source_timezone(self):
        """Should interpret the cells as Manila local time (UTC+8)."""
        result = parse_occurred_at("2024-01-15", "10:30 PM", "Asia/Manila")

        expected = datetime(2024, 1, 15, 14, 30, tzinfo=timezone.utc)
        assert result == int(expected.timestamp() * 1000)

    def test_parses_long_form_date(self):
        """Should accept month names in the date cell."""
        result = parse_occurred_at("15 January 2024", "22:30:15", "UTC")

        expected = datetime(2024, 1, 15, 22, 30, 15, tzinfo=timezone.utc)
        assert result == int(expected.timestamp() * 1000)

    def test_time_cell_does_not_change_date(self):
        """The date comes only from the date cell."""
        result = parse_occurred_at("2023-12-31", "11:59 PM", "UTC")

        expected = datetime(2023, 12, 31, 23, 59, tzinfo=timezone.utc)
        assert result == int(expected.timestamp() * 1000)

    def test_returns_none_for_unparseable_date(self):
        """Should return None if the date cell is not a date."""
        assert parse_occurred_at("not a date", "10:30 PM") is None

    def test_returns_none_for_unparseable_time(self):
        """Should return None if the time cell is not a time."""
        assert parse_occurred_at("2024-01-15", "sometime") is None

    def test_returns_none_for_empty_cells(self):
        """Should return None if either cell is empty."""
        assert parse_occurred_at("", "10:30 PM") is None
        assert parse_occurred_at("2024-01-15", "") is None
