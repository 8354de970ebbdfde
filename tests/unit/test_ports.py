"""
Unit tests for port set parsing.
"""

import pytest

from meshindex.index.ports import (
    PortNumberError,
    PortRangeOrderError,
    PortSetParseError,
    ZeroPortError,
    format_portset,
    parse_portset,
)


class TestParsePortset:
    """Tests for parse_portset."""

    def test_empty(self):
        """Test an empty spec yields an empty set."""
        assert parse_portset("") == frozenset()

    def test_zero(self):
        """Test port 0 is rejected."""
        with pytest.raises(ZeroPortError):
            parse_portset("0")

    def test_single_port(self):
        """Test a single port."""
        assert parse_portset("1") == {1}

    def test_range(self):
        """Test an inclusive range."""
        assert parse_portset("1-2") == {1, 2}

    def test_ports_and_ranges(self):
        """Test mixed ports and ranges, in any order."""
        assert parse_portset("4,1-2") == {1, 2, 4}

    def test_decreasing_range(self):
        """Test a decreasing range is rejected."""
        with pytest.raises(PortRangeOrderError):
            parse_portset("2-1")

    def test_incomplete_range(self):
        """Test a range with a missing upper bound is rejected."""
        with pytest.raises(PortNumberError):
            parse_portset("2-")

    def test_missing_lower_bound(self):
        """Test a range with a missing lower bound is rejected."""
        with pytest.raises(PortNumberError):
            parse_portset("-2")

    def test_out_of_range(self):
        """Test ports beyond 65535 are rejected."""
        with pytest.raises(PortNumberError):
            parse_portset("65537")

    def test_huge_numeral(self):
        """Test numerals longer than any port are rejected with a typed error."""
        with pytest.raises(PortNumberError):
            parse_portset("1" * 5000)
        with pytest.raises(PortNumberError):
            parse_portset("1-" + "9" * 5000)

    def test_leading_zeros(self):
        """Test leading zeros do not count toward the port width."""
        assert parse_portset("0000080") == {80}

    def test_max_port(self):
        """Test 65535 is a valid port."""
        assert parse_portset("65535") == {65535}

    def test_range_floor_zero(self):
        """Test a range starting at 0 is rejected."""
        with pytest.raises(ZeroPortError):
            parse_portset("0-10")

    def test_range_ceil_out_of_range(self):
        """Test a range ending past 65535 is rejected."""
        with pytest.raises(PortNumberError):
            parse_portset("65530-65536")

    def test_single_port_range(self):
        """Test a range whose bounds are equal."""
        assert parse_portset("80-80") == {80}

    def test_stray_commas_skipped(self):
        """Test empty tokens from stray commas are skipped."""
        assert parse_portset(",80,,443,") == {80, 443}

    def test_whitespace_trimmed(self):
        """Test whitespace around tokens and bounds is ignored."""
        assert parse_portset(" 80 , 8000 - 8002 ") == {80, 8000, 8001, 8002}

    def test_whitespace_only_token_skipped(self):
        """Test a token of only whitespace is skipped."""
        assert parse_portset("80,  ,443") == {80, 443}

    def test_duplicates_collapse(self):
        """Test overlapping tokens deduplicate."""
        assert parse_portset("80,80,79-81") == {79, 80, 81}

    def test_non_numeric(self):
        """Test non-numeric tokens are rejected."""
        with pytest.raises(PortNumberError):
            parse_portset("http")

    def test_leading_plus_accepted(self):
        """Test an explicit plus sign is allowed on ports and range bounds."""
        assert parse_portset("+80") == {80}
        assert parse_portset("+1-+3") == {1, 2, 3}

    def test_negative_rejected(self):
        """Test a minus sign is not a valid numeral prefix."""
        with pytest.raises(PortSetParseError):
            parse_portset("1--2")

    def test_non_ascii_digits_rejected(self):
        """Test Unicode digits outside ASCII are rejected."""
        with pytest.raises(PortNumberError):
            parse_portset("\u0668\u0660")

    def test_underscore_rejected(self):
        """Test Python-style digit separators are rejected."""
        with pytest.raises(PortNumberError):
            parse_portset("8_080")

    def test_double_dash(self):
        """Test a token with two dashes is rejected."""
        with pytest.raises(PortNumberError):
            parse_portset("1-2-3")

    def test_first_error_aborts(self):
        """Test one bad token fails the whole parse."""
        with pytest.raises(PortSetParseError):
            parse_portset("80,443,bad,8080")

    def test_error_carries_token(self):
        """Test errors carry the offending token and reason."""
        with pytest.raises(PortRangeOrderError) as exc_info:
            parse_portset("80,9-3")
        assert exc_info.value.token == "9-3"
        assert "increasing" in exc_info.value.reason
        assert "9-3" in str(exc_info.value)

    def test_errors_are_value_errors(self):
        """Test parse errors subclass ValueError."""
        with pytest.raises(ValueError):
            parse_portset("0")

    def test_full_range(self):
        """Test the full port domain."""
        ports = parse_portset("1-65535")
        assert len(ports) == 65535
        assert 0 not in ports

    def test_reparse_is_stable(self):
        """Test parsing the same spec twice yields the same set."""
        spec = "25,443,8000-8010,443"
        assert parse_portset(spec) == parse_portset(spec)

    def test_returns_frozenset(self):
        """Test the result is immutable."""
        assert isinstance(parse_portset("80"), frozenset)


class TestFormatPortset:
    """Tests for format_portset."""

    def test_empty(self):
        """Test an empty set formats as an empty string."""
        assert format_portset(frozenset()) == ""

    def test_collapses_runs(self):
        """Test consecutive ports collapse into ranges."""
        assert format_portset({1, 2, 3, 8080}) == "1-3,8080"

    def test_single_ports(self):
        """Test non-consecutive ports stay separate."""
        assert format_portset({443, 80}) == "80,443"

    def test_parses_back(self):
        """Test formatted output parses to the same set."""
        ports = parse_portset("9,1-3,5,6,7,100")
        assert parse_portset(format_portset(ports)) == ports
