"""Tests for plate normalization and jurisdiction detection."""

import pytest

from platecheck.core.plates import (
    IOM_PATTERNS,
    classify,
    format_for_display,
    format_for_registry_query,
    is_manx_plate,
    normalize_plate,
    parse_plate,
    require_valid_plate,
)
from platecheck.exceptions import InvalidPlateError
from platecheck.models import Jurisdiction


class TestNormalizePlate:
    def test_uppercases_and_strips_spaces(self):
        assert normalize_plate(" ab12 cde ") == "AB12CDE"

    def test_strips_tabs_and_newlines(self):
        assert normalize_plate("ab12\tcde\n") == "AB12CDE"

    def test_idempotent(self):
        for raw in ["ab12 cde", "PMN 147 E", "1-mn-00", "  x  "]:
            once = normalize_plate(raw)
            assert normalize_plate(once) == once

    def test_none_becomes_empty(self):
        assert normalize_plate(None) == ""

    def test_keeps_hyphens(self):
        assert normalize_plate("1-MN-00") == "1-MN-00"


class TestClassify:
    @pytest.mark.parametrize(
        "raw",
        ["PMN 147 E", "pmn147e", "MAN 123", "MANX 100 A", "1-MN-00", "12 MN 345", "AMN 12"],
    )
    def test_isle_of_man(self, raw):
        assert classify(raw) == Jurisdiction.ISLE_OF_MAN

    @pytest.mark.parametrize("raw", ["AB12 CDE", "BD19XYZ", "A123 BCD", "ABC 123D", "1234 AB", ""])
    def test_uk(self, raw):
        assert classify(raw) == Jurisdiction.UK

    def test_deterministic(self):
        assert classify("PMN 147 E") == classify("PMN 147 E")

    def test_is_manx_plate(self):
        assert is_manx_plate("MAN 6 F") is True
        assert is_manx_plate("AB12CDE") is False

    def test_patterns_are_named(self):
        names = [name for name, _ in IOM_PATTERNS]
        assert names[0] == "classic_mn"
        assert len(names) == len(set(names))


class TestFormatting:
    def test_query_uk_is_canonical(self):
        assert format_for_registry_query("ab12 cde") == "AB12CDE"

    def test_query_iom_classic(self):
        assert format_for_registry_query("PMN 147 E") == "PMN-147-E"

    def test_query_iom_without_suffix(self):
        assert format_for_registry_query("MAN 123") == "MAN-123"

    def test_query_iom_numeric(self):
        assert format_for_registry_query("1 MN 00") == "1-MN-00"

    def test_display_uk(self):
        assert format_for_display("ab12cde") == "AB12 CDE"

    def test_display_short_uk(self):
        assert format_for_display("A1") == "A1"

    def test_display_iom(self):
        assert format_for_display("pmn147e") == "PMN 147 E"

    def test_display_iom_numeric(self):
        assert format_for_display("1-MN-00") == "1 MN 00"


class TestParsePlate:
    def test_uk_plate(self):
        plate = parse_plate("ab12 cde")
        assert plate.canonical == "AB12CDE"
        assert plate.jurisdiction == Jurisdiction.UK
        assert plate.display == "AB12 CDE"
        assert plate.is_valid is True
        assert plate.is_manx is False

    def test_manx_plate(self):
        plate = parse_plate("PMN 147 E")
        assert plate.canonical == "PMN147E"
        assert plate.is_manx is True
        assert plate.query == "PMN-147-E"

    @pytest.mark.parametrize("raw", ["", " ", "A", " a \t"])
    def test_too_short_is_invalid(self, raw):
        assert parse_plate(raw).is_valid is False

    def test_two_chars_is_valid(self):
        assert parse_plate("A1").is_valid is True


class TestRequireValidPlate:
    def test_returns_plate(self):
        assert require_valid_plate("ab12 cde").canonical == "AB12CDE"

    def test_rejects_short_input(self):
        with pytest.raises(InvalidPlateError) as exc_info:
            require_valid_plate(" a ")
        assert exc_info.value.message == "Invalid registration number"
