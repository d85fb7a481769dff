"""
==============================================================================
Utility Tests
==============================================================================

Tests for validators, product id lists and text formatting.

==============================================================================
"""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from app.utils import (
    ExpiryDateValidator,
    InvalidProductIdError,
    PriceValidator,
    ProductIdList,
    VoltageSocketValidator,
    format_many,
    format_single,
)


class TestProductIdList:
    """Tests for product id list parsing."""

    def test_dedupe_preserves_first_occurrence(self):
        assert list(ProductIdList.from_csv("3,1,3,2,1")) == [3, 1, 2]

    def test_dedupe_is_idempotent(self):
        once = ProductIdList.from_csv("5,5,4")
        assert ProductIdList.from_csv(once.to_csv()) == once

    def test_whitespace_and_empty_tokens(self):
        assert ProductIdList.from_csv(" 1 ,, 2 ,").to_csv() == "1,2"
        assert ProductIdList.from_csv("").to_csv() == ""
        assert len(ProductIdList.from_csv(None)) == 0

    def test_strict_rejects_malformed(self):
        with pytest.raises(InvalidProductIdError) as exc_info:
            ProductIdList.from_csv("1,x2")
        assert exc_info.value.token == "x2"

    def test_strict_rejects_out_of_range(self):
        with pytest.raises(InvalidProductIdError) as exc_info:
            ProductIdList.from_csv("1,9223372036854775808")
        assert exc_info.value.token == "9223372036854775808"

        with pytest.raises(InvalidProductIdError):
            ProductIdList.from_csv("99999999999999999999")

    def test_id_range_limits(self):
        ids = ProductIdList.from_csv("9223372036854775807,-9223372036854775808")
        assert list(ids) == [2 ** 63 - 1, -(2 ** 63)]

    def test_lenient_skips_out_of_range(self):
        assert list(ProductIdList.from_csv("1,-9223372036854775809", strict=False)) == [1]

    def test_lenient_skips_malformed(self):
        assert list(ProductIdList.from_csv("1,x2,3", strict=False)) == [1, 3]

    def test_retain(self):
        ids = ProductIdList.from_csv("4,2,9")
        assert ids.retain({2, 4}).to_csv() == "4,2"
        assert ids.retain(set()).to_csv() == ""

    def test_membership_is_by_value(self):
        ids = ProductIdList.from_csv("12,21")
        assert 12 in ids
        assert 1 not in ids


class TestPriceValidator:
    """Tests for price validation."""

    @pytest.mark.parametrize("price,expected", [
        (" 42 ", 42),
        ("+7", 7),
        ("-3", -3),
        ("2147483647", 2147483647),
    ])
    def test_valid(self, price, expected):
        assert PriceValidator().validate(price) == (True, expected, None)

    @pytest.mark.parametrize("price", ["4.5", "1_000", "2147483648", "", "abc", None])
    def test_invalid(self, price):
        assert PriceValidator().is_valid(price) is False


class TestVoltageSocketValidator:
    """Tests for voltage/socket compatibility."""

    @pytest.mark.parametrize("voltage,socket", [("220", "UK"), ("220", "eu"), ("110", "US")])
    def test_compatible(self, voltage, socket):
        assert VoltageSocketValidator().is_valid(voltage, socket)

    @pytest.mark.parametrize("voltage,socket", [("220", "US"), ("110", "UK"), ("240", "UK"), ("", "UK"), ("220", "")])
    def test_incompatible(self, voltage, socket):
        assert not VoltageSocketValidator().is_valid(voltage, socket)


class TestExpiryDateValidator:
    """Tests for expiry date parsing and the whole-day threshold."""

    def test_parse_month_day_year(self):
        assert ExpiryDateValidator().parse("03/04/2031") == (True, datetime(2031, 3, 4), None)

    def test_parse_iso(self):
        ok, parsed, _ = ExpiryDateValidator().parse("2031-03-04T10:30:00")
        assert ok
        assert parsed == datetime(2031, 3, 4, 10, 30)

    def test_parse_aware_iso_is_naive(self):
        ok, parsed, _ = ExpiryDateValidator().parse("2031-03-04T10:30:00Z")
        assert ok
        assert parsed.tzinfo is None
        expected = datetime(2031, 3, 4, 10, 30, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
        assert parsed == expected

    def test_parse_empty(self):
        assert ExpiryDateValidator().parse("  ") == (True, None, None)

    def test_parse_invalid(self):
        ok, parsed, error = ExpiryDateValidator().parse("31/31/2031")
        assert not ok
        assert parsed is None
        assert error

    def test_partial_days_truncated(self):
        now = datetime(2030, 1, 1)
        validator = ExpiryDateValidator(threshold_days=7)

        assert not validator.is_far_enough(now + timedelta(days=7, hours=23), now)
        assert validator.is_far_enough(now + timedelta(days=8), now)
        assert not validator.is_far_enough(None, now)
        assert validator.threshold_days == 7


class TestFormatters:
    """Tests for plain-text rendering."""

    def test_format_single(self):
        assert format_single(SimpleNamespace(id=5, title="Kettle", price="30")) == "id : 5 title : Kettle"

    def test_format_many(self):
        docs = [SimpleNamespace(id=5, title="Kettle"), SimpleNamespace(id=6, title="Toaster")]
        assert format_many(docs) == "id : 5\n title : Kettle\nid : 6\n title : Toaster\n"

    def test_format_many_empty(self):
        assert format_many([]) == ""
