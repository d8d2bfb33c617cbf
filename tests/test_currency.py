"""Tests for the static currency table."""

import pytest

from revproj.currency import (
    DEFAULT_TABLE,
    SUPPORTED_CURRENCIES,
    CurrencyTable,
    convert_from_base,
    convert_to_base,
    parse_currency,
    rate_from_base,
    symbol_for,
)
from revproj.errors import UnknownCurrency
from revproj.models import CurrencyCode, CurrencyDescriptor


class TestParseCurrency:
    def test_enum_passthrough(self):
        assert parse_currency(CurrencyCode.JPY) is CurrencyCode.JPY

    def test_case_and_whitespace(self):
        assert parse_currency(" eur ") is CurrencyCode.EUR

    @pytest.mark.parametrize("raw", ["XYZ", "", "US D", None, 1])
    def test_unknown(self, raw):
        with pytest.raises(UnknownCurrency) as exc_info:
            parse_currency(raw)
        assert exc_info.value.code == raw

    def test_unknown_is_value_error(self):
        with pytest.raises(ValueError, match="not supported"):
            parse_currency("CHF")


class TestLookups:
    def test_supported(self):
        assert SUPPORTED_CURRENCIES == ["USD", "EUR", "GBP", "JPY", "INR"]

    @pytest.mark.parametrize(
        "code,symbol,rate",
        [
            ("USD", "$", 1.0),
            ("EUR", "€", 0.93),
            ("GBP", "£", 0.79),
            ("JPY", "¥", 151.13),
            ("INR", "₹", 85.15),
        ],
    )
    def test_table(self, code, symbol, rate):
        assert symbol_for(code) == symbol
        assert rate_from_base(code) == rate

    def test_unknown_code(self):
        with pytest.raises(UnknownCurrency):
            rate_from_base("XYZ")
        with pytest.raises(UnknownCurrency):
            symbol_for("XYZ")


class TestConversion:
    def test_rate_above_one_shows_larger_amount(self):
        # 1 USD is 151.13 JPY, not 1/151.13
        assert convert_from_base(1.0, CurrencyCode.JPY) == pytest.approx(151.13)
        assert convert_from_base(100.0, CurrencyCode.EUR) == pytest.approx(93.0)

    def test_base_identity(self):
        assert convert_from_base(1234.5, CurrencyCode.USD) == 1234.5

    @pytest.mark.parametrize("code", list(CurrencyCode))
    def test_inverse(self, code):
        assert convert_to_base(convert_from_base(5500.0, code), code) == pytest.approx(
            5500.0
        )


class TestCurrencyTable:
    def test_with_rates_returns_new_table(self):
        live = DEFAULT_TABLE.with_rates({"EUR": 0.5, "USD": 3.0, "CHF": 0.9})
        assert live.rate_from_base("EUR") == 0.5
        assert live.rate_from_base("USD") == 1.0
        assert live.rate_from_base("GBP") == 0.79
        assert DEFAULT_TABLE.rate_from_base("EUR") == 0.93

    def test_missing_code_rejected(self):
        with pytest.raises(ValueError, match="missing"):
            CurrencyTable([CurrencyDescriptor(CurrencyCode.USD, "$", 1.0)])

    def test_non_positive_rate_rejected(self):
        with pytest.raises(ValueError, match="positive"):
            DEFAULT_TABLE.with_rates({"JPY": 0.0})

    def test_codes(self):
        assert DEFAULT_TABLE.codes() == list(CurrencyCode)
