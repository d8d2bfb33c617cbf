"""Static currency table: symbols and conversion rates relative to USD.

Rates are units of the target currency per 1 unit of the base currency, so
converting a base amount for display multiplies by the rate.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from revproj.errors import UnknownCurrency
from revproj.models import BASE_CURRENCY, CurrencyCode, CurrencyDescriptor


class CurrencyTable:
    """Read-only lookup over the closed set of supported currencies."""

    __slots__ = ("_entries",)

    def __init__(self, entries: list[CurrencyDescriptor]) -> None:
        by_code = {e.code: e for e in entries}
        missing = [c.value for c in CurrencyCode if c not in by_code]
        if missing:
            raise ValueError(f"Currency table missing: {', '.join(missing)}")
        for e in entries:
            if not e.rate_from_base > 0:
                raise ValueError(f"Rate for {e.code} must be positive")
        self._entries: Mapping[CurrencyCode, CurrencyDescriptor] = MappingProxyType(
            by_code
        )

    def descriptor(self, code: CurrencyCode | str) -> CurrencyDescriptor:
        return self._entries[parse_currency(code)]

    def rate_from_base(self, code: CurrencyCode | str) -> float:
        return self.descriptor(code).rate_from_base

    def symbol_for(self, code: CurrencyCode | str) -> str:
        return self.descriptor(code).symbol

    def codes(self) -> list[CurrencyCode]:
        return list(self._entries)

    def with_rates(self, rates: Mapping[CurrencyCode | str, float]) -> CurrencyTable:
        """Return a new table with rates replaced where ``rates`` has them.

        Unknown codes in ``rates`` are ignored; the base currency stays at 1.0.
        """
        entries = []
        for e in self._entries.values():
            rate = e.rate_from_base
            if e.code != BASE_CURRENCY and e.code in rates:
                rate = float(rates[e.code])
            entries.append(CurrencyDescriptor(e.code, e.symbol, rate))
        return CurrencyTable(entries)


def parse_currency(raw: CurrencyCode | str) -> CurrencyCode:
    """Turn boundary input into a CurrencyCode, or raise UnknownCurrency."""
    if isinstance(raw, CurrencyCode):
        return raw
    if isinstance(raw, str):
        try:
            return CurrencyCode(raw.strip().upper())
        except ValueError:
            pass
    raise UnknownCurrency(raw)


# --- Default table ---

DEFAULT_TABLE = CurrencyTable(
    [
        CurrencyDescriptor(CurrencyCode.USD, "$", 1.0),
        CurrencyDescriptor(CurrencyCode.EUR, "€", 0.93),
        CurrencyDescriptor(CurrencyCode.GBP, "£", 0.79),
        CurrencyDescriptor(CurrencyCode.JPY, "¥", 151.13),
        CurrencyDescriptor(CurrencyCode.INR, "₹", 85.15),
    ]
)
SUPPORTED_CURRENCIES = [c.value for c in CurrencyCode]


def rate_from_base(code: CurrencyCode | str, table: CurrencyTable = DEFAULT_TABLE) -> float:
    return table.rate_from_base(code)


def symbol_for(code: CurrencyCode | str, table: CurrencyTable = DEFAULT_TABLE) -> str:
    return table.symbol_for(code)


def convert_from_base(
    value_base: float, code: CurrencyCode | str, table: CurrencyTable = DEFAULT_TABLE
) -> float:
    """Express a base-currency amount in the target currency."""
    return value_base * table.rate_from_base(code)


def convert_to_base(
    value: float, code: CurrencyCode | str, table: CurrencyTable = DEFAULT_TABLE
) -> float:
    """Inverse of convert_from_base."""
    return value / table.rate_from_base(code)
