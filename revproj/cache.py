"""On-disk store of fetched USD rate tables, one JSON file per day.

Layout:
    ~/.revproj/rates/
        usd_2026-10-19.json   {"base": "USD", "date": "2026-10-19", "rates": {...}}
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import date
from pathlib import Path

from revproj.currency import parse_currency
from revproj.errors import UnknownCurrency
from revproj.models import BASE_CURRENCY, CurrencyCode

CACHE_DIR = Path.home() / ".revproj" / "rates"
_PREFIX = f"{BASE_CURRENCY.value.lower()}_"


def _rates_path(day: date) -> Path:
    return CACHE_DIR / f"{_PREFIX}{day.isoformat()}.json"


def load_rates(day: date) -> dict[CurrencyCode, float] | None:
    """Rates stored for ``day``, or None if missing or unreadable.

    Codes outside the supported set are dropped.
    """
    path = _rates_path(day)
    if not path.exists():
        return None
    try:
        raw = json.loads(path.read_text())["rates"]
        rates: dict[CurrencyCode, float] = {}
        for code, rate in raw.items():
            try:
                rates[parse_currency(code)] = float(rate)
            except UnknownCurrency:
                continue
    except (json.JSONDecodeError, KeyError, AttributeError, TypeError, ValueError):
        return None
    return rates


def save_rates(day: date, rates: Mapping[CurrencyCode, float]) -> None:
    CACHE_DIR.mkdir(parents=True, exist_ok=True)
    data = {
        "base": BASE_CURRENCY.value,
        "date": day.isoformat(),
        "rates": {code.value: rate for code, rate in rates.items()},
    }
    _rates_path(day).write_text(json.dumps(data, indent=2))


def cached_days() -> list[date]:
    """Days with a stored rate table, oldest first."""
    if not CACHE_DIR.exists():
        return []
    days = []
    for path in CACHE_DIR.glob(f"{_PREFIX}*.json"):
        try:
            days.append(date.fromisoformat(path.stem.removeprefix(_PREFIX)))
        except ValueError:
            continue
    return sorted(days)


def clear_rates() -> int:
    """Delete every stored rate table. Returns how many were removed."""
    days = cached_days()
    for day in days:
        _rates_path(day).unlink()
    return len(days)
