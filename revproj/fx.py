"""Optional live FX rates from the Frankfurter API.

The static currency table is the default; live rates only ever produce a
new table. No API key required. Base URL: https://api.frankfurter.dev/v1
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

import httpx

from revproj import cache
from revproj.currency import DEFAULT_TABLE, CurrencyTable, parse_currency
from revproj.errors import UnknownCurrency
from revproj.models import BASE_CURRENCY, CurrencyCode

BASE_URL = "https://api.frankfurter.dev/v1"


def _parse_rates(payload: dict) -> dict[CurrencyCode, float]:
    rates: dict[CurrencyCode, float] = {}
    for raw_code, raw_rate in payload.get("rates", {}).items():
        try:
            rates[parse_currency(raw_code)] = float(raw_rate)
        except UnknownCurrency:
            continue
    return rates


async def fetch_rates(
    client: httpx.AsyncClient,
    day: date,
    codes: Iterable[CurrencyCode],
    force_refresh: bool = False,
) -> dict[CurrencyCode, float]:
    """USD rates for ``codes`` on ``day`` (units of each code per 1 USD).

    A stored table for the day is reused when it covers every code. The
    base currency is always present at 1.0.
    """
    targets = [c for c in codes if c != BASE_CURRENCY]
    rates: dict[CurrencyCode, float] = {BASE_CURRENCY: 1.0}
    if not targets:
        return rates

    if not force_refresh:
        stored = cache.load_rates(day)
        if stored is not None and all(c in stored for c in targets):
            return {**stored, BASE_CURRENCY: 1.0}

    resp = await client.get(
        f"{BASE_URL}/{day.isoformat()}",
        params={"base": BASE_CURRENCY.value, "symbols": ",".join(targets)},
    )
    resp.raise_for_status()

    rates.update(_parse_rates(resp.json()))
    cache.save_rates(day, rates)
    return rates


async def live_table(
    client: httpx.AsyncClient,
    day: date,
    force_refresh: bool = False,
    fallback: CurrencyTable = DEFAULT_TABLE,
) -> tuple[CurrencyTable, list[str]]:
    """Build a currency table from live rates.

    Returns (table, warnings). On HTTP failure the fallback table is returned
    with a warning; codes the API omits keep their fallback rate.
    """
    warnings: list[str] = []
    codes = fallback.codes()
    try:
        rates = await fetch_rates(client, day, codes, force_refresh)
    except httpx.HTTPError as exc:
        warnings.append(f"Live FX rates unavailable ({exc}); using static table.")
        return fallback, warnings

    missing = [c.value for c in codes if c not in rates]
    if missing:
        warnings.append(f"No live rate for {', '.join(missing)}; using static rate.")
    return fallback.with_rates(rates), warnings
