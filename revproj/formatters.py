"""Money formatting and projection output as table, JSON, and CSV."""

from __future__ import annotations

import csv
import io
import json
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from revproj.currency import (
    DEFAULT_TABLE,
    CurrencyTable,
    convert_from_base,
    parse_currency,
)
from revproj.models import (
    CurrencyCode,
    ProfitProjection,
    ProjectionResult,
    RunwayProjection,
    UnitMetrics,
)

_CENTS = Decimal("0.01")


def _round_2dp(value: float) -> Decimal:
    # repr-based Decimal so 1.005 rounds to 1.01 like a printed value would
    return Decimal(repr(value)).quantize(_CENTS, rounding=ROUND_HALF_UP)


def _fmt_amount(value: float) -> str:
    """Group thousands; drop the fraction only for whole amounts."""
    if not math.isfinite(value):
        raise ValueError(f"Cannot format non-finite value {value!r}")
    rounded = _round_2dp(value) + 0  # normalizes -0.00
    if rounded == rounded.to_integral_value():
        return f"{rounded:,.0f}"
    return f"{rounded:,.2f}"


def format_money(
    value_base: float,
    code: CurrencyCode | str,
    table: CurrencyTable = DEFAULT_TABLE,
) -> str:
    """Render a base-currency amount in ``code`` with its symbol, e.g. ``€51.15``."""
    symbol = table.symbol_for(code)
    return f"{symbol}{_fmt_amount(convert_from_base(value_base, code, table))}"


def _fmt_pct(val: float) -> str:
    return f"{val:g}%"


def _cents(value_base: float, rate: float) -> Decimal:
    return _round_2dp(value_base * rate) + 0


def _converted(value_base: float, rate: float) -> float:
    return float(_cents(value_base, rate))


def format_table(result: ProjectionResult, table: CurrencyTable = DEFAULT_TABLE) -> str:
    """Format a projection as a Rich table rendered to string."""
    buf = io.StringIO()
    rich_console = Console(file=buf, width=120, no_color=True)
    code = result.currency
    a = result.assumptions

    def money(v: float) -> str:
        return format_money(v, code, table)

    header = (
        f"Revenue Projection\n"
        f"==================\n"
        f"Horizon: {a.horizon_months} months  Currency: {code} "
        f"({table.symbol_for(code)}, {table.rate_from_base(code):g} per USD)\n"
        f"Start: {a.initial_customers:g} customers at {money(a.initial_price)}, "
        f"growth {_fmt_pct(a.monthly_growth_rate_pct)}/month, "
        f"price +{_fmt_pct(a.annual_price_increase_pct)}/year\n"
    )

    grid = Table(box=box.SIMPLE_HEAD, pad_edge=False)
    grid.add_column("Month", justify="right")
    grid.add_column("Customers", justify="right")
    grid.add_column("Price", justify="right")
    grid.add_column("Monthly Revenue", justify="right")
    grid.add_column("Total Revenue", justify="right")

    for s in result.snapshots:
        grid.add_row(
            str(s.month),
            f"{s.customers:,}",
            money(s.price),
            money(s.monthly_revenue),
            money(s.cumulative_revenue),
        )

    rich_console.print(header, end="")
    rich_console.print(grid)

    summary = result.summary
    footer = (
        f"Final monthly revenue: {money(summary.final_monthly_revenue)}\n"
        f"Total revenue:         {money(summary.total_revenue)}\n"
        f"Final customers:       {summary.final_customers:,}"
    )
    if result.warnings:
        footer += "\n\nWarnings:"
        for w in result.warnings:
            footer += f"\n  ⚠ {w}"
    rich_console.print(footer)

    return buf.getvalue()


def format_json(result: ProjectionResult, table: CurrencyTable = DEFAULT_TABLE) -> str:
    """Format a projection as JSON, money converted to the display currency."""
    code = result.currency
    rate = table.rate_from_base(code)
    s = result.summary
    data: dict[str, Any] = {
        "currency": code.value,
        "rate_from_base": rate,
        "assumptions": {
            "initial_customers": result.assumptions.initial_customers,
            "monthly_growth_rate_pct": result.assumptions.monthly_growth_rate_pct,
            "initial_price": _converted(result.assumptions.initial_price, rate),
            "annual_price_increase_pct": result.assumptions.annual_price_increase_pct,
            "horizon_months": result.assumptions.horizon_months,
        },
        "months": [],
        "summary": {
            "months": s.months,
            "final_customers": s.final_customers,
            "final_price": _converted(s.final_price, rate),
            "final_monthly_revenue": _converted(s.final_monthly_revenue, rate),
            "total_revenue": _converted(s.total_revenue, rate),
            "average_monthly_revenue": _converted(s.average_monthly_revenue, rate),
        },
    }

    for snap in result.snapshots:
        data["months"].append(
            {
                "month": snap.month,
                "customers": snap.customers,
                "price": _converted(snap.price, rate),
                "monthly_revenue": _converted(snap.monthly_revenue, rate),
                "cumulative_revenue": _converted(snap.cumulative_revenue, rate),
            }
        )

    if result.warnings:
        data["warnings"] = result.warnings

    return json.dumps(data, indent=2)


def format_csv(result: ProjectionResult, table: CurrencyTable = DEFAULT_TABLE) -> str:
    """Format a projection as CSV, one row per month."""
    buf = io.StringIO()
    rate = table.rate_from_base(result.currency)
    fields = ["month", "customers", "price", "monthly_revenue", "cumulative_revenue"]

    writer = csv.DictWriter(buf, fieldnames=fields)
    writer.writeheader()

    for s in result.snapshots:
        writer.writerow(
            {
                "month": str(s.month),
                "customers": str(s.customers),
                "price": f"{_cents(s.price, rate):.2f}",
                "monthly_revenue": f"{_cents(s.monthly_revenue, rate):.2f}",
                "cumulative_revenue": f"{_cents(s.cumulative_revenue, rate):.2f}",
            }
        )

    return buf.getvalue()


def format_metrics(
    metrics: UnitMetrics,
    code: CurrencyCode | str,
    table: CurrencyTable = DEFAULT_TABLE,
) -> str:
    """Format unit metrics as a two-column Rich table."""
    code = parse_currency(code)
    buf = io.StringIO()
    rich_console = Console(file=buf, width=80, no_color=True)

    grid = Table(title="Unit Metrics", box=box.SIMPLE_HEAD, pad_edge=False)
    grid.add_column("Metric", style="bold")
    grid.add_column("Value", justify="right")
    grid.add_row("Monthly Revenue", format_money(metrics.monthly_revenue, code, table))
    grid.add_row("Annual Revenue", format_money(metrics.annual_revenue, code, table))
    grid.add_row("LTV", format_money(metrics.ltv, code, table))
    grid.add_row("LTV:CAC Ratio", f"{metrics.ltv_to_cac:.2f}")
    grid.add_row("CAC Payback", f"{metrics.cac_payback_months:.1f} months")

    rich_console.print(grid)
    return buf.getvalue()


def _month_or(month: int | None, fallback: str) -> str:
    return f"Month {month}" if month is not None else fallback


def format_profit_table(
    projection: ProfitProjection,
    code: CurrencyCode | str,
    table: CurrencyTable = DEFAULT_TABLE,
) -> str:
    """Format a profit projection as a Rich table rendered to string."""
    code = parse_currency(code)
    buf = io.StringIO()
    rich_console = Console(file=buf, width=140, no_color=True)
    a = projection.assumptions

    def money(v: float) -> str:
        return format_money(v, code, table)

    header = (
        f"Profit Projection\n"
        f"=================\n"
        f"Horizon: {a.horizon_months} months  Currency: {code}\n"
        f"Revenue {money(a.initial_revenue)} growing {_fmt_pct(a.monthly_revenue_growth_pct)}/month, "
        f"COGS {_fmt_pct(a.cost_of_goods_pct)}, fixed costs {money(a.fixed_costs)} "
        f"+{_fmt_pct(a.fixed_costs_growth_pct)}/quarter\n"
    )

    grid = Table(box=box.SIMPLE_HEAD, pad_edge=False)
    grid.add_column("Month", justify="right")
    grid.add_column("Revenue", justify="right")
    grid.add_column("Variable Costs", justify="right")
    grid.add_column("Fixed Costs", justify="right")
    grid.add_column("Gross Profit", justify="right")
    grid.add_column("Net Profit", justify="right")
    grid.add_column("Margin", justify="right")

    for m in projection.months:
        grid.add_row(
            str(m.month),
            money(m.revenue),
            money(m.variable_costs),
            money(m.fixed_costs),
            money(m.gross_profit),
            money(m.net_profit),
            f"{m.profit_margin_pct:.1f}%",
        )

    rich_console.print(header, end="")
    rich_console.print(grid)
    rich_console.print(
        f"Breakeven: {_month_or(projection.breakeven_month, 'Not reached')}"
    )
    return buf.getvalue()


def format_profit_json(
    projection: ProfitProjection,
    code: CurrencyCode | str,
    table: CurrencyTable = DEFAULT_TABLE,
) -> str:
    code = parse_currency(code)
    rate = table.rate_from_base(code)
    money_fields = ("revenue", "variable_costs", "fixed_costs", "gross_profit", "net_profit")
    months = []
    for m in projection.months:
        row = m.to_dict()
        for name in money_fields:
            row[name] = _converted(row[name], rate)
        row["profit_margin_pct"] = round(m.profit_margin_pct, 2)
        months.append(row)
    data = {
        "currency": code.value,
        "rate_from_base": rate,
        "breakeven_month": projection.breakeven_month,
        "months": months,
    }
    return json.dumps(data, indent=2)


def format_runway_table(
    projection: RunwayProjection,
    code: CurrencyCode | str,
    table: CurrencyTable = DEFAULT_TABLE,
) -> str:
    """Format a burn-rate projection as a Rich table rendered to string."""
    code = parse_currency(code)
    buf = io.StringIO()
    rich_console = Console(file=buf, width=120, no_color=True)

    def money(v: float) -> str:
        return format_money(v, code, table)

    if projection.initial_runway_months is None:
        initial = "not burning cash"
    else:
        initial = f"{projection.initial_runway_months:.1f} months"
    header = (
        f"Burn Rate & Runway\n"
        f"==================\n"
        f"Monthly expenses: {money(projection.total_monthly_expenses)}  "
        f"Current burn: {money(max(projection.current_burn_rate, 0.0))}  "
        f"Runway at current burn: {initial}\n"
    )

    grid = Table(box=box.SIMPLE_HEAD, pad_edge=False)
    grid.add_column("Month", justify="right")
    grid.add_column("Revenue", justify="right")
    grid.add_column("Expenses", justify="right")
    grid.add_column("Burn", justify="right")
    grid.add_column("Cash", justify="right")
    grid.add_column("Cumulative Burn", justify="right")

    for m in projection.months:
        grid.add_row(
            str(m.month),
            money(m.revenue),
            money(m.expenses),
            money(m.burn_rate),
            money(m.cash_balance),
            money(m.cumulative_burn),
        )

    horizon = projection.inputs.horizon_months
    rich_console.print(header, end="")
    rich_console.print(grid)
    rich_console.print(
        f"Cash runs out: {_month_or(projection.runway_month, f'Not within {horizon} months')}\n"
        f"Breakeven:     {_month_or(projection.breakeven_month, f'Not within {horizon} months')}"
    )
    return buf.getvalue()


def format_runway_json(
    projection: RunwayProjection,
    code: CurrencyCode | str,
    table: CurrencyTable = DEFAULT_TABLE,
) -> str:
    code = parse_currency(code)
    rate = table.rate_from_base(code)
    money_fields = ("cash_balance", "burn_rate", "revenue", "expenses", "cumulative_burn")
    months = []
    for m in projection.months:
        row = m.to_dict()
        for name in money_fields:
            row[name] = _converted(row[name], rate)
        months.append(row)
    initial = projection.initial_runway_months
    data = {
        "currency": code.value,
        "rate_from_base": rate,
        "total_monthly_expenses": _converted(projection.total_monthly_expenses, rate),
        "current_burn_rate": _converted(projection.current_burn_rate, rate),
        "initial_runway_months": round(initial, 2) if initial is not None else None,
        "runway_month": projection.runway_month,
        "breakeven_month": projection.breakeven_month,
        "months": months,
    }
    return json.dumps(data, indent=2)


def format_rates(table: CurrencyTable, title: str = "Currency Rates") -> str:
    """List each currency's symbol and rate per USD."""
    buf = io.StringIO()
    rich_console = Console(file=buf, width=80, no_color=True)

    grid = Table(title=title, box=box.SIMPLE_HEAD, pad_edge=False)
    grid.add_column("Currency", style="bold")
    grid.add_column("Symbol")
    grid.add_column("Per USD", justify="right")
    for code in table.codes():
        grid.add_row(code.value, table.symbol_for(code), f"{table.rate_from_base(code):.4f}")

    rich_console.print(grid)
    return buf.getvalue()
