"""CLI entry point for revproj."""

from __future__ import annotations

import asyncio
import sys
from datetime import date

import click
import httpx

from revproj import cache, formatters, fx
from revproj.currency import (
    DEFAULT_TABLE,
    SUPPORTED_CURRENCIES,
    CurrencyTable,
    parse_currency,
)
from revproj.errors import InvalidAssumptions, UnknownCurrency
from revproj.metrics import unit_metrics
from revproj.models import (
    DEFAULT_ASSUMPTIONS,
    DEFAULT_METRICS_INPUTS,
    DEFAULT_PROFIT_ASSUMPTIONS,
    DEFAULT_RUNWAY_INPUTS,
    MAX_HORIZON_MONTHS,
    CurrencyCode,
    Expense,
    ProfitAssumptions,
    ProjectionAssumptions,
    RunwayInputs,
    UnitMetricsInputs,
)
from revproj.profit import project_profit
from revproj.runway import project_runway
from revproj.simulator import project


def _validate_currency(
    ctx: click.Context, param: click.Parameter, value: str
) -> CurrencyCode:
    try:
        return parse_currency(value)
    except UnknownCurrency as exc:
        supported = ", ".join(SUPPORTED_CURRENCIES)
        raise click.BadParameter(
            f"Currency {value!r} not supported. Supported: {supported}"
        ) from exc


def _parse_expenses(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> tuple[Expense, ...]:
    expenses = []
    for raw in values:
        name, sep, amount = raw.rpartition("=")
        try:
            if not sep:
                raise ValueError
            expenses.append(Expense(name.strip(), float(amount)))
        except ValueError as exc:
            raise click.BadParameter(
                f"Expected NAME=AMOUNT, got {raw!r}"
            ) from exc
    return tuple(expenses)


async def _load_live_table(force_refresh: bool) -> tuple[CurrencyTable, list[str]]:
    async with httpx.AsyncClient(timeout=30.0) as client:
        return await fx.live_table(client, date.today(), force_refresh)


def _resolve_table(live_rates: bool, refresh_cache: bool) -> tuple[CurrencyTable, list[str]]:
    if refresh_cache and not live_rates:
        raise click.UsageError("--refresh-cache only applies with --live-rates")
    if not live_rates:
        return DEFAULT_TABLE, []
    return asyncio.run(_load_live_table(refresh_cache))


def _fail(exc: InvalidAssumptions) -> None:
    click.echo(f"Error: {exc}", err=True)
    sys.exit(1)


currency_option = click.option(
    "--currency",
    default="USD",
    callback=_validate_currency,
    help=f"Display currency ({', '.join(SUPPORTED_CURRENCIES)})",
)


def rate_options(func):  # type: ignore[no-untyped-def]
    func = click.option(
        "--refresh-cache",
        is_flag=True,
        help="With --live-rates, refetch today's rates instead of using the stored table",
    )(func)
    func = click.option(
        "--live-rates", is_flag=True, help="Use today's rates from Frankfurter"
    )(func)
    return currency_option(func)


def output_option(*choices: str):  # type: ignore[no-untyped-def]
    return click.option(
        "--output",
        "output_format",
        default="table",
        type=click.Choice(list(choices)),
        help="Output format",
    )


@click.group()
def cli() -> None:
    """Founder revenue projections.

    Simulates customer growth, revenue, profit and cash runway month by
    month and shows the results in any supported currency.
    """


@cli.command("project")
@click.option(
    "--customers",
    type=float,
    default=DEFAULT_ASSUMPTIONS.initial_customers,
    show_default=True,
    help="Customers at month 0",
)
@click.option(
    "--growth",
    type=float,
    default=DEFAULT_ASSUMPTIONS.monthly_growth_rate_pct,
    show_default=True,
    help="Monthly customer growth rate (%)",
)
@click.option(
    "--price",
    type=float,
    default=DEFAULT_ASSUMPTIONS.initial_price,
    show_default=True,
    help="Starting monthly price per customer (USD)",
)
@click.option(
    "--price-increase",
    type=float,
    default=DEFAULT_ASSUMPTIONS.annual_price_increase_pct,
    show_default=True,
    help="Annual price increase (%)",
)
@click.option(
    "--months",
    type=int,
    default=DEFAULT_ASSUMPTIONS.horizon_months,
    show_default=True,
    help=f"Projection horizon in months (1-{MAX_HORIZON_MONTHS})",
)
@rate_options
@output_option("table", "json", "csv")
def project_command(
    customers: float,
    growth: float,
    price: float,
    price_increase: float,
    months: int,
    currency: CurrencyCode,
    live_rates: bool,
    refresh_cache: bool,
    output_format: str,
) -> None:
    """Project customers and revenue month by month."""
    assumptions = ProjectionAssumptions(
        initial_customers=customers,
        monthly_growth_rate_pct=growth,
        initial_price=price,
        annual_price_increase_pct=price_increase,
        horizon_months=months,
    )

    try:
        result = project(assumptions, currency)
    except InvalidAssumptions as exc:
        _fail(exc)

    table, warnings = _resolve_table(live_rates, refresh_cache)
    result.warnings.extend(warnings)

    if output_format == "json":
        click.echo(formatters.format_json(result, table))
    elif output_format == "csv":
        click.echo(formatters.format_csv(result, table), nl=False)
    else:
        click.echo(formatters.format_table(result, table), nl=False)


@cli.command("profit")
@click.option(
    "--revenue",
    type=float,
    default=DEFAULT_PROFIT_ASSUMPTIONS.initial_revenue,
    show_default=True,
    help="Monthly revenue in month 1 (USD)",
)
@click.option(
    "--growth",
    type=float,
    default=DEFAULT_PROFIT_ASSUMPTIONS.monthly_revenue_growth_pct,
    show_default=True,
    help="Monthly revenue growth (%)",
)
@click.option(
    "--cogs",
    type=float,
    default=DEFAULT_PROFIT_ASSUMPTIONS.cost_of_goods_pct,
    show_default=True,
    help="Cost of goods as % of revenue",
)
@click.option(
    "--fixed-costs",
    type=float,
    default=DEFAULT_PROFIT_ASSUMPTIONS.fixed_costs,
    show_default=True,
    help="Monthly fixed costs (USD)",
)
@click.option(
    "--fixed-growth",
    type=float,
    default=DEFAULT_PROFIT_ASSUMPTIONS.fixed_costs_growth_pct,
    show_default=True,
    help="Fixed cost increase every quarter (%)",
)
@click.option(
    "--months",
    type=int,
    default=DEFAULT_PROFIT_ASSUMPTIONS.horizon_months,
    show_default=True,
    help=f"Projection horizon in months (1-{MAX_HORIZON_MONTHS})",
)
@rate_options
@output_option("table", "json")
def profit_command(
    revenue: float,
    growth: float,
    cogs: float,
    fixed_costs: float,
    fixed_growth: float,
    months: int,
    currency: CurrencyCode,
    live_rates: bool,
    refresh_cache: bool,
    output_format: str,
) -> None:
    """Project gross and net profit month by month."""
    assumptions = ProfitAssumptions(
        initial_revenue=revenue,
        monthly_revenue_growth_pct=growth,
        cost_of_goods_pct=cogs,
        fixed_costs=fixed_costs,
        fixed_costs_growth_pct=fixed_growth,
        horizon_months=months,
    )
    try:
        projection = project_profit(assumptions)
    except InvalidAssumptions as exc:
        _fail(exc)

    table, warnings = _resolve_table(live_rates, refresh_cache)
    for w in warnings:
        click.echo(f"Warning: {w}", err=True)

    if output_format == "json":
        click.echo(formatters.format_profit_json(projection, currency, table))
    else:
        click.echo(formatters.format_profit_table(projection, currency, table), nl=False)


@cli.command("runway")
@click.option(
    "--cash",
    type=float,
    default=DEFAULT_RUNWAY_INPUTS.cash_balance,
    show_default=True,
    help="Cash in the bank (USD)",
)
@click.option(
    "--revenue",
    type=float,
    default=DEFAULT_RUNWAY_INPUTS.monthly_revenue,
    show_default=True,
    help="Current monthly revenue (USD)",
)
@click.option(
    "--growth",
    type=float,
    default=DEFAULT_RUNWAY_INPUTS.monthly_revenue_growth_pct,
    show_default=True,
    help="Monthly revenue growth (%)",
)
@click.option(
    "--expense",
    "expenses",
    multiple=True,
    callback=_parse_expenses,
    help="Monthly expense as NAME=AMOUNT (USD); repeatable. Defaults to a sample budget",
)
@click.option(
    "--months",
    type=int,
    default=DEFAULT_RUNWAY_INPUTS.horizon_months,
    show_default=True,
    help=f"Projection horizon in months (1-{MAX_HORIZON_MONTHS})",
)
@rate_options
@output_option("table", "json")
def runway_command(
    cash: float,
    revenue: float,
    growth: float,
    expenses: tuple[Expense, ...],
    months: int,
    currency: CurrencyCode,
    live_rates: bool,
    refresh_cache: bool,
    output_format: str,
) -> None:
    """Project burn rate, cash runway and breakeven."""
    inputs = RunwayInputs(
        cash_balance=cash,
        monthly_revenue=revenue,
        monthly_revenue_growth_pct=growth,
        expenses=expenses or DEFAULT_RUNWAY_INPUTS.expenses,
        horizon_months=months,
    )
    try:
        projection = project_runway(inputs)
    except InvalidAssumptions as exc:
        _fail(exc)

    table, warnings = _resolve_table(live_rates, refresh_cache)
    for w in warnings:
        click.echo(f"Warning: {w}", err=True)

    if output_format == "json":
        click.echo(formatters.format_runway_json(projection, currency, table))
    else:
        click.echo(formatters.format_runway_table(projection, currency, table), nl=False)


@cli.command("metrics")
@click.option(
    "--customers",
    type=float,
    default=DEFAULT_METRICS_INPUTS.customers,
    show_default=True,
    help="Monthly active customers",
)
@click.option(
    "--price",
    type=float,
    default=DEFAULT_METRICS_INPUTS.price,
    show_default=True,
    help="Monthly price per customer (USD)",
)
@click.option(
    "--cac",
    type=float,
    default=DEFAULT_METRICS_INPUTS.cac,
    show_default=True,
    help="Customer acquisition cost (USD)",
)
@click.option(
    "--churn",
    type=float,
    default=DEFAULT_METRICS_INPUTS.churn_rate_pct,
    show_default=True,
    help="Monthly churn rate (%)",
)
@currency_option
def metrics_command(
    customers: float,
    price: float,
    cac: float,
    churn: float,
    currency: CurrencyCode,
) -> None:
    """Compute LTV, LTV:CAC and CAC payback."""
    inputs = UnitMetricsInputs(
        customers=customers, price=price, cac=cac, churn_rate_pct=churn
    )
    try:
        metrics = unit_metrics(inputs)
    except InvalidAssumptions as exc:
        _fail(exc)

    click.echo(formatters.format_metrics(metrics, currency), nl=False)


@cli.command("rates")
@click.option("--live", is_flag=True, help="Show today's rates from Frankfurter")
@click.option("--refresh", is_flag=True, help="With --live, ignore the stored table")
@click.option("--clear", is_flag=True, help="Delete stored rate tables and exit")
def rates_command(live: bool, refresh: bool, clear: bool) -> None:
    """Show the currency table and the stored live-rate days."""
    if clear:
        count = cache.clear_rates()
        click.echo(f"Cleared {count} stored rate table(s).")
        return
    if refresh and not live:
        raise click.UsageError("--refresh only applies with --live")

    table, warnings = _resolve_table(live, refresh)
    title = "Live Rates" if live and not warnings else "Static Rates"
    click.echo(formatters.format_rates(table, title), nl=False)
    for w in warnings:
        click.echo(f"Warning: {w}", err=True)

    days = cache.cached_days()
    if days:
        click.echo("Stored rate tables: " + ", ".join(d.isoformat() for d in days))
    else:
        click.echo("No stored rate tables.")
    click.echo(f"Rate store: {cache.CACHE_DIR}")


if __name__ == "__main__":
    cli()
