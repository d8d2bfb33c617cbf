"""Pure month-by-month customer and revenue projection."""

from __future__ import annotations

import math

from revproj.errors import InvalidAssumptions
from revproj.models import (
    BASE_CURRENCY,
    MIN_MONTHLY_GROWTH_RATE_PCT,
    MONTHS_PER_YEAR,
    CurrencyCode,
    MonthSnapshot,
    ProjectionAssumptions,
    ProjectionResult,
    ProjectionSummary,
)
from revproj.validation import check_finite, check_horizon, ensure_finite


def validate_assumptions(a: ProjectionAssumptions) -> None:
    """Raise InvalidAssumptions listing every field outside its bounds."""
    errors: dict[str, str] = {}

    if check_finite(errors, "initial_customers", a.initial_customers):
        if a.initial_customers <= 0:
            errors["initial_customers"] = "must be positive"

    if check_finite(errors, "monthly_growth_rate_pct", a.monthly_growth_rate_pct):
        if a.monthly_growth_rate_pct < MIN_MONTHLY_GROWTH_RATE_PCT:
            errors["monthly_growth_rate_pct"] = (
                f"must be at least {MIN_MONTHLY_GROWTH_RATE_PCT:g}"
            )

    if check_finite(errors, "initial_price", a.initial_price):
        if a.initial_price <= 0:
            errors["initial_price"] = "must be positive"

    if check_finite(errors, "annual_price_increase_pct", a.annual_price_increase_pct):
        if a.annual_price_increase_pct < 0:
            errors["annual_price_increase_pct"] = "must not be negative"

    check_horizon(errors, a.horizon_months)

    if errors:
        raise InvalidAssumptions(errors)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def is_escalation_month(month: int) -> bool:
    """True for months 13, 25, 37, ... where the annual price step applies."""
    return month > 1 and (month - 1) % MONTHS_PER_YEAR == 0


def simulate(a: ProjectionAssumptions) -> list[MonthSnapshot]:
    """Run the compounding projection for ``a.horizon_months`` months.

    Each month: escalate the price on a year boundary, grow customers, then
    book revenue at the current price. Customer counts are carried forward
    unrounded; only the snapshot's ``customers`` field is rounded.

    Raises InvalidAssumptions if the inputs are out of bounds or large
    enough to overflow; no partial trajectory is returned.
    """
    validate_assumptions(a)

    customers = float(a.initial_customers)
    price = float(a.initial_price)
    cumulative = 0.0
    growth = 1 + a.monthly_growth_rate_pct / 100
    escalation = 1 + a.annual_price_increase_pct / 100

    snapshots: list[MonthSnapshot] = []
    for month in range(1, int(a.horizon_months) + 1):
        if is_escalation_month(month):
            price *= escalation
        customers *= growth
        revenue = customers * price
        cumulative += revenue
        ensure_finite(
            month,
            customers=customers,
            price=price,
            monthly_revenue=revenue,
            cumulative_revenue=cumulative,
        )
        snapshots.append(
            MonthSnapshot(
                month=month,
                customers=round_half_up(customers),
                price=price,
                monthly_revenue=revenue,
                cumulative_revenue=cumulative,
                exact_customers=customers,
            )
        )
    return snapshots


def summarize(snapshots: list[MonthSnapshot] | tuple[MonthSnapshot, ...]) -> ProjectionSummary:
    if not snapshots:
        raise ValueError("Cannot summarize an empty projection")
    last = snapshots[-1]
    return ProjectionSummary(
        months=len(snapshots),
        final_customers=last.customers,
        final_price=last.price,
        final_monthly_revenue=last.monthly_revenue,
        total_revenue=last.cumulative_revenue,
        average_monthly_revenue=last.cumulative_revenue / len(snapshots),
    )


def project(
    a: ProjectionAssumptions, currency: CurrencyCode = BASE_CURRENCY
) -> ProjectionResult:
    """Simulate and summarize in one call.

    ``currency`` only tags the result for display; all values stay in base.
    """
    snapshots = simulate(a)
    return ProjectionResult(
        assumptions=a,
        snapshots=tuple(snapshots),
        summary=summarize(snapshots),
        currency=currency,
    )
