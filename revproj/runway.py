"""Burn rate, cash runway and breakeven from a list of monthly expenses."""

from __future__ import annotations

from revproj.errors import InvalidAssumptions
from revproj.models import RunwayInputs, RunwayMonth, RunwayProjection
from revproj.validation import check_finite, check_horizon, ensure_finite


def validate_runway(r: RunwayInputs) -> None:
    errors: dict[str, str] = {}

    if check_finite(errors, "cash_balance", r.cash_balance) and r.cash_balance < 0:
        errors["cash_balance"] = "must not be negative"
    if check_finite(errors, "monthly_revenue", r.monthly_revenue) and r.monthly_revenue < 0:
        errors["monthly_revenue"] = "must not be negative"
    if (
        check_finite(errors, "monthly_revenue_growth_pct", r.monthly_revenue_growth_pct)
        and r.monthly_revenue_growth_pct <= -100
    ):
        errors["monthly_revenue_growth_pct"] = "must be greater than -100"
    for i, expense in enumerate(r.expenses):
        name = f"expenses[{i}]"
        if not expense.name.strip():
            errors[name] = "needs a name"
        elif check_finite(errors, name, expense.amount) and expense.amount < 0:
            errors[name] = "amount must not be negative"
    check_horizon(errors, r.horizon_months)

    if errors:
        raise InvalidAssumptions(errors)


def project_runway(r: RunwayInputs) -> RunwayProjection:
    """Grow revenue, burn the shortfall, and stop once the cash is gone.

    The month the balance reaches zero is the last one emitted.
    """
    validate_runway(r)

    total_expenses = sum(e.amount for e in r.expenses)
    current_burn = total_expenses - r.monthly_revenue
    initial_runway = r.cash_balance / current_burn if current_burn > 0 else None

    cash = float(r.cash_balance)
    revenue = float(r.monthly_revenue)
    growth = 1 + r.monthly_revenue_growth_pct / 100
    cumulative_burn = 0.0

    months: list[RunwayMonth] = []
    for month in range(1, int(r.horizon_months) + 1):
        revenue *= growth
        burn = total_expenses - revenue
        cash -= burn
        cumulative_burn += max(burn, 0.0)
        ensure_finite(month, revenue=revenue, cash_balance=cash)
        months.append(
            RunwayMonth(
                month=month,
                cash_balance=max(cash, 0.0),
                burn_rate=max(burn, 0.0),
                revenue=revenue,
                expenses=total_expenses,
                cumulative_burn=cumulative_burn,
            )
        )
        if cash <= 0:
            break

    return RunwayProjection(
        inputs=r,
        total_monthly_expenses=total_expenses,
        current_burn_rate=current_burn,
        initial_runway_months=initial_runway,
        months=tuple(months),
        runway_month=next((m.month for m in months if m.cash_balance <= 0), None),
        breakeven_month=next((m.month for m in months if m.burn_rate <= 0), None),
    )
