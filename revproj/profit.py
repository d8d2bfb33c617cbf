"""Monthly profit projection with quarterly fixed-cost steps."""

from __future__ import annotations

from revproj.errors import InvalidAssumptions
from revproj.models import (
    FIXED_COST_STEP_MONTHS,
    ProfitAssumptions,
    ProfitMonth,
    ProfitProjection,
)
from revproj.validation import check_finite, check_horizon, ensure_finite


def validate_profit(a: ProfitAssumptions) -> None:
    errors: dict[str, str] = {}

    if check_finite(errors, "initial_revenue", a.initial_revenue) and a.initial_revenue <= 0:
        errors["initial_revenue"] = "must be positive"
    if (
        check_finite(errors, "monthly_revenue_growth_pct", a.monthly_revenue_growth_pct)
        and a.monthly_revenue_growth_pct <= -100
    ):
        errors["monthly_revenue_growth_pct"] = "must be greater than -100"
    if check_finite(errors, "cost_of_goods_pct", a.cost_of_goods_pct) and not (
        0 <= a.cost_of_goods_pct <= 100
    ):
        errors["cost_of_goods_pct"] = "must be between 0 and 100"
    if check_finite(errors, "fixed_costs", a.fixed_costs) and a.fixed_costs < 0:
        errors["fixed_costs"] = "must not be negative"
    if (
        check_finite(errors, "fixed_costs_growth_pct", a.fixed_costs_growth_pct)
        and a.fixed_costs_growth_pct <= -100
    ):
        errors["fixed_costs_growth_pct"] = "must be greater than -100"
    check_horizon(errors, a.horizon_months)

    if errors:
        raise InvalidAssumptions(errors)


def project_profit(a: ProfitAssumptions) -> ProfitProjection:
    """Book each month at the current revenue and fixed costs, then step them.

    Revenue compounds after every month; fixed costs step up after every
    third month, so the new level first shows in months 4, 7, 10, ...
    """
    validate_profit(a)

    revenue = float(a.initial_revenue)
    fixed = float(a.fixed_costs)
    revenue_growth = 1 + a.monthly_revenue_growth_pct / 100
    fixed_growth = 1 + a.fixed_costs_growth_pct / 100

    months: list[ProfitMonth] = []
    for month in range(1, int(a.horizon_months) + 1):
        variable = revenue * (a.cost_of_goods_pct / 100)
        gross = revenue - variable
        net = gross - fixed
        ensure_finite(month, revenue=revenue, fixed_costs=fixed, net_profit=net)
        months.append(
            ProfitMonth(
                month=month,
                revenue=revenue,
                variable_costs=variable,
                fixed_costs=fixed,
                gross_profit=gross,
                net_profit=net,
                profit_margin_pct=net / revenue * 100,
            )
        )

        revenue *= revenue_growth
        if month % FIXED_COST_STEP_MONTHS == 0:
            fixed *= fixed_growth

    breakeven = next((m.month for m in months if m.net_profit > 0), None)
    return ProfitProjection(assumptions=a, months=tuple(months), breakeven_month=breakeven)
