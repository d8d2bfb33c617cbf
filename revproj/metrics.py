"""SaaS unit economics: LTV, LTV:CAC and CAC payback."""

from __future__ import annotations

from revproj.errors import InvalidAssumptions
from revproj.models import UnitMetrics, UnitMetricsInputs
from revproj.validation import check_finite, ensure_finite


def _validate(m: UnitMetricsInputs) -> None:
    errors: dict[str, str] = {}

    if check_finite(errors, "customers", m.customers) and m.customers < 1:
        errors["customers"] = "must be at least 1"
    if check_finite(errors, "price", m.price) and m.price <= 0:
        errors["price"] = "must be positive"
    if check_finite(errors, "cac", m.cac) and m.cac <= 0:
        errors["cac"] = "must be positive"
    if check_finite(errors, "churn_rate_pct", m.churn_rate_pct) and not (
        0 < m.churn_rate_pct <= 100
    ):
        errors["churn_rate_pct"] = "must be greater than 0 and at most 100"

    if errors:
        raise InvalidAssumptions(errors)


def lifetime_value(price: float, churn_rate_pct: float) -> float:
    """Average revenue per customer over its expected lifetime."""
    return price / (churn_rate_pct / 100)


def unit_metrics(m: UnitMetricsInputs) -> UnitMetrics:
    _validate(m)
    monthly = m.customers * m.price
    ltv = lifetime_value(m.price, m.churn_rate_pct)
    result = UnitMetrics(
        monthly_revenue=monthly,
        annual_revenue=monthly * 12,
        ltv=ltv,
        ltv_to_cac=ltv / m.cac,
        cac_payback_months=m.cac / m.price,
    )
    ensure_finite(None, **result.to_dict())
    return result
