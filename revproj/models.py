"""Data models for projections, currencies and unit metrics."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import StrEnum
from typing import Any

# --- Limits ---

MAX_HORIZON_MONTHS = 60
MIN_MONTHLY_GROWTH_RATE_PCT = 0.0
MONTHS_PER_YEAR = 12


class CurrencyCode(StrEnum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    JPY = "JPY"
    INR = "INR"


BASE_CURRENCY = CurrencyCode.USD


@dataclass(frozen=True, slots=True)
class CurrencyDescriptor:
    code: CurrencyCode
    symbol: str
    rate_from_base: float  # units of this currency per 1 base unit


@dataclass(frozen=True, slots=True)
class ProjectionAssumptions:
    initial_customers: float
    monthly_growth_rate_pct: float
    initial_price: float
    annual_price_increase_pct: float
    horizon_months: int


DEFAULT_ASSUMPTIONS = ProjectionAssumptions(
    initial_customers=100,
    monthly_growth_rate_pct=10,
    initial_price=50,
    annual_price_increase_pct=5,
    horizon_months=24,
)


@dataclass(frozen=True, slots=True)
class MonthSnapshot:
    month: int
    customers: int
    price: float
    monthly_revenue: float
    cumulative_revenue: float
    exact_customers: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ProjectionSummary:
    months: int
    final_customers: int
    final_price: float
    final_monthly_revenue: float
    total_revenue: float
    average_monthly_revenue: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class ProjectionResult:
    assumptions: ProjectionAssumptions
    snapshots: tuple[MonthSnapshot, ...]
    summary: ProjectionSummary
    currency: CurrencyCode = BASE_CURRENCY
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class UnitMetricsInputs:
    customers: float
    price: float
    cac: float  # customer acquisition cost
    churn_rate_pct: float  # monthly


DEFAULT_METRICS_INPUTS = UnitMetricsInputs(
    customers=1000, price=29, cac=100, churn_rate_pct=5
)


@dataclass(frozen=True, slots=True)
class UnitMetrics:
    monthly_revenue: float
    annual_revenue: float
    ltv: float
    ltv_to_cac: float
    cac_payback_months: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# --- Profit projection ---

@dataclass(frozen=True, slots=True)
class ProfitAssumptions:
    initial_revenue: float
    monthly_revenue_growth_pct: float
    cost_of_goods_pct: float  # variable costs as % of revenue
    fixed_costs: float
    fixed_costs_growth_pct: float  # applied every FIXED_COST_STEP_MONTHS
    horizon_months: int


FIXED_COST_STEP_MONTHS = 3

DEFAULT_PROFIT_ASSUMPTIONS = ProfitAssumptions(
    initial_revenue=10000,
    monthly_revenue_growth_pct=5,
    cost_of_goods_pct=30,
    fixed_costs=5000,
    fixed_costs_growth_pct=2,
    horizon_months=24,
)


@dataclass(frozen=True, slots=True)
class ProfitMonth:
    month: int
    revenue: float
    variable_costs: float
    fixed_costs: float
    gross_profit: float
    net_profit: float
    profit_margin_pct: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ProfitProjection:
    assumptions: ProfitAssumptions
    months: tuple[ProfitMonth, ...]
    breakeven_month: int | None  # first month with positive net profit


# --- Burn rate and runway ---

@dataclass(frozen=True, slots=True)
class Expense:
    name: str
    amount: float


@dataclass(frozen=True, slots=True)
class RunwayInputs:
    cash_balance: float
    monthly_revenue: float
    monthly_revenue_growth_pct: float
    expenses: tuple[Expense, ...]
    horizon_months: int = 24


DEFAULT_RUNWAY_INPUTS = RunwayInputs(
    cash_balance=500000,
    monthly_revenue=50000,
    monthly_revenue_growth_pct=5,
    expenses=(
        Expense("Salaries & Benefits", 80000),
        Expense("Office & Facilities", 10000),
        Expense("Marketing", 15000),
        Expense("Software & Tools", 5000),
    ),
)


@dataclass(frozen=True, slots=True)
class RunwayMonth:
    month: int
    cash_balance: float  # floored at 0
    burn_rate: float  # floored at 0
    revenue: float
    expenses: float
    cumulative_burn: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class RunwayProjection:
    inputs: RunwayInputs
    total_monthly_expenses: float
    current_burn_rate: float  # expenses minus today's revenue; negative when profitable
    initial_runway_months: float | None  # None when not burning cash
    months: tuple[RunwayMonth, ...]
    runway_month: int | None  # month the cash runs out, None if it lasts
    breakeven_month: int | None
