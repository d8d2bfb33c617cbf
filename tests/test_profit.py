"""Tests for the profit projection."""

import pytest

from revproj.errors import InvalidAssumptions
from revproj.models import DEFAULT_PROFIT_ASSUMPTIONS, ProfitAssumptions
from revproj.profit import project_profit, validate_profit


def _assumptions(**overrides) -> ProfitAssumptions:
    values = {
        "initial_revenue": 10000,
        "monthly_revenue_growth_pct": 0,
        "cost_of_goods_pct": 30,
        "fixed_costs": 5000,
        "fixed_costs_growth_pct": 10,
        "horizon_months": 4,
    }
    values.update(overrides)
    return ProfitAssumptions(**values)


class TestProjectProfit:
    def test_first_month(self):
        m = project_profit(_assumptions()).months[0]
        assert m.month == 1
        assert m.revenue == 10000
        assert m.variable_costs == pytest.approx(3000)
        assert m.gross_profit == pytest.approx(7000)
        assert m.net_profit == pytest.approx(2000)
        assert m.profit_margin_pct == pytest.approx(20)

    def test_fixed_costs_step_each_quarter(self):
        p = project_profit(_assumptions(fixed_costs_growth_pct=100, horizon_months=7))
        assert [m.fixed_costs for m in p.months] == [5000] * 3 + [10000] * 3 + [20000]

    def test_revenue_compounds_after_each_month(self):
        p = project_profit(_assumptions(monthly_revenue_growth_pct=10, horizon_months=3))
        assert [m.revenue for m in p.months] == pytest.approx([10000, 11000, 12100])

    def test_breakeven_month(self):
        p = project_profit(
            _assumptions(
                monthly_revenue_growth_pct=10,
                fixed_costs=8000,
                fixed_costs_growth_pct=0,
                horizon_months=6,
            )
        )
        assert p.months[0].net_profit == pytest.approx(-1000)
        assert p.months[1].net_profit == pytest.approx(-300)
        assert p.breakeven_month == 3

    def test_profitable_from_start(self):
        assert project_profit(_assumptions()).breakeven_month == 1

    def test_never_breaks_even(self):
        p = project_profit(
            _assumptions(initial_revenue=1000, cost_of_goods_pct=50, fixed_costs=1000)
        )
        assert p.breakeven_month is None
        assert all(m.profit_margin_pct == pytest.approx(-50) for m in p.months)

    def test_defaults(self):
        p = project_profit(DEFAULT_PROFIT_ASSUMPTIONS)
        assert len(p.months) == 24
        assert p.breakeven_month == 1

    def test_to_dict(self):
        row = project_profit(_assumptions()).months[0].to_dict()
        assert row["month"] == 1
        assert "profit_margin_pct" in row


class TestValidation:
    def test_collects_every_failure(self):
        with pytest.raises(InvalidAssumptions) as exc_info:
            validate_profit(
                _assumptions(
                    initial_revenue=0,
                    monthly_revenue_growth_pct=-100,
                    cost_of_goods_pct=101,
                    fixed_costs=-1,
                    fixed_costs_growth_pct=float("nan"),
                    horizon_months=0,
                )
            )
        assert set(exc_info.value.fields) == {
            "initial_revenue",
            "monthly_revenue_growth_pct",
            "cost_of_goods_pct",
            "fixed_costs",
            "fixed_costs_growth_pct",
            "horizon_months",
        }

    def test_negative_growth_allowed(self):
        p = project_profit(_assumptions(monthly_revenue_growth_pct=-50, horizon_months=2))
        assert p.months[1].revenue == pytest.approx(5000)

    def test_overflow_rejected(self):
        with pytest.raises(InvalidAssumptions, match="overflows at month"):
            project_profit(
                _assumptions(initial_revenue=1e308, monthly_revenue_growth_pct=1000)
            )
