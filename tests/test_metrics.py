"""Tests for cash flow and performance metrics."""

from decimal import Decimal

import pytest

from rentledger_core import (
    calculate_cash_flow_breakdown,
    calculate_portfolio_metrics,
    calculate_property_performance,
    generate_schedule_e_data,
)
from rentledger_core.metrics import classify_profitability
from rentledger_core.models import Profitability, ScheduleESummary, SummaryTotals


@pytest.fixture
def summary() -> ScheduleESummary:
    """Portfolio with $30,000 income, $25,000 expenses incl. $8,000 depreciation."""
    return ScheduleESummary(
        tax_year=2024,
        properties=[],
        totals=SummaryTotals(
            total_income=Decimal("30000"),
            total_expenses=Decimal("25000"),
            total_depreciation=Decimal("8000"),
            net_income=Decimal("5000"),
        ),
    )


class TestCashFlowBreakdown:
    """Tests for calculate_cash_flow_breakdown."""

    def test_depreciation_is_added_back(self, summary):
        """Cash flow excludes the non-cash depreciation deduction."""
        breakdown = calculate_cash_flow_breakdown(summary)

        assert breakdown.net_cash_flow == Decimal("13000")
        assert breakdown.depreciation_benefit == Decimal("8000")
        assert breakdown.tax_impact == Decimal("5000")
        assert breakdown.operating_profit == Decimal("13000")


class TestPortfolioMetrics:
    """Tests for calculate_portfolio_metrics."""

    def test_returns_and_ratios(self, summary):
        """ROI uses total investment, cash-on-cash an estimated 25% of it."""
        metrics = calculate_portfolio_metrics(summary, 500000)

        assert metrics.net_cash_flow == Decimal("13000")
        assert metrics.tax_impact == Decimal("5000")
        assert metrics.operating_cash_flow == Decimal("13000")
        assert metrics.portfolio_roi == Decimal("2.60")
        assert metrics.cash_on_cash_return == Decimal("10.40")
        assert metrics.expense_ratio == Decimal("56.67")
        assert metrics.operating_expenses == Decimal("17000")
        assert metrics.available_depreciation == Decimal("8000")
        assert metrics.depreciation_amount == Decimal("8000")

    def test_zero_investment_gives_zero_returns(self, summary):
        """No investment means no return ratios rather than a division error."""
        metrics = calculate_portfolio_metrics(summary, 0)

        assert metrics.portfolio_roi == 0
        assert metrics.cash_on_cash_return == 0
        assert metrics.net_cash_flow == Decimal("13000")

    def test_zero_income_gives_zero_expense_ratio(self):
        """The expense ratio needs income."""
        empty = ScheduleESummary(tax_year=2024, properties=[], totals=SummaryTotals())
        assert calculate_portfolio_metrics(empty, 100000).expense_ratio == 0


class TestPropertyPerformance:
    """Tests for calculate_property_performance."""

    def test_single_property(self, rental_property, income_entries, expense_entries):
        """Monthly cash flow, ROI and expense ratio for one property."""
        data = generate_schedule_e_data(rental_property, 2024, income_entries, expense_entries)

        performance = calculate_property_performance(data, rental_property.purchase_price)

        # Cash flow: 2773.60 net + 8726.40 depreciation = 11500
        assert performance.monthly_net_cash_flow == Decimal("958.33")
        assert performance.annual_roi == Decimal("3.83")
        assert performance.expense_ratio == Decimal("52.08")
        assert performance.is_profit is True
        assert performance.profitability == Profitability.BREAK_EVEN
        assert performance.recommended_action == "Consider rent increase or expense reduction"

    def test_unprofitable_property(self, rental_property, expense_entries):
        """Negative cash flow is not a profit."""
        data = generate_schedule_e_data(rental_property, 2024, [], expense_entries)

        performance = calculate_property_performance(data, "300000")

        assert performance.is_profit is False
        assert performance.profitability == Profitability.LOSS
        assert performance.annual_roi == Decimal("-4.17")


class TestClassifyProfitability:
    """Tests for the ROI tiers."""

    @pytest.mark.parametrize(
        "roi,expected",
        [
            ("12", Profitability.EXCELLENT),
            ("8", Profitability.EXCELLENT),
            ("7.99", Profitability.GOOD),
            ("4", Profitability.GOOD),
            ("3.99", Profitability.BREAK_EVEN),
            ("-2", Profitability.BREAK_EVEN),
            ("-2.01", Profitability.LOSS),
        ],
    )
    def test_tiers(self, roi, expected):
        """Tier boundaries are inclusive at the lower bound."""
        profitability, _ = classify_profitability(Decimal(roi))
        assert profitability == expected

    def test_only_weak_tiers_recommend_action(self):
        """Excellent and good properties need no action."""
        assert classify_profitability(Decimal("9"))[1] is None
        assert classify_profitability(Decimal("5"))[1] is None
        assert classify_profitability(Decimal("-5"))[1] == "Review pricing and expenses urgently"
