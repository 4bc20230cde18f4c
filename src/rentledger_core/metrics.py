"""Cash flow and performance metrics built on Schedule E results.

Schedule E net income includes depreciation, which is a deduction but not
a cash outlay. These helpers separate the two so a portfolio dashboard can
show money actually earned next to the taxable result.

Percentages are expressed as percent (8.5 means 8.5%). Any ratio whose
denominator is zero is reported as zero.
"""

from decimal import Decimal
from typing import Optional

from .decimal_utils import Numeric, ZERO, round_currency, to_decimal
from .models import (
    CashFlowBreakdown,
    PortfolioMetrics,
    Profitability,
    PropertyPerformance,
    ScheduleEData,
    ScheduleESummary,
)

HUNDRED = Decimal("100")
MONTHS_PER_YEAR = Decimal("12")

# Cash invested is estimated as a share of total purchase price
ESTIMATED_CASH_INVESTED_SHARE = Decimal("0.25")

# Annual ROI thresholds (percent) for profitability tiers
EXCELLENT_ROI = Decimal("8")
GOOD_ROI = Decimal("4")
BREAK_EVEN_ROI = Decimal("-2")


def _percent(numerator: Decimal, denominator: Decimal) -> Decimal:
    if denominator <= 0:
        return ZERO
    return numerator / denominator * HUNDRED


def _cash_flow_breakdown(
    total_income: Decimal,
    total_expenses: Decimal,
    total_depreciation: Decimal,
    net_income: Decimal,
) -> CashFlowBreakdown:
    operating_profit = total_income - (total_expenses - total_depreciation)
    return CashFlowBreakdown(
        net_cash_flow=round_currency(net_income + total_depreciation),
        depreciation_benefit=round_currency(total_depreciation),
        tax_impact=round_currency(net_income),
        operating_profit=round_currency(operating_profit),
    )


def calculate_cash_flow_breakdown(summary: ScheduleESummary) -> CashFlowBreakdown:
    """Split a summary's net result into cash flow and depreciation benefit."""
    totals = summary.totals
    return _cash_flow_breakdown(
        totals.total_income,
        totals.total_expenses,
        totals.total_depreciation,
        totals.net_income,
    )


def calculate_portfolio_metrics(summary: ScheduleESummary, total_investment: Numeric) -> PortfolioMetrics:
    """Calculate portfolio returns and ratios.

    Args:
        summary: Schedule E summary for the portfolio
        total_investment: Total purchase price across all properties

    Returns:
        PortfolioMetrics, with cash-on-cash return based on an estimated
        25% of the total investment as cash invested
    """
    total_investment = to_decimal(total_investment)
    breakdown = calculate_cash_flow_breakdown(summary)
    totals = summary.totals
    operating_expenses = totals.total_expenses - totals.total_depreciation

    estimated_cash_invested = total_investment * ESTIMATED_CASH_INVESTED_SHARE

    return PortfolioMetrics(
        net_cash_flow=breakdown.net_cash_flow,
        tax_impact=breakdown.tax_impact,
        operating_cash_flow=breakdown.operating_profit,
        cash_on_cash_return=round_currency(_percent(breakdown.net_cash_flow, estimated_cash_invested)),
        portfolio_roi=round_currency(_percent(breakdown.net_cash_flow, total_investment)),
        expense_ratio=round_currency(_percent(operating_expenses, totals.total_income)),
        available_depreciation=totals.total_depreciation,
        operating_expenses=round_currency(operating_expenses),
        depreciation_amount=totals.total_depreciation,
    )


def classify_profitability(annual_roi: Decimal) -> tuple[Profitability, Optional[str]]:
    """Return the profitability tier and recommended action for an ROI."""
    if annual_roi >= EXCELLENT_ROI:
        return Profitability.EXCELLENT, None
    if annual_roi >= GOOD_ROI:
        return Profitability.GOOD, None
    if annual_roi >= BREAK_EVEN_ROI:
        return Profitability.BREAK_EVEN, "Consider rent increase or expense reduction"
    return Profitability.LOSS, "Review pricing and expenses urgently"


def calculate_property_performance(data: ScheduleEData, purchase_price: Numeric) -> PropertyPerformance:
    """Calculate performance metrics for a single property."""
    purchase_price = to_decimal(purchase_price)
    breakdown = _cash_flow_breakdown(
        data.income.rental_income,
        data.totals.total_expenses,
        data.expenses.depreciation,
        data.totals.net_income,
    )

    annual_roi = _percent(breakdown.net_cash_flow, purchase_price)
    operating_expenses = data.totals.total_expenses - data.expenses.depreciation
    profitability, action = classify_profitability(annual_roi)

    return PropertyPerformance(
        monthly_net_cash_flow=round_currency(breakdown.net_cash_flow / MONTHS_PER_YEAR),
        annual_roi=round_currency(annual_roi),
        expense_ratio=round_currency(_percent(operating_expenses, data.income.rental_income)),
        is_profit=breakdown.net_cash_flow > 0,
        profitability=profitability,
        recommended_action=action,
    )
