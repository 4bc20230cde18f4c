"""Advisory checks on generated Schedule E data.

These checks never raise and never modify the data; each finding is
returned as a human-readable warning for the caller to display.
"""

from decimal import Decimal

import structlog

from .decimal_utils import Numeric, to_decimal
from .models import ScheduleEData

logger = structlog.get_logger()

EXPENSE_RATIO_WARNING_THRESHOLD = Decimal("1.5")


def validate_schedule_e_data(
    data: ScheduleEData,
    expense_ratio_threshold: Numeric = EXPENSE_RATIO_WARNING_THRESHOLD,
) -> list[str]:
    """Check Schedule E data for common data-entry problems.

    Args:
        data: Schedule E data for one property
        expense_ratio_threshold: Expense-to-income ratio above which a
            warning is produced

    Returns:
        Warning messages; empty when nothing looks wrong
    """
    warnings: list[str] = []
    rental_income = data.income.rental_income
    expenses = data.expenses

    if rental_income < 0:
        warnings.append("Rental income should typically be positive")

    # Heuristic: also fires for an old, fully depreciated financed property
    if expenses.depreciation == 0 and expenses.mortgage_interest > 0:
        warnings.append("Expected depreciation expense for financed property")

    threshold = to_decimal(expense_ratio_threshold)
    # No ratio without income
    if rental_income != 0:
        expense_ratio = data.totals.total_expenses / rental_income
        if expense_ratio > threshold:
            warnings.append(
                f"Expenses exceed {threshold * 100:.0f}% of income - verify accuracy"
            )

    address = data.property.address
    if not address.street or not address.city:
        warnings.append("Property address is incomplete")

    if warnings:
        logger.warning(
            "schedule_e_validation_warnings",
            property_id=data.property.id,
            tax_year=data.tax_year,
            warning_count=len(warnings),
        )
    return warnings
