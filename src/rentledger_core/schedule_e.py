"""Schedule E aggregation for rental real estate.

Turns raw income and expense entries into the line items of IRS
Schedule E (Form 1040), Part I, and rolls several properties up into a
single summary for one tax year.

Rounding is applied at fixed checkpoints: income is rounded once after
annualization, totals and net income after each computation, and the
multi-property totals are rounded again after summing the already-rounded
per-property figures.
"""

from collections.abc import Iterable
from decimal import Decimal
from types import MappingProxyType

import structlog

from .decimal_utils import Numeric, ZERO, round_currency, to_decimal
from .depreciation import (
    calculate_depreciable_basis,
    calculate_depreciation_for_tax_year,
    month_placed_in_service,
)
from .exceptions import EmptyPortfolioError, MixedTaxYearError
from .models import (
    SCHEDULE_E_EXPENSE_LINES,
    DepreciationDetail,
    ExpenseCategory,
    ExpenseEntry,
    IncomeEntry,
    IncomeFrequency,
    ScheduleEData,
    ScheduleEExpenses,
    ScheduleEIncome,
    ScheduleEProperty,
    ScheduleESummary,
    ScheduleETotals,
    SummaryTotals,
)

logger = structlog.get_logger()


# Expense category -> ScheduleEExpenses field. Line 18 (depreciation) is
# computed and has no category here; anything not listed goes to "other".
SCHEDULE_E_LINE_MAPPING = MappingProxyType({
    ExpenseCategory.ADVERTISING.value: "advertising",
    ExpenseCategory.AUTO_TRAVEL.value: "auto_and_travel",
    ExpenseCategory.CLEANING_MAINTENANCE.value: "cleaning_and_maintenance",
    ExpenseCategory.COMMISSIONS.value: "commissions",
    ExpenseCategory.INSURANCE.value: "insurance",
    ExpenseCategory.LEGAL_PROFESSIONAL.value: "legal",
    ExpenseCategory.MANAGEMENT_FEES.value: "management_fees",
    ExpenseCategory.MORTGAGE_INTEREST.value: "mortgage_interest",
    ExpenseCategory.OTHER_INTEREST.value: "other_interest",
    ExpenseCategory.REPAIRS.value: "repairs",
    ExpenseCategory.SUPPLIES.value: "supplies",
    ExpenseCategory.PROPERTY_TAXES.value: "taxes",
    ExpenseCategory.UTILITIES.value: "utilities",
    ExpenseCategory.OTHER.value: "other",
})

INCOME_ANNUALIZATION = MappingProxyType({
    IncomeFrequency.MONTHLY: 12,
    IncomeFrequency.QUARTERLY: 4,
    IncomeFrequency.ANNUAL: 1,
    IncomeFrequency.ONE_TIME: 1,
})


def _as_income_entry(entry) -> IncomeEntry:
    if isinstance(entry, IncomeEntry):
        return entry
    return IncomeEntry.model_validate(entry)


def _as_expense_entry(entry) -> ExpenseEntry:
    if isinstance(entry, ExpenseEntry):
        return entry
    return ExpenseEntry.model_validate(entry)


def expense_line_for_category(category: str) -> str:
    """Return the ScheduleEExpenses field an expense category is booked to."""
    return SCHEDULE_E_LINE_MAPPING.get(category, "other")


def annualize_income(amount: Numeric, frequency: IncomeFrequency) -> Decimal:
    """Convert a periodic income amount to its yearly equivalent.

    One-time amounts are taken as already annual.
    """
    return to_decimal(amount) * INCOME_ANNUALIZATION[IncomeFrequency(frequency)]


def calculate_schedule_e_income(income_entries: Iterable) -> ScheduleEIncome:
    """Calculate Schedule E income (line 3) from raw income entries.

    Entries may be IncomeEntry instances or mappings with ``amount`` and
    ``frequency`` keys.
    """
    total = ZERO
    for entry in income_entries:
        entry = _as_income_entry(entry)
        total += annualize_income(entry.amount, entry.frequency)

    return ScheduleEIncome(rental_income=round_currency(total))


def calculate_schedule_e_expenses(expense_entries: Iterable) -> ScheduleEExpenses:
    """Map raw expense entries onto Schedule E lines 5-19.

    Amounts are summed at face value; an entry's frequency is not used to
    annualize it. Depreciation (line 18) is left at zero for the caller to
    fill in.
    """
    lines: dict[str, Decimal] = {field_name: ZERO for _, field_name, _ in SCHEDULE_E_EXPENSE_LINES}

    for entry in expense_entries:
        entry = _as_expense_entry(entry)
        lines[expense_line_for_category(entry.category)] += entry.amount

    return ScheduleEExpenses(**lines)


def calculate_depreciation(property: ScheduleEProperty, tax_year: int) -> Decimal:
    """Calculate depreciation for Schedule E line 18."""
    return calculate_depreciation_for_tax_year(
        property.purchase_price,
        property.land_value,
        property.purchase_date,
        tax_year,
    )


def calculate_total_expenses(expenses: ScheduleEExpenses) -> Decimal:
    """Calculate total expenses (Schedule E line 20)."""
    total = sum((amount for _, _, amount in expenses.line_items()), ZERO)
    return round_currency(total)


def calculate_net_income(income: ScheduleEIncome, total_expenses: Numeric) -> Decimal:
    """Calculate net income or loss (Schedule E line 21). Losses stay negative."""
    return round_currency(income.rental_income - to_decimal(total_expenses))


def generate_schedule_e_data(
    property: ScheduleEProperty,
    tax_year: int,
    income_entries: Iterable,
    expense_entries: Iterable,
) -> ScheduleEData:
    """Generate complete Schedule E data for a single property.

    Args:
        property: Property snapshot (purchase price, land value, purchase date)
        tax_year: Tax year being reported
        income_entries: Income entries for the property and year
        expense_entries: Expense entries for the property and year

    Returns:
        ScheduleEData with depreciation on line 18 and the depreciation
        detail attached. Prior-year depreciation is reported as zero.
    """
    income = calculate_schedule_e_income(income_entries)

    depreciation = calculate_depreciation(property, tax_year)
    expenses = calculate_schedule_e_expenses(expense_entries).model_copy(
        update={"depreciation": depreciation}
    )

    total_expenses = calculate_total_expenses(expenses)
    net_income = calculate_net_income(income, total_expenses)

    data = ScheduleEData(
        property=property,
        tax_year=tax_year,
        income=income,
        expenses=expenses,
        totals=ScheduleETotals(total_expenses=total_expenses, net_income=net_income),
        depreciation=DepreciationDetail(
            depreciable_basis=calculate_depreciable_basis(property.purchase_price, property.land_value),
            month_placed_in_service=month_placed_in_service(property.purchase_date),
            prior_year_depreciation=ZERO,
            current_year_depreciation=depreciation,
        ),
    )

    logger.info(
        "schedule_e_generated",
        property_id=property.id,
        tax_year=tax_year,
        rental_income=str(income.rental_income),
        total_expenses=str(total_expenses),
        depreciation=str(depreciation),
        net_income=str(net_income),
    )
    return data


def generate_schedule_e_summary(properties_data: list[ScheduleEData]) -> ScheduleESummary:
    """Combine per-property Schedule E data into one summary.

    Raises:
        EmptyPortfolioError: If no properties are given.
        MixedTaxYearError: If the properties do not all share a tax year.
    """
    properties_data = list(properties_data)
    if not properties_data:
        raise EmptyPortfolioError()

    tax_year = properties_data[0].tax_year
    if any(data.tax_year != tax_year for data in properties_data):
        found = list(dict.fromkeys(data.tax_year for data in properties_data))
        raise MixedTaxYearError(found)

    total_income = ZERO
    total_expenses = ZERO
    total_depreciation = ZERO
    net_income = ZERO
    for data in properties_data:
        total_income += data.income.rental_income
        total_expenses += data.totals.total_expenses
        total_depreciation += data.expenses.depreciation
        net_income += data.totals.net_income

    totals = SummaryTotals(
        total_income=round_currency(total_income),
        total_expenses=round_currency(total_expenses),
        total_depreciation=round_currency(total_depreciation),
        net_income=round_currency(net_income),
    )

    logger.info(
        "schedule_e_summary_generated",
        tax_year=tax_year,
        property_count=len(properties_data),
        net_income=str(totals.net_income),
    )
    return ScheduleESummary(tax_year=tax_year, properties=properties_data, totals=totals)
