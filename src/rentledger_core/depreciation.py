"""IRS mid-month convention depreciation for residential rental property.

Implements 27.5-year straight-line (GDS) depreciation as tabulated in
IRS Publication 946, Table A-6. The first year depends on the month the
property was placed in service; every later year uses the flat 3.636%
rate. The partial final-year taper of the published table is not
modeled: years 2 through 28 all use the flat rate and anything past
year 28 is treated as fully depreciated.

Sources:
- Publication 527: https://www.irs.gov/publications/p527
- Publication 946, Table A-6: https://www.irs.gov/publications/p946
"""

from datetime import date
from decimal import Decimal
from types import MappingProxyType
from typing import Union

import structlog

from .decimal_utils import Numeric, ZERO, round_currency, to_decimal
from .exceptions import InvalidMonthError, ValidationError
from .models import DepreciationResult

logger = structlog.get_logger()


# =============================================================================
# IRS TABLE CONSTANTS
# =============================================================================

# First-year percentage by month placed in service (percent, not fraction)
FIRST_YEAR_PERCENTAGES = MappingProxyType({
    1: Decimal("3.485"),   # January
    2: Decimal("3.182"),   # February
    3: Decimal("2.879"),   # March
    4: Decimal("2.576"),   # April
    5: Decimal("2.273"),   # May
    6: Decimal("1.97"),    # June
    7: Decimal("1.667"),   # July
    8: Decimal("1.364"),   # August
    9: Decimal("1.061"),   # September
    10: Decimal("0.758"),  # October
    11: Decimal("0.455"),  # November
    12: Decimal("0.152"),  # December
})

SUBSEQUENT_YEAR_PERCENTAGE = Decimal("3.636")
DEPRECIATION_YEARS = Decimal("27.5")

# Last year in service that still receives depreciation
FINAL_DEPRECIATION_YEAR = 28

DEFAULT_SCHEDULE_YEARS = 5

HUNDRED = Decimal("100")


def get_first_year_percentage(month: int) -> Decimal:
    """Return the first-year percentage for a month placed in service.

    Args:
        month: Calendar month, 1 (January) through 12 (December)

    Raises:
        InvalidMonthError: If month is not an integer from 1 to 12.
    """
    if isinstance(month, bool) or not isinstance(month, int):
        raise InvalidMonthError(month)
    percentage = FIRST_YEAR_PERCENTAGES.get(month)
    if percentage is None:
        raise InvalidMonthError(month)
    return percentage


def parse_purchase_date(purchase_date: Union[date, str]) -> date:
    """Accept a date or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(purchase_date, date):
        return purchase_date
    try:
        return date.fromisoformat(purchase_date)
    except (TypeError, ValueError) as e:
        raise ValidationError(
            f"Invalid purchase date: {purchase_date!r}",
            field="purchase_date",
            value=repr(purchase_date),
            constraint="Must be a date or an ISO YYYY-MM-DD string",
        ) from e


def month_placed_in_service(purchase_date: Union[date, str]) -> int:
    """Month (1-12) the property was placed in service."""
    return parse_purchase_date(purchase_date).month


# =============================================================================
# CALCULATIONS
# =============================================================================

def calculate_depreciable_basis(purchase_price: Numeric, land_value: Numeric) -> Decimal:
    """Calculate the depreciable basis (purchase price minus land value).

    No plausibility check is applied; a land value above the purchase
    price yields a negative basis.
    """
    return to_decimal(purchase_price) - to_decimal(land_value)


def calculate_first_year_depreciation(depreciable_basis: Numeric, month_placed_in_service: int) -> Decimal:
    """Calculate first year depreciation using the mid-month convention.

    Args:
        depreciable_basis: The depreciable basis of the property
        month_placed_in_service: Month the property was placed in service (1-12)

    Returns:
        First year depreciation amount, rounded to cents

    Raises:
        InvalidMonthError: If the month is outside 1-12.
    """
    percentage = get_first_year_percentage(month_placed_in_service)
    return round_currency(to_decimal(depreciable_basis) * percentage / HUNDRED)


def calculate_annual_depreciation(depreciable_basis: Numeric) -> Decimal:
    """Calculate depreciation for any year after the first (3.636% of basis)."""
    return round_currency(to_decimal(depreciable_basis) * SUBSEQUENT_YEAR_PERCENTAGE / HUNDRED)


def calculate_depreciation_schedule(
    purchase_price: Numeric,
    land_value: Numeric,
    month_placed_in_service: int,
    years_to_calculate: int = DEFAULT_SCHEDULE_YEARS,
) -> list[DepreciationResult]:
    """Calculate a depreciation schedule for consecutive years in service.

    Args:
        purchase_price: Total purchase price of the property
        land_value: Value of the land (not depreciable)
        month_placed_in_service: Month the property was placed in service (1-12)
        years_to_calculate: Number of years to calculate

    Returns:
        One DepreciationResult per year, numbered from 1
    """
    depreciable_basis = calculate_depreciable_basis(purchase_price, land_value)
    results: list[DepreciationResult] = []
    accumulated = ZERO

    for year in range(1, years_to_calculate + 1):
        if year == 1:
            percentage = get_first_year_percentage(month_placed_in_service)
            amount = calculate_first_year_depreciation(depreciable_basis, month_placed_in_service)
        else:
            percentage = SUBSEQUENT_YEAR_PERCENTAGE
            amount = calculate_annual_depreciation(depreciable_basis)

        accumulated = round_currency(accumulated + amount)

        results.append(DepreciationResult(
            year=year,
            amount=amount,
            percentage=percentage,
            accumulated_depreciation=accumulated,
            remaining_basis=round_currency(depreciable_basis - accumulated),
        ))

    logger.debug(
        "depreciation_schedule_calculated",
        depreciable_basis=str(depreciable_basis),
        month_placed_in_service=month_placed_in_service,
        years=years_to_calculate,
        accumulated=str(accumulated),
    )
    return results


def calculate_depreciation_for_tax_year(
    purchase_price: Numeric,
    land_value: Numeric,
    purchase_date: Union[date, str],
    tax_year: int,
) -> Decimal:
    """Calculate the depreciation deduction for a specific tax year.

    Args:
        purchase_price: Total purchase price of the property
        land_value: Value of the land (not depreciable)
        purchase_date: Date placed in service (date or YYYY-MM-DD)
        tax_year: The tax year to calculate depreciation for

    Returns:
        Depreciation for the tax year; zero before the property was placed
        in service and after year 28.
    """
    placed_in_service = parse_purchase_date(purchase_date)
    years_in_service = tax_year - placed_in_service.year + 1

    if years_in_service < 1:
        return ZERO

    depreciable_basis = calculate_depreciable_basis(purchase_price, land_value)

    if years_in_service == 1:
        amount = calculate_first_year_depreciation(depreciable_basis, placed_in_service.month)
    elif years_in_service <= FINAL_DEPRECIATION_YEAR:
        amount = calculate_annual_depreciation(depreciable_basis)
    else:
        return ZERO

    logger.debug(
        "depreciation_calculated",
        tax_year=tax_year,
        year_in_service=years_in_service,
        amount=str(amount),
    )
    return amount
