"""Display formatting for Schedule E amounts.

Amounts are shown in whole dollars with thousands separators, the way
the IRS form and the report renderers present them. Rounding to whole
dollars is half away from zero; inputs already rounded to cents are not
rounded to cents again.
"""

from decimal import Decimal

from .decimal_utils import Numeric, round_whole_dollars


def _whole_dollars(amount: Numeric) -> Decimal:
    dollars = round_whole_dollars(amount)
    # -0.40 rounds to -0; show it as 0
    if dollars == 0:
        return abs(dollars)
    return dollars


def format_currency(amount: Numeric) -> str:
    """Format an amount for display, e.g. ``$1,235`` or ``-$1,235``."""
    dollars = _whole_dollars(amount)
    if dollars < 0:
        return f"-${abs(dollars):,.0f}"
    return f"${dollars:,.0f}"


def format_tax_amount(amount: Numeric) -> str:
    """Format an amount for tax forms: no symbol, with commas, e.g. ``1,235``."""
    return f"{_whole_dollars(amount):,.0f}"
