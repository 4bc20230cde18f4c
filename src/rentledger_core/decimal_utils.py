"""Decimal helpers for currency arithmetic.

Every monetary figure in the engine is a ``Decimal``. Inputs arriving as
floats are converted through ``str()`` so that ``0.1`` stays ``0.1``
instead of picking up binary floating point noise.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

from .exceptions import ValidationError

# Type alias for values that can be converted to Decimal
Numeric = Union[int, float, str, Decimal]

CENTS = Decimal("0.01")
WHOLE_DOLLARS = Decimal("1")
ZERO = Decimal("0")


def to_decimal(value: Numeric) -> Decimal:
    """Convert a numeric value to Decimal.

    Examples:
        >>> to_decimal(100.50)
        Decimal('100.5')
        >>> to_decimal("100.50")
        Decimal('100.50')

    Raises:
        ValidationError: If the value cannot be read as a finite number.
    """
    if isinstance(value, Decimal):
        result = value
    else:
        if isinstance(value, float):
            value = str(value)
        try:
            result = Decimal(value)
        except (InvalidOperation, TypeError, ValueError) as e:
            raise ValidationError(
                f"Cannot convert {value!r} to a decimal amount",
                value=repr(value),
                constraint="Must be an int, float, numeric string or Decimal",
            ) from e

    if not result.is_finite():
        raise ValidationError(
            f"Cannot convert {value!r} to a decimal amount",
            value=repr(value),
            constraint="Must be a finite number",
        )
    return result


def round_currency(value: Numeric) -> Decimal:
    """Round to cents, half away from zero.

    Examples:
        >>> round_currency("100.995")
        Decimal('101.00')
        >>> round_currency(-0.005)
        Decimal('-0.01')
    """
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def round_whole_dollars(value: Numeric) -> Decimal:
    """Round to whole dollars, half away from zero (display rounding)."""
    return to_decimal(value).quantize(WHOLE_DOLLARS, rounding=ROUND_HALF_UP)
