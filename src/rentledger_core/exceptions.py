"""Custom exceptions for the RentLedger calculation engine.

This module provides a hierarchy of exception classes for consistent error
handling across the Schedule E pipeline. All exceptions inherit from
RentLedgerError, making it easy to catch all engine-specific errors.

Calculation errors (InvalidMonthError, EmptyPortfolioError,
MixedTaxYearError) abort the computation that raised them. Advisory
validation findings are never raised; see ``validation.py``.

Example:
    try:
        summary = generate_schedule_e_summary(properties)
    except MixedTaxYearError as e:
        logger.error("summary_rejected", tax_years=e.tax_years)
        raise
    except RentLedgerError as e:
        # Handle any RentLedger-related error
        logger.error(f"Unable to compute: {e}")
"""

from typing import Any, Optional


class RentLedgerError(Exception):
    """Base exception for all RentLedger errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
        recoverable: Whether the error is potentially recoverable.

    Example:
        >>> raise RentLedgerError("Something went wrong", details={"code": 500})
        RentLedgerError: Something went wrong
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize RentLedgerError.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context about the error.
            recoverable: Whether the error can be resolved by correcting the
                input data and retrying. Defaults to False.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation of the error."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"recoverable={self.recoverable!r})"
        )


class CalculationError(RentLedgerError):
    """Error raised when a tax calculation cannot be completed.

    The surrounding application usually turns these into a generic
    "unable to compute" message while still letting the user correct
    the underlying property data. ``recoverable`` defaults to True for
    that reason.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message, details=details, recoverable=recoverable)


class InvalidMonthError(CalculationError):
    """Error raised when a month placed in service is outside 1-12.

    Attributes:
        month: The rejected month value.

    Example:
        >>> raise InvalidMonthError(13)
        InvalidMonthError: Invalid month: 13. Must be 1-12.
    """

    def __init__(
        self,
        month: Any,
        *,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            f"Invalid month: {month}. Must be 1-12.",
            details=details,
        )
        self.month = month
        self.details["month"] = month


class EmptyPortfolioError(CalculationError):
    """Error raised when a Schedule E summary is requested for no properties."""

    def __init__(
        self,
        message: str = "No properties provided for Schedule E summary",
        *,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details)


class MixedTaxYearError(CalculationError):
    """Error raised when properties in one summary span several tax years.

    Attributes:
        tax_years: The distinct tax years found, in order of first appearance.

    Example:
        >>> raise MixedTaxYearError([2024, 2025])
        MixedTaxYearError: All properties must be for the same tax year. Found properties for years: 2024, 2025
    """

    def __init__(
        self,
        tax_years: list[int],
        *,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        years = ", ".join(str(year) for year in tax_years)
        super().__init__(
            "All properties must be for the same tax year. "
            f"Found properties for years: {years}",
            details=details,
        )
        self.tax_years = list(tax_years)
        self.details["tax_years"] = self.tax_years


class ValidationError(RentLedgerError):
    """Error raised when an input record fails validation.

    This exception is raised when property, income or expense data
    supplied by the persistence layer violates a hard constraint, such
    as a negative amount or an unparseable purchase date.

    Attributes:
        field: The field that failed validation.
        value: The invalid value.
        constraint: The validation constraint that was violated.

    Example:
        >>> raise ValidationError(
        ...     "Amount cannot be negative",
        ...     field="amount",
        ...     value="-10",
        ...     constraint="Must be >= 0",
        ... )
        ValidationError: Amount cannot be negative
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """Initialize ValidationError.

        Args:
            message: Human-readable error description.
            field: The name of the field that failed validation.
            value: The invalid value.
            constraint: Description of the validation rule violated.
            details: Optional dictionary with additional context.
            recoverable: Whether the error can be fixed by user correction.
                Defaults to True since validation errors typically require
                user input correction.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.field = field
        self.value = value
        self.constraint = constraint

        if field:
            self.details["field"] = field
        if value is not None:
            self.details["value"] = value
        if constraint:
            self.details["constraint"] = constraint


class ConfigurationError(RentLedgerError):
    """Error raised when configuration is invalid or missing.

    Attributes:
        config_key: The configuration key that is problematic.
        expected: Description of the expected value or format.
        actual: The actual value found (if any).

    Example:
        >>> raise ConfigurationError(
        ...     "Invalid log level",
        ...     config_key="RENTLEDGER_LOG_LEVEL",
        ...     expected="DEBUG, INFO, WARNING, ERROR or CRITICAL",
        ... )
        ConfigurationError: Invalid log level
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message, details=details, recoverable=recoverable)
        self.config_key = config_key
        self.expected = expected
        self.actual = actual

        if config_key:
            self.details["config_key"] = config_key
        if expected:
            self.details["expected"] = expected
        if actual is not None:
            self.details["actual"] = actual


__all__ = [
    "RentLedgerError",
    "CalculationError",
    "InvalidMonthError",
    "EmptyPortfolioError",
    "MixedTaxYearError",
    "ValidationError",
    "ConfigurationError",
]
