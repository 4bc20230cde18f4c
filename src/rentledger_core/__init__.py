"""RentLedger Core - Schedule E and rental depreciation calculations."""

__version__ = "0.1.0"

from .calculator import ScheduleECalculator
from .config import RentLedgerConfig, configure_logging, load_config
from .csv_export import (
    ExportFormat,
    export_property_to_csv,
    export_summary_to_csv,
    generate_csv_filename,
)
from .depreciation import (
    FIRST_YEAR_PERCENTAGES,
    SUBSEQUENT_YEAR_PERCENTAGE,
    calculate_annual_depreciation,
    calculate_depreciable_basis,
    calculate_depreciation_for_tax_year,
    calculate_depreciation_schedule,
    calculate_first_year_depreciation,
)
from .exceptions import (
    CalculationError,
    ConfigurationError,
    EmptyPortfolioError,
    InvalidMonthError,
    MixedTaxYearError,
    RentLedgerError,
    ValidationError,
)
from .formatting import format_currency, format_tax_amount
from .metrics import (
    calculate_cash_flow_breakdown,
    calculate_portfolio_metrics,
    calculate_property_performance,
)
from .models import (
    Address,
    DepreciationResult,
    ExpenseCategory,
    ExpenseEntry,
    IncomeEntry,
    IncomeFrequency,
    PropertyFinancials,
    PropertyHolding,
    PropertyType,
    ScheduleEData,
    ScheduleEExpenses,
    ScheduleEIncome,
    ScheduleEProperty,
    ScheduleEReport,
    ScheduleESummary,
)
from .schedule_e import (
    calculate_net_income,
    calculate_schedule_e_expenses,
    calculate_schedule_e_income,
    calculate_total_expenses,
    generate_schedule_e_data,
    generate_schedule_e_summary,
)
from .validation import validate_schedule_e_data

__all__ = [
    # Calculator
    "ScheduleECalculator",
    # Config
    "RentLedgerConfig",
    "configure_logging",
    "load_config",
    # Depreciation
    "FIRST_YEAR_PERCENTAGES",
    "SUBSEQUENT_YEAR_PERCENTAGE",
    "calculate_annual_depreciation",
    "calculate_depreciable_basis",
    "calculate_depreciation_for_tax_year",
    "calculate_depreciation_schedule",
    "calculate_first_year_depreciation",
    # Schedule E
    "calculate_net_income",
    "calculate_schedule_e_expenses",
    "calculate_schedule_e_income",
    "calculate_total_expenses",
    "generate_schedule_e_data",
    "generate_schedule_e_summary",
    "validate_schedule_e_data",
    # Formatting and export
    "format_currency",
    "format_tax_amount",
    "ExportFormat",
    "export_property_to_csv",
    "export_summary_to_csv",
    "generate_csv_filename",
    # Metrics
    "calculate_cash_flow_breakdown",
    "calculate_portfolio_metrics",
    "calculate_property_performance",
    # Models
    "Address",
    "DepreciationResult",
    "ExpenseCategory",
    "ExpenseEntry",
    "IncomeEntry",
    "IncomeFrequency",
    "PropertyFinancials",
    "PropertyHolding",
    "PropertyType",
    "ScheduleEData",
    "ScheduleEExpenses",
    "ScheduleEIncome",
    "ScheduleEProperty",
    "ScheduleEReport",
    "ScheduleESummary",
    # Exceptions
    "RentLedgerError",
    "CalculationError",
    "InvalidMonthError",
    "EmptyPortfolioError",
    "MixedTaxYearError",
    "ValidationError",
    "ConfigurationError",
]
