"""Core data models for IRS Schedule E calculations.

This module implements the data structures consumed and produced by the
Schedule E engine: property snapshots, income and expense entries,
depreciation schedules, per-property Schedule E data and the
multi-property summary.

All models are immutable snapshots. Monetary fields accept ints, floats,
numeric strings or Decimals and are stored as Decimal.

Reference: https://www.irs.gov/forms-pubs/about-schedule-e-form-1040
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Annotated, Iterator, Optional

from pydantic import BaseModel, BeforeValidator, Field, computed_field, field_validator

from .decimal_utils import ZERO, to_decimal
from .exceptions import ValidationError


def _to_money(value) -> Decimal:
    # pydantic only collects ValueError from validators
    try:
        return to_decimal(value)
    except ValidationError as e:
        raise ValueError(e.message) from e


Money = Annotated[Decimal, BeforeValidator(_to_money)]


# =============================================================================
# ENUMERATIONS
# =============================================================================

class IncomeFrequency(str, Enum):
    """How often an income amount is received."""
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"
    ONE_TIME = "one_time"


class ExpenseCategory(str, Enum):
    """Expense categories as stored by the persistence layer.

    Each maps to a Schedule E line (see ``schedule_e.SCHEDULE_E_LINE_MAPPING``).
    DEPRECIATION is listed for completeness only; line 18 is always
    computed by the engine and never taken from user entries.
    """
    ADVERTISING = "advertising"                    # Line 5
    AUTO_TRAVEL = "auto_travel"                    # Line 6
    CLEANING_MAINTENANCE = "cleaning_maintenance"  # Line 7
    COMMISSIONS = "commissions"                    # Line 8
    INSURANCE = "insurance"                        # Line 9
    LEGAL_PROFESSIONAL = "legal_professional"      # Line 10
    MANAGEMENT_FEES = "management_fees"            # Line 11
    MORTGAGE_INTEREST = "mortgage_interest"        # Line 12
    OTHER_INTEREST = "other_interest"              # Line 13
    REPAIRS = "repairs"                            # Line 14
    SUPPLIES = "supplies"                          # Line 15
    PROPERTY_TAXES = "property_taxes"              # Line 16
    UTILITIES = "utilities"                        # Line 17
    DEPRECIATION = "depreciation"                  # Line 18 (computed)
    OTHER = "other"                                # Line 19


class PropertyType(str, Enum):
    """Kind of rental property. Informational only."""
    SINGLE_FAMILY = "single_family"
    MULTI_FAMILY = "multi_family"
    CONDO = "condo"
    TOWNHOUSE = "townhouse"
    OTHER = "other"


class Profitability(str, Enum):
    """Profitability tier for a single property."""
    EXCELLENT = "excellent"
    GOOD = "good"
    BREAK_EVEN = "break_even"
    LOSS = "loss"


# Schedule E expense lines in form order: (line number, field name, label)
SCHEDULE_E_EXPENSE_LINES: tuple[tuple[int, str, str], ...] = (
    (5, "advertising", "Advertising"),
    (6, "auto_and_travel", "Auto and travel"),
    (7, "cleaning_and_maintenance", "Cleaning and maintenance"),
    (8, "commissions", "Commissions"),
    (9, "insurance", "Insurance"),
    (10, "legal", "Legal and other professional fees"),
    (11, "management_fees", "Management fees"),
    (12, "mortgage_interest", "Mortgage interest paid to banks, etc."),
    (13, "other_interest", "Other interest"),
    (14, "repairs", "Repairs"),
    (15, "supplies", "Supplies"),
    (16, "taxes", "Taxes"),
    (17, "utilities", "Utilities"),
    (18, "depreciation", "Depreciation expense or depletion"),
    (19, "other", "Other"),
)


# =============================================================================
# INPUT RECORDS
# =============================================================================

class Address(BaseModel):
    """Street address of a rental property."""
    model_config = {"frozen": True}

    street: str = ""
    street_line2: Optional[str] = None
    city: str = ""
    state: str = ""
    zip_code: str = ""

    @computed_field
    @property
    def one_line(self) -> str:
        """Address as a single line, e.g. for report rows."""
        street = self.street
        if self.street_line2:
            street = f"{street}, {self.street_line2}"
        return f"{street}, {self.city}, {self.state}"


class ScheduleEProperty(BaseModel):
    """Financial snapshot of a rental property, as supplied by persistence.

    ``land_value`` is not required to be below ``purchase_price``; the
    depreciable basis simply goes negative if it is.
    """
    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": "prop_123",
                    "address": {
                        "street": "12 Elm St",
                        "city": "Springfield",
                        "state": "IL",
                        "zip_code": "62701",
                    },
                    "property_type": "single_family",
                    "purchase_date": "2023-01-15",
                    "purchase_price": "300000",
                    "land_value": "60000",
                }
            ]
        },
    }

    id: str = Field(description="Property identifier from the persistence layer")
    address: Address = Field(default_factory=Address)
    property_type: PropertyType = PropertyType.SINGLE_FAMILY
    purchase_date: date = Field(description="Date placed in service")
    purchase_price: Money = Field(gt=0, description="Total purchase price")
    land_value: Money = Field(default=ZERO, ge=0, description="Non-depreciable land value")


# The engine calls the same record by both names.
PropertyFinancials = ScheduleEProperty


class IncomeEntry(BaseModel):
    """A rental income entry with its payment frequency."""
    model_config = {"frozen": True}

    amount: Money = Field(ge=0)
    frequency: IncomeFrequency = IncomeFrequency.ANNUAL
    description: Optional[str] = None


class ExpenseEntry(BaseModel):
    """An expense entry.

    ``category`` is kept as a plain string so that unrecognized categories
    coming from storage still aggregate (onto line 19) rather than fail.
    ``frequency`` is informational; expenses are summed at face value.
    """
    model_config = {"frozen": True}

    amount: Money = Field(ge=0)
    category: str = ExpenseCategory.OTHER.value
    frequency: Optional[IncomeFrequency] = None
    vendor: Optional[str] = None
    description: Optional[str] = None

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v):
        """Store enum members by value."""
        if isinstance(v, ExpenseCategory):
            return v.value
        return v


# =============================================================================
# DEPRECIATION
# =============================================================================

class DepreciationResult(BaseModel):
    """One year of a depreciation schedule."""
    model_config = {"frozen": True}

    year: int = Field(ge=1, description="Year in service, starting at 1")
    amount: Money
    percentage: Money = Field(description="IRS table percentage applied")
    accumulated_depreciation: Money
    remaining_basis: Money


class DepreciationDetail(BaseModel):
    """Depreciation context attached to a property's Schedule E data."""
    model_config = {"frozen": True}

    depreciable_basis: Money
    month_placed_in_service: int
    prior_year_depreciation: Money = ZERO  # not computed by the engine
    current_year_depreciation: Money


# =============================================================================
# SCHEDULE E
# =============================================================================

class ScheduleEIncome(BaseModel):
    """Schedule E income lines."""
    model_config = {"frozen": True}

    rental_income: Money = ZERO  # Line 3
    royalties: Optional[Money] = None  # Line 4, not populated by the engine


class ScheduleEExpenses(BaseModel):
    """Schedule E expense lines 5 through 19, in form order."""
    model_config = {"frozen": True}

    advertising: Money = ZERO               # Line 5
    auto_and_travel: Money = ZERO           # Line 6
    cleaning_and_maintenance: Money = ZERO  # Line 7
    commissions: Money = ZERO               # Line 8
    insurance: Money = ZERO                 # Line 9
    legal: Money = ZERO                     # Line 10
    management_fees: Money = ZERO           # Line 11
    mortgage_interest: Money = ZERO         # Line 12
    other_interest: Money = ZERO            # Line 13
    repairs: Money = ZERO                   # Line 14
    supplies: Money = ZERO                  # Line 15
    taxes: Money = ZERO                     # Line 16
    utilities: Money = ZERO                 # Line 17
    depreciation: Money = ZERO              # Line 18
    other: Money = ZERO                     # Line 19

    def line_items(self) -> Iterator[tuple[int, str, Decimal]]:
        """Yield (line number, label, amount) for lines 5-19 in order."""
        for line, field_name, label in SCHEDULE_E_EXPENSE_LINES:
            yield line, label, getattr(self, field_name)


class ScheduleETotals(BaseModel):
    """Schedule E totals."""
    model_config = {"frozen": True}

    total_expenses: Money  # Line 20
    net_income: Money      # Line 21, negative for a loss


class ScheduleEData(BaseModel):
    """Complete Schedule E data for a single property and tax year."""
    model_config = {"frozen": True}

    property: ScheduleEProperty
    tax_year: int
    income: ScheduleEIncome
    expenses: ScheduleEExpenses
    totals: ScheduleETotals
    depreciation: Optional[DepreciationDetail] = None

    @computed_field
    @property
    def is_loss(self) -> bool:
        """True when line 21 reports a loss."""
        return self.totals.net_income < 0


class SummaryTotals(BaseModel):
    """Totals across every property in a summary."""
    model_config = {"frozen": True}

    total_income: Money = ZERO
    total_expenses: Money = ZERO
    total_depreciation: Money = ZERO
    net_income: Money = ZERO


class ScheduleESummary(BaseModel):
    """Multi-property Schedule E summary for one tax year."""
    model_config = {"frozen": True}

    tax_year: int
    properties: list[ScheduleEData]
    totals: SummaryTotals

    @computed_field
    @property
    def property_count(self) -> int:
        """Number of properties in the summary."""
        return len(self.properties)


# =============================================================================
# PORTFOLIO METRICS
# =============================================================================

class CashFlowBreakdown(BaseModel):
    """Cash flow versus tax impact for a set of properties."""
    model_config = {"frozen": True}

    net_cash_flow: Money           # Excludes non-cash depreciation
    depreciation_benefit: Money
    tax_impact: Money              # Schedule E net income/loss
    operating_profit: Money        # Income less expenses other than depreciation


class PortfolioMetrics(BaseModel):
    """Portfolio-level performance figures."""
    model_config = {"frozen": True}

    net_cash_flow: Money
    tax_impact: Money
    operating_cash_flow: Money
    cash_on_cash_return: Money     # Annual percentage
    portfolio_roi: Money           # Annual percentage
    expense_ratio: Money           # Operating expenses / income, percentage
    available_depreciation: Money
    operating_expenses: Money
    depreciation_amount: Money


class PropertyPerformance(BaseModel):
    """Performance figures for a single property."""
    model_config = {"frozen": True}

    monthly_net_cash_flow: Money
    annual_roi: Money
    expense_ratio: Money
    is_profit: bool
    profitability: Profitability
    recommended_action: Optional[str] = None


# =============================================================================
# AUDIT
# =============================================================================

class AuditEntry(BaseModel):
    """Audit log entry for calculation transparency."""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    step: str
    input_value: str
    output_value: str
    source: str
    notes: Optional[str] = None
    line_number: Optional[str] = None  # Schedule E line reference


# =============================================================================
# PORTFOLIO REPORT
# =============================================================================

class PropertyHolding(BaseModel):
    """A property together with its entries for one tax year."""
    model_config = {"frozen": True}

    property: ScheduleEProperty
    income_entries: list[IncomeEntry] = Field(default_factory=list)
    expense_entries: list[ExpenseEntry] = Field(default_factory=list)


class ScheduleEReport(BaseModel):
    """Result of running the Schedule E pipeline for a portfolio."""
    summary: ScheduleESummary
    warnings: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Validation warnings keyed by property id",
    )
    depreciation_schedules: dict[str, list[DepreciationResult]] = Field(default_factory=dict)
    metrics: Optional[PortfolioMetrics] = None
    audit_log: list[AuditEntry] = Field(default_factory=list)
    engine_version: str

    @computed_field
    @property
    def has_warnings(self) -> bool:
        """True if any property produced a validation warning."""
        return any(self.warnings.values())
