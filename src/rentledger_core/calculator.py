"""Portfolio Schedule E calculator with an audit trail.

Runs the full pipeline for every property a taxpayer holds: depreciation,
Schedule E aggregation, the multi-property summary, validation and
portfolio metrics. Each step is recorded in an audit log so the figures
on the form can be traced back to their inputs.
"""

from typing import Optional

import structlog

from . import __version__
from .config import RentLedgerConfig, load_config
from .decimal_utils import ZERO
from .depreciation import calculate_depreciation_schedule, month_placed_in_service
from .metrics import calculate_portfolio_metrics
from .models import AuditEntry, PropertyHolding, ScheduleEData, ScheduleEReport
from .schedule_e import generate_schedule_e_data, generate_schedule_e_summary
from .validation import validate_schedule_e_data

logger = structlog.get_logger()


class ScheduleECalculator:
    """
    Calculate Schedule E for a portfolio of rental properties.

    Engine errors (invalid month, empty portfolio, mixed tax years) are
    logged and re-raised unchanged. Validation findings are collected as
    warnings and never stop the calculation.
    """

    def __init__(self, config: Optional[RentLedgerConfig] = None):
        """
        Initialize calculator.

        Args:
            config: Settings for schedule length and validation thresholds
                (default: loaded from the environment)
        """
        self.config = config or load_config()
        self._audit_log: list[AuditEntry] = []

    def _log_step(
        self,
        step: str,
        input_value: str,
        output_value: str,
        source: str,
        notes: Optional[str] = None,
        line_number: Optional[str] = None,
    ) -> None:
        """Add an entry to the audit log."""
        entry = AuditEntry(
            step=step,
            input_value=input_value,
            output_value=output_value,
            source=source,
            notes=notes,
            line_number=line_number,
        )
        self._audit_log.append(entry)
        logger.info(
            "schedule_e_calculation_step",
            step=step,
            input=input_value,
            output=output_value,
            source=source,
        )

    def _calculate_property(self, holding: PropertyHolding, tax_year: int) -> ScheduleEData:
        prop = holding.property
        data = generate_schedule_e_data(
            prop,
            tax_year,
            holding.income_entries,
            holding.expense_entries,
        )

        self._log_step(
            step=f"property_{prop.id}_income",
            input_value=f"{len(holding.income_entries)} income entries",
            output_value=str(data.income.rental_income),
            source="Annualized income entries",
            line_number="Line 3",
        )
        self._log_step(
            step=f"property_{prop.id}_depreciation",
            input_value=(
                f"price={prop.purchase_price}, land={prop.land_value}, "
                f"placed_in_service={prop.purchase_date.isoformat()}"
            ),
            output_value=str(data.expenses.depreciation),
            source="IRS Pub 946 Table A-6 (27.5-year, mid-month)",
            line_number="Line 18",
        )
        self._log_step(
            step=f"property_{prop.id}_total_expenses",
            input_value=f"{len(holding.expense_entries)} expense entries + depreciation",
            output_value=str(data.totals.total_expenses),
            source="Sum of lines 5-19",
            line_number="Line 20",
        )
        self._log_step(
            step=f"property_{prop.id}_net_income",
            input_value=f"{data.income.rental_income} - {data.totals.total_expenses}",
            output_value=str(data.totals.net_income),
            source="Schedule E formula",
            line_number="Line 21",
        )
        return data

    def calculate(self, tax_year: int, holdings: list[PropertyHolding]) -> ScheduleEReport:
        """
        Calculate Schedule E for every holding in one tax year.

        Args:
            tax_year: Tax year being reported
            holdings: Properties with their income and expense entries

        Returns:
            ScheduleEReport with the summary, per-property warnings,
            depreciation schedules, portfolio metrics and audit log

        Raises:
            CalculationError: If any engine calculation fails.
        """
        self._audit_log = []  # Reset audit log
        warnings: dict[str, list[str]] = {}
        schedules = {}

        properties_data = []
        for holding in holdings:
            prop = holding.property
            data = self._calculate_property(holding, tax_year)
            properties_data.append(data)

            warnings[prop.id] = validate_schedule_e_data(
                data,
                expense_ratio_threshold=self.config.expense_ratio_warning_threshold,
            )
            schedules[prop.id] = calculate_depreciation_schedule(
                prop.purchase_price,
                prop.land_value,
                month_placed_in_service(prop.purchase_date),
                self.config.default_schedule_years,
            )

        try:
            summary = generate_schedule_e_summary(properties_data)
        except Exception:
            logger.exception("schedule_e_summary_failed", tax_year=tax_year, holdings=len(holdings))
            raise

        self._log_step(
            step="portfolio_totals",
            input_value=f"{summary.property_count} properties",
            output_value=(
                f"income={summary.totals.total_income}, "
                f"expenses={summary.totals.total_expenses}, "
                f"net={summary.totals.net_income}"
            ),
            source="Sum of per-property Schedule E figures",
        )

        total_investment = sum((h.property.purchase_price for h in holdings), ZERO)
        metrics = calculate_portfolio_metrics(summary, total_investment)

        return ScheduleEReport(
            summary=summary,
            warnings=warnings,
            depreciation_schedules=schedules,
            metrics=metrics,
            audit_log=self._audit_log,
            engine_version=__version__,
        )
