"""CSV export of Schedule E data for tax software.

Three layouts are supported:
- ``csv``: one readable summary row per property
- ``turbotax``: one row per property with every Schedule E line
- ``quickbooks``: one row per non-zero income or expense account

Exports return CSV text; writing it anywhere is up to the caller.
"""

import csv
import io
from dataclasses import dataclass
from enum import Enum
from typing import Union

import structlog

from .formatting import format_tax_amount
from .models import ScheduleEData, ScheduleESummary

logger = structlog.get_logger()


class ExportFormat(str, Enum):
    """Export layouts for Schedule E data."""
    PDF = "pdf"
    CSV = "csv"
    TURBOTAX = "turbotax"
    QUICKBOOKS = "quickbooks"


@dataclass(frozen=True)
class CSVExportConfig:
    """Column layout for one export format."""
    format: ExportFormat
    headers: tuple[str, ...]


CSV_CONFIGS: dict[ExportFormat, CSVExportConfig] = {
    ExportFormat.CSV: CSVExportConfig(
        format=ExportFormat.CSV,
        headers=(
            "Property Address",
            "Tax Year",
            "Rental Income",
            "Total Expenses",
            "Depreciation",
            "Net Income",
        ),
    ),
    ExportFormat.TURBOTAX: CSVExportConfig(
        format=ExportFormat.TURBOTAX,
        headers=(
            "Property_Address",
            "Rental_Income_Line3",
            "Advertising_Line5",
            "Auto_Travel_Line6",
            "Cleaning_Maintenance_Line7",
            "Commissions_Line8",
            "Insurance_Line9",
            "Legal_Professional_Line10",
            "Management_Fees_Line11",
            "Mortgage_Interest_Line12",
            "Other_Interest_Line13",
            "Repairs_Line14",
            "Supplies_Line15",
            "Taxes_Line16",
            "Utilities_Line17",
            "Depreciation_Line18",
            "Other_Line19",
            "Total_Expenses_Line20",
            "Net_Income_Line21",
        ),
    ),
    ExportFormat.QUICKBOOKS: CSVExportConfig(
        format=ExportFormat.QUICKBOOKS,
        headers=("Property", "Account", "Amount", "Description", "Tax Year"),
    ),
}

# QuickBooks account name per Schedule E line, lines 5-19 in order
QUICKBOOKS_ACCOUNTS = (
    "Advertising",
    "Auto & Travel",
    "Cleaning & Maintenance",
    "Commissions",
    "Insurance",
    "Legal & Professional",
    "Management Fees",
    "Mortgage Interest",
    "Other Interest",
    "Repairs",
    "Supplies",
    "Property Taxes",
    "Utilities",
    "Depreciation",
    "Other Expenses",
)


def _write_rows(rows: list[list[str]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue().rstrip("\n")


def _standard_row(data: ScheduleEData) -> list[str]:
    return [
        data.property.address.one_line,
        str(data.tax_year),
        format_tax_amount(data.income.rental_income),
        format_tax_amount(data.totals.total_expenses),
        format_tax_amount(data.expenses.depreciation),
        format_tax_amount(data.totals.net_income),
    ]


def _turbotax_row(data: ScheduleEData) -> list[str]:
    row = [data.property.address.one_line, format_tax_amount(data.income.rental_income)]
    row.extend(format_tax_amount(amount) for _, _, amount in data.expenses.line_items())
    row.append(format_tax_amount(data.totals.total_expenses))
    row.append(format_tax_amount(data.totals.net_income))
    return row


def _quickbooks_rows(data: ScheduleEData) -> list[list[str]]:
    address = data.property.address.one_line
    tax_year = str(data.tax_year)
    rows: list[list[str]] = []

    if data.income.rental_income > 0:
        rows.append([
            address,
            "Rental Income",
            format_tax_amount(data.income.rental_income),
            "Rental income collected",
            tax_year,
        ])

    for account, (_, _, amount) in zip(QUICKBOOKS_ACCOUNTS, data.expenses.line_items()):
        if amount > 0:
            rows.append([
                address,
                account,
                format_tax_amount(-amount),  # Expenses are negative
                f"{account} expense",
                tax_year,
            ])
    return rows


def _export(properties: list[ScheduleEData], fmt: ExportFormat) -> str:
    # PDF has no CSV rendition; it falls back to the readable summary
    if fmt not in CSV_CONFIGS:
        fmt = ExportFormat.CSV
    config = CSV_CONFIGS[fmt]
    rows: list[list[str]] = [list(config.headers)]

    for data in properties:
        if fmt == ExportFormat.TURBOTAX:
            rows.append(_turbotax_row(data))
        elif fmt == ExportFormat.QUICKBOOKS:
            rows.extend(_quickbooks_rows(data))
        else:
            rows.append(_standard_row(data))

    logger.debug("schedule_e_csv_exported", format=config.format.value, properties=len(properties), rows=len(rows))
    return _write_rows(rows)


def export_property_to_csv(data: ScheduleEData, fmt: Union[ExportFormat, str] = ExportFormat.CSV) -> str:
    """Export a single property's Schedule E data as CSV text."""
    return _export([data], ExportFormat(fmt))


def export_summary_to_csv(summary: ScheduleESummary, fmt: Union[ExportFormat, str] = ExportFormat.CSV) -> str:
    """Export every property in a summary as CSV text with a single header row."""
    return _export(summary.properties, ExportFormat(fmt))


def generate_csv_filename(
    data: Union[ScheduleEData, ScheduleESummary],
    fmt: Union[ExportFormat, str] = ExportFormat.CSV,
) -> str:
    """Build a download filename, e.g. ``schedule-e-summary-2024-turbotax.csv``."""
    fmt = ExportFormat(fmt)
    if isinstance(data, ScheduleESummary):
        is_multiple = len(data.properties) > 1
    else:
        is_multiple = False

    base = "schedule-e-summary" if is_multiple else "schedule-e-property"
    suffix = "" if fmt == ExportFormat.CSV else f"-{fmt.value}"
    return f"{base}-{data.tax_year}{suffix}.csv"
