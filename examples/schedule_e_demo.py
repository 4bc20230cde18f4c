#!/usr/bin/env python3
"""
Schedule E Demonstration

This script walks through the Schedule E workflow for a two-property
portfolio:
1. Describe the properties and their income/expense entries
2. Calculate Schedule E, depreciation schedules and portfolio metrics
3. Print the line items and export CSV

Run: python examples/schedule_e_demo.py [--tax-year 2024] [--format turbotax]
"""

import argparse
from datetime import date

from rentledger_core import (
    Address,
    ExpenseCategory,
    ExpenseEntry,
    IncomeEntry,
    IncomeFrequency,
    PropertyHolding,
    ScheduleECalculator,
    ScheduleEProperty,
    configure_logging,
    export_summary_to_csv,
    format_currency,
    generate_csv_filename,
    load_config,
)


def create_sample_holdings() -> list[PropertyHolding]:
    """Create a sample portfolio with realistic data."""
    duplex = PropertyHolding(
        property=ScheduleEProperty(
            id="duplex",
            address=Address(street="456 Oak Avenue", city="Springfield", state="IL", zip_code="62704"),
            property_type="multi_family",
            purchase_date=date(2021, 3, 10),
            purchase_price="420000",
            land_value="90000",
        ),
        income_entries=[
            IncomeEntry(amount="1650", frequency=IncomeFrequency.MONTHLY, description="Unit A rent"),
            IncomeEntry(amount="1575", frequency=IncomeFrequency.MONTHLY, description="Unit B rent"),
            IncomeEntry(amount="300", frequency=IncomeFrequency.ONE_TIME, description="Late fees"),
        ],
        expense_entries=[
            ExpenseEntry(amount="11240.18", category=ExpenseCategory.MORTGAGE_INTEREST),
            ExpenseEntry(amount="6120", category=ExpenseCategory.PROPERTY_TAXES),
            ExpenseEntry(amount="1480", category=ExpenseCategory.INSURANCE),
            ExpenseEntry(amount="2315.50", category=ExpenseCategory.REPAIRS, vendor="Acme Plumbing"),
        ],
    )

    condo = PropertyHolding(
        property=ScheduleEProperty(
            id="condo",
            address=Address(street="12 Lake Shore Dr", street_line2="Unit 7", city="Chicago", state="IL"),
            property_type="condo",
            purchase_date=date(2024, 7, 1),
            purchase_price="260000",
            land_value="40000",
        ),
        income_entries=[
            IncomeEntry(amount="2100", frequency=IncomeFrequency.MONTHLY),
        ],
        expense_entries=[
            ExpenseEntry(amount="3600", category=ExpenseCategory.MANAGEMENT_FEES),
            ExpenseEntry(amount="1800", category="hoa_dues"),
            ExpenseEntry(amount="450", category=ExpenseCategory.ADVERTISING),
        ],
    )
    return [duplex, condo]


def main():
    """Run the Schedule E demonstration."""
    parser = argparse.ArgumentParser(description="Schedule E demo")
    parser.add_argument("--tax-year", type=int, default=2024)
    parser.add_argument("--format", default="csv", choices=["csv", "turbotax", "quickbooks"])
    args = parser.parse_args()

    config = load_config()
    configure_logging(config)

    print("=" * 70)
    print(f"SCHEDULE E DEMONSTRATION - TAX YEAR {args.tax_year}")
    print("=" * 70)
    print()

    calculator = ScheduleECalculator(config)
    report = calculator.calculate(args.tax_year, create_sample_holdings())

    for data in report.summary.properties:
        print(f"{data.property.address.one_line}")
        print(f"  Line 3  Rents received: {format_currency(data.income.rental_income)}")
        for line, label, amount in data.expenses.line_items():
            if amount:
                print(f"  Line {line:<3}{label}: {format_currency(amount)}")
        print(f"  Line 20 Total expenses: {format_currency(data.totals.total_expenses)}")
        print(f"  Line 21 Income or (loss): {format_currency(data.totals.net_income)}")
        for warning in report.warnings.get(data.property.id, []):
            print(f"  WARNING: {warning}")
        print()

    totals = report.summary.totals
    print("-" * 70)
    print(f"Total income:       {format_currency(totals.total_income)}")
    print(f"Total expenses:     {format_currency(totals.total_expenses)}")
    print(f"Total depreciation: {format_currency(totals.total_depreciation)}")
    print(f"Net income/(loss):  {format_currency(totals.net_income)}")
    if report.metrics:
        print(f"Net cash flow:      {format_currency(report.metrics.net_cash_flow)}")
        print(f"Portfolio ROI:      {report.metrics.portfolio_roi}%")
    print()

    filename = generate_csv_filename(report.summary, args.format)
    print(f"{filename}:")
    print(export_summary_to_csv(report.summary, args.format))


if __name__ == "__main__":
    main()
