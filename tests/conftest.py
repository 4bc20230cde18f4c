"""Shared fixtures for the Schedule E test suite."""

from datetime import date
from decimal import Decimal

import pytest

from rentledger_core.models import (
    Address,
    ExpenseCategory,
    ExpenseEntry,
    IncomeEntry,
    IncomeFrequency,
    ScheduleEProperty,
)


@pytest.fixture
def make_property():
    """Factory for property snapshots with sensible defaults."""

    def _make(
        property_id: str = "prop_1",
        purchase_date: date = date(2023, 1, 15),
        purchase_price: str = "300000",
        land_value: str = "60000",
        street: str = "12 Elm St",
        city: str = "Springfield",
    ) -> ScheduleEProperty:
        return ScheduleEProperty(
            id=property_id,
            address=Address(street=street, city=city, state="IL", zip_code="62701"),
            purchase_date=purchase_date,
            purchase_price=purchase_price,
            land_value=land_value,
        )

    return _make


@pytest.fixture
def rental_property(make_property) -> ScheduleEProperty:
    """Single-family rental bought January 2023 for $300,000 ($60,000 land)."""
    return make_property()


@pytest.fixture
def income_entries() -> list[IncomeEntry]:
    """$2,000 monthly rent."""
    return [
        IncomeEntry(amount=Decimal("2000"), frequency=IncomeFrequency.MONTHLY, description="Rent"),
    ]


@pytest.fixture
def expense_entries() -> list[ExpenseEntry]:
    """$12,500 of ordinary expenses."""
    return [
        ExpenseEntry(amount=Decimal("9000"), category=ExpenseCategory.MORTGAGE_INTEREST),
        ExpenseEntry(amount=Decimal("3000"), category=ExpenseCategory.PROPERTY_TAXES),
        ExpenseEntry(amount=Decimal("500"), category=ExpenseCategory.REPAIRS, vendor="Acme Plumbing"),
    ]
