"""Tests for advisory validation and display formatting."""

from decimal import Decimal

import pytest

from rentledger_core import (
    format_currency,
    format_tax_amount,
    generate_schedule_e_data,
    validate_schedule_e_data,
)
from rentledger_core.models import (
    ScheduleEData,
    ScheduleEExpenses,
    ScheduleEIncome,
    ScheduleETotals,
)


def _with_income(data: ScheduleEData, rental_income: Decimal) -> ScheduleEData:
    return data.model_copy(update={"income": ScheduleEIncome(rental_income=rental_income)})


class TestValidateScheduleEData:
    """Tests for validate_schedule_e_data."""

    def test_clean_data_has_no_warnings(self, rental_property, income_entries, expense_entries):
        """Plausible data produces no warnings."""
        data = generate_schedule_e_data(rental_property, 2024, income_entries, expense_entries)
        assert validate_schedule_e_data(data) == []

    def test_negative_income_warning(self, rental_property, income_entries, expense_entries):
        """Negative rental income is flagged."""
        data = generate_schedule_e_data(rental_property, 2024, income_entries, expense_entries)
        warnings = validate_schedule_e_data(_with_income(data, Decimal("-100")))
        assert "Rental income should typically be positive" in warnings

    def test_missing_depreciation_on_financed_property(self, make_property, income_entries, expense_entries):
        """Mortgage interest without depreciation is flagged."""
        # Tax year before purchase: no depreciation yet
        data = generate_schedule_e_data(make_property(), 2022, income_entries, expense_entries)

        assert data.expenses.depreciation == 0
        assert "Expected depreciation expense for financed property" in validate_schedule_e_data(data)

    def test_high_expense_ratio_warning(self, rental_property, expense_entries):
        """Expenses above 150% of income are flagged."""
        data = generate_schedule_e_data(
            rental_property, 2024, [{"amount": 10000, "frequency": "annual"}], expense_entries
        )
        warnings = validate_schedule_e_data(data)
        assert "Expenses exceed 150% of income - verify accuracy" in warnings

    def test_ratio_at_threshold_is_not_flagged(self, rental_property):
        """Exactly 150% does not trigger the warning."""
        data = generate_schedule_e_data(
            rental_property, 2024,
            [{"amount": "17452.80", "frequency": "annual"}],
            [{"amount": "17452.80", "category": "utilities"}],
        )
        # 17452.80 + 8726.40 depreciation = 26179.20 = 1.5 x income
        assert data.totals.total_expenses == Decimal("26179.20")
        assert not any("150%" in w for w in validate_schedule_e_data(data))

    def test_zero_income_skips_ratio_check(self, rental_property, expense_entries):
        """Zero income neither divides by zero nor warns about the ratio."""
        data = generate_schedule_e_data(rental_property, 2024, [], expense_entries)

        warnings = validate_schedule_e_data(data)

        assert data.income.rental_income == 0
        assert not any("of income" in w for w in warnings)

    def test_custom_threshold(self, rental_property, income_entries, expense_entries):
        """The ratio threshold can be lowered."""
        data = generate_schedule_e_data(rental_property, 2024, income_entries, expense_entries)
        # 21226.40 / 24000 = 0.88
        warnings = validate_schedule_e_data(data, expense_ratio_threshold="0.8")
        assert "Expenses exceed 80% of income - verify accuracy" in warnings

    @pytest.mark.parametrize("street,city", [("", "Springfield"), ("12 Elm St", ""), ("", "")])
    def test_incomplete_address(self, make_property, income_entries, expense_entries, street, city):
        """Missing street or city is flagged."""
        prop = make_property(street=street, city=city)
        data = generate_schedule_e_data(prop, 2024, income_entries, expense_entries)
        assert "Property address is incomplete" in validate_schedule_e_data(data)

    def test_validation_does_not_modify_data(self, make_property, income_entries, expense_entries):
        """Validation only reports; the data is unchanged."""
        data = generate_schedule_e_data(make_property(street=""), 2022, income_entries, expense_entries)
        before = data.model_dump()

        validate_schedule_e_data(data)

        assert data.model_dump() == before

    def test_all_warnings_accumulate(self, make_property):
        """Several problems produce several warnings."""
        prop = make_property(street="")
        data = ScheduleEData(
            property=prop,
            tax_year=2022,
            income=ScheduleEIncome(rental_income=Decimal("-10")),
            expenses=ScheduleEExpenses(mortgage_interest=Decimal("5000")),
            totals=ScheduleETotals(total_expenses=Decimal("5000"), net_income=Decimal("-5010")),
        )
        # Negative ratio never exceeds the threshold
        assert len(validate_schedule_e_data(data)) == 3


class TestFormatCurrency:
    """Tests for format_currency."""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (Decimal("1234.50"), "$1,235"),
            (Decimal("1234.49"), "$1,234"),
            (1234567, "$1,234,567"),
            (0, "$0"),
            (Decimal("-2345.57"), "-$2,346"),
            (-0.4, "$0"),
            (999.5, "$1,000"),
        ],
    )
    def test_format_currency(self, amount, expected):
        """Whole dollars, grouped, with a leading sign for losses."""
        assert format_currency(amount) == expected


class TestFormatTaxAmount:
    """Tests for format_tax_amount."""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (Decimal("8726.40"), "8,726"),
            (Decimal("2773.60"), "2,774"),
            (Decimal("-9000"), "-9,000"),
            (Decimal("-0.49"), "0"),
            ("24000", "24,000"),
        ],
    )
    def test_format_tax_amount(self, amount, expected):
        """No symbol, grouped, whole dollars."""
        assert format_tax_amount(amount) == expected
