from datetime import datetime

import pytest
from pydantic import ValidationError

from finance_tracker.domain.months import is_month, month_bounds, month_key
from finance_tracker.domain.validation import (
    category_or_default,
    parse_timestamp,
    require_positive_number,
)
from finance_tracker.models import BudgetInput, TransactionInput


@pytest.mark.parametrize("value", ["2025-01", "1999-12", "2025-00", "2025-13"])
def test_month_pattern_accepts(value: str) -> None:
    assert is_month(value)


@pytest.mark.parametrize("value", ["2025-1", "25-01", "2025-01-01", "2025/01", "2025-01\n", "２０２５-01", None, 202501])
def test_month_pattern_rejects(value: object) -> None:
    assert not is_month(value)


def test_month_bounds() -> None:
    assert month_bounds("2025-02") == (datetime(2025, 2, 1), datetime(2025, 3, 1))
    assert month_bounds("2024-12") == (datetime(2024, 12, 1), datetime(2025, 1, 1))
    assert month_bounds("9999-12") == (datetime(9999, 12, 1), datetime.max)
    with pytest.raises(ValueError):
        month_bounds("2025-13")


def test_month_key_zero_pads() -> None:
    assert month_key(datetime(2025, 1, 15)) == "2025-01"
    assert month_key(datetime(987, 11, 2)) == "0987-11"


@pytest.mark.parametrize("value", [0, -1, "5", None, True, float("nan"), float("inf"), 10**400])
def test_positive_number_rejects(value: object) -> None:
    with pytest.raises(ValueError, match="Amount must be a positive number"):
        require_positive_number(value, "Amount")


def test_positive_number_accepts_ints_and_floats() -> None:
    assert require_positive_number(3, "Amount") == 3.0
    assert require_positive_number(0.01, "Amount") == 0.01


def test_parse_timestamp_formats() -> None:
    assert parse_timestamp("2025-01-15") == datetime(2025, 1, 15)
    assert parse_timestamp("2025-01-15T10:00:00.000Z") == datetime(2025, 1, 15, 10)
    assert parse_timestamp("2025-01-15T10:00:00-05:00") == datetime(2025, 1, 15, 15)
    with pytest.raises(ValueError):
        parse_timestamp("15/01/2025")
    with pytest.raises(ValueError):
        parse_timestamp("")
    with pytest.raises(ValueError, match="Date must be a valid date"):
        parse_timestamp("0001-01-01T00:00:00+05:00")
    with pytest.raises(ValueError, match="Date must be a valid date"):
        parse_timestamp("9999-12-31T23:00:00-05:00")


def test_category_default() -> None:
    assert category_or_default(None) == "Other"
    assert category_or_default("  ") == "Other"
    assert category_or_default(" Food ") == "Food"


@pytest.mark.parametrize("value", [123, ["Food"], {"name": "Food"}, False])
def test_category_rejects_non_text(value: object) -> None:
    with pytest.raises(ValueError, match="Category must be text"):
        category_or_default(value)


def test_transaction_input_trims() -> None:
    payload = TransactionInput.model_validate(
        {"amount": 9.99, "date": "2025-04-01", "description": "  Book  ", "category": ""}
    )
    assert payload.description == "Book"
    assert payload.category == "Other"
    assert payload.to_document()["date"] == datetime(2025, 4, 1)


def test_budget_input_aliases() -> None:
    payload = BudgetInput.model_validate({"category": " Rent ", "monthlyLimit": 900, "month": "2025-04"})
    assert payload.to_document() == {"category": "Rent", "monthlyLimit": 900.0, "month": "2025-04"}

    with pytest.raises(ValidationError):
        BudgetInput.model_validate({"category": "Rent", "monthlyLimit": 900, "month": "April"})
