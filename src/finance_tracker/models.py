from datetime import datetime
from typing import Any, Literal, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from finance_tracker.domain.months import validate_month
from finance_tracker.domain.validation import (
    DEFAULT_CATEGORY,
    as_utc,
    category_or_default,
    parse_timestamp,
    require_positive_number,
    require_text,
)

BudgetStatus = Literal["under", "on-track", "over"]
InsightKind = Literal["info", "warning", "success"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StoredDocument(CamelModel):
    id: str = Field(alias="_id")
    created_at: datetime
    updated_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> str:
        return str(value)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _attach_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> Self:
        return cls.model_validate(document)


class Transaction(StoredDocument):
    amount: float
    date: datetime
    description: str
    category: str = DEFAULT_CATEGORY

    @field_validator("date")
    @classmethod
    def _date_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class Budget(StoredDocument):
    category: str
    monthly_limit: float
    month: str


class TransactionInput(CamelModel):
    """Full-field replacement payload for creating or updating a transaction."""

    amount: float
    date: datetime
    description: str
    category: str = DEFAULT_CATEGORY

    @field_validator("amount", mode="before")
    @classmethod
    def _positive_amount(cls, value: Any) -> float:
        return require_positive_number(value, "Amount")

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> datetime:
        return parse_timestamp(value)

    @field_validator("description", mode="before")
    @classmethod
    def _trim_description(cls, value: Any) -> str:
        return require_text(value, "Description")

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, value: Any) -> str:
        return category_or_default(value)

    def to_document(self) -> dict[str, Any]:
        return {
            "amount": self.amount,
            "date": self.date,
            "description": self.description,
            "category": self.category,
        }


class BudgetInput(CamelModel):
    category: str
    monthly_limit: float
    month: str

    @field_validator("category", mode="before")
    @classmethod
    def _trim_category(cls, value: Any) -> str:
        return require_text(value, "Category")

    @field_validator("monthly_limit", mode="before")
    @classmethod
    def _positive_limit(cls, value: Any) -> float:
        return require_positive_number(value, "Monthly limit")

    @field_validator("month", mode="before")
    @classmethod
    def _month_format(cls, value: Any) -> str:
        return validate_month(value)

    def to_document(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "monthlyLimit": self.monthly_limit,
            "month": self.month,
        }


class CategoryExpense(CamelModel):
    category: str
    total: float
    percentage: float


class MonthlyExpense(CamelModel):
    month: str
    total: float


class DashboardSummary(CamelModel):
    total_expenses: float
    category_breakdown: list[CategoryExpense]
    recent_transactions: list[Transaction]
    monthly_expenses: list[MonthlyExpense]


class BudgetComparison(CamelModel):
    category: str
    budgeted: float
    actual: float
    percentage: float
    status: BudgetStatus


class SpendingInsight(CamelModel):
    kind: InsightKind
    title: str
    description: str
