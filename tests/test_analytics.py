from datetime import datetime, timezone

import pytest

from finance_tracker.domain.analytics import (
    build_dashboard,
    category_breakdown,
    classify_budget_status,
    compare_budgets,
    monthly_expenses,
)
from finance_tracker.models import Budget, Transaction

NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)
_counter = 0


def tx(amount: float, date: str, category: str = "Other") -> Transaction:
    global _counter
    _counter += 1
    return Transaction(
        id=str(_counter),
        amount=amount,
        date=datetime.fromisoformat(date),
        description=f"tx {_counter}",
        category=category,
        created_at=NOW,
        updated_at=NOW,
    )


def budget(category: str, limit: float, month: str) -> Budget:
    return Budget(
        id=category,
        category=category,
        monthly_limit=limit,
        month=month,
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.mark.parametrize(
    ("percentage", "status"),
    [
        (0.0, "under"),
        (90.0, "under"),
        (90.1, "on-track"),
        (100.0, "on-track"),
        (100.1, "over"),
        (250.0, "over"),
    ],
)
def test_budget_status_boundaries(percentage: float, status: str) -> None:
    assert classify_budget_status(percentage) == status


def test_category_percentages_sum_to_hundred() -> None:
    transactions = [
        tx(10, "2025-01-01", "Food"),
        tx(20, "2025-01-02", "Travel"),
        tx(3.33, "2025-01-03", "Bills"),
        tx(7, "2025-01-04", "Food"),
    ]

    rows = category_breakdown(transactions)

    assert [r.category for r in rows] == ["Travel", "Food", "Bills"]
    assert sum(r.percentage for r in rows) == pytest.approx(100, abs=0.2)
    assert rows[1].total == 17


def test_category_breakdown_zero_total() -> None:
    assert category_breakdown([]) == []


def test_monthly_grouping_same_bucket() -> None:
    rows = monthly_expenses([
        tx(12.345, "2025-01-15"),
        tx(7.655, "2025-01-31T23:59:59"),
        tx(1, "2024-12-31"),
        tx(2, "2025-10-01"),
    ])

    assert [(r.month, r.total) for r in rows] == [
        ("2024-12", 1),
        ("2025-01", 20.0),
        ("2025-10", 2),
    ]


def test_month_bucket_uses_utc() -> None:
    # 2025-02-01 00:30 at +02:00 is still January in UTC
    rows = monthly_expenses([tx(5, "2025-02-01T00:30:00+02:00")])
    assert rows[0].month == "2025-01"


def test_compare_budgets_example() -> None:
    transactions = [tx(50, "2025-03-01", "Food"), tx(150, "2025-03-31", "Food")]

    rows = compare_budgets([budget("Food", 100, "2025-03")], transactions)

    assert len(rows) == 1
    row = rows[0]
    assert (row.budgeted, row.actual, row.percentage, row.status) == (100, 200, 200.0, "over")


def test_compare_budgets_rounding_and_order() -> None:
    transactions = [
        tx(33.333, "2025-03-05", "alpha"),
        tx(45.1, "2025-03-06", "Beta"),
        tx(500, "2025-02-28", "Beta"),
    ]
    budgets = [budget("Beta", 50, "2025-03"), budget("alpha", 300, "2025-03"), budget("Zed", 10, "2025-03")]

    rows = compare_budgets(budgets, transactions)

    assert [r.category for r in rows] == ["alpha", "Beta", "Zed"]
    alpha, beta, zed = rows
    assert alpha.actual == 33.33
    assert alpha.percentage == 11.1
    assert beta.actual == 45.1
    assert beta.percentage == 90.2
    assert beta.status == "on-track"
    assert zed.actual == 0
    assert zed.status == "under"


def test_compare_budgets_classifies_unrounded_percentage() -> None:
    # 90.04% rounds to 90.0 for display but is above the "under" ceiling
    rows = compare_budgets([budget("Food", 100, "2025-03")], [tx(90.04, "2025-03-01", "Food")])
    assert rows[0].percentage == 90.0
    assert rows[0].status == "on-track"


def test_dashboard_rounds_total() -> None:
    summary = build_dashboard([tx(0.1, "2025-01-01"), tx(0.2, "2025-01-02"), tx(0.004, "2025-01-03")])

    assert summary.total_expenses == 0.3
    assert len(summary.recent_transactions) == 3
    assert summary.recent_transactions[0].date.day == 3
