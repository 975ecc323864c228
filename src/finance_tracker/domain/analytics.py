"""
Aggregation rules behind the dashboard and budget views.

Everything here is pure: callers fetch the records from the store and pass
them in, so the rules can be exercised without a database.
"""
import math
from collections import defaultdict
from collections.abc import Iterable, Sequence

from finance_tracker.domain.months import month_key
from finance_tracker.models import (
    Budget,
    BudgetComparison,
    BudgetStatus,
    CategoryExpense,
    DashboardSummary,
    MonthlyExpense,
    Transaction,
)

UNDER_BUDGET_CEILING = 90.0
OVER_BUDGET_FLOOR = 100.0
DEFAULT_RECENT_LIMIT = 5


def round_money(value: float) -> float:
    return round(value, 2)


def round_percentage(value: float) -> float:
    return round(value, 1)


def total_expenses(transactions: Iterable[Transaction]) -> float:
    return math.fsum(t.amount for t in transactions)


def _sum_by(transactions: Iterable[Transaction], key) -> dict[str, float]:
    buckets: dict[str, list[float]] = defaultdict(list)
    for transaction in transactions:
        buckets[key(transaction)].append(transaction.amount)
    return {name: math.fsum(amounts) for name, amounts in buckets.items()}


def category_breakdown(transactions: Sequence[Transaction]) -> list[CategoryExpense]:
    """Per-category totals with their share of the grand total, largest first."""
    grand_total = total_expenses(transactions)
    rows = [
        CategoryExpense(
            category=category,
            total=round_money(total),
            percentage=round_percentage(total / grand_total * 100) if grand_total else 0.0,
        )
        for category, total in _sum_by(transactions, lambda t: t.category).items()
    ]
    rows.sort(key=lambda row: (-row.total, row.category))
    return rows


def monthly_expenses(transactions: Iterable[Transaction]) -> list[MonthlyExpense]:
    totals = _sum_by(transactions, lambda t: month_key(t.date))
    return [
        MonthlyExpense(month=month, total=round_money(total))
        for month, total in sorted(totals.items())
    ]


def recent_transactions(
    transactions: Iterable[Transaction],
    limit: int = DEFAULT_RECENT_LIMIT,
) -> list[Transaction]:
    return sorted(transactions, key=lambda t: t.date, reverse=True)[:limit]


def build_dashboard(
    transactions: Sequence[Transaction],
    recent_limit: int = DEFAULT_RECENT_LIMIT,
) -> DashboardSummary:
    return DashboardSummary(
        total_expenses=round_money(total_expenses(transactions)),
        category_breakdown=category_breakdown(transactions),
        recent_transactions=recent_transactions(transactions, recent_limit),
        monthly_expenses=monthly_expenses(transactions),
    )


def classify_budget_status(percentage: float) -> BudgetStatus:
    if percentage <= UNDER_BUDGET_CEILING:
        return "under"
    if percentage > OVER_BUDGET_FLOOR:
        return "over"
    return "on-track"


def category_sort_key(category: str) -> tuple[str, str]:
    return category.casefold(), category


def compare_budgets(
    budgets: Iterable[Budget],
    transactions: Iterable[Transaction],
) -> list[BudgetComparison]:
    """
    Join each budget with the spend recorded in its category and month.

    Transactions outside a budget's month are ignored, so callers may pass a
    superset of the month's transactions.
    """
    actual_by_slot = _sum_by(transactions, lambda t: f"{month_key(t.date)}\x00{t.category}")

    comparisons = []
    for budget in budgets:
        actual = actual_by_slot.get(f"{budget.month}\x00{budget.category}", 0.0)
        budgeted = budget.monthly_limit
        percentage = actual / budgeted * 100 if budgeted > 0 else 0.0
        comparisons.append(BudgetComparison(
            category=budget.category,
            budgeted=budgeted,
            actual=round_money(actual),
            percentage=round_percentage(percentage),
            status=classify_budget_status(percentage),
        ))

    comparisons.sort(key=lambda row: category_sort_key(row.category))
    return comparisons
