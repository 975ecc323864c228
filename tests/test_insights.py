from finance_tracker.domain.insights import build_insights, format_currency
from finance_tracker.models import (
    BudgetComparison,
    CategoryExpense,
    DashboardSummary,
    MonthlyExpense,
)


def _summary(monthly: list[tuple[str, float]], breakdown: list[tuple[str, float, float]] | None = None) -> DashboardSummary:
    return DashboardSummary(
        total_expenses=sum(total for _, total in monthly),
        category_breakdown=[
            CategoryExpense(category=c, total=t, percentage=p) for c, t, p in breakdown or []
        ],
        recent_transactions=[],
        monthly_expenses=[MonthlyExpense(month=m, total=t) for m, t in monthly],
    )


def test_format_currency() -> None:
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(0) == "$0.00"
    assert format_currency(-3.456) == "-$3.46"


def test_no_data_no_insights() -> None:
    assert build_insights(_summary([]), [], 0) == []


def test_full_insight_set() -> None:
    summary = _summary(
        [("2025-01", 100.0), ("2025-02", 150.0)],
        [("Food", 200.0, 80.0), ("Travel", 50.0, 20.0)],
    )
    comparisons = [
        BudgetComparison(category="Food", budgeted=100, actual=150, percentage=150.0, status="over"),
        BudgetComparison(category="Fun", budgeted=80, actual=20, percentage=25.0, status="under"),
        BudgetComparison(category="Rent", budgeted=50, actual=48, percentage=96.0, status="on-track"),
    ]

    insights = build_insights(summary, comparisons, transaction_count=10)

    assert [i.title for i in insights] == [
        "Top Spending Category",
        "Over Budget Alert",
        "Budget Savings",
        "Monthly Trend",
        "Spending Pattern",
    ]
    top, over, savings, trend, pattern = insights
    assert top.description == "Food accounts for 80.0% of your total expenses ($200.00)."
    assert over.kind == "warning"
    assert "1 category" in over.description
    assert "$50.00" in over.description
    assert "saving $60.00" in savings.description
    assert trend.kind == "warning"
    assert trend.description == "Your spending increased by $50.00 (50.0%) compared to last month."
    assert pattern.description == "You have 10 transactions with an average of $25.00 per transaction."


def test_trend_decrease_and_flat() -> None:
    down = build_insights(_summary([("2025-01", 200.0), ("2025-02", 150.0)]), [], 0)
    assert down[0].title == "Monthly Trend"
    assert down[0].kind == "success"
    assert "decreased by $50.00 (25.0%)" in down[0].description

    flat = build_insights(_summary([("2025-01", 100.0), ("2025-02", 100.005)]), [], 0)
    assert flat == []
