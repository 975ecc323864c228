from collections.abc import Sequence

from finance_tracker.models import BudgetComparison, DashboardSummary, SpendingInsight

TREND_EPSILON = 0.01


def format_currency(amount: float) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def _plural(count: int) -> str:
    return "category" if count == 1 else "categories"


def _top_category(summary: DashboardSummary) -> SpendingInsight | None:
    if not summary.category_breakdown:
        return None
    top = summary.category_breakdown[0]
    return SpendingInsight(
        kind="info",
        title="Top Spending Category",
        description=(
            f"{top.category} accounts for {top.percentage}% of your total expenses "
            f"({format_currency(top.total)})."
        ),
    )


def _over_budget(comparisons: Sequence[BudgetComparison]) -> SpendingInsight | None:
    over = [row for row in comparisons if row.status == "over"]
    if not over:
        return None
    overspend = sum(row.actual - row.budgeted for row in over)
    return SpendingInsight(
        kind="warning",
        title="Over Budget Alert",
        description=(
            f"You're over budget in {len(over)} {_plural(len(over))}, "
            f"overspending by {format_currency(overspend)} total."
        ),
    )


def _budget_savings(comparisons: Sequence[BudgetComparison]) -> SpendingInsight | None:
    under = [row for row in comparisons if row.status == "under"]
    if not under:
        return None
    savings = sum(row.budgeted - row.actual for row in under)
    return SpendingInsight(
        kind="success",
        title="Budget Savings",
        description=(
            f"Great job! You're under budget in {len(under)} {_plural(len(under))}, "
            f"saving {format_currency(savings)} total."
        ),
    )


def _monthly_trend(summary: DashboardSummary) -> SpendingInsight | None:
    if len(summary.monthly_expenses) < 2:
        return None
    previous, current = summary.monthly_expenses[-2], summary.monthly_expenses[-1]
    change = current.total - previous.total
    if abs(change) <= TREND_EPSILON:
        return None
    percent_change = abs(change / previous.total * 100) if previous.total else 0.0
    direction = "increased" if change > 0 else "decreased"
    return SpendingInsight(
        kind="warning" if change > 0 else "success",
        title="Monthly Trend",
        description=(
            f"Your spending {direction} by {format_currency(abs(change))} "
            f"({percent_change:.1f}%) compared to last month."
        ),
    )


def _spending_pattern(summary: DashboardSummary, transaction_count: int) -> SpendingInsight | None:
    if transaction_count <= 0:
        return None
    average = summary.total_expenses / transaction_count
    return SpendingInsight(
        kind="info",
        title="Spending Pattern",
        description=(
            f"You have {transaction_count} transactions with an average of "
            f"{format_currency(average)} per transaction."
        ),
    )


def build_insights(
    summary: DashboardSummary,
    comparisons: Sequence[BudgetComparison],
    transaction_count: int,
) -> list[SpendingInsight]:
    candidates = (
        _top_category(summary),
        _over_budget(comparisons),
        _budget_savings(comparisons),
        _monthly_trend(summary),
        _spending_pattern(summary, transaction_count),
    )
    return [insight for insight in candidates if insight is not None]
