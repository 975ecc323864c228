import asyncio

from finance_tracker.domain import analytics
from finance_tracker.domain.insights import build_insights
from finance_tracker.domain.months import month_bounds
from finance_tracker.logger import get_logger
from finance_tracker.models import (
    Budget,
    BudgetComparison,
    DashboardSummary,
    MonthlyExpense,
    SpendingInsight,
    Transaction,
)
from finance_tracker.storage.mongo import BudgetStore, TransactionStore

logger = get_logger(__name__)


class AnalyticsService:
    """Derived views, recomputed from the stores on every call."""

    def __init__(
        self,
        transactions: TransactionStore,
        budgets: BudgetStore,
        recent_limit: int = analytics.DEFAULT_RECENT_LIMIT,
    ) -> None:
        self.transactions = transactions
        self.budgets = budgets
        self.recent_limit = recent_limit

    async def _all_transactions(self) -> list[Transaction]:
        documents = await asyncio.to_thread(self.transactions.find_all)
        return [Transaction.from_document(doc) for doc in documents]

    async def _month_transactions(self, month: str) -> list[Transaction]:
        try:
            start, end = month_bounds(month)
        except ValueError:
            # e.g. "2025-13": well formed but no calendar month, so no spend
            return []
        documents = await asyncio.to_thread(self.transactions.find_between, start, end)
        return [Transaction.from_document(doc) for doc in documents]

    async def dashboard(self) -> DashboardSummary:
        transactions = await self._all_transactions()
        summary = analytics.build_dashboard(transactions, self.recent_limit)
        logger.debug(
            "[ANALYTICS] Dashboard over %d transactions: total=%.2f.",
            len(transactions),
            summary.total_expenses,
        )
        return summary

    async def monthly_expenses(self) -> list[MonthlyExpense]:
        return analytics.monthly_expenses(await self._all_transactions())

    async def budget_comparison(self, month: str) -> list[BudgetComparison]:
        documents = await asyncio.to_thread(self.budgets.find_all, month)
        if not documents:
            return []
        budgets = [Budget.from_document(doc) for doc in documents]
        transactions = await self._month_transactions(month)
        comparisons = analytics.compare_budgets(budgets, transactions)
        logger.debug(
            "[ANALYTICS] Budget comparison for %s: %d budgets, %d transactions.",
            month,
            len(budgets),
            len(transactions),
        )
        return comparisons

    async def insights(self, month: str) -> list[SpendingInsight]:
        transactions = await self._all_transactions()
        summary = analytics.build_dashboard(transactions, self.recent_limit)
        comparisons = await self.budget_comparison(month)
        return build_insights(summary, comparisons, len(transactions))
