from fastapi import Request

from finance_tracker.errors import InternalError
from finance_tracker.services.analytics import AnalyticsService
from finance_tracker.services.budgets import BudgetService
from finance_tracker.services.transactions import TransactionService


def _state_service(request: Request, name: str):
    service = getattr(request.app.state, name, None)
    if service is None:
        raise InternalError("Service not initialized")
    return service


def get_transaction_service(request: Request) -> TransactionService:
    return _state_service(request, "transactions")


def get_budget_service(request: Request) -> BudgetService:
    return _state_service(request, "budgets")


def get_analytics_service(request: Request) -> AnalyticsService:
    return _state_service(request, "analytics")
