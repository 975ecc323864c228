from typing import Annotated

from fastapi import APIRouter, Depends

from finance_tracker.api.dependencies import get_analytics_service
from finance_tracker.api.errors import operation
from finance_tracker.api.schemas import ERROR_RESPONSES
from finance_tracker.domain.months import MONTH_FORMAT_ERROR, MONTH_REQUIRED_ERROR, is_month
from finance_tracker.errors import ValidationError
from finance_tracker.models import (
    BudgetComparison,
    DashboardSummary,
    MonthlyExpense,
    SpendingInsight,
)
from finance_tracker.services.analytics import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["analytics"], responses=ERROR_RESPONSES)

Service = Annotated[AnalyticsService, Depends(get_analytics_service)]


def require_month_param(month: str | None = None) -> str:
    if not month:
        raise ValidationError(MONTH_REQUIRED_ERROR)
    if not is_month(month):
        raise ValidationError(MONTH_FORMAT_ERROR)
    return month


Month = Annotated[str, Depends(require_month_param)]


@router.get("/dashboard", response_model=DashboardSummary)
async def dashboard(service: Service) -> DashboardSummary:
    with operation("Failed to fetch dashboard data"):
        return await service.dashboard()


@router.get("/monthly-expenses", response_model=list[MonthlyExpense])
async def monthly_expenses(service: Service) -> list[MonthlyExpense]:
    with operation("Failed to fetch monthly expenses"):
        return await service.monthly_expenses()


@router.get("/budget-comparison", response_model=list[BudgetComparison])
async def budget_comparison(month: Month, service: Service) -> list[BudgetComparison]:
    with operation("Failed to fetch budget comparison"):
        return await service.budget_comparison(month)


@router.get("/insights", response_model=list[SpendingInsight])
async def insights(month: Month, service: Service) -> list[SpendingInsight]:
    with operation("Failed to fetch spending insights"):
        return await service.insights(month)
