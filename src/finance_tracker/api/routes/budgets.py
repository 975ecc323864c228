from typing import Annotated

from fastapi import APIRouter, Depends

from finance_tracker.api.dependencies import get_budget_service
from finance_tracker.api.errors import operation
from finance_tracker.api.schemas import ERROR_RESPONSES, MessageResponse
from finance_tracker.domain.months import MONTH_FORMAT_ERROR, is_month
from finance_tracker.errors import ValidationError
from finance_tracker.models import Budget, BudgetInput
from finance_tracker.services.budgets import BudgetService

router = APIRouter(prefix="/budgets", tags=["budgets"], responses=ERROR_RESPONSES)

Service = Annotated[BudgetService, Depends(get_budget_service)]


@router.get("", response_model=list[Budget])
async def list_budgets(service: Service, month: str | None = None) -> list[Budget]:
    if month is not None and not is_month(month):
        raise ValidationError(MONTH_FORMAT_ERROR)
    with operation("Failed to fetch budgets"):
        return await service.list_all(month)


@router.post("", response_model=Budget, status_code=201)
async def create_budget(payload: BudgetInput, service: Service) -> Budget:
    with operation("Failed to create budget"):
        return await service.create(payload)


@router.put("/{budget_id}", response_model=Budget)
async def update_budget(budget_id: str, payload: BudgetInput, service: Service) -> Budget:
    with operation("Failed to update budget"):
        return await service.update(budget_id, payload)


@router.delete("/{budget_id}", response_model=MessageResponse)
async def delete_budget(budget_id: str, service: Service) -> MessageResponse:
    with operation("Failed to delete budget"):
        await service.delete(budget_id)
    return MessageResponse(message="Budget deleted successfully")
