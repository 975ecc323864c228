from typing import Annotated

from fastapi import APIRouter, Depends

from finance_tracker.api.dependencies import get_transaction_service
from finance_tracker.api.errors import operation
from finance_tracker.api.schemas import ERROR_RESPONSES, MessageResponse
from finance_tracker.models import Transaction, TransactionInput
from finance_tracker.services.transactions import TransactionService

router = APIRouter(prefix="/transactions", tags=["transactions"], responses=ERROR_RESPONSES)

Service = Annotated[TransactionService, Depends(get_transaction_service)]


@router.get("", response_model=list[Transaction])
async def list_transactions(service: Service) -> list[Transaction]:
    with operation("Failed to fetch transactions"):
        return await service.list_all()


@router.post("", response_model=Transaction, status_code=201)
async def create_transaction(payload: TransactionInput, service: Service) -> Transaction:
    with operation("Failed to create transaction"):
        return await service.create(payload)


@router.get("/{transaction_id}", response_model=Transaction)
async def get_transaction(transaction_id: str, service: Service) -> Transaction:
    with operation("Failed to fetch transaction"):
        return await service.get(transaction_id)


@router.put("/{transaction_id}", response_model=Transaction)
async def update_transaction(
    transaction_id: str,
    payload: TransactionInput,
    service: Service,
) -> Transaction:
    with operation("Failed to update transaction"):
        return await service.update(transaction_id, payload)


@router.delete("/{transaction_id}", response_model=MessageResponse)
async def delete_transaction(transaction_id: str, service: Service) -> MessageResponse:
    with operation("Failed to delete transaction"):
        await service.delete(transaction_id)
    return MessageResponse(message="Transaction deleted successfully")
