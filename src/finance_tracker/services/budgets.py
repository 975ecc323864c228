import asyncio

from pymongo.errors import DuplicateKeyError

from finance_tracker.domain.analytics import category_sort_key
from finance_tracker.errors import ConflictError, NotFoundError
from finance_tracker.logger import get_logger
from finance_tracker.models import Budget, BudgetInput
from finance_tracker.services.common import require_object_id, utcnow
from finance_tracker.storage.mongo import BudgetStore

logger = get_logger(__name__)

DUPLICATE_BUDGET_MESSAGE = "Budget already exists for this category and month"


class BudgetService:
    """
    Budget CRUD with the one-budget-per-(category, month) rule.

    The rule is checked up front for a clear error, and the store's unique
    index rejects whatever slips between that check and the write.
    """

    def __init__(self, store: BudgetStore) -> None:
        self.store = store

    async def list_all(self, month: str | None = None) -> list[Budget]:
        documents = await asyncio.to_thread(self.store.find_all, month)
        budgets = [Budget.from_document(doc) for doc in documents]
        budgets.sort(key=lambda b: (*category_sort_key(b.category), b.month))
        return budgets

    async def create(self, payload: BudgetInput) -> Budget:
        existing = await asyncio.to_thread(self.store.find_slot, payload.category, payload.month)
        if existing is not None:
            logger.info(
                "[BUDGETS] Rejected duplicate budget for '%s' in %s.",
                payload.category,
                payload.month,
            )
            raise ConflictError(DUPLICATE_BUDGET_MESSAGE)

        now = utcnow()
        fields = {**payload.to_document(), "createdAt": now, "updatedAt": now}
        try:
            document = await asyncio.to_thread(self.store.insert, fields)
        except DuplicateKeyError as exc:
            raise ConflictError(DUPLICATE_BUDGET_MESSAGE) from exc

        logger.info(
            "[BUDGETS] Created %s: %.2f for '%s' in %s.",
            document["_id"],
            payload.monthly_limit,
            payload.category,
            payload.month,
        )
        return Budget.from_document(document)

    async def update(self, raw_id: str, payload: BudgetInput) -> Budget:
        object_id = require_object_id(raw_id, "budget")
        existing = await asyncio.to_thread(
            self.store.find_slot,
            payload.category,
            payload.month,
            object_id,
        )
        if existing is not None:
            raise ConflictError(DUPLICATE_BUDGET_MESSAGE)

        fields = {**payload.to_document(), "updatedAt": utcnow()}
        try:
            document = await asyncio.to_thread(self.store.update, object_id, fields)
        except DuplicateKeyError as exc:
            raise ConflictError(DUPLICATE_BUDGET_MESSAGE) from exc

        if document is None:
            raise NotFoundError("Budget not found")
        logger.info("[BUDGETS] Updated %s.", object_id)
        return Budget.from_document(document)

    async def delete(self, raw_id: str) -> None:
        object_id = require_object_id(raw_id, "budget")
        deleted = await asyncio.to_thread(self.store.delete, object_id)
        if not deleted:
            raise NotFoundError("Budget not found")
        logger.info("[BUDGETS] Deleted %s.", object_id)
