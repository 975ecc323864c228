import asyncio

from finance_tracker.errors import NotFoundError
from finance_tracker.logger import get_logger
from finance_tracker.models import Transaction, TransactionInput
from finance_tracker.services.common import require_object_id, utcnow
from finance_tracker.storage.mongo import TransactionStore

logger = get_logger(__name__)


class TransactionService:
    def __init__(self, store: TransactionStore) -> None:
        self.store = store

    async def list_all(self) -> list[Transaction]:
        """All transactions, newest first."""
        documents = await asyncio.to_thread(self.store.find_all)
        logger.debug("[TRANSACTIONS] Listed %d transactions.", len(documents))
        return [Transaction.from_document(doc) for doc in documents]

    async def get(self, raw_id: str) -> Transaction:
        object_id = require_object_id(raw_id, "transaction")
        document = await asyncio.to_thread(self.store.get, object_id)
        if document is None:
            raise NotFoundError("Transaction not found")
        return Transaction.from_document(document)

    async def create(self, payload: TransactionInput) -> Transaction:
        now = utcnow()
        fields = {**payload.to_document(), "createdAt": now, "updatedAt": now}
        document = await asyncio.to_thread(self.store.insert, fields)
        logger.info(
            "[TRANSACTIONS] Created %s: %.2f in '%s'.",
            document["_id"],
            payload.amount,
            payload.category,
        )
        return Transaction.from_document(document)

    async def update(self, raw_id: str, payload: TransactionInput) -> Transaction:
        object_id = require_object_id(raw_id, "transaction")
        fields = {**payload.to_document(), "updatedAt": utcnow()}
        document = await asyncio.to_thread(self.store.update, object_id, fields)
        if document is None:
            raise NotFoundError("Transaction not found")
        logger.info("[TRANSACTIONS] Updated %s.", object_id)
        return Transaction.from_document(document)

    async def delete(self, raw_id: str) -> None:
        object_id = require_object_id(raw_id, "transaction")
        deleted = await asyncio.to_thread(self.store.delete, object_id)
        if not deleted:
            raise NotFoundError("Transaction not found")
        logger.info("[TRANSACTIONS] Deleted %s.", object_id)
