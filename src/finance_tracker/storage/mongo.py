from datetime import datetime
from typing import Any

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, MongoClient, ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database

from finance_tracker.logger import get_logger

logger = get_logger(__name__)

TRANSACTIONS_COLLECTION = "transactions"
BUDGETS_COLLECTION = "budgets"
BUDGET_SLOT_INDEX = "category_month_unique"

Document = dict[str, Any]


def connect(uri: str, db_name: str, timeout_ms: int) -> tuple[MongoClient, Database]:
    client: MongoClient = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms)
    logger.info("[STORE] MongoDB client created for database '%s'.", db_name)
    return client, client[db_name]


def ensure_indexes(database: Database) -> None:
    """
    Create the indexes the stores rely on.

    The compound unique index is what keeps two concurrent writers from
    both claiming the same (category, month) budget slot.
    """
    database[TRANSACTIONS_COLLECTION].create_index([("date", DESCENDING)], name="date_desc")
    database[BUDGETS_COLLECTION].create_index(
        [("category", ASCENDING), ("month", ASCENDING)],
        name=BUDGET_SLOT_INDEX,
        unique=True,
    )
    logger.debug("[STORE] Indexes ensured.")


def parse_object_id(value: str) -> ObjectId | None:
    if not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


class DocumentStore:
    """Single-collection CRUD; every write touches exactly one document."""

    def __init__(self, collection: Collection) -> None:
        self.collection = collection

    def get(self, object_id: ObjectId) -> Document | None:
        return self.collection.find_one({"_id": object_id})

    def insert(self, fields: Document) -> Document:
        result = self.collection.insert_one(dict(fields))
        # read back so callers see values as the store keeps them (millisecond dates)
        return self.collection.find_one({"_id": result.inserted_id})

    def update(self, object_id: ObjectId, fields: Document) -> Document | None:
        return self.collection.find_one_and_update(
            {"_id": object_id},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )

    def delete(self, object_id: ObjectId) -> bool:
        return self.collection.delete_one({"_id": object_id}).deleted_count > 0


class TransactionStore(DocumentStore):
    def find_all(self) -> list[Document]:
        return list(self.collection.find({}).sort("date", DESCENDING))

    def find_between(self, start: datetime, end: datetime) -> list[Document]:
        return list(self.collection.find({"date": {"$gte": start, "$lt": end}}))


class BudgetStore(DocumentStore):
    def find_all(self, month: str | None = None) -> list[Document]:
        query: Document = {"month": month} if month else {}
        return list(self.collection.find(query))

    def find_slot(self, category: str, month: str, exclude: ObjectId | None = None) -> Document | None:
        query: Document = {"category": category, "month": month}
        if exclude is not None:
            query["_id"] = {"$ne": exclude}
        return self.collection.find_one(query)
