from collections.abc import Generator

import mongomock
import pytest
from fastapi.testclient import TestClient
from pymongo.database import Database

from finance_tracker.app import create_app
from finance_tracker.storage.mongo import (
    BUDGETS_COLLECTION,
    TRANSACTIONS_COLLECTION,
    BudgetStore,
    TransactionStore,
    ensure_indexes,
)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def database() -> Database:
    db = mongomock.MongoClient()["finance_tracker_test"]
    ensure_indexes(db)
    return db


@pytest.fixture
def transaction_store(database: Database) -> TransactionStore:
    return TransactionStore(database[TRANSACTIONS_COLLECTION])


@pytest.fixture
def budget_store(database: Database) -> BudgetStore:
    return BudgetStore(database[BUDGETS_COLLECTION])


@pytest.fixture
def client(database: Database) -> Generator[TestClient, None, None]:
    app = create_app(database=database)
    with TestClient(app) as test_client:
        yield test_client
