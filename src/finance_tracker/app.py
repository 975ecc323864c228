from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.database import Database

from finance_tracker.api.errors import register_error_handlers
from finance_tracker.api.routes import analytics, budgets, categories, health, transactions
from finance_tracker.core import settings
from finance_tracker.logger import get_logger, setup_logging
from finance_tracker.services.analytics import AnalyticsService
from finance_tracker.services.budgets import BudgetService
from finance_tracker.services.transactions import TransactionService
from finance_tracker.storage.mongo import (
    BUDGETS_COLLECTION,
    TRANSACTIONS_COLLECTION,
    BudgetStore,
    TransactionStore,
    connect,
    ensure_indexes,
)

logger = get_logger(__name__)


def install_services(app: FastAPI, database: Database, recent_limit: int | None = None) -> None:
    ensure_indexes(database)
    transaction_store = TransactionStore(database[TRANSACTIONS_COLLECTION])
    budget_store = BudgetStore(database[BUDGETS_COLLECTION])

    app.state.database = database
    app.state.transactions = TransactionService(transaction_store)
    app.state.budgets = BudgetService(budget_store)
    app.state.analytics = AnalyticsService(
        transaction_store,
        budget_store,
        recent_limit=recent_limit or settings.RECENT_TRANSACTIONS_LIMIT,
    )


def create_app(database: Database | None = None) -> FastAPI:
    """
    Build the API application.

    Without ``database`` the lifespan connects to ``MONGODB_URI`` and closes
    the client on shutdown; an injected database is used as is and left open.
    """
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Initializing services...")
        settings.log_environment()

        client = None
        db = database
        if db is None:
            client, db = connect(
                settings.MONGODB_URI,
                settings.MONGODB_DB,
                settings.MONGODB_TIMEOUT_MS,
            )
        install_services(app, db)

        logger.info("Services initialized.")
        yield
        logger.info("Service shutting down.")
        if client is not None:
            client.close()

    app = FastAPI(title="Finance Tracker", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(transactions.router)
    app.include_router(budgets.router)
    app.include_router(analytics.router)
    app.include_router(categories.router)
    app.include_router(health.router)

    return app
