import asyncio

from fastapi import APIRouter, Request

from finance_tracker.api.schemas import HealthResponse
from finance_tracker.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    database = getattr(request.app.state, "database", None)
    if database is None:
        return HealthResponse(status="starting", database="unconfigured")
    try:
        await asyncio.to_thread(database.command, "ping")
    except Exception as exc:
        logger.warning("[HEALTH] Database ping failed: %s", exc)
        return HealthResponse(status="degraded", database="unreachable")
    return HealthResponse(status="ok", database="reachable")
