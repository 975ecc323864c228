from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from finance_tracker.errors import FinanceTrackerError, InternalError
from finance_tracker.logger import get_logger

logger = get_logger(__name__)

_FIELD_LABELS = {
    "amount": "Amount",
    "date": "Date",
    "description": "Description",
    "category": "Category",
    "monthlyLimit": "Monthly limit",
    "month": "Month",
}

_LOCATION_PREFIXES = {"body", "query", "path"}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def describe_validation_errors(errors: Sequence[Any]) -> str:
    """Collapse pydantic error entries into one human readable sentence."""
    messages: list[str] = []
    for error in errors:
        error_type = error.get("type")
        if error_type == "json_invalid":
            return "Request body must be valid JSON"

        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        field = loc[-1] if loc else None
        label = _FIELD_LABELS.get(field, field) if field else "Request body"

        if error_type == "missing":
            message = f"{label} is required"
        elif error_type == "value_error":
            message = str(error.get("msg", "")).removeprefix("Value error, ")
        else:
            message = f"{label}: {error.get('msg', 'invalid value')}"

        if message not in messages:
            messages.append(message)
    return "; ".join(messages) or "Invalid request"


@contextmanager
def operation(failure_message: str) -> Iterator[None]:
    """
    Run a request handler body, turning unexpected failures into InternalError.

    Domain errors pass through untouched; anything else is logged with its
    traceback and reported to the client only as ``failure_message``.
    """
    try:
        yield
    except FinanceTrackerError:
        raise
    except Exception as exc:
        logger.exception("[API] %s.", failure_message)
        raise InternalError(failure_message) from exc


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(FinanceTrackerError)
    async def finance_error(request: Request, exc: FinanceTrackerError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("[API] %s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.debug(
                "[API] %s %s rejected (%d): %s",
                request.method,
                request.url.path,
                exc.status_code,
                exc.message,
            )
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = describe_validation_errors(exc.errors())
        logger.debug("[API] %s %s invalid: %s", request.method, request.url.path, message)
        return error_response(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("[API] %s %s raised an unhandled error.", request.method, request.url.path)
        return error_response(500, "Internal server error")
