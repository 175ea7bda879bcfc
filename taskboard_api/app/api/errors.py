"""
Exception handlers mapping failures to JSON responses.

Every error reaches the client as ``{"message": ..., "field": ...}``
with ``field`` omitted when it does not apply.  Domain errors carry
their own status code; request validation failures become 400; any
storage failure or unexpected exception becomes a generic 500 whose
details are only logged server‑side.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.exceptions import TaskboardError
from ..schemas.error import ErrorResponse
from ..storage.base import StorageError


logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _error_response(
    status_code: int,
    message: str,
    field: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(message=message, field=field).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def taskboard_error_handler(request: Request, exc: TaskboardError) -> JSONResponse:
    """Render a domain error with the status code it carries."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error_response(exc.status_code, INTERNAL_ERROR_MESSAGE)
    return _error_response(exc.status_code, exc.message, exc.field)


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.exception("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report the first invalid input field as a 400."""
    errors = exc.errors()
    if not errors:
        return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid input")
    first: Dict[str, Any] = errors[0]
    loc = first.get("loc") or ()
    field = loc[-1] if len(loc) > 1 and isinstance(loc[-1], str) else None
    return _error_response(status.HTTP_400_BAD_REQUEST, first.get("msg", "Invalid input"), field)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskboardError, taskboard_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
