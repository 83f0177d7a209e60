"""Error Handlers — map failures to the admin API envelope, fail open on function runs.

Invariants:
    - Every error response body is HideCodError.to_response() (one envelope shape)
    - Requests under FUNCTION_RUN_PREFIX never see an error: they get 200 + NO_CHANGES,
      so a checkout host calling over HTTP is never blocked
    - 4xx-class errors log at WARNING, CRITICAL errors at ERROR with traceback
    - Throttled Admin API calls surface Retry-After (seconds) to the client

Design Decisions:
    - Pydantic/JSON errors converted to InvalidRequestError and unknown exceptions to
      UnexpectedError before rendering, so the renderer only knows HideCodError
"""

import logging
import math

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from hidecod.core.domain_types import NO_CHANGES
from hidecod.core.errors import (
    ErrorSeverity,
    HideCodError,
    InvalidRequestError,
    ShopifyUserError,
    UnexpectedError,
)
from hidecod.core.run_input import encode_decision

logger = logging.getLogger(__name__)

FUNCTION_RUN_PREFIX = "/api/v1/function/"


def register_error_handlers(app: FastAPI) -> None:
    """Register domain, validation, and catch-all handlers on the app."""
    app.add_exception_handler(HideCodError, _handle_domain_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)


async def _handle_domain_error(request: Request, exc: HideCodError):
    return _render(request, exc)


async def _handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"] if loc != "body") or "body",
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    return _render(request, InvalidRequestError(details))


async def _handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=exc,
        extra={"path": request.url.path},
    )
    return _render(request, UnexpectedError(), already_logged=True)


def _render(
    request: Request, exc: HideCodError, already_logged: bool = False,
) -> JSONResponse:
    path = request.url.path
    if path.startswith(FUNCTION_RUN_PREFIX):
        logger.warning(
            f"Function run failed open: {exc.message}",
            extra={"error_code": exc.code, "path": path},
        )
        return JSONResponse(status_code=200, content=encode_decision(NO_CHANGES))

    if not already_logged:
        _log(exc, path)
    headers = {}
    if exc.context.retry_after_ms:
        headers["Retry-After"] = str(math.ceil(exc.context.retry_after_ms / 1000))
    return JSONResponse(
        status_code=exc.http_status, content=exc.to_response(), headers=headers,
    )


def _log(exc: HideCodError, path: str) -> None:
    extra = {
        "error_code": exc.code,
        "path": path,
        "status_code": exc.http_status,
        "customization_id": exc.context.customization_id,
        "operation": exc.context.operation,
    }
    if isinstance(exc, ShopifyUserError):
        extra["user_errors"] = len(exc.user_errors)
    if exc.severity == ErrorSeverity.CRITICAL:
        logger.error(exc.message, extra=extra)
    else:
        logger.warning(exc.message, extra=extra)
