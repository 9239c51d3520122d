"""Error Handlers - global exception handlers for the roulette API.

Invariants:
    - RouletteError -> its own envelope, message already localized by the controller
    - RequestValidationError -> 400 with field-level details and a localized message
    - Exception (catch-all) -> 500, never leaks internal details
    - 503 answers (catalog fetch, store) carry a Retry-After header

Design Decisions:
    - Locale fixed at registration: one process serves one configured locale
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from splaroulette.core.domain_types import Locale
from splaroulette.core.errors import ErrorCategory, ErrorSeverity, RouletteError
from splaroulette.core.messages import internal_error_message, invalid_request_message

logger = logging.getLogger(__name__)

RETRY_AFTER_SECONDS = 30


def register_error_handlers(app: FastAPI, locale: Locale = Locale.JA) -> None:
    """Register domain, validation and catch-all handlers on the app."""

    @app.exception_handler(RouletteError)
    async def roulette_error_handler(request: Request, exc: RouletteError):
        unavailable = exc.http_status == status.HTTP_503_SERVICE_UNAVAILABLE
        log = logger.error if unavailable else logger.warning
        log(
            f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "catalog_type": exc.context.catalog_type,
                "store_key": exc.context.store_key,
            },
        )
        headers = {"Retry-After": str(RETRY_AFTER_SECONDS)} if unavailable else None
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(), headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        details = [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ]
        logger.warning(
            f"Rejected input on {request.url.path}: "
            + ", ".join(d["field"] for d in details),
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_envelope(
                "VALIDATION_ERROR", invalid_request_message(locale),
                ErrorCategory.VALIDATION, ErrorSeverity.ERROR, details=details,
            ),
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled {type(exc).__name__} on {request.url.path}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_envelope(
                "INTERNAL_ERROR", internal_error_message(locale),
                ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
            ),
        )


def _envelope(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    **extra,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **extra,
        },
    }
