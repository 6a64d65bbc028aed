"""Error Handlers - global exception handlers for the payment instruction API.

Invariants:
    - On /payment-instructions every 400 carries the Outcome shape
      (status failed, status_code SY03, accounts []), never the error envelope
    - Elsewhere PaymentInstructionError -> structured JSON with code, message, severity
    - Elsewhere RequestValidationError -> HTTP 400 with field-level error details
    - Exception (catch-all) -> HTTP 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (PaymentInstructionError), validation (Pydantic), catch-all
    - Route check by path, not by router: handlers are app-wide in FastAPI
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from payinstruct.api.routes.payment_instructions import PAYMENT_INSTRUCTIONS_PATH
from payinstruct.core import status_messages as msg
from payinstruct.core.errors import PaymentInstructionError, ErrorSeverity
from payinstruct.core.outcome import malformed_request

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _is_payment_route(request: Request) -> bool:
    return request.url.path.rstrip("/") == PAYMENT_INSTRUCTIONS_PATH


def _rejected_request(reason: str) -> JSONResponse:
    """SY03 Outcome body for requests the payment route cannot accept."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=malformed_request(reason).to_response(),
    )


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register payment-instruction domain error handler."""

    @app.exception_handler(PaymentInstructionError)
    async def domain_error_handler(request: Request, exc: PaymentInstructionError):
        logger.error(
            f"PaymentInstructionError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        if _is_payment_route(request) and exc.http_status == status.HTTP_400_BAD_REQUEST:
            return _rejected_request(exc.message)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        details = _validation_details(exc)
        logger.warning(
            f"Validation error on {request.url.path}: {details}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        if _is_payment_route(request):
            first = details[0] if details else {"field": "", "message": "invalid"}
            return _rejected_request(
                msg.invalid_request_field(first["field"], first["message"]),
            )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Invalid request data",
                    "category": "validation",
                    "severity": ErrorSeverity.ERROR.value,
                    "details": details,
                },
            },
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _validation_details(exc: RequestValidationError) -> list[dict]:
    """Field path without the leading "body" segment, pydantic message and type."""
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"] if loc != "body"),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
