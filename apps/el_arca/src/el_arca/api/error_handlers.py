"""Global API exception handlers producing the ``{code, message, details}`` shape."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from el_arca.domain.errors import DomainError, compose_error_message

logger = logging.getLogger(__name__)

CONSTRAINT_MESSAGES: dict[str, tuple[str, str]] = {
    "ck_arca_debts_bank_reference_present": (
        "A debt was stored without CLABE or account number.",
        "Send bank_clabe or bank_account.",
    ),
    "ck_arca_debts_amount_non_negative": (
        "A debt amount was negative.",
        "Check the total amount and the chapter roster.",
    ),
    "fk_arca_debts_chapter_id": (
        "A debt points to a chapter that no longer exists.",
        "Reload the active chapters and retry.",
    ),
}


def _error_payload(code: str, message: str, details: dict[str, Any]) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "code": code,
        "message": message,
    }
    if details:
        payload["details"] = details
    return payload


async def handle_domain_error(_: Request, exc: DomainError) -> JSONResponse:
    """Serialize domain error to the public error shape."""

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_payload(exc.code, exc.message, jsonable_encoder(exc.details)),
    )


async def handle_validation_error(
    _: Request, exc: RequestValidationError
) -> JSONResponse:
    """Map request validation failures to HTTP 400."""

    return JSONResponse(
        status_code=HTTPStatus.BAD_REQUEST,
        content=_error_payload(
            code="INVALID_INPUT",
            message=compose_error_message(
                cause="Request payload validation failed.",
                action="Fix the invalid fields and send the request again.",
            ),
            details={"errors": jsonable_encoder(exc.errors())},
        ),
    )


async def handle_integrity_error(_: Request, exc: IntegrityError) -> JSONResponse:
    """Translate persistence integrity errors that escaped the services."""

    error_text = str(exc.orig)
    logger.warning("integrity_error", extra={"error": error_text})
    constraint = next(
        (name for name in CONSTRAINT_MESSAGES if name in error_text),
        None,
    )
    cause, action = CONSTRAINT_MESSAGES.get(
        constraint or "",
        (
            "A persistence constraint was violated.",
            "Review request data consistency and retry.",
        ),
    )
    return JSONResponse(
        status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
        content=_error_payload(
            code="PERSISTENCE_FAILURE",
            message=compose_error_message(cause=cause, action=action),
            details={"constraint": constraint} if constraint else {},
        ),
    )


async def handle_unexpected_error(_: Request, exc: Exception) -> JSONResponse:
    """Serialize unexpected failures with generic message."""

    logger.exception("unexpected_error", exc_info=exc)
    return JSONResponse(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        content=_error_payload(
            code="INTERNAL_SERVER_ERROR",
            message=compose_error_message(
                cause="An unexpected internal error occurred.",
                action="Retry later or contact support if the error persists.",
            ),
            details={"error_type": type(exc).__name__},
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach all global handlers to the FastAPI application."""

    app.add_exception_handler(DomainError, cast(Any, handle_domain_error))
    app.add_exception_handler(
        RequestValidationError, cast(Any, handle_validation_error)
    )
    app.add_exception_handler(IntegrityError, cast(Any, handle_integrity_error))
    app.add_exception_handler(Exception, handle_unexpected_error)
