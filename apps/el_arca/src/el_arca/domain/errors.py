"""Domain exceptions used across API, CLI and services."""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any


def compose_error_message(*, cause: str, action: str) -> str:
    """Build a user-facing error message with cause and corrective action."""

    return f"Cause: {cause} Action: {action}"


@dataclass(slots=True)
class DomainError(Exception):
    """Base exception for predictable domain failures."""

    code: str
    message: str
    status_code: int
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


class InvalidInputError(DomainError):
    """Raised when caller data is malformed or out of range."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="INVALID_INPUT",
            message=message
            or compose_error_message(
                cause="Request data violates business rules.",
                action="Adjust the input fields and try again.",
            ),
            status_code=HTTPStatus.BAD_REQUEST,
            details=details or {},
        )


class NoActiveChaptersError(InvalidInputError):
    """Raised when the roster holds no active chapter to distribute over."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        DomainError.__init__(
            self,
            code="NO_ACTIVE_CHAPTERS",
            message=message
            or compose_error_message(
                cause="There are no active chapters to distribute the debt.",
                action="Activate at least one chapter and try again.",
            ),
            status_code=HTTPStatus.NOT_FOUND,
            details=details or {},
        )


class NoMembersError(InvalidInputError):
    """Raised when active chapters add up to zero members."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        DomainError.__init__(
            self,
            code="NO_MEMBERS",
            message=message
            or compose_error_message(
                cause="Active chapters have no members assigned.",
                action="Update chapter member counts and try again.",
            ),
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            details=details or {},
        )


class PersistenceFailureError(DomainError):
    """Raised when storage rejects a batch; nothing of the batch is kept."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="PERSISTENCE_FAILURE",
            message=message
            or compose_error_message(
                cause="The debts could not be stored; no debt was created.",
                action="Review the request and submit it again.",
            ),
            status_code=HTTPStatus.SERVICE_UNAVAILABLE,
            details=details or {},
        )


class UnauthenticatedError(DomainError):
    """Raised when the request carries no actor identity."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="UNAUTHENTICATED",
            message=message
            or compose_error_message(
                cause="The request has no authenticated user.",
                action="Sign in and try again.",
            ),
            status_code=HTTPStatus.UNAUTHORIZED,
            details=details or {},
        )


class ForbiddenError(DomainError):
    """Raised when the actor role cannot run the operation."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="FORBIDDEN",
            message=message
            or compose_error_message(
                cause="Only administrators can perform this operation.",
                action="Use an administrator account.",
            ),
            status_code=HTTPStatus.FORBIDDEN,
            details=details or {},
        )
