"""API dependency providers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from el_arca.db.session import get_db_session
from el_arca.domain.actor import Actor, ActorRole
from el_arca.domain.errors import UnauthenticatedError, compose_error_message
from el_arca.repositories.chapter_repository import ChapterRepository
from el_arca.repositories.debt_repository import DebtRepository
from el_arca.services.debt_service import DebtService
from el_arca.services.distribution_service import DistributionService


def get_current_actor(
    x_actor_id: Annotated[str | None, Header()] = None,
    x_actor_role: Annotated[str | None, Header()] = None,
) -> Actor:
    """Build the caller identity forwarded by the authenticating gateway."""

    user_id = (x_actor_id or "").strip()
    if not user_id or not x_actor_role:
        raise UnauthenticatedError()
    try:
        role = ActorRole(x_actor_role.strip().lower())
    except ValueError as exc:
        raise UnauthenticatedError(
            message=compose_error_message(
                cause="The request carries an unknown user role.",
                action="Sign in again and retry.",
            ),
            details={"role": x_actor_role},
        ) from exc
    return Actor(user_id=user_id, role=role)


def get_admin_actor(
    actor: Annotated[Actor, Depends(get_current_actor)],
) -> Actor:
    """Reject callers that are not administrators."""

    return actor.require_admin()


def get_chapter_repository(
    session: Annotated[Session, Depends(get_db_session)],
) -> ChapterRepository:
    """Build chapter repository with per-request session."""

    return ChapterRepository(session)


def get_distribution_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> DistributionService:
    """Build distribution service with per-request session."""

    return DistributionService(
        chapter_repository=ChapterRepository(session),
        debt_repository=DebtRepository(session),
        session=session,
    )


def get_debt_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> DebtService:
    """Build debt service with per-request session."""

    return DebtService(debt_repository=DebtRepository(session), session=session)
