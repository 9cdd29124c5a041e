"""Liveness and readiness probes."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from el_arca.db.session import get_db_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", include_in_schema=False)


@router.get("/live")
def health_live() -> dict[str, str]:
    return {"status": "alive"}


@router.get("/ready")
def health_ready(
    db_session: Annotated[Session, Depends(get_db_session)],
) -> dict[str, str]:
    """Ready once the database answers a trivial query."""

    try:
        db_session.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("database_unavailable", extra={"error": str(exc)})
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database is unavailable",
        ) from exc
    return {"status": "ready"}
