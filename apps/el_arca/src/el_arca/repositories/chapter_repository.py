"""Chapter roster reads."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from el_arca.db.models.chapter import Chapter


class ChapterRepository:
    """Repository for the active chapter roster used by distributions."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_active(self, *, lock: bool = False) -> list[Chapter]:
        """Return active chapters ordered by name.

        With ``lock`` the rows stay locked until the surrounding transaction
        ends, so a chapter cannot be deactivated while its debt is written.
        """

        statement = (
            select(Chapter)
            .where(Chapter.is_active.is_(True))
            .order_by(Chapter.name.asc())
        )
        if lock:
            statement = statement.with_for_update()
        return list(self._session.scalars(statement).all())
