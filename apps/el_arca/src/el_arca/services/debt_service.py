"""Read and housekeeping operations over stored debts."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from typing import Protocol

from el_arca.db.models.debt import Debt
from el_arca.domain.actor import Actor
from el_arca.domain.calendar import today_local
from el_arca.repositories.debt_repository import (
    BatchSummary,
    ChapterSummary,
    DebtQueryFilters,
)
from el_arca.services.distribution_service import SessionProtocol

logger = logging.getLogger(__name__)


class DebtQueryRepositoryProtocol(Protocol):
    """Debt repository contract consumed by service."""

    def list_debts(self, filters: DebtQueryFilters) -> tuple[list[Debt], int]: ...

    def mark_overdue(self, today: date) -> int: ...

    def summarize_batches(self) -> list[BatchSummary]: ...

    def summarize_chapters(self) -> list[ChapterSummary]: ...


class DebtService:
    """Lists and summarizes debts and applies the overdue transition."""

    def __init__(
        self,
        *,
        debt_repository: DebtQueryRepositoryProtocol,
        session: SessionProtocol,
        today: Callable[[], date] = today_local,
    ) -> None:
        self._debt_repository = debt_repository
        self._session = session
        self._today = today

    def list_debts(self, filters: DebtQueryFilters) -> tuple[list[Debt], int]:
        return self._debt_repository.list_debts(filters)

    def summarize_batches(self) -> list[BatchSummary]:
        """Collection progress per distributed batch, for the dashboard."""

        return self._debt_repository.summarize_batches()

    def summarize_chapters(self) -> list[ChapterSummary]:
        return self._debt_repository.summarize_chapters()

    def mark_overdue_debts(self, *, actor: Actor, today: date | None = None) -> int:
        """Flag pending debts past their due date as overdue."""

        reference_day = today or self._today()
        try:
            updated = self._debt_repository.mark_overdue(reference_day)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "debts_marked_overdue",
            extra={
                "actor_id": actor.user_id,
                "reference_day": reference_day.isoformat(),
                "debts_updated": updated,
            },
        )
        return updated
