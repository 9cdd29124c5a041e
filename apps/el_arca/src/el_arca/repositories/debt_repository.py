"""Debt persistence and lookup operations."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import ColumnElement, Select, case, func, or_, select, update
from sqlalchemy.orm import Session, contains_eager

from el_arca.db.models.chapter import Chapter
from el_arca.db.models.debt import Debt, DebtStatus
from el_arca.domain.money import percentage_of, quantize_money

ZERO = Decimal("0.00")


@dataclass(frozen=True, slots=True)
class DebtQueryFilters:
    """Supported filters for debt listing."""

    chapter_id: UUID | None = None
    status: DebtStatus | None = None
    batch_id: UUID | None = None
    limit: int = 50
    offset: int = 0


@dataclass(frozen=True, slots=True)
class BatchSummary:
    """Collection progress of one distributed batch."""

    batch_id: UUID
    description: str
    due_date: date
    first_created_at: datetime
    debts_count: int
    total_amount: Decimal
    collected_amount: Decimal

    @property
    def pending_amount(self) -> Decimal:
        return self.total_amount - self.collected_amount

    @property
    def completion_percentage(self) -> Decimal:
        return percentage_of(self.collected_amount, self.total_amount)


@dataclass(frozen=True, slots=True)
class ChapterSummary:
    """Amounts owed by one chapter, split by debt status."""

    chapter_id: UUID
    chapter_name: str
    regional: str | None
    member_count: int
    total_assigned: Decimal
    total_paid: Decimal
    total_pending: Decimal
    total_overdue: Decimal
    total_in_review: Decimal

    @property
    def completion_percentage(self) -> Decimal:
        return percentage_of(self.total_paid, self.total_assigned)


class DebtRepository:
    """Repository for debt batches. Transaction control stays with callers."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def add_batch(self, debts: Sequence[Debt]) -> list[Debt]:
        """Stage every debt and flush them in one round of inserts."""

        self._session.add_all(debts)
        self._session.flush()
        return list(debts)

    def count_batch(self, batch_id: UUID) -> int:
        statement = select(func.count(Debt.id)).where(Debt.batch_id == batch_id)
        return int(self._session.scalar(statement) or 0)

    def list_debts(self, filters: DebtQueryFilters) -> tuple[list[Debt], int]:
        statement = self._apply_filters(select(Debt), filters)

        total_statement = select(func.count()).select_from(statement.subquery())
        total = int(self._session.scalar(total_statement) or 0)

        page_statement = (
            statement.join(Debt.chapter)
            .options(contains_eager(Debt.chapter))
            .order_by(Debt.due_date.asc(), Chapter.name.asc(), Debt.id.asc())
            .limit(filters.limit)
            .offset(filters.offset)
        )
        items = list(self._session.scalars(page_statement).all())
        return items, total

    def mark_overdue(self, today: date) -> int:
        """Move pending debts whose due date has passed to ``overdue``."""

        statement = (
            update(Debt)
            .where(
                Debt.status == DebtStatus.PENDING,
                Debt.due_date < today,
            )
            .values(status=DebtStatus.OVERDUE)
            .execution_options(synchronize_session=False)
        )
        result = self._session.execute(statement)
        return int(result.rowcount or 0)

    def summarize_batches(self) -> list[BatchSummary]:
        """Aggregate every batch, newest first. Approved debts count as collected."""

        first_created_at = func.min(Debt.created_at)
        statement = (
            select(
                Debt.batch_id,
                func.min(Debt.description),
                func.min(Debt.due_date),
                first_created_at,
                func.count(Debt.id),
                func.coalesce(func.sum(Debt.amount), ZERO),
                _sum_amount_with_status(DebtStatus.APPROVED),
            )
            .group_by(Debt.batch_id)
            .order_by(first_created_at.desc(), Debt.batch_id.asc())
        )

        rows = self._session.execute(statement).all()
        return [
            BatchSummary(
                batch_id=batch_id,
                description=description,
                due_date=due_date,
                first_created_at=created_at,
                debts_count=int(count),
                total_amount=quantize_money(Decimal(total)),
                collected_amount=quantize_money(Decimal(collected)),
            )
            for (
                batch_id,
                description,
                due_date,
                created_at,
                count,
                total,
                collected,
            ) in rows
        ]

    def summarize_chapters(self) -> list[ChapterSummary]:
        """Aggregate debts per chapter, ordered by chapter name.

        Active chapters without debts appear with zero totals; inactive
        chapters appear only while they still carry debts.
        """

        statement = (
            select(
                Chapter.id,
                Chapter.name,
                Chapter.regional,
                Chapter.member_count,
                func.coalesce(func.sum(Debt.amount), ZERO),
                _sum_amount_with_status(DebtStatus.APPROVED),
                _sum_amount_with_status(DebtStatus.PENDING),
                _sum_amount_with_status(DebtStatus.OVERDUE),
                _sum_amount_with_status(DebtStatus.IN_REVIEW),
            )
            .outerjoin(Debt, Debt.chapter_id == Chapter.id)
            .where(or_(Chapter.is_active.is_(True), Debt.id.is_not(None)))
            .group_by(Chapter.id, Chapter.name, Chapter.regional, Chapter.member_count)
            .order_by(Chapter.name.asc())
        )

        rows = self._session.execute(statement).all()
        return [
            ChapterSummary(
                chapter_id=chapter_id,
                chapter_name=name,
                regional=regional,
                member_count=member_count,
                total_assigned=quantize_money(Decimal(assigned)),
                total_paid=quantize_money(Decimal(paid)),
                total_pending=quantize_money(Decimal(pending)),
                total_overdue=quantize_money(Decimal(overdue)),
                total_in_review=quantize_money(Decimal(in_review)),
            )
            for (
                chapter_id,
                name,
                regional,
                member_count,
                assigned,
                paid,
                pending,
                overdue,
                in_review,
            ) in rows
        ]

    @staticmethod
    def _apply_filters(
        statement: Select[tuple[Debt]],
        filters: DebtQueryFilters,
    ) -> Select[tuple[Debt]]:
        if filters.chapter_id is not None:
            statement = statement.where(Debt.chapter_id == filters.chapter_id)
        if filters.status is not None:
            statement = statement.where(Debt.status == filters.status)
        if filters.batch_id is not None:
            statement = statement.where(Debt.batch_id == filters.batch_id)
        return statement


def _sum_amount_with_status(status: DebtStatus) -> ColumnElement[Decimal]:
    amount_case = case((Debt.status == status, Debt.amount), else_=ZERO)
    return func.coalesce(func.sum(amount_case), ZERO)
