"""Preview and commit of proportional debt distributions."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Protocol
from uuid import UUID, uuid4

from sqlalchemy.exc import SQLAlchemyError

from el_arca.core.settings import get_settings
from el_arca.db.models.chapter import Chapter
from el_arca.db.models.debt import Debt, DebtCategory, DebtStatus, DebtType
from el_arca.domain.actor import Actor
from el_arca.domain.allocation import RosterEntry, allocate
from el_arca.domain.banking import BankDetails, normalize_bank_details
from el_arca.domain.calendar import today_local
from el_arca.domain.errors import (
    DomainError,
    InvalidInputError,
    NoActiveChaptersError,
    NoMembersError,
    PersistenceFailureError,
    compose_error_message,
)
from el_arca.domain.money import quantize_money

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 5


class SessionProtocol(Protocol):
    """Subset of SQLAlchemy session APIs used by this service."""

    def commit(self) -> None: ...
    def rollback(self) -> None: ...


class ChapterRepositoryProtocol(Protocol):
    """Chapter roster contract consumed by service."""

    def list_active(self, *, lock: bool = False) -> list[Chapter]: ...


class DebtRepositoryProtocol(Protocol):
    """Debt batch persistence contract consumed by service."""

    def add_batch(self, debts: Sequence[Debt]) -> list[Debt]: ...

    def count_batch(self, batch_id: UUID) -> int: ...


@dataclass(frozen=True, slots=True)
class DistributionPlanItem:
    """Share of the total assigned to one chapter."""

    chapter_id: UUID
    chapter_name: str
    member_count: int
    assigned_amount: Decimal


@dataclass(frozen=True, slots=True)
class DistributionPlan:
    """Full distribution computed from a roster snapshot."""

    total_amount: Decimal
    total_members: int
    cost_per_member: Decimal
    items: tuple[DistributionPlanItem, ...]

    @property
    def total_chapters(self) -> int:
        return len(self.items)


@dataclass(frozen=True, slots=True)
class CommitDistributionInput:
    """Input model for creating one debt per active chapter."""

    total_amount: Decimal
    due_date: date
    debt_type: DebtType
    description: str
    category: DebtCategory
    bank_name: str
    bank_holder: str
    bank_clabe: str | None = None
    bank_account: str | None = None


@dataclass(frozen=True, slots=True)
class CommitDistributionResult:
    """Outcome of a committed distribution."""

    batch_id: UUID
    debt_ids: tuple[UUID, ...]
    total_amount: Decimal
    cost_per_member: Decimal

    @property
    def debts_created(self) -> int:
        return len(self.debt_ids)


class DistributionService:
    """Splits a total across active chapters and stores the resulting debts.

    The plan is always computed from a fresh roster read. ``commit`` never
    accepts a plan from the caller; it recomputes it under a row lock and
    writes every debt in one transaction.
    """

    def __init__(
        self,
        *,
        chapter_repository: ChapterRepositoryProtocol,
        debt_repository: DebtRepositoryProtocol,
        session: SessionProtocol,
        max_total_amount: Decimal | None = None,
        today: Callable[[], date] = today_local,
    ) -> None:
        self._chapter_repository = chapter_repository
        self._debt_repository = debt_repository
        self._session = session
        self._max_total_amount = (
            max_total_amount
            if max_total_amount is not None
            else get_settings().max_total_amount
        )
        self._today = today

    def preview_distribution(
        self, total_amount: Decimal, *, actor: Actor
    ) -> DistributionPlan:
        """Compute the plan without touching storage."""

        self._validate_total_amount(total_amount)
        plan = self._build_plan(total_amount, lock=False)
        logger.info(
            "distribution_previewed",
            extra={
                "actor_id": actor.user_id,
                "total_amount": str(plan.total_amount),
                "total_chapters": plan.total_chapters,
                "total_members": plan.total_members,
            },
        )
        return plan

    def commit_distribution(
        self, payload: CommitDistributionInput, *, actor: Actor
    ) -> CommitDistributionResult:
        """Create one pending debt per active chapter, all or nothing."""

        self._validate_total_amount(payload.total_amount)
        bank = normalize_bank_details(
            bank_name=payload.bank_name,
            bank_holder=payload.bank_holder,
            bank_clabe=payload.bank_clabe,
            bank_account=payload.bank_account,
        )
        description = self._validate_description(payload.description)
        self._validate_due_date(payload.due_date)

        batch_id = uuid4()
        try:
            plan = self._build_plan(payload.total_amount, lock=True)
            debts = [
                self._build_debt(
                    item=item,
                    payload=payload,
                    description=description,
                    bank=bank,
                    batch_id=batch_id,
                    actor=actor,
                )
                for item in plan.items
            ]
            created = self._debt_repository.add_batch(debts)
            persisted = self._debt_repository.count_batch(batch_id)
            if persisted != plan.total_chapters:
                raise PersistenceFailureError(
                    details={
                        "expected": plan.total_chapters,
                        "persisted": persisted,
                    }
                )
            self._session.commit()
        except DomainError:
            self._session.rollback()
            raise
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.warning(
                "debts_batch_rejected",
                extra={
                    "actor_id": actor.user_id,
                    "batch_id": str(batch_id),
                    "error_type": type(exc).__name__,
                },
            )
            raise PersistenceFailureError(
                details={"error_type": type(exc).__name__}
            ) from exc

        logger.info(
            "debts_batch_created",
            extra={
                "actor_id": actor.user_id,
                "batch_id": str(batch_id),
                "debts_created": len(created),
                "total_amount": str(plan.total_amount),
            },
        )
        return CommitDistributionResult(
            batch_id=batch_id,
            debt_ids=tuple(debt.id for debt in created),
            total_amount=plan.total_amount,
            cost_per_member=plan.cost_per_member,
        )

    def _build_plan(self, total_amount: Decimal, *, lock: bool) -> DistributionPlan:
        chapters = self._chapter_repository.list_active(lock=lock)
        if not chapters:
            raise NoActiveChaptersError()

        total_members = sum(chapter.member_count for chapter in chapters)
        if total_members <= 0:
            raise NoMembersError(details={"total_chapters": len(chapters)})

        allocations = allocate(
            total_amount,
            [
                RosterEntry(id=chapter.id, member_count=chapter.member_count)
                for chapter in chapters
            ],
        )
        items = tuple(
            DistributionPlanItem(
                chapter_id=chapter.id,
                chapter_name=chapter.name,
                member_count=chapter.member_count,
                assigned_amount=allocation.amount,
            )
            for chapter, allocation in zip(chapters, allocations, strict=True)
        )
        return DistributionPlan(
            total_amount=total_amount,
            total_members=total_members,
            cost_per_member=quantize_money(total_amount / Decimal(total_members)),
            items=items,
        )

    @staticmethod
    def _build_debt(
        *,
        item: DistributionPlanItem,
        payload: CommitDistributionInput,
        description: str,
        bank: BankDetails,
        batch_id: UUID,
        actor: Actor,
    ) -> Debt:
        return Debt(
            id=uuid4(),
            batch_id=batch_id,
            chapter_id=item.chapter_id,
            amount=item.assigned_amount,
            description=description,
            debt_type=payload.debt_type,
            category=payload.category,
            due_date=payload.due_date,
            status=DebtStatus.PENDING,
            bank_name=bank.bank_name,
            bank_clabe=bank.bank_clabe,
            bank_account=bank.bank_account,
            bank_holder=bank.bank_holder,
            created_by=actor.user_id,
        )

    def _validate_total_amount(self, total_amount: Decimal) -> None:
        if total_amount <= Decimal("0"):
            raise InvalidInputError(
                message=compose_error_message(
                    cause="Total amount must be greater than zero.",
                    action="Provide a positive amount.",
                ),
                details={"total_amount": str(total_amount)},
            )
        if total_amount > self._max_total_amount:
            raise InvalidInputError(
                message=compose_error_message(
                    cause="Total amount is too high.",
                    action=f"Use an amount up to {self._max_total_amount:,}.",
                ),
                details={
                    "total_amount": str(total_amount),
                    "max_total_amount": str(self._max_total_amount),
                },
            )

    @staticmethod
    def _validate_description(description: str) -> str:
        trimmed = description.strip()
        if len(trimmed) < MIN_DESCRIPTION_LENGTH:
            raise InvalidInputError(
                message=compose_error_message(
                    cause="Description must have at least 5 characters.",
                    action="Describe what the money is collected for.",
                ),
                details={"field": "description"},
            )
        return trimmed

    def _validate_due_date(self, due_date: date) -> None:
        today = self._today()
        if due_date < today:
            raise InvalidInputError(
                message=compose_error_message(
                    cause="Due date is in the past.",
                    action="Choose today or a later date.",
                ),
                details={
                    "due_date": due_date.isoformat(),
                    "today": today.isoformat(),
                },
            )
