"""Debt ORM model: one line of a distributed batch owed by a chapter."""

from __future__ import annotations

import enum
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from el_arca.db.base import Base, TimestampMixin
from el_arca.db.models.chapter import Chapter


class DebtType(enum.StrEnum):
    """Kinds of obligation an administrator can distribute."""

    DUES = "dues"
    FINE = "fine"
    CONTRIBUTION = "contribution"


class DebtCategory(enum.StrEnum):
    """Reason the money is being collected."""

    ACCIDENT = "accident"
    PAPERWORK = "paperwork"
    ANNIVERSARY = "anniversary"
    EMERGENCY = "emergency"
    EVENT = "event"
    MAINTENANCE = "maintenance"
    OTHER = "other"


class DebtStatus(enum.StrEnum):
    """Payment status.

    ``pending`` -> ``in_review`` when a proof is uploaded, then ``approved``
    or back to ``pending`` on rejection. ``pending`` -> ``overdue`` once the
    due date passes.
    """

    PENDING = "pending"
    OVERDUE = "overdue"
    IN_REVIEW = "in_review"
    APPROVED = "approved"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class Debt(TimestampMixin, Base):
    """Obligation owed by one chapter, created in bulk by a distribution."""

    __tablename__ = "arca_debts"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_arca_debts_amount_non_negative"),
        CheckConstraint(
            "bank_clabe IS NOT NULL OR bank_account IS NOT NULL",
            name="ck_arca_debts_bank_reference_present",
        ),
        Index("ix_arca_debts_batch_id", "batch_id"),
        Index("ix_arca_debts_chapter_status", "chapter_id", "status"),
        Index("ix_arca_debts_status_due_date", "status", "due_date"),
    )

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    batch_id: Mapped[UUID] = mapped_column(nullable=False)
    chapter_id: Mapped[UUID] = mapped_column(
        ForeignKey("arca_chapters.id"),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    debt_type: Mapped[DebtType] = mapped_column(
        Enum(
            DebtType,
            name="debt_type",
            values_callable=_enum_values,
            validate_strings=True,
        ),
        nullable=False,
    )
    category: Mapped[DebtCategory] = mapped_column(
        Enum(
            DebtCategory,
            name="debt_category",
            values_callable=_enum_values,
            validate_strings=True,
        ),
        nullable=False,
    )
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[DebtStatus] = mapped_column(
        Enum(
            DebtStatus,
            name="debt_status",
            values_callable=_enum_values,
            validate_strings=True,
        ),
        nullable=False,
        default=DebtStatus.PENDING,
    )
    bank_name: Mapped[str] = mapped_column(String(120), nullable=False)
    bank_clabe: Mapped[str | None] = mapped_column(String(18), nullable=True)
    bank_account: Mapped[str | None] = mapped_column(String(16), nullable=True)
    bank_holder: Mapped[str] = mapped_column(String(160), nullable=False)
    proof_file_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    proof_uploaded_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    approved_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_by: Mapped[str | None] = mapped_column(String(64), nullable=True)

    chapter: Mapped[Chapter] = relationship(Chapter)
