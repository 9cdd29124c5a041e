"""Chapter ORM model."""

from __future__ import annotations

from uuid import UUID, uuid4

from sqlalchemy import Boolean, CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from el_arca.db.base import Base, TimestampMixin


class Chapter(TimestampMixin, Base):
    """Regional chapter of the federation; debts are split across them."""

    __tablename__ = "arca_chapters"
    __table_args__ = (
        CheckConstraint(
            "member_count >= 0", name="ck_arca_chapters_member_count_non_negative"
        ),
    )

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    regional: Mapped[str | None] = mapped_column(String(60), nullable=True)
    member_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default="true",
    )
