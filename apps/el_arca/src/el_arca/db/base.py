"""Declarative base, shared columns and model registration."""

from datetime import datetime
from importlib import import_module

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

ORM_MODEL_MODULES = (
    "el_arca.db.models.chapter",
    "el_arca.db.models.debt",
)


class Base(DeclarativeBase):
    """Base class for ORM models."""


class TimestampMixin:
    """Server-managed ``created_at`` / ``updated_at`` columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


def import_orm_models() -> None:
    """Import every model module so ``Base.metadata`` knows all tables."""

    for module_name in ORM_MODEL_MODULES:
        import_module(module_name)
