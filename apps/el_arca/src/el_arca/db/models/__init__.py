"""ORM models for the El Arca treasury."""

from el_arca.db.models.chapter import Chapter
from el_arca.db.models.debt import Debt, DebtCategory, DebtStatus, DebtType

__all__ = [
    "Chapter",
    "Debt",
    "DebtCategory",
    "DebtStatus",
    "DebtType",
]
