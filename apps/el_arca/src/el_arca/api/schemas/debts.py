"""Schemas for debt listing, dashboard summaries and housekeeping endpoints."""

from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from el_arca.api.schemas.distributions import MONEY_OUTPUT_PATTERN
from el_arca.db.models.debt import Debt, DebtCategory, DebtStatus, DebtType
from el_arca.domain.money import format_money
from el_arca.repositories.debt_repository import BatchSummary, ChapterSummary


class DebtResponse(BaseModel):
    """Serialized debt returned by API."""

    id: UUID
    batch_id: UUID
    chapter_id: UUID
    chapter_name: str
    amount: str = Field(pattern=MONEY_OUTPUT_PATTERN)
    description: str
    debt_type: DebtType
    category: DebtCategory
    due_date: date
    status: DebtStatus
    bank_name: str
    bank_clabe: str | None
    bank_account: str | None
    bank_holder: str
    proof_file_url: str | None
    proof_uploaded_at: datetime | None
    created_by: str | None
    created_at: datetime

    @classmethod
    def from_model(cls, debt: Debt) -> DebtResponse:
        return cls(
            id=debt.id,
            batch_id=debt.batch_id,
            chapter_id=debt.chapter_id,
            chapter_name=debt.chapter.name,
            amount=format_money(debt.amount),
            description=debt.description,
            debt_type=debt.debt_type,
            category=debt.category,
            due_date=debt.due_date,
            status=debt.status,
            bank_name=debt.bank_name,
            bank_clabe=debt.bank_clabe,
            bank_account=debt.bank_account,
            bank_holder=debt.bank_holder,
            proof_file_url=debt.proof_file_url,
            proof_uploaded_at=debt.proof_uploaded_at,
            created_by=debt.created_by,
            created_at=debt.created_at,
        )


class DebtListResponse(BaseModel):
    """Paginated debt list response."""

    items: list[DebtResponse]
    total: int = Field(ge=0)
    limit: int = Field(ge=1)
    offset: int = Field(ge=0)

    @classmethod
    def from_models(
        cls,
        *,
        items: list[Debt],
        total: int,
        limit: int,
        offset: int,
    ) -> DebtListResponse:
        return cls(
            items=[DebtResponse.from_model(item) for item in items],
            total=total,
            limit=limit,
            offset=offset,
        )


class MarkOverdueResponse(BaseModel):
    """Number of debts moved to overdue."""

    debts_updated: int = Field(ge=0)


class BatchSummaryResponse(BaseModel):
    """Collection progress of one batch."""

    batch_id: UUID
    description: str
    due_date: date
    first_created_at: datetime
    debts_count: int = Field(ge=0)
    total_amount: str = Field(pattern=MONEY_OUTPUT_PATTERN)
    collected_amount: str = Field(pattern=MONEY_OUTPUT_PATTERN)
    pending_amount: str = Field(pattern=MONEY_OUTPUT_PATTERN)
    completion_percentage: str = Field(pattern=MONEY_OUTPUT_PATTERN)

    @classmethod
    def from_summary(cls, summary: BatchSummary) -> BatchSummaryResponse:
        return cls(
            batch_id=summary.batch_id,
            description=summary.description,
            due_date=summary.due_date,
            first_created_at=summary.first_created_at,
            debts_count=summary.debts_count,
            total_amount=format_money(summary.total_amount),
            collected_amount=format_money(summary.collected_amount),
            pending_amount=format_money(summary.pending_amount),
            completion_percentage=format_money(summary.completion_percentage),
        )


class BatchSummaryListResponse(BaseModel):
    batches: list[BatchSummaryResponse]


class ChapterSummaryResponse(BaseModel):
    """Amounts owed by one chapter, by debt status."""

    chapter_id: UUID
    chapter_name: str
    regional: str | None
    member_count: int = Field(ge=0)
    total_assigned: str = Field(pattern=MONEY_OUTPUT_PATTERN)
    total_paid: str = Field(pattern=MONEY_OUTPUT_PATTERN)
    total_pending: str = Field(pattern=MONEY_OUTPUT_PATTERN)
    total_overdue: str = Field(pattern=MONEY_OUTPUT_PATTERN)
    total_in_review: str = Field(pattern=MONEY_OUTPUT_PATTERN)
    completion_percentage: str = Field(pattern=MONEY_OUTPUT_PATTERN)

    @classmethod
    def from_summary(cls, summary: ChapterSummary) -> ChapterSummaryResponse:
        return cls(
            chapter_id=summary.chapter_id,
            chapter_name=summary.chapter_name,
            regional=summary.regional,
            member_count=summary.member_count,
            total_assigned=format_money(summary.total_assigned),
            total_paid=format_money(summary.total_paid),
            total_pending=format_money(summary.total_pending),
            total_overdue=format_money(summary.total_overdue),
            total_in_review=format_money(summary.total_in_review),
            completion_percentage=format_money(summary.completion_percentage),
        )


class ChapterSummaryListResponse(BaseModel):
    chapters: list[ChapterSummaryResponse]
