"""Debt listing, dashboard summary and overdue routes."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from el_arca.api.dependencies import get_admin_actor, get_debt_service
from el_arca.api.schemas.debts import (
    BatchSummaryListResponse,
    BatchSummaryResponse,
    ChapterSummaryListResponse,
    ChapterSummaryResponse,
    DebtListResponse,
    MarkOverdueResponse,
)
from el_arca.db.models.debt import DebtStatus
from el_arca.domain.actor import Actor
from el_arca.repositories.debt_repository import DebtQueryFilters
from el_arca.services.debt_service import DebtService

router = APIRouter(prefix="/debts", tags=["Debts"])


@router.get(
    "",
    response_model=DebtListResponse,
    responses={400: {"description": "Invalid filters"}},
)
def list_debts(
    actor: Annotated[Actor, Depends(get_admin_actor)],
    service: Annotated[DebtService, Depends(get_debt_service)],
    chapter_id: UUID | None = None,
    status: DebtStatus | None = None,
    batch_id: UUID | None = None,
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> DebtListResponse:
    """List debts ordered by due date, with optional filters."""

    items, total = service.list_debts(
        DebtQueryFilters(
            chapter_id=chapter_id,
            status=status,
            batch_id=batch_id,
            limit=limit,
            offset=offset,
        )
    )
    return DebtListResponse.from_models(
        items=items,
        total=total,
        limit=limit,
        offset=offset,
    )


@router.post("/mark-overdue", response_model=MarkOverdueResponse)
def mark_overdue_debts(
    actor: Annotated[Actor, Depends(get_admin_actor)],
    service: Annotated[DebtService, Depends(get_debt_service)],
) -> MarkOverdueResponse:
    """Move pending debts past their due date to overdue."""

    updated = service.mark_overdue_debts(actor=actor)
    return MarkOverdueResponse(debts_updated=updated)


@router.get("/summary/batches", response_model=BatchSummaryListResponse)
def summarize_batches(
    actor: Annotated[Actor, Depends(get_admin_actor)],
    service: Annotated[DebtService, Depends(get_debt_service)],
) -> BatchSummaryListResponse:
    """Collected and outstanding amounts per batch, newest first."""

    return BatchSummaryListResponse(
        batches=[
            BatchSummaryResponse.from_summary(item)
            for item in service.summarize_batches()
        ]
    )


@router.get("/summary/chapters", response_model=ChapterSummaryListResponse)
def summarize_chapters(
    actor: Annotated[Actor, Depends(get_admin_actor)],
    service: Annotated[DebtService, Depends(get_debt_service)],
) -> ChapterSummaryListResponse:
    """Debt totals per chapter, split by status."""

    return ChapterSummaryListResponse(
        chapters=[
            ChapterSummaryResponse.from_summary(item)
            for item in service.summarize_chapters()
        ]
    )
