"""Debt distribution routes: preview and commit."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from el_arca.api.dependencies import get_admin_actor, get_distribution_service
from el_arca.api.schemas.distributions import (
    MONEY_INPUT_PATTERN,
    CommitDistributionRequest,
    CommitDistributionResponse,
    PreviewDistributionResponse,
)
from el_arca.domain.actor import Actor
from el_arca.domain.money import parse_amount
from el_arca.services.distribution_service import DistributionService

router = APIRouter(prefix="/debts", tags=["Distributions"])


@router.get(
    "/preview-distribution",
    response_model=PreviewDistributionResponse,
    responses={
        400: {"description": "Invalid amount"},
        401: {"description": "Missing identity"},
        403: {"description": "Administrators only"},
        404: {"description": "No active chapters"},
        422: {"description": "Active chapters have no members"},
    },
)
def preview_distribution(
    total_amount: Annotated[str, Query(pattern=MONEY_INPUT_PATTERN)],
    actor: Annotated[Actor, Depends(get_admin_actor)],
    service: Annotated[DistributionService, Depends(get_distribution_service)],
) -> PreviewDistributionResponse:
    """Show how the amount would be split across active chapters."""

    plan = service.preview_distribution(parse_amount(total_amount), actor=actor)
    return PreviewDistributionResponse.from_plan(plan)


@router.post(
    "/batch",
    response_model=CommitDistributionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid payload"},
        401: {"description": "Missing identity"},
        403: {"description": "Administrators only"},
        404: {"description": "No active chapters"},
        422: {"description": "Active chapters have no members"},
        503: {"description": "Debts could not be stored"},
    },
)
def commit_distribution(
    payload: CommitDistributionRequest,
    actor: Annotated[Actor, Depends(get_admin_actor)],
    service: Annotated[DistributionService, Depends(get_distribution_service)],
) -> CommitDistributionResponse:
    """Recompute the split and create one pending debt per active chapter."""

    result = service.commit_distribution(payload.to_input(), actor=actor)
    return CommitDistributionResponse.from_result(result)
