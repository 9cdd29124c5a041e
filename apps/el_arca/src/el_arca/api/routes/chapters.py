"""Chapter routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from el_arca.api.dependencies import get_chapter_repository, get_current_actor
from el_arca.api.schemas.chapters import ChaptersListResponse
from el_arca.domain.actor import Actor
from el_arca.repositories.chapter_repository import ChapterRepository

router = APIRouter(prefix="/chapters", tags=["Chapters"])


@router.get("/active", response_model=ChaptersListResponse)
def list_active_chapters(
    actor: Annotated[Actor, Depends(get_current_actor)],
    repository: Annotated[ChapterRepository, Depends(get_chapter_repository)],
) -> ChaptersListResponse:
    """List active chapters in the order used to split debts."""

    return ChaptersListResponse.from_models(repository.list_active())
