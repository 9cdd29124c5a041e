"""Pydantic schemas for chapter endpoints."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel

from el_arca.db.models.chapter import Chapter


class ChapterResponse(BaseModel):
    """Public chapter representation."""

    id: UUID
    name: str
    regional: str | None
    member_count: int
    is_active: bool

    @classmethod
    def from_model(cls, chapter: Chapter) -> ChapterResponse:
        return cls(
            id=chapter.id,
            name=chapter.name,
            regional=chapter.regional,
            member_count=chapter.member_count,
            is_active=chapter.is_active,
        )


class ChaptersListResponse(BaseModel):
    """Active roster payload, in distribution order."""

    chapters: list[ChapterResponse]
    total_members: int

    @classmethod
    def from_models(cls, chapters: list[Chapter]) -> ChaptersListResponse:
        return cls(
            chapters=[ChapterResponse.from_model(item) for item in chapters],
            total_members=sum(item.member_count for item in chapters),
        )
