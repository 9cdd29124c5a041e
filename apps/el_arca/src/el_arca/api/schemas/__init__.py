"""API request and response schemas."""

from el_arca.api.schemas.chapters import ChaptersListResponse
from el_arca.api.schemas.debts import (
    BatchSummaryListResponse,
    ChapterSummaryListResponse,
    DebtListResponse,
    DebtResponse,
)
from el_arca.api.schemas.distributions import (
    CommitDistributionRequest,
    CommitDistributionResponse,
    PreviewDistributionResponse,
)

__all__ = [
    "BatchSummaryListResponse",
    "ChapterSummaryListResponse",
    "ChaptersListResponse",
    "CommitDistributionRequest",
    "CommitDistributionResponse",
    "DebtListResponse",
    "DebtResponse",
    "PreviewDistributionResponse",
]
