"""Schemas for distribution preview and commit endpoints."""

from __future__ import annotations

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from el_arca.db.models.debt import DebtCategory, DebtType
from el_arca.domain.money import format_money, parse_amount
from el_arca.services.distribution_service import (
    CommitDistributionInput,
    CommitDistributionResult,
    DistributionPlan,
    DistributionPlanItem,
)

MONEY_INPUT_PATTERN = r"^[0-9]+(\.[0-9]{1,2})?$"
MONEY_OUTPUT_PATTERN = r"^-?[0-9]+\.[0-9]{2}$"


class DistributionItemResponse(BaseModel):
    """Share assigned to one chapter."""

    chapter_id: UUID
    chapter_name: str
    members: int = Field(ge=0)
    assigned_amount: str = Field(pattern=MONEY_OUTPUT_PATTERN)

    @classmethod
    def from_item(cls, item: DistributionPlanItem) -> DistributionItemResponse:
        return cls(
            chapter_id=item.chapter_id,
            chapter_name=item.chapter_name,
            members=item.member_count,
            assigned_amount=format_money(item.assigned_amount),
        )


class PreviewDistributionResponse(BaseModel):
    """Distribution plan shown before debts are created."""

    total_amount: str = Field(pattern=MONEY_OUTPUT_PATTERN)
    total_chapters: int = Field(ge=0)
    total_members: int = Field(ge=0)
    cost_per_member: str = Field(pattern=MONEY_OUTPUT_PATTERN)
    distribution: list[DistributionItemResponse]

    @classmethod
    def from_plan(cls, plan: DistributionPlan) -> PreviewDistributionResponse:
        return cls(
            total_amount=format_money(plan.total_amount),
            total_chapters=plan.total_chapters,
            total_members=plan.total_members,
            cost_per_member=format_money(plan.cost_per_member),
            distribution=[DistributionItemResponse.from_item(i) for i in plan.items],
        )


class CommitDistributionRequest(BaseModel):
    """Payload for creating a batch of debts across active chapters."""

    total_amount: str = Field(pattern=MONEY_INPUT_PATTERN)
    due_date: date
    debt_type: DebtType
    description: str = Field(min_length=1, max_length=500)
    category: DebtCategory
    bank_name: str = Field(min_length=1, max_length=120)
    bank_clabe: str | None = Field(default=None, max_length=32)
    bank_account: str | None = Field(default=None, max_length=32)
    bank_holder: str = Field(min_length=1, max_length=160)

    @field_validator("description", "bank_name", "bank_holder")
    @classmethod
    def validate_required_text(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("Field cannot be blank.")
        return trimmed

    @field_validator("bank_clabe", "bank_account")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        trimmed = value.strip()
        return trimmed or None

    def to_input(self) -> CommitDistributionInput:
        return CommitDistributionInput(
            total_amount=parse_amount(self.total_amount),
            due_date=self.due_date,
            debt_type=self.debt_type,
            description=self.description,
            category=self.category,
            bank_name=self.bank_name,
            bank_holder=self.bank_holder,
            bank_clabe=self.bank_clabe,
            bank_account=self.bank_account,
        )


class CommitDistributionResponse(BaseModel):
    """Summary of the created debt batch."""

    batch_id: UUID
    debts_created: int = Field(ge=0)
    debt_ids: list[UUID]
    total_amount: str = Field(pattern=MONEY_OUTPUT_PATTERN)
    cost_per_member: str = Field(pattern=MONEY_OUTPUT_PATTERN)

    @classmethod
    def from_result(
        cls, result: CommitDistributionResult
    ) -> CommitDistributionResponse:
        return cls(
            batch_id=result.batch_id,
            debts_created=result.debts_created,
            debt_ids=list(result.debt_ids),
            total_amount=format_money(result.total_amount),
            cost_per_member=format_money(result.cost_per_member),
        )
