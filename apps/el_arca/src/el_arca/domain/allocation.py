"""Proportional split of a total amount across a chapter roster.

Each chapter receives ``total / total_members * member_count`` rounded to the
cent with HALF_UP. Whatever the per-row rounding leaves over (positive or
negative) is added to the first roster entry, so the shares always add up to
the exact total. Which chapter absorbs the difference changes what chapters
owe; keep the first-entry rule unless that change is agreed on.
"""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from el_arca.domain.errors import (
    InvalidInputError,
    NoActiveChaptersError,
    NoMembersError,
    compose_error_message,
)
from el_arca.domain.money import has_cent_precision, quantize_money

ZERO = Decimal("0.00")


@dataclass(frozen=True, slots=True)
class RosterEntry:
    """One chapter as seen by the allocator."""

    id: Hashable
    member_count: int


@dataclass(frozen=True, slots=True)
class Allocation:
    """Share assigned to one roster entry."""

    id: Hashable
    amount: Decimal


def total_members(roster: Sequence[RosterEntry]) -> int:
    return sum(entry.member_count for entry in roster)


def _validate(total_amount: Decimal, roster: Sequence[RosterEntry]) -> int:
    if total_amount <= ZERO:
        raise InvalidInputError(
            message=compose_error_message(
                cause="Total amount must be greater than zero.",
                action="Provide a positive amount.",
            ),
            details={"total_amount": str(total_amount)},
        )
    if not has_cent_precision(total_amount):
        raise InvalidInputError(
            message=compose_error_message(
                cause="Total amount has more than two decimal places.",
                action="Round the amount to cents and try again.",
            ),
            details={"total_amount": str(total_amount)},
        )
    if not roster:
        raise NoActiveChaptersError()

    members = total_members(roster)
    if members <= 0:
        raise NoMembersError(details={"total_chapters": len(roster)})

    for entry in roster:
        if entry.member_count < 1:
            raise InvalidInputError(
                message=compose_error_message(
                    cause="An active chapter has no members registered.",
                    action="Update the chapter member count or deactivate it.",
                ),
                details={
                    "chapter_id": str(entry.id),
                    "member_count": entry.member_count,
                },
            )
    return members


def allocate(
    total_amount: Decimal,
    roster: Sequence[RosterEntry],
) -> list[Allocation]:
    """Split ``total_amount`` proportionally to member counts.

    The result keeps roster order and always sums to ``total_amount``.
    """

    members = _validate(total_amount, roster)
    cost_per_member = total_amount / Decimal(members)

    amounts = [
        quantize_money(cost_per_member * Decimal(entry.member_count))
        for entry in roster
    ]
    remainder = total_amount - sum(amounts, ZERO)
    if remainder != ZERO:
        amounts[0] = amounts[0] + remainder
        if amounts[0] < ZERO:
            raise InvalidInputError(
                message=compose_error_message(
                    cause="Total amount is too small to split across the roster.",
                    action="Increase the total amount.",
                ),
                details={
                    "total_amount": str(total_amount),
                    "total_chapters": len(roster),
                },
            )

    return [
        Allocation(id=entry.id, amount=amount)
        for entry, amount in zip(roster, amounts, strict=True)
    ]
