"""Validation of the bank details printed on every debt of a batch."""

from __future__ import annotations

import re
from dataclasses import dataclass

from el_arca.domain.errors import InvalidInputError, compose_error_message

CLABE_PATTERN = re.compile(r"^\d{18}$")
ACCOUNT_PATTERN = re.compile(r"^\d{10,16}$")
MIN_HOLDER_LENGTH = 3


@dataclass(frozen=True, slots=True)
class BankDetails:
    """Normalized bank fields shared by the debts of one commit."""

    bank_name: str
    bank_holder: str
    bank_clabe: str | None = None
    bank_account: str | None = None


def _strip_digits(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = re.sub(r"\s", "", value)
    return cleaned or None


def normalize_bank_details(
    *,
    bank_name: str,
    bank_holder: str,
    bank_clabe: str | None = None,
    bank_account: str | None = None,
) -> BankDetails:
    """Validate bank fields and return them without surrounding blanks.

    A CLABE or an account number is mandatory. Whitespace inside either value
    is dropped before checking the digit count, so ``"0123 4567 ..."`` is
    accepted the same way the capture form accepts it.
    """

    clabe = _strip_digits(bank_clabe)
    account = _strip_digits(bank_account)
    if clabe is None and account is None:
        raise InvalidInputError(
            message=compose_error_message(
                cause="Neither a CLABE nor an account number was provided.",
                action="Provide at least the CLABE or the account number.",
            ),
            details={"fields": ["bank_clabe", "bank_account"]},
        )

    if clabe is not None and not CLABE_PATTERN.match(clabe):
        raise InvalidInputError(
            message=compose_error_message(
                cause="The CLABE must have exactly 18 digits.",
                action="Check the CLABE and try again.",
            ),
            details={"field": "bank_clabe"},
        )

    if account is not None and not ACCOUNT_PATTERN.match(account):
        raise InvalidInputError(
            message=compose_error_message(
                cause="The account number must have between 10 and 16 digits.",
                action="Check the account number and try again.",
            ),
            details={"field": "bank_account"},
        )

    name = bank_name.strip()
    if not name:
        raise InvalidInputError(
            message=compose_error_message(
                cause="The bank name is required.",
                action="Select a bank and try again.",
            ),
            details={"field": "bank_name"},
        )

    holder = bank_holder.strip()
    if len(holder) < MIN_HOLDER_LENGTH:
        raise InvalidInputError(
            message=compose_error_message(
                cause="The account holder name must have at least 3 characters.",
                action="Type the full account holder name.",
            ),
            details={"field": "bank_holder"},
        )

    return BankDetails(
        bank_name=name,
        bank_holder=holder,
        bank_clabe=clabe,
        bank_account=account,
    )
