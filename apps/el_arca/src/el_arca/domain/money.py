"""Peso amounts as Decimal values with cent precision."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from el_arca.domain.errors import InvalidInputError, compose_error_message

CENT = Decimal("0.01")


def quantize_money(value: Decimal) -> Decimal:
    """Round to the cent, halves away from zero."""

    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def has_cent_precision(value: Decimal) -> bool:
    return value.is_finite() and value == quantize_money(value)


def parse_amount(raw: str, *, field: str = "total_amount") -> Decimal:
    """Read an amount typed by a user, such as ``9000`` or ``9,000.50``.

    Thousands separators are dropped. Anything that is not a finite number
    with at most two decimals raises ``InvalidInputError``; the value is
    never rounded on the caller's behalf.
    """

    text = raw.strip().replace(",", "")
    try:
        value = Decimal(text)
    except InvalidOperation as exc:
        raise InvalidInputError(
            message=compose_error_message(
                cause=f"'{raw}' is not a valid amount.",
                action="Write the amount with digits, e.g. 9000 or 9000.50.",
            ),
            details={"field": field},
        ) from exc
    if not has_cent_precision(value):
        raise InvalidInputError(
            message=compose_error_message(
                cause="Amounts cannot carry fractions of a cent.",
                action="Use at most two decimal places.",
            ),
            details={"field": field},
        )
    return value


def format_money(value: Decimal) -> str:
    """Render money as string with exactly two decimal places."""

    return f"{quantize_money(value):.2f}"


def percentage_of(part: Decimal, whole: Decimal) -> Decimal:
    """Share of ``whole`` covered by ``part``, in percent with two decimals."""

    if whole <= 0:
        return Decimal("0.00")
    return quantize_money(part * Decimal("100") / whole)
