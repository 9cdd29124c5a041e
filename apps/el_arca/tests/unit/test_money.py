from decimal import Decimal

import pytest

from el_arca.domain.errors import InvalidInputError
from el_arca.domain.money import (
    format_money,
    has_cent_precision,
    parse_amount,
    percentage_of,
    quantize_money,
)


def test_quantize_money_uses_round_half_up() -> None:
    assert quantize_money(Decimal("10.005")) == Decimal("10.01")
    assert quantize_money(Decimal("10.004")) == Decimal("10.00")


def test_format_money_has_two_decimal_places() -> None:
    assert format_money(Decimal("5")) == "5.00"


def test_has_cent_precision_rejects_fractions_of_cent() -> None:
    assert has_cent_precision(Decimal("9000"))
    assert has_cent_precision(Decimal("12.30"))
    assert not has_cent_precision(Decimal("12.305"))
    assert not has_cent_precision(Decimal("NaN"))


def test_parse_amount_accepts_thousands_separator() -> None:
    assert parse_amount(" 9,000.50 ") == Decimal("9000.50")


@pytest.mark.parametrize("raw", ["mucho", "", "12.345", "Infinity"])
def test_parse_amount_rejects_invalid_text(raw: str) -> None:
    with pytest.raises(InvalidInputError) as exc_info:
        parse_amount(raw)

    assert exc_info.value.details == {"field": "total_amount"}


def test_percentage_of_rounds_to_two_decimals() -> None:
    assert percentage_of(Decimal("100"), Decimal("140")) == Decimal("71.43")
    assert percentage_of(Decimal("5"), Decimal("0")) == Decimal("0.00")
