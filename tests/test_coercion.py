from __future__ import annotations

import pytest

from donor_board.coercion import coerce_amount, coerce_date, format_money, title_case


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1000", 1000),
        (500, 500),
        (" 250 ", 250),
        (99.6, 100),
        (0, 0),
        (-20, 0),
        ("abc", 0),
        ("", 0),
        (None, 0),
        (True, 0),
        ("inf", 0),
        ("nan", 0),
        ([100], 0),
        (0.2, 0),
        (10**400, 0),
        ("1" + "0" * 400, 0),
    ],
)
def test_coerce_amount_only_keeps_positive_finite_numbers(value, expected) -> None:  # type: ignore[no-untyped-def]
    assert coerce_amount(value) == expected


def test_coerce_date_reads_day_month_year_and_generic_strings() -> None:
    one_day_ms = 86_400_000

    assert coerce_date("02/01/1970") == one_day_ms
    assert coerce_date("1970-01-02") == one_day_ms
    assert coerce_date("12/03/2024") > coerce_date("11/03/2024")


def test_coerce_date_degrades_to_zero() -> None:
    assert coerce_date("") == 0
    assert coerce_date(None) == 0
    assert coerce_date(20240312) == 0
    assert coerce_date("31/02/2024") == 0
    assert coerce_date("not a date") == 0
    assert coerce_date("today") == 0
    assert coerce_date(" Now ") == 0


def test_title_case_and_money_format() -> None:
    assert title_case("nguyen VAN an") == "Nguyen Van An"
    assert format_money(1500000) == "1.500.000đ"
    assert format_money(900, suffix=" VND") == "900 VND"
