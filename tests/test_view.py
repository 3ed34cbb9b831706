from __future__ import annotations

import pytest

from donor_board.donors import normalize_donors
from donor_board.view import apply_filter, build_view, sort_donors, top_donors


@pytest.fixture
def donors():  # type: ignore[no-untyped-def]
    return normalize_donors(
        [
            {"name": "nguyen van an", "amount": 5000, "date": "12/03/2024", "social": {"platform": "facebook", "username": "an.nguyen"}},
            {"name": "binh", "amount": 3000, "date": "15/03/2024", "type": "tiktok", "username": "@binhtt"},
            {"anonymous": True, "amount": 2000, "date": "10/03/2024"},
            {"name": "Đặng Châu", "amount": 1000, "date": "2024-03-20", "social": {"platform": "github", "uid": "chau-dev"}},
            {"name": "an le", "amount": 500},
        ]
    )


def test_empty_query_returns_the_same_list(donors) -> None:  # type: ignore[no-untyped-def]
    assert apply_filter(donors, "") is donors
    assert apply_filter(donors, "   ") is donors
    assert apply_filter(donors, None) is donors


def test_filter_matches_name_case_insensitively_and_keeps_rank(donors) -> None:  # type: ignore[no-untyped-def]
    matches = apply_filter(donors, "AN")

    assert [donor.name for donor in matches] == ["Nguyen Van An", "Anonymous 1", "An Le"]
    assert [donor.rank for donor in matches] == [1, 3, 5]


def test_filter_matches_resolved_social_fields(donors) -> None:  # type: ignore[no-untyped-def]
    assert [donor.rank for donor in apply_filter(donors, "tiktok")] == [2]
    assert [donor.rank for donor in apply_filter(donors, "@binh")] == [2]
    assert [donor.rank for donor in apply_filter(donors, "chau-dev")] == [4]
    assert apply_filter(donors, "zzz") == ()


def test_filtering_is_rank_preserving_for_any_query(donors) -> None:  # type: ignore[no-untyped-def]
    ranks = {donor.name: donor.rank for donor in donors}
    for query in ("a", "n", "anon", "github", "b", "1"):
        for donor in apply_filter(donors, query):
            assert donor.rank == ranks[donor.name]


def test_podium_ignores_search_and_sort(donors) -> None:  # type: ignore[no-untyped-def]
    podium = top_donors(donors)

    assert [donor.rank for donor in podium] == [1, 2, 3]
    assert top_donors(build_view(donors, "le", "amount-asc")) != podium
    assert top_donors(donors, size=1) == podium[:1]


def test_sort_modes_reorder_without_reranking(donors) -> None:  # type: ignore[no-untyped-def]
    assert [donor.rank for donor in sort_donors(donors, "amount-asc")] == [5, 4, 3, 2, 1]
    assert [donor.rank for donor in sort_donors(donors, "date-desc")] == [4, 2, 1, 3, 5]
    assert [donor.rank for donor in sort_donors(donors, "date-asc")] == [5, 3, 1, 2, 4]
    assert [donor.name for donor in sort_donors(donors, "name-asc")] == [
        "An Le",
        "Anonymous 1",
        "Binh",
        "Đặng Châu",
        "Nguyen Van An",
    ]
    assert [donor.rank for donor in sort_donors(donors, "unknown")] == [1, 2, 3, 4, 5]


def test_build_view_filters_then_sorts(donors) -> None:  # type: ignore[no-untyped-def]
    view = build_view(donors, "an", "amount-asc")

    assert [donor.rank for donor in view] == [5, 3, 1]
    assert build_view(donors, "", "amount-desc") is donors
