"""Search and ordering over the canonical donor list.

Neither operation re-ranks: each donor keeps the rank it was given over the
full canonical list, so a filtered view can still show "Top #N".
"""

from __future__ import annotations

import unicodedata
from typing import Sequence

from .coercion import coerce_date
from .donors import Donor


SORT_MODES = {
    "amount-desc": "Amount (high to low)",
    "amount-asc": "Amount (low to high)",
    "date-desc": "Newest first",
    "date-asc": "Oldest first",
    "name-asc": "Name (A-Z)",
}
DEFAULT_SORT = "amount-desc"


def normalize_query(query: str | None) -> str:
    return (query or "").strip().lower()


def _search_fields(donor: Donor) -> tuple[str, ...]:
    if donor.social is None:
        return (donor.name,)
    return (
        donor.name,
        donor.social.username,
        donor.social.uid,
        donor.social.platform,
    )


def donor_matches(donor: Donor, query: str) -> bool:
    return any(query in field.lower() for field in _search_fields(donor) if field)


def apply_filter(donors: Sequence[Donor], query: str | None) -> Sequence[Donor]:
    """Return the donors matching ``query``; an empty query returns ``donors`` itself."""
    needle = normalize_query(query)
    if not needle:
        return donors
    return tuple(donor for donor in donors if donor_matches(donor, needle))


def _name_key(donor: Donor) -> tuple[str, str]:
    decomposed = unicodedata.normalize("NFD", donor.name.casefold())
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return (stripped.replace("đ", "d"), donor.name)


def sort_donors(donors: Sequence[Donor], sort_by: str = DEFAULT_SORT) -> tuple[Donor, ...]:
    if sort_by == "amount-asc":
        return tuple(sorted(donors, key=lambda donor: donor.amount))
    if sort_by == "date-desc":
        return tuple(sorted(donors, key=lambda donor: coerce_date(donor.date), reverse=True))
    if sort_by == "date-asc":
        return tuple(sorted(donors, key=lambda donor: coerce_date(donor.date)))
    if sort_by == "name-asc":
        return tuple(sorted(donors, key=_name_key))
    return tuple(sorted(donors, key=lambda donor: donor.amount, reverse=True))


def build_view(
    donors: Sequence[Donor],
    query: str | None = "",
    sort_by: str = DEFAULT_SORT,
) -> Sequence[Donor]:
    """Filter then order the canonical list for display."""
    filtered = apply_filter(donors, query)
    if sort_by == DEFAULT_SORT or sort_by not in SORT_MODES:
        # Canonical order is already amount-descending.
        return filtered
    return sort_donors(filtered, sort_by)


def top_donors(donors: Sequence[Donor], size: int = 3) -> tuple[Donor, ...]:
    """Global podium by amount, unaffected by search or the active sort mode."""
    return sort_donors(donors, DEFAULT_SORT)[:size]
