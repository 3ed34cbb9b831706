"""Canonical donor entities built from raw leaderboard records."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from .coercion import clean_text, coerce_amount, title_case
from .identity import SocialIdentity, legacy_social_fields, normalize_social


logger = logging.getLogger(__name__)

_ANONYMOUS_KEYS = ("anonymous", "is_anonymous", "isAnonymous")
_TRUE_STRINGS = {"true", "1", "yes"}


@dataclass(frozen=True)
class DonorLabels:
    anonymous: str = "Anonymous"
    unnamed: str = "No name"


@dataclass(frozen=True)
class Donor:
    name: str
    amount: int
    avatar: str
    is_anonymous: bool
    social: SocialIdentity | None
    rank: int
    date: str = ""


def _is_anonymous(record: Mapping[str, Any]) -> bool:
    for key in _ANONYMOUS_KEYS:
        value = record.get(key)
        if value is True:
            return True
        if isinstance(value, int) and not isinstance(value, bool) and value == 1:
            return True
        if isinstance(value, str) and value.strip().lower() in _TRUE_STRINGS:
            return True
    return False


def resolve_donor_social(record: Mapping[str, Any]) -> SocialIdentity | None:
    social = normalize_social(record.get("social"))
    if social is not None:
        return social
    return normalize_social(legacy_social_fields(record))


def normalize_donors(
    records: Iterable[Any],
    labels: DonorLabels | None = None,
) -> tuple[Donor, ...]:
    """Normalize raw records into donors ranked by descending amount.

    Records with a missing, zero, negative or non-numeric amount are dropped.
    Anonymous donors lose their avatar and social identity and, when unnamed,
    are labelled ``Anonymous 1``, ``Anonymous 2``... in input order.
    """
    labels = labels or DonorLabels()
    pending: list[dict[str, Any]] = []
    anonymous_count = 0
    dropped = 0

    for record in records:
        if not isinstance(record, Mapping):
            dropped += 1
            continue

        amount = coerce_amount(record.get("amount"))
        if not amount:
            dropped += 1
            continue

        raw_name = clean_text(record.get("name"))
        is_anonymous = _is_anonymous(record)

        if is_anonymous:
            if raw_name:
                name = title_case(raw_name)
            else:
                anonymous_count += 1
                name = f"{labels.anonymous} {anonymous_count}"
            avatar = ""
            social = None
        else:
            name = title_case(raw_name) if raw_name else labels.unnamed
            avatar = clean_text(record.get("avatar"))
            social = resolve_donor_social(record)

        pending.append(
            {
                "name": name,
                "amount": amount,
                "avatar": avatar,
                "is_anonymous": is_anonymous,
                "social": social,
                "date": clean_text(record.get("date")),
            }
        )

    pending.sort(key=lambda row: row["amount"], reverse=True)
    donors = tuple(
        Donor(rank=index, **row) for index, row in enumerate(pending, start=1)
    )

    logger.debug(
        "Normalized %d donors (%d dropped, %d anonymous)",
        len(donors),
        dropped,
        sum(1 for donor in donors if donor.is_anonymous),
    )
    return donors
