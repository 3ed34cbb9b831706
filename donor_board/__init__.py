"""Donor leaderboard pipeline: normalization, ranking, search and reveal."""

from .aggregate import Aggregate, count_up_frames, summarize
from .coercion import coerce_amount, coerce_date, format_money
from .config import Settings
from .donors import Donor, normalize_donors
from .identity import SocialIdentity, normalize_social
from .loader import DataLoadError, fetch_payload
from .reveal import Paginator, RevealController, RevealStatus
from .session import LeaderboardSession
from .view import apply_filter, build_view, sort_donors, top_donors

__all__ = [
    "Aggregate",
    "coerce_amount",
    "coerce_date",
    "count_up_frames",
    "DataLoadError",
    "Donor",
    "fetch_payload",
    "format_money",
    "LeaderboardSession",
    "normalize_donors",
    "normalize_social",
    "Paginator",
    "RevealController",
    "RevealStatus",
    "Settings",
    "SocialIdentity",
    "apply_filter",
    "build_view",
    "sort_donors",
    "summarize",
    "top_donors",
]
