"""Safe coercion of amounts, dates and display text from untrusted records."""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import Any

import pandas as pd


_DMY_PATTERN = re.compile(r"^\s*(\d{1,2})/(\d{1,2})/(\d{4})\s*$")
_RELATIVE_DATES = {"now", "today", "tomorrow", "yesterday"}


def _to_number(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return math.nan
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return math.nan
        try:
            return float(stripped)
        except ValueError:
            return math.nan
    return math.nan


def coerce_amount(value: Any) -> int:
    """Return a positive integer amount, or 0 when the value is unusable."""
    number = _to_number(value)
    if not math.isfinite(number) or number <= 0:
        return 0
    amount = int(round(number))
    return amount if amount > 0 else 0


def coerce_date(value: Any) -> int:
    """Return epoch milliseconds for ``DD/MM/YYYY`` or a generic date string."""
    if not isinstance(value, str):
        return 0
    text = value.strip()
    if not text or text.lower() in _RELATIVE_DATES:
        return 0

    match = _DMY_PATTERN.match(text)
    if match:
        day, month, year = (int(part) for part in match.groups())
        try:
            parsed = datetime(year, month, day, tzinfo=timezone.utc)
        except ValueError:
            return 0
        return int(parsed.timestamp() * 1000)

    try:
        timestamp = pd.to_datetime(text, errors="coerce", utc=True)
    except (ValueError, TypeError, OverflowError):
        return 0
    if pd.isna(timestamp):
        return 0
    return int(timestamp.value // 1_000_000)


def clean_text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return ""
    return str(value).strip()


def title_case(text: str) -> str:
    words = text.lower().split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)


def format_money(amount: int, suffix: str = "đ") -> str:
    return f"{amount:,}".replace(",", ".") + suffix
