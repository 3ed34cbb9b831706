"""Pledge totals for the leaderboard header."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Sequence

from .donors import Donor


@dataclass(frozen=True)
class Aggregate:
    total: int
    count: int


EMPTY_AGGREGATE = Aggregate(total=0, count=0)


def summarize(donors: Sequence[Donor]) -> Aggregate:
    return Aggregate(total=sum(donor.amount for donor in donors), count=len(donors))


def count_up_value(total: int, elapsed: float, duration: float = 0.65) -> int:
    """Linear count-up value after ``elapsed`` seconds of a ``duration`` animation."""
    if duration <= 0:
        return total
    progress = min(max(elapsed / duration, 0.0), 1.0)
    return round(total * progress)


def count_up_frames(total: int, duration: float = 0.65, fps: int = 30) -> Iterator[int]:
    frame_count = max(1, math.ceil(duration * fps))
    for frame in range(1, frame_count):
        yield count_up_value(total, duration * frame / frame_count, duration)
    yield total
