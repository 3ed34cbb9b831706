"""Incremental reveal of a donor view: batches, infinite scroll and pages."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Sequence

from .donors import Donor


logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 12
DEFAULT_LOOKAHEAD_PX = 320


@dataclass(frozen=True)
class RevealStatus:
    total: int
    shown: int
    load_more_visible: bool
    load_zone_visible: bool

    @property
    def done(self) -> bool:
        return self.shown >= self.total


BatchSink = Callable[[Sequence[Donor], int], None]
StatusSink = Callable[[RevealStatus], None]


def _validate_size(value: int, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{label} must be a positive integer.")
    return value


class RevealController:
    """Materialize a view in fixed-size batches, at most one batch at a time.

    ``on_batch`` receives each materialized chunk and its start index;
    ``on_status`` receives the status after every change. Both may call back
    into the controller: a nested append while one is in progress is a no-op.
    """

    def __init__(
        self,
        view: Sequence[Donor] = (),
        batch_size: int = DEFAULT_BATCH_SIZE,
        lookahead_px: int = DEFAULT_LOOKAHEAD_PX,
        on_batch: BatchSink | None = None,
        on_status: StatusSink | None = None,
    ) -> None:
        self.view: Sequence[Donor] = view
        self.batch_size = _validate_size(batch_size, "Batch size")
        self.lookahead_px = lookahead_px
        self.visible_count = 0
        self.on_batch = on_batch
        self.on_status = on_status
        self._materialized: list[Donor] = []
        self._appending = False

    @property
    def materialized(self) -> tuple[Donor, ...]:
        return tuple(self._materialized)

    @property
    def is_appending(self) -> bool:
        return self._appending

    def status(self) -> RevealStatus:
        total = len(self.view)
        shown = min(self.visible_count, total)
        return RevealStatus(
            total=total,
            shown=shown,
            load_more_visible=not (total == 0 or shown >= total),
            load_zone_visible=total != 0,
        )

    def _publish_status(self) -> None:
        if self.on_status is not None:
            self.on_status(self.status())

    def set_view(self, view: Sequence[Donor]) -> None:
        self.view = view
        self.reset_list_and_render()

    def set_batch_size(self, batch_size: int) -> None:
        self.batch_size = _validate_size(batch_size, "Batch size")
        self.reset_list_and_render()

    def reset_list_and_render(self) -> None:
        self.visible_count = 0
        self._materialized.clear()
        self._publish_status()
        if len(self.view) > 0:
            self.append_next_batch()

    def append_next_batch(self) -> tuple[Donor, ...]:
        """Materialize the next batch; returns the donors added, if any."""
        if self._appending:
            return ()
        if self.visible_count >= len(self.view):
            return ()

        self._appending = True
        try:
            start = self.visible_count
            chunk = tuple(self.view[start : start + self.batch_size])
            self._materialized.extend(chunk)
            self.visible_count += len(chunk)
            if self.on_batch is not None:
                self.on_batch(chunk, start)
        finally:
            self._appending = False

        logger.debug("Revealed %d/%d donors", self.visible_count, len(self.view))
        self._publish_status()
        return chunk

    def load_more(self, _payload: object = None) -> tuple[Donor, ...]:
        return self.append_next_batch()

    def on_sentinel(self, distance_px: float | None) -> tuple[Donor, ...]:
        """Proximity trigger: append when the trailing sentinel nears the viewport.

        ``distance_px`` is how far below the viewport edge the sentinel sits;
        zero or negative means it is already visible.
        """
        if distance_px is None or distance_px > self.lookahead_px:
            return ()
        return self.append_next_batch()


class Paginator:
    """Page-at-a-time reveal with forward and back triggers."""

    def __init__(self, view: Sequence[Donor] = (), page_size: int = DEFAULT_BATCH_SIZE) -> None:
        self.view: Sequence[Donor] = view
        self.page_size = _validate_size(page_size, "Page size")
        self.page = 1

    @property
    def page_count(self) -> int:
        return max(1, math.ceil(len(self.view) / self.page_size))

    @property
    def items(self) -> tuple[Donor, ...]:
        start = (self.page - 1) * self.page_size
        return tuple(self.view[start : start + self.page_size])

    @property
    def has_next(self) -> bool:
        return self.page < self.page_count

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    def set_view(self, view: Sequence[Donor]) -> None:
        self.view = view
        self.page = 1

    def set_page_size(self, page_size: int) -> None:
        self.page_size = _validate_size(page_size, "Page size")
        self.page = 1

    def go_to(self, page: int) -> int:
        self.page = min(max(1, page), self.page_count)
        return self.page

    def next_page(self, _payload: object = None) -> int:
        return self.go_to(self.page + 1)

    def prev_page(self, _payload: object = None) -> int:
        return self.go_to(self.page - 1)
