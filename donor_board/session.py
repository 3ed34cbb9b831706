"""Per-page session state tying the leaderboard pipeline together."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Callable, Sequence

from .aggregate import EMPTY_AGGREGATE, Aggregate, summarize
from .coercion import coerce_amount
from .config import Settings
from .donors import Donor, DonorLabels, normalize_donors
from .events import (
    BATCH_SIZE,
    CLEAR_SEARCH,
    LOAD_MORE,
    PAGE_NEXT,
    PAGE_PREV,
    SEARCH,
    SENTINEL,
    SORT,
    Debouncer,
    EventBus,
)
from .loader import DataLoadError, fetch_payload
from .reveal import BatchSink, Paginator, RevealController, StatusSink
from .view import DEFAULT_SORT, SORT_MODES, build_view, normalize_query, top_donors


logger = logging.getLogger(__name__)

STATE_PENDING = "pending"
STATE_READY = "ready"
STATE_FAILED = "failed"

DISPLAY_LOADING = "loading"
DISPLAY_FAILED = "failed"
DISPLAY_EMPTY = "empty"
DISPLAY_NO_MATCHES = "no_matches"
DISPLAY_READY = "ready"


class LeaderboardSession:
    """Donors, view state and reveal progress for one page session.

    Everything derived from a payload is rebuilt on each :meth:`load`, and
    user controls reach the session only through :attr:`bus`.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        on_batch: BatchSink | None = None,
        on_status: StatusSink | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.settings = settings or Settings()
        self.labels = DonorLabels(
            anonymous=self.settings.anonymous_label,
            unnamed=self.settings.unnamed_label,
        )
        self.bus = EventBus()
        self.reveal = RevealController(
            batch_size=self.settings.batch_size,
            lookahead_px=self.settings.scroll_lookahead_px,
            on_batch=on_batch,
            on_status=on_status,
        )
        self.paginator = Paginator(page_size=self.settings.batch_size)
        self.search_debouncer = Debouncer(
            self.search,
            delay=self.settings.search_debounce_seconds,
            clock=clock,
        )

        self.state = STATE_PENDING
        self.error: str | None = None
        self.donors: tuple[Donor, ...] = ()
        self.filtered_view: Sequence[Donor] = ()
        self.aggregate: Aggregate = EMPTY_AGGREGATE
        self.query = ""
        self.sort_by = self.settings.sort_by if self.settings.sort_by in SORT_MODES else DEFAULT_SORT

        self._subscribe()

    def _subscribe(self) -> None:
        self.bus.subscribe(SEARCH, self.search_debouncer)
        self.bus.subscribe(CLEAR_SEARCH, self.clear_search)
        self.bus.subscribe(BATCH_SIZE, self.set_batch_size)
        self.bus.subscribe(SORT, self.set_sort)
        self.bus.subscribe(LOAD_MORE, self.reveal.load_more)
        self.bus.subscribe(SENTINEL, self.reveal.on_sentinel)
        self.bus.subscribe(PAGE_NEXT, self.paginator.next_page)
        self.bus.subscribe(PAGE_PREV, self.paginator.prev_page)

    @property
    def batch_size(self) -> int:
        return self.reveal.batch_size

    @property
    def visible_count(self) -> int:
        return self.reveal.visible_count

    def load(self, source: str | Path | None = None, base_dir: str | Path | None = None) -> bool:
        """Fetch and normalize the payload; returns ``False`` on a failed load."""
        self.state = STATE_PENDING
        try:
            payload = fetch_payload(source or self.settings.data_source, base_dir=base_dir)
        except DataLoadError as exc:
            logger.exception("Donor data unavailable")
            self.fail(str(exc))
            return False
        self.load_payload(payload)
        return True

    def load_payload(self, payload: Any) -> None:
        if not isinstance(payload, list):
            logger.warning("Donor payload is %s, not a list", type(payload).__name__)
            payload = []

        self.error = None
        self.donors = normalize_donors(payload, labels=self.labels)
        self.aggregate = summarize(self.donors)
        self.state = STATE_READY
        logger.info(
            "Loaded %d donors pledging %d in total",
            self.aggregate.count,
            self.aggregate.total,
        )
        self._refresh_view()

    def fail(self, message: str) -> None:
        self.state = STATE_FAILED
        self.error = message
        self.donors = ()
        self.aggregate = EMPTY_AGGREGATE
        self._refresh_view()

    def _refresh_view(self) -> None:
        self.filtered_view = build_view(self.donors, self.query, self.sort_by)
        self.paginator.set_view(self.filtered_view)
        self.reveal.set_view(self.filtered_view)

    def search(self, text: Any) -> None:
        self.query = normalize_query(text if isinstance(text, str) else "")
        self._refresh_view()

    def clear_search(self, _payload: object = None) -> None:
        # Supersede any pending keystroke so it cannot fire after the clear.
        self.search_debouncer("")
        self.search_debouncer.flush()

    def set_sort(self, sort_by: Any) -> None:
        self.sort_by = sort_by if sort_by in SORT_MODES else DEFAULT_SORT
        self._refresh_view()

    def set_batch_size(self, value: Any) -> None:
        batch_size = coerce_amount(value) or self.settings.batch_size
        self.paginator.set_page_size(batch_size)
        self.reveal.set_batch_size(batch_size)

    def podium(self) -> tuple[Donor, ...]:
        return top_donors(self.donors, self.settings.podium_size)

    def display_state(self) -> str:
        if self.state == STATE_PENDING:
            return DISPLAY_LOADING
        if self.state == STATE_FAILED:
            return DISPLAY_FAILED
        if not self.donors:
            return DISPLAY_EMPTY
        if not self.filtered_view:
            return DISPLAY_NO_MATCHES
        return DISPLAY_READY
