"""Named event sources and search debouncing for the leaderboard session."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable


logger = logging.getLogger(__name__)

SEARCH = "search"
CLEAR_SEARCH = "clear_search"
BATCH_SIZE = "batch_size"
SORT = "sort"
LOAD_MORE = "load_more"
SENTINEL = "sentinel"
PAGE_NEXT = "page_next"
PAGE_PREV = "page_prev"

EVENT_NAMES = (
    SEARCH,
    CLEAR_SEARCH,
    BATCH_SIZE,
    SORT,
    LOAD_MORE,
    SENTINEL,
    PAGE_NEXT,
    PAGE_PREV,
)

Handler = Callable[[Any], None]


class EventBus:
    """Routes typed user events, each carrying one payload value, to handlers."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = {}

    def subscribe(self, event_name: str, handler: Handler) -> Callable[[], None]:
        if event_name not in EVENT_NAMES:
            raise ValueError(f"Unknown event: {event_name}")
        handlers = self._handlers.setdefault(event_name, [])
        handlers.append(handler)

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def emit(self, event_name: str, payload: Any = None) -> None:
        handlers = list(self._handlers.get(event_name, ()))
        if not handlers:
            logger.debug("No handler subscribed to %s", event_name)
        for handler in handlers:
            handler(payload)


class Debouncer:
    """Coalesce rapid calls so ``fn`` runs once per quiet period.

    Each call cancels the pending one and restarts the delay. The pending call
    runs on the first :meth:`poll` after the delay has elapsed.
    """

    def __init__(
        self,
        fn: Callable[[Any], None],
        delay: float = 0.18,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.fn = fn
        self.delay = delay
        self._clock = clock
        self._deadline: float | None = None
        self._value: Any = None

    @property
    def pending(self) -> bool:
        return self._deadline is not None

    def __call__(self, value: Any) -> None:
        self._value = value
        self._deadline = self._clock() + self.delay

    def poll(self) -> bool:
        if self._deadline is None or self._clock() < self._deadline:
            return False
        return self.flush()

    def flush(self) -> bool:
        if self._deadline is None:
            return False
        value = self._value
        self._deadline = None
        self._value = None
        self.fn(value)
        return True
