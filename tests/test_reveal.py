from __future__ import annotations

import pytest

from donor_board.donors import normalize_donors
from donor_board.reveal import Paginator, RevealController, RevealStatus


def _donors(count: int):  # type: ignore[no-untyped-def]
    return normalize_donors(
        [{"name": f"donor {index}", "amount": 1000 - index} for index in range(count)]
    )


def test_batches_advance_until_the_tail_then_stop() -> None:
    controller = RevealController(view=_donors(5), batch_size=2)

    counts = []
    for _ in range(4):
        controller.append_next_batch()
        counts.append(controller.visible_count)

    assert counts == [2, 4, 5, 5]
    assert [donor.rank for donor in controller.materialized] == [1, 2, 3, 4, 5]


def test_nested_append_during_materialization_is_ignored() -> None:
    received = []
    controller = RevealController(view=_donors(6), batch_size=2)

    def on_batch(chunk, start) -> None:  # type: ignore[no-untyped-def]
        received.extend(chunk)
        assert controller.is_appending
        assert controller.append_next_batch() == ()
        assert controller.on_sentinel(0) == ()

    controller.on_batch = on_batch
    controller.append_next_batch()
    controller.load_more()

    assert controller.visible_count == 4
    assert [donor.rank for donor in received] == [1, 2, 3, 4]
    assert len(set(controller.materialized)) == len(controller.materialized)


def test_redundant_triggers_never_duplicate_donors() -> None:
    controller = RevealController(view=_donors(5), batch_size=2)

    for _ in range(10):
        controller.load_more()
        controller.on_sentinel(10)

    assert [donor.rank for donor in controller.materialized] == [1, 2, 3, 4, 5]


def test_reset_materializes_first_batch_and_reports_status() -> None:
    statuses: list[RevealStatus] = []
    controller = RevealController(batch_size=3, on_status=statuses.append)

    controller.set_view(_donors(4))

    assert controller.visible_count == 3
    assert statuses[0] == RevealStatus(total=4, shown=0, load_more_visible=True, load_zone_visible=True)
    assert statuses[-1] == RevealStatus(total=4, shown=3, load_more_visible=True, load_zone_visible=True)

    controller.append_next_batch()
    assert statuses[-1].load_more_visible is False
    assert statuses[-1].done

    controller.set_view(())
    assert controller.materialized == ()
    assert statuses[-1] == RevealStatus(total=0, shown=0, load_more_visible=False, load_zone_visible=False)


def test_changing_batch_size_resets_the_list() -> None:
    controller = RevealController(batch_size=2)
    controller.set_view(_donors(10))
    controller.append_next_batch()
    assert controller.visible_count == 4

    controller.set_batch_size(5)

    assert controller.visible_count == 5
    assert [donor.rank for donor in controller.materialized] == [1, 2, 3, 4, 5]


def test_sentinel_only_triggers_inside_lookahead_margin() -> None:
    controller = RevealController(view=_donors(5), batch_size=2, lookahead_px=320)

    assert controller.on_sentinel(900) == ()
    assert controller.on_sentinel(None) == ()
    assert len(controller.on_sentinel(320)) == 2
    assert len(controller.on_sentinel(-40)) == 2


@pytest.mark.parametrize("size", [0, -1, True, "12"])
def test_invalid_batch_size_is_rejected(size) -> None:  # type: ignore[no-untyped-def]
    with pytest.raises(ValueError):
        RevealController(batch_size=size)
    with pytest.raises(ValueError):
        Paginator(page_size=size)


def test_paginator_moves_between_clamped_pages() -> None:
    paginator = Paginator(_donors(5), page_size=2)

    assert paginator.page_count == 3
    assert [donor.rank for donor in paginator.items] == [1, 2]
    assert paginator.has_prev is False

    assert paginator.prev_page() == 1
    assert paginator.next_page() == 2
    assert paginator.next_page() == 3
    assert paginator.next_page() == 3
    assert [donor.rank for donor in paginator.items] == [5]
    assert paginator.has_next is False

    paginator.set_view(_donors(1))
    assert paginator.page == 1
    assert paginator.page_count == 1

    paginator.set_view(())
    assert paginator.page_count == 1
    assert paginator.items == ()
