"""Streamlit page for the public donor leaderboard."""

from __future__ import annotations

import html
import time
from pathlib import Path

import pandas as pd
import streamlit as st

from donor_board import Donor, LeaderboardSession, Settings, count_up_frames, format_money
from donor_board.events import BATCH_SIZE, CLEAR_SEARCH, LOAD_MORE, PAGE_NEXT, PAGE_PREV, SEARCH, SORT
from donor_board.observability import setup_logging
from donor_board.session import DISPLAY_EMPTY, DISPLAY_FAILED, DISPLAY_LOADING, DISPLAY_NO_MATCHES
from donor_board.view import SORT_MODES


SETTINGS = Settings()
BASE_DIR = Path(__file__).resolve().parent
MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}
VIEW_MODES = ["Load more", "Pages"]


def _inject_styles() -> None:
    st.markdown(
        """
        <style>
          @import url('https://fonts.googleapis.com/css2?family=Space+Grotesk:wght@500;700&family=Public+Sans:wght@400;500;600;700&display=swap');

          :root {
            --db-blue-700: #032d60;
            --db-blue-600: #0176d3;
            --db-gold: #f5b301;
            --db-card: #ffffff;
            --db-text: #181818;
            --db-muted: #3e3e3c;
          }

          html, body, [class*="css"] {
            font-family: "Public Sans", "Trebuchet MS", sans-serif;
          }

          .board-hero {
            background: linear-gradient(124deg, var(--db-blue-700), var(--db-blue-600));
            border-radius: 18px;
            color: #ffffff;
            padding: 1.2rem 1.25rem;
            box-shadow: 0 16px 30px rgba(3, 45, 96, 0.28);
            margin-bottom: 1rem;
          }

          .board-hero h1 {
            margin: 0;
            color: #ffffff !important;
            font-family: "Space Grotesk", "Arial Black", sans-serif;
            font-size: clamp(1.45rem, 2.6vw, 2.2rem);
          }

          .metric-card {
            border-radius: 14px;
            border: 1px solid rgba(201, 199, 197, 0.6);
            background: var(--db-card);
            box-shadow: 0 6px 14px rgba(24, 24, 24, 0.06);
            padding: 0.75rem 0.8rem;
          }

          .metric-label {
            margin: 0;
            color: var(--db-muted);
            font-weight: 600;
            font-size: 0.84rem;
          }

          .metric-value {
            margin: 0.3rem 0 0;
            color: var(--db-blue-700);
            font-family: "Space Grotesk", "Arial Black", sans-serif;
            font-size: 1.45rem;
          }

          .donor-card {
            border-radius: 14px;
            border: 1px solid rgba(201, 199, 197, 0.6);
            background: var(--db-card);
            padding: 0.7rem 0.8rem;
            margin-bottom: 0.7rem;
            display: flex;
            gap: 0.7rem;
            align-items: center;
          }

          .donor-card.top {
            border: 2px solid var(--db-gold);
          }

          .avatar {
            width: 44px;
            height: 44px;
            border-radius: 50%;
            background: var(--db-blue-600);
            color: #ffffff;
            display: flex;
            align-items: center;
            justify-content: center;
            font-weight: 700;
            object-fit: cover;
          }

          .donor-name {
            margin: 0;
            font-weight: 700;
          }

          .donor-meta {
            margin: 0;
            color: var(--db-muted);
            font-size: 0.82rem;
          }

          .donor-amount {
            color: var(--db-blue-700);
            font-weight: 700;
          }
        </style>
        """,
        unsafe_allow_html=True,
    )


def _hero() -> None:
    st.markdown(
        """
        <div class="board-hero">
          <h1>Supporter Leaderboard</h1>
        </div>
        """,
        unsafe_allow_html=True,
    )


def _render_metric_card(title: str, value: str) -> str:
    return f"""
        <div class="metric-card">
          <p class="metric-label">{title}</p>
          <p class="metric-value">{value}</p>
        </div>
        """


def _avatar_html(donor: Donor) -> str:
    if donor.avatar:
        return f'<img class="avatar" src="{html.escape(donor.avatar, quote=True)}" alt="">'
    return f'<div class="avatar">{html.escape(donor.name[:1].upper())}</div>'


def _social_html(donor: Donor) -> str:
    if donor.social is None:
        return ""
    label = html.escape(donor.social.username or donor.social.uid or donor.social.platform)
    platform = html.escape(donor.social.platform)
    if donor.social.url:
        url = html.escape(donor.social.url, quote=True)
        return f' · {platform} <a href="{url}" target="_blank" rel="noopener">{label}</a>'
    return f" · {platform} {label}"


def _card_html(donor: Donor, is_top: bool = False) -> str:
    medal = f"{MEDALS[donor.rank]} " if is_top and donor.rank in MEDALS else ""
    date = f" · {html.escape(donor.date)}" if donor.date else ""
    top_class = "top" if is_top else ""
    return f"""
        <div class="donor-card {top_class}">
          {_avatar_html(donor)}
          <div>
            <p class="donor-name">{medal}{html.escape(donor.name)}</p>
            <p class="donor-meta">
              Top #{donor.rank} · <span class="donor-amount">{format_money(donor.amount, SETTINGS.currency_suffix)}</span>{date}{_social_html(donor)}
            </p>
          </div>
        </div>
        """


def _render_cards(donors: tuple[Donor, ...] | list[Donor], columns: int = 3) -> None:
    grid = st.columns(columns, gap="small")
    for index, donor in enumerate(donors):
        with grid[index % columns]:
            st.markdown(_card_html(donor), unsafe_allow_html=True)


def _session() -> LeaderboardSession:
    if "leaderboard" not in st.session_state:
        session = LeaderboardSession(SETTINGS)
        session.load(base_dir=BASE_DIR)
        st.session_state.leaderboard = session
        st.session_state.count_up_pending = True
    return st.session_state.leaderboard


def _reload() -> None:
    st.session_state.pop("leaderboard", None)
    st.session_state["donor-search"] = ""


def _on_search() -> None:
    session = st.session_state.leaderboard
    session.bus.emit(SEARCH, st.session_state["donor-search"])
    # Widgets only submit on enter or blur, so there is nothing left to coalesce.
    session.search_debouncer.flush()


def _on_clear_search() -> None:
    st.session_state["donor-search"] = ""
    st.session_state.leaderboard.bus.emit(CLEAR_SEARCH)


def _on_batch_size() -> None:
    st.session_state.leaderboard.bus.emit(BATCH_SIZE, st.session_state["donor-per-page"])


def _on_sort() -> None:
    st.session_state.leaderboard.bus.emit(SORT, st.session_state["donor-sort"])


def render_summary(session: LeaderboardSession) -> None:
    total_column, count_column = st.columns(2)
    with count_column:
        st.markdown(_render_metric_card("Supporters", str(session.aggregate.count)), unsafe_allow_html=True)
    with total_column:
        placeholder = st.empty()
        if st.session_state.pop("count_up_pending", False) and session.aggregate.total:
            frame_delay = 1 / 30
            for value in count_up_frames(session.aggregate.total, SETTINGS.count_up_seconds, fps=30):
                placeholder.markdown(
                    _render_metric_card("Total pledged", format_money(value, SETTINGS.currency_suffix)),
                    unsafe_allow_html=True,
                )
                time.sleep(frame_delay)
        placeholder.markdown(
            _render_metric_card("Total pledged", format_money(session.aggregate.total, SETTINGS.currency_suffix)),
            unsafe_allow_html=True,
        )


def render_podium(session: LeaderboardSession) -> None:
    st.markdown("### Top supporters")
    podium = session.podium()
    if not podium:
        st.info("No donors to show yet.")
        return
    columns = st.columns(len(podium))
    for column, donor in zip(columns, podium):
        with column:
            st.markdown(_card_html(donor, is_top=True), unsafe_allow_html=True)


def render_controls(session: LeaderboardSession) -> str:
    search_column, clear_column, per_page_column, sort_column, mode_column = st.columns(
        [4, 1, 1.4, 2, 1.6], gap="small"
    )
    with search_column:
        st.text_input(
            "Search",
            key="donor-search",
            placeholder="Name, username or platform",
            on_change=_on_search,
        )
    with clear_column:
        st.markdown("&nbsp;", unsafe_allow_html=True)
        st.button("Clear", key="donor-search-clear", on_click=_on_clear_search, use_container_width=True)
    with per_page_column:
        options = SETTINGS.batch_size_options
        st.selectbox(
            "Per page",
            options,
            index=options.index(session.batch_size) if session.batch_size in options else 0,
            key="donor-per-page",
            on_change=_on_batch_size,
        )
    with sort_column:
        modes = list(SORT_MODES)
        st.selectbox(
            "Sort by",
            modes,
            index=modes.index(session.sort_by),
            format_func=SORT_MODES.get,
            key="donor-sort",
            on_change=_on_sort,
        )
    with mode_column:
        return st.radio("Show", VIEW_MODES, horizontal=True, key="donor-view-mode")


def render_donor_list(session: LeaderboardSession, view_mode: str) -> None:
    status = session.reveal.status()
    st.caption(f"{status.total} results")

    state = session.display_state()
    if state == DISPLAY_NO_MATCHES:
        st.info("No donors match this search.")
        return
    if state == DISPLAY_EMPTY:
        st.info("No donors to show yet.")
        return

    if view_mode == "Pages":
        paginator = session.paginator
        _render_cards(paginator.items)
        prev_column, label_column, next_column = st.columns([1, 2, 1])
        with prev_column:
            if st.button("← Previous", key="donor-page-prev", disabled=not paginator.has_prev):
                session.bus.emit(PAGE_PREV)
                st.rerun()
        with label_column:
            st.caption(f"Page {paginator.page} / {paginator.page_count}")
        with next_column:
            if st.button("Next →", key="donor-page-next", disabled=not paginator.has_next):
                session.bus.emit(PAGE_NEXT)
                st.rerun()
        return

    _render_cards(session.reveal.materialized)
    if status.load_zone_visible:
        st.caption(f"Showing {status.shown} / {status.total}")
    if status.load_more_visible:
        if st.button("Load more", key="donor-load-more"):
            session.bus.emit(LOAD_MORE)
            st.rerun()

    table = pd.DataFrame(
        [
            {
                "Rank": donor.rank,
                "Name": donor.name,
                "Amount": donor.amount,
                "Date": donor.date or "-",
                "Platform": donor.social.platform if donor.social else "-",
                "Profile": donor.social.url if donor.social else "-",
            }
            for donor in session.reveal.materialized
        ]
    )
    if not table.empty:
        st.download_button(
            "Download shown donors CSV",
            data=table.to_csv(index=False).encode("utf-8"),
            file_name="donors.csv",
            mime="text/csv",
            key="donor-download",
        )


def main() -> None:
    st.set_page_config(
        page_title="Supporter Leaderboard",
        page_icon=":trophy:",
        layout="wide",
    )
    setup_logging(SETTINGS.log_level, SETTINGS.log_format)
    _inject_styles()
    _hero()

    session = _session()
    state = session.display_state()
    if state == DISPLAY_LOADING:
        st.info("Loading donors...")
        return
    if state == DISPLAY_FAILED:
        render_summary(session)
        st.error("Donor data is unavailable right now.")
        st.button("Reload", key="donor-reload", on_click=_reload)
        return

    render_summary(session)
    render_podium(session)
    st.markdown("### All supporters")
    view_mode = render_controls(session)
    render_donor_list(session, view_mode)


if __name__ == "__main__":
    main()
