"""Environment-driven settings for the donor leaderboard."""

from __future__ import annotations

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Leaderboard configuration, read from ``DONOR_BOARD_*`` variables or ``.env``."""

    # Relative JSON path or http(s) URL of the donor array
    data_source: str = "data/donors.json"

    # Reveal
    batch_size: int = 12
    batch_size_options: List[int] = [12, 24, 48]
    scroll_lookahead_px: int = 320
    podium_size: int = 3

    # Search / ordering
    sort_by: str = "amount-desc"
    search_debounce_seconds: float = 0.18

    # Presentation
    count_up_seconds: float = 0.65
    anonymous_label: str = "Anonymous"
    unnamed_label: str = "No name"
    currency_suffix: str = "đ"

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"

    model_config = SettingsConfigDict(
        env_prefix="DONOR_BOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )