"""Fetch the raw donor payload from a relative path or an HTTP URL."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import requests


logger = logging.getLogger(__name__)


class DataLoadError(RuntimeError):
    """The donor payload could not be fetched or decoded."""


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def fetch_payload(source: str | Path, base_dir: str | Path | None = None) -> Any:
    source_text = str(source)

    if _is_url(source_text):
        logger.info("Fetching donors from %s", source_text)
        try:
            response = requests.get(source_text)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            raise DataLoadError(f"Fetch failed: {source_text}") from exc
        except ValueError as exc:
            raise DataLoadError(f"Invalid JSON from {source_text}") from exc

    path = Path(source_text)
    if base_dir is not None and not path.is_absolute():
        path = Path(base_dir) / path

    logger.info("Reading donors from %s", path)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise DataLoadError(f"Fetch failed: {path}") from exc
    except ValueError as exc:
        raise DataLoadError(f"Invalid JSON in {path}") from exc
