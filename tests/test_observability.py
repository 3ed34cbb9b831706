from __future__ import annotations

import json
import logging
import sys

from donor_board.observability import JsonFormatter, setup_logging


def test_json_formatter_includes_message_and_extra_fields() -> None:
    record = logging.LogRecord(
        name="donor_board.session",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Loaded %d donors",
        args=(5,),
        exc_info=None,
    )
    record.source = "data/donors.json"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "donor_board.session"
    assert payload["msg"] == "Loaded 5 donors"
    assert payload["source"] == "data/donors.json"
    assert "args" not in payload
    assert "lineno" not in payload


def test_json_formatter_serializes_exceptions() -> None:
    try:
        raise ValueError("bad payload")
    except ValueError:
        record = logging.getLogger("donor_board").makeRecord(
            "donor_board", logging.ERROR, __file__, 1, "failed", (), exc_info=sys.exc_info()
        )

    payload = json.loads(JsonFormatter().format(record))

    assert "bad payload" in payload["exc_info"]


def test_setup_logging_sets_level_and_json_formatter() -> None:
    root = logging.getLogger()
    handler = logging.StreamHandler()
    root.addHandler(handler)
    previous_level = root.level
    previous_formatters = {h: h.formatter for h in root.handlers}
    try:
        setup_logging("debug", "json")

        assert root.level == logging.DEBUG
        assert isinstance(handler.formatter, JsonFormatter)
    finally:
        root.removeHandler(handler)
        root.setLevel(previous_level)
        for h, formatter in previous_formatters.items():
            h.setFormatter(formatter)
