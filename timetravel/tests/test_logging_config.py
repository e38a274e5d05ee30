"""
Tests for logging setup: formats, levels and trace_id propagation.
"""

import json
import logging
import warnings

import pytest
from pythonjsonlogger.json import JsonFormatter

from timetravel.logging_config import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_format_emits_trace_id(capsys):
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        setup_logging(level="DEBUG", log_format="json")

    handler = logging.getLogger().handlers[0]
    assert isinstance(handler.formatter, JsonFormatter)

    get_logger("timetravel.test", trace_id="README.md@c1").info("hello", extra={"segment_index": 2})

    record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert record["message"] == "hello"
    assert record["trace_id"] == "README.md@c1"
    assert record["level"] == "INFO"
    assert record["segment_index"] == 2


def test_env_controls_level_and_text_format(monkeypatch, capsys):
    monkeypatch.setenv("DHF_LOG_LEVEL", "error")
    monkeypatch.setenv("DHF_LOG_FORMAT", "text")
    setup_logging()

    log = get_logger("timetravel.test")
    log.warning("dropped")
    log.error("kept")

    err = capsys.readouterr().err
    assert "dropped" not in err
    assert "kept [trace_id=N/A]" in err
