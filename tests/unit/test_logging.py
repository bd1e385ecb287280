"""Unit tests for the JSON log formatter."""

from __future__ import annotations

import json
import logging

import pytest

from workflow_builder.logging import JsonFormatter, configure_logging


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord("workflow_builder.test", logging.INFO, __file__, 1, "hi %s", ("x",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extra_fields() -> None:
    payload = json.loads(JsonFormatter().format(_record(edit="AddNode", _private=1)))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "workflow_builder.test"
    assert payload["message"] == "hi x"
    assert payload["extra"] == {"edit": "AddNode"}


def test_json_formatter_omits_empty_extra() -> None:
    payload = json.loads(JsonFormatter().format(_record()))
    assert "extra" not in payload


def test_configure_logging_replaces_handlers(monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", list(root.handlers))
    level = root.level
    try:
        configure_logging("debug")
        configure_logging("warning")
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert root.level == logging.WARNING
    finally:
        root.setLevel(level)
