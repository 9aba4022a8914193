import json
import logging

import pytest

from wfc_hotspotd.logging import JsonFormatter, setup_logging


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_formatter_includes_structured_fields():
    record = logging.LogRecord("wfc_hotspotd.engine.netconf", logging.INFO, __file__, 1, "assign %s", ("wlan1",), None)
    record.op = "netconf"
    record.iface = "wlan1"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "wfc_hotspotd.engine.netconf"
    assert payload["msg"] == "assign wlan1"
    assert payload["op"] == "netconf"
    assert payload["iface"] == "wlan1"
    assert "rc" not in payload


def test_setup_logging_level_from_env(restore_root, monkeypatch):
    monkeypatch.setenv("WFC_HOTSPOT_LOG_LEVEL", "warning")
    setup_logging()
    assert restore_root.level == logging.WARNING
    assert len(restore_root.handlers) == 1


def test_setup_logging_explicit_level_wins(restore_root, monkeypatch):
    monkeypatch.setenv("WFC_HOTSPOT_LOG_LEVEL", "ERROR")
    setup_logging("DEBUG")
    assert restore_root.level == logging.DEBUG


def test_setup_logging_json_format(restore_root, monkeypatch):
    monkeypatch.setenv("WFC_HOTSPOT_LOG_FORMAT", "json")
    setup_logging("INFO")
    assert isinstance(restore_root.handlers[0].formatter, JsonFormatter)
