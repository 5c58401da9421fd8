from __future__ import annotations

import logging
import sys
from pathlib import Path

import ocptv.core.logging as ocptv_logging
from ocptv.core import Settings, configure_logging, get_logger, load_settings


def test_settings_defaults(monkeypatch):
    for key in ("OCPTV_LOG_LEVEL", "OCPTV_LOG_FORMAT", "OCPTV_TIMEZONE", "OCPTV_OUTPUT_PATH"):
        monkeypatch.delenv(key, raising=False)
    s = Settings(_env_file=None)
    assert s.log_level == "WARNING"
    assert s.log_format == "console"
    assert s.timezone == "UTC"
    assert s.output_path is None


def test_settings_from_env(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("OCPTV_TIMEZONE", "Asia/Tokyo")
    monkeypatch.setenv("OCPTV_LOG_FORMAT", "json")
    monkeypatch.setenv("OCPTV_OUTPUT_PATH", str(tmp_path / "out.jsonl"))
    s = Settings(_env_file=None)
    assert s.timezone == "Asia/Tokyo"
    assert s.log_format == "json"
    assert s.output_path == tmp_path / "out.jsonl"


def test_load_settings_is_cached():
    assert load_settings() is load_settings()


def test_get_logger_leaves_setup_to_the_host(monkeypatch):
    calls: list[dict] = []
    monkeypatch.setattr(ocptv_logging, "configure_logging", lambda **kw: calls.append(kw))

    log = get_logger("output.test")
    log.debug("library event")

    assert calls == []
    assert log.bind()._logger is logging.getLogger("ocptv.output.test")


def test_configured_logs_stay_off_the_root_logger(monkeypatch):
    monkeypatch.setattr(ocptv_logging, "_CONFIGURED", False)
    configure_logging(level="DEBUG", fmt="json")

    root = logging.getLogger("ocptv")
    assert root.propagate is False
    assert [h.stream for h in root.handlers] == [sys.stderr]
    root.handlers.clear()
