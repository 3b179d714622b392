from __future__ import annotations

import logging

from arctic_sky import logging as arctic_logging


def test_configure_logging_reads_level_from_environment(monkeypatch) -> None:
    captured: dict[str, object] = {}
    monkeypatch.setenv("ARCTIC_SKY_LOG_LEVEL", "debug")
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

    arctic_logging.configure_logging()

    assert captured["level"] == "DEBUG"
    assert captured["format"] == arctic_logging.LOG_FORMAT


def test_configure_logging_explicit_level_wins(monkeypatch) -> None:
    captured: dict[str, object] = {}
    monkeypatch.setenv("ARCTIC_SKY_LOG_LEVEL", "debug")
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

    arctic_logging.configure_logging("warning")

    assert captured["level"] == "WARNING"
