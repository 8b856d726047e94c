import logging

from crickstats.logging import configure_logging


def test_configure_logging_reads_level_and_quiets_http_libraries(monkeypatch):
    root = logging.getLogger()
    previous = root.level
    monkeypatch.setenv("LOG_LEVEL", "debug")
    try:
        configure_logging()
        assert root.level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        root.setLevel(previous)


def test_configure_logging_unknown_level_falls_back_to_info(monkeypatch):
    root = logging.getLogger()
    previous = root.level
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    try:
        configure_logging()
        assert root.level == logging.INFO
    finally:
        root.setLevel(previous)
