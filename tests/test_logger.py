"""Unit tests for logging setup."""

import logging

import pytest

from utils.logger import configure_logging, get_logger


@pytest.fixture(autouse=True)
def restore_root_level():
    root = logging.getLogger()
    level = root.level
    yield
    configure_logging(logging.getLevelName(level))


class TestConfigureLogging:
    def test_handler_installed_once(self) -> None:
        configure_logging("INFO")
        configure_logging("DEBUG")

        names = [h.get_name() for h in logging.getLogger().handlers]
        assert names.count("startup_launch") == 1
        assert logging.getLogger().level == logging.DEBUG

    def test_libraries_held_at_library_level(self) -> None:
        configure_logging("DEBUG", library_level="WARNING")

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("google").level == logging.WARNING

    def test_libraries_never_louder_than_root(self) -> None:
        configure_logging("ERROR", library_level="WARNING")

        assert logging.getLogger("urllib3").level == logging.ERROR

    def test_unknown_level_falls_back_to_info(self) -> None:
        configure_logging("CHATTY")

        assert logging.getLogger().level == logging.INFO

    def test_uvicorn_access_log_not_duplicated(self) -> None:
        configure_logging()

        assert logging.getLogger("uvicorn.access").propagate is False

    def test_get_logger_returns_named_logger(self) -> None:
        assert get_logger("handlers.idea_handler").name == "handlers.idea_handler"
