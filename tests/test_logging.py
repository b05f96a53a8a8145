"""Tests for logging setup."""

import logging

import pytest

from jira_epic_dashboard.logging import ROOT_LOGGER, get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_root_logger():
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_writes_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "dashboard.log"
        setup_logging(level="DEBUG", log_file=log_file, console=False)

        get_logger("epics").info("fetched epic")
        for handler in logging.getLogger(ROOT_LOGGER).handlers:
            handler.flush()

        content = log_file.read_text()
        assert "fetched epic" in content
        assert "jira_epic_dashboard.epics" in content

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("JIRA_EPIC_DASHBOARD_LOG_LEVEL", "warning")
        logger = setup_logging(console=False)
        assert logger.level == logging.WARNING

    def test_no_duplicate_handlers(self):
        setup_logging(console=True)
        setup_logging(console=True)
        assert len(logging.getLogger(ROOT_LOGGER).handlers) == 1


class TestGetLogger:
    """Tests for get_logger."""

    def test_prefixes_name(self):
        assert get_logger("sprints").name == "jira_epic_dashboard.sprints"

    def test_keeps_qualified_name(self):
        assert get_logger("jira_epic_dashboard.web.routes").name == "jira_epic_dashboard.web.routes"
