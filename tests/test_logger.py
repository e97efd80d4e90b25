# File: tests/test_logger.py
import logging

import pytest

from link_audit.logger import LOGGER_NAME, configure, get_logger


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    configure(level="WARNING")


def test_child_loggers_share_project_handlers():
    child = get_logger("crawler")
    assert child.name == f"{LOGGER_NAME}.crawler"
    assert child.parent is get_logger()
    assert get_logger().propagate is False


def test_reconfigure_replaces_handlers(tmp_path):
    configure(level="debug", log_file=tmp_path / "a.log")
    root = configure(level="INFO")
    assert len(root.handlers) == 1
    assert root.level == logging.INFO


def test_log_file_receives_child_records(tmp_path):
    log_file = tmp_path / "logs" / "audit.log"
    root = configure(level="DEBUG", log_file=log_file, log_format="%(name)s:%(message)s")
    get_logger("engine").debug("checked %s", "https://example.com/")
    for handler in root.handlers:
        handler.flush()

    assert "LinkAudit.engine:checked https://example.com/" in log_file.read_text(encoding="utf-8")
