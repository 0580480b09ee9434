"""
Tests for logging setup and error tracking.
"""

import logging

import pytest

from cgpripper.core.errors import AssetFetchError
from cgpripper.core.logger import ErrorTracker, initialize_logging


@pytest.fixture(autouse=True)
def reset_app_logger():
    yield
    logger = logging.getLogger("cgpripper")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_initialize_logging_console_levels():
    logger = initialize_logging(verbose=True)
    assert logger.name == "cgpripper"
    assert [h.level for h in logger.handlers] == [logging.INFO]

    logger = initialize_logging(verbose=False)
    assert [h.level for h in logger.handlers] == [logging.WARNING]


def test_initialize_logging_with_files(tmp_path):
    logger = initialize_logging(str(tmp_path / "logs"), verbose=False)
    logging.getLogger("cgpripper.core.assets").error("boom")
    for handler in logger.handlers:
        handler.flush()

    assert "boom" in (tmp_path / "logs" / "cgpripper.log").read_text()
    assert "boom" in (tmp_path / "logs" / "cgpripper_errors.log").read_text()


def test_error_tracker_summary():
    tracker = ErrorTracker(logging.getLogger("cgpripper.test"))
    tracker.log_warning("Missing dimensions, page skipped", context="render", page=4)
    tracker.log_error(AssetFetchError("no background"), context="fetch", page=2)
    tracker.log_error(AssetFetchError("no background"), page=3)

    summary = tracker.get_error_summary()
    assert summary["total_warnings"] == 1
    assert summary["total_errors"] == 2
    assert summary["error_types"] == {"AssetFetchError": 2}
    assert summary["recent_warnings"][0]["page"] == 4
