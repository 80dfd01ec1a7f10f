"""
Unit Tests for Utility Functions

Tests:
1. Package logging setup (one console line per record)
2. Time formatting and Timer
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import logging

import pytest
from delaynet.models.evaluator import ModelEvaluator
from delaynet.utils import Timer, format_time, setup_logging


@pytest.fixture
def package_logging(capsys):
    """Configure console logging for the test and detach it afterwards."""
    logger = setup_logging(None)
    yield logger
    logger.handlers.clear()


class TestSetupLogging:
    def test_class_logger_lines_not_duplicated(self, package_logging, capsys):
        """A class created after setup_logging should not add its own console handler."""
        evaluator = ModelEvaluator()
        evaluator.log_metrics({"rmse": 1.0, "mae": 0.5, "r2": 0.9}, split="test")

        err = capsys.readouterr().err
        assert err.count("TEST SET METRICS") == 1

    def test_earlier_class_handlers_removed(self, capsys):
        """Handlers attached before setup_logging are cleared by it."""
        logging.getLogger("delaynet.models.evaluator").addHandler(logging.StreamHandler())
        logger = setup_logging(None)
        try:
            ModelEvaluator().log_metrics({"rmse": 2.0}, split="train")
            assert capsys.readouterr().err.count("TRAIN SET METRICS") == 1
        finally:
            logger.handlers.clear()

    def test_log_file_written(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        logger = setup_logging(log_file)
        try:
            logging.getLogger("delaynet.models.evaluator").info("hello from evaluator")
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()

        assert "hello from evaluator" in log_file.read_text()


class TestTiming:
    def test_format_time(self):
        assert format_time(75) == "01:15"
        assert format_time(3725) == "01:02:05"

    def test_timer_records_elapsed(self):
        with Timer("noop") as timer:
            pass

        assert timer.elapsed >= 0.0
