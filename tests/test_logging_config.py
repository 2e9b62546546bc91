# tests/test_logging_config.py

"""Tests for the per-run logging configuration."""

import logging
import tempfile
import unittest
from pathlib import Path

from src.config.logging_config import ROOT_LOGGER_NAME, setup_logging


class TestLoggingConfig(unittest.TestCase):
    """Verify logging setup behaviour."""

    def setUp(self) -> None:
        """Detach handlers and point logs at a temp directory."""
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        self._detach()
        self.addCleanup(self._detach)
        self.logs_dir = Path(tmp.name) / "logs"

    def _detach(self) -> None:
        for handler in list(self.root_logger.handlers):
            handler.close()
            self.root_logger.removeHandler(handler)

    def test_setup_creates_log_file(self) -> None:
        """setup_logging returns a path that exists on disk."""
        log_path = setup_logging(self.logs_dir)
        self.assertTrue(log_path.exists())

    def test_log_file_naming_convention(self) -> None:
        """Log file name matches run_YYYYMMDD_HHMMSS.log format."""
        log_path = setup_logging(self.logs_dir)
        self.assertRegex(log_path.name, r"^run_\d{8}_\d{6}\.log$")

    def test_log_file_inside_logs_dir(self) -> None:
        log_path = setup_logging(self.logs_dir)
        self.assertEqual(log_path.parent, self.logs_dir)

    def test_handler_levels(self) -> None:
        """File handler logs DEBUG, console only WARNING."""
        setup_logging(self.logs_dir)
        file_handlers = [
            h for h in self.root_logger.handlers
            if isinstance(h, logging.FileHandler)
        ]
        stream_handlers = [
            h for h in self.root_logger.handlers
            if isinstance(h, logging.StreamHandler)
            and not isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(file_handlers[0].level, logging.DEBUG)
        self.assertEqual(stream_handlers[0].level, logging.WARNING)
        self.assertEqual(self.root_logger.level, logging.DEBUG)

    def test_repeated_calls_no_duplicate_handlers(self) -> None:
        """Calling setup_logging twice does not duplicate handlers."""
        setup_logging(self.logs_dir)
        count_before = len(self.root_logger.handlers)
        setup_logging(self.logs_dir)
        self.assertEqual(count_before, len(self.root_logger.handlers))

    def test_child_loggers_reach_file(self) -> None:
        """Module loggers under shopwise.* land in the run log."""
        log_path = setup_logging(self.logs_dir)
        logging.getLogger("shopwise.history").info("recorded B0TEST0001")
        for handler in self.root_logger.handlers:
            handler.flush()
        self.assertIn(
            "recorded B0TEST0001", log_path.read_text(encoding="utf-8"),
        )


if __name__ == "__main__":
    unittest.main()
