# tests/test_logging_config.py

"""Tests for the per-run logging configuration."""

import logging
import tempfile
import unittest
from pathlib import Path

from catalogue.config.logging_config import ROOT_LOGGER_NAME, setup_logging


class TestLoggingConfig(unittest.TestCase):
    """Verify logging setup behaviour."""

    def setUp(self) -> None:
        self.root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        self.root_logger.handlers.clear()

    def tearDown(self) -> None:
        for handler in self.root_logger.handlers:
            handler.close()
        self.root_logger.handlers.clear()

    def _console_handlers(self) -> list[logging.Handler]:
        return [
            h
            for h in self.root_logger.handlers
            if isinstance(h, logging.StreamHandler)
            and not isinstance(h, logging.FileHandler)
        ]

    def test_setup_creates_log_file(self) -> None:
        """setup_logging returns a path that exists on disk."""
        log_path = setup_logging()
        self.assertTrue(log_path.exists())

    def test_log_file_naming_convention(self) -> None:
        """Log file name matches run_YYYYMMDD_HHMMSS.log format."""
        log_path = setup_logging()
        self.assertRegex(log_path.name, r"^run_\d{8}_\d{6}\.log$")

    def test_file_handler_level_debug(self) -> None:
        """File handler captures everything."""
        setup_logging()
        file_handlers = [
            h
            for h in self.root_logger.handlers
            if isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(len(file_handlers), 1)
        self.assertEqual(file_handlers[0].level, logging.DEBUG)

    def test_console_handler_warning_by_default(self) -> None:
        """Console only shows warnings unless verbose."""
        setup_logging()
        self.assertEqual(self._console_handlers()[0].level, logging.WARNING)

    def test_verbose_console_handler_debug(self) -> None:
        """Verbose mode echoes debug records to stderr."""
        setup_logging(verbose=True)
        self.assertEqual(self._console_handlers()[0].level, logging.DEBUG)

    def test_repeated_calls_no_duplicate_handlers(self) -> None:
        """Calling setup_logging twice does not duplicate handlers."""
        setup_logging()
        count_before = len(self.root_logger.handlers)
        setup_logging()
        self.assertEqual(len(self.root_logger.handlers), count_before)

    def test_child_logger_reaches_run_log(self) -> None:
        """Records from catalogue.* modules land in the run log."""
        log_path = setup_logging()
        logging.getLogger("catalogue.dispatcher").warning("probe-line")
        for handler in self.root_logger.handlers:
            handler.flush()
        self.assertIn("probe-line", log_path.read_text(encoding="utf-8"))

    def test_explicit_logs_dir(self) -> None:
        """An explicit directory overrides Settings.LOGS_DIR."""
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "custom"
            log_path = setup_logging(logs_dir=target)
            self.assertEqual(log_path.parent, target)
            for handler in self.root_logger.handlers:
                handler.close()
            self.root_logger.handlers.clear()


if __name__ == "__main__":
    unittest.main()
