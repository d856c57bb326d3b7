# tests/conftest.py

"""Shared pytest fixtures for the catalogue tests."""

import logging
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path: Path) -> Generator[Path, None, None]:
    """Send run logs to a temp dir and drop handlers between tests."""
    logs_dir = tmp_path / "logs"
    root_logger = logging.getLogger("catalogue")
    saved = list(root_logger.handlers)
    root_logger.handlers.clear()
    with patch("catalogue.config.settings.Settings.LOGS_DIR", logs_dir):
        yield logs_dir
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers[:] = saved
