# tests/conftest.py

"""Shared pytest fixtures for all tests."""

import logging
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path: Path) -> Generator[Path, None, None]:
    """Send run logs to a temp dir and drop handlers between tests."""
    logs_dir = tmp_path / "logs"
    with patch("src.config.settings.Settings.LOGS_DIR", logs_dir):
        yield logs_dir
    root_logger = logging.getLogger("temp_snapshots")
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)
