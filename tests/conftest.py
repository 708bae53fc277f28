"""
Test fixtures for the cyber_cms tests.
"""

import io
import logging
from pathlib import Path
from typing import Generator

import pytest
from rich.console import Console

from cyber_cms.logging_config import LOGGER_NAME
from cyber_cms.storage import RecordStore


@pytest.fixture(autouse=True)
def reset_package_logger() -> Generator[None, None, None]:
    """Undo setup_logging between tests so caplog sees package records."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def users_path(data_dir: Path) -> Path:
    return data_dir / "users.txt"


@pytest.fixture
def devices_path(data_dir: Path) -> Path:
    return data_dir / "devices.txt"


@pytest.fixture
def store(users_path: Path, devices_path: Path) -> RecordStore:
    """A store over files that do not exist yet."""
    return RecordStore(str(users_path), str(devices_path))


@pytest.fixture
def console() -> Console:
    """Console writing plain text to a buffer."""
    return Console(file=io.StringIO(), width=200, color_system=None)
