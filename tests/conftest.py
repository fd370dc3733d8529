# tests/conftest.py
import logging
import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))


@pytest.fixture(autouse=True)
def quiet_root_logger():
    """Keep configure_logging() calls in tests from leaking handlers."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def journal_dir(tmp_path):
    return tmp_path / "journal"
