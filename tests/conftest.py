"""Shared pytest fixtures."""

import shutil
import sys
import tempfile
from pathlib import Path

import pytest


ROOT = Path(__file__).parent.parent
SCRIPTS_DIR = ROOT / "scripts"
sys.path.insert(0, str(SCRIPTS_DIR))


@pytest.fixture
def temp_dir():
    """Temporary directory removed after the test."""
    path = Path(tempfile.mkdtemp())
    yield path
    shutil.rmtree(path, ignore_errors=True)
