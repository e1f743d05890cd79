"""
Pytest configuration and shared fixtures for build tests.
"""
import sys
from pathlib import Path

import pytest

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

from tests.fixtures.build_factories import RecordingRunner, create_settings


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Drop FFMPEG_BUILD_* variables and run from an empty directory (no stray .env)."""
    import os

    for key in list(os.environ):
        if key.startswith("FFMPEG_BUILD_"):
            monkeypatch.delenv(key)
    work = tmp_path / "cwd"
    work.mkdir()
    monkeypatch.chdir(work)


@pytest.fixture
def out_dir(tmp_path):
    return tmp_path / "out"


@pytest.fixture
def settings(out_dir):
    """Native build settings with dependency builds off and verification off."""
    return create_settings(out_dir)


@pytest.fixture
def runner():
    return RecordingRunner()
