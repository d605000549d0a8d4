"""Shared fixtures for depsort tests."""

import shutil
from pathlib import Path

import pytest

# Path to test fixtures
FIXTURES_PATH = Path(__file__).parent / "fixtures" / "ts_app"


@pytest.fixture
def fixture_project(tmp_path: Path) -> Path:
    """A writable copy of the TypeScript fixture project."""
    project = tmp_path / "ts_app"
    shutil.copytree(FIXTURES_PATH, project)
    return project
