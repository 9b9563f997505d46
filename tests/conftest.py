"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest
import yaml

from shipyard.config.store import YamlConfigStore
from shipyard.exceptions import GitOperationError
from shipyard.workspace import Workspace
from tests.fakes import STORE_DOCUMENT


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    """YAML configuration store with a 'demo' and an 'empty' application."""
    path = tmp_path / "store.yml"
    path.write_text(yaml.safe_dump(STORE_DOCUMENT, sort_keys=False))
    return path


@pytest.fixture
def store(store_path: Path) -> YamlConfigStore:
    return YamlConfigStore(store_path)


@pytest.fixture
def workspace(tmp_path: Path) -> Workspace:
    """Workspace linked to the 'demo' application."""
    ws = Workspace(tmp_path / "project")
    ws.link("demo")
    return ws


@pytest.fixture
def git_error() -> GitOperationError:
    return GitOperationError("run git rev-parse --abbrev-ref HEAD: exit status 128: fatal: not a git repository")
