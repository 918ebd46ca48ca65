"""Shared fixtures for commit-helper tests."""

from pathlib import Path

import pytest
from git import Repo


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep config and session state out of the real home directory."""
    config_home = tmp_path / "config-home"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    for name in ("COMMIT_HELPER_DISPATCH", "COMMIT_HELPER_ROOT", "COMMIT_HELPER_VERBOSE"):
        monkeypatch.delenv(name, raising=False)
    return config_home / "commit-helper"


def init_repo(path: Path) -> Repo:
    """Create a git repository with a configured user and one commit."""
    path.mkdir(parents=True, exist_ok=True)
    repo = Repo.init(path)
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()
    (path / "README.md").write_text("readme")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")
    return repo


@pytest.fixture
def make_repo():
    """Factory for real repositories, see init_repo."""
    return init_repo


@pytest.fixture
def workspace(tmp_path):
    """Workspace root holding repositories for the tests to create."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def repo_with_commit(workspace):
    """A real repository with module directories and an initial commit."""
    repo = init_repo(workspace / "addons")
    for module in ("sale", "purchase"):
        (workspace / "addons" / module).mkdir()
        (workspace / "addons" / module / "__manifest__.py").write_text("{}")
    return repo
