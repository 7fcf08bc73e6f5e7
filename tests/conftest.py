"""Shared pytest fixtures for MinGit tests."""

import os
import pytest
import tempfile
import shutil
from pathlib import Path
from mingit.core.config import Config
from mingit.core.repository import Repository


AUTHOR = "Test User <test@example.com>"


@pytest.fixture(autouse=True)
def isolated_global_config(tmp_path, monkeypatch):
    """Keep tests away from the real ~/.mingitconfig and MINGIT_* variables."""
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', tmp_path / 'global.mingitconfig')
    for key in list(os.environ):
        if key.startswith('MINGIT_'):
            monkeypatch.delenv(key)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    return Repository(temp_dir).init()


@pytest.fixture
def in_repo(repo, monkeypatch):
    """Run with the repository's work tree as current directory."""
    monkeypatch.chdir(repo.work_tree)
    return repo


@pytest.fixture
def working_files(repo):
    """Create sample file structure in repository."""
    file1 = repo.work_tree / "test1.txt"
    file2 = repo.work_tree / "test2.txt"
    (repo.work_tree / "subdir").mkdir()
    file3 = repo.work_tree / "subdir" / "test3.txt"

    file1.write_text("Content 1")
    file2.write_text("Content 2")
    file3.write_text("Content 3")

    return {
        'file1': file1,
        'file2': file2,
        'file3': file3
    }


def make_commit(repo, message="Test commit", parent=None, timestamp=1700000000):
    """Snapshot the work tree and commit it with a fixed author."""
    tree_id = repo.write_tree()
    return repo.commit_tree(tree_id, message, parent=parent, author=AUTHOR, timestamp=timestamp)


@pytest.fixture
def commit_chain(repo):
    """Repository with two commits; returns (repo, [newest_id, oldest_id])."""
    (repo.work_tree / "file1.txt").write_text("Hello, World!")
    first = make_commit(repo, "First commit")

    (repo.work_tree / "file2.txt").write_text("Second file")
    second = make_commit(repo, "Second commit", parent=first, timestamp=1700000100)

    return repo, [second, first]


@pytest.fixture
def commit_factory(repo):
    """Return a helper that commits the current work tree."""
    def factory(message="Test commit", parent=None, timestamp=1700000000):
        return make_commit(repo, message, parent=parent, timestamp=timestamp)
    return factory
