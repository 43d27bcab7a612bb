"""Shared pytest fixtures for Kit tests."""

import pytest
import tempfile
import shutil
from pathlib import Path
from kit.core.config import Config
from kit.core.objects import Blob, Tree, Commit
from kit.core.repository import Repository
from kit.operations.commit import commit_index

AUTHOR = "Test User <test@example.com>"


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path_factory):
    """Keep tests away from the user's ~/.kitconfig and KIT_* variables."""
    home = tmp_path_factory.mktemp('home')
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', home / '.kitconfig')
    for var in ('KIT_USER_NAME', 'KIT_USER_EMAIL'):
        monkeypatch.delenv(var, raising=False)
    return home / '.kitconfig'


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    return Repository(str(temp_dir)).init()


@pytest.fixture
def repo_with_config(repo):
    """Create a repository with a user identity configured."""
    repo.config.set('user', 'name', 'Test User')
    repo.config.set('user', 'email', 'test@example.com')
    return repo


@pytest.fixture
def sample_blob():
    """Create a sample blob object."""
    return Blob(b"Hello, World!\n")


@pytest.fixture
def sample_tree(repo, sample_blob):
    """Create a sample tree with one blob."""
    blob_hash = repo.write_object(sample_blob)
    tree = Tree()
    tree.add_entry('100644', blob_hash, 'test.txt')
    return tree


@pytest.fixture
def sample_commit(sample_tree, repo):
    """Sample root commit object."""
    tree_hash = repo.write_object(sample_tree)
    return Commit.create(
        tree_hash=tree_hash,
        parent_hashes=[],
        author=AUTHOR,
        message="Test commit",
        timestamp=1700000000
    )


@pytest.fixture
def write_file(repo):
    """Write a file into the work tree, creating parent directories."""
    def _write(rel_path, content):
        path = repo.work_tree / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            content = content.encode()
        path.write_bytes(content)
        return path
    return _write


@pytest.fixture
def make_commit(repo, write_file):
    """
    Write files, stage them, and commit on top of HEAD.

    Usage: make_commit({'a.txt': 'content'}, message='msg')
    """
    counter = {'n': 0}

    def _commit(files=None, message="Test commit"):
        for rel_path, content in (files or {}).items():
            write_file(rel_path, content)
            repo.index.add_file(repo, rel_path)
        counter['n'] += 1
        return commit_index(repo, message, author=AUTHOR, timestamp=1700000000 + counter['n'])
    return _commit


@pytest.fixture
def repo_with_commits(repo, make_commit):
    """Repository with two commits on main."""
    first = make_commit({'file1.txt': 'Hello, World!'}, "First commit")
    second = make_commit({'file2.txt': 'Second file'}, "Second commit")
    repo.commits = [first, second]
    return repo


@pytest.fixture
def working_files(repo, write_file):
    """Create sample file structure in repository."""
    return {
        'file1': write_file('test1.txt', 'Content 1'),
        'file2': write_file('test2.txt', 'Content 2'),
        'file3': write_file('subdir/test3.txt', 'Content 3'),
    }


@pytest.fixture
def in_repo(repo, monkeypatch):
    """Run the test from inside the repository's work tree."""
    monkeypatch.chdir(repo.work_tree)
    return repo
