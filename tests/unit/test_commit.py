"""Commit-from-index tests."""

import pytest
from kit.core.errors import EmptyStagingArea, MissingCommitMessage
from kit.operations.commit import commit_index


def test_first_commit_is_root(repo, write_file):
    write_file('a.txt', 'hello')
    repo.index.add_file(repo, 'a.txt')

    commit_hash = commit_index(repo, 'first', author='A <a@example.com>')

    commit = repo.read_object(commit_hash, expected='commit')
    assert commit.parents == []
    assert commit.message == 'first'
    assert repo.refs.branch_commit('main') == commit_hash


def test_commit_parent_is_head(repo, make_commit):
    first = make_commit({'a.txt': '1'})
    second = make_commit({'a.txt': '2'})

    assert repo.read_object(second).parents == [first]


def test_commit_keeps_index(repo, make_commit):
    make_commit({'a.txt': '1'})
    assert list(repo.index.read()) == ['a.txt']


def test_commit_empty_index(repo):
    with pytest.raises(EmptyStagingArea):
        commit_index(repo, 'nothing')


def test_commit_requires_message(repo, write_file):
    write_file('a.txt', 'x')
    repo.index.add_file(repo, 'a.txt')

    with pytest.raises(MissingCommitMessage):
        commit_index(repo, '')
    assert repo.refs.head_commit() is None


def test_commit_on_detached_head(repo, make_commit):
    first = make_commit({'a.txt': '1'})
    repo.refs.set_head_detached(first)

    second = make_commit({'a.txt': '2'})

    assert repo.head_file.read_text() == second + '\n'
    assert repo.refs.branch_commit('main') == first


def test_commit_uses_configured_identity(repo_with_config, write_file):
    write_file('a.txt', 'x')
    repo_with_config.index.add_file(repo_with_config, 'a.txt')

    commit = repo_with_config.read_object(commit_index(repo_with_config, 'msg'))
    assert commit.author == 'Test User <test@example.com>'
