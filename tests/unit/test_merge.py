"""Merge tests."""

import pytest
from kit.core.errors import InvalidReference, RefNotFound
from kit.operations.merge import MergeEngine

AUTHOR = "Test User <test@example.com>"


@pytest.fixture
def diverged(repo, make_commit):
    """main and feature both build on a common base commit."""
    base = make_commit({'a.txt': 'A'}, 'base')
    repo.refs.create_branch('feature', base)

    repo.refs.attach_head('feature')
    feature_tip = make_commit({'f.txt': 'F'}, 'feature')

    repo.refs.attach_head('main')
    repo.index.remove('f.txt')
    main_tip = make_commit({'m.txt': 'M'}, 'main')
    return {'base': base, 'feature': feature_tip, 'main': main_tip}


def test_merge_creates_two_parent_commit(repo, diverged):
    result = MergeEngine(repo).merge('feature', author=AUTHOR, timestamp=1)

    commit = repo.read_object(result.commit_hash, expected='commit')
    assert commit.parents == [diverged['main'], diverged['feature']]
    assert commit.message == "Merge branch 'feature'"
    assert result.merge_base == diverged['base']
    assert repo.refs.branch_commit('main') == result.commit_hash


def test_merge_tree_comes_from_index(repo, diverged):
    result = MergeEngine(repo).merge('feature', author=AUTHOR)

    commit = repo.read_object(result.commit_hash)
    main_commit = repo.read_object(diverged['main'])
    assert commit.tree == main_commit.tree


def test_merge_same_commit_is_up_to_date(repo, diverged):
    result = MergeEngine(repo).merge('main')

    assert result.up_to_date
    assert result.message == "Already up to date"
    assert repo.refs.head_commit() == diverged['main']


def test_merge_without_commits(repo, sample_commit):
    other = repo.write_object(sample_commit)
    repo.refs.create_branch('other', other)

    with pytest.raises(RefNotFound) as exc_info:
        MergeEngine(repo).merge('other')
    assert exc_info.value.identifier == 'HEAD'


def test_merge_invalid_ref(repo, diverged):
    with pytest.raises(InvalidReference):
        MergeEngine(repo).merge('no-such-branch')
