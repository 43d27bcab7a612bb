"""Status classification tests."""

from kit.core.hash import hash_blob
from kit.operations.status import StatusEngine, classify

H1 = '1' * 40
H2 = '2' * 40
H3 = '3' * 40


def test_classify_staged_new_and_changed():
    report = classify({'a': H1, 'b': H1}, {'a': H2, 'b': H1, 'c': H3}, {'a': H2, 'b': H1, 'c': H3})
    assert report.staged == ['a', 'c']
    assert report.modified == []
    assert report.deleted == []


def test_classify_modified_working_copy():
    report = classify({'f': H1}, {'f': H1}, {'f': H2})
    assert report.modified == ['f']
    assert report.staged == []


def test_classify_committed_but_unstaged_is_deleted():
    report = classify({'f': H1}, {}, {'f': H1})
    assert report.deleted == ['f']
    assert report.untracked == []


def test_classify_removed_from_disk():
    report = classify({}, {'f': H1}, {})
    assert report.deleted == ['f']
    assert report.staged == ['f']


def test_classify_deleted_reported_once():
    report = classify({'f': H1}, {'f': H1}, {})
    assert report.deleted == ['f']


def test_classify_untracked():
    report = classify({'tracked': H1}, {'tracked': H1}, {'tracked': H1, 'new.txt': H2})
    assert report.untracked == ['new.txt']
    assert not report.is_clean


def test_classify_clean():
    report = classify({'f': H1}, {'f': H1}, {'f': H1})
    assert report.is_clean


def test_empty_repository_reports_no_commits(repo):
    report = StatusEngine(repo).status()

    assert report.no_commits
    assert report.branch == 'main'
    assert report.is_clean


def test_status_scenario_modify_then_restage(repo, make_commit, write_file):
    make_commit({'f.txt': 'h1 content'}, 'add f')

    write_file('f.txt', 'h2 content')
    report = StatusEngine(repo).status()
    assert report.modified == ['f.txt']
    assert report.staged == []
    assert not report.no_commits

    repo.index.add_file(repo, 'f.txt')
    report = StatusEngine(repo).status()
    assert report.staged == ['f.txt']
    assert report.modified == []


def test_status_is_read_only(repo, make_commit, write_file):
    make_commit({'f.txt': 'x'})
    write_file('untracked.txt', 'never stored')
    index_before = repo.index_file.read_bytes()

    report = StatusEngine(repo).status()

    assert report.untracked == ['untracked.txt']
    assert repo.index_file.read_bytes() == index_before
    assert not repo.object_exists(hash_blob(b'never stored'))


def test_status_detached(repo, make_commit):
    commit_hash = make_commit({'f.txt': 'x'})
    repo.refs.set_head_detached(commit_hash)

    report = StatusEngine(repo).status()
    assert report.detached
    assert report.head_commit == commit_hash
