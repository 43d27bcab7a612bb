"""Integration tests for branch, tag, checkout, merge, diff and reset."""

import pytest
from click.testing import CliRunner
from kit.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def committed(runner, in_repo, write_file):
    """Repository with one commit containing a.txt."""
    write_file('a.txt', 'A')
    runner.invoke(cli, ['add', 'a.txt'])
    runner.invoke(cli, ['commit', '-m', 'base'])
    return in_repo


def test_branch_before_first_commit(runner, in_repo):
    result = runner.invoke(cli, ['branch', 'feature'])

    assert result.exit_code != 0
    assert 'Reference not found: HEAD' in result.output


def test_branch_create_and_list(runner, committed):
    assert runner.invoke(cli, ['branch', 'feature']).exit_code == 0

    result = runner.invoke(cli, ['branch'])
    assert '* main' in result.output
    assert '  feature' in result.output


def test_branch_duplicate(runner, committed):
    runner.invoke(cli, ['branch', 'feature'])
    result = runner.invoke(cli, ['branch', 'feature'])
    assert result.exit_code != 0
    assert 'already exists' in result.output


def test_branch_delete_current_refused(runner, committed):
    result = runner.invoke(cli, ['branch', '-d', 'main'])

    assert result.exit_code != 0
    assert "Cannot delete branch 'main'" in result.output


def test_branch_delete(runner, committed):
    runner.invoke(cli, ['branch', 'feature'])
    assert runner.invoke(cli, ['branch', '-d', 'feature']).exit_code == 0
    assert not committed.refs.branch_exists('feature')


def test_branch_delete_missing(runner, committed):
    result = runner.invoke(cli, ['branch', '-d', 'ghost'])
    assert 'Reference not found: refs/heads/ghost' in result.output


def test_tag_workflow(runner, committed):
    assert runner.invoke(cli, ['tag', 'v1.0']).exit_code == 0
    assert 'v1.0' in runner.invoke(cli, ['tag']).output
    assert committed.refs.tag_commit('v1.0') == committed.refs.head_commit()

    assert runner.invoke(cli, ['tag', '-d', 'v1.0']).exit_code == 0
    assert runner.invoke(cli, ['tag', '-d', 'v1.0']).exit_code != 0


def test_checkout_switches_branch(runner, committed, write_file):
    runner.invoke(cli, ['branch', 'feature'])
    result = runner.invoke(cli, ['checkout', 'feature'])
    assert "Switched to branch 'feature'" in result.output

    write_file('b.txt', 'B')
    runner.invoke(cli, ['add', 'b.txt'])
    runner.invoke(cli, ['commit', '-m', 'feature work'])

    result = runner.invoke(cli, ['checkout', 'main'])
    assert result.exit_code == 0
    assert 'Removed: b.txt' in result.output
    assert not (committed.work_tree / 'b.txt').exists()


def test_checkout_unknown_ref(runner, committed):
    result = runner.invoke(cli, ['checkout', 'nowhere'])
    assert result.exit_code != 0
    assert 'Not a valid reference: nowhere' in result.output


def test_checkout_detached_status(runner, committed):
    head = committed.refs.head_commit()
    runner.invoke(cli, ['checkout', head])

    result = runner.invoke(cli, ['status'])
    assert f'HEAD detached at {head[:7]}' in result.output


def test_merge_command(runner, committed, write_file):
    runner.invoke(cli, ['branch', 'feature'])
    runner.invoke(cli, ['checkout', 'feature'])
    write_file('f.txt', 'F')
    runner.invoke(cli, ['add', 'f.txt'])
    runner.invoke(cli, ['commit', '-m', 'feature'])
    feature_tip = committed.refs.head_commit()

    runner.invoke(cli, ['checkout', 'main'])
    main_tip = committed.refs.head_commit()

    result = runner.invoke(cli, ['merge', 'feature'])
    assert result.exit_code == 0
    assert "Merge branch 'feature'" in result.output

    merge = committed.read_object(committed.refs.head_commit())
    assert merge.parents == [main_tip, feature_tip]

    again = runner.invoke(cli, ['merge', 'main'])
    assert 'Already up to date' in again.output


def test_diff_command(runner, committed, write_file):
    result = runner.invoke(cli, ['diff'])
    assert 'No differences found' in result.output

    write_file('a.txt', 'changed')
    write_file('b.txt', 'new')

    result = runner.invoke(cli, ['diff', '--no-color'])
    assert 'diff --kit a/a.txt b/a.txt' in result.output
    assert 'index ' in result.output
    assert 'new file' in result.output


def test_diff_between_refs(runner, committed, write_file):
    runner.invoke(cli, ['tag', 'v1'])
    write_file('b.txt', 'B')
    runner.invoke(cli, ['add', 'b.txt'])
    runner.invoke(cli, ['commit', '-m', 'second'])

    result = runner.invoke(cli, ['diff', 'v1', 'main'])
    assert 'diff --kit a/b.txt b/b.txt' in result.output
    assert 'new file' in result.output


def test_reset_hard_command(runner, committed, write_file):
    base = committed.refs.head_commit()
    write_file('b.txt', 'B')
    runner.invoke(cli, ['add', 'b.txt'])
    runner.invoke(cli, ['commit', '-m', 'second'])

    result = runner.invoke(cli, ['reset', '--hard', base])

    assert result.exit_code == 0
    assert committed.refs.head_commit() == base
    assert not (committed.work_tree / 'b.txt').exists()
    assert committed.index.read() == {}


def test_reset_default_is_mixed(runner, committed, write_file):
    base = committed.refs.head_commit()
    write_file('b.txt', 'B')
    runner.invoke(cli, ['add', 'b.txt'])
    runner.invoke(cli, ['commit', '-m', 'second'])

    runner.invoke(cli, ['reset', base])

    assert committed.refs.head_commit() == base
    assert (committed.work_tree / 'b.txt').exists()
    assert committed.index.read() == {}


def test_branch_name_outside_refs_rejected(runner, committed):
    result = runner.invoke(cli, ['branch', '../../escaped'])

    assert result.exit_code != 0
    assert 'Not a valid reference: ../../escaped' in result.output
    assert not (committed.kit_dir / 'escaped').exists()
