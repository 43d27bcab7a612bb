"""Commit command - create a commit from staged changes."""

import click
from kit.operations.commit import commit_index
from kit.cli.output import success
from kit.cli.utils import require_repository, reporting_errors


@click.command('commit')
@click.option('-m', '--message', required=True, help='Commit message')
@click.option('--author', help='Override author as "Name <email>"')
def commit_cmd(message, author):
    """
    Record changes to the repository.

    Creates a commit from the staged snapshot, with the current HEAD
    commit (if any) as its parent, and advances the current branch.

    Examples:
        kit commit -m "Initial commit"
        kit commit -m "Fix bug" --author "Jane <jane@example.com>"
    """
    repo = require_repository()

    with reporting_errors():
        commit_hash = commit_index(repo, message, author=author)

    branch = repo.refs.current_branch() or 'detached HEAD'
    first_line = message.split('\n')[0]
    click.echo(success(f"[{branch} {commit_hash[:7]}] {first_line}"))
