"""Checkout command - switch branches or commits."""

import click
from kit.operations.checkout import checkout
from kit.cli.output import success, info
from kit.cli.utils import require_repository, reporting_errors


@click.command('checkout')
@click.argument('ref')
def checkout_cmd(ref):
    """
    Switch to a branch, tag, or commit.

    The working tree and index are replaced by the target commit's files.
    Files tracked by the previous commit but absent from the target are
    removed; untracked files are kept. Checking out anything other than a
    branch detaches HEAD.

    Examples:
        kit checkout feature
        kit checkout v1.0
    """
    repo = require_repository()

    with reporting_errors():
        result = checkout(repo, ref)

    for path in result.removed:
        click.echo(info(f"Removed: {path}"))

    if result.detached:
        click.echo(success(f"HEAD is now at {result.commit_hash[:7]}"))
    else:
        click.echo(success(f"Switched to branch '{result.branch}'"))
