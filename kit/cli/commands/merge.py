"""Merge command - join another line of history into HEAD."""

import click
from kit.operations.merge import MergeEngine
from kit.cli.output import success, info
from kit.cli.utils import require_repository, reporting_errors


@click.command('merge')
@click.argument('ref')
def merge_cmd(ref):
    """
    Record a merge of REF into the current branch.

    Creates a commit whose parents are HEAD and REF and whose tree is the
    current index. File contents are not combined.

    Examples:
        kit merge feature
    """
    repo = require_repository()

    with reporting_errors():
        result = MergeEngine(repo).merge(ref)

    if result.up_to_date:
        click.echo(info(result.message))
        return

    if result.merge_base:
        click.echo(info(f"Merge base: {result.merge_base[:7]}"))
    click.echo(success(f"{result.message} ({result.commit_hash[:7]})"))
