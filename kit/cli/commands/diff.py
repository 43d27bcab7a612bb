"""Diff command - show changed paths between commits and the working tree."""

import click
from kit.operations.diff import DiffEngine
from kit.cli.output import info
from kit.cli.utils import require_repository, reporting_errors


@click.command('diff')
@click.argument('refs', nargs=-1)
@click.option('--no-color', is_flag=True, help='Disable colored output')
def diff_cmd(refs, no_color):
    """
    Show which files differ, by content hash.

    Without arguments, compares HEAD with the working tree.
    With one ref, compares that ref with HEAD.
    With two refs, compares the first with the second.

    Examples:
        kit diff
        kit diff main
        kit diff v1.0 feature
    """
    if len(refs) > 2:
        raise click.UsageError("diff takes at most two references")

    repo = require_repository()
    engine = DiffEngine(repo)

    with reporting_errors():
        changes = engine.diff_refs(list(refs))

    if not changes:
        click.echo(info("No differences found"))
        return

    click.echo(engine.format_diff(changes, color=not no_color))
