"""Reset command - reset current HEAD to a specified state."""

import click
from kit.operations.checkout import HARD, MIXED, SOFT, reset
from kit.cli.output import success, error, info, warning
from kit.cli.utils import require_repository, reporting_errors


@click.command('reset')
@click.argument('commit', default='HEAD')
@click.option('--soft', 'mode', flag_value=SOFT, help='Only move HEAD, keep index and working tree')
@click.option('--mixed', 'mode', flag_value=MIXED,
              help='Move HEAD and clear the index, keep working tree (default)')
@click.option('--hard', 'mode', flag_value=HARD,
              help='Move HEAD, clear the index, and replace the working tree (DESTRUCTIVE)')
def reset_cmd(commit, mode):
    """
    Move the current branch to a commit.

    Modes:
        --soft   Keep index and working tree unchanged
        --mixed  Clear the index but keep the working tree (default)
        --hard   Clear the index and make the working tree exactly the
                 commit's files (DESTRUCTIVE!)

    Examples:
        kit reset abc123...
        kit reset --soft main
        kit reset --hard v1.0
    """
    mode = mode or MIXED
    repo = require_repository()

    if commit == 'HEAD' and repo.refs.head_commit() is None:
        click.echo(error("No commits yet"))
        raise click.Abort()

    if mode == HARD:
        click.echo(warning("Performing hard reset - uncommitted changes will be lost!"))

    with reporting_errors():
        result = reset(repo, commit, mode)

    click.echo(success(f"HEAD is now at {result.commit_hash[:7]}"))
    if mode == HARD:
        click.echo(info(f"Working tree reset ({len(result.written)} files, {len(result.removed)} removed)"))
