"""Add command - stage files for commit."""

import click
from pathlib import Path
from kit.cli.output import success, error, info
from kit.cli.utils import require_repository


@click.command('add')
@click.argument('paths', nargs=-1, required=True)
def add_cmd(paths):
    """
    Add file contents to the staging area.

    Stage files for the next commit. Directories are added recursively;
    the .kit directory is never staged. Modified files must be added
    again to stage the new changes.

    Examples:
        kit add file.txt
        kit add src
        kit add .
    """
    repo = require_repository()

    added_files = []
    failed_files = []

    for path_pattern in paths:
        resolved_path = Path(path_pattern)
        if not resolved_path.is_absolute():
            resolved_path = Path.cwd() / resolved_path

        try:
            staged = repo.index.add_path(repo, resolved_path)
        except (FileNotFoundError, ValueError) as e:
            failed_files.append((path_pattern, str(e)))
            continue

        added_files.extend(staged)

    if added_files:
        click.echo(success(f"Added {len(added_files)} file(s) to staging area"))
        for file in added_files:
            click.echo(info(f"  {file}"))

    if failed_files:
        for file, reason in failed_files:
            click.echo(error(f"  {file}: {reason}"))
        raise click.Abort()
