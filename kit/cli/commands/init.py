"""Initialize a new Kit repository."""

import click
from pathlib import Path
from kit.core.repository import Repository
from kit.cli.output import success, error, info


@click.command('init')
@click.argument('path', default='.')
def init_cmd(path):
    """
    Initialize a new Kit repository.

    Creates a .kit directory with the necessary structure for version control.

    Examples:
        kit init                    # Initialize in current directory
        kit init my-project         # Initialize in my-project directory
    """
    repo_path = Path(path).resolve()

    if not repo_path.exists():
        repo_path.mkdir(parents=True)
        click.echo(info(f"Created directory {repo_path}"))

    try:
        repo = Repository(str(repo_path)).init()
    except FileExistsError:
        click.echo(error(f"Repository already exists at {repo_path}"))
        raise click.Abort()
    except PermissionError:
        click.echo(error(f"Permission denied: Cannot create repository at {path}"))
        raise click.Abort()

    click.echo(success(f"Initialized empty Kit repository in {repo.kit_dir}"))
