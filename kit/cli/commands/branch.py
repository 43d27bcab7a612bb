"""Branch command - manage branches."""

import click
from colorama import Fore, Style
from kit.core.errors import RefNotFound
from kit.cli.output import success, error, short
from kit.cli.utils import require_repository, reporting_errors


@click.command('branch')
@click.argument('name', required=False)
@click.argument('start_point', required=False)
@click.option('-d', '--delete', is_flag=True, help='Delete a branch')
def branch_cmd(name, start_point, delete):
    """
    List, create, or delete branches.

    Examples:
        kit branch                  # List all branches
        kit branch feature          # Create branch at HEAD
        kit branch feature v1.0     # Create branch at a tag or commit
        kit branch -d feature       # Delete branch
    """
    repo = require_repository()
    refs = repo.refs

    with reporting_errors():
        if delete:
            if not name:
                click.echo(error("Branch name required for deletion"))
                raise click.Abort()
            refs.delete_branch(name)
            click.echo(success(f"Deleted branch '{name}'"))
            return

        if not name:
            current = refs.current_branch() if not refs.is_detached() else None
            for branch, commit_hash in refs.list_branches():
                if branch == current:
                    click.echo(f"* {Fore.GREEN}{branch}{Style.RESET_ALL} {short(commit_hash)}")
                else:
                    click.echo(f"  {branch} {short(commit_hash)}")
            return

        if start_point:
            commit_hash = refs.resolve_or_fail(start_point)
        else:
            commit_hash = refs.head_commit()
            if commit_hash is None:
                raise RefNotFound('HEAD')

        if not refs.create_branch(name, commit_hash):
            click.echo(error(f"Branch '{name}' already exists"))
            raise click.Abort()

    click.echo(success(f"Created branch '{name}' at {commit_hash[:7]}"))
