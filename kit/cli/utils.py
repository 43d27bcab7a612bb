"""Helpers shared by the CLI commands."""

from contextlib import contextmanager

import click

from kit.cli.output import error
from kit.core.errors import KitError
from kit.core.repository import Repository


def require_repository() -> Repository:
    """Find the enclosing repository or abort the command."""
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a kit repository"))
        raise click.Abort()
    return repo


@contextmanager
def reporting_errors():
    """Print Kit failures through the error formatter and abort."""
    try:
        yield
    except KitError as e:
        click.echo(error(str(e)))
        raise click.Abort()
