"""Status command - show working tree status."""

import click
from colorama import Fore, Style
from kit.operations.status import StatusEngine
from kit.cli.output import info
from kit.cli.utils import require_repository, reporting_errors


def _section(title, color, paths):
    click.echo(f"{color}{title}{Style.RESET_ALL}")
    for path in paths:
        click.echo(f"  {color}{path}{Style.RESET_ALL}")
    click.echo()


@click.command('status')
def status_cmd():
    """
    Show the working tree status.

    Displays:
    - Changes staged for commit (index differs from HEAD)
    - Changes not staged for commit (working tree differs from index,
      or a committed file is no longer staged or present)
    - Untracked files (in neither the index nor HEAD)
    """
    repo = require_repository()

    with reporting_errors():
        report = StatusEngine(repo).status()

    if report.detached:
        click.echo(f"{Fore.YELLOW}HEAD detached at {report.head_commit[:7]}{Style.RESET_ALL}")
    else:
        click.echo(f"On branch {Fore.CYAN}{report.branch}{Style.RESET_ALL}")

    if report.no_commits:
        click.echo()
        click.echo("No commits yet")

    click.echo()

    if report.staged:
        _section("Changes to be committed:", Fore.GREEN, report.staged)

    if report.modified or report.deleted:
        click.echo(f"{Fore.YELLOW}Changes not staged for commit:{Style.RESET_ALL}")
        for path in report.modified:
            click.echo(f"  {Fore.YELLOW}modified:   {path}{Style.RESET_ALL}")
        for path in report.deleted:
            click.echo(f"  {Fore.YELLOW}deleted:    {path}{Style.RESET_ALL}")
        click.echo()

    if report.untracked:
        _section("Untracked files:", Fore.RED, report.untracked)

    if report.is_clean:
        click.echo("nothing to commit, working tree clean")
    elif not report.staged:
        click.echo(info("no changes added to commit (use \"kit add\")"))
