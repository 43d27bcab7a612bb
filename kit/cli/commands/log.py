"""Log command - show commit history."""

import click
from datetime import datetime, timezone
from colorama import Fore, Style
from kit.operations.history import CommitGraph
from kit.cli.output import info
from kit.cli.utils import require_repository, reporting_errors


def format_timestamp(timestamp):
    """Format Unix timestamp to readable UTC date."""
    return datetime.fromtimestamp(int(timestamp), tz=timezone.utc).strftime("%a %b %d %H:%M:%S %Y")


@click.command('log')
@click.argument('ref', required=False, default='HEAD')
@click.option('-n', '--max-count', type=int, help='Limit number of commits')
@click.option('--oneline', is_flag=True, help='Show each commit on one line')
def log_cmd(ref, max_count, oneline):
    """
    Show commit logs, newest first, following first parents.

    Examples:
        kit log                 # History of HEAD
        kit log feature         # History of a branch
        kit log -n 5 --oneline  # Last 5 commits, compact
    """
    repo = require_repository()

    with reporting_errors():
        if ref == 'HEAD':
            start = repo.refs.head_commit()
            if start is None:
                click.echo(info("No commits yet"))
                return
        else:
            start = repo.refs.resolve_or_fail(ref)

        for count, (commit_hash, commit) in enumerate(CommitGraph(repo).log(start)):
            if max_count is not None and count >= max_count:
                break

            subject = commit.message.split('\n')[0]
            if oneline:
                click.echo(f"{Fore.YELLOW}{commit_hash[:7]}{Style.RESET_ALL} {subject}")
                continue

            click.echo(f"{Fore.YELLOW}commit {commit_hash}{Style.RESET_ALL}")
            if len(commit.parents) > 1:
                click.echo("Merge: " + ' '.join(p[:7] for p in commit.parents))
            click.echo(f"Author: {commit.author}")
            click.echo(f"Date:   {format_timestamp(commit.author_time)} {commit.author_timezone}")
            click.echo()
            for line in commit.message.split('\n'):
                click.echo(f"    {line}")
            click.echo()
