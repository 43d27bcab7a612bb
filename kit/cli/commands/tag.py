"""Tag command - create, list, or delete tags."""

import click
from kit.cli.output import success, error, short
from kit.cli.utils import require_repository, reporting_errors


@click.command('tag')
@click.argument('name', required=False)
@click.argument('commit', required=False, default='HEAD')
@click.option('-d', '--delete', is_flag=True, help='Delete a tag')
def tag_cmd(name, commit, delete):
    """
    Create, list, or delete tags.

    Tags point directly at a commit and never move.

    Examples:
        kit tag                     # List all tags
        kit tag v1.0                # Tag HEAD
        kit tag v1.0 feature        # Tag the tip of a branch
        kit tag -d v1.0             # Delete a tag
    """
    repo = require_repository()
    refs = repo.refs

    with reporting_errors():
        if delete:
            if not name:
                click.echo(error("Tag name required for deletion"))
                raise click.Abort()
            refs.delete_tag(name)
            click.echo(success(f"Deleted tag '{name}'"))
            return

        if not name:
            for tag, commit_hash in refs.list_tags():
                click.echo(f"{tag} {short(commit_hash)}")
            return

        commit_hash = refs.resolve_or_fail(commit)
        if not refs.create_tag(name, commit_hash):
            click.echo(error(f"Tag '{name}' already exists"))
            raise click.Abort()

    click.echo(success(f"Created tag '{name}' at {commit_hash[:7]}"))
