"""Main CLI entry point for Kit."""

import logging

import click
from colorama import init

from kit import __version__
from kit.cli.output import BANNER
from kit.cli.commands import (init_cmd, add_cmd, commit_cmd, config_cmd, status_cmd, log_cmd,
                              branch_cmd, tag_cmd, checkout_cmd, reset_cmd, merge_cmd, diff_cmd,
                              hash_object_cmd, cat_file_cmd, ls_tree_cmd, write_tree_cmd,
                              commit_tree_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)


class KitGroup(click.Group):
    """Custom Group class to display banner before help."""

    def format_help(self, ctx, formatter):
        """Override to add banner before help text."""
        click.echo(BANNER)
        super().format_help(ctx, formatter)


@click.group(cls=KitGroup)
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Log internal operations to stderr')
def cli(verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )


# Register commands
cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(commit_cmd)
cli.add_command(config_cmd)
cli.add_command(status_cmd)
cli.add_command(log_cmd)
cli.add_command(branch_cmd)
cli.add_command(tag_cmd)
cli.add_command(checkout_cmd)
cli.add_command(reset_cmd)
cli.add_command(merge_cmd)
cli.add_command(diff_cmd)
cli.add_command(hash_object_cmd)
cli.add_command(cat_file_cmd)
cli.add_command(ls_tree_cmd)
cli.add_command(write_tree_cmd)
cli.add_command(commit_tree_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
