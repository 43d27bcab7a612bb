"""Plumbing commands - inspect and create objects directly."""

import click
from colorama import Fore, Style

from kit.core.objects import Blob, Commit, Tree
from kit.operations.history import CommitGraph
from kit.operations.tree import TreeBuilder
from kit.cli.utils import require_repository, reporting_errors


@click.command('hash-object')
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def hash_object_cmd(file):
    """
    Store a file as a blob and print its hash.

    Examples:
        kit hash-object README.md
    """
    repo = require_repository()
    click.echo(repo.write_object(Blob.from_file(file)))


@click.command('cat-file')
@click.option('-t', '--type', 'show_type', is_flag=True, help='Show object type')
@click.option('-s', '--size', 'show_size', is_flag=True, help='Show object size')
@click.option('-p', '--pretty', is_flag=True, help='Pretty-print object content')
@click.argument('object_hash')
def cat_file_cmd(show_type, show_size, pretty, object_hash):
    """
    Show object content, type, or size.

    Examples:
        kit cat-file -t abc123...     # Show object type
        kit cat-file -s abc123...     # Show object size
        kit cat-file -p abc123...     # Pretty-print object content
    """
    repo = require_repository()

    with reporting_errors():
        if show_type or show_size:
            obj_type, content = repo.load(object_hash)
            click.echo(obj_type if show_type else len(content))
            return

        obj = repo.read_object(object_hash)

    if isinstance(obj, Commit):
        click.echo(f"tree {obj.tree}")
        for parent in obj.parents:
            click.echo(f"parent {parent}")
        click.echo(f"author {obj.author} {obj.author_time} {obj.author_timezone}")
        click.echo(f"committer {obj.committer} {obj.committer_time} {obj.committer_timezone}")
        click.echo()
        click.echo(obj.message)
    elif isinstance(obj, Tree):
        for entry in obj.entries:
            click.echo(f"{entry.mode} {entry.type} {entry.hash}\t{entry.name}")
    elif pretty:
        try:
            click.echo(obj.data.decode('utf-8'), nl=False)
        except UnicodeDecodeError:
            click.echo(f"<binary data: {len(obj.data)} bytes>")
    else:
        click.echo(obj.data, nl=False)


@click.command('ls-tree')
@click.option('-r', '--recursive', is_flag=True, help='Recurse into sub-trees')
@click.option('--name-only', is_flag=True, help='Show only file names')
@click.argument('treeish', required=False, default='HEAD')
def ls_tree_cmd(recursive, name_only, treeish):
    """
    List contents of a tree object.

    TREEISH can be a tree hash, a commit hash, a branch name, or a tag.
    Defaults to HEAD.

    Examples:
        kit ls-tree                  # Show tree for HEAD
        kit ls-tree -r main          # Recursively list all files on main
        kit ls-tree --name-only HEAD # Only show file names
    """
    repo = require_repository()

    with reporting_errors():
        tree_hash = _resolve_tree(repo, treeish)
        _display_tree(repo, tree_hash, '', recursive, name_only)


def _resolve_tree(repo, treeish):
    if repo.object_exists(treeish):
        obj_type, _ = repo.load(treeish)
        if obj_type == 'tree':
            return treeish

    commit = repo.read_object(repo.refs.resolve_or_fail(treeish), expected='commit')
    return commit.tree


def _display_tree(repo, tree_hash, prefix, recursive, name_only):
    tree = repo.read_object(tree_hash, expected='tree')

    for entry in tree.entries:
        full_path = f"{prefix}{entry.name}"

        if recursive and entry.type == 'tree':
            _display_tree(repo, entry.hash, full_path + '/', recursive, name_only)
        elif name_only:
            click.echo(full_path)
        else:
            click.echo(f"{entry.mode} {entry.type} {Fore.YELLOW}{entry.hash}{Style.RESET_ALL}\t{full_path}")


@click.command('write-tree')
def write_tree_cmd():
    """
    Snapshot the working tree as tree objects and print the root hash.

    Every file is stored as a blob; the index is not consulted.
    """
    repo = require_repository()
    click.echo(TreeBuilder(repo).from_working_tree())


@click.command('commit-tree')
@click.argument('tree_hash')
@click.option('-p', '--parent', 'parents', multiple=True, help='Parent commit (repeatable)')
@click.option('-m', '--message', help='Commit message')
def commit_tree_cmd(tree_hash, parents, message):
    """
    Create a commit object from a tree without moving any reference.

    Examples:
        kit commit-tree <tree> -m "Initial"
        kit commit-tree <tree> -p <parent> -m "Next"
    """
    repo = require_repository()

    with reporting_errors():
        repo.read_object(tree_hash, expected='tree')
        for parent in parents:
            repo.read_object(parent, expected='commit')

        click.echo(CommitGraph(repo).create_commit(tree_hash, parents=parents, message=message))
