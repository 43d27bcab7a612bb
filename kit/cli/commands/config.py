"""Config command - manage repository configuration."""

import click
from kit.core.config import Config, get_config
from kit.core.repository import Repository
from kit.cli.output import success, error, info


def _split_key(key):
    return key.split('.', 1) if '.' in key else ('core', key)


def _config_for(is_global):
    if is_global:
        return Config()

    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a kit repository (use --global for global config)"))
        raise click.Abort()
    return get_config(repo)


@click.group('config')
def config_cmd():
    """Get and set repository or global options."""
    pass


@config_cmd.command('set')
@click.argument('key')
@click.argument('value')
@click.option('--global', 'is_global', is_flag=True, help='Set global config')
def config_set(key, value, is_global):
    """
    Set a config value.

    Examples:
        kit config set user.name "Your Name"
        kit config set --global user.email "you@example.com"
    """
    section, option = _split_key(key)
    _config_for(is_global).set(section, option, value, global_config=is_global)

    scope = "global" if is_global else "repository"
    click.echo(success(f"Set {scope} config: {key} = {value}"))


@config_cmd.command('get')
@click.argument('key')
def config_get(key):
    """
    Get a config value (environment, then repository, then global).

    Examples:
        kit config get user.name
    """
    repo = Repository.find_repository()
    section, option = _split_key(key)

    value = get_config(repo).get(section, option)
    if value is None:
        click.echo(error(f"Config key not found: {key}"))
        raise click.Abort()
    click.echo(value)


@config_cmd.command('unset')
@click.argument('key')
@click.option('--global', 'is_global', is_flag=True, help='Unset global config')
def config_unset(key, is_global):
    """Remove a config value."""
    section, option = _split_key(key)

    if not _config_for(is_global).unset(section, option, global_config=is_global):
        click.echo(error(f"Config key not found: {key}"))
        raise click.Abort()
    click.echo(success(f"Unset {key}"))


@config_cmd.command('list')
def config_list():
    """List all config values, repository values overriding global ones."""
    repo = Repository.find_repository()
    values = get_config(repo).list_all()

    if not values:
        click.echo(info("No configuration set"))
        return

    for section, items in sorted(values.items()):
        for key, value in sorted(items.items()):
            click.echo(f"{section}.{key}={value}")
