"""Configuration tests."""

import pytest
from kit.core.config import Config, format_identity, get_config


def test_get_fallback(repo):
    assert repo.config.get('user', 'name') is None
    assert repo.config.get('user', 'name', fallback='x') == 'x'


def test_set_and_get_repo_value(repo):
    repo.config.set('user', 'name', 'Alice')
    assert get_config(repo).get('user', 'name') == 'Alice'


def test_repo_overrides_global(repo):
    Config().set('user', 'email', 'global@example.com', global_config=True)
    assert get_config(repo).get('user', 'email') == 'global@example.com'

    repo.config.set('user', 'email', 'local@example.com')
    assert get_config(repo).get('user', 'email') == 'local@example.com'


def test_environment_overrides_everything(repo, monkeypatch):
    repo.config.set('user', 'name', 'File Name')
    monkeypatch.setenv('KIT_USER_NAME', 'Env Name')
    assert get_config(repo).get('user', 'name') == 'Env Name'


def test_unset(repo):
    repo.config.set('user', 'name', 'Alice')

    assert get_config(repo).unset('user', 'name') is True
    assert get_config(repo).get('user', 'name') is None
    assert get_config(repo).unset('user', 'name') is False


def test_list_all(repo):
    Config().set('alias', 'co', 'checkout', global_config=True)
    repo.config.set('user', 'name', 'Alice')

    values = get_config(repo).list_all()
    assert values['alias'] == {'co': 'checkout'}
    assert values['user'] == {'name': 'Alice'}
    assert values['core']['bare'] == 'false'


def test_set_without_repo_requires_global():
    with pytest.raises(ValueError):
        Config().set('user', 'name', 'x')


def test_identity_fallback(repo, monkeypatch):
    monkeypatch.setattr('kit.core.config.getpass.getuser', lambda: 'osuser')
    assert repo.config.get_user_identity() == ('osuser', 'unknown@example.com')


def test_identity_when_os_user_unknown(repo, monkeypatch):
    def no_user():
        raise KeyError('no passwd entry')
    monkeypatch.setattr('kit.core.config.getpass.getuser', no_user)
    assert repo.config.get_user_identity()[0] == 'Unknown'


def test_identity_configured(repo_with_config):
    assert repo_with_config.config.get_user_identity() == ('Test User', 'test@example.com')


def test_format_identity():
    assert format_identity('A B', 'ab@example.com') == 'A B <ab@example.com>'
