from pathlib import Path

import pytest

from config import Settings, load_settings
from errors import ConfigError


def test_defaults():
    settings = load_settings({})

    assert settings.source == 'api'
    assert settings.api_url == 'http://localhost:3000'
    assert settings.timeout == 10.0
    assert settings.print_tickets is True
    assert settings.seed_file is None


def test_environment_values():
    settings = load_settings({
        'FILMS_SOURCE': 'LOCAL',
        'FILMS_TIMEOUT': '2.5',
        'FILMS_DB': '/tmp/films.db',
        'FILMS_PRINT_TICKETS': 'no',
        'FILMS_THEME': 'night',
        'FILMS_LOG_LEVEL': 'debug',
    })

    assert settings.source == 'local'
    assert settings.timeout == 2.5
    assert settings.db_path == Path('/tmp/films.db')
    assert settings.print_tickets is False
    assert settings.theme == 'night'
    assert settings.log_level == 'DEBUG'


def test_overrides_win_and_none_is_ignored():
    settings = load_settings(
        {'FILMS_SOURCE': 'local', 'FILMS_LANG': 'bg'},
        source='api',
        lang=None,
        db_path='other.db',
    )

    assert settings.source == 'api'
    assert settings.lang == 'bg'
    assert settings.db_path == Path('other.db')


@pytest.mark.parametrize(
    'environ',
    [
        {'FILMS_SOURCE': 'ftp'},
        {'FILMS_API_URL': 'localhost:3000'},
        {'FILMS_TIMEOUT': 'soon'},
        {'FILMS_TIMEOUT': '0'},
        {'FILMS_PRINT_TICKETS': 'maybe'},
        {'FILMS_LANG': 'fr'},
        {'FILMS_LOG_LEVEL': 'LOUD'},
    ],
)
def test_invalid_values(environ):
    with pytest.raises(ConfigError):
        load_settings(environ)


def test_settings_validated_is_a_copy():
    settings = Settings(log_level='warning')

    assert settings.validated().log_level == 'WARNING'
    assert settings.log_level == 'warning'
