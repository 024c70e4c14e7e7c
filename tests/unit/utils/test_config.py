"""Unit tests for configuration utilities in config.py

Test coverage includes:

1. Environment variable resolution
   - Ensures app_env(), app_name(), app_prefix() correctly read environment variables.

2. MapperConfig validation
   - Ensures defaults are valid and invalid values raise BadConfigurationError.
   - Ensures sweep_at is parsed into a time of day.

3. Configuration sources
   - Ensures from_environment() reads mapper and Redis settings.
   - Ensures from_document() reads an AppConfig document.

4. Configuration loading behavior
   - Ensures load_config() fetches from AppConfig when all identifiers are set.
   - Ensures load_config() falls back to environment variables otherwise.
   - Ensures load_config() propagates ClientError when AppConfig calls fail.
"""

import os
import json
from io import BytesIO
from datetime import time
from unittest.mock import MagicMock

import pytest
import botocore

from urlmapper.utils import config
from urlmapper.utils.config import MapperConfig
from urlmapper.exceptions import BadConfigurationError


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def appconfig_env(monkeypatch):
    """Set up AppConfig identifiers for testing."""
    monkeypatch.setenv('APPCONFIG_APP_ID', 'app123')
    monkeypatch.setenv('APPCONFIG_ENV_ID', 'env123')
    monkeypatch.setenv('APPCONFIG_PROFILE_ID', 'prof123')


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        'APPCONFIG_APP_ID',
        'APPCONFIG_ENV_ID',
        'APPCONFIG_PROFILE_ID',
        'BASE_URL',
        'DEFAULT_TTL_HOURS',
        'SWEEP_AT',
        'SWEEP_INTERVAL_SECONDS',
        'MAPPING_BACKEND',
        'REDIS_HOST',
        'REDIS_PORT',
        'REDIS_DB',
        'REDIS_USERNAME',
        'REDIS_PASSWORD',
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def appconfig_payload():
    """Provide a default AppConfig payload used by multiple tests."""
    # fmt: off
    return {
        'build': 42,
        'active_backend': 'redis',
        'mapper': {
            'base_url': 'https://sho.rt',
            'default_ttl_hours': 24,
            'sweep_at': '04:30',
        },
        'backends': {
            'redis': {
                'host': 'monkey',
                'port': 6380,
                'db': 3
            }
        },
    }
    # fmt: on


@pytest.fixture
def appconfig_client(monkeypatch, appconfig_payload):
    """Mock the AppConfig Data client returned by boto3."""
    mock_appconfig = MagicMock()
    mock_appconfig.start_configuration_session.return_value = {'InitialConfigurationToken': 'monkey_token'}
    mock_appconfig.get_latest_configuration.return_value = {
        'Configuration': BytesIO(json.dumps(appconfig_payload).encode('utf-8')),
    }
    monkeypatch.setattr(config.boto3, 'client', lambda service: mock_appconfig)
    return mock_appconfig


# -------------------------------
# 1. Environment variable resolution
# -------------------------------


def test_app_env(monkeypatch):
    """Ensure app_env() returns the correct environment value from APP_ENV"""
    monkeypatch.setitem(os.environ, 'APP_ENV', 'TEST')
    assert config.app_env() == 'test'


def test_app_env_defaults_to_local(monkeypatch):
    monkeypatch.delitem(os.environ, 'APP_ENV', raising=False)
    assert config.app_env() == 'local'


def test_app_name_not_set(monkeypatch):
    """Ensure app_name() returns None when APP_NAME is not set"""
    monkeypatch.delitem(os.environ, 'APP_NAME', raising=False)
    assert config.app_name() is None
    assert config.app_prefix() is None


def test_app_prefix(monkeypatch):
    """Ensure app_prefix() combines APP_NAME and APP_ENV"""
    monkeypatch.setitem(os.environ, 'APP_NAME', 'urlmapper')
    monkeypatch.setitem(os.environ, 'APP_ENV', 'test')
    assert config.app_prefix() == 'urlmapper:test'


# -------------------------------
# 2. MapperConfig validation
# -------------------------------


def test_defaults():
    mapper_config = MapperConfig()

    assert mapper_config.base_url == 'http://localhost:8080'
    assert mapper_config.default_ttl_hours == 0
    assert mapper_config.sweep_time == time(3, 0)
    assert mapper_config.sweep_interval_seconds is None
    assert mapper_config.backend == 'memory'


@pytest.mark.parametrize(
    'kwargs',
    [
        {'default_ttl_hours': -1},
        {'default_ttl_hours': '24'},
        {'default_ttl_hours': True},
        {'default_ttl_hours': None},
        {'default_ttl_hours': 10**9},
        {'sweep_interval_seconds': True},
        {'sweep_interval_seconds': 0},
        {'sweep_at': '3 AM'},
        {'sweep_at': '25:00'},
        {'backend': 'postgres'},
        {'base_url': ''},
    ],
)
def test_invalid_values(kwargs):
    with pytest.raises(BadConfigurationError):
        MapperConfig(**kwargs)


# -------------------------------
# 3. Configuration sources
# -------------------------------


def test_from_environment():
    environ = {
        'BASE_URL': 'https://sho.rt',
        'DEFAULT_TTL_HOURS': '12',
        'SWEEP_AT': '01:15',
        'SWEEP_INTERVAL_SECONDS': '600',
        'MAPPING_BACKEND': 'REDIS',
        'REDIS_HOST': 'redis.test',
        'REDIS_PORT': '6380',
        'REDIS_DB': '2',
        'REDIS_PASSWORD': 'secret',
    }

    mapper_config = MapperConfig.from_environment(environ)

    assert mapper_config.base_url == 'https://sho.rt'
    assert mapper_config.default_ttl_hours == 12
    assert mapper_config.sweep_time == time(1, 15)
    assert mapper_config.sweep_interval_seconds == 600
    assert mapper_config.backend == 'redis'
    assert mapper_config.redis == {'host': 'redis.test', 'port': 6380, 'db': 2, 'username': None, 'password': 'secret'}


def test_from_environment_with_bad_integer():
    with pytest.raises(BadConfigurationError, match='DEFAULT_TTL_HOURS must be an integer'):
        MapperConfig.from_environment({'DEFAULT_TTL_HOURS': 'a day'})


def test_from_document(appconfig_payload):
    mapper_config = MapperConfig.from_document(appconfig_payload)

    assert mapper_config.base_url == 'https://sho.rt'
    assert mapper_config.default_ttl_hours == 24
    assert mapper_config.sweep_time == time(4, 30)
    assert mapper_config.backend == 'redis'
    assert mapper_config.redis == {'host': 'monkey', 'port': 6380, 'db': 3}


def test_from_document_without_active_backend():
    with pytest.raises(BadConfigurationError, match='Malformed AppConfig document'):
        MapperConfig.from_document({'mapper': {}})


# -------------------------------
# 4. Configuration loading behavior
# -------------------------------


def test_load_config_from_appconfig(appconfig_env, appconfig_client):
    """Ensure load_config() uses AppConfig when all identifiers are present."""
    mapper_config = config.load_config()

    assert mapper_config.backend == 'redis'
    assert mapper_config.redis['host'] == 'monkey'
    appconfig_client.start_configuration_session.assert_called_once_with(
        ApplicationIdentifier='app123',
        EnvironmentIdentifier='env123',
        ConfigurationProfileIdentifier='prof123',
    )
    appconfig_client.get_latest_configuration.assert_called_once_with(
        ConfigurationToken='monkey_token',
    )


def test_load_config_from_environment(monkeypatch, appconfig_client):
    """Ensure load_config() falls back to environment variables without AppConfig identifiers."""
    monkeypatch.setenv('BASE_URL', 'https://env.example')

    mapper_config = config.load_config()

    assert mapper_config.base_url == 'https://env.example'
    assert mapper_config.backend == 'memory'
    appconfig_client.start_configuration_session.assert_not_called()


def test_missing_appconfig_raises_error(monkeypatch, appconfig_env):
    """Ensure load_config() propagates ClientError when AppConfig returns an error."""
    mock_appconfig = MagicMock()
    mock_appconfig.start_configuration_session.side_effect = botocore.exceptions.ClientError(
        {'Error': {'Code': 'ResourceNotFoundException'}}, 'StartConfigurationSession'
    )
    monkeypatch.setattr(config.boto3, 'client', lambda service: mock_appconfig)

    with pytest.raises(botocore.exceptions.ClientError):
        config.load_config()
