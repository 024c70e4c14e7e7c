"""Utility functions for application configuration management.

Configuration is an explicit `MapperConfig` value handed to the engine, the
DAO factory and the sweeper. Nothing reads configuration from global state
after start-up.

Two sources are supported:

1. **AWS AppConfig** (preferred in deployed environments). When
   `APPCONFIG_APP_ID`, `APPCONFIG_ENV_ID` and `APPCONFIG_PROFILE_ID` are all
   set, the JSON document deployed to that profile is fetched via boto3. The
   document follows this structure:

    {
        "build": 42,
        "active_backend": "redis",
        "mapper": {
            "base_url": "https://sho.rt",
            "default_ttl_hours": 0,
            "sweep_at": "03:00",
            "sweep_interval_seconds": null
        },
        "backends": {
            "redis": {"host": "...", "port": 6379, "db": 0}
        }
    }

2. **Environment variables** (local runs, tests): `BASE_URL`,
   `DEFAULT_TTL_HOURS`, `SWEEP_AT`, `SWEEP_INTERVAL_SECONDS`,
   `MAPPING_BACKEND` and `REDIS_HOST`, `REDIS_PORT`, `REDIS_DB`,
   `REDIS_USERNAME`, `REDIS_PASSWORD`.

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    load_appconfig_document() -> dict
        Fetch the raw configuration document from AWS AppConfig.

    load_config() -> MapperConfig
        Build the application configuration from AppConfig or the environment.

Example:
    >>> from urlmapper.utils.config import load_config
    >>> config = load_config()
    >>> config.default_ttl_hours
    0
"""

import os
import json
import logging
from dataclasses import dataclass, field
from datetime import time
from typing import Any

import boto3

from urlmapper.types import AppConfigDocument, RedisConfiguration
from urlmapper.constants import ENV, TTL, Sweep, Backend
from urlmapper.exceptions import BadConfigurationError, InvalidInputError
from urlmapper.utils.helpers import require_environment
from urlmapper.utils.validators import validate_ttl_hours


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'urlmapper'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'urlmapper:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


@dataclass(frozen=True)
class MapperConfig:
    """Explicit application configuration.

    Attributes:
        base_url (str):
            Public base URL used to render short URLs.
        default_ttl_hours (int):
            TTL applied when a client doesn't request one. 0 means never expire.
        sweep_at (str):
            Daily UTC time ("HH:MM") at which expired mappings are swept.
        sweep_interval_seconds (int | None):
            Fixed sweep interval. Takes precedence over `sweep_at` when set.
        backend (str):
            Data store backend for mappings ('memory' or 'redis').
        redis (dict):
            Redis connection parameters (host, port, db, username, password).

    Raises:
        BadConfigurationError:
            If any value is out of range or malformed.
    """

    base_url: str = 'http://localhost:8080'
    default_ttl_hours: int = TTL.DEFAULT
    sweep_at: str = Sweep.DEFAULT_AT
    sweep_interval_seconds: int | None = None
    backend: str = Backend.MEMORY
    redis: RedisConfiguration = field(default_factory=dict)

    def __post_init__(self):
        if self.default_ttl_hours is None:
            raise BadConfigurationError('default_ttl_hours must be set (use 0 for mappings that never expire).')
        try:
            validate_ttl_hours(self.default_ttl_hours)
        except InvalidInputError as e:
            raise BadConfigurationError(
                f'default_ttl_hours must be an integer between 0 and {TTL.MAX} (given value: {self.default_ttl_hours!r}).'
            ) from e
        if self.sweep_interval_seconds is not None and (
            isinstance(self.sweep_interval_seconds, bool)
            or not isinstance(self.sweep_interval_seconds, int)
            or self.sweep_interval_seconds <= 0
        ):
            raise BadConfigurationError(f'sweep_interval_seconds must be a positive integer (given value: {self.sweep_interval_seconds!r}).')
        if self.backend not in set(Backend):
            raise BadConfigurationError(f'Unknown mapping backend {self.backend!r} (expected one of: {", ".join(Backend)}).')
        if not self.base_url:
            raise BadConfigurationError('base_url must be a non-empty string.')
        # Fail fast on a malformed sweep time
        self.sweep_time  # noqa: B018

    @property
    def sweep_time(self) -> time:
        try:
            hour, minute = (int(part) for part in self.sweep_at.split(':'))
            return time(hour, minute)
        except (ValueError, TypeError, AttributeError) as e:
            raise BadConfigurationError(f"sweep_at must be formatted as 'HH:MM' (given value: {self.sweep_at!r}).") from e

    @classmethod
    def from_environment(cls, environ: dict[str, str] | None = None) -> 'MapperConfig':
        """Build the configuration from environment variables."""
        environ = os.environ if environ is None else environ

        redis_config = {
            'host': environ.get(ENV.Redis.HOST, 'localhost'),
            'port': _as_int(environ.get(ENV.Redis.PORT, '6379'), ENV.Redis.PORT),
            'db': _as_int(environ.get(ENV.Redis.DB, '0'), ENV.Redis.DB),
            'username': environ.get(ENV.Redis.USERNAME) or None,
            'password': environ.get(ENV.Redis.PASSWORD) or None,
        }
        interval = environ.get(ENV.Mapper.SWEEP_INTERVAL_SECONDS)

        return cls(
            base_url=environ.get(ENV.Mapper.BASE_URL, cls.base_url),
            default_ttl_hours=_as_int(environ.get(ENV.Mapper.DEFAULT_TTL_HOURS, str(TTL.DEFAULT)), ENV.Mapper.DEFAULT_TTL_HOURS),
            sweep_at=environ.get(ENV.Mapper.SWEEP_AT, Sweep.DEFAULT_AT),
            sweep_interval_seconds=_as_int(interval, ENV.Mapper.SWEEP_INTERVAL_SECONDS) if interval else None,
            backend=environ.get(ENV.Mapper.BACKEND, Backend.MEMORY).lower(),
            redis=redis_config,
        )

    @classmethod
    def from_document(cls, document: AppConfigDocument) -> 'MapperConfig':
        """Build the configuration from an AppConfig document."""
        try:
            backend = document['active_backend']
            mapper = document.get('mapper', {})
            backend_config = document.get('backends', {}).get(backend, {})
        except (KeyError, AttributeError, TypeError) as e:
            raise BadConfigurationError(f'Malformed AppConfig document: {e!r}') from e

        return cls(
            base_url=mapper.get('base_url', cls.base_url),
            default_ttl_hours=mapper.get('default_ttl_hours', TTL.DEFAULT),
            sweep_at=mapper.get('sweep_at', Sweep.DEFAULT_AT),
            sweep_interval_seconds=mapper.get('sweep_interval_seconds'),
            backend=backend,
            redis=dict(backend_config) if backend == Backend.REDIS else {},
        )


def _as_int(value: Any, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise BadConfigurationError(f'{name} must be an integer (given value: {value!r}).') from e


@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_appconfig_document() -> AppConfigDocument:
    """Fetch the configuration document from AWS AppConfig.

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Returns:
        dict: The deployed configuration document.

    Raises:
        MissingEnvironmentVariableError: If any AppConfig identifier is missing.
        botocore.exceptions.ClientError: If AppConfig rejects the request.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.')

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    document = json.loads(content.decode('utf-8'))

    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'build': document.get('build')})
    return document


def load_config() -> MapperConfig:
    """Build the application configuration.

    Uses AWS AppConfig when all AppConfig identifiers are present in the
    environment, otherwise falls back to plain environment variables.

    Returns:
        MapperConfig: validated application configuration.

    Raises:
        BadConfigurationError: If the configuration values are invalid.
        botocore.exceptions.ClientError: If AppConfig rejects the request.
    """
    appconfig_ids = (ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
    if all(os.environ.get(name) for name in appconfig_ids):
        return MapperConfig.from_document(load_appconfig_document())

    logger.debug('AppConfig identifiers not set. Loading configuration from environment variables.')
    return MapperConfig.from_environment()
