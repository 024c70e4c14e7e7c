from enum import StrEnum


class TTL:
    """TTL defaults in hours."""

    NEVER = 0  # 0 hours means the mapping never expires
    DEFAULT = 0
    MAX = 24 * 365 * 100  # 100 years


class Sweep:
    """Expired mapping cleanup schedule defaults."""

    # Daily at 03:00 UTC (the old cron expression was `0 0 3 * * *`)
    DEFAULT_AT = '03:00'


class Anonymizer:
    """Sentinel audit tokens and hashing parameters."""

    UNKNOWN = 'unknown'
    HASH_ERROR = 'hash-error'
    HASH_ALGORITHM = 'sha256'
    TOKEN_LENGTH = 8
    ZEROED_IPV6 = '0:0:0:0:0:0:0:0'


class Backend(StrEnum):
    MEMORY = 'memory'
    REDIS = 'redis'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        LOG_LEVEL = 'LOG_LEVEL'

    class Mapper(StrEnum):
        BASE_URL = 'BASE_URL'
        DEFAULT_TTL_HOURS = 'DEFAULT_TTL_HOURS'
        SWEEP_AT = 'SWEEP_AT'
        SWEEP_INTERVAL_SECONDS = 'SWEEP_INTERVAL_SECONDS'
        BACKEND = 'MAPPING_BACKEND'

    class Redis(StrEnum):
        HOST = 'REDIS_HOST'
        PORT = 'REDIS_PORT'
        DB = 'REDIS_DB'
        USERNAME = 'REDIS_USERNAME'
        PASSWORD = 'REDIS_PASSWORD'  # noqa: S105

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
