class UrlMapperError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:urlmapper_error'


class MappingError(UrlMapperError):
    """Base exception for URL mapping lifecycle errors."""

    error_code = 'mapping:mapping_error'


class ShortCodeNotFoundError(MappingError):
    """Raised when no mapping exists for a short code (or the code can't be decoded)."""

    error_code = 'mapping:short_code_not_found'


class ShortCodeExpiredError(MappingError):
    """Raised when resolving a short code whose mapping is past its expiry."""

    error_code = 'mapping:short_code_expired'


class InvalidInputError(MappingError):
    """Raised when a URL or TTL supplied by the client is malformed."""

    error_code = 'mapping:invalid_input'


class InvalidShortCodeError(MappingError):
    """Raised when a short code contains characters outside the codec alphabet."""

    error_code = 'codec:invalid_short_code'


class ConfigurationError(UrlMapperError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
