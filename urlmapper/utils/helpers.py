"""Helper utilities shared by the engine, the sweeper and the Lambda handlers.

Functions:
    utcnow() -> datetime
        Current moment as a timezone-aware UTC datetime
    get_short_url(base_url: str, shortcode: str) -> str
        Get string representation of short URL for a given shortcode
    client_ip(event: dict) -> str | None
        Extract the raw client address from an API Gateway event
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(func: Callable) -> Callable
        Decorator: Turn unexpected handler exceptions into a 500 response

Example:
    >>> from urlmapper.utils.helpers import get_short_url
    >>> get_short_url('https://sho.rt/', 'a1B')
    'https://sho.rt/a1B'
"""

import os
import json
import logging
import functools
from datetime import datetime, UTC
from collections.abc import Callable

from urlmapper.types import LambdaEvent, LambdaResponse
from urlmapper.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from urlmapper.exceptions import MissingEnvironmentVariableError


logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(UTC)


def get_short_url(base_url: str, shortcode: str) -> str:
    """Get string representation of shortened URL

    Args:
        base_url (str): public base URL of the service
        shortcode (str): shortcode

    Returns:
        str: short url string representation
    """
    return f'{base_url.rstrip("/")}/{shortcode}'


def client_ip(event: LambdaEvent) -> str | None:
    """Extract the raw client address from an API Gateway event

    Supports both REST API (v1) and HTTP API (v2) payloads.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str | None: source IP of the request, None if the event has none
    """
    request_context = event.get('requestContext') or {}
    identity = request_context.get('identity') or {}
    http = request_context.get('http') or {}
    return identity.get('sourceIp') or http.get('sourceIp')


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(func: Callable[..., LambdaResponse]) -> Callable[..., LambdaResponse]:
    """Decorator: respond with 500 on any exception escaping a Lambda handler

    The exception is logged with its traceback; the client only sees a generic
    error body.
    """

    @functools.wraps(func)
    def wrapper(event: LambdaEvent, context, *args, **kwargs) -> LambdaResponse:
        try:
            return func(event, context, *args, **kwargs)
        except Exception as error:
            logger.exception(
                'Unhandled exception in Lambda handler. Responding with 500.',
                extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR, 'error': error.__class__.__name__},
            )
            return {
                'statusCode': 500,
                'headers': {'Content-Type': 'application/json'},
                'body': json.dumps({'message': 'Internal Server Error', 'errorCode': UNKNOWN_INTERNAL_SERVER_ERROR}),
            }

    return wrapper
