"""Input validation for client-supplied mapping parameters

Functions:
    validate_url(url: Any) -> str
        Ensure a URL is an absolute http(s) URL with a host
    validate_ttl_hours(ttl_hours: Any) -> int | None
        Ensure a TTL is either absent or a non-negative integer number of hours,
        at most TTL.MAX

Example:
    >>> validate_url('https://example.com/a?b=c')
    'https://example.com/a?b=c'
    >>> validate_ttl_hours(-1)
    Traceback (most recent call last):
        ...
    urlmapper.exceptions.InvalidInputError: ttl_hours must be a non-negative integer (given value: -1).
"""

from typing import Any
from urllib.parse import urlsplit

from urlmapper.constants import TTL
from urlmapper.exceptions import InvalidInputError


ALLOWED_SCHEMES = frozenset({'http', 'https'})


def validate_url(url: Any) -> str:
    if not isinstance(url, str) or not url.strip():
        raise InvalidInputError('url must be a non-empty string.')

    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise InvalidInputError(f'Malformed url {url!r}.') from e

    if parts.scheme.lower() not in ALLOWED_SCHEMES or not parts.netloc:
        raise InvalidInputError(f'url must be an absolute http(s) URL (given value: {url!r}).')
    return url


def validate_ttl_hours(ttl_hours: Any) -> int | None:
    # bool is an int subclass but never a meaningful TTL
    if ttl_hours is None:
        return None
    if isinstance(ttl_hours, bool) or not isinstance(ttl_hours, int) or ttl_hours < 0:
        raise InvalidInputError(f'ttl_hours must be a non-negative integer (given value: {ttl_hours!r}).')
    if ttl_hours > TTL.MAX:
        raise InvalidInputError(f'ttl_hours must not exceed {TTL.MAX} (given value: {ttl_hours!r}).')
    return ttl_hours
