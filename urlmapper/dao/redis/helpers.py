"""Translation of redis-py failures into DAO errors

Every `redis.exceptions.RedisError` raised while talking to the server
surfaces as `DataStoreError`, so the engine, the sweeper and the Lambda
handlers only ever deal with `DAOError`s. Connectivity problems (connection
refused, socket timeouts) and rejected commands (OOM, READONLY replica,
script errors) get different messages. Both name the server they came from.

Functions:
    redis_location(client: redis.Redis) -> str
        "host:port/db" of the server behind a client
    to_data_store_error(client: redis.Redis, error: RedisError) -> DataStoreError
        Build the DataStoreError reported for a redis-py failure
    handle_redis_errors(method) -> method
        Decorator for DAO methods that talk to Redis

Example:
    >>> class CounterDAO(RedisClientMixin):
    ...     @handle_redis_errors
    ...     def count(self) -> int:
    ...         return int(self.redis.get('count') or 0)
"""

import functools
from typing import TypeVar, Any
from collections.abc import Callable

import redis

from urlmapper.dao.exceptions import DataStoreError


__all__ = ['redis_location', 'to_data_store_error', 'handle_redis_errors']

F = TypeVar('F', bound=Callable[..., Any])

CONNECTIVITY_ERRORS = (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError)


def redis_location(client: redis.Redis) -> str:
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def to_data_store_error(client: redis.Redis, error: redis.exceptions.RedisError) -> DataStoreError:
    location = redis_location(client)
    if isinstance(error, CONNECTIVITY_ERRORS):
        return DataStoreError(f"Can't connect to Redis at {location}.")
    return DataStoreError(f'Redis at {location} failed the command ({error.__class__.__name__}: {error}).')


def handle_redis_errors[F](method: F) -> F:
    """Re-raise any redis-py error from a DAO method as DataStoreError

    The wrapped method must belong to an object exposing the client as
    `self.redis`. The original redis-py error is kept as `__cause__`.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except redis.exceptions.RedisError as e:
            raise to_data_store_error(self.redis, e) from e

    return wrapper
