"""Shared Redis client wiring for Redis-backed DAOs

`RedisClientMixin` owns the client and the key schema of a DAO. It accepts
the flat `redis_*` keyword arguments produced by `create_mapping_dao()` from
`MapperConfig.redis`, or an already built client (tests, shared pools).
Construction pings the server, so a misconfigured DAO fails when it is
created instead of on its first request.

Example:
    >>> class MappingRedisDAO(RedisClientMixin, MappingBaseDAO):
    ...     ...
    >>> dao = MappingRedisDAO(redis_host='redis', prefix='urlmapper:prod')
    >>> dao.keys.counter_key()
    'urlmapper:prod:mappings:counter'
"""

from typing import Optional

import redis

from urlmapper.dao.redis.redis_key_schema import RedisKeySchema
from urlmapper.dao.redis.helpers import to_data_store_error


class RedisClientMixin:
    """Redis client and key schema for a DAO.

    Attributes:
        redis (redis.Redis):
            Client with `decode_responses=True`, so every reply is a str.
        keys (RedisKeySchema):
            Namespaced key names for this DAO.
    """

    def __init__(
        self,
        redis_host: Optional[str] = 'localhost',
        redis_port: Optional[int] = 6379,
        redis_db: Optional[int] = 0,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_socket_timeout: Optional[float] = 5.0,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        """
        Raises:
            DataStoreError: If the server doesn't answer the initial PING.
        """
        if redis_client is None:
            redis_client = self._connect(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                username=redis_username,
                password=redis_password,
                socket_timeout=redis_socket_timeout,
            )
        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    @staticmethod
    def _connect(**connection_kwargs) -> redis.Redis:
        return redis.Redis(decode_responses=True, **connection_kwargs)

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING the server.

        Returns False instead of raising when `raise_error` is False. A
        rejected PING (e.g. MISCONF) counts as a failure just like an
        unreachable server.
        """
        try:
            self.redis.ping()
        except redis.exceptions.RedisError as e:
            if raise_error:
                raise to_data_store_error(self.redis, e) from e
            return False
        return True
