import functools
from collections.abc import Callable


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for storing URL mappings.

    An optional prefix can be provided to namespace all generated keys.
    It is highly encouraged to set a custom prefix for each app and environment,
    e.g. "urlmapper:prod" or "urlmapper:dev".

    Layout:
        <prefix>:mappings:counter       STRING  last issued record key
        <prefix>:mappings:<key>         HASH    original_url, access_count,
                                                last_accessed_at?, expires_at?
        <prefix>:mappings:expiry        ZSET    record key scored by expiry timestamp
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def mapping_key(self, key: int | str) -> str:
        return f'mappings:{key}'

    @prefix_key
    def counter_key(self) -> str:
        return 'mappings:counter'

    @prefix_key
    def expiry_index_key(self) -> str:
        return 'mappings:expiry'
