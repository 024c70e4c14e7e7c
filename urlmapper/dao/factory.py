import functools

from urlmapper.constants import Backend
from urlmapper.dao.base import MappingBaseDAO
from urlmapper.dao.memory import MappingMemoryDAO
from urlmapper.dao.redis import MappingRedisDAO
from urlmapper.utils import MapperConfig, app_prefix


@functools.cache
def _memory_dao() -> MappingMemoryDAO:
    return MappingMemoryDAO()


def create_mapping_dao(config: MapperConfig) -> MappingBaseDAO:
    """Return the mapping DAO selected by the configuration

    The memory backend is a per-process singleton, so every caller in the
    process sees the same mappings. The Redis backend namespaces its keys
    with the application prefix (see `app_prefix()`).

    Example:
        >>> dao = create_mapping_dao(MapperConfig(backend='redis', redis={'host': 'localhost', 'port': 6379}))
        >>> type(dao).__name__
        'MappingRedisDAO'
    """
    if config.backend == Backend.REDIS:
        redis_config = {f'redis_{k}': v for k, v in config.redis.items()}
        return MappingRedisDAO(**redis_config, prefix=app_prefix())
    return _memory_dao()
