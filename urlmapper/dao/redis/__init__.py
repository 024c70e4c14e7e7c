from urlmapper.dao.redis.redis_key_schema import RedisKeySchema
from urlmapper.dao.redis.mixins import RedisClientMixin
from urlmapper.dao.redis.mapping_redis_dao import MappingRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'MappingRedisDAO',
]
