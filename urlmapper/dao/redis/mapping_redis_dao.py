"""Redis-backed implementation of MappingBaseDAO

Each mapping is stored as a hash under `<prefix>:mappings:<key>`. Keys are
issued by INCR on a counter, so they are never reused. Mappings with an expiry
are additionally indexed in a sorted set scored by expiry timestamp, which lets
the sweeper find expired mappings without scanning the keyspace.

Both `hit()` and `delete_expired_before()` run as Lua scripts, so each one is
atomic on the Redis server.

Example:
    >>> from datetime import datetime, UTC
    >>> dao = MappingRedisDAO(prefix='urlmapper:dev')
    >>> record = dao.insert('https://example.com')
    >>> dao.hit(record.key, accessed_at=datetime.now(UTC)).access_count
    1
"""

import logging
from datetime import datetime

from beartype import beartype

from urlmapper.models import MappingRecord
from urlmapper.dao.base import MappingBaseDAO
from urlmapper.dao.exceptions import MappingNotFoundError
from urlmapper.dao.redis.mixins import RedisClientMixin
from urlmapper.dao.redis.helpers import handle_redis_errors


logger = logging.getLogger(__name__)


# KEYS[1] = mapping hash; ARGV[1] = ISO access time
HIT_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 0 then
    return false
end
redis.call('HINCRBY', KEYS[1], 'access_count', 1)
redis.call('HSET', KEYS[1], 'last_accessed_at', ARGV[1])
return redis.call('HGETALL', KEYS[1])
"""

# KEYS[1] = expiry index; ARGV[1] = cutoff timestamp, ARGV[2] = mapping key prefix
SWEEP_SCRIPT = """
local expired = redis.call('ZRANGEBYSCORE', KEYS[1], '-inf', '(' .. ARGV[1])
for _, member in ipairs(expired) do
    redis.call('DEL', ARGV[2] .. member)
end
redis.call('ZREMRANGEBYSCORE', KEYS[1], '-inf', '(' .. ARGV[1])
return #expired
"""


class MappingRedisDAO(RedisClientMixin, MappingBaseDAO):
    @handle_redis_errors
    @beartype
    def insert(self, original_url: str, expires_at: datetime | None = None, **kwargs) -> MappingRecord:
        key = int(self.redis.incr(self.keys.counter_key()))

        fields = {'original_url': original_url, 'access_count': 0}
        if expires_at is not None:
            fields['expires_at'] = expires_at.isoformat()

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.hset(self.keys.mapping_key(key), mapping=fields)
            if expires_at is not None:
                pipe.zadd(self.keys.expiry_index_key(), {str(key): expires_at.timestamp()})
            pipe.execute()

        return MappingRecord(key=key, original_url=original_url, expires_at=expires_at)

    @handle_redis_errors
    @beartype
    def get(self, key: int, **kwargs) -> MappingRecord:
        fields = self.redis.hgetall(self.keys.mapping_key(key))
        if not fields:
            raise MappingNotFoundError(f'Mapping with key {key} not found.')
        return self._to_record(key, fields)

    @handle_redis_errors
    @beartype
    def hit(self, key: int, accessed_at: datetime, **kwargs) -> MappingRecord:
        reply = self.redis.eval(HIT_SCRIPT, 1, self.keys.mapping_key(key), accessed_at.isoformat())
        if not reply:
            raise MappingNotFoundError(f'Mapping with key {key} not found.')

        # HGETALL inside Lua returns a flat [field, value, ...] list
        fields = dict(zip(reply[::2], reply[1::2]))
        return self._to_record(key, fields)

    @handle_redis_errors
    @beartype
    def delete(self, key: int, **kwargs) -> None:
        with self.redis.pipeline(transaction=True) as pipe:
            pipe.delete(self.keys.mapping_key(key))
            pipe.zrem(self.keys.expiry_index_key(), str(key))
            deleted, _ = pipe.execute()

        if not deleted:
            raise MappingNotFoundError(f'Mapping with key {key} not found.')

    @handle_redis_errors
    @beartype
    def delete_expired_before(self, moment: datetime, **kwargs) -> int:
        deleted = int(
            self.redis.eval(
                SWEEP_SCRIPT,
                1,
                self.keys.expiry_index_key(),
                repr(moment.timestamp()),
                self.keys.mapping_key(''),
            )
        )
        logger.debug('Deleted %s expired mappings from Redis.', deleted, extra={'moment': moment})
        return deleted

    @staticmethod
    def _to_record(key: int, fields: dict) -> MappingRecord:
        last_accessed_at = fields.get('last_accessed_at')
        expires_at = fields.get('expires_at')
        return MappingRecord(
            key=key,
            original_url=fields['original_url'],
            access_count=int(fields.get('access_count', 0)),
            last_accessed_at=datetime.fromisoformat(last_accessed_at) if last_accessed_at else None,
            expires_at=datetime.fromisoformat(expires_at) if expires_at else None,
        )
