"""In-process reference implementation of MappingBaseDAO

Records live in a dictionary guarded by a single lock, which makes every
operation (including the hit read-modify-write) atomic with respect to other
threads of the same process. Nothing survives a process restart.

Classes:
    MappingMemoryDAO:
        DAO storing MappingRecord instances in process memory.

Example:
    >>> from urlmapper.dao.memory import MappingMemoryDAO
    >>> dao = MappingMemoryDAO()
    >>> dao.insert('https://example.com').key
    1
    >>> dao.insert('https://example.org').key
    2
"""

import itertools
import logging
import threading
from dataclasses import replace
from datetime import datetime

from beartype import beartype

from urlmapper.models import MappingRecord
from urlmapper.dao.base import MappingBaseDAO
from urlmapper.dao.exceptions import MappingNotFoundError


logger = logging.getLogger(__name__)


class MappingMemoryDAO(MappingBaseDAO):
    """Dictionary-backed mapping DAO.

    Keys are handed out by a monotonic counter starting at `first_key`, so a
    deleted key is never reissued.
    """

    def __init__(self, first_key: int = 1):
        if first_key < 0:
            raise ValueError(f'First key must be a non-negative integer (given value: {first_key}).')

        self._records: dict[int, MappingRecord] = {}
        self._keys = itertools.count(first_key)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    @beartype
    def insert(self, original_url: str, expires_at: datetime | None = None, **kwargs) -> MappingRecord:
        with self._lock:
            record = MappingRecord(key=next(self._keys), original_url=original_url, expires_at=expires_at)
            self._records[record.key] = record
        return record

    @beartype
    def get(self, key: int, **kwargs) -> MappingRecord:
        with self._lock:
            return self._lookup(key)

    @beartype
    def hit(self, key: int, accessed_at: datetime, **kwargs) -> MappingRecord:
        with self._lock:
            record = self._lookup(key)
            record = replace(record, access_count=record.access_count + 1, last_accessed_at=accessed_at)
            self._records[key] = record
        return record

    @beartype
    def delete(self, key: int, **kwargs) -> None:
        with self._lock:
            self._lookup(key)
            del self._records[key]

    @beartype
    def delete_expired_before(self, moment: datetime, **kwargs) -> int:
        with self._lock:
            expired = [key for key, record in self._records.items() if record.expires_at is not None and record.expires_at < moment]
            for key in expired:
                del self._records[key]

        logger.debug('Deleted %s expired mappings from memory.', len(expired), extra={'moment': moment})
        return len(expired)

    def _lookup(self, key: int) -> MappingRecord:
        try:
            return self._records[key]
        except KeyError:
            raise MappingNotFoundError(f'Mapping with key {key} not found.') from None
