"""Abstract base class for URL mapping data access objects (DAOs).

This class establishes a consistent contract for all mapping DAO implementations,
regardless of the underlying storage mechanism (e.g., in-process memory, Redis).

Responsibilities:
    - Assign record keys on insertion (keys are never reused, even after deletion).
    - Provide point lookup, point deletion and bulk deletion by expiry.
    - Record successful accesses atomically per record.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from datetime import datetime, UTC
        >>> from urlmapper.dao.memory import MappingMemoryDAO

        >>> dao = MappingMemoryDAO()
        >>> record = dao.insert('https://example.com/blog/article-123')
        >>> record.key
        1

        >>> dao.hit(record.key, accessed_at=datetime.now(UTC)).access_count
        1

        >>> dao.delete(record.key)
        >>> dao.get(record.key)
        Traceback (most recent call last):
            ...
        urlmapper.dao.exceptions.MappingNotFoundError: Mapping with key 1 not found.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from urlmapper.models import MappingRecord


class MappingBaseDAO(ABC):
    """Interface for URL mapping data access objects (DAOs).

    Methods:
        insert(original_url: str, expires_at: datetime | None, **kwargs) -> MappingRecord:
            Persist a new mapping under a freshly generated key.
            Raises DataStoreError on connection or write failure.

        get(key: int, **kwargs) -> MappingRecord:
            Retrieve a mapping by key.
            Raises MappingNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or read failure.

        hit(key: int, accessed_at: datetime, **kwargs) -> MappingRecord:
            Atomically increment the access counter and set the last access time.
            Raises MappingNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or write failure.

        delete(key: int, **kwargs) -> None:
            Permanently remove a mapping.
            Raises MappingNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or write failure.

        delete_expired_before(moment: datetime, **kwargs) -> int:
            Remove every mapping whose expiry is strictly before `moment`.
            Returns the number of removed mappings.
            Raises DataStoreError on connection or write failure.

    Subclassing:
        Datastore-specific implementations (e.g., MappingMemoryDAO or
        MappingRedisDAO) must extend this class and implement all
        abstract methods.

    NOTE:
        - `hit()` is the only read-modify-write operation. Implementations must
          make it atomic per record so concurrent resolutions never lose an
          access count update.
        - Expiry is not enforced by the DAO. An expired mapping stays readable
          until it is deleted.
    """

    @abstractmethod
    def insert(self, original_url: str, expires_at: datetime | None = None, **kwargs) -> MappingRecord:
        """Persist a new mapping under a freshly generated key.

        Args:
            original_url (str):
                The original long URL.

            expires_at (datetime | None):
                Expiry moment, None if the mapping never expires.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            MappingRecord: The stored record with its generated key, a zero
                           access count and no last access time.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, key: int, **kwargs) -> MappingRecord:
        """Retrieve a mapping by its key.

        Raises:
            MappingNotFoundError:
                If no mapping with the given key exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def hit(self, key: int, accessed_at: datetime, **kwargs) -> MappingRecord:
        """Record a successful access to a mapping.

        Args:
            key (int):
                The key of the accessed mapping.

            accessed_at (datetime):
                Moment of the access.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            MappingRecord: The record after the update.

        Raises:
            MappingNotFoundError:
                If no mapping with the given key exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, key: int, **kwargs) -> None:
        """Permanently remove a mapping.

        Raises:
            MappingNotFoundError:
                If no mapping with the given key exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete_expired_before(self, moment: datetime, **kwargs) -> int:
        """Remove every mapping whose expiry is strictly before `moment`.

        Mappings without an expiry are never removed.

        Returns:
            int: The number of removed mappings.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
