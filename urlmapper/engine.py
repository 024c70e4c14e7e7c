"""URL mapping lifecycle: create, resolve, inspect and delete short codes

The engine is stateless. Every piece of mutable state lives behind the DAO it
is constructed with, so a single engine can be shared by any number of
concurrent callers as long as the DAO is thread safe.

Lifecycle of a mapping:
    Active  --(time passes expires_at)-->  Expired  --(delete / sweep)-->  Deleted
    Active  --(delete)-->  Deleted

Expiry is a pure function of `expires_at` and the engine clock. Nothing has to
happen for a mapping to become expired.

Error contract:
    - ShortCodeNotFoundError: short code can't be decoded or no mapping exists.
    - ShortCodeExpiredError: mapping exists but is expired (resolve only).
    - InvalidInputError: TTL is negative, not an integer or too large (create only).
    - DataStoreError: propagated unchanged from the DAO, never retried.

Example:
    >>> from urlmapper.dao.memory import MappingMemoryDAO
    >>> engine = MappingEngine(MappingMemoryDAO(), base_url='https://sho.rt')
    >>> mapping = engine.create('https://example.com')
    >>> mapping.short_code, mapping.short_url
    ('1', 'https://sho.rt/1')
    >>> engine.resolve('1')
    'https://example.com'
    >>> engine.stats('1').access_count
    1
"""

from datetime import timedelta

from urlmapper.types import Clock
from urlmapper.constants import TTL
from urlmapper.models import ShortenedMapping, MappingStats, MappingRecord
from urlmapper.exceptions import ShortCodeNotFoundError, ShortCodeExpiredError, InvalidShortCodeError, InvalidInputError
from urlmapper.dao.base import MappingBaseDAO
from urlmapper.dao.exceptions import MappingNotFoundError
from urlmapper.utils import MapperConfig, encode, decode, utcnow, get_short_url, validate_ttl_hours


class MappingEngine:
    """Stateless orchestrator of the short code lifecycle.

    Attributes:
        dao (MappingBaseDAO):
            Data store holding the mappings.
        default_ttl_hours (int):
            TTL applied when `create()` isn't given one. 0 means never expire.
        base_url (str):
            Public base URL used to render short URLs.
        clock (Callable[[], datetime]):
            Source of the current time. Defaults to timezone-aware UTC now.
    """

    def __init__(
        self,
        dao: MappingBaseDAO,
        *,
        default_ttl_hours: int = TTL.DEFAULT,
        base_url: str = 'http://localhost:8080',
        clock: Clock = utcnow,
    ):
        self.dao = dao
        self.default_ttl_hours = validate_ttl_hours(default_ttl_hours) or TTL.NEVER
        self.base_url = base_url
        self.clock = clock

    @classmethod
    def from_config(cls, dao: MappingBaseDAO, config: MapperConfig, clock: Clock = utcnow) -> 'MappingEngine':
        return cls(dao, default_ttl_hours=config.default_ttl_hours, base_url=config.base_url, clock=clock)

    def create(self, original_url: str, ttl_hours: int | None = None) -> ShortenedMapping:
        """Store a new mapping and return its short code.

        Args:
            original_url (str):
                URL to shorten. Stored as given.
            ttl_hours (int | None):
                Hours until the mapping expires. None applies the default TTL,
                0 means the mapping never expires.

        Returns:
            ShortenedMapping: short code, short URL, original URL and expiry.

        Raises:
            InvalidInputError: If ttl_hours is negative, not an integer or too large.
            DataStoreError: If the mapping can't be stored.
        """
        ttl_hours = validate_ttl_hours(ttl_hours)
        if ttl_hours is None:
            ttl_hours = self.default_ttl_hours

        try:
            expires_at = None if ttl_hours == TTL.NEVER else self.clock() + timedelta(hours=ttl_hours)
        except OverflowError as e:
            raise InvalidInputError(f'ttl_hours {ttl_hours} puts the expiry out of range.') from e

        record = self.dao.insert(original_url, expires_at=expires_at)

        short_code = encode(record.key)
        return ShortenedMapping(
            short_code=short_code,
            short_url=get_short_url(self.base_url, short_code),
            original_url=record.original_url,
            expires_at=record.expires_at,
        )

    def resolve(self, short_code: str) -> str:
        """Return the original URL for a short code and record the access.

        An expired mapping is reported as such and its statistics are left
        untouched.

        Raises:
            ShortCodeNotFoundError: If the short code is unknown or malformed.
            ShortCodeExpiredError: If the mapping is expired.
            DataStoreError: If the data store fails.
        """
        key = self._key(short_code)
        record = self._get(key, short_code)

        now = self.clock()
        if record.is_expired(now):
            raise ShortCodeExpiredError(f'Short code {short_code!r} expired at {record.expires_at.isoformat()}.')

        try:
            record = self.dao.hit(key, accessed_at=now)
        except MappingNotFoundError as e:
            # Deleted between lookup and hit
            raise ShortCodeNotFoundError(f'Short code {short_code!r} not found.') from e
        return record.original_url

    def stats(self, short_code: str) -> MappingStats:
        """Return access statistics for a short code. Expired mappings are reported, not rejected.

        Raises:
            ShortCodeNotFoundError: If the short code is unknown or malformed.
            DataStoreError: If the data store fails.
        """
        record = self._get(self._key(short_code), short_code)
        return MappingStats(
            short_code=short_code,
            original_url=record.original_url,
            access_count=record.access_count,
            last_accessed_at=record.last_accessed_at,
            expires_at=record.expires_at,
            is_expired=record.is_expired(self.clock()),
        )

    def delete(self, short_code: str) -> None:
        """Permanently remove a mapping.

        Raises:
            ShortCodeNotFoundError: If the short code is unknown or malformed.
            DataStoreError: If the data store fails.
        """
        try:
            self.dao.delete(self._key(short_code))
        except MappingNotFoundError as e:
            raise ShortCodeNotFoundError(f'Short code {short_code!r} not found.') from e

    def _key(self, short_code: str) -> int:
        try:
            return decode(short_code)
        except InvalidShortCodeError as e:
            raise ShortCodeNotFoundError(f'Short code {short_code!r} not found.') from e

    def _get(self, key: int, short_code: str) -> MappingRecord:
        try:
            return self.dao.get(key)
        except MappingNotFoundError as e:
            raise ShortCodeNotFoundError(f'Short code {short_code!r} not found.') from e
