from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class MappingRecord:
    """Represent a persisted URL mapping and its access statistics.

    Attributes:
        key (int):
            Non-negative record key assigned by the data store on insertion.
            The short code is derived from it and is never stored.
        original_url (str):
            The original long URL the short code resolves to.
        access_count (int):
            Number of successful resolutions so far.
        last_accessed_at (Optional[datetime]):
            Moment of the most recent successful resolution, None until the
            first one.
        expires_at (Optional[datetime]):
            Moment after which the mapping is expired. None means the mapping
            never expires.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> record = MappingRecord(
        ...     key=1,
        ...     original_url="https://example.com/article/123",
        ...     expires_at=datetime(2026, 1, 1, tzinfo=UTC),
        ... )
        >>> record.access_count
        0
        >>> record.is_expired(datetime(2026, 1, 1, tzinfo=UTC))
        False
        >>> record.is_expired(datetime(2026, 1, 1, tzinfo=UTC) + timedelta(seconds=1))
        True
    """

    key: int
    original_url: str
    access_count: int = 0
    last_accessed_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        """Return True once `now` is strictly after `expires_at`."""
        return self.expires_at is not None and now > self.expires_at
