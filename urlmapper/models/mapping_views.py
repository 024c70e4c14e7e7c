from dataclasses import dataclass
from datetime import datetime


# fmt: off
@dataclass(frozen=True)
class ShortenedMapping:
    short_code: str                     # Codec encoding of the record key
    short_url: str                      # Public short URL (<base url>/<short code>)
    original_url: str                   # Original long URL
    expires_at: datetime | None = None  # None if the mapping never expires


@dataclass(frozen=True)
class MappingStats:
    short_code: str
    original_url: str
    access_count: int
    last_accessed_at: datetime | None   # None until the first successful resolution
    expires_at: datetime | None
    is_expired: bool                    # Derived from expires_at and the current time
# fmt: on
