from urlmapper.models.mapping_record import MappingRecord
from urlmapper.models.mapping_views import ShortenedMapping, MappingStats


__all__ = [
    'MappingRecord',
    'ShortenedMapping',
    'MappingStats',
]
