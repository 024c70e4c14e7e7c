import logging
from typing import Any

from urlmapper.engine import MappingEngine
from urlmapper.exceptions import ShortCodeNotFoundError
from urlmapper.dao import create_mapping_dao
from urlmapper.utils import load_config
from urlmapper.utils.helpers import guarantee_500_response
from urlmapper.lambdas.responses import response_json, response_400, response_404
from urlmapper.lambdas.mapping_stats.constants import MISSING_SHORTCODE, SHORT_CODE_NOT_FOUND, STATS_SUCCESS


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: dict, context: Any) -> dict:
    """Return access statistics of a short code

    Expired short codes still report their statistics (with `is_expired` set).

    HTTP responses:
        200: Statistics
            short_code, original_url, access_count, last_accessed_at,
            expires_at, is_expired
        400: Missing shortcode in path parameters
        404: Unknown or malformed shortcode
        500: Internal server error
    """
    config = load_config()

    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if shortcode is None:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(event, message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)

    engine = MappingEngine.from_config(create_mapping_dao(config), config)
    try:
        stats = engine.stats(shortcode)
    except ShortCodeNotFoundError as error:
        logger.info(
            'Short code not found. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_CODE_NOT_FOUND},
        )
        return response_404(event, message=str(error), error_code=SHORT_CODE_NOT_FOUND)

    logger.debug('Returning statistics.', extra={'shortcode': shortcode, 'event': STATS_SUCCESS})
    return response_json(
        200,
        {
            'short_code': stats.short_code,
            'original_url': stats.original_url,
            'access_count': stats.access_count,
            'last_accessed_at': stats.last_accessed_at.isoformat() if stats.last_accessed_at else None,
            'expires_at': stats.expires_at.isoformat() if stats.expires_at else None,
            'is_expired': stats.is_expired,
        },
    )
