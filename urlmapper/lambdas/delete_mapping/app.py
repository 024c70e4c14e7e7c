import logging
from typing import Any

from urlmapper.engine import MappingEngine
from urlmapper.exceptions import ShortCodeNotFoundError
from urlmapper.dao import create_mapping_dao
from urlmapper.utils import load_config
from urlmapper.utils.helpers import guarantee_500_response
from urlmapper.lambdas.responses import response_204, response_400, response_404
from urlmapper.lambdas.delete_mapping.constants import MISSING_SHORTCODE, SHORT_CODE_NOT_FOUND, DELETE_SUCCESS


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: dict, context: Any) -> dict:
    """Permanently delete a short code

    HTTP responses:
        204: Deleted
        400: Missing shortcode in path parameters
        404: Unknown or malformed shortcode (including already deleted ones)
        500: Internal server error
    """
    config = load_config()

    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if shortcode is None:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(event, message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)

    engine = MappingEngine.from_config(create_mapping_dao(config), config)
    try:
        engine.delete(shortcode)
    except ShortCodeNotFoundError as error:
        logger.info(
            'Short code not found. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_CODE_NOT_FOUND},
        )
        return response_404(event, message=str(error), error_code=SHORT_CODE_NOT_FOUND)

    logger.info('Deleted short code. Responding with 204.', extra={'shortcode': shortcode, 'event': DELETE_SUCCESS})
    return response_204()
