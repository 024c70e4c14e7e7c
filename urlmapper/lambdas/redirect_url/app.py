import logging
from typing import Any

from urlmapper.engine import MappingEngine
from urlmapper.exceptions import ShortCodeNotFoundError, ShortCodeExpiredError
from urlmapper.dao import create_mapping_dao
from urlmapper.utils import load_config, anonymize_and_hash, client_ip
from urlmapper.utils.helpers import guarantee_500_response
from urlmapper.lambdas.responses import response_302, response_400, response_404, response_410
from urlmapper.lambdas.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_CODE_NOT_FOUND,
    SHORT_CODE_EXPIRED,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: dict, context: Any) -> dict:
    """Handle incoming API Gateway requests to redirect URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Resolve the shortcode (records the access)
    - Step 3: Redirect client to original URL

    Unknown and expired shortcodes are audit logged with an anonymized client
    token, never the raw client address.

    HTTP responses:
        302: Successful redirect
            headers:
                Location: original URL destination
        400: Bad client request
            message: missing shortcode in path parameters
        404: Not found
            message: unknown or malformed shortcode
        410: Gone
            message: shortcode expired
        500: Internal server error
            message: server experienced an internal error

    Args:
        event (dict):
            API Gateway event payload containing the shortcode path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        dict:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'shortcode': 'a1B'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 0- Get application's config
    config = load_config()

    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if shortcode is None:
        logger.info(
            'Missing "shortcode" in path. Responding with 400.',
            extra={'event': MISSING_SHORTCODE},
        )
        return response_400(event, message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)

    # 2- Resolve shortcode
    engine = MappingEngine.from_config(create_mapping_dao(config), config)
    try:
        original_url = engine.resolve(shortcode)
    except ShortCodeNotFoundError as error:
        logger.info(
            'Short code not found. Responding with 404.',
            extra={'shortcode': shortcode, 'client': anonymize_and_hash(client_ip(event)), 'event': SHORT_CODE_NOT_FOUND},
        )
        return response_404(event, message=str(error), error_code=SHORT_CODE_NOT_FOUND)
    except ShortCodeExpiredError as error:
        logger.info(
            'Short code expired. Responding with 410.',
            extra={'shortcode': shortcode, 'client': anonymize_and_hash(client_ip(event)), 'event': SHORT_CODE_EXPIRED},
        )
        return response_410(event, message=str(error), error_code=SHORT_CODE_EXPIRED)

    # 3- Redirect client to original URL
    logger.info(
        'Redirecting client to original URL. Responding with 302.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response_302(location=original_url)
