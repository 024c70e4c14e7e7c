import json
import logging
from typing import Any

from urlmapper.engine import MappingEngine
from urlmapper.exceptions import InvalidInputError
from urlmapper.dao import create_mapping_dao
from urlmapper.utils import load_config, validate_url, validate_ttl_hours
from urlmapper.utils.helpers import guarantee_500_response
from urlmapper.lambdas.responses import response_201, response_400
from urlmapper.lambdas.shorten_url.constants import (
    INVALID_JSON_BODY,
    INVALID_URL,
    INVALID_TTL,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract original URL and optional TTL from request body
    - Step 2: Validate both values
    - Step 3: Store the mapping (via MappingEngine)
    - Step 4: Respond to client with 201 Created

    HTTP responses:
        201: Successful URL shortening
            headers:
                Location: newly generated short url
            body:
                short_code: newly generated short code
                short_url: newly generated short url
                original_url: original url (provided in request)
                expires_at: ISO expiry moment, null if the link never expires
        400: Bad client request
            message: invalid JSON body, missing/malformed url or bad ttl_hours
        500: Internal server error
            message: server experienced an internal error

    Args:
        event (Dict[str, Any]):
            API Gateway event payload in Lambda Proxy format.
        context (Any):
            AWS Lambda context object containing runtime information.

    Returns:
        Dict[str, Any]:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'body': '{"url": "https://example.com", "ttl_hours": 24}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])['short_url']
        'http://localhost:8080/1'
    """
    # 0- Get application's config
    config = load_config()

    # 1- Extract original URL and TTL from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(event, message='invalid JSON body', error_code=INVALID_JSON_BODY)
    if not isinstance(request_body, dict):
        logger.info('JSON body is not an object. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(event, message='JSON body must be an object', error_code=INVALID_JSON_BODY)

    # 2- Validate URL and TTL
    try:
        original_url = validate_url(request_body.get('url'))
    except InvalidInputError as error:
        logger.info('Invalid URL in request body. Responding with 400.', extra={'event': INVALID_URL})
        return response_400(event, message=str(error), error_code=INVALID_URL)

    try:
        ttl_hours = validate_ttl_hours(request_body.get('ttl_hours'))
    except InvalidInputError as error:
        logger.info('Invalid TTL in request body. Responding with 400.', extra={'event': INVALID_TTL})
        return response_400(event, message=str(error), error_code=INVALID_TTL)

    # 3- Store the mapping
    engine = MappingEngine.from_config(create_mapping_dao(config), config)
    mapping = engine.create(original_url, ttl_hours=ttl_hours)

    # 4- Respond with 201 Created
    logger.info(
        'Shortened URL. Responding with 201.',
        extra={'shortcode': mapping.short_code, 'event': SHORTEN_SUCCESS},
    )
    return response_201(
        location=mapping.short_url,
        body={
            'short_code': mapping.short_code,
            'short_url': mapping.short_url,
            'original_url': mapping.original_url,
            'expires_at': mapping.expires_at.isoformat() if mapping.expires_at else None,
        },
    )
