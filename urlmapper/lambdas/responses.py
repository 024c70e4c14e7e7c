"""API Gateway (Lambda proxy) response builders shared by the HTTP handlers

Error bodies carry the requested URL, a human readable error description, the
moment of the error and the HTTP status, plus an optional machine readable
error code:

    {
        "message": "Not Found (short code 'a1B' not found)",
        "errorCode": "SHORT_CODE_NOT_FOUND",
        "requested_url": "https://sho.rt/a1B",
        "error_type": "Short code 'a1B' not found.",
        "error_date_time": "2025-10-15T00:00:00+00:00",
        "http_status": 404
    }
"""

import json
from http import HTTPStatus
from typing import Any

from urlmapper.types import LambdaEvent, LambdaResponse
from urlmapper.utils import utcnow


JSON_HEADERS = {'Content-Type': 'application/json'}


def requested_url(event: LambdaEvent) -> str:
    """Rebuild the URL the client requested from an API Gateway event"""
    request_context = event.get('requestContext') or {}
    domain = request_context.get('domainName')
    path = event.get('path') or event.get('rawPath') or '/'
    return f'https://{domain}{path}' if domain else path


def response_json(status: int, body: dict[str, Any], headers: dict[str, str] | None = None) -> LambdaResponse:
    return {
        'statusCode': int(status),
        'headers': {**JSON_HEADERS, **(headers or {})},
        'body': json.dumps(body, default=str),
    }


def response_201(*, location: str, body: dict[str, Any]) -> LambdaResponse:
    return response_json(HTTPStatus.CREATED, body, headers={'Location': location})


def response_302(*, location: str) -> LambdaResponse:
    return {
        'statusCode': HTTPStatus.FOUND,
        'headers': {'Location': location},
        'body': json.dumps({}),  # no body needed for redirects
    }


def response_204() -> LambdaResponse:
    return {
        'statusCode': HTTPStatus.NO_CONTENT,
        'body': '',
    }


def response_error(
    status: HTTPStatus,
    event: LambdaEvent,
    *,
    message: str | None = None,
    error_code: str | None = None,
) -> LambdaResponse:
    base = status.phrase
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    body |= {
        'requested_url': requested_url(event),
        'error_type': message or base,
        'error_date_time': utcnow().isoformat(),
        'http_status': int(status),
    }
    return response_json(status, body)


def response_400(event: LambdaEvent, message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return response_error(HTTPStatus.BAD_REQUEST, event, message=message, error_code=error_code)


def response_404(event: LambdaEvent, message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return response_error(HTTPStatus.NOT_FOUND, event, message=message, error_code=error_code)


def response_410(event: LambdaEvent, message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return response_error(HTTPStatus.GONE, event, message=message, error_code=error_code)
