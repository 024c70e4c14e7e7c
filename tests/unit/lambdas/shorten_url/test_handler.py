"""Unit tests for the shorten_url Lambda handler

Test coverage includes:

1. Successful shortening
   - Ensures a 201 response with Location header and mapping body.
   - Ensures an explicit TTL sets the expiry.

2. Bad requests
   - Ensures invalid JSON, missing/malformed URLs and bad TTLs yield 400.

3. Internal errors
   - Ensures data store failures yield 500.
"""

import json
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch
from freezegun import freeze_time

from urlmapper.lambdas.shorten_url import app
from urlmapper.dao.base import MappingBaseDAO
from urlmapper.dao.exceptions import DataStoreError


class TestShortenUrlHandler:

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, context, config, dao, make_event) -> None:
        # Patch Lambda dependencies
        monkeypatch.setattr(app, 'load_config', lambda *a, **kw: config)
        monkeypatch.setattr(app, 'create_mapping_dao', lambda *a, **kw: dao)

        self.context = context
        self.dao = dao
        self.event = lambda body: make_event('POST', '/', body=body)

    # -------------------------------
    # 1. Successful shortening
    # -------------------------------

    def test_lambda_handler(self) -> None:
        response = app.lambda_handler(self.event('{"url": "https://example.com"}'), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 201
        assert response['headers']['Location'] == 'https://sho.rt/1'
        assert body == {
            'short_code': '1',
            'short_url': 'https://sho.rt/1',
            'original_url': 'https://example.com',
            'expires_at': None,
        }
        assert self.dao.get(1).original_url == 'https://example.com'

    @freeze_time('2025-10-15 12:00:00')
    def test_lambda_handler_with_ttl(self) -> None:
        response = app.lambda_handler(self.event('{"url": "https://example.com", "ttl_hours": 24}'), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 201
        assert body['expires_at'] == '2025-10-16T12:00:00+00:00'

    # -------------------------------
    # 2. Bad requests
    # -------------------------------

    @pytest.mark.parametrize(
        'request_body, error_code',
        [
            ('{not json', 'INVALID_JSON_BODY'),
            ('["https://example.com"]', 'INVALID_JSON_BODY'),
            (None, 'INVALID_URL'),
            ('{}', 'INVALID_URL'),
            ('{"url": "example.com"}', 'INVALID_URL'),
            ('{"url": "ftp://example.com"}', 'INVALID_URL'),
            ('{"url": "https://example.com", "ttl_hours": -1}', 'INVALID_TTL'),
            ('{"url": "https://example.com", "ttl_hours": 1.5}', 'INVALID_TTL'),
            ('{"url": "https://example.com", "ttl_hours": "24"}', 'INVALID_TTL'),
            ('{"url": "https://example.com", "ttl_hours": 100000000}', 'INVALID_TTL'),
        ],
    )
    def test_lambda_handler_with_bad_request(self, request_body, error_code) -> None:
        response = app.lambda_handler(self.event(request_body), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['errorCode'] == error_code
        assert body['http_status'] == 400
        assert body['requested_url'] == 'https://sho.rt/'
        assert body['message'].startswith('Bad Request (')
        assert 'error_date_time' in body
        assert len(self.dao) == 0

    # -------------------------------
    # 3. Internal errors
    # -------------------------------

    def test_lambda_handler_with_data_store_error(self, monkeypatch: MonkeyPatch) -> None:
        failing_dao = MagicMock(spec=MappingBaseDAO)
        failing_dao.insert.side_effect = DataStoreError("Can't connect to Redis")
        monkeypatch.setattr(app, 'create_mapping_dao', lambda *a, **kw: failing_dao)

        response = app.lambda_handler(self.event('{"url": "https://example.com"}'), self.context)

        assert response['statusCode'] == 500
        assert json.loads(response['body'])['errorCode'] == 'UNKNOWN_INTERNAL_SERVER_ERROR'
