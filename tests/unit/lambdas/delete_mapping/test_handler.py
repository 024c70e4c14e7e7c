"""Unit tests for the delete_mapping Lambda handler

Test coverage includes:

1. Successful deletion (204) and repeated deletion (404)
2. Missing (400) and malformed (404) shortcodes
"""

import json

import pytest
from pytest import MonkeyPatch

from urlmapper.lambdas.delete_mapping import app
from urlmapper.dao.exceptions import MappingNotFoundError


class TestDeleteMappingHandler:

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, context, config, dao, make_event) -> None:
        monkeypatch.setattr(app, 'load_config', lambda *a, **kw: config)
        monkeypatch.setattr(app, 'create_mapping_dao', lambda *a, **kw: dao)

        self.context = context
        self.dao = dao
        self.event = lambda shortcode: make_event('DELETE', f'/{shortcode or ""}', shortcode=shortcode)

    def test_lambda_handler(self) -> None:
        self.dao.insert('https://example.com')

        response = app.lambda_handler(self.event('1'), self.context)

        assert response['statusCode'] == 204
        assert response['body'] == ''
        with pytest.raises(MappingNotFoundError):
            self.dao.get(1)

    def test_lambda_handler_deleting_twice(self) -> None:
        self.dao.insert('https://example.com')
        app.lambda_handler(self.event('1'), self.context)

        response = app.lambda_handler(self.event('1'), self.context)

        assert response['statusCode'] == 404
        assert json.loads(response['body'])['errorCode'] == 'SHORT_CODE_NOT_FOUND'

    def test_lambda_handler_with_missing_shortcode(self) -> None:
        response = app.lambda_handler(self.event(None), self.context)
        assert response['statusCode'] == 400

    def test_lambda_handler_with_malformed_shortcode(self) -> None:
        self.dao.insert('https://example.com')

        response = app.lambda_handler(self.event('1!'), self.context)

        assert response['statusCode'] == 404
        assert len(self.dao) == 1
