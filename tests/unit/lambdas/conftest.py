from typing import cast

import pytest

from urlmapper.types import LambdaContext, LambdaEvent
from urlmapper.utils import MapperConfig
from urlmapper.dao.memory import MappingMemoryDAO


@pytest.fixture
def context() -> LambdaContext:
    return cast(LambdaContext, {'function_name': 'urlmapper-test'})


@pytest.fixture
def config() -> MapperConfig:
    return MapperConfig(base_url='https://sho.rt', default_ttl_hours=0)


@pytest.fixture
def dao() -> MappingMemoryDAO:
    return MappingMemoryDAO()


@pytest.fixture
def make_event():
    """Build an API Gateway (REST API) event for a path."""

    def _make_event(method: str, path: str, *, shortcode: str | None = None, body: str | None = None, source_ip: str = '203.0.113.7') -> LambdaEvent:
        return cast(LambdaEvent, {
            'resource': path,
            'httpMethod': method,
            'path': path,
            'pathParameters': {'shortcode': shortcode} if shortcode is not None else None,
            'body': body,
            'requestContext': {
                'domainName': 'sho.rt',
                'stage': 'test',
                'identity': {'sourceIp': source_ip},
            },
        })  # fmt: skip

    return _make_event
