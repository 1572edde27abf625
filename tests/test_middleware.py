"""Request logging and log masking."""
import logging

import pytest
from django.test import RequestFactory

from apps.common.utils import SensitiveDataFilter, get_client_ip


def _masked(message):
    record = logging.LogRecord('apps', logging.INFO, __file__, 1, message, None, None)
    assert SensitiveDataFilter().filter(record) is True
    return record.msg


@pytest.mark.parametrize('message, expected', [
    ('login failed password=hunter2 for ivan', 'login failed password=***MASKED*** for ivan'),
    ('Authorization: Bearer eyJhbGciOi.abc-def', 'Authorization: Bearer ***MASKED***'),
    ("payload {'refresh': 'abc.def'}", "payload {'refresh': '***MASKED***'}"),
    ('api_key: 12345, retry', 'api_key: ***MASKED***, retry'),
    ('Ticket 12 created', 'Ticket 12 created'),
])
def test_sensitive_values_are_masked(message, expected):
    assert _masked(message) == expected


def test_non_string_messages_pass_through():
    record = logging.LogRecord('apps', logging.INFO, __file__, 1, {'password': 'x'}, None, None)

    assert SensitiveDataFilter().filter(record)
    assert record.msg == {'password': 'x'}


def test_client_ip_prefers_the_forwarded_header():
    factory = RequestFactory()

    assert get_client_ip(factory.get('/', HTTP_X_FORWARDED_FOR='10.0.0.7, 172.16.0.1')) == '10.0.0.7'
    assert get_client_ip(factory.get('/', REMOTE_ADDR='192.168.1.5')) == '192.168.1.5'


@pytest.mark.django_db
class TestRequestLogging:

    def _records(self, caplog):
        return [record for record in caplog.records if record.name == 'apps.requests']

    def test_successful_request(self, api_client, caplog):
        caplog.set_level(logging.INFO, logger='apps.requests')

        api_client.get('/api/provinces')

        record = self._records(caplog)[-1]
        assert record.levelno == logging.INFO
        assert record.getMessage() == 'Request completed'
        assert (record.method, record.path, record.status) == ('GET', '/api/provinces', 200)
        assert record.user_id is None
        assert record.duration_ms >= 0

    def test_rejected_request_carries_the_user(self, auth, client_user, caplog):
        caplog.set_level(logging.INFO, logger='apps.requests')

        auth(client_user).get('/api/tickets/999999')

        record = self._records(caplog)[-1]
        assert record.levelno == logging.WARNING
        assert record.status == 404
        assert (record.user_id, record.role) == (str(client_user.pk), 'client')

    def test_media_requests_are_not_logged(self, api_client, caplog):
        caplog.set_level(logging.INFO, logger='apps.requests')

        api_client.get('/media/missing.png')

        assert self._records(caplog) == []
