from __future__ import annotations

import pytest

from freightmail import create_app
from freightmail.errors import DeliveryError
from freightmail.services import MailTransport


class FakeTransport(MailTransport):
    name = 'fake'

    def __init__(self, error=None):
        self.error = error
        self.sent = []
        self.verified = 0

    def send(self, to, reply_to, subject, html):
        if self.error:
            raise self.error
        self.sent.append({'to': to, 'reply_to': reply_to, 'subject': subject, 'html': html})
        return f'<fake-{len(self.sent)}@transport.test>'

    def verify(self):
        if self.error:
            raise self.error
        self.verified += 1


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / 'messages.json'


@pytest.fixture
def app(log_path):
    return create_app('testing', {'MESSAGE_LOG_PATH': str(log_path)})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def message_log(app):
    return app.extensions['message_log']


@pytest.fixture
def fake_transport(app):
    transport = FakeTransport()
    app.extensions['notifications'].transport = transport
    return transport


@pytest.fixture
def failing_transport(app):
    transport = FakeTransport(error=DeliveryError('SMTP delivery failed', 'Invalid login: 535 bad credentials'))
    app.extensions['notifications'].transport = transport
    return transport
