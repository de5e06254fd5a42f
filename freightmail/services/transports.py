"""Mail delivery strategies.

Both transports expose the same capability: send one HTML email and return
the provider's message id, or raise :class:`DeliveryError`. Which one a
deployment uses is decided once, from ``MAIL_TRANSPORT``, when the
application starts.
"""

import logging
import smtplib
import threading
from abc import ABC, abstractmethod

import requests
from flask import current_app
from flask_mail import Connection, Message

from freightmail.errors import ConfigError, DeliveryError

logger = logging.getLogger(__name__)


class MailTransport(ABC):
    """Send-one-email capability."""
    name = None

    def open(self):
        """Acquire long-lived resources. No-op for stateless transports."""

    def close(self):
        """Release long-lived resources."""

    @abstractmethod
    def send(self, to, reply_to, subject, html):
        """Deliver one HTML email and return the provider message id."""

    @abstractmethod
    def verify(self):
        """Raise :class:`DeliveryError` unless the transport is usable."""


# ==================== SMTP ====================

class _GreetingTimeoutMixin:
    """Bound the wait for the server banner separately from the TCP connect."""
    greeting_timeout = None

    def _get_socket(self, host, port, timeout):
        sock = super()._get_socket(host, port, timeout)
        if self.greeting_timeout is not None:
            sock.settimeout(self.greeting_timeout)
        return sock


class TimeoutSMTP(_GreetingTimeoutMixin, smtplib.SMTP):
    pass


class TimeoutSMTP_SSL(_GreetingTimeoutMixin, smtplib.SMTP_SSL):
    pass


class TimeoutConnection(Connection):
    """Flask-Mail connection with connect, greeting and socket timeouts."""

    def __init__(self, mail, connect_timeout, greeting_timeout, socket_timeout):
        super().__init__(mail)
        self.connect_timeout = connect_timeout
        self.greeting_timeout = greeting_timeout
        self.socket_timeout = socket_timeout

    def configure_host(self):
        smtp_class = TimeoutSMTP_SSL if self.mail.use_ssl else TimeoutSMTP
        host = smtp_class(timeout=self.connect_timeout)
        host.greeting_timeout = self.greeting_timeout
        host.connect(self.mail.server, self.mail.port)
        host.sock.settimeout(self.socket_timeout)
        host.set_debuglevel(int(self.mail.debug))
        if self.mail.use_tls:
            resp, reply = host.starttls()
            if resp != 220:
                raise smtplib.SMTPResponseException(resp, reply)
        if self.mail.username and self.mail.password:
            host.login(self.mail.username, self.mail.password)
        return host


class SmtpTransport(MailTransport):
    """Direct SMTP through one shared, pre-validated Flask-Mail connection.

    Sends are serialised through a lock. The connection is checked with
    NOOP before reuse and reopened if the server has dropped it. A failed
    send drops the connection so the next call reconnects; the failed
    delivery itself is not retried.
    """
    name = 'smtp'

    def __init__(self, connect_timeout=10, greeting_timeout=10, socket_timeout=30):
        self.connect_timeout = connect_timeout
        self.greeting_timeout = greeting_timeout
        self.socket_timeout = socket_timeout
        self._connection = None
        self._lock = threading.Lock()

    @property
    def is_open(self):
        return self._connection is not None

    def open(self):
        """Connect and log in. Must run inside an application context."""
        with self._lock:
            self._ensure_connection()

    def close(self):
        with self._lock:
            self._drop_connection()

    def send(self, to, reply_to, subject, html):
        msg = Message(subject=subject, recipients=[to], html=html, reply_to=reply_to)
        with self._lock:
            try:
                connection = self._ensure_connection()
                connection.send(msg)
            except DeliveryError:
                self._drop_connection()
                raise
            except Exception as exc:
                self._drop_connection()
                raise _smtp_error('SMTP delivery failed', exc) from exc
        return msg.msgId

    def verify(self):
        with self._lock:
            connection = self._ensure_connection()
            if connection.host is None:
                # sending is suppressed, nothing to probe
                return
            try:
                code, reply = connection.host.noop()
            except Exception as exc:
                self._drop_connection()
                raise _smtp_error('SMTP server check failed', exc) from exc
            if code != 250:
                self._drop_connection()
                raise DeliveryError('SMTP server check failed', f'{code} {reply!r}')

    def _ensure_connection(self):
        if self._connection is not None and not self._is_alive(self._connection):
            logger.info('SMTP connection went stale, reconnecting')
            self._drop_connection()
        if self._connection is None:
            connection = TimeoutConnection(
                current_app.extensions['mail'],
                connect_timeout=self.connect_timeout,
                greeting_timeout=self.greeting_timeout,
                socket_timeout=self.socket_timeout,
            )
            try:
                connection.__enter__()
            except Exception as exc:
                raise _smtp_error('SMTP connection failed', exc) from exc
            if connection.host is not None:
                logger.info('SMTP connection opened to %s:%s', connection.mail.server, connection.mail.port)
            self._connection = connection
        return self._connection

    @staticmethod
    def _is_alive(connection):
        """Whether the server still answers on an already open connection."""
        if connection.host is None:
            return True
        try:
            code, _ = connection.host.noop()
        except (smtplib.SMTPException, OSError):
            return False
        return code == 250

    def _drop_connection(self):
        connection, self._connection = self._connection, None
        if connection is None or connection.host is None:
            return
        try:
            connection.host.quit()
        except (smtplib.SMTPException, OSError):
            connection.host.close()


def _smtp_error(message, exc):
    # smtplib re-raises socket timeouts as SMTPServerDisconnected
    cause = exc
    while cause is not None:
        if isinstance(cause, TimeoutError):
            return DeliveryError(message, 'SMTP server timed out')
        cause = cause.__cause__ or cause.__context__
    return DeliveryError(message, str(exc) or exc.__class__.__name__)


# ==================== HTTP API ====================

class ApiTransport(MailTransport):
    """Transactional email over a stateless HTTPS call per message."""
    name = 'api'

    def __init__(self, api_url, api_key, sender, verify_url=None, timeout=15, session=None):
        self.api_url = api_url
        self.api_key = api_key
        self.sender = sender
        self.verify_url = verify_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def headers(self):
        return {
            'Authorization': f'Bearer {self.api_key}',
            'Content-Type': 'application/json',
        }

    def send(self, to, reply_to, subject, html):
        payload = {
            'from': self.sender,
            'to': [to],
            'reply_to': reply_to,
            'subject': subject,
            'html': html,
        }
        try:
            response = self.session.post(self.api_url, json=payload,
                                         headers=self.headers, timeout=self.timeout)
        except requests.exceptions.Timeout as exc:
            raise DeliveryError('Email API request failed', 'Email API timed out') from exc
        except requests.exceptions.RequestException as exc:
            raise DeliveryError('Email API request failed', str(exc)) from exc

        if not response.ok:
            raise DeliveryError('Email API rejected the message', _provider_detail(response))
        try:
            return response.json().get('id')
        except ValueError:
            return None

    def verify(self):
        if not self.api_key:
            raise DeliveryError('Email API is not configured', 'MAIL_API_KEY is not set')
        if not self.verify_url:
            return
        try:
            response = self.session.get(self.verify_url, headers=self.headers,
                                        timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            raise DeliveryError('Email API is unreachable', str(exc)) from exc
        if not response.ok:
            raise DeliveryError('Email API rejected the credentials', _provider_detail(response))

    def close(self):
        self.session.close()


def _provider_detail(response):
    """Pull the provider's error text out of a failed response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ('message', 'error', 'detail'):
            if body.get(key):
                return f'{response.status_code}: {body[key]}'
    return f'{response.status_code}: {response.text or response.reason}'


def build_transport(config):
    """Create the transport named by ``MAIL_TRANSPORT``."""
    kind = (config.get('MAIL_TRANSPORT') or 'smtp').lower()
    if kind == 'smtp':
        return SmtpTransport(
            connect_timeout=config['MAIL_CONNECT_TIMEOUT'],
            greeting_timeout=config['MAIL_GREETING_TIMEOUT'],
            socket_timeout=config['MAIL_SOCKET_TIMEOUT'],
        )
    if kind == 'api':
        return ApiTransport(
            api_url=config['MAIL_API_URL'],
            api_key=config.get('MAIL_API_KEY'),
            sender=config.get('MAIL_DEFAULT_SENDER'),
            verify_url=config.get('MAIL_API_VERIFY_URL'),
            timeout=config['MAIL_API_TIMEOUT'],
        )
    raise ConfigError(f'Unknown MAIL_TRANSPORT {kind!r}, expected "smtp" or "api"')
