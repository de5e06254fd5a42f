"""Services package."""

from .message_log import MessageLog
from .notifications import NotificationGateway
from .transports import ApiTransport, MailTransport, SmtpTransport, build_transport

__all__ = [
    'MessageLog',
    'NotificationGateway',
    'MailTransport',
    'SmtpTransport',
    'ApiTransport',
    'build_transport',
]
