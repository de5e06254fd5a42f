"""Email notifications for website submissions."""

import logging

from freightmail.utils.formatting import contact_html, quotation_html

logger = logging.getLogger(__name__)


class NotificationGateway:
    """Formats submissions and hands them to the configured mail transport."""

    def __init__(self, transport, recipient, brand):
        self.transport = transport
        self.recipient = recipient
        self.brand = brand

    def send_contact(self, submission):
        """Email a contact form message. Returns the provider message id."""
        subject = f'New Message from {submission.name} - {self.brand}'
        return self._deliver(submission.email, subject, contact_html(submission))

    def send_quotation(self, request):
        """Email a quotation request. Returns the provider message id."""
        subject = f'Quotation Request from {request.name} - {self.brand}'
        return self._deliver(request.email, subject, quotation_html(request))

    def verify(self):
        self.transport.verify()

    def _deliver(self, reply_to, subject, html):
        message_id = self.transport.send(self.recipient, reply_to, subject, html)
        logger.info('Email sent via %s: %s', self.transport.name, message_id)
        return message_id
