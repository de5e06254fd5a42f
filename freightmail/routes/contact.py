"""Contact and quotation form endpoints."""

from flask import Blueprint, current_app, jsonify

from freightmail.errors import DeliveryError, StorageError
from freightmail.models import ContactSubmission, QuotationRequest
from freightmail.utils.decorators import reports_errors, with_payload

contact_bp = Blueprint('contact', __name__)


def _gateway():
    return current_app.extensions['notifications']


@contact_bp.route('/send-message', methods=['POST'])
@with_payload
@reports_errors('Failed to send message.', DeliveryError)
def send_message(payload):
    """Email a contact form message and keep a copy in the message log."""
    submission = ContactSubmission.from_payload(payload)
    current_app.logger.info('Attempting to send message from: %s', submission.email)

    try:
        _gateway().send_contact(submission)
    except DeliveryError as exc:
        current_app.logger.error('Error sending email: %s', exc.detail or exc.message)
        raise

    try:
        current_app.extensions['message_log'].append(
            current_app.config['NOTIFY_PHONE_NUMBER'],
            f'Message from {submission.name} ({submission.email}): {submission.message}',
            submission.name,
            submission.email,
            'message',
        )
    except StorageError as exc:
        current_app.logger.warning('Email sent but message log not updated: %s', exc.detail or exc.message)

    return jsonify({'message': 'Message sent successfully!'})


@contact_bp.route('/send-quotation', methods=['POST'])
@with_payload
@reports_errors('Failed to send quotation request.', DeliveryError)
def send_quotation(payload):
    """Email a quotation request."""
    quotation = QuotationRequest.from_payload(payload)
    current_app.logger.info('Attempting to send quotation from: %s', quotation.email)

    try:
        _gateway().send_quotation(quotation)
    except DeliveryError as exc:
        current_app.logger.error('Error sending quotation email: %s', exc.detail or exc.message)
        raise

    return jsonify({'message': 'Quotation request sent successfully!'})


@contact_bp.route('/test-email')
@reports_errors('Email configuration failed!', DeliveryError)
def test_email():
    """Check that the mail transport is reachable."""
    gateway = _gateway()
    try:
        gateway.verify()
    except DeliveryError as exc:
        current_app.logger.error('Email configuration error: %s', exc.detail or exc.message)
        raise

    return jsonify({
        'message': 'Email configuration is working!',
        'emailUser': current_app.config.get('MAIL_DEFAULT_SENDER'),
        'transport': gateway.transport.name,
    })
