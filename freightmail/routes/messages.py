"""Message log endpoints."""

from flask import Blueprint, current_app, jsonify

from freightmail.errors import StorageError
from freightmail.utils.decorators import reports_errors, with_payload

messages_bp = Blueprint('messages', __name__)


def _message_log():
    return current_app.extensions['message_log']


@messages_bp.route('/send-sms', methods=['POST'])
@with_payload
@reports_errors('Failed to save message', StorageError)
def send_sms(payload):
    """Save a message straight to the local log."""
    phone_number = payload.get('phoneNumber')
    message = payload.get('message')

    if not phone_number or not message:
        return jsonify({'message': 'Phone number and message required'}), 400

    sms = _message_log().append(
        phone_number,
        message,
        payload.get('senderName'),
        payload.get('senderEmail'),
        payload.get('messageType') or 'contact',
    )
    return jsonify({'message': 'Message saved locally!', 'sms': sms.to_dict()})


@messages_bp.route('/messages')
@reports_errors('Error reading messages', StorageError)
def list_messages():
    """Get all logged messages."""
    messages = _message_log().list()
    return jsonify([m.to_dict() for m in messages])


@messages_bp.route('/messages/<int:message_id>/read', methods=['PUT'])
@reports_errors('Error updating message', StorageError)
def mark_read(message_id):
    """Mark a message as read."""
    _message_log().mark_read(message_id)
    return jsonify({'message': 'Message marked as read'})


@messages_bp.route('/messages/<int:message_id>', methods=['DELETE'])
@reports_errors('Error deleting message', StorageError)
def delete_message(message_id):
    """Delete a message."""
    if _message_log().remove(message_id):
        current_app.logger.info('Message %s deleted', message_id)
    return jsonify({'message': 'Message deleted'})
