"""Logged message model."""

from dataclasses import dataclass
from datetime import datetime, timezone


def _isoformat(moment):
    """Format a UTC datetime the way browsers print ``Date.toISOString()``."""
    return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


@dataclass
class Message:
    """One entry in the message log."""
    id: int
    timestamp: str
    phone_number: str
    message: str
    sender_name: str = None
    sender_email: str = None
    message_type: str = 'contact'
    read: bool = False

    @classmethod
    def create(cls, phone_number, message, sender_name=None, sender_email=None,
               message_type='contact', now=None):
        """Build an unread message stamped with the current time."""
        now = now or datetime.now(timezone.utc)
        return cls(
            id=int(now.timestamp() * 1000),
            timestamp=_isoformat(now),
            phone_number=phone_number,
            message=message,
            sender_name=sender_name,
            sender_email=sender_email,
            message_type=message_type,
        )

    def mark_read(self):
        self.read = True

    def to_dict(self):
        return {
            'id': self.id,
            'timestamp': self.timestamp,
            'phoneNumber': self.phone_number,
            'message': self.message,
            'senderName': self.sender_name,
            'senderEmail': self.sender_email,
            'messageType': self.message_type,
            'read': self.read,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=int(data['id']),
            timestamp=data.get('timestamp'),
            phone_number=data.get('phoneNumber'),
            message=data.get('message'),
            sender_name=data.get('senderName'),
            sender_email=data.get('senderEmail'),
            message_type=data.get('messageType'),
            read=bool(data.get('read', False)),
        )

    def __repr__(self):
        return f'<Message {self.id} from {self.sender_email}>'
