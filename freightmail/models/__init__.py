"""Data models package."""

from .message import Message
from .submission import ContactSubmission, QuotationRequest

__all__ = [
    'Message',
    'ContactSubmission',
    'QuotationRequest',
]
