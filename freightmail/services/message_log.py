"""File-backed log of received messages.

The whole collection lives in one pretty-printed JSON array and every
operation reads, changes and rewrites it in full. Calls on one
``MessageLog`` are serialised by a lock and writes replace the file
atomically, so concurrent requests in a single process cannot drop an
append. Separate processes sharing the file are still last-writer-wins.
"""

import json
import logging
import os
import tempfile
import threading

from freightmail.errors import NotFoundError, StorageDecodeError, StorageError
from freightmail.models import Message

logger = logging.getLogger(__name__)


class MessageLog:
    """Ordered collection of :class:`Message` records in a JSON file."""

    def __init__(self, path):
        self.path = path
        self._lock = threading.Lock()

    def exists(self):
        return os.path.exists(self.path)

    def append(self, phone_number, message, sender_name=None, sender_email=None,
               message_type='contact'):
        """Add a new unread message and return it."""
        with self._lock:
            messages = self._load()
            entry = Message.create(phone_number, message, sender_name,
                                   sender_email, message_type)
            # wall-clock ids can repeat within a millisecond
            if messages:
                last_id = max(m.id for m in messages)
                if entry.id <= last_id:
                    entry.id = last_id + 1
            messages.append(entry)
            self._save(messages)

        logger.info('Message %s saved for %s', entry.id, phone_number)
        return entry

    def list(self):
        """Return every message in insertion order."""
        with self._lock:
            return self._load()

    def mark_read(self, message_id):
        """Flag one message as read and return it."""
        with self._lock:
            messages = self._load_existing()
            for entry in messages:
                if entry.id == message_id:
                    entry.mark_read()
                    self._save(messages)
                    return entry
        raise NotFoundError('Message not found')

    def remove(self, message_id):
        """Delete a message by id. Returns whether an entry was removed."""
        with self._lock:
            messages = self._load_existing()
            remaining = [m for m in messages if m.id != message_id]
            self._save(remaining)
        return len(remaining) != len(messages)

    def _load_existing(self):
        if not self.exists():
            raise NotFoundError('No messages found')
        return self._load()

    def _load(self):
        if not self.exists():
            return []
        try:
            with open(self.path, encoding='utf-8') as fh:
                data = json.load(fh)
        except ValueError as exc:
            raise StorageDecodeError('Message log is corrupt', str(exc)) from exc
        except OSError as exc:
            raise StorageError('Message log could not be read', str(exc)) from exc

        if not isinstance(data, list):
            raise StorageDecodeError('Message log is corrupt', 'expected a JSON array')
        try:
            return [Message.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError) as exc:
            raise StorageDecodeError('Message log is corrupt', f'bad entry: {exc}') from exc

    def _save(self, messages):
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix='.messages-', suffix='.json')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as fh:
                    json.dump([m.to_dict() for m in messages], fh, indent=2, ensure_ascii=False)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as exc:
            raise StorageError('Message log could not be written', str(exc)) from exc
