"""Application error types."""


class AppError(Exception):
    """Base error rendered as a JSON response."""
    status_code = 500

    def __init__(self, message, detail=None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self):
        payload = {'message': self.message}
        if self.detail:
            payload['error'] = self.detail
        return payload


class ValidationError(AppError):
    """Required request fields are missing."""
    status_code = 400


class NotFoundError(AppError):
    """No message with the requested id, or no message log at all."""
    status_code = 404


class DeliveryError(AppError):
    """The mail transport or provider rejected or failed a delivery."""
    status_code = 500


class StorageError(AppError):
    """The message log could not be read or written."""
    status_code = 500


class StorageDecodeError(StorageError):
    """The message log file is not a valid JSON array."""


class ConfigError(Exception):
    """Invalid application configuration."""
