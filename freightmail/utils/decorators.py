"""Request handling decorators."""

from functools import wraps
from flask import jsonify, request

from freightmail.errors import ValidationError


def with_payload(f):
    """Decorator to pass the JSON or form-encoded body as the first argument."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        payload = request.get_json(silent=True)
        if payload is None:
            payload = request.form.to_dict()
        if not isinstance(payload, dict):
            raise ValidationError('Request body must be a JSON object')
        return f(payload, *args, **kwargs)
    return decorated_function


def reports_errors(message, *error_types):
    """Decorator to answer the given errors with ``message`` and their detail."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except error_types as exc:
                return jsonify({
                    'message': message,
                    'error': exc.detail or exc.message,
                }), exc.status_code
        return decorated_function
    return decorator
