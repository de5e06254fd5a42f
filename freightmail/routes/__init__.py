"""Routes package - register all blueprints."""

from flask import Flask


def register_blueprints(app: Flask):
    """Register all blueprints with the application."""
    from .contact import contact_bp
    from .messages import messages_bp

    app.register_blueprint(contact_bp, url_prefix='/api')
    app.register_blueprint(messages_bp, url_prefix='/api')
