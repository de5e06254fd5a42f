"""Flask application factory."""

import atexit
import logging
import os
import weakref

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .config import config
from .errors import AppError, DeliveryError
from .extensions import cors, mail
from .services import MessageLog, NotificationGateway, build_transport

LOG_FORMAT = '%(asctime)s [freightmail] %(levelname)s %(message)s'

# transports of live apps, closed once at interpreter exit
_transports = weakref.WeakSet()


@atexit.register
def close_transports():
    """Close the mail transport of every app still alive."""
    for transport in list(_transports):
        transport.close()


def create_app(config_name=None, test_config=None):
    """Create and configure the Flask application."""
    if config_name is None:
        config_name = os.environ.get('FLASK_CONFIG', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    if test_config:
        app.config.update(test_config)

    configure_logging(app)

    # Initialize extensions
    mail.init_app(app)
    cors.init_app(app, resources={r'/api/*': {'origins': app.config['CORS_ORIGINS']}})

    # Services
    app.extensions['message_log'] = MessageLog(app.config['MESSAGE_LOG_PATH'])
    transport = build_transport(app.config)
    app.extensions['notifications'] = NotificationGateway(
        transport,
        recipient=app.config['MAIL_RECIPIENT'],
        brand=app.config['COMPANY_NAME'],
    )
    app.logger.info('Mail transport: %s', transport.name)

    with app.app_context():
        try:
            transport.open()
        except DeliveryError as exc:
            # the next send reconnects
            app.logger.warning('Mail transport not ready: %s', exc.detail or exc.message)
    _transports.add(transport)

    # Register blueprints
    from .routes import register_blueprints
    register_blueprints(app)

    register_error_handlers(app)

    return app


def configure_logging(app):
    """Send application logs to stderr at ``LOG_LEVEL``."""
    level = logging.getLevelName(str(app.config.get('LOG_LEVEL', 'INFO')).upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger('freightmail').setLevel(level)
    app.logger.setLevel(level)


def register_error_handlers(app):
    """Render every error as a JSON body with a ``message`` field."""

    @app.errorhandler(AppError)
    def app_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def http_error(error):
        return jsonify({'message': error.description}), error.code

    @app.errorhandler(Exception)
    def internal_error(error):
        app.logger.exception('Unhandled error')
        return jsonify({'message': 'Internal server error', 'error': str(error)}), 500
