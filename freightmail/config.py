import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default):
    return os.environ.get(name, default).lower() == 'true'


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    basedir = os.path.dirname(os.path.dirname(__file__))

    # Message log
    MESSAGE_LOG_PATH = os.environ.get('MESSAGE_LOG_PATH') or \
        os.path.join(basedir, 'messages.json')
    NOTIFY_PHONE_NUMBER = os.environ.get('PHONE_NUMBER') or 'local'

    # Mail Configuration
    MAIL_TRANSPORT = os.environ.get('MAIL_TRANSPORT', 'smtp')
    MAIL_SERVER = os.environ.get('MAIL_SERVER', 'smtp.gmail.com')
    MAIL_PORT = int(os.environ.get('MAIL_PORT', 587))
    MAIL_USE_TLS = _env_flag('MAIL_USE_TLS', 'True')
    MAIL_USE_SSL = _env_flag('MAIL_USE_SSL', 'False')
    MAIL_USERNAME = os.environ.get('MAIL_USERNAME') or os.environ.get('EMAIL_USER')
    MAIL_PASSWORD = os.environ.get('MAIL_PASSWORD') or os.environ.get('EMAIL_PASS')
    MAIL_DEFAULT_SENDER = os.environ.get('MAIL_DEFAULT_SENDER') or MAIL_USERNAME
    MAIL_RECIPIENT = os.environ.get('MAIL_RECIPIENT') or MAIL_DEFAULT_SENDER

    # SMTP timeouts in seconds
    MAIL_CONNECT_TIMEOUT = float(os.environ.get('MAIL_CONNECT_TIMEOUT', 10))
    MAIL_GREETING_TIMEOUT = float(os.environ.get('MAIL_GREETING_TIMEOUT', 10))
    MAIL_SOCKET_TIMEOUT = float(os.environ.get('MAIL_SOCKET_TIMEOUT', 30))

    # Transactional email API
    MAIL_API_URL = os.environ.get('MAIL_API_URL', 'https://api.resend.com/emails')
    MAIL_API_VERIFY_URL = os.environ.get('MAIL_API_VERIFY_URL', 'https://api.resend.com/domains')
    MAIL_API_KEY = os.environ.get('MAIL_API_KEY')
    MAIL_API_TIMEOUT = float(os.environ.get('MAIL_API_TIMEOUT', 15))

    COMPANY_NAME = os.environ.get('COMPANY_NAME', 'Ankit Transport')
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    # Hosted deployments usually block outbound SMTP
    MAIL_TRANSPORT = os.environ.get('MAIL_TRANSPORT', 'api')


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    MAIL_TRANSPORT = 'smtp'
    MAIL_SUPPRESS_SEND = True
    MAIL_DEFAULT_SENDER = 'office@transport.test'
    MAIL_RECIPIENT = 'office@transport.test'
    NOTIFY_PHONE_NUMBER = 'local'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
