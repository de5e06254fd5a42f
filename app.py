# freightmail - development server entry point
# Production: gunicorn "freightmail:create_app()"

import os

from freightmail import create_app

app = create_app()

if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    app.logger.info('Server is running on http://localhost:%s', port)
    app.logger.info('Email service configured with: %s', app.config.get('MAIL_DEFAULT_SENDER'))
    app.run(host='0.0.0.0', port=port, debug=app.config.get('DEBUG', False))
