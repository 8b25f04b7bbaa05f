# Journal_app/rate_limiting.py
"""
Rate limiting configuration using Flask-Limiter with Redis backend and fallback
"""

import os
from flask_limiter.util import get_remote_address
from flask_login import current_user

# Rate limiting configuration from environment variables
RATE_LIMITS = {
    'login': os.environ.get('RATE_LIMITS_LOGIN', '10/minute'),
    'register': os.environ.get('RATE_LIMITS_REGISTER', '5/minute'),
    'write': os.environ.get('RATE_LIMITS_WRITE', '60/minute'),
    'global_ceiling': os.environ.get('RATE_LIMITS_GLOBAL', '300/minute')
}


def get_user_id():
    """Get current user ID for rate limiting key"""
    if current_user.is_authenticated:
        return f"user:{current_user.id}"
    # Fallback to IP address
    return get_remote_address()


def setup_rate_limiting(app):
    """Bind the shared limiter to the app, falling back to in-memory storage"""
    from .extensions import limiter

    storage_uri = app.config.get('RATELIMIT_STORAGE_URI') or 'memory://'
    app.config['RATELIMIT_STORAGE_URI'] = storage_uri
    if storage_uri.startswith('memory://'):
        app.logger.warning("Rate limiting using in-memory storage - not suitable for production")
    else:
        app.logger.info("Rate limiting using external backend", extra={'storage_uri': storage_uri})

    limiter.init_app(app)
    return limiter
