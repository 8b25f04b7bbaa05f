# Journal_app/security_middleware.py
"""
Security headers and middleware for hardening the application
"""

import os
from flask import request, abort


def setup_security_headers(app):
    """Setup security headers middleware"""

    @app.after_request
    def add_security_headers(response):
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Referrer-Policy'] = 'no-referrer'
        response.headers['Permissions-Policy'] = 'camera=(), microphone=(), geolocation=()'
        response.headers['Content-Security-Policy'] = os.environ.get(
            'SECURITY_CSP', "default-src 'none'; frame-ancestors 'none'")
        # API responses carry per-user data
        if request.path.startswith('/api/'):
            response.headers['Cache-Control'] = 'no-store'
        return response


def setup_request_size_limits(app):
    """Reject oversized request bodies"""

    max_content_length = int(app.config.get('MAX_REQUEST_BYTES')
                             or os.environ.get('MAX_REQUEST_BYTES', 1024 * 1024))
    app.config['MAX_CONTENT_LENGTH'] = max_content_length

    @app.before_request
    def limit_request_size():
        if request.content_length and request.content_length > max_content_length:
            abort(413, "Request entity too large")


def setup_session_security(app):
    """Setup secure session cookie configuration"""

    app.config.update(
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SECURE=os.environ.get('SESSION_SECURE', 'false').lower() == 'true',
        SESSION_COOKIE_SAMESITE='Lax',
        REMEMBER_COOKIE_HTTPONLY=True,
    )


def setup_security_middleware(app):
    """Setup all security middleware"""
    setup_security_headers(app)
    setup_request_size_limits(app)
    setup_session_security(app)

    app.logger.info("Security middleware configured", extra={
        'max_request_bytes': app.config.get('MAX_CONTENT_LENGTH'),
        'session_secure': app.config.get('SESSION_COOKIE_SECURE'),
    })
