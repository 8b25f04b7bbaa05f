# Journal_app/logging_config.py
"""
Structured JSON logging configuration with request ID propagation and secret filtering
"""

import re
import logging
import uuid
from flask import request, g, has_request_context
from flask_login import current_user
from pythonjsonlogger import jsonlogger


class SecretMaskingFilter(logging.Filter):
    """Filter to mask secrets in log messages"""

    SECRET_PATTERNS = [
        re.compile(r'(password|secret|token|authorization|session)[\'"]*\s*[:=]\s*[\'"]?([^\'",\s]+)', re.IGNORECASE),
        re.compile(r'("password"|"currentPassword"|"newPassword"|"secret"|"token")\s*:\s*"([^"]+)"', re.IGNORECASE),
    ]

    @classmethod
    def mask(cls, text):
        for pattern in cls.SECRET_PATTERNS:
            text = pattern.sub(r'\1: ****', text)
        return text

    def filter(self, record):
        if isinstance(record.msg, str):
            record.msg = self.mask(record.msg)

        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: self.mask(v) if isinstance(v, str) else v
                               for k, v in record.args.items()}
            else:
                record.args = tuple(self.mask(a) if isinstance(a, str) else a
                                    for a in record.args)
        return True


class RequestIDFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that adds request context when there is one"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = self.formatTime(record, self.datefmt)

        if has_request_context():
            log_record['request_id'] = getattr(g, 'request_id', None)
            log_record['path'] = request.path
            log_record['method'] = request.method
            log_record['remote_addr'] = request.remote_addr

            if current_user.is_authenticated:
                log_record['user_id'] = current_user.id


def setup_logging(app):
    """Setup structured JSON logging for the application"""

    formatter = RequestIDFormatter(
        '%(timestamp)s %(levelname)s %(name)s %(message)s',
        rename_fields={
            'levelname': 'level',
            'name': 'logger',
        }
    )

    if app.logger.handlers:
        handler = app.logger.handlers[0]
    else:
        handler = logging.StreamHandler()
        app.logger.addHandler(handler)

    handler.setFormatter(formatter)
    handler.addFilter(SecretMaskingFilter())

    log_level = str(app.config.get('LOG_LEVEL', 'INFO')).upper()
    app.logger.setLevel(getattr(logging, log_level, logging.INFO))
    handler.setLevel(getattr(logging, log_level, logging.INFO))

    app.logger.info("Structured JSON logging configured", extra={
        'log_level': log_level,
        'handler_class': handler.__class__.__name__
    })


def generate_request_id():
    return str(uuid.uuid4())


def setup_request_id_middleware(app):
    """Generate or propagate X-Request-ID for every request"""

    @app.before_request
    def assign_request_id():
        g.request_id = request.headers.get('X-Request-ID') or generate_request_id()

    @app.after_request
    def echo_request_id(response):
        if hasattr(g, 'request_id'):
            response.headers['X-Request-ID'] = g.request_id
        return response
