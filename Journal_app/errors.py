# Journal_app/errors.py
"""
JSON error responses for the REST API
"""

from flask import jsonify, g
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from .schemas import format_validation_error


class ApiError(Exception):
    """Raised by route helpers to short-circuit with a JSON error"""

    def __init__(self, message, status_code=400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def error_response(message, status_code):
    return jsonify({'message': message}), status_code


def register_error_handlers(app):

    @app.errorhandler(ApiError)
    def handle_api_error(err):
        return error_response(err.message, err.status_code)

    @app.errorhandler(ValidationError)
    def handle_validation_error(err):
        return error_response(format_validation_error(err), 400)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        return error_response(err.description or err.name, err.code)

    @app.errorhandler(Exception)
    def handle_unexpected(err):
        app.logger.exception("Unhandled error", extra={
            'error': str(err),
            'request_id': getattr(g, 'request_id', None),
        })
        return error_response('Internal server error', 500)
