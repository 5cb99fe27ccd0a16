"""
Error taxonomy and JSON error handlers.

Every error raised on purpose derives from PortfolioError and carries the
HTTP status it maps to. Anything else reaching the handlers is logged in full
and answered with a generic 500 so no internal detail reaches the client.
"""

import logging

from flask import jsonify, request
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

logger = logging.getLogger(__name__)

GENERIC_ERROR = 'Internal server error'


class PortfolioError(Exception):
    """Base class for errors that map onto an HTTP response."""
    status_code = 500
    message = GENERIC_ERROR

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationError(PortfolioError):
    status_code = 400
    message = 'Invalid request'


class WeakPassword(ValidationError):
    message = 'New password must be at least 6 characters'


class InvalidFileType(PortfolioError):
    status_code = 400
    message = 'Invalid file type'


class FileTooLarge(PortfolioError):
    status_code = 400
    message = 'File size too large. Maximum 10MB allowed.'


class Unauthenticated(PortfolioError):
    status_code = 401
    message = 'Authentication required'


class InvalidCredentials(PortfolioError):
    status_code = 401
    message = 'Invalid credentials'


class NotFound(PortfolioError):
    status_code = 404
    message = 'Not found'


class LogoutError(PortfolioError):
    message = 'Logout failed'


class StorageError(PortfolioError):
    """Persistence failed; the message is logged, never sent to the client."""


def error_response(message, status_code):
    return jsonify({'error': message}), status_code


def register_error_handlers(app):
    """Render errors as ``{"error": ...}`` JSON bodies."""

    @app.errorhandler(PortfolioError)
    def handle_portfolio_error(error):
        if isinstance(error, StorageError):
            logger.error('Storage failure on %s %s: %s', request.method, request.path, error)
            return error_response(GENERIC_ERROR, error.status_code)
        return error_response(error.message, error.status_code)

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(error):
        return error_response(FileTooLarge.message, FileTooLarge.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if not request.path.startswith('/api/'):
            return error
        return error_response(error.description or error.name, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        logger.exception('Unhandled error on %s %s', request.method, request.path)
        return error_response(GENERIC_ERROR, 500)
