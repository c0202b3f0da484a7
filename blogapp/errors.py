"""Error taxonomy and the single JSON error-response contract.

Every failure raised by the services is a ``BlogError`` subclass. Views let
them propagate; the handler registered here renders them as
``{"error": message}`` with the matching status code.
"""

from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException


class BlogError(Exception):
    """Base class for expected application failures."""

    status_code = 400
    message = 'Request failed'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self):
        return {'error': self.message}


class ValidationError(BlogError):
    """Input violates a length or shape constraint."""
    status_code = 400
    message = 'Validation failed'


class UniquenessViolation(BlogError):
    """Duplicate username or provider id."""
    status_code = 409
    message = 'Already exists'


class NotFound(BlogError):
    status_code = 404
    message = 'Not found'


class InvalidCredential(BlogError):
    """Password or OTP mismatch."""
    status_code = 400
    message = 'Invalid credentials'


class UpstreamFailure(BlogError):
    """Database or external provider call failed."""
    status_code = 502
    message = 'Upstream service failed'


def register_error_handlers(app):
    """Register the JSON error handlers on ``app``."""

    @app.errorhandler(BlogError)
    def handle_blog_error(error):
        current_app.logger.info(f"{type(error).__name__}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        if isinstance(error, HTTPException):
            return error
        from blogapp import db
        db.session.rollback()
        current_app.logger.exception(f"Unhandled error: {error}")
        return jsonify({'error': 'Internal server error'}), 500
