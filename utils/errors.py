"""
Errors Module - API error type and JSON error envelopes
"""

from flask import jsonify, request, render_template, flash, redirect
from werkzeug.exceptions import HTTPException


class ErrorCodes:
    VALIDATION_ERROR = 'VALIDATION_ERROR'
    UNAUTHORIZED = 'UNAUTHORIZED'
    NOT_FOUND = 'NOT_FOUND'
    CONFLICT = 'CONFLICT'
    RATE_LIMIT_EXCEEDED = 'RATE_LIMIT_EXCEEDED'
    UPLOAD_ERROR = 'UPLOAD_ERROR'
    EMAIL_ERROR = 'EMAIL_ERROR'
    INTERNAL_ERROR = 'INTERNAL_ERROR'


# Codes used for HTTP errors raised by Flask itself on /api/ routes
HTTP_ERROR_CODES = {
    400: ErrorCodes.VALIDATION_ERROR,
    401: ErrorCodes.UNAUTHORIZED,
    404: ErrorCodes.NOT_FOUND,
    405: 'METHOD_NOT_ALLOWED',
    409: ErrorCodes.CONFLICT,
    413: 'FILE_TOO_LARGE',
    429: ErrorCodes.RATE_LIMIT_EXCEEDED,
}


class ApiError(Exception):
    """Error carrying an HTTP status and a machine-readable code"""

    def __init__(self, message, status_code, code, details=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details


def error_response(message, status_code, code, details=None):
    body = {'message': message, 'code': code}
    if details:
        body['details'] = details
    return jsonify({'error': body}), status_code


def is_api_request():
    return request.path.startswith('/api/')


def register_error_handlers(app):
    """Register JSON handlers for /api/ and HTML pages for everything else"""
    from extensions import db

    @app.errorhandler(ApiError)
    def handle_api_error(e):
        return error_response(e.message, e.status_code, e.code, e.details)

    @app.errorhandler(413)
    def file_too_large(e):
        if is_api_request():
            return error_response('File size exceeds 10MB limit', 413, 'FILE_TOO_LARGE')
        flash('File is too large. Maximum size is 10MB.', 'error')
        return redirect(request.url), 413

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        if is_api_request():
            return error_response(
                e.description or e.name,
                e.code,
                HTTP_ERROR_CODES.get(e.code, ErrorCodes.INTERNAL_ERROR),
            )
        if e.code == 404:
            return render_template('404.html'), 404
        return e

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        db.session.rollback()
        app.logger.exception(f"Unhandled error on {request.method} {request.path}: {str(e)}")
        if is_api_request():
            return error_response('Internal server error', 500, ErrorCodes.INTERNAL_ERROR)
        return render_template('500.html'), 500


__all__ = ['ApiError', 'ErrorCodes', 'error_response', 'register_error_handlers']
