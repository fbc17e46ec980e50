"""
Error handling for the ClassDesk JSON API.

Domain errors derive from ``ClassDeskError`` and carry their own code and
HTTP status. Routes raise them; the handlers registered here turn them, and
any HTTP error under ``/api/``, into the same ``{"success": false, ...}`` body.
"""

from typing import Any, Dict, Optional

from flask import current_app, jsonify, request
from marshmallow import Schema
from marshmallow import ValidationError as SchemaValidationError
from werkzeug.exceptions import HTTPException

API_PREFIX = '/api/'


class ClassDeskError(Exception):
    """Base class of every error the API reports to clients."""

    code = 'UNKNOWN_ERROR'
    status_code = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict:
        return {
            'success': False,
            'message': self.message,
            'code': self.code,
            'details': self.details
        }


class NotFoundError(ClassDeskError):
    code = 'NOT_FOUND'
    status_code = 404

    def __init__(self, message: str = 'Resource not found', resource: Optional[str] = None):
        super().__init__(message, details={'resource': resource} if resource else None)


class ValidationError(ClassDeskError):
    """A request body that does not describe a valid operation."""

    code = 'VALIDATION_ERROR'
    status_code = 400

    def __init__(self, message: str = 'Validation failed', errors: Optional[Dict] = None):
        super().__init__(message, details={'errors': errors} if errors else None)


def load_json_body(schema: Schema, message: str) -> dict:
    """Validate the request's JSON body with ``schema``; ``message`` heads the 400 on failure."""
    data = request.get_json(silent=True)
    if not data:
        raise ValidationError('No input data provided')
    try:
        return schema.load(data)
    except SchemaValidationError as err:
        raise ValidationError(message, errors=err.messages)


def success_response(data: Any = None, message: Optional[str] = None) -> dict:
    response = {'success': True}
    if data is not None:
        response['data'] = data
    if message:
        response['message'] = message
    return response


def register_error_handlers(app):
    """Render ClassDesk errors, and HTTP errors on API paths, as JSON."""

    @app.errorhandler(ClassDeskError)
    def handle_classdesk_error(error):
        log = current_app.logger.error if error.status_code >= 500 else current_app.logger.info
        log(f"{error.code} on {request.method} {request.path}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if not request.path.startswith(API_PREFIX):
            return error
        if error.code and error.code >= 500:
            current_app.logger.exception('Unhandled error on %s %s', request.method, request.path)
        # 'Method Not Allowed' -> 'METHOD_NOT_ALLOWED'
        code = error.name.upper().replace(' ', '_')
        body = ClassDeskError(error.name, code, error.code).to_dict()
        return jsonify(body), error.code
