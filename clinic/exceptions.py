"""
API error types and the project-wide DRF exception handler.

Every error leaves the API as ``{"success": false, "message": ..., "code": ...}``
plus any extra keys the exception carries (``fields`` for missing fields,
``available`` for an inventory shortfall).
"""
from __future__ import annotations

import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)

# Serializer error codes that mean "the caller left this field out"
_MISSING_CODES = {'required', 'blank', 'null'}


class ClinicAPIException(exceptions.APIException):
    """Base class for clinic errors that carry extra response keys."""

    def __init__(self, detail=None, code=None, **extra):
        super().__init__(detail, code)
        self.extra = extra


class MissingField(ClinicAPIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Missing required field.'
    default_code = 'missing_field'

    def __init__(self, fields: list[str]):
        super().__init__(f"Missing required field(s): {', '.join(fields)}", fields=list(fields))


class InvalidValue(ClinicAPIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid value.'
    default_code = 'invalid_value'


class InvalidStatus(InvalidValue):
    default_code = 'invalid_status'

    def __init__(self, value, allowed):
        super().__init__(
            f"Invalid status '{value}'. Must be one of: {', '.join(allowed)}",
            allowed=list(allowed),
        )


class InvalidTransition(ClinicAPIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Status transition not allowed.'
    default_code = 'invalid_transition'


class InsufficientQuantity(ClinicAPIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Insufficient quantity.'
    default_code = 'insufficient_quantity'

    def __init__(self, available: int):
        super().__init__(f"Insufficient quantity. Available: {available}", available=available)


class Unauthorized(exceptions.AuthenticationFailed):
    default_detail = 'Invalid username or password.'
    default_code = 'unauthorized'


def _first_message(detail) -> str:
    if isinstance(detail, dict):
        for key, value in detail.items():
            msg = _first_message(value)
            return f"{key}: {msg}" if key != 'non_field_errors' else msg
        return ''
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def _missing_fields(codes) -> list[str]:
    if not isinstance(codes, dict):
        return []
    missing = []
    for field, field_codes in codes.items():
        if isinstance(field_codes, str):
            field_codes = [field_codes]
        if isinstance(field_codes, (list, tuple)) and _MISSING_CODES & set(c for c in field_codes if isinstance(c, str)):
            missing.append(field)
    return missing


def _normalize_validation_error(exc: exceptions.ValidationError) -> ClinicAPIException:
    missing = _missing_fields(exc.get_codes())
    if missing:
        return MissingField(missing)
    return InvalidValue(_first_message(exc.detail))


def api_exception_handler(exc, context):
    if isinstance(exc, exceptions.ValidationError):
        exc = _normalize_validation_error(exc)
    resp = drf_exception_handler(exc, context)
    if resp is None:
        view = context.get('view')
        logger.exception('Unhandled error in %s', getattr(view, '__name__', view.__class__.__name__ if view else '?'))
        return Response(
            {'success': False, 'code': 'server_error', 'message': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    detail = resp.data.get('detail', resp.data) if isinstance(resp.data, dict) else resp.data
    body = {
        'success': False,
        'code': getattr(detail, 'code', None) or 'api_error',
        'message': _first_message(detail),
    }
    body.update(getattr(exc, 'extra', {}))
    headers = {k: resp[k] for k in ('WWW-Authenticate', 'Retry-After') if resp.has_header(k)}
    return Response(body, status=resp.status_code, headers=headers)
