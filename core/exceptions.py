"""
Core — Exception Handling

Typed domain exceptions and the DRF exception handler that renders every
failure in the standard error envelope.

@file core/exceptions.py
"""

import logging

from django.core.exceptions import ValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger('estoque')


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class BusinessRuleViolation(APIException):
    """Raised when a business rule is violated at the service layer."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Business rule violation.'
    default_code = 'BUSINESS_RULE_VIOLATION'


class InvalidOperation(BusinessRuleViolation):
    """Raised when an operation would leave a product with negative stock."""
    default_detail = 'Operation would result in negative stock.'
    default_code = 'INVALID_OPERATION'


class InsufficientStockError(InvalidOperation):
    """Raised when an exit movement exceeds the product's available quantity."""
    default_detail = 'Insufficient stock for this operation.'
    default_code = 'INSUFFICIENT_STOCK'


class DuplicateResourceError(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists.'
    default_code = 'DUPLICATE_RESOURCE'


class DependencyViolation(APIException):
    """Raised when a delete is blocked by rows that still reference the target."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource is still referenced and cannot be deleted.'
    default_code = 'DEPENDENCY_VIOLATION'


class ResourceNotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found.'
    default_code = 'RESOURCE_NOT_FOUND'


# ---------------------------------------------------------------------------
# Standard exception handler
# ---------------------------------------------------------------------------

# DRF's own codes are lowercase; the API reports upper-case codes only.
DRF_CODE_ALIASES = {
    'invalid': 'VALIDATION_ERROR',
    'parse_error': 'VALIDATION_ERROR',
    'not_found': 'RESOURCE_NOT_FOUND',
}


def _envelope(errors, code: str) -> dict:
    return {'success': False, 'errors': errors, 'code': code}


def _error_code(exc) -> str:
    code = getattr(exc, 'default_code', 'ERROR')
    return DRF_CODE_ALIASES.get(code, code.upper())


def standard_exception_handler(exc, context):
    """
    Wraps every error response in the standard envelope:
      { "success": false, "errors": {...}, "code": "ERROR_CODE" }

    Anything DRF does not know how to render is logged and reported as a
    500 INTERNAL_ERROR.
    """
    if isinstance(exc, Http404):
        exc = ResourceNotFoundError()
    elif isinstance(exc, ValidationError):
        errors = exc.message_dict if hasattr(exc, 'error_dict') else {'detail': exc.messages}
        return Response(_envelope(errors, 'VALIDATION_ERROR'), status=status.HTTP_400_BAD_REQUEST)

    response = exception_handler(exc, context)
    if response is None:
        logger.exception('Unhandled exception in view: %s', exc)
        return Response(
            _envelope({'detail': ['Internal server error.']}, 'INTERNAL_ERROR'),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(response.data, dict):
        errors = response.data
    elif isinstance(response.data, list):
        errors = {'detail': response.data}
    else:
        errors = {'detail': [str(response.data)]}

    response.data = _envelope(errors, _error_code(exc))
    return response
