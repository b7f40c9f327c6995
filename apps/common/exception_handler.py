"""
DRF exception handler rendering every failure with a stable error kind.

Response shape::

    {"error": {"kind": "conflict",
               "code": "reimbursement_already_settled",
               "detail": "Reimbursement is already marked as paid."}}

Unexpected exceptions are logged with their traceback and rendered as a
generic ``internal_error``; the raw message never reaches the client.
"""
import logging

from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

from .exceptions import ErrorKind

logger = logging.getLogger(__name__)


_KIND_BY_STATUS = {
    status.HTTP_401_UNAUTHORIZED: ErrorKind.UNAUTHORIZED,
    status.HTTP_403_FORBIDDEN: ErrorKind.FORBIDDEN,
    status.HTTP_404_NOT_FOUND: ErrorKind.NOT_FOUND,
    status.HTTP_409_CONFLICT: ErrorKind.CONFLICT,
}


def error_payload(kind, code, detail):
    """Build the error body shared by API and Django-level handlers."""
    return {'error': {'kind': kind, 'code': code, 'detail': detail}}


def _kind_for(exc, status_code):
    kind = getattr(exc, 'kind', None)
    if kind:
        return kind
    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        return ErrorKind.UNAUTHORIZED
    if status_code in _KIND_BY_STATUS:
        return _KIND_BY_STATUS[status_code]
    if status_code >= 500:
        return ErrorKind.INTERNAL_ERROR
    return ErrorKind.INVALID_INPUT


def _code_and_detail(exc, response):
    if isinstance(exc, exceptions.ValidationError):
        return 'validation_error', response.data
    if isinstance(exc, Http404):
        return 'not_found', 'Not found.'
    if isinstance(exc, exceptions.APIException):
        codes = exc.get_codes()
        code = codes if isinstance(codes, str) else exc.default_code
        return code, str(exc.detail)
    return 'error', response.data.get('detail', '') if isinstance(response.data, dict) else ''


def api_exception_handler(exc, context):
    """Wrap DRF's default handler and normalise the response body."""
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.error(
            "Unhandled exception in %s",
            view.__class__.__name__ if view else 'unknown view',
            exc_info=exc,
        )
        set_rollback()
        return Response(
            error_payload(ErrorKind.INTERNAL_ERROR, 'internal_error', 'Internal server error.'),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    code, detail = _code_and_detail(exc, response)
    response.data = error_payload(_kind_for(exc, response.status_code), code, detail)
    return response
