"""
Error taxonomy shared by every app.

Each class is a DRF ``APIException`` so services can raise them directly and
views stay thin. Every exception carries a stable ``kind`` that clients can
switch on; subclasses in the individual apps narrow ``default_code`` and
``default_detail`` but keep the ``kind`` of their parent.

Exception Hierarchy:
    ServiceError (base)
    ├── ForbiddenError          kind=forbidden       403
    ├── NotFoundError           kind=not_found       404
    ├── InvalidInputError       kind=invalid_input   400
    ├── InvalidStateError       kind=invalid_state   400
    ├── ConflictError           kind=conflict        409
    └── InternalError           kind=internal_error  500

``unauthorized`` is produced by DRF's own authentication exceptions and
mapped in :mod:`apps.common.exception_handler`.

Usage:
    from apps.common.exceptions import NotFoundError

    class OrderNotFoundError(NotFoundError):
        default_detail = 'Order not found.'
        default_code = 'order_not_found'
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class ErrorKind:
    UNAUTHORIZED = 'unauthorized'
    FORBIDDEN = 'forbidden'
    NOT_FOUND = 'not_found'
    INVALID_INPUT = 'invalid_input'
    INVALID_STATE = 'invalid_state'
    CONFLICT = 'conflict'
    INTERNAL_ERROR = 'internal_error'


class ServiceError(APIException):
    """Base exception for all service-layer errors."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Internal server error.'
    default_code = 'internal_error'
    kind = ErrorKind.INTERNAL_ERROR


class ForbiddenError(ServiceError):
    """Authenticated, but not entitled to the resource."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'You do not have permission to perform this action.'
    default_code = 'forbidden'
    kind = ErrorKind.FORBIDDEN


class NotFoundError(ServiceError):
    """Entity id doesn't resolve."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found.'
    default_code = 'not_found'
    kind = ErrorKind.NOT_FOUND


class InvalidInputError(ServiceError):
    """Malformed request, bad enum value or inconsistent amounts."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid input.'
    default_code = 'invalid_input'
    kind = ErrorKind.INVALID_INPUT


class InvalidStateError(ServiceError):
    """Operation is not possible in the current state of the resource."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Operation not allowed in the current state.'
    default_code = 'invalid_state'
    kind = ErrorKind.INVALID_STATE


class ConflictError(ServiceError):
    """Request conflicts with an already recorded change."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflict.'
    default_code = 'conflict'
    kind = ErrorKind.CONFLICT


class InternalError(ServiceError):
    """Unexpected persistence failure."""
    pass
