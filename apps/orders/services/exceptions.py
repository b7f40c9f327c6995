"""
Domain-specific exceptions for the orders app.

Each one narrows an error kind from :mod:`apps.common.exceptions`.
"""
from apps.common.exceptions import (
    ForbiddenError,
    InternalError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
)


class EmptyCartError(InvalidStateError):
    """Raised when checkout is attempted on a missing or empty cart."""
    default_detail = 'Cart is empty.'
    default_code = 'cart_empty'


class OrderNotFoundError(NotFoundError):
    default_detail = 'Order not found.'
    default_code = 'order_not_found'


class RestaurantNotFoundError(NotFoundError):
    default_detail = 'Restaurant not found.'
    default_code = 'restaurant_not_found'


class NotRestaurantOwnerError(ForbiddenError):
    """Raised when a user acts on orders of a restaurant they don't own."""
    default_detail = 'Only the restaurant owner can manage its orders.'
    default_code = 'not_restaurant_owner'


class InvalidOrderStatusError(InvalidInputError):
    default_detail = 'Invalid order status.'
    default_code = 'invalid_order_status'


class OrderPlacementError(InternalError):
    """Raised when persisting an order fails; nothing is written."""
    default_detail = 'Failed to place order.'
    default_code = 'order_placement_failed'
