"""
Orders app services layer.

Order placement runs in a single transaction and, for group orders, hands
off to the settlement engine in :mod:`apps.reimbursements.services`.
"""

from .exceptions import (
    EmptyCartError,
    OrderNotFoundError,
    RestaurantNotFoundError,
    NotRestaurantOwnerError,
    InvalidOrderStatusError,
    OrderPlacementError,
)

from .order_placement import (
    PlacedOrder,
    place_order,
)

from .order_status import (
    update_order_status,
)

from .order_queries import (
    list_user_orders,
    get_order,
    list_restaurant_orders,
)


__all__ = [
    # Exceptions
    'EmptyCartError',
    'OrderNotFoundError',
    'RestaurantNotFoundError',
    'NotRestaurantOwnerError',
    'InvalidOrderStatusError',
    'OrderPlacementError',

    # Placement
    'PlacedOrder',
    'place_order',

    # Status
    'update_order_status',

    # Queries
    'list_user_orders',
    'get_order',
    'list_restaurant_orders',
]
