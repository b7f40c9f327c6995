"""
Order status updates, restricted to the owner of the order's restaurant.
"""
import logging
from uuid import UUID

from django.db import transaction

from apps.accounts.principal import AuthenticatedPrincipal
from apps.orders.models import Order, OrderStatus

from .exceptions import (
    InvalidOrderStatusError,
    NotRestaurantOwnerError,
    OrderNotFoundError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def update_order_status(
    *,
    principal: AuthenticatedPrincipal,
    order_id: UUID,
    status: str
) -> Order:
    """
    Move an order to a new status.

    Args:
        principal: Acting user, must own the order's restaurant
        order_id: UUID of the order
        status: One of OrderStatus values

    Returns:
        Updated Order instance

    Raises:
        InvalidOrderStatusError: If status isn't a known order status
        OrderNotFoundError: If order doesn't exist
        NotRestaurantOwnerError: If principal doesn't own the restaurant
    """
    if status not in OrderStatus.values:
        raise InvalidOrderStatusError(
            f"Invalid status. Must be one of: {', '.join(OrderStatus.values)}"
        )

    try:
        order = (
            Order.objects
            .select_for_update()
            .select_related('restaurant')
            .get(id=order_id)
        )
    except Order.DoesNotExist:
        raise OrderNotFoundError()

    if order.restaurant.owner_id != principal.user_id:
        raise NotRestaurantOwnerError()

    previous = order.status
    order.status = status
    order.save(update_fields=['status', 'updated_at'])

    logger.info("Order %s status %s -> %s by %s", order.id, previous, status, principal.user_id)
    return order
