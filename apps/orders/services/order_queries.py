"""
Read-side order queries for participants and restaurant owners.
"""
from uuid import UUID

from django.db.models import Prefetch, Q, QuerySet

from apps.accounts.principal import AuthenticatedPrincipal
from apps.orders.models import Order, OrderItem
from apps.restaurants.models import Restaurant

from .exceptions import (
    NotRestaurantOwnerError,
    OrderNotFoundError,
    RestaurantNotFoundError,
)


def _orders_with_details() -> QuerySet:
    return (
        Order.objects
        .select_related('restaurant', 'placed_by', 'group')
        .prefetch_related(
            Prefetch('items', queryset=OrderItem.objects.select_related('user')),
            'payments',
            'participants__user',
        )
    )


def _visible_to(principal: AuthenticatedPrincipal) -> Q:
    return (
        Q(participants__user_id=principal.user_id)
        | Q(placed_by_id=principal.user_id)
        | Q(restaurant__owner_id=principal.user_id)
    )


def list_user_orders(*, principal: AuthenticatedPrincipal) -> QuerySet:
    """Orders the principal placed or contributed items to, newest first."""
    return (
        _orders_with_details()
        .filter(Q(participants__user_id=principal.user_id) | Q(placed_by_id=principal.user_id))
        .distinct()
        .order_by('-order_date')
    )


def get_order(*, principal: AuthenticatedPrincipal, order_id: UUID) -> Order:
    """
    Get a single order visible to the principal.

    Participants, the payer and the restaurant owner can see an order; for
    anyone else it does not exist.

    Raises:
        OrderNotFoundError: If order doesn't exist or isn't visible
    """
    order = (
        _orders_with_details()
        .filter(_visible_to(principal), id=order_id)
        .distinct()
        .first()
    )
    if order is None:
        raise OrderNotFoundError()
    return order


def list_restaurant_orders(*, principal: AuthenticatedPrincipal, restaurant_id: UUID) -> QuerySet:
    """
    All orders of a restaurant, for its owner, newest first.

    Raises:
        RestaurantNotFoundError: If restaurant doesn't exist
        NotRestaurantOwnerError: If principal doesn't own the restaurant
    """
    try:
        restaurant = Restaurant.objects.get(id=restaurant_id)
    except Restaurant.DoesNotExist:
        raise RestaurantNotFoundError()

    if restaurant.owner_id != principal.user_id:
        raise NotRestaurantOwnerError()

    return (
        _orders_with_details()
        .filter(restaurant=restaurant)
        .order_by('-order_date')
    )
