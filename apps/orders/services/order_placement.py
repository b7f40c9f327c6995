"""
Order placement service.

Converts a personal or group cart into an Order with snapshot items, one
participant row per contributing user and the checkout Payment, then empties
the cart. Everything happens in a single transaction with the cart row
locked, so two concurrent checkouts of one cart are serialized and the loser
sees an empty cart.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction, DatabaseError

from apps.accounts.principal import AuthenticatedPrincipal
from apps.carts.services import clear_cart, get_cart_items, lock_cart
from apps.common.money import to_cents
from apps.groups.services import ensure_member
from apps.orders.models import (
    Order,
    OrderItem,
    OrderParticipant,
    OrderStatus,
    Payment,
    PaymentStatus,
)
from apps.reimbursements.services.settlement_engine import settle_order

from .exceptions import EmptyCartError, OrderPlacementError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacedOrder:
    order: Order
    payment: Payment

    @property
    def order_id(self) -> UUID:
        return self.order.id

    @property
    def payment_id(self) -> UUID:
        return self.payment.id

    @property
    def total_amount(self) -> Decimal:
        return self.order.total_price


def place_order(
    *,
    principal: AuthenticatedPrincipal,
    group_id: Optional[UUID] = None
) -> PlacedOrder:
    """
    Check out the principal's cart, or a group's shared cart.

    Steps, all inside one transaction:
    1. Lock the cart and load its items
    2. Create the Order with the summed total and the items' restaurant
    3. Create one OrderParticipant per distinct contributing user
    4. Snapshot every cart item into an OrderItem
    5. Record the principal's Payment for the full total (status paid)
    6. Delete the cart items
    7. Settle the order if it is a group order and settlement on placement
       is enabled

    Args:
        principal: User checking out (becomes the payer)
        group_id: Group whose shared cart is ordered; personal cart if None

    Returns:
        PlacedOrder with the created order and payment

    Raises:
        NotMemberError: If group_id is given and principal isn't a member
        EmptyCartError: If the cart doesn't exist or has no items
        OrderPlacementError: If persisting fails; nothing is written
    """
    if group_id is not None:
        ensure_member(group_id=group_id, user_id=principal.user_id)

    try:
        with transaction.atomic():
            placed = _place_locked_cart(principal=principal, group_id=group_id)
    except DatabaseError as exc:
        logger.exception(
            "Order placement failed for user %s (group %s)",
            principal.user_id, group_id,
        )
        raise OrderPlacementError() from exc

    logger.info(
        "Order %s placed by %s: total=%s, payment=%s",
        placed.order_id, principal.user_id, placed.total_amount, placed.payment_id,
    )
    return placed


def _place_locked_cart(*, principal: AuthenticatedPrincipal, group_id: Optional[UUID]) -> PlacedOrder:
    cart = lock_cart(user_id=principal.user_id, group_id=group_id)
    if cart is None:
        raise EmptyCartError()

    cart_items = get_cart_items(cart)
    if not cart_items:
        raise EmptyCartError()

    total_price = to_cents(sum(
        (item.menu_item.price * item.quantity for item in cart_items),
        Decimal('0')
    ))

    order = Order.objects.create(
        restaurant_id=cart_items[0].menu_item.restaurant_id,
        group_id=group_id,
        placed_by_id=principal.user_id,
        total_price=total_price,
        status=OrderStatus.PENDING,
    )

    contributor_ids = list(dict.fromkeys(item.user_id for item in cart_items))
    OrderParticipant.objects.bulk_create([
        OrderParticipant(order=order, user_id=user_id)
        for user_id in contributor_ids
    ])

    OrderItem.objects.bulk_create([
        OrderItem(
            order=order,
            menu_item=item.menu_item,
            user_id=item.user_id,
            name=item.menu_item.name,
            description=item.menu_item.description,
            image_url=item.menu_item.image_url,
            price_at_order=item.menu_item.price,
            quantity=item.quantity,
            special_request=item.special_request,
        )
        for item in cart_items
    ])

    payment = Payment.objects.create(
        order=order,
        payer_id=principal.user_id,
        amount=total_price,
        status=PaymentStatus.PAID,
    )

    clear_cart(cart)

    if len(contributor_ids) > 1 and settings.SETTLE_ON_ORDER_PLACEMENT:
        settle_order(order)

    return PlacedOrder(order=order, payment=payment)
