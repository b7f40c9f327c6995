"""
Service layer tests for orders app.

Tests cover:
- Checkout of personal and group carts
- Snapshotting of menu items
- Membership and empty-cart preconditions
- Full rollback on persistence failure
- Restaurant-owner status updates
- Order queries
"""

import pytest
from decimal import Decimal
from unittest.mock import patch
from uuid import uuid4
from django.db import DatabaseError

from apps.carts.models import CartItem
from apps.carts.services import get_or_create_user_cart
from apps.groups.services.exceptions import NotMemberError
from apps.orders.models import (
    Order,
    OrderItem,
    OrderParticipant,
    OrderStatus,
    Payment,
    PaymentStatus,
)
from apps.orders.services import (
    place_order,
    update_order_status,
    list_user_orders,
    get_order,
    list_restaurant_orders,
)
from apps.orders.services.exceptions import (
    EmptyCartError,
    InvalidOrderStatusError,
    NotRestaurantOwnerError,
    OrderNotFoundError,
    OrderPlacementError,
    RestaurantNotFoundError,
)
from apps.reimbursements.models import Reimbursement, ReimbursementStatus


# =============================================================================
# Order Placement
# =============================================================================

@pytest.mark.django_db
class TestPlacePersonalOrder:

    def test_creates_order_payment_and_clears_cart(self, personal_cart, alice, restaurant, alice_principal):
        placed = place_order(principal=alice_principal)

        order = placed.order
        assert order.total_price == Decimal('24.00')  # 15.00 + 2 x 4.50
        assert order.restaurant == restaurant
        assert order.placed_by == alice
        assert order.group is None
        assert order.status == OrderStatus.PENDING

        assert placed.payment.payer == alice
        assert placed.payment.amount == Decimal('24.00')
        assert placed.payment.status == PaymentStatus.PAID
        assert placed.total_amount == Decimal('24.00')

        assert list(order.participants.values_list('user_id', flat=True)) == [alice.id]
        assert order.items.count() == 2
        assert not CartItem.objects.filter(cart=personal_cart).exists()

    def test_personal_order_produces_no_reimbursements(self, personal_order):
        assert not Reimbursement.objects.filter(order=personal_order).exists()

    def test_items_are_snapshots(self, personal_order, burger):
        burger.price = Decimal('99.00')
        burger.name = 'Renamed'
        burger.save()

        item = OrderItem.objects.get(order=personal_order, menu_item=burger)
        assert item.price_at_order == Decimal('15.00')
        assert item.name == 'Classic Burger'
        assert item.description == 'Beef, cheddar, pickles'
        assert item.image_url == 'https://example.com/burger.jpg'

    def test_quantity_copied(self, personal_order, fries):
        item = OrderItem.objects.get(order=personal_order, menu_item=fries)
        assert item.quantity == 2
        assert item.line_total == Decimal('9.00')


@pytest.mark.django_db
class TestPlaceGroupOrder:

    def test_participants_are_contributors(self, group_order, alice, bob):
        user_ids = set(group_order.participants.values_list('user_id', flat=True))
        assert user_ids == {alice.id, bob.id}

    def test_special_request_and_contributor_copied(self, group_order, bob):
        item = group_order.items.get(user=bob)
        assert item.name == 'Garden Salad'
        assert item.special_request == 'No croutons'

    def test_group_cart_cleared_but_kept(self, group_order, shared_cart):
        shared_cart.refresh_from_db()
        assert shared_cart.items.count() == 0

    def test_settles_on_placement(self, group_order, alice, bob):
        reimbursement = Reimbursement.objects.get(order=group_order)

        assert reimbursement.debtor == bob
        assert reimbursement.creditor == alice
        assert reimbursement.amount == Decimal('15.00')
        assert reimbursement.status == ReimbursementStatus.UNPAID

    def test_settlement_on_placement_can_be_disabled(self, settings, shared_cart, lunch_group, alice_principal):
        settings.SETTLE_ON_ORDER_PLACEMENT = False

        placed = place_order(principal=alice_principal, group_id=lunch_group.id)

        assert not Reimbursement.objects.filter(order=placed.order).exists()

    def test_any_member_can_check_out(self, shared_cart, lunch_group, bob, bob_principal):
        placed = place_order(principal=bob_principal, group_id=lunch_group.id)

        assert placed.payment.payer == bob
        reimbursement = Reimbursement.objects.get(order=placed.order)
        assert reimbursement.creditor == bob

    def test_non_member_forbidden(self, shared_cart, lunch_group, carol_principal):
        with pytest.raises(NotMemberError):
            place_order(principal=carol_principal, group_id=lunch_group.id)

        assert Order.objects.count() == 0
        assert shared_cart.items.count() == 2


@pytest.mark.django_db
class TestPlaceOrderPreconditions:

    def test_missing_cart_is_empty(self, alice_principal):
        with pytest.raises(EmptyCartError):
            place_order(principal=alice_principal)

    def test_empty_cart_rejected_without_writes(self, alice, alice_principal):
        get_or_create_user_cart(user=alice)

        with pytest.raises(EmptyCartError):
            place_order(principal=alice_principal)

        assert Order.objects.count() == 0
        assert Payment.objects.count() == 0
        assert OrderParticipant.objects.count() == 0

    def test_second_checkout_sees_empty_cart(self, personal_cart, alice_principal):
        place_order(principal=alice_principal)

        with pytest.raises(EmptyCartError):
            place_order(principal=alice_principal)

        assert Order.objects.count() == 1


@pytest.mark.django_db
class TestPlaceOrderAtomicity:

    def test_failure_before_cart_clear_rolls_back(self, shared_cart, lunch_group, alice_principal):
        """A failure after items are snapshotted leaves no order and a full cart."""
        with patch(
            'apps.orders.services.order_placement.clear_cart',
            side_effect=DatabaseError('disk full')
        ):
            with pytest.raises(OrderPlacementError):
                place_order(principal=alice_principal, group_id=lunch_group.id)

        assert Order.objects.count() == 0
        assert OrderItem.objects.count() == 0
        assert Payment.objects.count() == 0
        assert Reimbursement.objects.count() == 0
        assert shared_cart.items.count() == 2

    def test_failure_in_settlement_rolls_back(self, shared_cart, lunch_group, alice_principal):
        with patch(
            'apps.orders.services.order_placement.settle_order',
            side_effect=DatabaseError('deadlock')
        ):
            with pytest.raises(OrderPlacementError):
                place_order(principal=alice_principal, group_id=lunch_group.id)

        assert Order.objects.count() == 0
        assert shared_cart.items.count() == 2


# =============================================================================
# Order Status
# =============================================================================

@pytest.mark.django_db
class TestUpdateOrderStatus:

    def test_owner_updates_status(self, personal_order, owner_principal):
        order = update_order_status(
            principal=owner_principal,
            order_id=personal_order.id,
            status=OrderStatus.READY_FOR_PICKUP,
        )

        assert order.status == OrderStatus.READY_FOR_PICKUP
        personal_order.refresh_from_db()
        assert personal_order.status == OrderStatus.READY_FOR_PICKUP

    def test_invalid_status_checked_first(self, carol_principal):
        with pytest.raises(InvalidOrderStatusError):
            update_order_status(principal=carol_principal, order_id=uuid4(), status='eaten')

    def test_unknown_order(self, owner_principal):
        with pytest.raises(OrderNotFoundError):
            update_order_status(principal=owner_principal, order_id=uuid4(), status='cancelled')

    def test_customer_cannot_update(self, personal_order, alice_principal):
        with pytest.raises(NotRestaurantOwnerError):
            update_order_status(
                principal=alice_principal,
                order_id=personal_order.id,
                status=OrderStatus.CANCELLED,
            )

        personal_order.refresh_from_db()
        assert personal_order.status == OrderStatus.PENDING


# =============================================================================
# Order Queries
# =============================================================================

@pytest.mark.django_db
class TestOrderQueries:

    def test_participant_sees_group_order(self, group_order, bob_principal, carol_principal):
        assert [o.id for o in list_user_orders(principal=bob_principal)] == [group_order.id]
        assert list(list_user_orders(principal=carol_principal)) == []

    def test_get_order_visibility(self, group_order, bob_principal, owner_principal, carol_principal):
        assert get_order(principal=bob_principal, order_id=group_order.id) == group_order
        assert get_order(principal=owner_principal, order_id=group_order.id) == group_order

        with pytest.raises(OrderNotFoundError):
            get_order(principal=carol_principal, order_id=group_order.id)

    def test_restaurant_orders_for_owner(self, group_order, restaurant, owner_principal):
        orders = list_restaurant_orders(principal=owner_principal, restaurant_id=restaurant.id)
        assert [o.id for o in orders] == [group_order.id]

    def test_restaurant_orders_forbidden_for_others(self, restaurant, alice_principal):
        with pytest.raises(NotRestaurantOwnerError):
            list_restaurant_orders(principal=alice_principal, restaurant_id=restaurant.id)

    def test_restaurant_orders_unknown_restaurant(self, owner_principal):
        with pytest.raises(RestaurantNotFoundError):
            list_restaurant_orders(principal=owner_principal, restaurant_id=uuid4())
