import pytest
from decimal import Decimal
from apps.orders.models import Order, OrderItem, OrderParticipant, Payment, PaymentStatus
from apps.reimbursements.models import Reimbursement, ReimbursementStatus


@pytest.fixture
def make_order(restaurant):
    """
    Build an order directly, bypassing carts.

    items: list of (user, price, quantity)
    payments: list of (payer, amount, status)
    total_price defaults to the sum of item lines.
    """
    def _make_order(items, payments, total_price=None):
        if total_price is None:
            total_price = sum(
                (Decimal(price) * quantity for _, price, quantity in items),
                Decimal('0')
            )
        order = Order.objects.create(
            restaurant=restaurant,
            placed_by=payments[0][0] if payments else items[0][0],
            total_price=total_price,
        )
        for user in dict.fromkeys(user for user, _, _ in items):
            OrderParticipant.objects.create(order=order, user=user)
        for user, price, quantity in items:
            OrderItem.objects.create(
                order=order,
                user=user,
                name='Item',
                price_at_order=Decimal(price),
                quantity=quantity,
            )
        for payer, amount, status in payments:
            Payment.objects.create(order=order, payer=payer, amount=Decimal(amount), status=status)
        return order
    return _make_order


@pytest.fixture
def even_split_order(make_order, alice, bob):
    """$30 order, $15 each from alice and bob, alice paid everything."""
    return make_order(
        items=[(alice, '15.00', 1), (bob, '7.50', 2)],
        payments=[(alice, '30.00', PaymentStatus.PAID)],
    )


@pytest.fixture
def bob_owes_alice(even_split_order, alice, bob):
    return Reimbursement.objects.create(
        debtor=bob,
        creditor=alice,
        order=even_split_order,
        amount=Decimal('15.00'),
        status=ReimbursementStatus.UNPAID,
    )
