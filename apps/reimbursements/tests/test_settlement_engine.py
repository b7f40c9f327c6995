"""
Settlement engine tests.

Tests cover:
- Proportional share arithmetic and rounding
- Share conservation per payer
- No self-debt
- Noise threshold
- Idempotent upsert and drift tolerance
- Settled rows are never overwritten
- Share/total mismatch rejection
- Concurrent insert falling into the merge path
"""

import pytest
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import patch
from uuid import uuid4
from django.db import IntegrityError, transaction

from apps.orders.models import Payment, PaymentStatus
from apps.reimbursements.models import Reimbursement, ReimbursementStatus
from apps.reimbursements.services import (
    compute_consumer_shares,
    compute_owed_amounts,
    compute_payer_totals,
    settle_order,
)
from apps.reimbursements.services.exceptions import ShareTotalMismatchError


# =============================================================================
# Pure helpers
# =============================================================================

class TestComputeShares:

    def test_shares_grouped_by_contributor(self):
        a, b = uuid4(), uuid4()
        items = [
            SimpleNamespace(user_id=a, price_at_order=Decimal('10.00'), quantity=1),
            SimpleNamespace(user_id=b, price_at_order=Decimal('2.50'), quantity=4),
            SimpleNamespace(user_id=a, price_at_order=Decimal('1.25'), quantity=2),
        ]

        assert compute_consumer_shares(items) == {a: Decimal('12.50'), b: Decimal('10.00')}

    def test_only_valid_payments_count(self):
        a, b = uuid4(), uuid4()
        payments = [
            Payment(payer_id=a, amount=Decimal('20.00'), status=PaymentStatus.PAID),
            Payment(payer_id=a, amount=Decimal('5.00'), status=PaymentStatus.COMPLETED),
            Payment(payer_id=b, amount=Decimal('9.00'), status=PaymentStatus.PENDING),
            Payment(payer_id=b, amount=Decimal('9.00'), status=PaymentStatus.FAILED),
        ]

        assert compute_payer_totals(payments) == {a: Decimal('25.00')}


class TestComputeOwedAmounts:

    def test_even_split_single_payer(self):
        a, b = uuid4(), uuid4()
        owed = compute_owed_amounts(
            {a: Decimal('15.00'), b: Decimal('15.00')},
            {a: Decimal('30.00')},
        )

        assert owed == {(b, a): Decimal('15.00')}

    def test_conservation_per_payer(self):
        a, b, c = uuid4(), uuid4(), uuid4()
        shares = {a: Decimal('10.00'), b: Decimal('20.00'), c: Decimal('30.00')}

        owed = compute_owed_amounts(shares, {a: Decimal('60.00')})

        assert owed == {(b, a): Decimal('20.00'), (c, a): Decimal('30.00')}
        assert sum(owed.values()) + shares[a] == Decimal('60.00')

    def test_rounds_half_up_to_cents(self):
        a, b, c = uuid4(), uuid4(), uuid4()
        shares = {a: Decimal('10.00'), b: Decimal('10.00'), c: Decimal('10.00')}

        owed = compute_owed_amounts(shares, {a: Decimal('10.00')})

        # 10 * 10 / 30 = 3.333...
        assert owed[(b, a)] == Decimal('3.33')
        assert owed[(c, a)] == Decimal('3.33')

        owed = compute_owed_amounts(
            {a: Decimal('1.00'), b: Decimal('1.00')},
            {a: Decimal('0.05')},
        )
        # 0.025 rounds up
        assert owed[(b, a)] == Decimal('0.03')

    def test_multiple_payers(self):
        a, b = uuid4(), uuid4()
        owed = compute_owed_amounts(
            {a: Decimal('15.00'), b: Decimal('15.00')},
            {a: Decimal('20.00'), b: Decimal('10.00')},
        )

        assert owed == {(b, a): Decimal('10.00'), (a, b): Decimal('5.00')}

    def test_no_self_debt(self):
        a, b = uuid4(), uuid4()
        owed = compute_owed_amounts(
            {a: Decimal('12.00'), b: Decimal('8.00')},
            {a: Decimal('10.00'), b: Decimal('10.00')},
        )

        assert all(debtor != creditor for debtor, creditor in owed)

    def test_amount_below_threshold_dropped(self):
        a, b = uuid4(), uuid4()
        owed = compute_owed_amounts(
            {a: Decimal('99.995'), b: Decimal('0.005')},
            {a: Decimal('100.00')},
        )

        assert owed == {}

    def test_exactly_one_cent_dropped(self):
        a, b = uuid4(), uuid4()
        owed = compute_owed_amounts(
            {a: Decimal('99.99'), b: Decimal('0.01')},
            {a: Decimal('100.00')},
        )

        assert owed == {}

    def test_two_cents_kept(self):
        a, b = uuid4(), uuid4()
        owed = compute_owed_amounts(
            {a: Decimal('99.98'), b: Decimal('0.02')},
            {a: Decimal('100.00')},
        )

        assert owed == {(b, a): Decimal('0.02')}

    def test_zero_total(self):
        a, b = uuid4(), uuid4()
        assert compute_owed_amounts({a: Decimal('0'), b: Decimal('0')}, {a: Decimal('0')}) == {}


# =============================================================================
# settle_order
# =============================================================================

@pytest.mark.django_db
class TestSettleOrder:

    def test_even_split_creates_single_reimbursement(self, even_split_order, alice, bob):
        rows = settle_order(even_split_order)

        assert len(rows) == 1
        reimbursement = Reimbursement.objects.get(order=even_split_order)
        assert reimbursement.debtor == bob
        assert reimbursement.creditor == alice
        assert reimbursement.amount == Decimal('15.00')
        assert reimbursement.status == ReimbursementStatus.UNPAID

    def test_share_conservation_three_way(self, make_order, alice, bob, carol):
        order = make_order(
            items=[(alice, '10.00', 1), (bob, '20.00', 1), (carol, '30.00', 1)],
            payments=[(alice, '60.00', PaymentStatus.PAID)],
        )

        settle_order(order)

        owed_to_alice = sum(r.amount for r in Reimbursement.objects.filter(order=order, creditor=alice))
        assert owed_to_alice + Decimal('10.00') == Decimal('60.00')
        assert not Reimbursement.objects.filter(order=order, debtor=alice).exists()

    def test_single_participant_not_settled(self, make_order, alice):
        order = make_order(
            items=[(alice, '10.00', 2)],
            payments=[(alice, '20.00', PaymentStatus.PAID)],
        )

        assert settle_order(order) == []
        assert not Reimbursement.objects.filter(order=order).exists()

    def test_no_valid_payment_not_settled(self, make_order, alice, bob):
        order = make_order(
            items=[(alice, '10.00', 1), (bob, '10.00', 1)],
            payments=[(alice, '20.00', PaymentStatus.PENDING), (bob, '20.00', PaymentStatus.FAILED)],
        )

        assert settle_order(order) == []
        assert not Reimbursement.objects.filter(order=order).exists()

    def test_negligible_share_creates_nothing(self, make_order, alice, bob):
        order = make_order(
            items=[(alice, '99.99', 1), (bob, '0.01', 1)],
            payments=[(alice, '100.00', PaymentStatus.PAID)],
        )

        settle_order(order)

        assert not Reimbursement.objects.filter(order=order).exists()

    def test_idempotent(self, even_split_order):
        first = settle_order(even_split_order)
        second = settle_order(even_split_order)

        assert [r.id for r in first] == [r.id for r in second]
        assert Reimbursement.objects.filter(order=even_split_order).count() == 1
        assert Reimbursement.objects.get(order=even_split_order).amount == Decimal('15.00')

    def test_outstanding_row_updated_on_drift(self, even_split_order, bob):
        settle_order(even_split_order)
        item = even_split_order.items.get(user=bob)
        item.price_at_order = Decimal('10.00')
        item.save()
        even_split_order.total_price = Decimal('35.00')
        even_split_order.save()

        settle_order(even_split_order)

        # 20 / 35 * 30 = 17.142...
        assert Reimbursement.objects.get(order=even_split_order).amount == Decimal('17.14')

    def test_drift_within_tolerance_ignored(self, even_split_order, bob_owes_alice):
        bob_owes_alice.amount = Decimal('15.01')
        bob_owes_alice.save()

        settle_order(even_split_order)

        bob_owes_alice.refresh_from_db()
        assert bob_owes_alice.amount == Decimal('15.01')

    def test_settled_row_never_overwritten(self, even_split_order, bob, bob_owes_alice):
        bob_owes_alice.status = ReimbursementStatus.PAID
        bob_owes_alice.save()
        item = even_split_order.items.get(user=bob)
        item.price_at_order = Decimal('10.00')
        item.save()
        even_split_order.total_price = Decimal('35.00')
        even_split_order.save()

        settle_order(even_split_order)

        bob_owes_alice.refresh_from_db()
        assert bob_owes_alice.amount == Decimal('15.00')
        assert bob_owes_alice.status == ReimbursementStatus.PAID
        assert Reimbursement.objects.filter(order=even_split_order).count() == 1

    def test_share_total_mismatch_rejected(self, make_order, alice, bob):
        order = make_order(
            items=[(alice, '15.00', 1), (bob, '15.00', 1)],
            payments=[(alice, '31.00', PaymentStatus.PAID)],
            total_price=Decimal('31.00'),
        )

        with pytest.raises(ShareTotalMismatchError):
            settle_order(order)

        assert not Reimbursement.objects.filter(order=order).exists()

    def test_concurrent_insert_merged(self, even_split_order, bob_owes_alice):
        """An insert racing ours hits the unique constraint and is merged."""
        bob_owes_alice.amount = Decimal('12.00')
        bob_owes_alice.save()

        with patch(
            'apps.reimbursements.services.settlement_engine._locked_reimbursement',
            side_effect=[None, bob_owes_alice]
        ):
            rows = settle_order(even_split_order)

        assert [r.id for r in rows] == [bob_owes_alice.id]
        assert Reimbursement.objects.filter(order=even_split_order).count() == 1
        bob_owes_alice.refresh_from_db()
        assert bob_owes_alice.amount == Decimal('15.00')


@pytest.mark.django_db
class TestReimbursementConstraints:

    def test_unique_per_order_pair(self, even_split_order, alice, bob, bob_owes_alice):
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Reimbursement.objects.create(
                    debtor=bob, creditor=alice, order=even_split_order, amount=Decimal('1.00')
                )

    def test_debtor_cannot_be_creditor(self, even_split_order, alice):
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Reimbursement.objects.create(
                    debtor=alice, creditor=alice, order=even_split_order, amount=Decimal('1.00')
                )
