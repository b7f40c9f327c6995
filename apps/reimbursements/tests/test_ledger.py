"""
Ledger aggregation tests.
"""

import pytest
from decimal import Decimal

from apps.orders.models import PaymentStatus
from apps.orders.services import place_order
from apps.reimbursements.models import Reimbursement, ReimbursementStatus
from apps.reimbursements.services import get_ledger, mark_reimbursement_settled


@pytest.mark.django_db
class TestLedgerAggregation:

    def test_debtor_view(self, bob_principal, alice, bob_owes_alice):
        ledger = get_ledger(principal=bob_principal)

        assert ledger['owed_to_me'] == []
        assert len(ledger['owed_by_me']) == 1
        group = ledger['owed_by_me'][0]
        assert group['user']['id'] == alice.id
        assert group['user']['display_name'] == 'Alice'
        assert group['total_amount'] == Decimal('15.00')
        line = group['orders'][0]
        assert line['reimbursement_id'] == bob_owes_alice.id
        assert line['order_id'] == bob_owes_alice.order_id
        assert line['restaurant_name'] == 'Burger Barn'
        assert line['status'] == ReimbursementStatus.UNPAID

        assert ledger['summary'] == {
            'total_owed_to_me': Decimal('0.00'),
            'total_owed_by_me': Decimal('15.00'),
            'net_balance': Decimal('-15.00'),
            'total_paid_to_me': Decimal('0.00'),
            'total_paid_by_me': Decimal('0.00'),
        }

    def test_creditor_view(self, alice_principal, bob, bob_owes_alice):
        ledger = get_ledger(principal=alice_principal)

        assert ledger['owed_by_me'] == []
        assert ledger['owed_to_me'][0]['user']['id'] == bob.id
        assert ledger['summary']['total_owed_to_me'] == Decimal('15.00')
        assert ledger['summary']['net_balance'] == Decimal('15.00')
        assert ledger['total_group_orders'] == 1
        assert ledger['stats'] == {
            'total_reimbursements': 1,
            'total_paid_reimbursements': Decimal('0.00'),
        }

    def test_outsider_sees_nothing(self, carol_principal, bob_owes_alice):
        ledger = get_ledger(principal=carol_principal)

        assert ledger['owed_to_me'] == []
        assert ledger['owed_by_me'] == []
        assert ledger['total_group_orders'] == 0
        assert ledger['summary']['net_balance'] == Decimal('0.00')

    def test_rows_grouped_per_counterparty(self, make_order, alice, bob, alice_principal):
        for _ in range(2):
            make_order(
                items=[(alice, '10.00', 1), (bob, '5.00', 1)],
                payments=[(alice, '15.00', PaymentStatus.PAID)],
            )

        ledger = get_ledger(principal=alice_principal)

        assert len(ledger['owed_to_me']) == 1
        assert ledger['owed_to_me'][0]['total_amount'] == Decimal('10.00')
        assert len(ledger['owed_to_me'][0]['orders']) == 2
        assert ledger['total_group_orders'] == 2

    def test_settled_rows_fold_into_paid_totals(self, alice_principal, bob_principal, bob_owes_alice):
        mark_reimbursement_settled(principal=bob_principal, reimbursement_id=bob_owes_alice.id)

        alice_ledger = get_ledger(principal=alice_principal)
        bob_ledger = get_ledger(principal=bob_principal)

        assert alice_ledger['owed_to_me'] == []
        assert alice_ledger['summary']['total_paid_to_me'] == Decimal('15.00')
        assert alice_ledger['summary']['net_balance'] == Decimal('0.00')
        assert alice_ledger['stats']['total_paid_reimbursements'] == Decimal('15.00')
        assert bob_ledger['owed_by_me'] == []
        assert bob_ledger['summary']['total_paid_by_me'] == Decimal('15.00')


@pytest.mark.django_db
class TestLedgerRecompute:

    def test_recomputes_orders_not_yet_settled(self, settings, shared_cart, lunch_group, alice_principal, bob_principal):
        settings.SETTLE_ON_ORDER_PLACEMENT = False
        order = place_order(principal=alice_principal, group_id=lunch_group.id).order
        assert not Reimbursement.objects.filter(order=order).exists()

        ledger = get_ledger(principal=bob_principal)

        assert ledger['summary']['total_owed_by_me'] == Decimal('15.00')
        assert Reimbursement.objects.filter(order=order).count() == 1

    def test_recompute_can_be_disabled(self, settings, shared_cart, lunch_group, alice_principal, bob_principal):
        settings.SETTLE_ON_ORDER_PLACEMENT = False
        settings.LEDGER_RECOMPUTE_ON_READ = False
        place_order(principal=alice_principal, group_id=lunch_group.id)

        ledger = get_ledger(principal=bob_principal)

        assert ledger['owed_by_me'] == []
        assert ledger['total_group_orders'] == 1
        assert Reimbursement.objects.count() == 0

    def test_repeated_reads_do_not_duplicate(self, alice_principal, even_split_order):
        first = get_ledger(principal=alice_principal)
        second = get_ledger(principal=alice_principal)

        assert first['summary'] == second['summary']
        assert Reimbursement.objects.filter(order=even_split_order).count() == 1

    def test_payer_outside_participants_included(self, make_order, alice, bob, carol, carol_principal):
        """Orders the user only paid for are recomputed too."""
        make_order(
            items=[(alice, '10.00', 1), (bob, '10.00', 1)],
            payments=[(carol, '20.00', PaymentStatus.PAID)],
        )

        ledger = get_ledger(principal=carol_principal)

        assert ledger['summary']['total_owed_to_me'] == Decimal('20.00')
        assert {g['user']['id'] for g in ledger['owed_to_me']} == {alice.id, bob.id}

    def test_mismatched_order_skipped(self, make_order, alice, bob, alice_principal, even_split_order):
        make_order(
            items=[(alice, '15.00', 1), (bob, '15.00', 1)],
            payments=[(alice, '40.00', PaymentStatus.PAID)],
            total_price=Decimal('40.00'),
        )

        ledger = get_ledger(principal=alice_principal)

        assert ledger['summary']['total_owed_to_me'] == Decimal('15.00')
        assert ledger['total_group_orders'] == 2
