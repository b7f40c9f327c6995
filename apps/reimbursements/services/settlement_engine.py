"""
Settlement Engine
=================

Derives who owes whom for a group order and keeps the Reimbursement ledger
in step with it.

For every contributing user ``c`` and every payer ``p`` with ``c != p``::

    owed(c, p) = share(c) * paid(p) / total

rounded half-up to cents. Amounts of 0.01 or less are dropped.

The computation is a pure function of the order's items and valid payments,
so it can run at checkout and again whenever a ledger is read; running it
twice yields the same rows.

Example:
    A $30 order, $15 of items each from A and B, A pays $30::

        >>> shares = compute_consumer_shares(order.items.all())
        >>> paid = compute_payer_totals(order.payments.all())
        >>> compute_owed_amounts(shares, paid)
        {(b.id, a.id): Decimal('15.00')}

Upsert rules per (debtor, creditor, order):
    - no row: create it unpaid
    - unpaid row: update the amount only when it drifts by more than 0.01
    - settled row (paid/completed/settled): never touched
"""
import logging
from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable, List, Tuple
from uuid import UUID

from django.db import transaction, IntegrityError

from apps.common.money import to_cents
from apps.reimbursements.models import Reimbursement, ReimbursementStatus

from .exceptions import ShareTotalMismatchError

logger = logging.getLogger(__name__)

# Owed amounts at or below this are not recorded
NOISE_THRESHOLD = Decimal('0.01')

# Outstanding rows are only rewritten when the new amount differs by more
UPDATE_TOLERANCE = Decimal('0.01')


def compute_consumer_shares(items: Iterable) -> Dict[UUID, Decimal]:
    """
    Sum ``price_at_order * quantity`` per contributing user.

    Args:
        items: Order items (anything with user_id, price_at_order, quantity)

    Returns:
        dict mapping user id to that user's share
    """
    shares = defaultdict(Decimal)
    for item in items:
        shares[item.user_id] += item.price_at_order * item.quantity
    return dict(shares)


def compute_payer_totals(payments: Iterable) -> Dict[UUID, Decimal]:
    """Sum amounts of paid/completed payments per payer; others are ignored."""
    totals = defaultdict(Decimal)
    for payment in payments:
        if payment.is_valid:
            totals[payment.payer_id] += payment.amount
    return dict(totals)


def compute_owed_amounts(
    shares: Dict[UUID, Decimal],
    paid_totals: Dict[UUID, Decimal]
) -> Dict[Tuple[UUID, UUID], Decimal]:
    """
    Split each payer's payment across consumers in proportion to their share.

    Args:
        shares: consumer id -> share of the order
        paid_totals: payer id -> amount paid

    Returns:
        dict mapping (debtor id, creditor id) to the owed amount in cents;
        pairs where debtor == creditor or owed <= 0.01 are absent
    """
    total = sum(shares.values(), Decimal('0'))
    if total <= 0:
        return {}

    owed_amounts = {}
    for consumer_id, share in shares.items():
        for payer_id, paid in paid_totals.items():
            if consumer_id == payer_id:
                continue
            owed = to_cents(share * paid / total)
            if owed > NOISE_THRESHOLD:
                owed_amounts[(consumer_id, payer_id)] = owed
    return owed_amounts


def settle_order(order) -> List[Reimbursement]:
    """
    Materialize reimbursements for a group order.

    Orders with a single participant or without a valid payment produce
    nothing. Safe to call any number of times.

    Args:
        order: Order instance

    Returns:
        list of Reimbursement rows for the order's owed pairs, as stored
        after the upsert (settled rows are returned unchanged)

    Raises:
        ShareTotalMismatchError: If the items' shares don't add up to the
            order's total_price
    """
    if order.participants.count() <= 1:
        return []

    paid_totals = compute_payer_totals(order.payments.all())
    if not paid_totals:
        return []

    shares = compute_consumer_shares(order.items.all())
    share_total = to_cents(sum(shares.values(), Decimal('0')))
    if share_total != to_cents(order.total_price):
        logger.error(
            "Share total %s does not match total_price %s for order %s",
            share_total, order.total_price, order.id,
        )
        raise ShareTotalMismatchError(
            f"Order item shares ({share_total}) do not add up to the order "
            f"total ({order.total_price})."
        )

    owed_amounts = compute_owed_amounts(shares, paid_totals)

    with transaction.atomic():
        return [
            _upsert_reimbursement(
                order=order,
                debtor_id=debtor_id,
                creditor_id=creditor_id,
                amount=amount,
            )
            for (debtor_id, creditor_id), amount in owed_amounts.items()
        ]


def _locked_reimbursement(lookup) -> Reimbursement:
    return Reimbursement.objects.select_for_update().filter(**lookup).first()


def _upsert_reimbursement(*, order, debtor_id: UUID, creditor_id: UUID, amount: Decimal) -> Reimbursement:
    lookup = {'order': order, 'debtor_id': debtor_id, 'creditor_id': creditor_id}

    existing = _locked_reimbursement(lookup)
    if existing is not None:
        return _merge_amount(existing, amount)

    try:
        # Nested savepoint; the outer transaction stays usable after IntegrityError
        with transaction.atomic():
            created = Reimbursement.objects.create(
                **lookup,
                amount=amount,
                status=ReimbursementStatus.UNPAID,
                description=f"Share of order {order.id}",
            )
    except IntegrityError:
        existing = _locked_reimbursement(lookup)
        return _merge_amount(existing, amount)

    logger.info(
        "Reimbursement %s created: %s owes %s %s for order %s",
        created.id, debtor_id, creditor_id, amount, order.id,
    )
    return created


def _merge_amount(reimbursement: Reimbursement, amount: Decimal) -> Reimbursement:
    if reimbursement.is_settled:
        return reimbursement

    if abs(reimbursement.amount - amount) > UPDATE_TOLERANCE:
        previous = reimbursement.amount
        reimbursement.amount = amount
        reimbursement.save(update_fields=['amount', 'updated_at'])
        logger.info(
            "Reimbursement %s amount updated %s -> %s",
            reimbursement.id, previous, amount,
        )
    return reimbursement
