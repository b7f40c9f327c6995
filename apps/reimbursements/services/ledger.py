"""
Ledger aggregation.

Builds the "owed to me" / "owed by me" view for one user. Settled rows are
left out of both lists and only counted in the paid totals.
"""
import logging
from decimal import Decimal
from typing import Dict, List

from django.conf import settings
from django.db.models import Count, Q

from apps.accounts.principal import AuthenticatedPrincipal
from apps.common.money import to_cents
from apps.orders.models import Order
from apps.reimbursements.models import Reimbursement

from .exceptions import ShareTotalMismatchError
from .settlement_engine import settle_order

logger = logging.getLogger(__name__)


def get_group_orders_for_user(*, user_id) -> List[Order]:
    """Orders with more than one participant that the user joined or paid for."""
    touched_order_ids = (
        Order.objects
        .filter(Q(participants__user_id=user_id) | Q(payments__payer_id=user_id))
        .values('id')
    )
    return list(
        Order.objects
        .filter(id__in=touched_order_ids)
        .annotate(participant_count=Count('participants'))
        .filter(participant_count__gt=1)
        .order_by('order_date')
    )


def recompute_user_group_orders(*, user_id) -> int:
    """
    Run the settlement engine over the user's group orders.

    An order whose item shares don't match its total is logged and skipped.

    Returns:
        Number of group orders found for the user
    """
    group_orders = get_group_orders_for_user(user_id=user_id)
    for order in group_orders:
        try:
            settle_order(order)
        except ShareTotalMismatchError:
            logger.warning("Skipping order %s in ledger recompute: share mismatch", order.id)
    return len(group_orders)


def _counterparty(user) -> Dict:
    return {
        'id': user.id,
        'email': user.email,
        'display_name': user.get_display_name(),
    }


def _line_item(reimbursement: Reimbursement) -> Dict:
    return {
        'reimbursement_id': reimbursement.id,
        'order_id': reimbursement.order_id,
        'restaurant_name': reimbursement.order.restaurant.name,
        'order_date': reimbursement.order.order_date,
        'amount': reimbursement.amount,
        'status': reimbursement.status,
        'created_at': reimbursement.created_at,
        'updated_at': reimbursement.updated_at,
    }


def _add_to_group(groups: Dict, counterparty, reimbursement: Reimbursement):
    group = groups.get(counterparty.id)
    if group is None:
        group = groups[counterparty.id] = {
            'user': _counterparty(counterparty),
            'total_amount': Decimal('0'),
            'orders': [],
        }
    group['total_amount'] += reimbursement.amount
    group['orders'].append(_line_item(reimbursement))


def _finalize(groups: Dict) -> List[Dict]:
    result = []
    for group in groups.values():
        group['total_amount'] = to_cents(group['total_amount'])
        result.append(group)
    return sorted(result, key=lambda g: g['total_amount'], reverse=True)


def get_ledger(*, principal: AuthenticatedPrincipal) -> Dict:
    """
    Aggregate every reimbursement where the principal is debtor or creditor.

    When LEDGER_RECOMPUTE_ON_READ is enabled the principal's group orders
    are settled first, so the ledger reflects orders placed before
    settlement ran.

    Args:
        principal: User whose ledger is built

    Returns:
        dict containing:
            - owed_to_me: outstanding rows where principal is creditor,
              grouped per debtor
            - owed_by_me: outstanding rows where principal is debtor,
              grouped per creditor
            - summary: total_owed_to_me, total_owed_by_me, net_balance,
              total_paid_to_me, total_paid_by_me
            - total_group_orders: group orders the principal is part of
            - stats: total_reimbursements (counterparty groups listed) and
              total_paid_reimbursements (paid to me + paid by me)
    """
    user_id = principal.user_id

    if settings.LEDGER_RECOMPUTE_ON_READ:
        total_group_orders = recompute_user_group_orders(user_id=user_id)
    else:
        total_group_orders = len(get_group_orders_for_user(user_id=user_id))

    reimbursements = (
        Reimbursement.objects
        .filter(Q(debtor_id=user_id) | Q(creditor_id=user_id))
        .select_related('debtor', 'creditor', 'order__restaurant')
        .order_by('created_at')
    )

    owed_to_me = {}
    owed_by_me = {}
    total_paid_to_me = Decimal('0')
    total_paid_by_me = Decimal('0')

    for reimbursement in reimbursements:
        is_creditor = reimbursement.creditor_id == user_id
        if reimbursement.is_settled:
            if is_creditor:
                total_paid_to_me += reimbursement.amount
            else:
                total_paid_by_me += reimbursement.amount
        elif is_creditor:
            _add_to_group(owed_to_me, reimbursement.debtor, reimbursement)
        else:
            _add_to_group(owed_by_me, reimbursement.creditor, reimbursement)

    owed_to_me_list = _finalize(owed_to_me)
    owed_by_me_list = _finalize(owed_by_me)

    total_owed_to_me = to_cents(sum((g['total_amount'] for g in owed_to_me_list), Decimal('0')))
    total_owed_by_me = to_cents(sum((g['total_amount'] for g in owed_by_me_list), Decimal('0')))
    total_paid_to_me = to_cents(total_paid_to_me)
    total_paid_by_me = to_cents(total_paid_by_me)

    return {
        'owed_to_me': owed_to_me_list,
        'owed_by_me': owed_by_me_list,
        'summary': {
            'total_owed_to_me': total_owed_to_me,
            'total_owed_by_me': total_owed_by_me,
            'net_balance': total_owed_to_me - total_owed_by_me,
            'total_paid_to_me': total_paid_to_me,
            'total_paid_by_me': total_paid_by_me,
        },
        'total_group_orders': total_group_orders,
        'stats': {
            'total_reimbursements': len(owed_to_me_list) + len(owed_by_me_list),
            'total_paid_reimbursements': total_paid_to_me + total_paid_by_me,
        },
    }
