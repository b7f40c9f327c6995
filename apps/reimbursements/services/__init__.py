"""
Reimbursements app services layer.

settlement_engine writes unpaid rows, settlement_marking settles them and
ledger reads them back per user.
"""

from .exceptions import (
    ReimbursementNotFoundError,
    NotLedgerPartyError,
    AlreadySettledError,
    InvalidSettlementStatusError,
    InvalidPaymentMethodError,
    ShareTotalMismatchError,
)

from .settlement_engine import (
    compute_consumer_shares,
    compute_payer_totals,
    compute_owed_amounts,
    settle_order,
)

from .ledger import (
    get_ledger,
    recompute_user_group_orders,
)

from .settlement_marking import (
    SettlementResult,
    get_reimbursement,
    mark_reimbursement_settled,
)


__all__ = [
    # Exceptions
    'ReimbursementNotFoundError',
    'NotLedgerPartyError',
    'AlreadySettledError',
    'InvalidSettlementStatusError',
    'InvalidPaymentMethodError',
    'ShareTotalMismatchError',

    # Settlement engine
    'compute_consumer_shares',
    'compute_payer_totals',
    'compute_owed_amounts',
    'settle_order',

    # Ledger
    'get_ledger',
    'recompute_user_group_orders',

    # Settlement marking
    'SettlementResult',
    'get_reimbursement',
    'mark_reimbursement_settled',
]
