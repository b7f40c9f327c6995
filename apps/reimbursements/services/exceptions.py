"""
Domain-specific exceptions for the reimbursements app.
"""
from apps.common.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)


class ReimbursementNotFoundError(NotFoundError):
    default_detail = 'Reimbursement not found.'
    default_code = 'reimbursement_not_found'


class NotLedgerPartyError(ForbiddenError):
    """Raised when the acting user is neither debtor nor creditor."""
    default_detail = 'You are not a party to this reimbursement.'
    default_code = 'not_reimbursement_party'


class AlreadySettledError(ConflictError):
    default_detail = 'Reimbursement is already marked as paid.'
    default_code = 'reimbursement_already_settled'


class InvalidSettlementStatusError(InvalidInputError):
    default_detail = 'Invalid status. Must be one of: paid, completed, settled.'
    default_code = 'invalid_settlement_status'


class InvalidPaymentMethodError(InvalidInputError):
    """Raised when the payment method doesn't belong to the acting user."""
    default_detail = 'Invalid payment method.'
    default_code = 'invalid_payment_method'


class ShareTotalMismatchError(InvalidInputError):
    """Sum of item shares differs from the order's recorded total."""
    default_detail = 'Order item shares do not add up to the order total.'
    default_code = 'share_total_mismatch'
