"""
Settlement marking service.

The only writer that moves a reimbursement out of ``unpaid``. The amount is
never recomputed here.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import PaymentMethod
from apps.accounts.principal import AuthenticatedPrincipal
from apps.reimbursements.models import (
    Reimbursement,
    ReimbursementStatus,
    SETTLED_STATUSES,
)

from .exceptions import (
    AlreadySettledError,
    InvalidPaymentMethodError,
    InvalidSettlementStatusError,
    NotLedgerPartyError,
    ReimbursementNotFoundError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettlementResult:
    reimbursement: Reimbursement
    marked_by: str  # 'debtor' or 'creditor'


def _get_for_party(*, principal: AuthenticatedPrincipal, reimbursement_id: UUID, lock: bool = False) -> Reimbursement:
    queryset = Reimbursement.objects.select_related('debtor', 'creditor', 'order__restaurant')
    if lock:
        queryset = queryset.select_for_update(of=('self',))

    try:
        reimbursement = queryset.get(id=reimbursement_id)
    except Reimbursement.DoesNotExist:
        raise ReimbursementNotFoundError()

    if reimbursement.role_of(principal.user_id) is None:
        raise NotLedgerPartyError()

    return reimbursement


def get_reimbursement(*, principal: AuthenticatedPrincipal, reimbursement_id: UUID) -> Reimbursement:
    """
    Get a single reimbursement for its debtor or creditor.

    Raises:
        ReimbursementNotFoundError: If reimbursement doesn't exist
        NotLedgerPartyError: If principal is neither debtor nor creditor
    """
    return _get_for_party(principal=principal, reimbursement_id=reimbursement_id)


def normalize_settlement_status(status: Optional[str]) -> str:
    """
    Lower-case and validate a requested settlement status (default paid).

    Raises:
        InvalidSettlementStatusError: If status isn't paid/completed/settled
    """
    if status is None:
        return ReimbursementStatus.PAID
    normalized = str(status).strip().lower()
    if normalized not in SETTLED_STATUSES:
        raise InvalidSettlementStatusError()
    return normalized


@transaction.atomic
def mark_reimbursement_settled(
    *,
    principal: AuthenticatedPrincipal,
    reimbursement_id: UUID,
    status: Optional[str] = None,
    settled_at: Optional[datetime] = None,
    payment_method_id: Optional[UUID] = None,
    transaction_reference: Optional[str] = None
) -> SettlementResult:
    """
    Mark a reimbursement as settled.

    Checks run in order: status value, existence, party, not yet settled,
    payment method ownership. The status write is conditional on the row
    still being unpaid, so of two concurrent calls only one succeeds.

    Args:
        principal: Debtor or creditor of the reimbursement
        reimbursement_id: UUID of the reimbursement
        status: paid, completed or settled (case-insensitive, default paid)
        settled_at: Settlement time (default now)
        payment_method_id: Optional payment method of the principal
        transaction_reference: Optional external reference

    Returns:
        SettlementResult with the updated row and the principal's role

    Raises:
        InvalidSettlementStatusError: If status isn't a settled status
        ReimbursementNotFoundError: If reimbursement doesn't exist
        NotLedgerPartyError: If principal is neither debtor nor creditor
        AlreadySettledError: If reimbursement is already settled
        InvalidPaymentMethodError: If payment method isn't the principal's
    """
    new_status = normalize_settlement_status(status)

    reimbursement = _get_for_party(
        principal=principal,
        reimbursement_id=reimbursement_id,
        lock=True,
    )

    if reimbursement.is_settled:
        raise AlreadySettledError()

    if payment_method_id is not None:
        owns_method = PaymentMethod.objects.filter(
            id=payment_method_id,
            user_id=principal.user_id
        ).exists()
        if not owns_method:
            raise InvalidPaymentMethodError()

    settled_at = settled_at or timezone.now()

    updated = (
        Reimbursement.objects
        .filter(id=reimbursement.id, status=ReimbursementStatus.UNPAID)
        .update(
            status=new_status,
            settled_at=settled_at,
            payment_method_id=payment_method_id,
            transaction_reference=transaction_reference or '',
            updated_at=timezone.now(),
        )
    )
    if updated == 0:
        raise AlreadySettledError()

    reimbursement.refresh_from_db()
    marked_by = reimbursement.role_of(principal.user_id)

    logger.info(
        "Reimbursement %s marked %s by %s (%s)",
        reimbursement.id, new_status, principal.user_id, marked_by,
    )
    return SettlementResult(reimbursement=reimbursement, marked_by=marked_by)
