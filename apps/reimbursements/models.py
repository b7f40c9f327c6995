# ==========================================
# apps/reimbursements/models.py
# ==========================================

from django.db import models
from django.db.models import F, Q
from decimal import Decimal
import uuid


class ReimbursementStatus(models.TextChoices):
    UNPAID = 'unpaid', 'Unpaid'
    PAID = 'paid', 'Paid'
    COMPLETED = 'completed', 'Completed'
    SETTLED = 'settled', 'Settled'


# Terminal statuses; recomputation never touches these rows
SETTLED_STATUSES = (
    ReimbursementStatus.PAID,
    ReimbursementStatus.COMPLETED,
    ReimbursementStatus.SETTLED,
)


class Reimbursement(models.Model):
    """
    What ``debtor`` owes ``creditor`` for one order.

    At most one row exists per (debtor, creditor, order). The settlement
    engine creates and adjusts unpaid rows; only settlement marking moves a
    row out of unpaid.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    debtor = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='reimbursements_owed'
    )
    creditor = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='reimbursements_due'
    )
    order = models.ForeignKey(
        'orders.Order',
        on_delete=models.CASCADE,
        related_name='reimbursements'
    )

    amount = models.DecimalField(max_digits=10, decimal_places=2)
    status = models.CharField(
        max_length=20,
        choices=ReimbursementStatus.choices,
        default=ReimbursementStatus.UNPAID
    )
    description = models.CharField(max_length=255, blank=True)

    # Settlement metadata
    settled_at = models.DateTimeField(null=True, blank=True)
    payment_method = models.ForeignKey(
        'accounts.PaymentMethod',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reimbursements'
    )
    transaction_reference = models.CharField(max_length=255, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'reimbursements'
        constraints = [
            models.UniqueConstraint(
                fields=['debtor', 'creditor', 'order'],
                name='unique_reimbursement_per_order_pair',
            ),
            models.CheckConstraint(
                condition=~Q(debtor=F('creditor')),
                name='reimbursement_debtor_not_creditor',
            ),
            models.CheckConstraint(
                condition=Q(amount__gt=Decimal('0')),
                name='reimbursement_amount_positive',
            ),
        ]
        indexes = [
            models.Index(fields=['debtor', 'status'], name='reimburseme_debtor__6a1b3c_idx'),
            models.Index(fields=['creditor', 'status'], name='reimburseme_credito_8d2e4f_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.debtor} owes {self.creditor} {self.amount} ({self.status})"

    @property
    def is_settled(self):
        return self.status in SETTLED_STATUSES

    def role_of(self, user_id):
        """Return 'debtor', 'creditor' or None for the given user."""
        if self.debtor_id == user_id:
            return 'debtor'
        if self.creditor_id == user_id:
            return 'creditor'
        return None
