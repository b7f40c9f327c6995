from rest_framework import serializers
from .models import Reimbursement
from apps.accounts.serializers import UserMinimalSerializer


# =============================================================================
# Input Serializers
# =============================================================================

class MarkSettledInputSerializer(serializers.Serializer):
    """
    Validate input for marking a reimbursement as settled.

    Fields:
        status (str): paid, completed or settled (default paid)
        settled_at (datetime): When the debt was settled (default now)
        payment_method_id (UUID): Payment method of the acting user
        transaction_reference (str): External transaction reference
    """

    # Value is validated case-insensitively by the service
    status = serializers.CharField(max_length=20, required=False)
    settled_at = serializers.DateTimeField(required=False, allow_null=True)
    payment_method_id = serializers.UUIDField(required=False, allow_null=True)
    transaction_reference = serializers.CharField(
        max_length=255,
        required=False,
        allow_blank=True,
        allow_null=True
    )


# =============================================================================
# Output Serializers
# =============================================================================


class ReimbursementSerializer(serializers.ModelSerializer):
    debtor = UserMinimalSerializer(read_only=True)
    creditor = UserMinimalSerializer(read_only=True)
    restaurant_name = serializers.CharField(source='order.restaurant.name', read_only=True)
    order_date = serializers.DateTimeField(source='order.order_date', read_only=True)
    is_settled = serializers.BooleanField(read_only=True)

    class Meta:
        model = Reimbursement
        fields = [
            'id',
            'debtor',
            'creditor',
            'order',
            'restaurant_name',
            'order_date',
            'amount',
            'status',
            'is_settled',
            'description',
            'settled_at',
            'payment_method',
            'transaction_reference',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class SettlementResultSerializer(serializers.Serializer):
    """Settled reimbursement fields flattened next to the acting party's role."""

    id = serializers.UUIDField(source='reimbursement.id')
    status = serializers.CharField(source='reimbursement.status')
    settled_at = serializers.DateTimeField(source='reimbursement.settled_at')
    amount = serializers.DecimalField(source='reimbursement.amount', max_digits=10, decimal_places=2)
    debtor_id = serializers.UUIDField(source='reimbursement.debtor_id')
    creditor_id = serializers.UUIDField(source='reimbursement.creditor_id')
    order_id = serializers.UUIDField(source='reimbursement.order_id')
    payment_method_id = serializers.UUIDField(source='reimbursement.payment_method_id', allow_null=True)
    transaction_reference = serializers.CharField(source='reimbursement.transaction_reference')
    marked_by = serializers.ChoiceField(choices=['debtor', 'creditor'])


class CounterpartySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    email = serializers.EmailField()
    display_name = serializers.CharField()


class LedgerLineItemSerializer(serializers.Serializer):
    reimbursement_id = serializers.UUIDField()
    order_id = serializers.UUIDField()
    restaurant_name = serializers.CharField()
    order_date = serializers.DateTimeField()
    amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    status = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class CounterpartyBalanceSerializer(serializers.Serializer):
    user = CounterpartySerializer()
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    orders = LedgerLineItemSerializer(many=True)


class LedgerSummarySerializer(serializers.Serializer):
    total_owed_to_me = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_owed_by_me = serializers.DecimalField(max_digits=12, decimal_places=2)
    net_balance = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_paid_to_me = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_paid_by_me = serializers.DecimalField(max_digits=12, decimal_places=2)


class LedgerStatsSerializer(serializers.Serializer):
    total_reimbursements = serializers.IntegerField()
    total_paid_reimbursements = serializers.DecimalField(max_digits=12, decimal_places=2)


class LedgerSerializer(serializers.Serializer):
    """Who owes the user and whom the user owes."""

    owed_to_me = CounterpartyBalanceSerializer(many=True)
    owed_by_me = CounterpartyBalanceSerializer(many=True)
    summary = LedgerSummarySerializer()
    total_group_orders = serializers.IntegerField()
    stats = LedgerStatsSerializer()
