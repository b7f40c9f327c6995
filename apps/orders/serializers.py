from rest_framework import serializers
from .models import Order, OrderItem, Payment
from apps.accounts.serializers import UserMinimalSerializer


# =============================================================================
# Input Serializers
# =============================================================================

class PlaceOrderInputSerializer(serializers.Serializer):
    """
    Validate input for placing an order.

    Fields:
        group_id (UUID): Order the group's shared cart instead of the
            personal cart
    """

    group_id = serializers.UUIDField(required=False, allow_null=True)


class OrderStatusInputSerializer(serializers.Serializer):
    # Enum membership is checked by the service
    status = serializers.CharField(max_length=20)


class MerchantOrdersFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for merchant order listing.

    Query Parameters:
        restaurant_id (UUID): Restaurant whose orders are listed
    """

    restaurant_id = serializers.UUIDField()


# =============================================================================
# Output Serializers
# =============================================================================


class OrderItemSerializer(serializers.ModelSerializer):
    user = UserMinimalSerializer(read_only=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            'id',
            'menu_item',
            'user',
            'name',
            'description',
            'image_url',
            'price_at_order',
            'quantity',
            'line_total',
            'special_request',
        ]
        read_only_fields = fields


class PaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Payment
        fields = ['id', 'payer', 'amount', 'status', 'created_at']
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Full order with items, payments and participants."""

    restaurant_name = serializers.CharField(source='restaurant.name', read_only=True)
    placed_by = UserMinimalSerializer(read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)
    payments = PaymentSerializer(many=True, read_only=True)
    participants = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id',
            'restaurant',
            'restaurant_name',
            'group',
            'placed_by',
            'total_price',
            'status',
            'status_display',
            'payment_method',
            'order_date',
            'updated_at',
            'participants',
            'items',
            'payments',
        ]
        read_only_fields = fields

    def get_participants(self, obj):
        return UserMinimalSerializer(
            [participant.user for participant in obj.participants.all()],
            many=True
        ).data


class PlacedOrderSerializer(serializers.Serializer):
    order_id = serializers.UUIDField()
    payment_id = serializers.UUIDField()
    total_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
