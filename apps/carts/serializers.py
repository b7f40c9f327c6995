from rest_framework import serializers
from .models import CartItem
from apps.accounts.serializers import UserMinimalSerializer


# =============================================================================
# Input Serializers
# =============================================================================

class AddToCartInputSerializer(serializers.Serializer):
    """
    Validate input for adding a menu item to a cart.

    Fields:
        menu_item_id (UUID): Menu item to add
        quantity (int): Number of portions (default 1)
        special_request (str): Note for the kitchen
        group_id (UUID): Add to this group's shared cart instead
    """

    menu_item_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, max_value=50, default=1)
    special_request = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    group_id = serializers.UUIDField(required=False, allow_null=True)


class CartFilterSerializer(serializers.Serializer):
    group_id = serializers.UUIDField(required=False)


# =============================================================================
# Output Serializers
# =============================================================================


class CartItemSerializer(serializers.ModelSerializer):
    menu_item_id = serializers.UUIDField(source='menu_item.id', read_only=True)
    name = serializers.CharField(source='menu_item.name', read_only=True)
    price = serializers.DecimalField(source='menu_item.price', max_digits=10, decimal_places=2, read_only=True)
    restaurant_name = serializers.CharField(source='menu_item.restaurant.name', read_only=True)
    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = CartItem
        fields = [
            'id',
            'menu_item_id',
            'name',
            'price',
            'restaurant_name',
            'quantity',
            'special_request',
            'user',
            'added_at',
        ]
        read_only_fields = fields


class CartContentsSerializer(serializers.Serializer):
    cart_id = serializers.UUIDField(source='cart.id')
    group_id = serializers.UUIDField(source='cart.group_id', allow_null=True)
    is_group_cart = serializers.BooleanField(source='cart.is_group_cart')
    items = CartItemSerializer(many=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
