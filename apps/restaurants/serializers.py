from rest_framework import serializers
from .models import Restaurant, MenuItem


class MenuItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = MenuItem
        fields = [
            'id',
            'restaurant',
            'name',
            'description',
            'price',
            'image_url',
            'is_available',
        ]
        read_only_fields = fields


class RestaurantListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for restaurant lists."""

    menu_item_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Restaurant
        fields = ['id', 'name', 'description', 'logo_url', 'menu_item_count']
        read_only_fields = fields


class RestaurantSerializer(serializers.ModelSerializer):
    menu_items = MenuItemSerializer(many=True, read_only=True)

    class Meta:
        model = Restaurant
        fields = ['id', 'name', 'description', 'logo_url', 'menu_items', 'created_at']
        read_only_fields = fields
