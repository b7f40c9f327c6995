# ==========================================
# apps/carts/admin.py
# ==========================================

from django.contrib import admin
from apps.carts.models import Cart, CartItem


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    fields = ['menu_item', 'user', 'quantity', 'special_request', 'added_at']
    readonly_fields = ['added_at']
    raw_id_fields = ['menu_item', 'user']


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'group', 'item_count', 'updated_at']
    search_fields = ['user__email', 'group__name']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['user', 'group']
    inlines = [CartItemInline]

    def item_count(self, obj):
        return obj.items.count()
    item_count.short_description = 'Items'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('user', 'group')
