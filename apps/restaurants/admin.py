# ==========================================
# apps/restaurants/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from apps.restaurants.models import Restaurant, MenuItem


class MenuItemInline(admin.TabularInline):
    model = MenuItem
    extra = 0
    fields = ['name', 'price', 'is_available']


@admin.register(Restaurant)
class RestaurantAdmin(admin.ModelAdmin):
    list_display = ['name', 'owner', 'menu_size', 'created_at']
    search_fields = ['name', 'owner__email']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['owner']
    inlines = [MenuItemInline]

    def menu_size(self, obj):
        return obj.menu_items.count()
    menu_size.short_description = 'Menu items'


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'restaurant', 'price', 'availability_badge']
    list_filter = ['is_available', 'restaurant']
    search_fields = ['name', 'restaurant__name']

    def availability_badge(self, obj):
        """Display availability as colored badge."""
        if obj.is_available:
            return format_html(
                '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Available</span>'
            )
        return format_html(
            '<span style="background: #ccc; color: #666; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Off menu</span>'
        )
    availability_badge.short_description = 'Availability'
    availability_badge.admin_order_field = 'is_available'
