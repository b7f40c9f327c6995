# ==========================================
# apps/groups/admin.py
# ==========================================

from django.contrib import admin
from django.db.models import Count
from apps.groups.models import Group, GroupMembership


class GroupMembershipInline(admin.TabularInline):
    model = GroupMembership
    extra = 0
    fields = ['user', 'role', 'joined_at']
    readonly_fields = ['joined_at']
    autocomplete_fields = ['user']


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    """Ordering groups with their shared cart and order history."""

    list_display = [
        'name',
        'owner',
        'member_count',
        'cart_item_count',
        'order_count',
        'created_at'
    ]
    search_fields = ['name', 'owner__email']
    readonly_fields = ['cart_item_count', 'order_count', 'created_at', 'updated_at']
    inlines = [GroupMembershipInline]
    date_hierarchy = 'created_at'

    fieldsets = (
        (None, {
            'fields': ('name', 'description', 'owner')
        }),
        ('Ordering', {
            'fields': ('cart_item_count', 'order_count')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        return (
            super().get_queryset(request)
            .select_related('owner')
            .annotate(
                _member_count=Count('memberships', distinct=True),
                _order_count=Count('orders', distinct=True),
            )
        )

    @admin.display(description='Members', ordering='_member_count')
    def member_count(self, obj):
        return obj._member_count

    @admin.display(description='Orders', ordering='_order_count')
    def order_count(self, obj):
        return obj._order_count

    @admin.display(description='Items in shared cart')
    def cart_item_count(self, obj):
        cart = getattr(obj, 'cart', None)
        return cart.items.count() if cart else 0


@admin.register(GroupMembership)
class GroupMembershipAdmin(admin.ModelAdmin):
    list_display = ['user', 'group', 'role', 'joined_at']
    list_filter = ['role']
    search_fields = ['user__email', 'group__name']
    list_select_related = ['user', 'group']
