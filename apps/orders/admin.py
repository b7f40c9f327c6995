# ==========================================
# apps/orders/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from .models import Order, OrderItem, OrderParticipant, Payment, OrderStatus, PaymentStatus


def _badge(bg, fg, label):
    return format_html(
        '<span style="background: {}; color: {}; padding: 3px 8px; '
        'border-radius: 10px; font-size: 11px;">{}</span>',
        bg, fg, label
    )


class OrderItemInline(admin.TabularInline):
    """Snapshot items; created only by order placement."""
    model = OrderItem
    extra = 0
    fields = ['user', 'name', 'price_at_order', 'quantity', 'special_request']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


class OrderParticipantInline(admin.TabularInline):
    model = OrderParticipant
    extra = 0
    readonly_fields = ['user']

    def has_add_permission(self, request, obj=None):
        return False


class PaymentInline(admin.TabularInline):
    model = Payment
    extra = 0
    fields = ['payer', 'amount', 'status', 'created_at']
    readonly_fields = ['created_at']


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Admin interface for Orders.

    Totals and items are fixed at placement; only the status is editable.
    """

    list_display = [
        'id',
        'restaurant',
        'placed_by',
        'get_group_name',
        'total_price',
        'status_badge',
        'order_date',
    ]
    list_filter = ['status', 'restaurant', 'order_date']
    search_fields = ['restaurant__name', 'placed_by__email', 'group__name']
    readonly_fields = ['restaurant', 'group', 'placed_by', 'total_price', 'order_date', 'updated_at']
    inlines = [OrderParticipantInline, OrderItemInline, PaymentInline]
    date_hierarchy = 'order_date'
    ordering = ['-order_date']

    def get_group_name(self, obj):
        """Display group name or Personal badge."""
        if obj.group:
            return obj.group.name
        return _badge('#ccc', '#666', 'Personal')
    get_group_name.short_description = 'Group'

    def status_badge(self, obj):
        colors = {
            OrderStatus.PENDING: ('#E5C49A', '#2C1810'),
            OrderStatus.READY_FOR_PICKUP: ('#A47449', 'white'),
            OrderStatus.PICKED_UP: ('#6B8E5E', 'white'),
            OrderStatus.CANCELLED: ('#B85C5C', 'white'),
        }
        bg, fg = colors.get(obj.status, ('#ccc', '#666'))
        return _badge(bg, fg, obj.get_status_display())
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('restaurant', 'placed_by', 'group')


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ['order', 'payer', 'amount', 'status', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['payer__email', 'order__id']
    raw_id_fields = ['order', 'payer']

    actions = ['mark_completed']

    @admin.action(description='Mark selected payments as completed')
    def mark_completed(self, request, queryset):
        count = queryset.filter(status=PaymentStatus.PAID).update(status=PaymentStatus.COMPLETED)
        self.message_user(request, f'Marked {count} payment(s) as completed.')
