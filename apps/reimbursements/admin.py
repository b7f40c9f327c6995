# ==========================================
# apps/reimbursements/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from .models import Reimbursement, ReimbursementStatus


@admin.register(Reimbursement)
class ReimbursementAdmin(admin.ModelAdmin):
    """
    Read-mostly view of the reimbursement ledger.

    Rows are written by the settlement engine and settled through the API;
    amounts are not editable here.
    """

    list_display = [
        'debtor',
        'creditor',
        'order',
        'amount',
        'status_badge',
        'settled_at',
        'created_at',
    ]
    list_filter = ['status', 'created_at', 'settled_at']
    search_fields = ['debtor__email', 'creditor__email', 'transaction_reference']
    readonly_fields = [
        'debtor',
        'creditor',
        'order',
        'amount',
        'status',
        'settled_at',
        'payment_method',
        'transaction_reference',
        'created_at',
        'updated_at',
    ]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Ledger Entry', {
            'fields': ('debtor', 'creditor', 'order', 'amount', 'description')
        }),
        ('Settlement', {
            'fields': ('status', 'settled_at', 'payment_method', 'transaction_reference')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def status_badge(self, obj):
        """Display reimbursement status as colored badge."""
        if obj.status == ReimbursementStatus.UNPAID:
            bg, fg = '#E5C49A', '#2C1810'
        else:
            bg, fg = '#6B8E5E', 'white'
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def has_add_permission(self, request):
        return False

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('debtor', 'creditor', 'order')
