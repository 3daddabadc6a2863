from django.contrib import admin
from django.utils.html import format_html

from apps.ledger.models import Car, Customer, Employee
from .models import Payment, PaymentType
from apps.ledger.serializers import related_display_name


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    """
    Admin interface for payments.

    Payments are read-only here: edits and deletions must go through the API
    so that balances follow.
    """

    list_display = [
        'payment_no',
        'type_badge',
        'get_beneficiary',
        'amount',
        'payment_date',
        'balance_after',
        'created_at',
    ]

    list_filter = [
        'type',
        'payment_date',
    ]

    search_fields = [
        'payment_no',
        'description',
    ]

    date_hierarchy = 'payment_date'
    ordering = ['-payment_date', '-created_at']

    def type_badge(self, obj):
        """Display payment type as colored badge."""
        colors = {
            PaymentType.RECEIVE: '#6B8E5E',
            PaymentType.PAYMENT_OUT: '#B85C5C',
            PaymentType.BALANCE_ADD: '#4A7BA7',
            PaymentType.BALANCE_DEDUCT: '#A47449',
        }
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            colors.get(obj.type, '#999'), obj.get_type_display()
        )
    type_badge.short_description = 'Type'
    type_badge.admin_order_field = 'type'

    def get_beneficiary(self, obj):
        return (
            related_display_name(obj, 'customer', Customer)
            or related_display_name(obj, 'employee', Employee)
            or related_display_name(obj, 'car', Car)
        )
    get_beneficiary.short_description = 'Account'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
