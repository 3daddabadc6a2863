from django.contrib import admin

from apps.ledger.models import Car
from apps.ledger.serializers import related_display_name
from .models import Invoice, InvoiceLine


class InvoiceLineInline(admin.TabularInline):
    """Read-only lines within an invoice."""
    model = InvoiceLine
    extra = 0
    fields = [
        'position',
        'item_name',
        'customer_name',
        'quantity',
        'price',
        'total',
        'left_amount',
        'payment_method',
    ]
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        """Lines are written by the invoice services."""
        return False


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    """
    Admin interface for invoices.

    Read-only: changes must go through the API so that balances follow.
    """

    list_display = ['invoice_no', 'get_car_name', 'invoice_date', 'total', 'total_left', 'status']
    list_filter = ['status', 'invoice_date']
    search_fields = ['invoice_no']
    date_hierarchy = 'invoice_date'
    inlines = [InvoiceLineInline]
    fields = ['invoice_no', 'get_car_name', 'invoice_date', 'total', 'total_left', 'status', 'created_at', 'updated_at']
    readonly_fields = fields

    def get_car_name(self, obj):
        return related_display_name(obj, 'car', Car)
    get_car_name.short_description = 'Car'

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
