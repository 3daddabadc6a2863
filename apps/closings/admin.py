from django.contrib import admin

from .models import CarClosing, MonthClosing


class CarClosingInline(admin.TabularInline):
    model = CarClosing
    extra = 0
    fields = ['car_name', 'balance', 'left', 'payments']
    readonly_fields = fields
    can_delete = False


@admin.register(MonthClosing)
class MonthClosingAdmin(admin.ModelAdmin):
    """
    Admin interface for month closings.

    Closings are read-only here: a month is closed through the API so that
    car accounts are reset in the same transaction.
    """

    list_display = [
        'account_month',
        'total_balance',
        'total_left',
        'car_payments',
        'profit',
        'cars_count',
        'closed_at',
    ]

    search_fields = ['account_month']
    ordering = ['-account_month']
    inlines = [CarClosingInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
