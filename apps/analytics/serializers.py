"""
Serializers for analytics app.

This module contains:
1. Input serializers - Query parameter validation
2. Response serializers - API documentation and output formatting
"""

from rest_framework import serializers
from datetime import date


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class MonthlySummaryQuerySerializer(serializers.Serializer):
    """
    Validate monthly summary query parameters.

    Query Parameters:
        year (int): Calendar year (default: current year)
        car (UUID): Restrict to one car
    """

    year = serializers.IntegerField(
        min_value=2000,
        max_value=2100,
        required=False,
        help_text='Calendar year'
    )
    car = serializers.UUIDField(required=False)

    def validate(self, attrs):
        attrs.setdefault('year', date.today().year)
        return attrs


class DateRangeQuerySerializer(serializers.Serializer):
    """
    Validate report date range query parameters.

    Query Parameters:
        date_from (date): On or after this date
        date_to (date): On or before this date
    """

    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def validate(self, attrs):
        """Validate date range."""
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')

        if date_from and date_to:
            if date_from > date_to:
                raise serializers.ValidationError({
                    'date_to': 'End date must be after start date'
                })

        return attrs


# =============================================================================
# Response Serializers (API Documentation)
# =============================================================================

class ActiveCarSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    car_name = serializers.CharField()
    balance = serializers.DecimalField(max_digits=14, decimal_places=2)


class DashboardResponseSerializer(serializers.Serializer):
    """Dashboard headline figures."""
    active_cars = ActiveCarSerializer(many=True)
    active_cars_count = serializers.IntegerField()
    active_employees_count = serializers.IntegerField()
    active_customers_count = serializers.IntegerField()
    total_invoices = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_outstanding = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_profit = serializers.DecimalField(max_digits=14, decimal_places=2)


class MonthSummarySerializer(serializers.Serializer):
    month = serializers.CharField()
    invoice_count = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    outstanding = serializers.DecimalField(max_digits=14, decimal_places=2)
    collected = serializers.DecimalField(max_digits=14, decimal_places=2)
    payments_received = serializers.DecimalField(max_digits=14, decimal_places=2)
    payments_out = serializers.DecimalField(max_digits=14, decimal_places=2)
    profit = serializers.DecimalField(max_digits=14, decimal_places=2)


class MonthlySummaryResponseSerializer(serializers.Serializer):
    """Per-month totals for one year."""
    year = serializers.IntegerField()
    car = serializers.UUIDField(allow_null=True)
    months = MonthSummarySerializer(many=True)


class CreditOverviewSerializer(serializers.Serializer):
    """Stored versus recomputed balance for one customer."""
    customer_id = serializers.UUIDField()
    customer_name = serializers.CharField()
    total_credited = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_received = serializers.DecimalField(max_digits=14, decimal_places=2)
    derived_balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    stored_balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    drift = serializers.DecimalField(max_digits=14, decimal_places=2)


class ReportCarSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    car_name = serializers.CharField()
    number_plate = serializers.CharField()
    balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    left = serializers.DecimalField(max_digits=14, decimal_places=2)


class CarTransactionSerializer(serializers.Serializer):
    date = serializers.DateField()
    invoice_no = serializers.CharField()
    customer_name = serializers.CharField(allow_blank=True)
    quantity = serializers.DecimalField(max_digits=12, decimal_places=2)
    price = serializers.DecimalField(max_digits=14, decimal_places=2)
    total = serializers.DecimalField(max_digits=14, decimal_places=2)
    left_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    payment_method = serializers.CharField()
    description = serializers.CharField(allow_blank=True)


class CarItemGroupSerializer(serializers.Serializer):
    item_name = serializers.CharField()
    transactions = CarTransactionSerializer(many=True)
    total_quantity = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_value = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_left = serializers.DecimalField(max_digits=14, decimal_places=2)


class CarPayoutSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    payment_no = serializers.CharField(allow_blank=True)
    payment_date = serializers.DateField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    account_month = serializers.CharField(allow_blank=True)
    description = serializers.CharField(allow_blank=True)


class CarReportSerializer(serializers.Serializer):
    """One car's lines grouped by item, with its pay-outs."""
    car = ReportCarSerializer()
    date_from = serializers.DateField(allow_null=True)
    date_to = serializers.DateField(allow_null=True)
    items = CarItemGroupSerializer(many=True)
    payments = CarPayoutSerializer(many=True)
    transaction_count = serializers.IntegerField()
    total_value = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_left = serializers.DecimalField(max_digits=14, decimal_places=2)
    payments_received = serializers.DecimalField(max_digits=14, decimal_places=2)
    payments_out = serializers.DecimalField(max_digits=14, decimal_places=2)
    net_amount = serializers.DecimalField(max_digits=14, decimal_places=2)


class StatementCustomerSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    customer_name = serializers.CharField()
    phone_number = serializers.CharField(allow_blank=True)
    balance = serializers.DecimalField(max_digits=14, decimal_places=2)


class StatementEntrySerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=['transaction', 'payment'])
    date = serializers.DateField()
    reference = serializers.CharField(allow_blank=True)
    car_name = serializers.CharField(allow_blank=True)
    item_name = serializers.CharField(allow_blank=True)
    quantity = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
    price = serializers.DecimalField(max_digits=14, decimal_places=2, allow_null=True)
    description = serializers.CharField(allow_blank=True)
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    running_balance = serializers.DecimalField(max_digits=14, decimal_places=2)


class CustomerStatementSerializer(serializers.Serializer):
    """Credit lines and payments of one customer in date order."""
    customer = StatementCustomerSerializer()
    date_from = serializers.DateField(allow_null=True)
    date_to = serializers.DateField(allow_null=True)
    entries = StatementEntrySerializer(many=True)
    total_credited = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_paid = serializers.DecimalField(max_digits=14, decimal_places=2)
    final_balance = serializers.DecimalField(max_digits=14, decimal_places=2)


class ErrorSerializer(serializers.Serializer):
    """Error response."""
    error = serializers.CharField()
