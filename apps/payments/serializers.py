from decimal import Decimal

from rest_framework import serializers

from apps.ledger.models import Car, Customer, Employee
from apps.ledger.serializers import related_display_name
from .models import Payment, PaymentType


# =============================================================================
# Input Serializers
# =============================================================================

class PaymentFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for payment filtering.

    Query Parameters:
        type (str): Payment type
        customer (UUID): Filter by customer
        employee (UUID): Filter by employee
        car (UUID): Filter by car
        date_from (date): Payments on or after this date
        date_to (date): Payments on or before this date
    """

    type = serializers.ChoiceField(choices=PaymentType.choices, required=False)
    customer = serializers.UUIDField(required=False)
    employee = serializers.UUIDField(required=False)
    car = serializers.UUIDField(required=False)
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


class ReceivePaymentInputSerializer(serializers.Serializer):
    """Validate input for money received from a customer."""

    customer = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.01'))
    payment_date = serializers.DateField()
    description = serializers.CharField(required=False, allow_blank=True, default='')
    payment_no = serializers.CharField(max_length=30, required=False, allow_blank=True)


class PaymentOutInputSerializer(serializers.Serializer):
    """Validate input for money paid out to an employee or car account."""

    account_type = serializers.ChoiceField(choices=[('employee', 'Employee'), ('car', 'Car')])
    recipient = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.01'))
    payment_date = serializers.DateField()
    account_month = serializers.RegexField(
        r'^\d{4}-(0[1-9]|1[0-2])$',
        required=False,
        allow_blank=True,
        error_messages={'invalid': 'Use the YYYY-MM format.'}
    )
    payment_no = serializers.CharField(max_length=30, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True, default='')


class PaymentUpdateInputSerializer(serializers.Serializer):
    """Validate input for editing a payment."""

    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.01'))
    payment_date = serializers.DateField(required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    payment_no = serializers.CharField(max_length=30, required=False, allow_blank=True)
    customer = serializers.UUIDField(required=False, allow_null=True)
    car = serializers.UUIDField(required=False, allow_null=True)


# =============================================================================
# Output Serializers
# =============================================================================

class PaymentSerializer(serializers.ModelSerializer):
    """Payment with the display names of its beneficiary."""

    customer_name = serializers.SerializerMethodField()
    employee_name = serializers.SerializerMethodField()
    car_name = serializers.SerializerMethodField()

    class Meta:
        model = Payment
        fields = [
            'id',
            'type',
            'payment_no',
            'amount',
            'payment_date',
            'description',
            'account_month',
            'balance_after',
            'customer',
            'customer_name',
            'employee',
            'employee_name',
            'car',
            'car_name',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_customer_name(self, obj):
        return related_display_name(obj, 'customer', Customer)

    def get_employee_name(self, obj):
        return related_display_name(obj, 'employee', Employee)

    def get_car_name(self, obj):
        return related_display_name(obj, 'car', Car)


class PaymentCreatedResponseSerializer(serializers.Serializer):
    payment_id = serializers.UUIDField()
    payment_no = serializers.CharField()
    message = serializers.CharField()
