from decimal import Decimal

from rest_framework import serializers

from .models import Car, Employee, Customer, Item, CarStatus


def related_display_name(obj, field, model):
    """Name of a referenced record, or the model's "Unknown ..." label if it is gone."""
    if not getattr(obj, f'{field}_id'):
        return None
    try:
        related = getattr(obj, field)
    except model.DoesNotExist:
        related = None
    return str(related) if related is not None else model.unknown_label


# =============================================================================
# Input Serializers
# =============================================================================

class EntityFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for ledger record listings.

    Query Parameters:
        status (str): Filter by status
        search (str): Case-insensitive match on name fields
    """

    status = serializers.ChoiceField(choices=CarStatus.choices, required=False)
    search = serializers.CharField(max_length=100, required=False, allow_blank=True)


class EmployeeBalanceInputSerializer(serializers.Serializer):
    """
    Validate input for adding to or deducting from an employee balance.

    Fields:
        amount (decimal): Positive amount
        date (date): Date of the adjustment
        description (str): Reason, e.g. "advance"
    """

    amount = serializers.DecimalField(
        max_digits=14,
        decimal_places=2,
        min_value=Decimal('0.01')
    )
    date = serializers.DateField()
    description = serializers.CharField(max_length=500)


# =============================================================================
# Model Serializers
# =============================================================================

class CarSerializer(serializers.ModelSerializer):

    class Meta:
        model = Car
        fields = [
            'id',
            'car_name',
            'number_plate',
            'driver_name',
            'helper_name',
            'balance',
            'left',
            'status',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class EmployeeSerializer(serializers.ModelSerializer):

    class Meta:
        model = Employee
        fields = [
            'id',
            'employee_name',
            'phone_number',
            'category',
            'balance',
            'status',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class CustomerSerializer(serializers.ModelSerializer):

    class Meta:
        model = Customer
        fields = [
            'id',
            'customer_name',
            'phone_number',
            'balance',
            'status',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class ItemSerializer(serializers.ModelSerializer):

    class Meta:
        model = Item
        fields = [
            'id',
            'item_name',
            'price',
            'driver_price',
            'helper_price',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class BalanceResponseSerializer(serializers.Serializer):
    new_balance = serializers.DecimalField(max_digits=14, decimal_places=2)
