from rest_framework import serializers

from .models import CarClosing, MonthClosing

ACCOUNT_MONTH_REGEX = r'^\d{4}-(0[1-9]|1[0-2])$'


def _account_month_field(**kwargs):
    return serializers.RegexField(
        ACCOUNT_MONTH_REGEX,
        error_messages={'invalid': 'Use the YYYY-MM format.'},
        **kwargs
    )


# =============================================================================
# Input Serializers
# =============================================================================

class CloseMonthInputSerializer(serializers.Serializer):
    """
    Validate a month closing request.

    Fields:
        account_month (str): YYYY-MM, defaults to the current month
    """

    account_month = _account_month_field(required=False)

    def validate_account_month(self, value):
        if MonthClosing.objects.filter(account_month=value).exists():
            raise serializers.ValidationError('This month is already closed.')
        return value


class ClosingFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for closings.

    Query Parameters:
        year (int): Only closings of this calendar year
        account_month (str): Month to preview (preview only)
    """

    year = serializers.IntegerField(min_value=2000, max_value=2100, required=False)
    account_month = _account_month_field(required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class CarClosingSerializer(serializers.ModelSerializer):

    profit = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = CarClosing
        fields = [
            'car',
            'car_name',
            'balance',
            'left',
            'payments',
            'profit',
        ]
        read_only_fields = fields


class MonthClosingSerializer(serializers.ModelSerializer):
    """Month closing with its per-car rows."""

    cars = CarClosingSerializer(many=True, read_only=True)

    class Meta:
        model = MonthClosing
        fields = [
            'id',
            'account_month',
            'total_balance',
            'total_left',
            'car_payments',
            'profit',
            'cars_count',
            'customers_count',
            'closed_at',
            'cars',
        ]
        read_only_fields = fields


class CarFiguresSerializer(serializers.Serializer):
    car_id = serializers.UUIDField()
    car_name = serializers.CharField()
    balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    left = serializers.DecimalField(max_digits=14, decimal_places=2)
    payments = serializers.DecimalField(max_digits=14, decimal_places=2)
    profit = serializers.DecimalField(max_digits=14, decimal_places=2)


class MonthFiguresSerializer(serializers.Serializer):
    """Figures a closing would record."""
    account_month = serializers.CharField()
    total_balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_left = serializers.DecimalField(max_digits=14, decimal_places=2)
    car_payments = serializers.DecimalField(max_digits=14, decimal_places=2)
    profit = serializers.DecimalField(max_digits=14, decimal_places=2)
    cars_count = serializers.IntegerField()
    customers_count = serializers.IntegerField()
    cars = CarFiguresSerializer(many=True)
