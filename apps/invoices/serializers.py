from decimal import Decimal

from django.conf import settings
from rest_framework import serializers

from apps.ledger.models import Car, Customer, Item
from apps.ledger.serializers import related_display_name
from .models import Invoice, InvoiceLine, InvoiceStatus, PaymentMethod
from .services.invoice_composer import LINE_FIELDS, FIELD_ALIASES


# =============================================================================
# Input Serializers
# =============================================================================

class InvoiceFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for invoice filtering.

    Query Parameters:
        car (UUID): Filter by car
        customer (UUID): Invoices with at least one line for this customer
        status (str): Filter by status
        search (str): Match on invoice number
        date_from (date): Invoices on or after this date
        date_to (date): Invoices on or before this date
    """

    car = serializers.UUIDField(required=False)
    customer = serializers.UUIDField(required=False)
    status = serializers.ChoiceField(choices=InvoiceStatus.choices, required=False)
    search = serializers.CharField(max_length=30, required=False, allow_blank=True)
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


class InvoiceLineInputSerializer(serializers.Serializer):
    """
    Validate one submitted invoice line.

    Missing ``price`` is copied from the item and missing ``total`` is
    ``quantity * price``. A submitted total is kept as is.
    """

    item = serializers.UUIDField()
    customer = serializers.UUIDField(required=False, allow_null=True)
    item_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    customer_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    quantity = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal('0'), default=Decimal('1.00')
    )
    price = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0'), required=False)
    total = serializers.DecimalField(max_digits=14, decimal_places=2, required=False)
    left_amount = serializers.DecimalField(
        max_digits=14, decimal_places=2, min_value=Decimal('0'), default=Decimal('0.00')
    )
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, default=PaymentMethod.CASH)

    def validate(self, attrs):
        item = Item.objects.filter(pk=attrs['item']).first()
        if item is None:
            raise serializers.ValidationError({'item': 'Item not found.'})

        customer_id = attrs.get('customer')
        if customer_id and not Customer.objects.filter(pk=customer_id).exists():
            raise serializers.ValidationError({'customer': 'Customer not found.'})

        if attrs.get('payment_method') == PaymentMethod.CREDIT and not customer_id:
            raise serializers.ValidationError({'customer': 'Credit lines need a customer.'})

        if attrs.get('price') is None:
            attrs['price'] = item.price
        if attrs.get('total') is None:
            attrs['total'] = (attrs['quantity'] * attrs['price']).quantize(Decimal('0.01'))
        if not attrs.get('item_name'):
            attrs['item_name'] = item.item_name
        return attrs

    def to_service(self, attrs):
        """Line payload in the shape the invoice composer expects."""
        data = dict(attrs)
        data['item_id'] = data.pop('item')
        data['customer_id'] = data.pop('customer', None)
        return data


def _validate_line_limit(lines):
    max_lines = getattr(settings, 'INVOICE_MAX_LINES', None)
    if max_lines and len(lines) > max_lines:
        raise serializers.ValidationError(f'An invoice can have at most {max_lines} lines.')
    return lines


def _validate_car(value):
    if value and not Car.objects.filter(pk=value).exists():
        raise serializers.ValidationError('Car not found.')
    return value


class InvoiceCreateInputSerializer(serializers.Serializer):
    """Validate input for creating an invoice."""

    invoice_no = serializers.CharField(max_length=30)
    car = serializers.UUIDField()
    invoice_date = serializers.DateField()
    lines = InvoiceLineInputSerializer(many=True, allow_empty=False)

    def validate_car(self, value):
        return _validate_car(value)

    def validate_invoice_no(self, value):
        if Invoice.objects.filter(invoice_no=value).exists():
            raise serializers.ValidationError('Invoice number already exists.')
        return value

    def validate_lines(self, value):
        return _validate_line_limit(value)

    def to_service(self):
        data = self.validated_data
        line_serializer = InvoiceLineInputSerializer()
        return {
            'invoice_no': data['invoice_no'],
            'car_id': data['car'],
            'invoice_date': data['invoice_date'],
            'lines': [line_serializer.to_service(line) for line in data['lines']],
        }


class InvoiceUpdateInputSerializer(serializers.Serializer):
    """Validate input for editing an invoice. Every field is optional."""

    invoice_no = serializers.CharField(max_length=30, required=False)
    car = serializers.UUIDField(required=False)
    invoice_date = serializers.DateField(required=False)
    status = serializers.ChoiceField(choices=InvoiceStatus.choices, required=False)
    lines = InvoiceLineInputSerializer(many=True, allow_empty=False, required=False)

    def validate_car(self, value):
        return _validate_car(value)

    def validate_lines(self, value):
        return _validate_line_limit(value)

    def to_service(self):
        fields = dict(self.validated_data)
        if 'car' in fields:
            fields['car_id'] = fields.pop('car')
        if 'lines' in fields:
            line_serializer = InvoiceLineInputSerializer()
            fields['lines'] = [line_serializer.to_service(line) for line in fields['lines']]
        return fields


class EditLineInputSerializer(serializers.Serializer):
    """
    Validate a single-line edit.

    Fields:
        position (int): 1-based line number
        changes (dict): Field name to new value, e.g. {"quantity": "3"}
    """

    position = serializers.IntegerField(min_value=1)
    changes = serializers.DictField(allow_empty=False)

    def validate_changes(self, value):
        """Check each change with the field type a submitted line uses."""
        input_names = {target: alias for alias, target in FIELD_ALIASES.items()}
        allowed = set(LINE_FIELDS) | {alias for alias, target in FIELD_ALIASES.items() if target in LINE_FIELDS}
        unknown = sorted(set(value) - allowed)
        if unknown:
            raise serializers.ValidationError(f"Unknown line field(s): {', '.join(unknown)}")

        line_fields = InvoiceLineInputSerializer().fields
        cleaned, errors = {}, {}
        for name, raw in value.items():
            target = FIELD_ALIASES.get(name, name)
            field = line_fields[input_names.get(target, target)]
            try:
                cleaned[target] = field.run_validation(raw)
            except serializers.ValidationError as e:
                errors[name] = e.detail

        if cleaned.get('item_id') and not Item.objects.filter(pk=cleaned['item_id']).exists():
            errors['item'] = 'Item not found.'
        if cleaned.get('customer_id') and not Customer.objects.filter(pk=cleaned['customer_id']).exists():
            errors['customer'] = 'Customer not found.'

        if errors:
            raise serializers.ValidationError(errors)
        return cleaned


# =============================================================================
# Output Serializers
# =============================================================================

class InvoiceLineSerializer(serializers.ModelSerializer):

    class Meta:
        model = InvoiceLine
        fields = [
            'position',
            'item',
            'item_name',
            'customer',
            'customer_name',
            'description',
            'quantity',
            'price',
            'total',
            'left_amount',
            'payment_method',
        ]
        read_only_fields = fields


class InvoiceListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for invoice lists."""

    car_name = serializers.SerializerMethodField()

    class Meta:
        model = Invoice
        fields = [
            'id',
            'invoice_no',
            'car',
            'car_name',
            'invoice_date',
            'total',
            'total_left',
            'status',
            'created_at',
        ]
        read_only_fields = fields

    def get_car_name(self, obj):
        return related_display_name(obj, 'car', Car)


class InvoiceSerializer(InvoiceListSerializer):
    """Invoice with its lines."""

    lines = InvoiceLineSerializer(many=True, read_only=True)

    class Meta(InvoiceListSerializer.Meta):
        fields = InvoiceListSerializer.Meta.fields + ['lines', 'updated_at']
        read_only_fields = fields


class InvoiceWriteResponseSerializer(serializers.Serializer):
    invoice = InvoiceSerializer()
    warnings = serializers.ListField(child=serializers.DictField())


class NextInvoiceNoSerializer(serializers.Serializer):
    invoice_no = serializers.CharField()
