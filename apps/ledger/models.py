from django.db import models
from decimal import Decimal
import uuid


class EntityStatus(models.TextChoices):
    ACTIVE = 'Active', 'Active'
    INACTIVE = 'Inactive', 'Inactive'
    CLOSED = 'Closed', 'Closed'


class CarStatus(models.TextChoices):
    ACTIVE = 'Active', 'Active'
    INACTIVE = 'Inactive', 'Inactive'
    MAINTENANCE = 'Maintenance', 'Maintenance'
    CLOSED = 'Closed', 'Closed'


class EmployeeCategory(models.TextChoices):
    DRIVER = 'driver', 'Driver'
    HELPER = 'helper', 'Helper'


class LedgerEntity(models.Model):
    """
    Common fields for every record kept in the ledger.

    Subclasses name the field used for display and the label shown when a
    reference to a record of that kind no longer resolves.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    display_field = None
    unknown_label = 'Unknown'

    class Meta:
        abstract = True
        ordering = ['-created_at']

    def __str__(self):
        return str(getattr(self, self.display_field, '') or self.unknown_label)


class Car(LedgerEntity):
    """Vehicle account. Invoices accumulate revenue and unpaid remainder here."""

    car_name = models.CharField(max_length=100)
    number_plate = models.CharField(max_length=20, unique=True)
    driver_name = models.CharField(max_length=100, blank=True)
    helper_name = models.CharField(max_length=100, blank=True)

    # Running balances
    balance = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    left = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))

    status = models.CharField(
        max_length=20,
        choices=CarStatus.choices,
        default=CarStatus.ACTIVE
    )

    display_field = 'car_name'
    unknown_label = 'Unknown Car'

    class Meta(LedgerEntity.Meta):
        db_table = 'cars'
        indexes = [
            models.Index(fields=['status'], name='cars_status_idx'),
        ]


class Employee(LedgerEntity):
    """Driver or helper with a running balance of advances and fees."""

    employee_name = models.CharField(max_length=100)
    phone_number = models.CharField(max_length=30, blank=True)
    category = models.CharField(max_length=20, choices=EmployeeCategory.choices)
    balance = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    status = models.CharField(
        max_length=20,
        choices=EntityStatus.choices,
        default=EntityStatus.ACTIVE
    )

    display_field = 'employee_name'
    unknown_label = 'Unknown Employee'

    class Meta(LedgerEntity.Meta):
        db_table = 'employees'
        indexes = [
            models.Index(fields=['status'], name='employees_status_idx'),
            models.Index(fields=['category'], name='employees_category_idx'),
        ]


class Customer(LedgerEntity):
    """Customer account. A positive balance is owed to the business."""

    customer_name = models.CharField(max_length=150)
    phone_number = models.CharField(max_length=30, blank=True)
    balance = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    status = models.CharField(
        max_length=20,
        choices=EntityStatus.choices,
        default=EntityStatus.ACTIVE
    )

    display_field = 'customer_name'
    unknown_label = 'Unknown Customer'

    class Meta(LedgerEntity.Meta):
        db_table = 'customers'
        indexes = [
            models.Index(fields=['status'], name='customers_status_idx'),
        ]


class Item(LedgerEntity):
    """Catalog item. Its price is copied into invoice lines at entry time."""

    item_name = models.CharField(max_length=150)
    price = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))

    # Per-role fees
    driver_price = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    helper_price = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)

    display_field = 'item_name'
    unknown_label = 'Unknown Item'

    class Meta(LedgerEntity.Meta):
        db_table = 'items'
