from django.db import models
from django.db.models import Sum
from django.db.models.functions import Coalesce
from decimal import Decimal
import uuid


class InvoiceStatus(models.TextChoices):
    ACTIVE = 'Active', 'Active'
    CANCELLED = 'Cancelled', 'Cancelled'


class PaymentMethod(models.TextChoices):
    CASH = 'cash', 'Cash'
    CREDIT = 'credit', 'Credit'


class Invoice(models.Model):
    """
    Sales document for one car.

    ``total`` and ``total_left`` are the sums of the current line values and
    are rewritten whenever the lines change.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    invoice_no = models.CharField(max_length=30, unique=True)
    car = models.ForeignKey(
        'ledger.Car',
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='invoices'
    )
    invoice_date = models.DateField()

    # Derived totals
    total = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    total_left = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))

    status = models.CharField(
        max_length=20,
        choices=InvoiceStatus.choices,
        default=InvoiceStatus.ACTIVE
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'invoices'
        ordering = ['-invoice_date', '-created_at']
        indexes = [
            models.Index(fields=['car', 'invoice_date'], name='invoices_car_date_idx'),
            models.Index(fields=['invoice_date'], name='invoices_date_idx'),
        ]

    def __str__(self):
        return f"{self.invoice_no} ({self.total})"

    def recalculate_totals(self):
        """Recompute totals from the stored lines and persist them."""
        totals = self.lines.aggregate(
            total=Coalesce(Sum('total'), Decimal('0.00')),
            total_left=Coalesce(Sum('left_amount'), Decimal('0.00')),
        )
        self.total = totals['total']
        self.total_left = totals['total_left']
        self.save(update_fields=['total', 'total_left', 'updated_at'])


class InvoiceLine(models.Model):
    """One line of an invoice, with name and price snapshots taken at entry time."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    invoice = models.ForeignKey(
        Invoice,
        on_delete=models.CASCADE,
        related_name='lines'
    )
    position = models.PositiveIntegerField()

    item = models.ForeignKey(
        'ledger.Item',
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='invoice_lines'
    )
    item_name = models.CharField(max_length=150, blank=True)
    customer = models.ForeignKey(
        'ledger.Customer',
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        blank=True,
        related_name='invoice_lines'
    )
    customer_name = models.CharField(max_length=150, blank=True)

    description = models.TextField(blank=True)
    quantity = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('1.00'))
    price = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    total = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    left_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    payment_method = models.CharField(
        max_length=10,
        choices=PaymentMethod.choices,
        default=PaymentMethod.CASH
    )

    class Meta:
        db_table = 'invoice_lines'
        ordering = ['position']
        constraints = [
            models.UniqueConstraint(fields=['invoice', 'position'], name='invoice_lines_unique_position'),
        ]
        indexes = [
            models.Index(fields=['customer', 'payment_method'], name='invoice_lines_customer_idx'),
        ]

    def __str__(self):
        return f"{self.invoice_id} #{self.position}: {self.item_name} x {self.quantity}"

    @property
    def is_credit(self):
        return self.payment_method == PaymentMethod.CREDIT
