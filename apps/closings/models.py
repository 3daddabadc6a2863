from django.db import models
from decimal import Decimal
import uuid


class MonthClosing(models.Model):
    """
    Car accounts as they stood when an account month was closed.

    Closing resets every car's ``balance`` and ``left`` to zero, so this
    snapshot (with its per-car rows) is what remains of the month.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    account_month = models.CharField(max_length=7, unique=True)  # YYYY-MM

    # Totals over all cars
    total_balance = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    total_left = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    car_payments = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    profit = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))

    cars_count = models.PositiveIntegerField(default=0)
    customers_count = models.PositiveIntegerField(default=0)

    closed_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'month_closings'
        ordering = ['-account_month']

    def __str__(self):
        return f"{self.account_month} (profit {self.profit})"


class CarClosing(models.Model):
    """One car's figures inside a month closing."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    closing = models.ForeignKey(
        MonthClosing,
        on_delete=models.CASCADE,
        related_name='cars'
    )
    car = models.ForeignKey(
        'ledger.Car',
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        blank=True,
        related_name='closings'
    )
    car_name = models.CharField(max_length=100)

    balance = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    left = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    payments = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))

    class Meta:
        db_table = 'month_closing_cars'
        ordering = ['car_name']
        constraints = [
            models.UniqueConstraint(fields=['closing', 'car'], name='month_closing_cars_unique_car'),
        ]

    def __str__(self):
        return f"{self.closing.account_month} - {self.car_name}"

    @property
    def profit(self):
        return self.balance - self.left - self.payments
