from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class PaymentType(models.TextChoices):
    RECEIVE = 'receive', 'Received'
    PAYMENT_OUT = 'payment_out', 'Payment out'
    BALANCE_ADD = 'balance_add', 'Balance added'
    BALANCE_DEDUCT = 'balance_deduct', 'Balance deducted'


class Payment(models.Model):
    """
    Money moving in or out of one ledger account.

    Exactly one of customer, employee or car is set. References are not
    enforced by the database so a payment survives the deletion of its
    beneficiary.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    type = models.CharField(max_length=20, choices=PaymentType.choices)

    # Beneficiary (exactly one)
    customer = models.ForeignKey(
        'ledger.Customer',
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        blank=True,
        related_name='payments'
    )
    employee = models.ForeignKey(
        'ledger.Employee',
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        blank=True,
        related_name='payments'
    )
    car = models.ForeignKey(
        'ledger.Car',
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        blank=True,
        related_name='payments'
    )

    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    payment_no = models.CharField(max_length=30, blank=True)
    payment_date = models.DateField()
    description = models.TextField(blank=True)

    # YYYY-MM, payment_out only
    account_month = models.CharField(max_length=7, blank=True)

    # Employee balance right after a balance_add / balance_deduct
    balance_after = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payments'
        ordering = ['-payment_date', '-created_at']
        indexes = [
            models.Index(fields=['type', 'payment_date'], name='payments_type_date_idx'),
            models.Index(fields=['payment_no'], name='payments_payment_no_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(customer__isnull=False, employee__isnull=True, car__isnull=True)
                    | models.Q(customer__isnull=True, employee__isnull=False, car__isnull=True)
                    | models.Q(customer__isnull=True, employee__isnull=True, car__isnull=False)
                ),
                name='payments_single_beneficiary',
            ),
        ]

    def __str__(self):
        return f"{self.payment_no or self.id} - {self.get_type_display()} {self.amount}"

    @property
    def beneficiary_kind(self):
        if self.customer_id:
            return 'customer'
        if self.employee_id:
            return 'employee'
        if self.car_id:
            return 'car'
        return None
