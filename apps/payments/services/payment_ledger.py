"""
Payment ledger service.

Every payment operation moves exactly one balance: creating applies the
amount, updating applies only the difference, deleting reverses it.
"""

import logging
from decimal import Decimal
from typing import List, Optional, Tuple
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.ledger.models import Car, Customer, Employee
from apps.ledger.services import (
    BalanceAdjuster,
    LedgerValidationError,
    get_entity,
    to_decimal,
)
from apps.payments.models import Payment, PaymentType

from .numbering import BALANCE_PREFIX, RECEIPT_PREFIX, next_payment_no

logger = logging.getLogger(__name__)

PAYOUT_ACCOUNTS = {
    'employee': Employee,
    'car': Car,
}

DIRECTIONS = {
    'add': (PaymentType.BALANCE_ADD, Decimal('1')),
    'deduct': (PaymentType.BALANCE_DEDUCT, Decimal('-1')),
}


def _require(**values) -> None:
    missing = [name for name, value in values.items() if value in (None, '')]
    if missing:
        raise LedgerValidationError(
            f"Missing required field(s): {', '.join(missing)}"
        )


def _positive_amount(amount) -> Decimal:
    try:
        value = to_decimal(amount)
    except ArithmeticError:
        raise LedgerValidationError(f"Invalid amount: {amount}")
    if value <= 0:
        raise LedgerValidationError("Amount must be greater than zero")
    return value


@transaction.atomic
def receive_payment(
    *,
    customer_id: UUID,
    amount: Decimal,
    payment_date,
    description: str = '',
    payment_no: Optional[str] = None
) -> Payment:
    """
    Record money received from a customer and lower the customer's balance.

    Args:
        customer_id: Paying customer
        amount: Amount received (> 0)
        payment_date: Date of the payment
        description: Optional note
        payment_no: Optional document number, defaults to ``PYN-0001`` style

    Returns:
        Created Payment instance

    Raises:
        LedgerValidationError: If customer, amount or date is missing
        EntityNotFoundError: If the customer does not exist
    """
    _require(customer_id=customer_id, amount=amount, payment_date=payment_date)
    amount = _positive_amount(amount)
    get_entity(Customer, customer_id)

    payment = Payment.objects.create(
        type=PaymentType.RECEIVE,
        customer_id=customer_id,
        amount=amount,
        payment_date=payment_date,
        description=description or '',
        payment_no=payment_no or next_payment_no(RECEIPT_PREFIX),
    )

    BalanceAdjuster().adjust(Customer, customer_id, -amount)

    logger.info("Received payment %s of %s from customer %s", payment.payment_no, amount, customer_id)
    return payment


@transaction.atomic
def pay_out(
    *,
    account_type: str,
    recipient_id: UUID,
    amount: Decimal,
    payment_date,
    account_month: str = '',
    payment_no: Optional[str] = None,
    description: str = ''
) -> Payment:
    """
    Record money paid out to an employee or a car account.

    The recipient's ``balance`` is lowered by ``amount``.

    Raises:
        LedgerValidationError: If a required field is missing or the account
            type is not ``employee`` or ``car``
        EntityNotFoundError: If the recipient does not exist
    """
    _require(
        account_type=account_type,
        recipient_id=recipient_id,
        amount=amount,
        payment_date=payment_date,
    )
    model = PAYOUT_ACCOUNTS.get(account_type)
    if model is None:
        raise LedgerValidationError(f"Unknown account type: {account_type}")
    amount = _positive_amount(amount)
    get_entity(model, recipient_id)

    payment = Payment.objects.create(
        type=PaymentType.PAYMENT_OUT,
        amount=amount,
        payment_date=payment_date,
        account_month=account_month or '',
        description=description or '',
        payment_no=payment_no or next_payment_no(RECEIPT_PREFIX),
        **{f'{account_type}_id': recipient_id},
    )

    BalanceAdjuster().adjust(model, recipient_id, -amount)

    logger.info("Paid out %s to %s %s (%s)", amount, account_type, recipient_id, payment.payment_no)
    return payment


@transaction.atomic
def adjust_employee_balance(
    *,
    employee_id: UUID,
    amount: Decimal,
    date,
    description: str,
    direction: str
) -> Decimal:
    """
    Add to or deduct from an employee balance and record it as a payment.

    Args:
        employee_id: Employee to adjust
        amount: Positive amount
        date: Date of the adjustment
        description: Reason for the adjustment
        direction: ``add`` or ``deduct``

    Returns:
        The employee's new balance

    Raises:
        LedgerValidationError: If amount is not positive or date/description
            is missing
        EntityNotFoundError: If the employee does not exist
    """
    if direction not in DIRECTIONS:
        raise LedgerValidationError(f"Unknown direction: {direction}")
    _require(amount=amount, date=date, description=description)
    amount = _positive_amount(amount)

    adjuster = BalanceAdjuster()
    employee = get_entity(Employee, employee_id, for_update=adjuster.lock_rows)

    payment_type, sign = DIRECTIONS[direction]
    new_balance = adjuster.adjust(Employee, employee.pk, sign * amount)

    Payment.objects.create(
        type=payment_type,
        employee_id=employee.pk,
        amount=amount,
        payment_date=date,
        description=description,
        payment_no=next_payment_no(BALANCE_PREFIX),
        balance_after=new_balance,
    )
    return new_balance


@transaction.atomic
def update_payment(
    *,
    payment_id: UUID,
    amount: Decimal,
    payment_date=None,
    description: Optional[str] = None,
    payment_no: Optional[str] = None,
    customer_id: Optional[UUID] = None,
    car_id: Optional[UUID] = None
) -> Tuple[Payment, List[dict]]:
    """
    Edit a payment and apply only the change in amount to the balances.

    A ``receive`` moves the customer balance by the negated difference and a
    car ``payment_out`` moves the car's ``left`` by the difference, both
    floored at zero. Employee pay-outs and balance adjustments are rewritten
    without touching any balance.

    Returns:
        Tuple of (updated payment, list of skipped-adjustment warnings)

    Raises:
        EntityNotFoundError: If the payment does not exist
        LedgerValidationError: If the amount is invalid or the beneficiary
            would change kind
    """
    adjuster = BalanceAdjuster()
    payment = get_entity(Payment, payment_id, for_update=adjuster.lock_rows)
    _require(amount=amount)
    amount = _positive_amount(amount)

    if customer_id and payment.beneficiary_kind != 'customer':
        raise LedgerValidationError("Only a customer payment can be moved to another customer")
    if car_id and payment.beneficiary_kind != 'car':
        raise LedgerValidationError("Only a car payment can be moved to another car")

    amount_difference = amount - payment.amount

    payment.amount = amount
    if payment_date is not None:
        payment.payment_date = payment_date
    if description is not None:
        payment.description = description
    if payment_no is not None:
        payment.payment_no = payment_no
    payment.customer_id = customer_id or payment.customer_id
    payment.car_id = car_id or payment.car_id
    payment.save()

    if amount_difference:
        if payment.type == PaymentType.RECEIVE and payment.customer_id:
            adjuster.adjust(Customer, payment.customer_id, -amount_difference, floor_at_zero=True)
        elif payment.type == PaymentType.PAYMENT_OUT and payment.car_id:
            adjuster.adjust(Car, payment.car_id, amount_difference, field='left', floor_at_zero=True)

    logger.info(
        "Updated payment %s: amount %s (difference %s)",
        payment.pk, amount, amount_difference
    )
    return payment, adjuster.warnings


@transaction.atomic
def delete_payment(*, payment_id: UUID) -> List[dict]:
    """
    Reverse a payment's balance effect, then delete it.

    ``receive`` adds the amount back to the customer; a car ``payment_out``
    lowers the car's ``left`` (floored at zero). Other payments are deleted
    without a balance change.

    Returns:
        List of skipped-adjustment warnings

    Raises:
        EntityNotFoundError: If the payment does not exist
    """
    adjuster = BalanceAdjuster()
    payment = get_entity(Payment, payment_id, for_update=adjuster.lock_rows)

    if payment.type == PaymentType.RECEIVE and payment.customer_id:
        adjuster.adjust(Customer, payment.customer_id, payment.amount)
    elif payment.type == PaymentType.PAYMENT_OUT and payment.car_id:
        adjuster.adjust(Car, payment.car_id, -payment.amount, field='left', floor_at_zero=True)

    payment.delete()
    logger.info("Deleted payment %s (%s %s)", payment_id, payment.type, payment.amount)
    return adjuster.warnings


def list_payments(
    *,
    payment_type: Optional[str] = None,
    types=None,
    customer_id: Optional[UUID] = None,
    employee_id: Optional[UUID] = None,
    car_id: Optional[UUID] = None,
    date_from=None,
    date_to=None
) -> QuerySet:
    """Payments matching the given filters, newest first."""
    queryset = Payment.objects.select_related('customer', 'employee', 'car')

    if payment_type:
        queryset = queryset.filter(type=payment_type)
    if types:
        queryset = queryset.filter(type__in=types)
    if customer_id:
        queryset = queryset.filter(customer_id=customer_id)
    if employee_id:
        queryset = queryset.filter(employee_id=employee_id)
    if car_id:
        queryset = queryset.filter(car_id=car_id)
    if date_from:
        queryset = queryset.filter(payment_date__gte=date_from)
    if date_to:
        queryset = queryset.filter(payment_date__lte=date_to)

    return queryset.order_by('-payment_date', '-created_at')
