"""
Month closing service.

Closing an account month freezes every car account into a MonthClosing
snapshot and starts the cars over from zero::

    profit = sum(car.balance) - sum(car.left) - car payments of the month

Car payments are the month's pay-outs to car accounts: those booked to the
account month, or dated in it when no account month was given.
"""

import logging
import re
from datetime import date
from decimal import Decimal
from typing import Optional

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Q, QuerySet, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from apps.ledger.models import Car, Customer
from apps.ledger.services import DuplicateKeyError, LedgerValidationError
from apps.payments.models import Payment, PaymentType

from .models import CarClosing, MonthClosing

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')
ACCOUNT_MONTH_PATTERN = re.compile(r'^(\d{4})-(0[1-9]|1[0-2])$')


def current_account_month() -> str:
    return date.today().strftime('%Y-%m')


def _parse_account_month(account_month: str):
    match = ACCOUNT_MONTH_PATTERN.match(account_month or '')
    if not match:
        raise LedgerValidationError(f"Invalid account month '{account_month}', expected YYYY-MM")
    return int(match.group(1)), int(match.group(2))


def car_payments_by_car(account_month: str) -> dict:
    """Pay-outs to each car for ``account_month``, keyed by car id."""
    year, month = _parse_account_month(account_month)
    in_month = Q(account_month=account_month) | Q(
        account_month='', payment_date__year=year, payment_date__month=month
    )
    return dict(
        Payment.objects.filter(type=PaymentType.PAYMENT_OUT, car__isnull=False)
        .filter(in_month)
        .values('car_id')
        .annotate(total=Coalesce(Sum('amount'), ZERO))
        .values_list('car_id', 'total')
    )


def month_figures(account_month: Optional[str] = None, *, cars=None) -> dict:
    """
    What closing ``account_month`` would record, without writing anything.

    Args:
        account_month: YYYY-MM, defaults to the current month
        cars: Car instances to use, defaults to every car

    Returns:
        dict with ``account_month``, ``total_balance``, ``total_left``,
        ``car_payments``, ``profit``, ``cars_count``, ``customers_count``
        and ``cars`` (one dict per car with its own figures)

    Raises:
        LedgerValidationError: If ``account_month`` is not YYYY-MM
    """
    account_month = account_month or current_account_month()
    payments = car_payments_by_car(account_month)
    if cars is None:
        cars = Car.objects.order_by('car_name')

    rows = []
    for car in cars:
        car_paid = payments.get(car.pk, ZERO)
        rows.append({
            'car_id': car.pk,
            'car_name': car.car_name,
            'balance': car.balance,
            'left': car.left,
            'payments': car_paid,
            'profit': car.balance - car.left - car_paid,
        })

    total_balance = sum((row['balance'] for row in rows), ZERO)
    total_left = sum((row['left'] for row in rows), ZERO)
    car_payments = sum((row['payments'] for row in rows), ZERO)
    return {
        'account_month': account_month,
        'total_balance': total_balance,
        'total_left': total_left,
        'car_payments': car_payments,
        'profit': total_balance - total_left - car_payments,
        'cars_count': len(rows),
        'customers_count': Customer.objects.count(),
        'cars': rows,
    }


@transaction.atomic
def close_month(*, account_month: Optional[str] = None) -> MonthClosing:
    """
    Close an account month.

    Records the month's figures, then resets ``balance`` and ``left`` of
    every car to zero. Snapshot and reset commit together.

    Args:
        account_month: YYYY-MM, defaults to the current month

    Returns:
        The created MonthClosing with its per-car rows

    Raises:
        LedgerValidationError: If ``account_month`` is not YYYY-MM
        DuplicateKeyError: If the month is already closed
    """
    account_month = account_month or current_account_month()
    _parse_account_month(account_month)
    if MonthClosing.objects.filter(account_month=account_month).exists():
        raise DuplicateKeyError(f"Account month already closed: {account_month}")

    cars = Car.objects.order_by('car_name')
    if getattr(settings, 'LEDGER_LOCK_BALANCE_ROWS', False):
        cars = cars.select_for_update()
    cars = list(cars)

    figures = month_figures(account_month, cars=cars)
    closing = MonthClosing(
        account_month=account_month,
        total_balance=figures['total_balance'],
        total_left=figures['total_left'],
        car_payments=figures['car_payments'],
        profit=figures['profit'],
        cars_count=figures['cars_count'],
        customers_count=figures['customers_count'],
    )
    try:
        with transaction.atomic():
            closing.save(force_insert=True)
    except IntegrityError as e:
        raise DuplicateKeyError(f"Account month already closed: {account_month}") from e

    CarClosing.objects.bulk_create([
        CarClosing(
            closing=closing,
            car_id=row['car_id'],
            car_name=row['car_name'],
            balance=row['balance'],
            left=row['left'],
            payments=row['payments'],
        )
        for row in figures['cars']
    ])

    reset = Car.objects.filter(pk__in=[car.pk for car in cars]).update(
        balance=ZERO,
        left=ZERO,
        updated_at=timezone.now(),
    )

    logger.info(
        "Closed account month %s: balance %s, left %s, car payments %s, profit %s; reset %d car(s)",
        account_month, closing.total_balance, closing.total_left,
        closing.car_payments, closing.profit, reset
    )
    return closing


def list_closings(*, year: Optional[int] = None) -> QuerySet:
    """Month closings, latest month first."""
    queryset = MonthClosing.objects.prefetch_related('cars')
    if year:
        queryset = queryset.filter(account_month__startswith=f"{year}-")
    return queryset


def closed_profit_by_month(*, year: Optional[int] = None, car_id=None) -> dict:
    """
    Profit recorded by each closing, keyed by YYYY-MM.

    With ``car_id`` the figure is that car's share of the closing.
    """
    if car_id:
        rows = CarClosing.objects.filter(car_id=car_id).select_related('closing')
        if year:
            rows = rows.filter(closing__account_month__startswith=f"{year}-")
        return {row.closing.account_month: row.profit for row in rows}

    closings = MonthClosing.objects.all()
    if year:
        closings = closings.filter(account_month__startswith=f"{year}-")
    return dict(closings.values_list('account_month', 'profit'))
