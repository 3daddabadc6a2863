"""
Service layer unit tests for month closings.

Tests cover:
- Profit from car balances, unpaid remainders and car pay-outs
- Snapshot rows and car resets
- Rejecting repeated and malformed months
- Rollback of the reset when the snapshot cannot be written
"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import patch

from apps.closings.models import CarClosing, MonthClosing
from apps.closings.services import (
    car_payments_by_car,
    close_month,
    closed_profit_by_month,
    month_figures,
)
from apps.ledger.models import Car
from apps.ledger.services.exceptions import DuplicateKeyError, LedgerValidationError


# =============================================================================
# Figures Tests
# =============================================================================

@pytest.mark.django_db
class TestMonthFigures:
    """Tests for month_figures and car_payments_by_car."""

    def test_car_payments_use_account_month_or_date(self, may_books):
        payments = car_payments_by_car('2024-05')

        assert payments == {
            may_books['truck'].id: Decimal('15.00'),
            may_books['van'].id: Decimal('10.00'),
        }
        assert car_payments_by_car('2024-04') == {may_books['truck'].id: Decimal('5.00')}

    def test_figures(self, may_books):
        figures = month_figures('2024-05')

        assert figures['total_balance'] == Decimal('120.00')
        assert figures['total_left'] == Decimal('30.00')
        assert figures['car_payments'] == Decimal('25.00')
        assert figures['profit'] == Decimal('65.00')
        assert figures['cars_count'] == 2
        assert figures['customers_count'] == 1
        assert [row['car_name'] for row in figures['cars']] == ['Truck 7', 'Van 2']
        assert figures['cars'][0]['profit'] == Decimal('35.00')

    def test_figures_write_nothing(self, may_books):
        month_figures('2024-05')

        truck = Car.objects.get(id=may_books['truck'].id)
        assert truck.balance == Decimal('80.00')
        assert not MonthClosing.objects.exists()

    def test_figures_default_to_current_month(self, truck):
        figures = month_figures()

        assert figures['account_month'] == date.today().strftime('%Y-%m')
        assert figures['profit'] == Decimal('70.00')

    def test_invalid_month_rejected(self, db):
        with pytest.raises(LedgerValidationError):
            month_figures('2024-13')


# =============================================================================
# Closing Tests
# =============================================================================

@pytest.mark.django_db
class TestCloseMonth:
    """Tests for close_month."""

    def test_close_records_snapshot(self, may_books):
        closing = close_month(account_month='2024-05')

        assert closing.account_month == '2024-05'
        assert closing.total_balance == Decimal('120.00')
        assert closing.total_left == Decimal('30.00')
        assert closing.car_payments == Decimal('25.00')
        assert closing.profit == Decimal('65.00')
        assert closing.cars_count == 2
        assert closing.customers_count == 1

        rows = {row.car_name: row for row in closing.cars.all()}
        assert rows['Truck 7'].balance == Decimal('80.00')
        assert rows['Truck 7'].left == Decimal('30.00')
        assert rows['Truck 7'].payments == Decimal('15.00')
        assert rows['Van 2'].profit == Decimal('30.00')

    def test_close_resets_cars(self, may_books):
        close_month(account_month='2024-05')

        for car in Car.objects.all():
            assert car.balance == Decimal('0.00')
            assert car.left == Decimal('0.00')

    def test_close_month_twice_rejected(self, may_books):
        close_month(account_month='2024-05')

        with pytest.raises(DuplicateKeyError):
            close_month(account_month='2024-05')

        assert MonthClosing.objects.count() == 1

    def test_close_invalid_month(self, truck):
        with pytest.raises(LedgerValidationError):
            close_month(account_month='May 2024')

        truck.refresh_from_db()
        assert truck.balance == Decimal('100.00')

    def test_close_without_cars(self, db):
        closing = close_month(account_month='2024-05')

        assert closing.profit == Decimal('0.00')
        assert closing.cars_count == 0

    def test_negative_profit_is_kept(self, truck):
        Car.objects.filter(id=truck.id).update(left=Decimal('150.00'))

        closing = close_month(account_month='2024-05')

        assert closing.profit == Decimal('-50.00')

    def test_failed_snapshot_keeps_car_balances(self, may_books):
        with patch.object(CarClosing.objects, 'bulk_create', side_effect=RuntimeError('disk full')):
            with pytest.raises(RuntimeError):
                close_month(account_month='2024-05')

        truck = Car.objects.get(id=may_books['truck'].id)
        assert truck.balance == Decimal('80.00')
        assert truck.left == Decimal('30.00')
        assert not MonthClosing.objects.exists()

    def test_closed_profit_by_month(self, may_books):
        close_month(account_month='2024-05')

        assert closed_profit_by_month(year=2024) == {'2024-05': Decimal('65.00')}
        assert closed_profit_by_month(year=2023) == {}
        assert closed_profit_by_month(year=2024, car_id=may_books['van'].id) == {'2024-05': Decimal('30.00')}
