import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.ledger.models import Car, Customer
from apps.payments.services import pay_out


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test operator."""
    return User.objects.create_user(
        email='operator@example.com',
        password='TestPass123!',
        username='operator',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def truck(db):
    """Create and return a car with 100.00 balance and 30.00 left."""
    return Car.objects.create(
        car_name='Truck 7',
        number_plate='KA-7777',
        balance=Decimal('100.00'),
        left=Decimal('30.00'),
    )


@pytest.fixture
def van(db):
    """Create and return a car with 50.00 balance and nothing left."""
    return Car.objects.create(
        car_name='Van 2',
        number_plate='KA-0002',
        balance=Decimal('50.00'),
    )


@pytest.fixture
def may_books(truck, van):
    """
    Pay-outs around May 2024:

    - Truck 7: 15.00 booked to 2024-05 and 5.00 booked to 2024-04.
    - Van 2: 10.00 dated 2024-05-20 with no account month.

    Afterwards Truck 7 has balance 80.00 (left 30.00) and Van 2 has 40.00.
    May closes with balance 120.00, left 30.00, car payments 25.00 and
    profit 65.00.
    """
    Customer.objects.create(customer_name='Acme')
    pay_out(
        account_type='car',
        recipient_id=truck.id,
        amount=Decimal('15.00'),
        payment_date=date(2024, 5, 10),
        account_month='2024-05',
    )
    pay_out(
        account_type='car',
        recipient_id=truck.id,
        amount=Decimal('5.00'),
        payment_date=date(2024, 5, 2),
        account_month='2024-04',
    )
    pay_out(
        account_type='car',
        recipient_id=van.id,
        amount=Decimal('10.00'),
        payment_date=date(2024, 5, 20),
    )
    truck.refresh_from_db()
    van.refresh_from_db()
    return {'truck': truck, 'van': van}
