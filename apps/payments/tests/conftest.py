import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.ledger.models import Car, Employee, Customer, Item, EmployeeCategory
from apps.payments.services import receive_payment, pay_out


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
def car(db):
    """Create and return a car with 100.00 balance and 60.00 left."""
    return Car.objects.create(
        car_name='Truck 7',
        number_plate='KA-7777',
        balance=Decimal('100.00'),
        left=Decimal('60.00'),
    )


@pytest.fixture
def employee(db):
    """Create and return a driver with a balance of 100."""
    return Employee.objects.create(
        employee_name='Bo',
        category=EmployeeCategory.DRIVER,
        balance=Decimal('100.00'),
    )


@pytest.fixture
def customer(db):
    """Create and return a customer owing 50.00."""
    return Customer.objects.create(customer_name='Acme', balance=Decimal('50.00'))


@pytest.fixture
def item(db):
    """Create and return an item priced at 50.00."""
    return Item.objects.create(item_name='Sand (ton)', price=Decimal('50.00'))


@pytest.fixture
def receipt(customer):
    """A 20.00 receipt from the customer, leaving 30.00 owed."""
    payment = receive_payment(
        customer_id=customer.id,
        amount=Decimal('20.00'),
        payment_date=date(2024, 5, 2),
        description='part payment',
    )
    customer.refresh_from_db()
    return payment


@pytest.fixture
def car_payout(car):
    """A 40.00 pay-out to the car account."""
    payment = pay_out(
        account_type='car',
        recipient_id=car.id,
        amount=Decimal('40.00'),
        payment_date=date(2024, 5, 3),
        account_month='2024-05',
    )
    car.refresh_from_db()
    return payment
