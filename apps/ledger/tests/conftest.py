import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.ledger.models import Car, Employee, Customer, Item, EmployeeCategory


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
    """Create and return a car with empty balances."""
    return Car.objects.create(
        car_name='Truck 7',
        number_plate='KA-7777',
        driver_name='Bo',
        helper_name='Ali',
    )


@pytest.fixture
def employee(db):
    """Create and return a driver with a balance of 100."""
    return Employee.objects.create(
        employee_name='Bo',
        phone_number='0700000001',
        category=EmployeeCategory.DRIVER,
        balance=Decimal('100.00'),
    )


@pytest.fixture
def customer(db):
    """Create and return a customer with a zero balance."""
    return Customer.objects.create(
        customer_name='Acme',
        phone_number='0700000002',
    )


@pytest.fixture
def item(db):
    """Create and return a catalog item."""
    return Item.objects.create(
        item_name='Sand (ton)',
        price=Decimal('25.00'),
        driver_price=Decimal('3.00'),
        helper_price=Decimal('1.50'),
    )
