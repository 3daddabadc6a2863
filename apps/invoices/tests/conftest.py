import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.invoices.models import PaymentMethod
from apps.invoices.services import create_invoice_flow
from apps.ledger.models import Car, Customer, Item


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
    return Car.objects.create(car_name='Truck 7', number_plate='KA-7777')


@pytest.fixture
def customer(db):
    """Create and return a customer with a zero balance."""
    return Customer.objects.create(customer_name='Acme')


@pytest.fixture
def other_customer(db):
    """Create and return a second customer."""
    return Customer.objects.create(customer_name='Beta Ltd')


@pytest.fixture
def item(db):
    """Create and return an item priced at 25.00."""
    return Item.objects.create(item_name='Sand (ton)', price=Decimal('25.00'))


@pytest.fixture
def other_item(db):
    """Create and return an item priced at 40.00."""
    return Item.objects.create(item_name='Gravel (ton)', price=Decimal('40.00'))


@pytest.fixture
def credit_invoice(car, customer, item):
    """
    Invoice INV-001 for the car with one cash line of 20.00 and one credit
    line of 50.00 for the customer, 50.00 left unpaid.
    """
    invoice, _ = create_invoice_flow(
        invoice_no='INV-001',
        car_id=car.id,
        invoice_date=date(2024, 5, 1),
        lines=[
            {
                'item_id': item.id,
                'quantity': Decimal('1'),
                'price': Decimal('20.00'),
                'payment_method': PaymentMethod.CASH,
            },
            {
                'item_id': item.id,
                'customer_id': customer.id,
                'quantity': Decimal('2'),
                'price': Decimal('25.00'),
                'left_amount': Decimal('50.00'),
                'payment_method': PaymentMethod.CREDIT,
            },
        ],
    )
    car.refresh_from_db()
    customer.refresh_from_db()
    return invoice
