import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.invoices.models import PaymentMethod
from apps.invoices.services import create_invoice_flow
from apps.ledger.models import Car, Customer, Employee, Item, CarStatus, EntityStatus, EmployeeCategory
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
    return Car.objects.create(car_name='Truck 7', number_plate='KA-7777')


@pytest.fixture
def customer(db):
    return Customer.objects.create(customer_name='Acme')


@pytest.fixture
def item(db):
    return Item.objects.create(item_name='Sand (ton)', price=Decimal('25.00'))


@pytest.fixture
def ledger_data(car, customer, item):
    """
    Books for 2024:

    - Car "Truck 7": INV-001 on 2024-03-10 (20.00 cash + 50.00 credit to
      Acme, 50.00 left) and INV-002 on 2024-04-05 (30.00 cash).
    - A second car in maintenance with no invoices.
    - Acme pays 20.00 on 2024-03-20.
    - Truck 7 is paid out 15.00 on 2024-04-30.
    - One active and one inactive employee.
    """
    Car.objects.create(car_name='Old Van', number_plate='KA-0001', status=CarStatus.MAINTENANCE)
    Employee.objects.create(employee_name='Bo', category=EmployeeCategory.DRIVER)
    Employee.objects.create(employee_name='Ali', category=EmployeeCategory.HELPER, status=EntityStatus.INACTIVE)

    create_invoice_flow(
        invoice_no='INV-001',
        car_id=car.id,
        invoice_date=date(2024, 3, 10),
        lines=[
            {'item_id': item.id, 'price': Decimal('20.00')},
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
    create_invoice_flow(
        invoice_no='INV-002',
        car_id=car.id,
        invoice_date=date(2024, 4, 5),
        lines=[{'item_id': item.id, 'price': Decimal('30.00')}],
    )
    receive_payment(customer_id=customer.id, amount=Decimal('20.00'), payment_date=date(2024, 3, 20))
    pay_out(account_type='car', recipient_id=car.id, amount=Decimal('15.00'), payment_date=date(2024, 4, 30))

    car.refresh_from_db()
    customer.refresh_from_db()
    return {'car': car, 'customer': customer}
