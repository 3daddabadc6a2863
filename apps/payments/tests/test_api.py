import pytest
from decimal import Decimal
from uuid import uuid4
from django.urls import reverse
from rest_framework import status
from apps.ledger.models import Customer
from apps.payments.models import Payment, PaymentType


# =============================================================================
# Receive Tests
# =============================================================================

@pytest.mark.django_db
class TestReceivePayment:
    """Tests for POST /api/payments/receive/"""

    def test_receive(self, authenticated_client, customer):
        url = reverse('payments:payment-receive')
        data = {
            'customer': str(customer.id),
            'amount': '20.00',
            'payment_date': '2024-05-02',
            'description': 'cash at the yard',
        }
        response = authenticated_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['payment_no'] == 'PYN-0001'
        customer.refresh_from_db()
        assert customer.balance == Decimal('30.00')

    def test_receive_unknown_customer(self, authenticated_client):
        url = reverse('payments:payment-receive')
        data = {
            'customer': str(uuid4()),
            'amount': '20.00',
            'payment_date': '2024-05-02',
        }
        response = authenticated_client.post(url, data)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert not Payment.objects.exists()

    def test_receive_missing_amount(self, authenticated_client, customer):
        url = reverse('payments:payment-receive')
        data = {
            'customer': str(customer.id),
            'payment_date': '2024-05-02',
        }
        response = authenticated_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'amount' in response.data['details']

    def test_receive_negative_amount(self, authenticated_client, customer):
        url = reverse('payments:payment-receive')
        data = {
            'customer': str(customer.id),
            'amount': '-5.00',
            'payment_date': '2024-05-02',
        }
        response = authenticated_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_requires_auth(self, api_client, customer):
        url = reverse('payments:payment-receive')
        response = api_client.post(url, {'customer': str(customer.id)})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Payment Out Tests
# =============================================================================

@pytest.mark.django_db
class TestPaymentOut:
    """Tests for POST /api/payments/payment-out/"""

    def test_pay_employee(self, authenticated_client, employee):
        url = reverse('payments:payment-payment-out')
        data = {
            'account_type': 'employee',
            'recipient': str(employee.id),
            'amount': '25.00',
            'payment_date': '2024-05-03',
            'account_month': '2024-04',
        }
        response = authenticated_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        employee.refresh_from_db()
        assert employee.balance == Decimal('75.00')
        payment = Payment.objects.get(id=response.data['payment_id'])
        assert payment.account_month == '2024-04'

    def test_pay_car(self, authenticated_client, car):
        url = reverse('payments:payment-payment-out')
        data = {
            'account_type': 'car',
            'recipient': str(car.id),
            'amount': '40.00',
            'payment_date': '2024-05-03',
        }
        response = authenticated_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        car.refresh_from_db()
        assert car.balance == Decimal('60.00')

    def test_bad_account_month(self, authenticated_client, employee):
        url = reverse('payments:payment-payment-out')
        data = {
            'account_type': 'employee',
            'recipient': str(employee.id),
            'amount': '25.00',
            'payment_date': '2024-05-03',
            'account_month': '2024-13',
        }
        response = authenticated_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'account_month' in response.data['details']

    def test_unknown_account_type(self, authenticated_client, customer):
        url = reverse('payments:payment-payment-out')
        data = {
            'account_type': 'customer',
            'recipient': str(customer.id),
            'amount': '25.00',
            'payment_date': '2024-05-03',
        }
        response = authenticated_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# List, Update and Delete Tests
# =============================================================================

@pytest.mark.django_db
class TestManagePayments:
    """Tests for /api/payments/ and /api/payments/{id}/"""

    def test_list_paginated_with_names(self, authenticated_client, receipt, car_payout):
        url = reverse('payments:payment-list')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2
        first, second = response.data['results']
        assert first['car_name'] == 'Truck 7'
        assert first['customer_name'] is None
        assert second['customer_name'] == 'Acme'

    def test_filter_by_type(self, authenticated_client, receipt, car_payout):
        url = reverse('payments:payment-list')
        response = authenticated_client.get(url, {'type': PaymentType.RECEIVE})

        assert response.data['count'] == 1
        assert response.data['results'][0]['id'] == str(receipt.id)

    def test_filter_invalid_range(self, authenticated_client):
        url = reverse('payments:payment-list')
        response = authenticated_client.get(url, {'date_from': '2024-06-01', 'date_to': '2024-05-01'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_retrieve_after_customer_deleted(self, authenticated_client, receipt, customer):
        Customer.objects.filter(id=customer.id).delete()

        url = reverse('payments:payment-detail', kwargs={'pk': receipt.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['customer_name'] == 'Unknown Customer'

    def test_update_applies_difference(self, authenticated_client, receipt, customer):
        url = reverse('payments:payment-detail', kwargs={'pk': receipt.id})
        response = authenticated_client.put(url, {'amount': '35.00', 'description': 'recounted'})

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(str(response.data['payment']['amount'])) == Decimal('35.00')
        assert response.data['warnings'] == []
        customer.refresh_from_db()
        assert customer.balance == Decimal('15.00')

    def test_update_requires_amount(self, authenticated_client, receipt):
        url = reverse('payments:payment-detail', kwargs={'pk': receipt.id})
        response = authenticated_client.put(url, {'description': 'no amount'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_moving_kind_rejected(self, authenticated_client, receipt, car):
        url = reverse('payments:payment-detail', kwargs={'pk': receipt.id})
        response = authenticated_client.put(url, {'amount': '20.00', 'car': str(car.id)})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_missing(self, authenticated_client):
        url = reverse('payments:payment-detail', kwargs={'pk': uuid4()})
        response = authenticated_client.put(url, {'amount': '20.00'})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_restores_balance(self, authenticated_client, receipt, customer):
        url = reverse('payments:payment-detail', kwargs={'pk': receipt.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        customer.refresh_from_db()
        assert customer.balance == Decimal('50.00')

    def test_delete_car_payout_lowers_left(self, authenticated_client, car_payout, car):
        url = reverse('payments:payment-detail', kwargs={'pk': car_payout.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_200_OK
        car.refresh_from_db()
        assert car.left == Decimal('20.00')
