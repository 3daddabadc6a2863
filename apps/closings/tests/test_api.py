import pytest
from decimal import Decimal
from uuid import uuid4
from django.urls import reverse
from rest_framework import status
from apps.closings.models import MonthClosing
from apps.closings.services import close_month
from apps.ledger.models import Car


# =============================================================================
# Close Month Tests
# =============================================================================

@pytest.mark.django_db
class TestCloseMonth:
    """Tests for POST /api/closings/"""

    def test_close_month(self, authenticated_client, may_books):
        url = reverse('closings:closing-list')
        response = authenticated_client.post(url, {'account_month': '2024-05'}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['account_month'] == '2024-05'
        assert Decimal(str(response.data['profit'])) == Decimal('65.00')
        assert Decimal(str(response.data['car_payments'])) == Decimal('25.00')
        assert len(response.data['cars']) == 2
        assert set(Car.objects.values_list('balance', flat=True)) == {Decimal('0.00')}

    def test_close_month_twice(self, authenticated_client, may_books):
        close_month(account_month='2024-05')

        url = reverse('closings:closing-list')
        response = authenticated_client.post(url, {'account_month': '2024-05'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'account_month' in response.data['details']

    def test_close_month_bad_format(self, authenticated_client, truck):
        url = reverse('closings:closing-list')
        response = authenticated_client.post(url, {'account_month': '05-2024'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        truck.refresh_from_db()
        assert truck.balance == Decimal('100.00')

    def test_close_month_unauthenticated(self, api_client, truck):
        url = reverse('closings:closing-list')
        response = api_client.post(url, {'account_month': '2024-05'}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert not MonthClosing.objects.exists()


# =============================================================================
# Read Tests
# =============================================================================

@pytest.mark.django_db
class TestReadClosings:
    """Tests for GET /api/closings/ and /api/closings/preview/"""

    def test_list_latest_first(self, authenticated_client, truck):
        close_month(account_month='2024-04')
        close_month(account_month='2024-05')

        url = reverse('closings:closing-list')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [row['account_month'] for row in response.data] == ['2024-05', '2024-04']

    def test_list_by_year(self, authenticated_client, truck):
        close_month(account_month='2023-12')
        close_month(account_month='2024-01')

        url = reverse('closings:closing-list')
        response = authenticated_client.get(url, {'year': 2023})

        assert [row['account_month'] for row in response.data] == ['2023-12']

    def test_retrieve(self, authenticated_client, may_books):
        closing = close_month(account_month='2024-05')

        url = reverse('closings:closing-detail', kwargs={'pk': closing.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['cars'][0]['car_name'] == 'Truck 7'
        assert Decimal(str(response.data['cars'][0]['profit'])) == Decimal('35.00')

    def test_retrieve_missing(self, authenticated_client):
        url = reverse('closings:closing-detail', kwargs={'pk': uuid4()})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_preview(self, authenticated_client, may_books):
        url = reverse('closings:closing-preview')
        response = authenticated_client.get(url, {'account_month': '2024-05'})

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(str(response.data['profit'])) == Decimal('65.00')
        assert not MonthClosing.objects.exists()
        truck = Car.objects.get(id=may_books['truck'].id)
        assert truck.balance == Decimal('80.00')

    def test_preview_bad_month(self, authenticated_client):
        url = reverse('closings:closing-preview')
        response = authenticated_client.get(url, {'account_month': '2024-00'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
