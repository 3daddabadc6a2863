import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole, UserStatus


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    """Create and return an administrator."""
    return User.objects.create_user(
        email='admin@example.com',
        password='AdminPass123!',
        username='admin',
        role=UserRole.ADMINISTRATOR,
    )


@pytest.fixture
def user(db):
    """Create and return an operator."""
    return User.objects.create_user(
        email='operator@example.com',
        password='TestPass123!',
        username='operator',
    )


@pytest.fixture
def user_inactive(db):
    """Create and return an inactive user."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        username='inactive',
        status=UserStatus.INACTIVE,
    )


@pytest.fixture
def admin_client(api_client, admin_user):
    """Return an API client authenticated as the administrator."""
    refresh = RefreshToken.for_user(admin_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an API client authenticated as an operator."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
