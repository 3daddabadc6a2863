import pytest
from django.core.management import call_command
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User, UserRole, UserStatus


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, user):
        """Successfully login with valid credentials."""
        url = reverse('users:login')
        data = {
            'email': 'operator@example.com',
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK
        assert 'tokens' in response.data
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['email'] == user.email
        assert 'password' not in response.data['user']

    def test_login_updates_last_login(self, api_client, user):
        """Successful login stamps last_login."""
        url = reverse('users:login')
        api_client.post(url, {'email': user.email, 'password': 'TestPass123!'})

        user.refresh_from_db()
        assert user.last_login is not None

    def test_login_email_case_insensitive(self, api_client, user):
        """Email lookup ignores case."""
        url = reverse('users:login')
        data = {
            'email': 'OPERATOR@example.com',
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK

    def test_login_wrong_password(self, api_client, user):
        """Login fails with wrong password."""
        url = reverse('users:login')
        data = {
            'email': user.email,
            'password': 'WrongPassword!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error'] == 'Invalid email or password'

    def test_login_nonexistent_user(self, api_client):
        """Login fails for nonexistent user."""
        url = reverse('users:login')
        data = {
            'email': 'nobody@example.com',
            'password': 'SomePassword!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_inactive_user(self, api_client, user_inactive):
        """Deactivated accounts cannot login."""
        url = reverse('users:login')
        data = {
            'email': user_inactive.email,
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error'] == 'Account is deactivated'

    def test_login_missing_password(self, api_client, user):
        """Missing fields are rejected before authentication."""
        url = reverse('users:login')
        response = api_client.post(url, {'email': user.email})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Invalid input'
        assert 'password' in response.data['details']


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /api/auth/register/"""

    def test_register_success(self, admin_client):
        """Administrators can create accounts."""
        url = reverse('users:register')
        data = {
            'username': 'newop',
            'email': 'newop@example.com',
            'password': 'SecurePass123!',
            'role': UserRole.MANAGER,
        }
        response = admin_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['user']['role'] == UserRole.MANAGER
        assert response.data['user']['status'] == UserStatus.ACTIVE
        created = User.objects.get(email='newop@example.com')
        assert created.check_password('SecurePass123!')

    def test_register_default_role(self, admin_client):
        """Role defaults to Operator."""
        url = reverse('users:register')
        data = {
            'username': 'plain',
            'email': 'plain@example.com',
            'password': 'SecurePass123!',
        }
        response = admin_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['user']['role'] == UserRole.OPERATOR

    def test_register_duplicate_email(self, admin_client, user):
        """Cannot register with existing email."""
        url = reverse('users:register')
        data = {
            'username': 'someoneelse',
            'email': user.email,
            'password': 'SecurePass123!',
        }
        response = admin_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Username or email already exists'

    def test_register_duplicate_username(self, admin_client, user):
        """Cannot register with existing username."""
        url = reverse('users:register')
        data = {
            'username': user.username,
            'email': 'fresh@example.com',
            'password': 'SecurePass123!',
        }
        response = admin_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_register_short_password(self, admin_client):
        """Passwords shorter than six characters are rejected."""
        url = reverse('users:register')
        data = {
            'username': 'shorty',
            'email': 'shorty@example.com',
            'password': '123',
        }
        response = admin_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password' in response.data['details']

    def test_register_requires_administrator(self, authenticated_client):
        """Operators cannot create accounts."""
        url = reverse('users:register')
        data = {
            'username': 'sneaky',
            'email': 'sneaky@example.com',
            'password': 'SecurePass123!',
        }
        response = authenticated_client.post(url, data)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not User.objects.filter(email='sneaky@example.com').exists()

    def test_register_unauthenticated(self, api_client):
        """Anonymous requests are rejected."""
        url = reverse('users:register')
        response = api_client.post(url, {})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Token Tests
# =============================================================================

@pytest.mark.django_db
class TestTokens:
    """Tests for token verification and refresh."""

    def test_verify_returns_current_user(self, authenticated_client, user):
        """Valid bearer token returns the user."""
        url = reverse('users:verify')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert response.data['user']['email'] == user.email

    def test_verify_without_token(self, api_client):
        """Missing token is rejected."""
        url = reverse('users:verify')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_verify_with_garbage_token(self, api_client):
        """Malformed token is rejected."""
        api_client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')
        url = reverse('users:verify')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_refresh_token(self, api_client, user):
        """Refresh token yields a new access token."""
        login = api_client.post(
            reverse('users:login'),
            {'email': user.email, 'password': 'TestPass123!'},
        )
        url = reverse('token_refresh')
        response = api_client.post(url, {'refresh': login.data['tokens']['refresh']})

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data


# =============================================================================
# User Management Tests
# =============================================================================

@pytest.mark.django_db
class TestUserManagement:
    """Tests for /api/users/"""

    def test_list_users(self, admin_client, admin_user, user):
        """Administrators see every account."""
        url = reverse('users:user-list')
        response = admin_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        emails = {u['email'] for u in response.data}
        assert emails == {admin_user.email, user.email}

    def test_list_users_forbidden_for_operator(self, authenticated_client):
        """Operators cannot manage users."""
        url = reverse('users:user-list')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_retrieve_user(self, admin_client, user):
        url = reverse('users:user-detail', kwargs={'pk': user.id})
        response = admin_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['username'] == user.username

    def test_update_user_role_and_status(self, admin_client, user):
        """Administrators can change role and status."""
        url = reverse('users:user-detail', kwargs={'pk': user.id})
        data = {
            'role': UserRole.MANAGER,
            'status': UserStatus.INACTIVE,
        }
        response = admin_client.patch(url, data)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        user.refresh_from_db()
        assert user.role == UserRole.MANAGER
        assert user.is_active is False

    def test_update_password_is_hashed(self, admin_client, user):
        """A new password is stored hashed, never in plain text."""
        url = reverse('users:user-detail', kwargs={'pk': user.id})
        response = admin_client.patch(url, {'password': 'BrandNew123!'})

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.password != 'BrandNew123!'
        assert user.check_password('BrandNew123!')

    def test_update_duplicate_email(self, admin_client, admin_user, user):
        url = reverse('users:user-detail', kwargs={'pk': user.id})
        response = admin_client.patch(url, {'email': admin_user.email})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_nonexistent_user(self, admin_client):
        url = reverse('users:user-detail', kwargs={'pk': '00000000-0000-0000-0000-000000000000'})
        response = admin_client.patch(url, {'role': UserRole.MANAGER})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_user(self, admin_client, user):
        url = reverse('users:user-detail', kwargs={'pk': user.id})
        response = admin_client.delete(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert not User.objects.filter(id=user.id).exists()

    def test_cannot_delete_self(self, admin_client, admin_user):
        """Administrators cannot delete their own account."""
        url = reverse('users:user-detail', kwargs={'pk': admin_user.id})
        response = admin_client.delete(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert User.objects.filter(id=admin_user.id).exists()


# =============================================================================
# Default Administrator Tests
# =============================================================================

@pytest.mark.django_db
class TestEnsureDefaultAdmin:
    """Tests for the ensure_default_admin management command."""

    @override_settings(
        DEFAULT_ADMIN_EMAIL='boss@haype.com',
        DEFAULT_ADMIN_USERNAME='boss',
        DEFAULT_ADMIN_PASSWORD='boss-secret',
    )
    def test_creates_administrator(self):
        call_command('ensure_default_admin')

        admin = User.objects.get(email='boss@haype.com')
        assert admin.role == UserRole.ADMINISTRATOR
        assert admin.is_superuser is True
        assert admin.check_password('boss-secret')

    @override_settings(DEFAULT_ADMIN_EMAIL='admin@example.com')
    def test_existing_administrator_untouched(self, admin_user):
        call_command('ensure_default_admin')

        assert User.objects.filter(email='admin@example.com').count() == 1
        admin_user.refresh_from_db()
        assert admin_user.check_password('AdminPass123!')
