import pytest
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User


# =============================================================================
# Token Tests
# =============================================================================

@pytest.mark.django_db
class TestTokenObtain:
    """Tests for POST /api/auth/token/"""

    def test_token_success(self, api_client, user):
        """Valid credentials return an access/refresh pair."""
        url = reverse('users:token-obtain')
        data = {
            'email': user.email,
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data
        assert 'refresh' in response.data

    def test_token_wrong_password(self, api_client, user):
        """Wrong password is rejected."""
        url = reverse('users:token-obtain')
        data = {
            'email': user.email,
            'password': 'WrongPassword123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_token_inactive_user(self, api_client, user_inactive):
        """Inactive users cannot obtain tokens."""
        url = reverse('users:token-obtain')
        data = {
            'email': user_inactive.email,
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Current User Tests
# =============================================================================

@pytest.mark.django_db
class TestGetCurrentUser:
    """Tests for GET /api/auth/user/"""

    def test_get_current_user(self, authenticated_client, user):
        """Get current authenticated user profile."""
        url = reverse('users:current-user')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == user.email
        assert response.data['display_name'] == user.display_name
        assert 'id' in response.data

    def test_get_current_user_unauthenticated(self, api_client):
        """Cannot get user profile when not authenticated."""
        url = reverse('users:current-user')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Model Tests
# =============================================================================

@pytest.mark.django_db
class TestUserModel:
    """Tests for User model methods."""

    def test_create_user(self, db):
        """Create user with create_user method."""
        user = User.objects.create_user(
            email='model@example.com',
            password='TestPass123!',
        )

        assert user.email == 'model@example.com'
        assert user.check_password('TestPass123!')
        assert user.is_active is True
        assert user.is_staff is False

    def test_create_user_lowercases_email(self, db):
        """Emails are stored lower case."""
        user = User.objects.create_user(
            email='Mixed.Case@Example.COM',
            password='TestPass123!',
        )

        assert user.email == 'mixed.case@example.com'

    def test_create_superuser(self, db):
        """Create superuser with create_superuser method."""
        user = User.objects.create_superuser(
            email='admin@example.com',
            password='AdminPass123!',
        )

        assert user.is_staff is True
        assert user.is_superuser is True

    def test_get_display_name(self, user):
        """get_display_name returns display_name or email prefix."""
        assert user.get_display_name() == 'Test User'

        user.display_name = ''
        user.save()
        assert user.get_display_name() == 'testuser'

    def test_user_str(self, user):
        """User string representation is email."""
        assert str(user) == user.email
