import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User
from apps.cards.models import Card, CardShare


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        display_name='Test User',
    )


@pytest.fixture
def other_user(db):
    """Create and return another user."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        display_name='Other User',
    )


@pytest.fixture
def card(user):
    """Create and return a card owned by the test user."""
    return Card.objects.create(owner=user, program='Supercard', card_number='2501')


@pytest.fixture
def other_card(other_user):
    """Create and return a card owned by the other user."""
    return Card.objects.create(owner=other_user, program='Cumulus', card_number='7777')


@pytest.fixture
def shared_card(other_card, user):
    """Share other_card with the test user."""
    CardShare.objects.create(card=other_card, shared_with=user)
    return other_card


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
