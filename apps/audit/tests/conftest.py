import pytest

from apps.accounts.models import User
from apps.cards.models import Card


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        display_name='Test User',
    )


@pytest.fixture
def card(user):
    """Create and return a card owned by the test user."""
    return Card.objects.create(owner=user, program='Supercard', card_number='2501')
