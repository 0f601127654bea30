import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User
from apps.giftcards.models import GiftCardShare
from apps.giftcards.services import create_gift_card


def client_for(user):
    """Return an API client authenticated as ``user``."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def owner(db):
    """Create and return a gift card owner."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='Card Owner',
    )


@pytest.fixture
def recipient(db):
    """Create and return a user the gift card is shared with."""
    return User.objects.create_user(
        email='recipient@example.com',
        password='TestPass123!',
        display_name='Share Recipient',
    )


@pytest.fixture
def stranger(db):
    """Create and return a user with no access to the gift card."""
    return User.objects.create_user(
        email='stranger@example.com',
        password='TestPass123!',
        display_name='Stranger',
    )


@pytest.fixture
def gift_card(owner):
    """Create and return a gift card with 100.00 CHF on it."""
    return create_gift_card(
        owner=owner,
        merchant_name='Manor',
        card_number='GC-0001',
        initial_balance='100.00',
    )


@pytest.fixture
def spending_share(gift_card, recipient):
    """Share allowing the recipient to record transactions."""
    return GiftCardShare.objects.create(
        gift_card=gift_card,
        shared_with=recipient,
        can_edit_transactions=True,
    )


@pytest.fixture
def view_only_share(gift_card, recipient):
    """Share allowing the recipient to look only."""
    return GiftCardShare.objects.create(gift_card=gift_card, shared_with=recipient)


@pytest.fixture
def owner_client(owner):
    """Return API client authenticated as the owner."""
    return client_for(owner)


@pytest.fixture
def recipient_client(recipient):
    """Return API client authenticated as the recipient."""
    return client_for(recipient)


@pytest.fixture
def stranger_client(stranger):
    """Return API client authenticated as the stranger."""
    return client_for(stranger)
