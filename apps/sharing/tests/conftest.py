import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User
from apps.cards.models import Card, CardShare
from apps.vouchers.models import Voucher, VoucherShare, VoucherType
from apps.giftcards.models import GiftCard, GiftCardShare


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
    """Create and return the owner of the shared resources."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='Resource Owner',
    )


@pytest.fixture
def recipient(db):
    """Create and return a user resources get shared with."""
    return User.objects.create_user(
        email='recipient@example.com',
        password='TestPass123!',
        display_name='Share Recipient',
    )


@pytest.fixture
def stranger(db):
    """Create and return a user with no relation to any resource."""
    return User.objects.create_user(
        email='stranger@example.com',
        password='TestPass123!',
        display_name='Stranger',
    )


@pytest.fixture
def card(owner):
    """Create and return a loyalty card."""
    return Card.objects.create(
        owner=owner,
        merchant_name='Coop',
        program='Supercard',
        card_number='2501234567890',
    )


@pytest.fixture
def voucher(owner):
    """Create and return a voucher."""
    return Voucher.objects.create(
        owner=owner,
        merchant_name='Migros',
        code='SPRING10',
        voucher_type=VoucherType.PERCENTAGE,
        value=Decimal('10.00'),
        valid_from=date(2026, 1, 1),
        valid_until=date(2026, 12, 31),
    )


@pytest.fixture
def gift_card(owner):
    """Create and return a gift card with 100.00 on it."""
    return GiftCard.objects.create(
        owner=owner,
        merchant_name='Manor',
        card_number='GC-0001',
        initial_balance=Decimal('100.00'),
        current_balance=Decimal('100.00'),
    )


@pytest.fixture
def card_share(card, recipient):
    """Share the card with the recipient, edit allowed."""
    return CardShare.objects.create(card=card, shared_with=recipient, can_edit=True)


@pytest.fixture
def voucher_share(voucher, recipient):
    """Share the voucher with the recipient with stray capability bits set."""
    return VoucherShare.objects.create(
        voucher=voucher,
        shared_with=recipient,
        can_edit=True,
        can_delete=True,
    )


@pytest.fixture
def gift_card_share(gift_card, recipient):
    """Share the gift card with the recipient, transactions allowed."""
    return GiftCardShare.objects.create(
        gift_card=gift_card,
        shared_with=recipient,
        can_edit_transactions=True,
    )


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
