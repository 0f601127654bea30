import pytest
from django.contrib.admin.sites import site
from django.urls import reverse

from apps.accounts.admin import UserAdmin
from apps.accounts.models import User
from apps.cards.models import Card
from apps.giftcards.services import create_gift_card


@pytest.fixture
def superuser(db):
    """Create and return a superuser for the admin site."""
    return User.objects.create_superuser(
        email='admin@example.com',
        password='AdminPass123!',
    )


@pytest.fixture
def owned_resources(user):
    """Two cards and one gift card owned by ``user``."""
    Card.objects.create(owner=user, merchant_name='Coop', program='Supercard', card_number='111')
    Card.objects.create(owner=user, merchant_name='Migros', program='Cumulus', card_number='222')
    create_gift_card(owner=user, card_number='GC-1', initial_balance='10')


@pytest.mark.django_db
class TestUserAdmin:
    """Tests for the user admin."""

    def test_queryset_counts_owned_resources(self, rf, superuser, user, owned_resources):
        request = rf.get('/admin/accounts/user/')
        request.user = superuser

        row = UserAdmin(User, site).get_queryset(request).get(id=user.id)

        assert row.card_count == 2
        assert row.voucher_count == 0
        assert row.gift_card_count == 1

    def test_changelist_renders(self, client, superuser, user, owned_resources):
        client.force_login(superuser)
        response = client.get(reverse('admin:accounts_user_changelist'))

        assert response.status_code == 200
        assert user.email in response.content.decode()
