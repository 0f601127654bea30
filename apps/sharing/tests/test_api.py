import pytest
from uuid import uuid4
from django.urls import reverse
from rest_framework import status

from apps.cards.models import CardShare
from apps.vouchers.models import VoucherShare


# =============================================================================
# Access Endpoint Tests
# =============================================================================

@pytest.mark.django_db
class TestResourcePermissions:
    """Tests for GET /api/access/{kind}/{id}/"""

    def test_owner_permissions(self, owner_client, gift_card):
        url = reverse('sharing:resource-permissions', args=['gift_card', gift_card.id])
        response = owner_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {
            'is_owner': True,
            'can_view': True,
            'can_edit': True,
            'can_delete': True,
            'can_edit_transactions': True,
        }

    def test_voucher_recipient_permissions(self, recipient_client, voucher, voucher_share):
        url = reverse('sharing:resource-permissions', args=['voucher', voucher.id])
        response = recipient_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['can_view'] is True
        assert response.data['can_edit'] is False
        assert response.data['can_delete'] is False

    def test_denied_and_missing_look_the_same(self, stranger_client, card):
        """No existence leak: both answers are an identical 404."""
        denied = stranger_client.get(
            reverse('sharing:resource-permissions', args=['card', card.id])
        )
        missing = stranger_client.get(
            reverse('sharing:resource-permissions', args=['card', uuid4()])
        )

        assert denied.status_code == status.HTTP_404_NOT_FOUND
        assert missing.status_code == status.HTTP_404_NOT_FOUND
        assert denied.data == missing.data

    def test_unknown_kind(self, owner_client, card):
        url = reverse('sharing:resource-permissions', args=['coupon', card.id])
        response = owner_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_unauthenticated(self, api_client, card):
        url = reverse('sharing:resource-permissions', args=['card', card.id])
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Share Endpoint Tests
# =============================================================================

@pytest.mark.django_db
class TestResourceShares:
    """Tests for GET/POST /api/shares/{kind}/{id}/"""

    def test_owner_lists_shares(self, owner_client, card, card_share):
        url = reverse('sharing:resource-shares', args=['card', card.id])
        response = owner_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['shared_with']['email'] == 'recipient@example.com'
        assert response.data[0]['can_edit'] is True

    def test_recipient_cannot_list_shares(self, recipient_client, card, card_share):
        url = reverse('sharing:resource-shares', args=['card', card.id])
        response = recipient_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_stranger_gets_not_found(self, stranger_client, card):
        url = reverse('sharing:resource-shares', args=['card', card.id])
        response = stranger_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_create_share(self, owner_client, gift_card, recipient):
        url = reverse('sharing:resource-shares', args=['gift_card', gift_card.id])
        data = {'email': 'recipient@example.com', 'can_edit_transactions': True}
        response = owner_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['can_edit_transactions'] is True
        assert response.data['shared_with']['id'] == str(recipient.id)

    def test_create_voucher_share_ignores_bits(self, owner_client, voucher, recipient):
        url = reverse('sharing:resource-shares', args=['voucher', voucher.id])
        data = {'email': recipient.email, 'can_edit': True, 'can_delete': True}
        response = owner_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['can_edit'] is False
        share = VoucherShare.objects.get(voucher=voucher)
        assert share.can_edit is False

    def test_create_duplicate_share_conflict(self, owner_client, card, card_share, recipient):
        url = reverse('sharing:resource-shares', args=['card', card.id])
        response = owner_client.post(url, {'email': recipient.email}, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert 'error' in response.data

    def test_create_share_with_owner(self, owner_client, card, owner):
        url = reverse('sharing:resource-shares', args=['card', card.id])
        response = owner_client.post(url, {'email': owner.email}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_share_unknown_user(self, owner_client, card):
        url = reverse('sharing:resource-shares', args=['card', card.id])
        response = owner_client.post(url, {'email': 'ghost@example.com'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_share_invalid_email(self, owner_client, card):
        url = reverse('sharing:resource-shares', args=['card', card.id])
        response = owner_client.post(url, {'email': 'not-an-email'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestShareDetail:
    """Tests for PATCH/DELETE /api/shares/{kind}/share/{share_id}/"""

    def test_update_card_share(self, owner_client, card_share):
        url = reverse('sharing:share-detail', args=['card', card_share.id])
        response = owner_client.patch(url, {'can_delete': True}, format='json')

        assert response.status_code == status.HTTP_200_OK
        card_share.refresh_from_db()
        assert card_share.can_delete is True
        # Omitted bits are reset
        assert card_share.can_edit is False

    def test_update_voucher_share_rejected(self, owner_client, voucher_share):
        url = reverse('sharing:share-detail', args=['voucher', voucher_share.id])
        response = owner_client.patch(url, {'can_edit': True}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_recipient_cannot_update(self, recipient_client, card_share):
        url = reverse('sharing:share-detail', args=['card', card_share.id])
        response = recipient_client.patch(url, {'can_delete': True}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_stranger_cannot_see_share(self, stranger_client, card_share):
        url = reverse('sharing:share-detail', args=['card', card_share.id])
        response = stranger_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert CardShare.objects.filter(id=card_share.id).exists()

    def test_revoke_share(self, owner_client, card_share):
        url = reverse('sharing:share-detail', args=['card', card_share.id])
        response = owner_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not CardShare.objects.filter(id=card_share.id).exists()

    def test_revoke_missing_share(self, owner_client):
        url = reverse('sharing:share-detail', args=['card', uuid4()])
        response = owner_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_hidden_and_missing_shares_look_the_same(self, owner_client, stranger_client, card_share):
        hidden = stranger_client.delete(
            reverse('sharing:share-detail', args=['card', card_share.id])
        )
        missing = owner_client.delete(
            reverse('sharing:share-detail', args=['card', uuid4()])
        )

        assert hidden.status_code == missing.status_code == status.HTTP_404_NOT_FOUND
        assert hidden.data == missing.data == {'error': 'Share not found'}


@pytest.mark.django_db
class TestResourceTransfer:
    """Tests for POST /api/shares/{kind}/{id}/transfer/"""

    def test_owner_transfers_card(self, owner_client, card, card_share, stranger, recipient_client):
        url = reverse('sharing:resource-transfer', args=['card', card.id])
        response = owner_client.post(url, {'email': stranger.email}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['owner']['id'] == str(stranger.id)
        assert response.data['kind'] == 'card'
        assert not CardShare.objects.filter(card=card).exists()

        access_url = reverse('sharing:resource-permissions', args=['card', card.id])
        assert recipient_client.get(access_url).status_code == status.HTTP_404_NOT_FOUND
        assert owner_client.get(access_url).status_code == status.HTTP_404_NOT_FOUND

    def test_recipient_forbidden(self, recipient_client, card, card_share, stranger):
        url = reverse('sharing:resource-transfer', args=['card', card.id])
        response = recipient_client.post(url, {'email': stranger.email}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert CardShare.objects.filter(card=card).exists()

    def test_stranger_gets_not_found(self, stranger_client, card, recipient):
        url = reverse('sharing:resource-transfer', args=['card', card.id])
        response = stranger_client.post(url, {'email': recipient.email}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'error': 'Card not found'}

    def test_transfer_to_self(self, owner_client, card, owner):
        url = reverse('sharing:resource-transfer', args=['card', card.id])
        response = owner_client.post(url, {'email': owner.email}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_new_owner(self, owner_client, voucher):
        url = reverse('sharing:resource-transfer', args=['voucher', voucher.id])
        response = owner_client.post(url, {'email': 'ghost@example.com'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_kind(self, owner_client, card, stranger):
        url = reverse('sharing:resource-transfer', args=['coupon', card.id])
        response = owner_client.post(url, {'email': stranger.email}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestSharedUsers:
    """Tests for GET /api/shares/users/"""

    def test_lists_shared_users(self, owner_client, card_share):
        url = reverse('sharing:shared-users')
        response = owner_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [u['email'] for u in response.data] == ['recipient@example.com']

    def test_search_filters(self, owner_client, card_share):
        url = reverse('sharing:shared-users')
        response = owner_client.get(url, {'search': 'nomatch'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data == []
