"""
Service layer tests for favorites app.

Tests cover:
- The Absent / Active / SoftDeleted toggle cycle
- Access checks before toggling
- Listing favorites
"""

import pytest
from uuid import uuid4

from apps.cards.models import CardShare
from apps.favorites.models import UserFavorite, FavoriteState
from apps.favorites.services import (
    toggle_favorite,
    get_favorite_state,
    is_favorite,
    list_favorites,
    get_favorite_resources,
)
from apps.sharing.resources import ResourceKind
from apps.sharing.services import ResourceNotFoundError, AccessDeniedError


@pytest.mark.django_db
class TestToggleFavorite:
    """Tests for toggle_favorite."""

    def test_absent_to_active(self, user, card):
        assert get_favorite_state(user=user, kind=ResourceKind.CARD, resource_id=card.id) == FavoriteState.ABSENT

        assert toggle_favorite(user=user, kind=ResourceKind.CARD, resource_id=card.id) is True

        assert get_favorite_state(user=user, kind=ResourceKind.CARD, resource_id=card.id) == FavoriteState.ACTIVE

    def test_toggle_twice_returns_to_original_state(self, user, card):
        toggle_favorite(user=user, kind=ResourceKind.CARD, resource_id=card.id)
        toggle_favorite(user=user, kind=ResourceKind.CARD, resource_id=card.id)

        assert is_favorite(user=user, kind=ResourceKind.CARD, resource_id=card.id) is False
        assert get_favorite_state(user=user, kind=ResourceKind.CARD, resource_id=card.id) == FavoriteState.SOFT_DELETED

    def test_toggle_three_times_from_absent_is_favorited(self, user, card):
        results = [
            toggle_favorite(user=user, kind=ResourceKind.CARD, resource_id=card.id)
            for _ in range(3)
        ]

        assert results == [True, False, True]
        assert is_favorite(user=user, kind=ResourceKind.CARD, resource_id=card.id) is True

    def test_restore_keeps_identity(self, user, card):
        toggle_favorite(user=user, kind=ResourceKind.CARD, resource_id=card.id)
        original = UserFavorite.objects.get(user=user, resource_id=card.id)

        toggle_favorite(user=user, kind=ResourceKind.CARD, resource_id=card.id)
        toggle_favorite(user=user, kind=ResourceKind.CARD, resource_id=card.id)

        restored = UserFavorite.objects.get(user=user, resource_id=card.id)
        assert restored.id == original.id
        assert restored.created_at == original.created_at
        assert restored.deleted_at is None
        assert UserFavorite.objects.filter(user=user).count() == 1

    def test_shared_resource_can_be_favorited(self, user, shared_card):
        assert toggle_favorite(user=user, kind=ResourceKind.CARD, resource_id=shared_card.id) is True

    def test_inaccessible_resource_denied(self, user, other_card):
        with pytest.raises(AccessDeniedError):
            toggle_favorite(user=user, kind=ResourceKind.CARD, resource_id=other_card.id)

        assert not UserFavorite.objects.exists()

    def test_missing_resource(self, user):
        with pytest.raises(ResourceNotFoundError):
            toggle_favorite(user=user, kind=ResourceKind.GIFT_CARD, resource_id=uuid4())


@pytest.mark.django_db
class TestListFavorites:
    """Tests for favorite listing helpers."""

    def test_list_only_active(self, user, card, shared_card):
        toggle_favorite(user=user, kind=ResourceKind.CARD, resource_id=card.id)
        toggle_favorite(user=user, kind=ResourceKind.CARD, resource_id=shared_card.id)
        toggle_favorite(user=user, kind=ResourceKind.CARD, resource_id=shared_card.id)

        favorites = list(list_favorites(user=user))

        assert [f.resource_id for f in favorites] == [card.id]

    def test_list_filtered_by_kind(self, user, card):
        toggle_favorite(user=user, kind=ResourceKind.CARD, resource_id=card.id)

        assert list_favorites(user=user, kind=ResourceKind.VOUCHER).count() == 0
        assert list_favorites(user=user, kind=ResourceKind.CARD).count() == 1

    def test_favorite_resources_skip_revoked_shares(self, user, card, shared_card):
        toggle_favorite(user=user, kind=ResourceKind.CARD, resource_id=card.id)
        toggle_favorite(user=user, kind=ResourceKind.CARD, resource_id=shared_card.id)

        CardShare.objects.filter(card=shared_card, shared_with=user).delete()

        assert get_favorite_resources(user=user, kind=ResourceKind.CARD) == [card]

    def test_favorite_resources_empty(self, user):
        assert get_favorite_resources(user=user, kind=ResourceKind.VOUCHER) == []
