"""
Favorite management service.

A favorite marker is Absent, Active or SoftDeleted. Toggling moves
Absent -> Active, Active -> SoftDeleted and SoftDeleted -> Active.
"""

import logging
from typing import List, Optional
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.favorites.models import UserFavorite, FavoriteState
from apps.sharing.resources import ResourceKind, get_resource_type
from apps.sharing.services import check_access

from .exceptions import FavoriteConflictError

logger = logging.getLogger(__name__)


def _marker(*, user, kind, resource_id, lock=False) -> Optional[UserFavorite]:
    queryset = UserFavorite.objects.filter(
        user=user,
        resource_type=ResourceKind(kind),
        resource_id=resource_id,
    )
    if lock:
        queryset = queryset.select_for_update()
    return queryset.first()


@transaction.atomic
def toggle_favorite(*, user: User, kind: str, resource_id: UUID) -> bool:
    """
    Flip the favorite marker of ``user`` on a resource.

    Args:
        user: User toggling the favorite
        kind: ResourceKind value
        resource_id: UUID of the resource

    Returns:
        True if the resource is now a favorite, False otherwise

    Raises:
        ResourceNotFoundError: If the resource doesn't exist
        AccessDeniedError: If the user can't view the resource
        FavoriteConflictError: If a concurrent toggle created the marker first
    """
    check_access(kind, user=user, resource_id=resource_id)

    favorite = _marker(user=user, kind=kind, resource_id=resource_id, lock=True)

    if favorite is None:
        try:
            with transaction.atomic():
                UserFavorite.objects.create(
                    user=user,
                    resource_type=ResourceKind(kind),
                    resource_id=resource_id,
                )
        except IntegrityError:
            raise FavoriteConflictError("Favorite was changed concurrently, try again")
        favorited = True
    elif favorite.deleted_at is not None:
        favorite.deleted_at = None
        favorite.save(update_fields=['deleted_at'])
        favorited = True
    else:
        favorite.deleted_at = timezone.now()
        favorite.save(update_fields=['deleted_at'])
        favorited = False

    logger.debug(
        "Favorite toggled: user=%s kind=%s resource=%s favorited=%s",
        user.id, kind, resource_id, favorited,
    )
    return favorited


def get_favorite_state(*, user: User, kind: str, resource_id: UUID) -> FavoriteState:
    favorite = _marker(user=user, kind=kind, resource_id=resource_id)
    if favorite is None:
        return FavoriteState.ABSENT
    return favorite.state


def is_favorite(*, user: User, kind: str, resource_id: UUID) -> bool:
    return get_favorite_state(
        user=user, kind=kind, resource_id=resource_id
    ) == FavoriteState.ACTIVE


def list_favorites(*, user: User, kind: Optional[str] = None) -> QuerySet:
    """Active favorite markers of a user, newest first."""
    queryset = UserFavorite.objects.active().filter(user=user)
    if kind is not None:
        queryset = queryset.filter(resource_type=ResourceKind(kind))
    return queryset


def get_favorite_resources(*, user: User, kind: str) -> List:
    """
    Favorited resources of one kind that the user can still view.

    Markers pointing at deleted resources, or at resources whose share
    has since been revoked, are skipped.
    """
    resource_type = get_resource_type(kind)
    resource_ids = list(
        list_favorites(user=user, kind=kind).values_list('resource_id', flat=True)
    )
    if not resource_ids:
        return []

    resources = resource_type.model.objects.filter(id__in=resource_ids)
    share_filter = {
        f'{resource_type.share_field}__in': resources,
        'shared_with': user,
    }
    shared_ids = set(
        resource_type.share_model.objects
        .filter(**share_filter)
        .values_list(f'{resource_type.share_field}_id', flat=True)
    )
    return [
        resource for resource in resources
        if resource.owner_id == user.id or resource.id in shared_ids
    ]
