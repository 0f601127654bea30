"""
Access resolver.

Loads a resource and the caller's share row, then asks the permission
model what the caller may do. Read-only; nothing is cached between calls.
"""

from uuid import UUID

from django.core.exceptions import ValidationError

from apps.accounts.models import User
from apps.sharing.resources import ResourceKind, get_resource_type

from .exceptions import ResourceNotFoundError, AccessDeniedError, MissingCapabilityError
from .permission_resolution import Permissions, resolve_permissions


def get_resource(*, kind: str, resource_id: UUID):
    """
    Fetch a resource row by kind and id.

    Raises:
        ResourceNotFoundError: If the resource doesn't exist
    """
    resource_type = get_resource_type(kind)
    model = resource_type.model
    try:
        return model.objects.get(id=resource_id)
    except (model.DoesNotExist, ValidationError, ValueError):
        raise ResourceNotFoundError(f"{resource_type.label} with ID {resource_id} not found")


def get_share_for_user(*, kind: str, resource, user: User):
    """Return the share row granting ``user`` access to ``resource``, or None."""
    resource_type = get_resource_type(kind)
    return (
        resource_type.share_model.objects
        .filter(**{resource_type.share_field: resource, 'shared_with': user})
        .first()
    )


def resolve_access(*, kind: str, user: User, resource) -> Permissions:
    """
    Permissions of ``user`` on an already loaded resource.

    Raises:
        AccessDeniedError: If the user can't view the resource
    """
    is_owner = resource.owner_id is not None and resource.owner_id == user.id

    share = None
    if not is_owner:
        share = get_share_for_user(kind=kind, resource=resource, user=user)

    permissions = resolve_permissions(kind, is_owner=is_owner, share=share)
    if not permissions.can_view:
        raise AccessDeniedError(
            f"You don't have access to this {get_resource_type(kind).label.lower()}"
        )
    return permissions


def check_access(kind: str, *, user: User, resource_id: UUID) -> Permissions:
    """
    Resolve what ``user`` may do with one resource.

    Args:
        kind: ResourceKind value
        user: Authenticated user
        resource_id: UUID of the card, voucher or gift card

    Returns:
        Permissions with ``can_view`` True

    Raises:
        ResourceNotFoundError: If the resource doesn't exist
        AccessDeniedError: If the user is neither owner nor share recipient
    """
    resource = get_resource(kind=kind, resource_id=resource_id)
    return resolve_access(kind=kind, user=user, resource=resource)


def check_card_access(*, user: User, card_id: UUID) -> Permissions:
    return check_access(ResourceKind.CARD, user=user, resource_id=card_id)


def check_voucher_access(*, user: User, voucher_id: UUID) -> Permissions:
    return check_access(ResourceKind.VOUCHER, user=user, resource_id=voucher_id)


def check_gift_card_access(*, user: User, gift_card_id: UUID) -> Permissions:
    return check_access(ResourceKind.GIFT_CARD, user=user, resource_id=gift_card_id)


def require_permission(permissions: Permissions, capability: str) -> None:
    """
    Raise MissingCapabilityError unless ``capability`` is granted.

    Args:
        permissions: Result of a previous access check
        capability: One of 'can_view', 'can_edit', 'can_delete',
            'can_edit_transactions' or 'is_owner'
    """
    if not permissions.allows(capability):
        raise MissingCapabilityError(capability)
