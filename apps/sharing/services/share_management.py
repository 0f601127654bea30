"""
Share management service.

Creates, updates, revokes and lists shares for cards, vouchers and
gift cards. All three share tables are handled through the resource
registry, so the rules below apply uniformly:

- a resource cannot be shared with its owner
- a (resource, user) pair can be shared only once
- voucher shares never carry capability bits
- transferring ownership removes every share of the resource
"""

import logging
from typing import List, Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction, IntegrityError
from django.db.models import Q, QuerySet

from apps.accounts.models import User
from apps.accounts.services import get_user_by_email
from apps.audit import services as audit
from apps.audit.models import AuditAction
from apps.sharing.resources import ResourceKind, RESOURCE_TYPES, get_resource_type

from .access_resolution import get_resource, resolve_access, require_permission
from .exceptions import (
    ShareNotFoundError,
    ShareAlreadyExistsError,
    CannotShareWithOwnerError,
    InvalidShareOperationError,
    CannotTransferToSelfError,
    ResourceNotFoundError,
)
from .permission_resolution import ShareCapabilities

logger = logging.getLogger(__name__)


def _audit_resource_type(resource_type):
    return resource_type.share_model._meta.db_table


def _capability_values(resource_type, capabilities):
    """Column values for the share row; unsupported bits are dropped."""
    if capabilities is None:
        capabilities = ShareCapabilities()
    elif isinstance(capabilities, dict):
        capabilities = ShareCapabilities(**capabilities)

    allowed = capabilities.for_kind(resource_type.kind).as_dict()
    return {field: allowed[field] for field in resource_type.capability_fields}


def create_share(
    *,
    kind: str,
    resource_id: UUID,
    email: str,
    capabilities=None,
    created_by: Optional[User] = None
):
    """
    Share a resource with the user registered under ``email``.

    Args:
        kind: ResourceKind value
        resource_id: UUID of the resource being shared
        email: Email of the recipient
        capabilities: ShareCapabilities or dict of capability bits
        created_by: User performing the share (for the audit log)

    Returns:
        Created share instance

    Raises:
        UserNotFoundError: If no active user has this email
        ResourceNotFoundError: If the resource doesn't exist
        CannotShareWithOwnerError: If the recipient owns the resource
        ShareAlreadyExistsError: If the resource is already shared with the recipient
    """
    resource_type = get_resource_type(kind)
    recipient = get_user_by_email(email=email)
    resource = get_resource(kind=kind, resource_id=resource_id)

    if resource.owner_id == recipient.id:
        raise CannotShareWithOwnerError("Cannot share with the owner")

    share_model = resource_type.share_model
    lookup = {resource_type.share_field: resource, 'shared_with': recipient}

    if share_model.objects.filter(**lookup).exists():
        raise ShareAlreadyExistsError(f"Already shared with {recipient.email}")

    try:
        with transaction.atomic():
            share = share_model.objects.create(
                **lookup,
                **_capability_values(resource_type, capabilities),
            )
    except IntegrityError:
        # Unique constraint caught a concurrent duplicate
        raise ShareAlreadyExistsError(f"Already shared with {recipient.email}")

    logger.info(
        "Share created: kind=%s resource=%s recipient=%s",
        resource_type.kind, resource.id, recipient.id,
    )
    audit.record(
        AuditAction.CREATE,
        _audit_resource_type(resource_type),
        share.id,
        acting_user=created_by,
        snapshot=audit.snapshot_of(share),
    )
    return share


def get_share(*, kind: str, share_id: UUID):
    """
    Fetch a share by ID.

    Raises:
        ShareNotFoundError: If the share doesn't exist
    """
    share_model = get_resource_type(kind).share_model
    try:
        return (
            share_model.objects
            .select_related('shared_with')
            .get(id=share_id)
        )
    except (share_model.DoesNotExist, ValidationError, ValueError):
        raise ShareNotFoundError(f"Share with ID {share_id} not found")


@transaction.atomic
def update_share(
    *,
    kind: str,
    share_id: UUID,
    capabilities,
    updated_by: Optional[User] = None
):
    """
    Replace the capability bits of a card or gift card share.

    The caller must already have checked that the acting user owns the
    shared resource.

    Raises:
        InvalidShareOperationError: For voucher shares, which are read-only
        ShareNotFoundError: If the share doesn't exist
    """
    resource_type = get_resource_type(kind)
    if resource_type.kind == ResourceKind.VOUCHER:
        raise InvalidShareOperationError("Voucher shares are read-only and cannot be updated")

    share_model = resource_type.share_model
    try:
        share = share_model.objects.select_for_update().get(id=share_id)
    except (share_model.DoesNotExist, ValidationError, ValueError):
        raise ShareNotFoundError(f"Share with ID {share_id} not found")

    values = _capability_values(resource_type, capabilities)
    for field, value in values.items():
        setattr(share, field, value)
    share.save(update_fields=[*values.keys(), 'updated_at'])

    audit.record(
        AuditAction.UPDATE,
        _audit_resource_type(resource_type),
        share.id,
        acting_user=updated_by,
        snapshot=audit.snapshot_of(share),
    )
    return share


@transaction.atomic
def revoke_share(*, kind: str, share_id: UUID, revoked_by: Optional[User] = None) -> None:
    """
    Delete a share.

    The audit entry keeps a snapshot of the share as it was before deletion.

    Raises:
        ShareNotFoundError: If the share doesn't exist
    """
    resource_type = get_resource_type(kind)
    share_model = resource_type.share_model
    try:
        share = share_model.objects.select_for_update().get(id=share_id)
    except (share_model.DoesNotExist, ValidationError, ValueError):
        raise ShareNotFoundError(f"Share with ID {share_id} not found")

    snapshot = audit.snapshot_of(share)
    deleted_id = share.id
    share.delete()

    logger.info("Share revoked: kind=%s share=%s", resource_type.kind, deleted_id)
    audit.record(
        AuditAction.DELETE,
        _audit_resource_type(resource_type),
        deleted_id,
        acting_user=revoked_by,
        snapshot=snapshot,
    )


def list_shares(*, kind: str, resource_id: UUID) -> QuerySet:
    """Shares of one resource, oldest first."""
    resource_type = get_resource_type(kind)
    return (
        resource_type.share_model.objects
        .filter(**{f'{resource_type.share_field}_id': resource_id})
        .select_related('shared_with')
        .order_by('created_at')
    )


def list_shared_with(*, kind: str, user: User) -> QuerySet:
    """Resources of one kind that have been shared with ``user``."""
    resource_type = get_resource_type(kind)
    share_ids = (
        resource_type.share_model.objects
        .filter(shared_with=user)
        .values(f'{resource_type.share_field}_id')
    )
    return resource_type.model.objects.filter(id__in=share_ids)


def get_shared_users(*, owner: User, search: str = '') -> List[User]:
    """
    Users that ``owner`` has shared at least one resource with.

    Used for share-form autocomplete. Results are distinct and ordered
    by email.

    Args:
        owner: User who owns the shared resources
        search: Optional case-insensitive filter on email or display name
    """
    user_filter = Q()
    for resource_type in RESOURCE_TYPES.values():
        related_name = resource_type.share_model._meta.get_field('shared_with').remote_field.related_name
        user_filter |= Q(**{f'{related_name}__{resource_type.share_field}__owner': owner})

    users = User.objects.filter(user_filter).exclude(id=owner.id)

    search = (search or '').strip()
    if search:
        users = users.filter(
            Q(email__icontains=search) | Q(display_name__icontains=search)
        )

    return list(users.distinct().order_by('email'))


@transaction.atomic
def transfer_ownership(
    *,
    kind: str,
    resource_id: UUID,
    new_owner_email: str,
    acting_user: User
):
    """
    Hand a resource over to the user registered under ``new_owner_email``.

    Only the current owner may transfer; share recipients can't, whatever
    their capability bits. Every share of the resource is deleted, so the
    new owner starts without any.

    Args:
        kind: ResourceKind value
        resource_id: UUID of the resource being transferred
        new_owner_email: Email of the new owner
        acting_user: User performing the transfer

    Returns:
        The updated resource

    Raises:
        ResourceNotFoundError: If the resource doesn't exist
        AccessDeniedError: If the acting user can't view the resource
        MissingCapabilityError: If the acting user is not the owner
        UserNotFoundError: If no active user has this email
        CannotTransferToSelfError: If the new owner is the acting user
    """
    resource_type = get_resource_type(kind)
    model = resource_type.model
    try:
        resource = model.objects.select_for_update().get(id=resource_id)
    except (model.DoesNotExist, ValidationError, ValueError):
        raise ResourceNotFoundError(f"{resource_type.label} with ID {resource_id} not found")

    permissions = resolve_access(kind=kind, user=acting_user, resource=resource)
    require_permission(permissions, 'is_owner')

    new_owner = get_user_by_email(email=new_owner_email)
    if new_owner.id == acting_user.id:
        raise CannotTransferToSelfError("Cannot transfer to yourself")

    previous_owner_id = resource.owner_id
    resource.owner = new_owner
    resource.save(update_fields=['owner', 'updated_at'])

    removed, _ = (
        resource_type.share_model.objects
        .filter(**{resource_type.share_field: resource})
        .delete()
    )

    logger.info(
        "Ownership transferred: kind=%s resource=%s from=%s to=%s shares_removed=%s",
        resource_type.kind, resource.id, previous_owner_id, new_owner.id, removed,
    )
    snapshot = audit.snapshot_of(resource)
    snapshot['previous_owner'] = str(previous_owner_id)
    audit.record(
        AuditAction.UPDATE,
        model._meta.db_table,
        resource.id,
        acting_user=acting_user,
        snapshot=snapshot,
    )
    return resource
