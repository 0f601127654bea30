"""
Sharing app services layer.

Access resolution, the permission model and share management for
cards, vouchers and gift cards.
"""

from .exceptions import (
    SharingServiceError,
    ResourceNotFoundError,
    AccessDeniedError,
    MissingCapabilityError,
    ShareNotFoundError,
    ShareAlreadyExistsError,
    CannotShareWithOwnerError,
    InvalidShareOperationError,
    CannotTransferToSelfError,
)

from .permission_resolution import (
    Permissions,
    ShareCapabilities,
    resolve_permissions,
)

from .access_resolution import (
    check_access,
    check_card_access,
    check_voucher_access,
    check_gift_card_access,
    require_permission,
    get_resource,
    resolve_access,
)

from .share_management import (
    create_share,
    update_share,
    revoke_share,
    get_share,
    list_shares,
    list_shared_with,
    get_shared_users,
    transfer_ownership,
)


__all__ = [
    # Exceptions
    'SharingServiceError',
    'ResourceNotFoundError',
    'AccessDeniedError',
    'MissingCapabilityError',
    'ShareNotFoundError',
    'ShareAlreadyExistsError',
    'CannotShareWithOwnerError',
    'InvalidShareOperationError',
    'CannotTransferToSelfError',

    # Permission model
    'Permissions',
    'ShareCapabilities',
    'resolve_permissions',

    # Access resolution
    'check_access',
    'check_card_access',
    'check_voucher_access',
    'check_gift_card_access',
    'require_permission',
    'get_resource',
    'resolve_access',

    # Share management
    'create_share',
    'update_share',
    'revoke_share',
    'get_share',
    'list_shares',
    'list_shared_with',
    'get_shared_users',
    'transfer_ownership',
]
