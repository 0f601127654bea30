"""
Domain-specific exceptions for sharing and access resolution.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class SharingServiceError(Exception):
    """Base exception for all sharing service errors."""
    pass


class ResourceNotFoundError(SharingServiceError):
    """Raised when a card, voucher or gift card does not exist."""
    pass


class AccessDeniedError(SharingServiceError):
    """Raised when a user is authenticated but not allowed to act on a resource."""
    pass


class ShareNotFoundError(SharingServiceError):
    """Raised when a share does not exist."""
    pass


class ShareAlreadyExistsError(SharingServiceError):
    """Raised when the resource is already shared with the target user."""
    pass


class CannotShareWithOwnerError(SharingServiceError):
    """Raised when the target user already owns the resource."""
    pass


class InvalidShareOperationError(SharingServiceError):
    """Raised when an operation is not supported for the resource kind."""
    pass


class CannotTransferToSelfError(SharingServiceError):
    """Raised when the owner tries to transfer a resource to themselves."""
    pass


class MissingCapabilityError(AccessDeniedError):
    """Raised when a user can view a resource but lacks a specific capability."""

    def __init__(self, capability, message=None):
        self.capability = capability
        super().__init__(message or f"You don't have permission to perform this action ({capability})")
