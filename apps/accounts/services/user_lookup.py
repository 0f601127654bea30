"""User lookup service."""

from django.contrib.auth import get_user_model

from .exceptions import UserNotFoundError

User = get_user_model()


def get_user_by_email(*, email: str) -> User:
    """
    Find an active user by email address.

    The address is normalised the same way the user manager stores it,
    so lookups are case-insensitive.

    Args:
        email: Email address to look up

    Returns:
        The matching User

    Raises:
        UserNotFoundError: If no active user has this email
    """
    normalized = User.objects.normalize_email((email or '').strip())
    if not normalized:
        raise UserNotFoundError("Email is required")

    try:
        return User.objects.get(email=normalized, is_active=True)
    except User.DoesNotExist:
        raise UserNotFoundError(f"No user with email {normalized}")
