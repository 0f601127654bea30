"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserNotFoundError,
)
from .user_lookup import get_user_by_email

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserNotFoundError',
    # Services
    'get_user_by_email',
]
