"""Services for favorites business logic."""

from .exceptions import (
    FavoritesServiceError,
    FavoriteConflictError,
)
from .favorite_management import (
    toggle_favorite,
    get_favorite_state,
    is_favorite,
    list_favorites,
    get_favorite_resources,
)

__all__ = [
    # Exceptions
    'FavoritesServiceError',
    'FavoriteConflictError',
    # Services
    'toggle_favorite',
    'get_favorite_state',
    'is_favorite',
    'list_favorites',
    'get_favorite_resources',
]
