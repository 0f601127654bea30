"""Domain-specific exceptions for favorites services."""


class FavoritesServiceError(Exception):
    """Base exception for favorites services."""
    pass


class FavoriteConflictError(FavoritesServiceError):
    """Raised when a concurrent toggle created the same marker first."""
    pass
