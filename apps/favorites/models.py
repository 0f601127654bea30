from django.db import models
import uuid

from apps.sharing.resources import ResourceKind


class FavoriteState(models.TextChoices):
    """Three states of a (user, resource) favorite marker."""
    ACTIVE = 'active', 'Active'
    SOFT_DELETED = 'soft_deleted', 'Soft deleted'
    ABSENT = 'absent', 'Absent'


class UserFavoriteQuerySet(models.QuerySet):

    def active(self):
        return self.filter(deleted_at__isnull=True)


class UserFavorite(models.Model):
    """
    Favorite marker of one user on one card, voucher or gift card.

    Unfavoriting sets ``deleted_at`` instead of deleting the row, so a
    restored favorite keeps its id and original ``created_at``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='favorites'
    )
    resource_type = models.CharField(max_length=20, choices=ResourceKind.choices)
    resource_id = models.UUIDField()

    created_at = models.DateTimeField(auto_now_add=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    objects = UserFavoriteQuerySet.as_manager()

    class Meta:
        db_table = 'user_favorites'
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'resource_type', 'resource_id'],
                name='unique_user_favorite'
            ),
        ]
        indexes = [
            models.Index(fields=['user', 'resource_type', 'deleted_at'], name='user_favorites_lookup_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.user} ★ {self.resource_type}:{self.resource_id}"

    @property
    def state(self):
        if self.deleted_at is None:
            return FavoriteState.ACTIVE
        return FavoriteState.SOFT_DELETED
