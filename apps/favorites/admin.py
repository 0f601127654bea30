# ==========================================
# apps/favorites/admin.py
# ==========================================

from django.contrib import admin
from apps.favorites.models import UserFavorite


@admin.register(UserFavorite)
class UserFavoriteAdmin(admin.ModelAdmin):
    """Admin interface for favorite markers."""

    list_display = ['user', 'resource_type', 'resource_id', 'created_at', 'deleted_at']
    list_filter = ['resource_type', 'created_at']
    search_fields = ['user__email', 'resource_id']
    readonly_fields = ['created_at']
    raw_id_fields = ['user']
    ordering = ['-created_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('user')
