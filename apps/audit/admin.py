from django.contrib import admin
from apps.audit.models import AuditLog


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    """Read-only admin interface for audit logs."""

    list_display = ['created_at', 'action', 'resource_type', 'resource_id', 'user']
    list_filter = ['action', 'resource_type', 'created_at']
    search_fields = ['resource_id', 'user__email']
    readonly_fields = ['id', 'user', 'action', 'resource_type', 'resource_id', 'resource_data', 'created_at']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
