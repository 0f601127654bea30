from django.core.serializers.json import DjangoJSONEncoder
from django.db import models
import uuid


class AuditAction(models.TextChoices):
    CREATE = 'create', 'Create'
    UPDATE = 'update', 'Update'
    DELETE = 'delete', 'Delete'


class AuditLog(models.Model):
    """Append-only record of a change made to a resource, with a data snapshot."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='audit_logs'
    )
    action = models.CharField(max_length=20, choices=AuditAction.choices, db_index=True)
    resource_type = models.CharField(max_length=50, db_index=True)
    resource_id = models.UUIDField(db_index=True)
    resource_data = models.JSONField(encoder=DjangoJSONEncoder, default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'audit_logs'
        indexes = [
            models.Index(fields=['resource_type', 'resource_id'], name='audit_logs_resource_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.action} {self.resource_type} {self.resource_id}"
