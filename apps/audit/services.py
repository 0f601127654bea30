"""
Audit sink.

Recording is fire-and-forget: a failure to write the audit row is logged
and swallowed so that it can never abort the operation being audited.
"""

import json
import logging

from django.core.serializers.json import DjangoJSONEncoder
from django.db import transaction
from django.forms.models import model_to_dict

from .models import AuditLog

logger = logging.getLogger(__name__)


def snapshot_of(instance):
    """
    Serialise a model instance into a JSON-safe dict.

    Foreign keys are stored as their primary key values.
    """
    data = model_to_dict(instance)
    # model_to_dict skips non-editable fields
    data['id'] = instance.pk
    for field in ('created_at', 'updated_at', 'deleted_at'):
        if hasattr(instance, field):
            data[field] = getattr(instance, field)
    return json.loads(json.dumps(data, cls=DjangoJSONEncoder))


def record(action, resource_type, resource_id, acting_user=None, snapshot=None):
    """
    Write an audit entry.

    The insert runs in its own savepoint so that a failed write does not
    poison an enclosing transaction.

    Returns:
        The created AuditLog, or None if recording failed
    """
    user = acting_user if acting_user is not None and acting_user.is_authenticated else None

    try:
        with transaction.atomic():
            return AuditLog.objects.create(
                user=user,
                action=action,
                resource_type=resource_type,
                resource_id=resource_id,
                resource_data=snapshot or {},
            )
    except Exception:
        logger.exception(
            "Audit record failed: action=%s resource_type=%s resource_id=%s",
            action, resource_type, resource_id,
        )
        return None
