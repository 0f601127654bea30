from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer
from apps.sharing.services import ShareCapabilities


class PermissionsSerializer(serializers.Serializer):
    """Permission set of the current user on one resource."""

    is_owner = serializers.BooleanField(read_only=True)
    can_view = serializers.BooleanField(read_only=True)
    can_edit = serializers.BooleanField(read_only=True)
    can_delete = serializers.BooleanField(read_only=True)
    can_edit_transactions = serializers.BooleanField(read_only=True)


class ShareSerializer(serializers.Serializer):
    """
    Share of any resource kind.

    Capability bits a share table doesn't have are reported as False.
    """

    id = serializers.UUIDField(read_only=True)
    shared_with = UserMinimalSerializer(read_only=True)
    can_edit = serializers.SerializerMethodField()
    can_delete = serializers.SerializerMethodField()
    can_edit_transactions = serializers.SerializerMethodField()
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)

    def _capabilities(self, obj):
        kind = self.context.get('kind')
        capabilities = ShareCapabilities.from_share(obj)
        return capabilities.for_kind(kind) if kind else capabilities

    def get_can_edit(self, obj) -> bool:
        return self._capabilities(obj).can_edit

    def get_can_delete(self, obj) -> bool:
        return self._capabilities(obj).can_delete

    def get_can_edit_transactions(self, obj) -> bool:
        return self._capabilities(obj).can_edit_transactions


class ShareCapabilitiesInputSerializer(serializers.Serializer):
    """Capability bits sent when creating or updating a share."""

    can_edit = serializers.BooleanField(required=False, default=False)
    can_delete = serializers.BooleanField(required=False, default=False)
    can_edit_transactions = serializers.BooleanField(required=False, default=False)


class ShareCreateSerializer(ShareCapabilitiesInputSerializer):
    """Input for sharing a resource with another user by email."""

    email = serializers.EmailField()

    def validate_email(self, value):
        return value.strip().lower()


class TransferOwnershipSerializer(serializers.Serializer):
    """Input for handing a resource over to another user."""

    email = serializers.EmailField()

    def validate_email(self, value):
        return value.strip().lower()


class OwnershipSerializer(serializers.Serializer):
    """Resource id and its (new) owner."""

    id = serializers.UUIDField(read_only=True)
    kind = serializers.CharField(read_only=True)
    owner = UserMinimalSerializer(read_only=True)
