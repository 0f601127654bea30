from rest_framework import serializers
from .models import UserFavorite


class UserFavoriteSerializer(serializers.ModelSerializer):
    """Serializer for active favorite markers."""

    class Meta:
        model = UserFavorite
        fields = ['id', 'resource_type', 'resource_id', 'created_at']
        read_only_fields = fields


class FavoriteToggleResponseSerializer(serializers.Serializer):
    is_favorite = serializers.BooleanField()
