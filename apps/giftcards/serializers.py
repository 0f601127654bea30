from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer
from .models import GiftCard, GiftCardTransaction


class GiftCardBalanceSerializer(serializers.ModelSerializer):
    """Balance view of a gift card."""

    class Meta:
        model = GiftCard
        fields = [
            'id',
            'merchant_name',
            'initial_balance',
            'current_balance',
            'currency',
            'updated_at',
        ]
        read_only_fields = fields


class GiftCardTransactionSerializer(serializers.ModelSerializer):
    """Serializer for gift card transactions."""

    created_by = UserMinimalSerializer(read_only=True)

    class Meta:
        model = GiftCardTransaction
        fields = [
            'id',
            'gift_card',
            'amount',
            'description',
            'transaction_date',
            'created_by',
            'created_at',
        ]
        read_only_fields = fields


class GiftCardTransactionCreateSerializer(serializers.Serializer):
    """
    Input for a new transaction.

    Positivity and balance checks are done by the ledger.
    """

    amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    transaction_date = serializers.DateTimeField(required=False, allow_null=True, default=None)


class InsufficientBalanceResponseSerializer(serializers.Serializer):
    error = serializers.CharField()
    available = serializers.DecimalField(max_digits=10, decimal_places=2)
    requested = serializers.DecimalField(max_digits=10, decimal_places=2)
    currency = serializers.CharField()


class TotalBalanceSerializer(serializers.Serializer):
    currency = serializers.CharField()
    total_balance = serializers.DecimalField(max_digits=12, decimal_places=2)


class TotalBalancesSerializer(serializers.Serializer):
    """Owned gift card balances, one entry per currency."""
    totals = TotalBalanceSerializer(many=True)
