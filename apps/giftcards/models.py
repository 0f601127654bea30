from django.conf import settings
from django.db import models
from django.db.models import Q, Sum
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


# Constraint names are matched by the ledger to recognise race-caught failures
BALANCE_CONSTRAINT_NAME = 'gift_card_balance_non_negative'
BALANCE_TRIGGER_NAME = 'check_gift_card_balance'


def default_currency():
    return settings.GIFT_CARD_DEFAULT_CURRENCY


class GiftCardStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    EXPIRED = 'expired', 'Expired'
    ARCHIVED = 'archived', 'Archived'


class GiftCard(models.Model):
    """
    Prepaid gift card with a running balance.

    ``current_balance`` is a cached value maintained by the ledger in the
    same database transaction as every transaction insert or delete:

        current_balance = initial_balance - SUM(active transaction amounts)

    The row itself is the lock unit for balance changes.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    owner = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='gift_cards'
    )

    merchant_name = models.CharField(max_length=200, blank=True)
    card_number = models.CharField(max_length=100)
    pin = models.CharField(max_length=50, blank=True)

    # Financial details
    initial_balance = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    current_balance = models.DecimalField(max_digits=10, decimal_places=2)
    currency = models.CharField(max_length=3, default=default_currency)

    expires_at = models.DateField(null=True, blank=True)
    status = models.CharField(
        max_length=20,
        choices=GiftCardStatus.choices,
        default=GiftCardStatus.ACTIVE
    )
    notes = models.TextField(blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'gift_cards'
        constraints = [
            models.CheckConstraint(
                condition=Q(current_balance__gte=0),
                name=BALANCE_CONSTRAINT_NAME
            ),
            models.CheckConstraint(
                condition=Q(initial_balance__gt=0),
                name='gift_card_initial_balance_positive'
            ),
        ]
        indexes = [
            models.Index(fields=['owner', 'created_at'], name='gift_cards_owner_created_idx'),
            models.Index(fields=['status'], name='gift_cards_status_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.merchant_name or 'Gift card'} {self.card_number} ({self.current_balance} {self.currency})"

    def calculate_balance(self):
        """Balance derived from transaction history, ignoring the cached field."""
        spent = self.transactions.active().aggregate(
            total=Sum('amount')
        )['total'] or Decimal('0.00')
        return self.initial_balance - spent


class GiftCardShare(models.Model):
    """Grant of access to a gift card with per-capability flags."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    gift_card = models.ForeignKey(GiftCard, on_delete=models.CASCADE, related_name='shares')
    shared_with = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='gift_card_shares'
    )

    # Capabilities
    can_edit = models.BooleanField(default=False)
    can_delete = models.BooleanField(default=False)
    can_edit_transactions = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'gift_card_shares'
        constraints = [
            models.UniqueConstraint(
                fields=['gift_card', 'shared_with'],
                name='unique_gift_card_share'
            ),
        ]
        indexes = [
            models.Index(fields=['shared_with', 'created_at'], name='gc_shares_user_created_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.gift_card} shared with {self.shared_with}"


class GiftCardTransactionQuerySet(models.QuerySet):

    def active(self):
        return self.filter(deleted_at__isnull=True)


class GiftCardTransaction(models.Model):
    """
    Single debit against a gift card.

    Lifecycle: Active (deleted_at is NULL) -> Deleted (terminal).
    Rows are never edited after creation.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    gift_card = models.ForeignKey(
        GiftCard,
        on_delete=models.CASCADE,
        related_name='transactions'
    )
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    description = models.TextField(blank=True)
    transaction_date = models.DateTimeField()
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='gift_card_transactions'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    objects = GiftCardTransactionQuerySet.as_manager()

    class Meta:
        db_table = 'gift_card_transactions'
        constraints = [
            models.CheckConstraint(
                condition=Q(amount__gt=0),
                name='gift_card_transaction_amount_positive'
            ),
        ]
        indexes = [
            models.Index(fields=['gift_card', 'deleted_at'], name='gc_txn_card_deleted_idx'),
            models.Index(fields=['gift_card', 'transaction_date'], name='gc_txn_card_date_idx'),
        ]
        ordering = ['-transaction_date', '-created_at']

    def __str__(self):
        return f"-{self.amount} on {self.gift_card_id} ({self.transaction_date:%Y-%m-%d})"

    @property
    def is_deleted(self):
        return self.deleted_at is not None
