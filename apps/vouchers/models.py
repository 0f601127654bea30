from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class VoucherType(models.TextChoices):
    PERCENTAGE = 'percentage', 'Percentage'
    FIXED_AMOUNT = 'fixed_amount', 'Fixed amount'
    POINTS_MULTIPLIER = 'points_multiplier', 'Points multiplier'


class UsageLimitType(models.TextChoices):
    SINGLE_USE = 'single_use', 'Single use'
    ONE_PER_CUSTOMER = 'one_per_customer', 'One per customer'
    MULTIPLE_USE_WITH_CARD = 'multiple_use_with_card', 'Multiple use with card'
    MULTIPLE_USE_WITHOUT_CARD = 'multiple_use_without_card', 'Multiple use without card'
    UNLIMITED = 'unlimited', 'Unlimited'


class Voucher(models.Model):
    """Discount voucher. Read-only for everyone but its owner."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    owner = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='vouchers'
    )

    merchant_name = models.CharField(max_length=200, blank=True)
    code = models.CharField(max_length=100)
    voucher_type = models.CharField(max_length=30, choices=VoucherType.choices)
    value = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    description = models.TextField(blank=True)
    min_purchase_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00')
    )

    # Validity window
    valid_from = models.DateField()
    valid_until = models.DateField()

    usage_limit_type = models.CharField(
        max_length=30,
        choices=UsageLimitType.choices,
        default=UsageLimitType.SINGLE_USE
    )
    barcode_type = models.CharField(max_length=20, default='CODE128')

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'vouchers'
        indexes = [
            models.Index(fields=['owner', 'created_at'], name='vouchers_owner_created_idx'),
            models.Index(fields=['valid_until'], name='vouchers_valid_until_idx'),
        ]
        ordering = ['valid_until', '-created_at']

    def __str__(self):
        return f"{self.merchant_name or 'Voucher'} - {self.code}"


class VoucherShare(models.Model):
    """
    Grant of read-only access to a voucher.

    The capability columns exist for parity with the other share tables
    but are never honoured: a shared voucher can never be edited or
    deleted by the recipient, whatever is stored here.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    voucher = models.ForeignKey(Voucher, on_delete=models.CASCADE, related_name='shares')
    shared_with = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='voucher_shares'
    )

    can_edit = models.BooleanField(default=False)
    can_delete = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'voucher_shares'
        constraints = [
            models.UniqueConstraint(
                fields=['voucher', 'shared_with'],
                name='unique_voucher_share'
            ),
        ]
        indexes = [
            models.Index(fields=['shared_with', 'created_at'], name='voucher_shares_user_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.voucher} shared with {self.shared_with}"
