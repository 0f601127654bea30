from django.db import models
import uuid


class BarcodeType(models.TextChoices):
    CODE128 = 'CODE128', 'Code 128'
    EAN13 = 'EAN13', 'EAN-13'
    QR = 'QR', 'QR code'


class Card(models.Model):
    """Loyalty card, owned by at most one user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Nullable: imported cards may have no owner yet
    owner = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='cards'
    )

    merchant_name = models.CharField(max_length=200, blank=True)
    program = models.CharField(max_length=200)
    card_number = models.CharField(max_length=100)
    barcode_type = models.CharField(
        max_length=20,
        choices=BarcodeType.choices,
        default=BarcodeType.CODE128
    )
    status = models.CharField(max_length=20, default='active')
    notes = models.TextField(blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'cards'
        indexes = [
            models.Index(fields=['owner', 'created_at'], name='cards_owner_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.program} ({self.card_number})"


class CardShare(models.Model):
    """Grant of access to a card for another user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    card = models.ForeignKey(Card, on_delete=models.CASCADE, related_name='shares')
    shared_with = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='card_shares'
    )

    # Capabilities
    can_edit = models.BooleanField(default=False)
    can_delete = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'card_shares'
        constraints = [
            models.UniqueConstraint(
                fields=['card', 'shared_with'],
                name='unique_card_share'
            ),
        ]
        indexes = [
            models.Index(fields=['shared_with', 'created_at'], name='card_shares_user_created_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.card} shared with {self.shared_with}"
