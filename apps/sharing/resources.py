"""
Resource kinds and their storage layout.

Every shareable resource kind is described once here; the access resolver,
share store and favorites all switch on ``ResourceKind`` and look up the
models through ``get_resource_type``.
"""

from dataclasses import dataclass

from django.apps import apps
from django.db import models


class ResourceKind(models.TextChoices):
    CARD = 'card', 'Card'
    VOUCHER = 'voucher', 'Voucher'
    GIFT_CARD = 'gift_card', 'Gift card'


@dataclass(frozen=True)
class ResourceType:
    """Storage description of one resource kind."""

    kind: str
    model_label: str
    share_model_label: str
    # Name of the FK on the share model pointing at the resource
    share_field: str
    # Capability columns honoured on the share model
    capability_fields: tuple

    @property
    def model(self):
        return apps.get_model(self.model_label)

    @property
    def share_model(self):
        return apps.get_model(self.share_model_label)

    @property
    def label(self):
        return ResourceKind(self.kind).label


RESOURCE_TYPES = {
    ResourceKind.CARD: ResourceType(
        kind=ResourceKind.CARD,
        model_label='cards.Card',
        share_model_label='cards.CardShare',
        share_field='card',
        capability_fields=('can_edit', 'can_delete'),
    ),
    ResourceKind.VOUCHER: ResourceType(
        kind=ResourceKind.VOUCHER,
        model_label='vouchers.Voucher',
        share_model_label='vouchers.VoucherShare',
        share_field='voucher',
        capability_fields=(),
    ),
    ResourceKind.GIFT_CARD: ResourceType(
        kind=ResourceKind.GIFT_CARD,
        model_label='giftcards.GiftCard',
        share_model_label='giftcards.GiftCardShare',
        share_field='gift_card',
        capability_fields=('can_edit', 'can_delete', 'can_edit_transactions'),
    ),
}


def get_resource_type(kind):
    """
    Return the ResourceType for a kind value.

    Raises:
        ValueError: If kind is not a known resource kind
    """
    try:
        return RESOURCE_TYPES[ResourceKind(kind)]
    except ValueError:
        raise ValueError(
            f"Unknown resource kind {kind!r}. Must be one of: {list(ResourceKind.values)}"
        )
