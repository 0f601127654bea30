"""
Permission model.

Pure functions that turn ownership and share facts into a permission set.
No database access happens here.
"""

from dataclasses import dataclass

from apps.sharing.resources import ResourceKind


@dataclass(frozen=True)
class ShareCapabilities:
    """Capability bits carried by a share."""

    can_edit: bool = False
    can_delete: bool = False
    can_edit_transactions: bool = False

    @classmethod
    def from_share(cls, share):
        """Read whichever capability columns the share row has."""
        return cls(
            can_edit=bool(getattr(share, 'can_edit', False)),
            can_delete=bool(getattr(share, 'can_delete', False)),
            can_edit_transactions=bool(getattr(share, 'can_edit_transactions', False)),
        )

    def for_kind(self, kind):
        """
        Drop the bits a kind does not support.

        Vouchers are read-only when shared; only gift cards have
        transactions.
        """
        kind = ResourceKind(kind)
        if kind == ResourceKind.VOUCHER:
            return ShareCapabilities()
        if kind == ResourceKind.CARD:
            return ShareCapabilities(can_edit=self.can_edit, can_delete=self.can_delete)
        return self

    def as_dict(self):
        return {
            'can_edit': self.can_edit,
            'can_delete': self.can_delete,
            'can_edit_transactions': self.can_edit_transactions,
        }


@dataclass(frozen=True)
class Permissions:
    """What a user may do with one resource. Built fresh for every check."""

    is_owner: bool = False
    can_view: bool = False
    can_edit: bool = False
    can_delete: bool = False
    can_edit_transactions: bool = False

    @classmethod
    def denied(cls):
        return cls()

    def allows(self, capability):
        return bool(getattr(self, capability))

    def as_dict(self):
        return {
            'is_owner': self.is_owner,
            'can_view': self.can_view,
            'can_edit': self.can_edit,
            'can_delete': self.can_delete,
            'can_edit_transactions': self.can_edit_transactions,
        }


def resolve_permissions(kind: str, *, is_owner: bool, share=None) -> Permissions:
    """
    Resolve the permission set for one (user, resource) pair.

    Args:
        kind: ResourceKind of the resource
        is_owner: Whether the user owns the resource
        share: Share row or ShareCapabilities for the user, or None

    Returns:
        Permissions. When the user is neither owner nor share recipient
        every flag is False; callers decide how to report that.

    Rules:
        - Owner: everything, ``can_edit_transactions`` only for gift cards
        - Share: view, plus the share's bits; voucher shares never grant
          edit or delete, whatever the share row says
        - Otherwise: nothing
    """
    kind = ResourceKind(kind)

    if is_owner:
        return Permissions(
            is_owner=True,
            can_view=True,
            can_edit=True,
            can_delete=True,
            can_edit_transactions=(kind == ResourceKind.GIFT_CARD),
        )

    if share is None:
        return Permissions.denied()

    if not isinstance(share, ShareCapabilities):
        share = ShareCapabilities.from_share(share)

    if kind == ResourceKind.VOUCHER:
        # Hard rule, not a per-share toggle
        return Permissions(can_view=True)

    capabilities = share.for_kind(kind)
    return Permissions(
        is_owner=False,
        can_view=True,
        can_edit=capabilities.can_edit,
        can_delete=capabilities.can_delete,
        can_edit_transactions=capabilities.can_edit_transactions,
    )
