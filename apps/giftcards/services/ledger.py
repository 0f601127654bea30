"""
Gift card balance ledger.

Every balance change goes through this module. For one gift card,
transaction creation and deletion are serialised by locking the gift
card row; the insert (or soft delete) and the balance update happen in
the same database transaction, so the cached balance always equals

    initial_balance - SUM(active transaction amounts)

The non-negative balance check in storage is the last line: if a write
slips past the application check it is rejected by the database and
reported as insufficient balance.
"""

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Dict, Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction, IntegrityError, DatabaseError
from django.db.models import F, Sum, QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.audit import services as audit
from apps.audit.models import AuditAction
from apps.giftcards.models import (
    GiftCard,
    GiftCardTransaction,
    BALANCE_CONSTRAINT_NAME,
    BALANCE_TRIGGER_NAME,
)
from apps.sharing.services import (
    ResourceNotFoundError,
    check_gift_card_access,
    require_permission,
)

from .exceptions import (
    InvalidAmountError,
    InsufficientBalanceError,
    TransactionNotFoundError,
    LedgerStorageError,
)

logger = logging.getLogger(__name__)

CENTS = Decimal('0.01')
# Largest value a DecimalField(max_digits=10, decimal_places=2) can hold
MAX_AMOUNT = Decimal('99999999.99')


def parse_amount(value) -> Decimal:
    """
    Coerce a user supplied amount to a positive Decimal with two places.

    Raises:
        InvalidAmountError: If the value is not a finite number above zero
            or does not fit the amount columns
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmountError("Amount is required")

    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidAmountError(f"Invalid amount: {value!r}")

    if not amount.is_finite():
        raise InvalidAmountError(f"Invalid amount: {value!r}")

    if amount > MAX_AMOUNT:
        raise InvalidAmountError(f"Amount must not exceed {MAX_AMOUNT}")

    try:
        amount = amount.quantize(CENTS)
    except InvalidOperation:
        raise InvalidAmountError(f"Invalid amount: {value!r}")

    if amount <= 0:
        raise InvalidAmountError("Amount must be greater than zero")
    return amount


def _lock_gift_card(gift_card_id) -> GiftCard:
    """Load and row-lock a gift card. Must be called inside an atomic block."""
    try:
        return GiftCard.objects.select_for_update().get(id=gift_card_id)
    except (GiftCard.DoesNotExist, ValidationError, ValueError):
        raise ResourceNotFoundError(f"Gift card with ID {gift_card_id} not found")


def _is_balance_constraint_violation(exc: Exception) -> bool:
    message = str(exc)
    return (
        BALANCE_CONSTRAINT_NAME in message
        or BALANCE_TRIGGER_NAME in message
        or 'Insufficient balance' in message
    )


def _fresh_balance(gift_card_id) -> Decimal:
    return GiftCard.objects.values_list('current_balance', flat=True).get(id=gift_card_id)


@transaction.atomic
def create_gift_card(
    *,
    owner: Optional[User],
    card_number: str,
    initial_balance,
    merchant_name: str = '',
    pin: str = '',
    currency: Optional[str] = None,
    expires_at: Optional[date] = None,
    notes: str = ''
) -> GiftCard:
    """
    Create a gift card. The current balance starts at the initial balance.

    Raises:
        InvalidAmountError: If initial_balance is not above zero
    """
    initial_balance = parse_amount(initial_balance)

    fields = dict(
        owner=owner,
        merchant_name=merchant_name,
        card_number=card_number,
        pin=pin,
        initial_balance=initial_balance,
        current_balance=initial_balance,
        expires_at=expires_at,
        notes=notes,
    )
    if currency:
        fields['currency'] = currency.upper()

    gift_card = GiftCard.objects.create(**fields)

    audit.record(
        AuditAction.CREATE,
        GiftCard._meta.db_table,
        gift_card.id,
        acting_user=owner,
        snapshot=audit.snapshot_of(gift_card),
    )
    return gift_card


def create_transaction(
    *,
    acting_user: User,
    gift_card_id: UUID,
    amount,
    description: str = '',
    transaction_date: Optional[datetime] = None
) -> GiftCardTransaction:
    """
    Record a debit against a gift card.

    Args:
        acting_user: User performing the debit
        gift_card_id: UUID of the gift card
        amount: Positive amount to subtract from the balance
        description: Optional free text
        transaction_date: When the purchase happened (defaults to now)

    Returns:
        Created GiftCardTransaction

    Raises:
        InvalidAmountError: If amount is not above zero
        ResourceNotFoundError: If the gift card doesn't exist
        AccessDeniedError: If the user can't edit transactions on this card
        InsufficientBalanceError: If amount exceeds the current balance
        LedgerStorageError: If the database rejects the write for another reason
    """
    amount = parse_amount(amount)

    permissions = check_gift_card_access(user=acting_user, gift_card_id=gift_card_id)
    require_permission(permissions, 'can_edit_transactions')

    with transaction.atomic():
        gift_card = _lock_gift_card(gift_card_id)

        if amount > gift_card.current_balance:
            logger.warning(
                "Insufficient balance on gift card %s: requested=%s available=%s",
                gift_card.id, amount, gift_card.current_balance,
            )
            raise InsufficientBalanceError(
                available=gift_card.current_balance,
                requested=amount,
                currency=gift_card.currency,
            )

        try:
            with transaction.atomic():
                txn = GiftCardTransaction.objects.create(
                    gift_card=gift_card,
                    amount=amount,
                    description=description or '',
                    transaction_date=transaction_date or timezone.now(),
                    created_by=acting_user,
                )
                GiftCard.objects.filter(id=gift_card.id).update(
                    current_balance=F('current_balance') - amount,
                    updated_at=timezone.now(),
                )
        except IntegrityError as e:
            if not _is_balance_constraint_violation(e):
                logger.error("Gift card transaction insert failed: %s", e)
                raise LedgerStorageError("Failed to record transaction") from e

            available = _fresh_balance(gift_card.id)
            logger.warning(
                "Race caught by balance constraint on gift card %s: requested=%s available=%s",
                gift_card.id, amount, available,
            )
            raise InsufficientBalanceError(
                available=available,
                requested=amount,
                currency=gift_card.currency,
            ) from e
        except DatabaseError as e:
            logger.error("Gift card transaction insert failed: %s", e)
            raise LedgerStorageError("Failed to record transaction") from e

    logger.info(
        "Transaction created on gift card %s: amount=%s by user %s",
        gift_card.id, amount, acting_user.id,
    )
    audit.record(
        AuditAction.CREATE,
        GiftCardTransaction._meta.db_table,
        txn.id,
        acting_user=acting_user,
        snapshot=audit.snapshot_of(txn),
    )
    return txn


def delete_transaction(
    *,
    acting_user: User,
    gift_card_id: UUID,
    transaction_id: UUID
) -> GiftCardTransaction:
    """
    Soft-delete a transaction and give its amount back to the card.

    Deleted transactions stay deleted; deleting one twice is reported as
    not found.

    Raises:
        ResourceNotFoundError: If the gift card doesn't exist
        AccessDeniedError: If the user can't edit transactions on this card
        TransactionNotFoundError: If no active transaction has this ID on this card
    """
    permissions = check_gift_card_access(user=acting_user, gift_card_id=gift_card_id)
    require_permission(permissions, 'can_edit_transactions')

    with transaction.atomic():
        gift_card = _lock_gift_card(gift_card_id)

        try:
            txn = (
                GiftCardTransaction.objects
                .active()
                .select_for_update()
                .get(id=transaction_id, gift_card=gift_card)
            )
        except (GiftCardTransaction.DoesNotExist, ValidationError, ValueError):
            raise TransactionNotFoundError(f"Transaction with ID {transaction_id} not found")

        snapshot = audit.snapshot_of(txn)
        now = timezone.now()
        try:
            txn.deleted_at = now
            txn.save(update_fields=['deleted_at'])
            GiftCard.objects.filter(id=gift_card.id).update(
                current_balance=F('current_balance') + txn.amount,
                updated_at=now,
            )
        except DatabaseError as e:
            logger.error("Gift card transaction delete failed: %s", e)
            raise LedgerStorageError("Failed to delete transaction") from e

    logger.info(
        "Transaction %s deleted on gift card %s by user %s",
        txn.id, gift_card.id, acting_user.id,
    )
    audit.record(
        AuditAction.DELETE,
        GiftCardTransaction._meta.db_table,
        txn.id,
        acting_user=acting_user,
        snapshot=snapshot,
    )
    return txn


def get_current_balance(*, gift_card_id: UUID) -> Decimal:
    """
    Cached balance of a gift card.

    Raises:
        ResourceNotFoundError: If the gift card doesn't exist
    """
    try:
        return _fresh_balance(gift_card_id)
    except (GiftCard.DoesNotExist, ValidationError, ValueError):
        raise ResourceNotFoundError(f"Gift card with ID {gift_card_id} not found")


def calculate_balance(gift_card: GiftCard) -> Decimal:
    """Balance derived from the transaction history."""
    return gift_card.calculate_balance()


@transaction.atomic
def recalculate_balance(*, gift_card_id: UUID) -> Decimal:
    """
    Rebuild the cached balance from the transaction history.

    Returns:
        The recalculated balance
    """
    gift_card = _lock_gift_card(gift_card_id)
    balance = gift_card.calculate_balance()

    if balance != gift_card.current_balance:
        logger.warning(
            "Gift card %s balance drifted: cached=%s calculated=%s",
            gift_card.id, gift_card.current_balance, balance,
        )
        GiftCard.objects.filter(id=gift_card.id).update(
            current_balance=balance,
            updated_at=timezone.now(),
        )
    return balance


def list_transactions(*, gift_card_id: UUID, include_deleted: bool = False) -> QuerySet:
    """Transactions of a gift card, newest first."""
    queryset = GiftCardTransaction.objects.filter(gift_card_id=gift_card_id)
    if not include_deleted:
        queryset = queryset.active()
    return queryset.select_related('created_by')


def get_total_balance(*, user: User) -> Dict[str, Decimal]:
    """
    Current balances of the gift cards owned by ``user``, summed per currency.

    Cards in different currencies are never added together. A user without
    gift cards gets an empty dict.
    """
    rows = (
        GiftCard.objects
        .filter(owner=user)
        .values('currency')
        .annotate(total=Sum('current_balance'))
        .order_by('currency')
    )
    return {row['currency']: row['total'] for row in rows}
