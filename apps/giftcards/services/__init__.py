"""
Gift cards app services layer.

The ledger is the only writer of gift card balances.
"""

from .exceptions import (
    LedgerError,
    InvalidAmountError,
    InsufficientBalanceError,
    TransactionNotFoundError,
    LedgerStorageError,
)

from .ledger import (
    parse_amount,
    create_gift_card,
    create_transaction,
    delete_transaction,
    get_current_balance,
    calculate_balance,
    recalculate_balance,
    list_transactions,
    get_total_balance,
)


__all__ = [
    # Exceptions
    'LedgerError',
    'InvalidAmountError',
    'InsufficientBalanceError',
    'TransactionNotFoundError',
    'LedgerStorageError',

    # Ledger
    'parse_amount',
    'create_gift_card',
    'create_transaction',
    'delete_transaction',
    'get_current_balance',
    'calculate_balance',
    'recalculate_balance',
    'list_transactions',
    'get_total_balance',
]
