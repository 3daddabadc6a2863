"""Services for the ledger entity store."""

from .exceptions import (
    LedgerServiceError,
    LedgerValidationError,
    EntityNotFoundError,
    DuplicateKeyError,
    ReconciliationError,
)
from .entity_store import (
    create_entity,
    get_entity,
    update_entity,
    delete_entity,
    list_entities,
    display_name,
)
from .balances import BalanceAdjuster, to_decimal

__all__ = [
    # Exceptions
    'LedgerServiceError',
    'LedgerValidationError',
    'EntityNotFoundError',
    'DuplicateKeyError',
    'ReconciliationError',
    # Services
    'create_entity',
    'get_entity',
    'update_entity',
    'delete_entity',
    'list_entities',
    'display_name',
    'BalanceAdjuster',
    'to_decimal',
]
