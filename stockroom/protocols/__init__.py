"""
Stockroom Protocols.

Defines the store interfaces and the values exchanged with the ledger.
"""

from stockroom.protocols.ledger import (
    Actor,
    Counterparty,
    MovementMeta,
    MovementRecord,
    MovementRequest,
    MovementResult,
)
from stockroom.protocols.stores import (
    LedgerLog,
    ProductStore,
    UnitStore,
)

__all__ = [
    "Actor",
    "Counterparty",
    "MovementMeta",
    "MovementRecord",
    "MovementRequest",
    "MovementResult",
    "LedgerLog",
    "ProductStore",
    "UnitStore",
]
