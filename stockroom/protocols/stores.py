"""
Store Protocols — interfaces the ledger needs from the database.

Stockroom defines these protocols; ``stockroom.adapters.orm`` implements
them on the Django ORM. Any implementation must provide:

- atomic numeric updates (no read-modify-write in application code)
- a conditional decrement that never takes a quantity below zero
- a compare-and-set on unit status
- a transaction context so a mutation and its ledger entry commit together

Store failures are raised as ``StockError('STORE_UNAVAILABLE')``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ContextManager, Protocol, runtime_checkable

if TYPE_CHECKING:
    from stockroom.protocols.ledger import MovementRecord


@runtime_checkable
class ProductStore(Protocol):
    """Products keyed by barcode."""

    def get(self, key: str) -> Any | None:
        """Product stored under ``key``, or None."""
        ...

    def find_by_field(self, field: str, value: Any) -> Any | None:
        """First product whose ``field`` equals ``value``, or None."""
        ...

    def put(self, key: str, fields: dict[str, Any]) -> tuple[Any, bool]:
        """
        Insert a product under ``key`` unless one already exists.

        Returns:
            (product, created)
        """
        ...

    def atomic_increment(self, key: str, field: str, delta: int, **stamp: Any) -> int | None:
        """
        Add ``delta`` to ``field`` in one statement.

        Returns:
            New value, or None when ``key`` does not exist
        """
        ...

    def decrement_if_sufficient(self, key: str, field: str, amount: int, **stamp: Any) -> int | None:
        """
        Subtract ``amount`` only if ``field >= amount``, in one statement.

        Returns:
            New value, or None when nothing was updated
        """
        ...

    def atomic(self) -> ContextManager:
        """Transaction spanning product, unit and ledger writes."""
        ...


@runtime_checkable
class UnitStore(Protocol):
    """Serialized units keyed by serial."""

    def get(self, serial: str) -> Any | None:
        ...

    def compare_and_set_status(self, serial: str, expected: str, new: str,
                               meta: dict[str, Any] | None = None) -> bool:
        """
        Move ``serial`` from ``expected`` to ``new`` status.

        Returns:
            False if the unit was not in ``expected`` status
        """
        ...


@runtime_checkable
class LedgerLog(Protocol):
    """Append-only movement log."""

    def append(self, record: MovementRecord) -> Any:
        """Write ``record`` and return its id."""
        ...
