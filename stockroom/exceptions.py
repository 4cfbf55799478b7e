"""
Exceptions for Stockroom.

All errors are StockError with a structured code for programmatic handling.
"""

from typing import Any


class BaseError(Exception):
    """
    Exception carrying a machine code, a human message and context data.

    Subclasses provide ``_default_messages`` keyed by code. ``code`` and
    ``message`` are positional-only so that context data may itself carry a
    ``code`` key (the scanned code).
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, /, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(f"[{code}] {self.message}")


class StockError(BaseError):
    """
    Structured exception for stock operations.

    Usage:
        try:
            movements.apply_outgoing(target, 10, actor, counterparty)
        except StockError as e:
            if e.code == 'INSUFFICIENT_STOCK':
                print(f"Only {e.available} left")

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages = {
        'INVALID_QUANTITY': 'Quantity must be a positive whole number.',
        'MISSING_COUNTERPARTY': 'Client name is required for outgoing stock.',
        'NOT_FOUND': 'No product or unit with that code. Scan again.',
        'INSUFFICIENT_STOCK': 'Not enough stock for this quantity.',
        'UNIT_ALREADY_OUT': 'This unit has already been checked out.',
        'STORE_UNAVAILABLE': 'Stock database is unavailable. Try again.',
        'PERMISSION_DENIED': 'Owner permission required.',
        'VALIDATION_ERROR': 'Invalid value.',
        'INVALID_TYPE': 'Movement type must be incoming or outgoing.',
    }

    RETRYABLE = frozenset({'STORE_UNAVAILABLE'})

    @property
    def available(self) -> int:
        """Shortcut for data['available']."""
        return self.data.get('available', 0)

    @property
    def requested(self):
        """Shortcut for data['requested']."""
        return self.data.get('requested')

    @property
    def retryable(self) -> bool:
        """Only store outages may be retried without operator action."""
        return self.code in self.RETRYABLE

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {
                k: v if isinstance(v, (int, str, bool, type(None))) else str(v)
                for k, v in self.data.items()
            }
        }
