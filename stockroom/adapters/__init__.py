"""
Stockroom Adapters.

Implementations of the store protocols.
"""

from stockroom.adapters.loader import (
    get_ledger_log,
    get_product_store,
    get_unit_store,
    reset_stores,
)

__all__ = [
    "get_ledger_log",
    "get_product_store",
    "get_unit_store",
    "reset_stores",
]
