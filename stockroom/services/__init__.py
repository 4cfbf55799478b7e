"""
Stock services — modular organization of stock operations.

Re-exports the building blocks of StockLedger:
    from stockroom.services import StockMovements, StockCatalog, StockHistory
"""

from stockroom.services.catalog import StockCatalog
from stockroom.services.history import StockHistory
from stockroom.services.movements import StockMovements
from stockroom.services.resolution import NotFound, ResolvedTarget, TargetKind, resolve_target

__all__ = [
    'StockMovements',
    'StockCatalog',
    'StockHistory',
    'NotFound',
    'ResolvedTarget',
    'TargetKind',
    'resolve_target',
]
