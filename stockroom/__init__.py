"""
Django Stockroom — stock ledger for a furniture shop floor.

Staff scan a barcode or a unit serial, the ledger books the movement.

Usage:
    from stockroom import ledger, Actor, Counterparty, StockError

    ani = Actor(id="u1", label="Ani")
    ledger.apply_incoming(ledger.resolve_target("500123"), 5, ani)
    ledger.apply_outgoing(ledger.resolve_target("500123"), 2, ani, Counterparty("Jane"))
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'ledger':
        from stockroom.service import StockLedger
        return StockLedger()
    elif name == 'StockLedger':
        from stockroom.service import StockLedger
        return StockLedger
    elif name == 'StockError':
        from stockroom.exceptions import StockError
        return StockError
    elif name in ('Actor', 'Counterparty', 'MovementMeta', 'MovementRequest', 'MovementResult'):
        from stockroom.protocols import ledger as protocols
        return getattr(protocols, name)
    elif name in ('Product', 'Unit', 'Movement', 'MasterProduct',
                  'MovementType', 'UnitStatus', 'Role'):
        from stockroom import models
        return getattr(models, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'ledger',
    'StockLedger',
    'StockError',
    'Actor',
    'Counterparty',
    'MovementMeta',
    'MovementRequest',
    'MovementResult',
    'Product',
    'Unit',
    'Movement',
    'MasterProduct',
    'MovementType',
    'UnitStatus',
    'Role',
]

__version__ = '0.1.0'
