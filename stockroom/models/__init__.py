"""
Stockroom Models.

Core models for stock management:
- Product: Aggregate quantity per barcode
- Unit: Individually serialized items
- Movement: Immutable ledger of changes
- MasterProduct: Canonical catalog for name suggestions
"""

from stockroom.models.enums import MovementType, Role, UnitStatus
from stockroom.models.master import MasterProduct
from stockroom.models.movement import Movement
from stockroom.models.product import Product
from stockroom.models.unit import Unit

__all__ = [
    'MovementType',
    'UnitStatus',
    'Role',
    'Product',
    'Unit',
    'Movement',
    'MasterProduct',
]
