"""
Target resolution — turns a scanned code into a product or unit target.

Read-only. The order is fixed, first match wins:

    1. product stored under the code            (barcode-as-key shape)
    2. product whose ``barcode`` field is code  (barcode-as-field shape)
    3. unit with serial == code, status ``in``  (serialized items)
    4. NotFound

Step 2 only exists for records created before barcodes became keys. Once
those are migrated to the key shape it can be dropped.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from stockroom.models.enums import UnitStatus


class TargetKind(enum.Enum):
    PRODUCT = 'product'
    UNIT = 'unit'


@dataclass(frozen=True)
class ResolvedTarget:
    """A code that names a product, or a unit of a product."""

    kind: TargetKind
    product: Any
    unit: Any = None

    found = True

    @property
    def is_unit(self) -> bool:
        return self.kind is TargetKind.UNIT

    @property
    def serial(self) -> str | None:
        return self.unit.serial if self.unit is not None else None


@dataclass(frozen=True)
class NotFound:
    """A code that names nothing. A result, not an error."""

    code: str

    found = False
    kind = None


def resolve_target(code, product_store, unit_store) -> ResolvedTarget | NotFound:
    """
    Resolve a scanned or typed code.

    Args:
        code: Barcode or unit serial (surrounding whitespace is ignored)
        product_store: ProductStore
        unit_store: UnitStore

    Returns:
        ResolvedTarget or NotFound
    """
    code = str(code or '').strip()
    if not code:
        return NotFound(code)

    product = product_store.get(code)
    if product is None:
        product = product_store.find_by_field('barcode', code)
    if product is not None:
        return ResolvedTarget(kind=TargetKind.PRODUCT, product=product)

    unit = unit_store.get(code)
    if unit is not None and unit.status == UnitStatus.IN:
        owner = product_store.get(unit.product_id)
        if owner is not None:
            return ResolvedTarget(kind=TargetKind.UNIT, product=owner, unit=unit)

    return NotFound(code)
