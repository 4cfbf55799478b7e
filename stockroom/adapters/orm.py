"""
Stockroom ORM Adapters — stores backed by the Django ORM.

Default implementations of ProductStore, UnitStore and LedgerLog.

Concurrency:
    - Quantity changes are single UPDATE statements with F() expressions
    - The outgoing decrement carries ``quantity >= n`` in its WHERE clause
    - Unit checkout carries ``status = 'in'`` in its WHERE clause
    - atomic() is transaction.atomic(), so ledger entries roll back with
      the mutation they describe

Database errors are re-raised as StockError('STORE_UNAVAILABLE').
"""

from __future__ import annotations

import functools
import logging
from typing import Any

from django.db import DatabaseError, transaction
from django.db.models import F
from django.utils import timezone

from stockroom.exceptions import StockError
from stockroom.models.movement import Movement
from stockroom.models.product import Product
from stockroom.models.unit import Unit
from stockroom.protocols.ledger import MovementRecord

logger = logging.getLogger(__name__)


def _store_call(method):
    """Translate database failures into STORE_UNAVAILABLE."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except DatabaseError as e:
            logger.error(
                "store.unavailable",
                extra={"operation": method.__qualname__, "error": str(e)},
            )
            raise StockError(
                'STORE_UNAVAILABLE',
                operation=method.__qualname__,
                reason=str(e),
            ) from e

    return wrapper


class OrmProductStore:
    """ProductStore on the Product model."""

    @_store_call
    def get(self, key: str) -> Product | None:
        return Product.objects.filter(pk=key).first()

    @_store_call
    def find_by_field(self, field: str, value: Any) -> Product | None:
        return Product.objects.filter(**{field: value}).order_by('pk').first()

    @_store_call
    def put(self, key: str, fields: dict[str, Any]) -> tuple[Product, bool]:
        return Product.objects.get_or_create(key=key, defaults=fields)

    @_store_call
    def atomic_increment(self, key: str, field: str, delta: int, **stamp: Any) -> int | None:
        updated = Product.objects.filter(pk=key).update(
            **{field: F(field) + delta},
            updated_at=timezone.now(),
            **stamp,
        )
        if not updated:
            return None
        return Product.objects.filter(pk=key).values_list(field, flat=True).get()

    @_store_call
    def decrement_if_sufficient(self, key: str, field: str, amount: int, **stamp: Any) -> int | None:
        updated = Product.objects.filter(
            pk=key, **{f"{field}__gte": amount}
        ).update(
            **{field: F(field) - amount},
            updated_at=timezone.now(),
            **stamp,
        )
        if not updated:
            return None
        return Product.objects.filter(pk=key).values_list(field, flat=True).get()

    def atomic(self):
        return transaction.atomic()


class OrmUnitStore:
    """UnitStore on the Unit model."""

    @_store_call
    def get(self, serial: str) -> Unit | None:
        return Unit.objects.select_related('product').filter(pk=serial).first()

    @_store_call
    def compare_and_set_status(self, serial: str, expected: str, new: str,
                               meta: dict[str, Any] | None = None) -> bool:
        updated = Unit.objects.filter(pk=serial, status=expected).update(
            status=new,
            last_moved_at=timezone.now(),
            **(meta or {}),
        )
        return updated == 1


class OrmLedgerLog:
    """LedgerLog on the Movement model."""

    @_store_call
    def append(self, record: MovementRecord) -> int:
        counterparty = record.counterparty
        movement = Movement.objects.create(
            type=record.type,
            product_id=record.product_key,
            product_name=record.product_name,
            barcode=record.barcode,
            category=record.category,
            brand=record.brand,
            sizes=record.sizes,
            unit_serial=record.unit_serial,
            quantity=record.quantity,
            actor_id=record.actor.id,
            actor_label=record.actor.label,
            client_name=counterparty.name if counterparty else None,
            client_address=(counterparty.address or None) if counterparty else None,
            supplier_name=record.supplier_name,
            note=record.note,
            metadata=record.metadata,
            timestamp=record.timestamp or timezone.now(),
        )
        return movement.pk
