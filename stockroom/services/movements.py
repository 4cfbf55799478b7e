"""
Stock movements — state-changing operations (receive, issue).

Every movement runs inside the product store's atomic() block: the
quantity update, the unit transition and the ledger entry commit together
or not at all. Rejections raise StockError before anything is written.
"""

import logging
from decimal import Decimal, InvalidOperation

from stockroom.exceptions import StockError
from stockroom.models.enums import MovementType, UnitStatus
from stockroom.protocols.ledger import (
    Actor,
    Counterparty,
    MovementMeta,
    MovementRecord,
    MovementResult,
)
from stockroom.services.resolution import NotFound, ResolvedTarget, TargetKind

logger = logging.getLogger('stockroom')

# Catalog fields a new product may be seeded with on first receipt
CATALOG_FIELDS = ('name', 'brand', 'category', 'sizes', 'material', 'colors')
OWNER_ONLY_FIELDS = ('price', 'buy_price', 'sell_price')

# Upper bound of the quantity column (signed 32-bit integer)
MAX_QUANTITY = 2**31 - 1


def coerce_quantity(value) -> int:
    """
    Parse a positive whole quantity.

    Accepts ints, integral floats/Decimals and digit strings ("3", " 3 ")
    up to MAX_QUANTITY.

    Raises:
        StockError('INVALID_QUANTITY')
    """
    if isinstance(value, bool) or value is None:
        raise StockError('INVALID_QUANTITY', requested=value)
    if isinstance(value, str):
        value = value.strip()
    try:
        number = Decimal(value) if not isinstance(value, float) else Decimal(repr(value))
    except (InvalidOperation, ValueError, TypeError):
        raise StockError('INVALID_QUANTITY', requested=value)
    if (not number.is_finite() or number != number.to_integral_value()
            or not 0 < number <= MAX_QUANTITY):
        raise StockError('INVALID_QUANTITY', requested=value)
    return int(number)


def check_owner_fields(fields: dict | None, actor: Actor) -> None:
    """Reject owner-only fields carrying a value from a non-owner actor."""
    if not fields or actor.is_owner:
        return
    offending = [f for f in OWNER_ONLY_FIELDS if fields.get(f) not in (None, '')]
    if offending:
        raise StockError('PERMISSION_DENIED', fields=', '.join(offending), actor=actor.id)


def _stamp(actor: Actor) -> dict:
    return {'updated_by_id': actor.id, 'updated_by_label': actor.label}


class StockMovements:
    """State-changing stock movement methods over injected stores."""

    def __init__(self, product_store, unit_store, ledger_log):
        self.products = product_store
        self.units = unit_store
        self.log = ledger_log

    def receive(self, target: ResolvedTarget | NotFound, quantity, actor: Actor,
                meta: MovementMeta | None = None,
                catalog: dict | None = None) -> MovementResult:
        """
        Stock entry.

        Unknown codes (NotFound) create the product with ``quantity`` on
        hand, seeded from ``catalog``. Known products are incremented.
        A unit target adds to its owning product, and so does a NotFound
        code naming a unit that is no longer in stock: serials never become
        product keys.

        Raises:
            StockError('INVALID_QUANTITY'): If quantity is not a positive integer
            StockError('PERMISSION_DENIED'): If a non-owner seeds prices
            StockError('NOT_FOUND'): If the product vanished mid-way

        Concurrency:
            - Runs under the store's atomic()
            - put() is insert-if-absent; a concurrent creator turns the
              insert into an F() increment
        """
        qty = coerce_quantity(quantity)
        check_owner_fields(catalog, actor)
        if not target.found and not target.code:
            raise StockError('VALIDATION_ERROR', 'Scan or type a barcode.', field='code')
        if not target.found:
            unit = self.units.get(target.code)
            if unit is not None:
                owner = self.products.get(unit.product_id)
                if owner is None:
                    raise StockError('NOT_FOUND', code=target.code)
                target = ResolvedTarget(kind=TargetKind.PRODUCT, product=owner)
        meta = meta or MovementMeta()

        with self.products.atomic():
            if target.found:
                product = target.product
                new_quantity = self.products.atomic_increment(
                    product.pk, 'quantity', qty, **_stamp(actor)
                )
                if new_quantity is None:
                    raise StockError('NOT_FOUND', code=product.pk)
            else:
                product, created = self.products.put(
                    target.code, self._new_product_fields(target.code, qty, actor, catalog)
                )
                if created:
                    new_quantity = qty
                else:
                    new_quantity = self.products.atomic_increment(
                        product.pk, 'quantity', qty, **_stamp(actor)
                    )

            movement_id = self._append(MovementRecord(
                type=MovementType.INCOMING,
                product_key=product.pk,
                product_name=product.name,
                barcode=product.barcode or product.pk,
                category=product.category or None,
                brand=product.brand or None,
                sizes=product.sizes or None,
                quantity=qty,
                actor=actor,
                note=meta.note or None,
                supplier_name=meta.supplier_name or None,
                metadata=dict(meta.extra),
            ))

        logger.info(
            "stock.incoming",
            extra={
                "product": product.pk,
                "qty": qty,
                "new_quantity": new_quantity,
                "actor": actor.id,
                "movement_id": movement_id,
            },
        )
        return MovementResult.success(new_quantity, movement_id)

    def issue(self, target: ResolvedTarget | NotFound, quantity, actor: Actor,
              counterparty: Counterparty | None,
              meta: MovementMeta | None = None) -> MovementResult:
        """
        Stock exit.

        A unit target always moves exactly one item, whatever ``quantity``
        says, and checks the unit out.

        Raises:
            StockError('INVALID_QUANTITY'): If quantity is not a positive integer
            StockError('MISSING_COUNTERPARTY'): If no client name is given
            StockError('NOT_FOUND'): If the target resolves to nothing
            StockError('INSUFFICIENT_STOCK'): If quantity > on hand
            StockError('UNIT_ALREADY_OUT'): If the unit was checked out meanwhile

        Concurrency:
            - Runs under the store's atomic()
            - Conditional decrement: WHERE quantity >= n, so two concurrent
              issues can never both pass against a stale read
            - Unit checkout is a compare-and-set taken before the
              decrement; a failed decrement rolls it back
        """
        is_unit = bool(target.found and target.is_unit)
        qty = 1 if is_unit else coerce_quantity(quantity)

        client_name = (counterparty.name if counterparty else '') or ''
        client_name = client_name.strip()
        if not client_name:
            raise StockError('MISSING_COUNTERPARTY')
        counterparty = Counterparty(
            name=client_name,
            address=(counterparty.address or '').strip() or None,
        )

        if not target.found:
            raise StockError('NOT_FOUND', code=target.code)

        meta = meta or MovementMeta()
        product = target.product

        with self.products.atomic():
            if is_unit:
                checked_out = self.units.compare_and_set_status(
                    target.serial,
                    UnitStatus.IN,
                    UnitStatus.OUT,
                    meta={
                        'last_moved_by_id': actor.id,
                        'last_moved_by_label': actor.label,
                        'moved_note': f"Outgoing → {client_name}"[:255],
                    },
                )
                if not checked_out:
                    raise StockError('UNIT_ALREADY_OUT', serial=target.serial)

            new_quantity = self.products.decrement_if_sufficient(
                product.pk, 'quantity', qty, **_stamp(actor)
            )
            if new_quantity is None:
                current = self.products.get(product.pk)
                if current is None:
                    raise StockError('NOT_FOUND', code=product.pk)
                raise StockError(
                    'INSUFFICIENT_STOCK',
                    available=current.quantity,
                    requested=qty,
                )

            movement_id = self._append(MovementRecord(
                type=MovementType.OUTGOING,
                product_key=product.pk,
                product_name=product.name,
                barcode=product.barcode or product.pk,
                category=product.category or None,
                brand=product.brand or None,
                sizes=product.sizes or None,
                unit_serial=target.serial if is_unit else None,
                quantity=qty,
                actor=actor,
                counterparty=counterparty,
                note=meta.note or None,
                metadata=dict(meta.extra),
            ))

        logger.info(
            "stock.outgoing",
            extra={
                "product": product.pk,
                "qty": qty,
                "new_quantity": new_quantity,
                "unit_serial": target.serial if is_unit else None,
                "client": client_name,
                "actor": actor.id,
                "movement_id": movement_id,
            },
        )
        return MovementResult.success(new_quantity, movement_id)

    # ══════════════════════════════════════════════════════════════
    # INTERNAL
    # ══════════════════════════════════════════════════════════════

    def _append(self, record: MovementRecord):
        try:
            return self.log.append(record)
        except StockError:
            logger.error(
                "stock.ledger_append_failed",
                extra={
                    "product": record.product_key,
                    "type": str(record.type),
                    "qty": record.quantity,
                },
            )
            raise

    @staticmethod
    def _new_product_fields(code: str, qty: int, actor: Actor, catalog: dict | None) -> dict:
        catalog = catalog or {}
        fields = {
            f: str(catalog[f]).strip()
            for f in CATALOG_FIELDS
            if catalog.get(f) not in (None, '')
        }
        fields.setdefault('name', code)
        for f in OWNER_ONLY_FIELDS:
            if catalog.get(f) not in (None, ''):
                fields[f] = catalog[f]
        fields.update(
            barcode=code,
            quantity=qty,
            created_by_id=actor.id,
            created_by_label=actor.label,
            updated_by_id=actor.id,
            updated_by_label=actor.label,
        )
        return fields
