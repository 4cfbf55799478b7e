"""
Catalog — product creation, pricing and the master product list.

New stock always enters through StockMovements.receive(), so the ledger
replays to the stored quantity even for items added from the catalog form.
"""

import logging
import random
import time
from decimal import Decimal, InvalidOperation

from django.utils import timezone

from stockroom.conf import stockroom_settings
from stockroom.exceptions import StockError
from stockroom.models.master import MasterProduct
from stockroom.models.product import Product
from stockroom.normalize import match_key, split_list
from stockroom.protocols.ledger import Actor, MovementMeta
from stockroom.services.movements import (
    CATALOG_FIELDS,
    OWNER_ONLY_FIELDS,
    check_owner_fields,
    coerce_quantity,
)
from stockroom.services.resolution import NotFound, ResolvedTarget, TargetKind

logger = logging.getLogger('stockroom')

# Fields the edit form may change
EDITABLE_FIELDS = (*CATALOG_FIELDS, 'barcode')


def generate_barcode() -> str:
    """Millisecond timestamp followed by three random digits."""
    return f"{int(time.time() * 1000)}{random.randint(100, 999)}"


def _clean(value) -> str:
    return str(value).strip() if value is not None else ''


def _price(field: str, value) -> Decimal | None:
    if value is None or value == '':
        return None
    try:
        price = Decimal(str(value).strip())
    except InvalidOperation:
        raise StockError('VALIDATION_ERROR', 'Price must be a number.', field=field)
    if not price.is_finite() or price < 0:
        raise StockError('VALIDATION_ERROR', 'Price must be non-negative.', field=field)
    return price


def _require_owner(actor: Actor, action: str) -> None:
    if not actor.is_owner:
        raise StockError('PERMISSION_DENIED', action=action, actor=actor.id)


def _check_descriptive(name: str, category: str, brand: str, sizes: str) -> None:
    """Rules shared by the add and edit forms."""
    for field, value in (('name', name), ('category', category), ('brand', brand)):
        if not value:
            raise StockError('VALIDATION_ERROR', f'{field.capitalize()} is required.', field=field)
    if (category in stockroom_settings.SIZE_REQUIRED_CATEGORIES
            and sizes not in stockroom_settings.SIZE_OPTIONS):
        raise StockError('VALIDATION_ERROR', 'Please choose a valid size.', field='sizes')


class StockCatalog:
    """Catalog operations. Mixed into StockLedger next to StockMovements."""

    def create_product(self, actor: Actor, name, category, brand,
                       quantity=0, barcode=None, sizes=None, material=None,
                       colors=None, price=None, buy_price=None,
                       sell_price=None) -> tuple[Product, bool]:
        """
        Add an item from the catalog form.

        An existing product with the same name, category, brand and size
        (compared in normalized form) receives the quantity instead of a
        duplicate being created.

        Returns:
            (product, created)

        Raises:
            StockError('VALIDATION_ERROR'): Missing name/category/brand,
                bad quantity, size outside SIZE_OPTIONS, negative price,
                barcode already used
            StockError('PERMISSION_DENIED'): Prices from a non-owner
        """
        name, category, brand = _clean(name), _clean(category), _clean(brand)
        sizes = _clean(sizes)
        _check_descriptive(name, category, brand, sizes)

        if quantity in (None, '', 0, '0'):
            qty = 0
        else:
            try:
                qty = coerce_quantity(quantity)
            except StockError:
                raise StockError(
                    'VALIDATION_ERROR', 'Quantity must be non-negative.', field='quantity',
                )

        prices = {
            'price': _price('price', price),
            'buy_price': _price('buy_price', buy_price),
            'sell_price': _price('sell_price', sell_price),
        }
        check_owner_fields(prices, actor)

        catalog = {
            'name': name,
            'category': category,
            'brand': brand,
            'sizes': sizes,
            'material': _clean(material),
            'colors': _clean(colors),
            **{k: v for k, v in prices.items() if v is not None},
        }

        existing = self.products.find_by_field(
            'match_key', match_key(name, category, brand, sizes)
        )
        if existing is not None:
            if qty:
                self.receive(
                    ResolvedTarget(kind=TargetKind.PRODUCT, product=existing),
                    qty, actor, MovementMeta(note='Merged from catalog form'),
                )
            logger.info(
                "catalog.merged",
                extra={"product": existing.pk, "qty": qty, "actor": actor.id},
            )
            return self.products.get(existing.pk), False

        code = _clean(barcode) or generate_barcode()
        self._check_barcode_free(code)

        if qty:
            self.receive(
                NotFound(code), qty, actor,
                MovementMeta(note='Added from catalog form'), catalog=catalog,
            )
        else:
            self.products.put(code, self._new_product_fields(code, 0, actor, catalog))

        logger.info(
            "catalog.created",
            extra={"product": code, "qty": qty, "actor": actor.id},
        )
        return self.products.get(code), True

    def update_product(self, code, actor: Actor, **fields) -> Product:
        """
        Edit the descriptive fields of a product (the edit form).

        Accepts the keys in EDITABLE_FIELDS; omitted keys keep their value.
        Same rules as create_product(). Quantity only moves through the
        ledger and prices through update_pricing(), so neither is accepted.

        Raises:
            StockError('NOT_FOUND'): Unknown code
            StockError('VALIDATION_ERROR'): Unknown field, missing
                name/category/brand, size outside SIZE_OPTIONS, barcode
                already used
        """
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise StockError('VALIDATION_ERROR', field=', '.join(sorted(unknown)))

        product = self._find_product(code)
        values = {
            f: _clean(fields[f]) if f in fields else _clean(getattr(product, f))
            for f in EDITABLE_FIELDS
        }
        _check_descriptive(values['name'], values['category'], values['brand'], values['sizes'])

        barcode = values.pop('barcode') or None
        if barcode and barcode not in (product.pk, product.barcode):
            self._check_barcode_free(barcode)

        for f, value in values.items():
            setattr(product, f, value)
        product.barcode = barcode
        product.updated_by_id = actor.id
        product.updated_by_label = actor.label
        product.save(update_fields=[
            *values, 'barcode', 'updated_at', 'updated_by_id', 'updated_by_label',
        ])
        logger.info(
            "catalog.updated",
            extra={"product": product.pk, "fields": sorted(fields), "actor": actor.id},
        )
        return product

    def update_pricing(self, code, actor: Actor, **prices) -> Product:
        """
        Set owner-only price fields on a product.

        Only keys in OWNER_ONLY_FIELDS are accepted; None clears a price.
        """
        _require_owner(actor, 'update_pricing')
        unknown = set(prices) - set(OWNER_ONLY_FIELDS)
        if unknown:
            raise StockError('VALIDATION_ERROR', field=', '.join(sorted(unknown)))

        product = self._find_product(code)

        values = {field: _price(field, value) for field, value in prices.items()}
        Product.objects.filter(pk=product.pk).update(
            **values,
            updated_at=timezone.now(),
            updated_by_id=actor.id,
            updated_by_label=actor.label,
        )
        product.refresh_from_db()
        logger.info(
            "catalog.pricing",
            extra={"product": product.pk, "fields": sorted(values), "actor": actor.id},
        )
        return product

    @staticmethod
    def search_products(search: str = '', category: str | None = None,
                        brand: str | None = None):
        """Stock list filter: free-text search plus exact category/brand."""
        qs = Product.objects.search(search)
        if category:
            qs = qs.filter(category=category)
        if brand:
            qs = qs.filter(brand=brand)
        return qs

    @staticmethod
    def create_master_product(actor: Actor, name, category=None, brand=None,
                              sizes=None, material=None, colors=None,
                              aliases=None) -> MasterProduct:
        """
        Add a canonical catalog entry. Owner only.

        ``sizes`` and ``aliases`` accept lists or comma-separated text.
        """
        _require_owner(actor, 'create_master_product')
        name = _clean(name)
        if not name:
            raise StockError('VALIDATION_ERROR', 'Name is required.', field='name')

        master = MasterProduct.objects.create(
            name=name,
            category=_clean(category) or None,
            brand=_clean(brand) or None,
            sizes=split_list(sizes),
            material=_clean(material) or None,
            colors=_clean(colors) or None,
            aliases=split_list(aliases),
            created_by_id=actor.id,
            created_by_label=actor.label,
        )
        logger.info("catalog.master_created", extra={"master": master.pk, "actor": actor.id})
        return master

    @staticmethod
    def suggest_master_products(term: str, limit: int | None = None) -> list[MasterProduct]:
        """Master products whose name starts with ``term`` (2+ characters)."""
        term = (term or '').strip().lower()
        if len(term) < 2:
            return []
        limit = limit or stockroom_settings.SUGGESTION_LIMIT
        return list(MasterProduct.objects.filter(name_lower__startswith=term)[:limit])

    # ══════════════════════════════════════════════════════════════
    # INTERNAL
    # ══════════════════════════════════════════════════════════════

    def _find_product(self, code) -> Product:
        code = _clean(code)
        product = self.products.get(code) or self.products.find_by_field('barcode', code)
        if product is None:
            raise StockError('NOT_FOUND', code=code)
        return product

    def _check_barcode_free(self, code: str) -> None:
        """A barcode may name one product and must not clash with a serial."""
        if (self.products.get(code) is not None
                or self.products.find_by_field('barcode', code) is not None
                or self.units.get(code) is not None):
            raise StockError('VALIDATION_ERROR', 'Barcode already in use.', field='barcode', code=code)
