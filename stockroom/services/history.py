"""
Stock history — read-only ledger queries.

All methods are classmethods and use no locking.
"""

import logging
from datetime import date

from django.utils.dateparse import parse_date

from stockroom.exceptions import StockError
from stockroom.models.movement import Movement
from stockroom.models.product import Product

logger = logging.getLogger('stockroom')


def _as_date(field: str, value) -> date | None:
    """Accept a date or a 'YYYY-MM-DD' string; '' and None mean no filter."""
    if value in (None, ''):
        return None
    if isinstance(value, date):
        return value
    try:
        parsed = parse_date(str(value).strip())
    except ValueError:
        parsed = None
    if parsed is None:
        raise StockError('VALIDATION_ERROR', 'Use a YYYY-MM-DD date.', field=field, value=str(value))
    return parsed


class StockHistory:
    """Read-only movement log queries."""

    @classmethod
    def movements(cls, type: str | None = None, date_from=None, date_to=None,
                  on_date=None, product: Product | None = None,
                  category: str | None = None, brand: str | None = None):
        """
        Movement log, newest first.

        Args:
            type: 'incoming', 'outgoing', or None/'all' for both
            date_from: First day included
            date_to: Last day included (the whole day)
            on_date: Single day; wins over date_from/date_to
            product: Only this product's movements
            category: Category at movement time
            brand: Brand at movement time

        Returns:
            Movement QuerySet
        """
        qs = Movement.objects.all()
        if type and type != 'all':
            qs = qs.filter(type=type)
        if product is not None:
            qs = qs.filter(product=product)
        if category:
            qs = qs.filter(category=category)
        if brand:
            qs = qs.filter(brand=brand)

        exact = _as_date('on_date', on_date)
        if exact is not None:
            qs = qs.filter(timestamp__date=exact)
        else:
            start = _as_date('date_from', date_from)
            end = _as_date('date_to', date_to)
            if start is not None:
                qs = qs.filter(timestamp__date__gte=start)
            if end is not None:
                qs = qs.filter(timestamp__date__lte=end)

        return qs.order_by('-timestamp', '-pk')

    @classmethod
    def replay_quantity(cls, product: Product) -> int:
        """Quantity the ledger says ``product`` should have."""
        return product.replayed_quantity()

    @classmethod
    def audit(cls, fix: bool = False) -> list[tuple[Product, int, int]]:
        """
        Compare stored quantities with ledger replay.

        Args:
            fix: Overwrite stored quantities with replayed ones

        Returns:
            List of (product, stored, replayed) for every mismatch
        """
        mismatches = []
        for product in Product.objects.order_by('pk').iterator():
            stored = product.quantity
            replayed = product.recalculate(fix=fix)
            if replayed != stored:
                mismatches.append((product, stored, replayed))

        logger.info(
            "stock.audit",
            extra={"mismatches": len(mismatches), "fixed": fix},
        )
        return mismatches
