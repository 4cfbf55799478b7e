"""
Product model — aggregate stock per barcode.
"""

import logging

from django.db import models
from django.db.models import Q, Sum
from django.db.models.functions import Coalesce
from django.utils.translation import gettext_lazy as _

from stockroom.models.enums import MovementType
from stockroom.normalize import match_key


class ProductQuerySet(models.QuerySet):
    """QuerySet with catalog search helpers."""

    def search(self, term):
        """Case-insensitive match on name, brand, barcode or key."""
        term = (term or '').strip()
        if not term:
            return self
        return self.filter(
            Q(name__icontains=term)
            | Q(brand__icontains=term)
            | Q(barcode__icontains=term)
            | Q(key__icontains=term)
        )

    def in_stock(self):
        return self.filter(quantity__gt=0)


class Product(models.Model):
    """
    Stock-keeping unit identified by a barcode.

    Two historical shapes exist:
    - key == barcode (current shape, created by this app)
    - key is an opaque id and the barcode lives in the ``barcode`` field

    Resolution tries the key first, then the field.

    Performance:
    - ``quantity`` is only ever changed with F() updates issued by the
      product store, never assigned from application memory
    - Use recalculate() for audit/correction
    """

    key = models.CharField(
        primary_key=True,
        max_length=64,
        verbose_name=_('Key'),
        help_text=_('Store key. Normally the barcode itself.'),
    )
    barcode = models.CharField(
        max_length=64,
        null=True,
        blank=True,
        db_index=True,
        verbose_name=_('Barcode'),
    )

    name = models.CharField(max_length=200, verbose_name=_('Name'))
    brand = models.CharField(max_length=100, blank=True, default='', verbose_name=_('Brand'))
    category = models.CharField(max_length=100, blank=True, default='', verbose_name=_('Category'))
    sizes = models.CharField(max_length=100, blank=True, default='', verbose_name=_('Size'))
    material = models.CharField(max_length=100, blank=True, default='', verbose_name=_('Material'))
    colors = models.CharField(max_length=200, blank=True, default='', verbose_name=_('Colors'))
    match_key = models.CharField(max_length=600, db_index=True, editable=False, default='')

    quantity = models.IntegerField(default=0, verbose_name=_('Quantity on hand'))

    # Owner-only
    price = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True, verbose_name=_('Price'))
    buy_price = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True, verbose_name=_('Buy price'))
    sell_price = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True, verbose_name=_('Sell price'))

    created_at = models.DateTimeField(auto_now_add=True)
    created_by_id = models.CharField(max_length=150, blank=True, default='')
    created_by_label = models.CharField(max_length=150, blank=True, default='')
    updated_at = models.DateTimeField(auto_now=True)
    updated_by_id = models.CharField(max_length=150, blank=True, default='')
    updated_by_label = models.CharField(max_length=150, blank=True, default='')
    metadata = models.JSONField(default=dict, blank=True)

    objects = ProductQuerySet.as_manager()

    class Meta:
        verbose_name = _('Product')
        verbose_name_plural = _('Products')
        ordering = ['name']
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity__gte=0),
                name='stockroom_product_quantity_non_negative',
            ),
        ]

    def save(self, *args, **kwargs):
        self.match_key = match_key(self.name, self.category, self.brand, self.sizes)
        update_fields = kwargs.get('update_fields')
        if update_fields is not None and 'match_key' not in update_fields:
            kwargs['update_fields'] = [*update_fields, 'match_key']
        super().save(*args, **kwargs)

    @property
    def code(self) -> str:
        """The code printed on labels."""
        return self.barcode or self.key

    def replayed_quantity(self) -> int:
        """Incoming minus outgoing, from the ledger."""
        totals = self.movements.aggregate(
            incoming=Coalesce(Sum('quantity', filter=Q(type=MovementType.INCOMING)), 0),
            outgoing=Coalesce(Sum('quantity', filter=Q(type=MovementType.OUTGOING)), 0),
        )
        return totals['incoming'] - totals['outgoing']

    def recalculate(self, fix: bool = False) -> int:
        """
        Recalculate quantity from Movements.

        Use for:
        - Integrity audit
        - Correction after detected inconsistency

        Args:
            fix: Write the replayed value back when it differs

        Returns:
            Replayed quantity
        """
        total = self.replayed_quantity()
        self.refresh_from_db(fields=['quantity'])

        if total != self.quantity:
            logger = logging.getLogger('stockroom')
            logger.warning(
                f"Product {self.pk} ledger mismatch: stored {self.quantity}, "
                f"replayed {total} (diff: {total - self.quantity})"
            )
            if fix:
                Product.objects.filter(pk=self.pk).update(quantity=total)
                self.quantity = total

        return total

    def __str__(self) -> str:
        size = f" {self.sizes}" if self.sizes else ""
        return f"{self.name}{size} [{self.code}]: {self.quantity}"
