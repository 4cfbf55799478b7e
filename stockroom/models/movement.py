"""
Movement model — Immutable ledger of stock changes.
"""

from django.db import models
from django.db.models import Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from stockroom.models.enums import MovementType


class Movement(models.Model):
    """
    Immutable record of one incoming or outgoing quantity change.

    Rules:
    - NEVER update() or delete()
    - Corrections are new Movements in the opposite direction
    - Exactly one Movement per committed product mutation
    - ``quantity`` is always positive, the sign comes from ``type``
    """

    type = models.CharField(
        max_length=10,
        choices=MovementType.choices,
        db_index=True,
        verbose_name=_('Type'),
    )
    product = models.ForeignKey(
        'stockroom.Product',
        on_delete=models.PROTECT,
        related_name='movements',
        verbose_name=_('Product'),
    )
    # Snapshots at movement time
    product_name = models.CharField(max_length=200, blank=True, default='')
    barcode = models.CharField(max_length=64, blank=True, default='')
    category = models.CharField(max_length=100, null=True, blank=True, db_index=True, verbose_name=_('Category'))
    brand = models.CharField(max_length=100, null=True, blank=True, verbose_name=_('Brand'))
    sizes = models.CharField(max_length=100, null=True, blank=True, verbose_name=_('Size'))
    unit_serial = models.CharField(max_length=64, null=True, blank=True, db_index=True, verbose_name=_('Unit serial'))

    quantity = models.PositiveIntegerField(verbose_name=_('Quantity'))

    actor_id = models.CharField(max_length=150, blank=True, default='', verbose_name=_('Actor id'))
    actor_label = models.CharField(max_length=150, blank=True, default='', verbose_name=_('Handled by'))

    client_name = models.CharField(max_length=200, null=True, blank=True, verbose_name=_('Client'))
    client_address = models.CharField(max_length=255, null=True, blank=True, verbose_name=_('Client address'))
    supplier_name = models.CharField(max_length=200, null=True, blank=True, verbose_name=_('Supplier'))
    note = models.TextField(null=True, blank=True, verbose_name=_('Note'))

    metadata = models.JSONField(default=dict, blank=True)
    timestamp = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Date/Time'))

    class Meta:
        verbose_name = _('Movement')
        verbose_name_plural = _('Movements')
        ordering = ['timestamp']
        indexes = [
            models.Index(fields=['product', 'timestamp'], name='stockroom_mov_product_ts'),
            models.Index(fields=['type', 'timestamp'], name='stockroom_mov_type_ts'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity__gt=0),
                name='stockroom_movement_quantity_positive',
            ),
        ]

    def save(self, *args, **kwargs):
        """Insert only."""
        if self.pk:
            raise ValueError(
                "Movements are immutable. "
                "To correct one, record a new Movement in the opposite direction."
            )
        if not self.quantity or self.quantity <= 0:
            raise ValueError("Movement quantity must be positive")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """Prevent deletion — movements are immutable."""
        raise ValueError(
            "Movements are immutable. "
            "To reverse one, record a new Movement in the opposite direction."
        )

    @property
    def delta(self) -> int:
        """Signed quantity: positive for incoming, negative for outgoing."""
        if self.type == MovementType.OUTGOING:
            return -self.quantity
        return self.quantity

    def __str__(self) -> str:
        signal = '+' if self.delta > 0 else ''
        return f"{signal}{self.delta} | {self.product_name or self.product_id}"
