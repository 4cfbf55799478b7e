"""
Unit model — individually serialized item of a product.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from stockroom.models.enums import UnitStatus


class Unit(models.Model):
    """
    One physical item with its own serial label.

    LIFECYCLE:

        ┌────┐   outgoing scan   ┌─────┐
        │ IN │ ────────────────► │ OUT │
        └────┘                   └─────┘

    Units are created by catalog setup. The ledger only ever moves a unit
    from IN to OUT, once, through a compare-and-set on ``status``.
    """

    serial = models.CharField(
        primary_key=True,
        max_length=64,
        verbose_name=_('Serial'),
    )
    product = models.ForeignKey(
        'stockroom.Product',
        on_delete=models.PROTECT,
        related_name='units',
        verbose_name=_('Product'),
    )
    status = models.CharField(
        max_length=8,
        choices=UnitStatus.choices,
        default=UnitStatus.IN,
        db_index=True,
        verbose_name=_('Status'),
    )

    last_moved_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Last moved at'))
    last_moved_by_id = models.CharField(max_length=150, blank=True, default='')
    last_moved_by_label = models.CharField(max_length=150, blank=True, default='')
    moved_note = models.CharField(max_length=255, blank=True, default='')

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Unit')
        verbose_name_plural = _('Units')
        ordering = ['serial']

    @property
    def is_in(self) -> bool:
        return self.status == UnitStatus.IN

    def __str__(self) -> str:
        return f"{self.serial} ({self.get_status_display()})"
