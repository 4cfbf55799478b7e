"""
MasterProduct model — canonical catalog entries for name suggestions.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class MasterProduct(models.Model):
    """
    Canonical product definition maintained by owners.

    Not stock: staff pick a master product while typing a new item's name
    so that name, brand and sizes are spelled the same way every time.
    """

    name = models.CharField(max_length=200, verbose_name=_('Name'))
    name_lower = models.CharField(max_length=200, db_index=True, editable=False)
    category = models.CharField(max_length=100, null=True, blank=True, verbose_name=_('Category'))
    brand = models.CharField(max_length=100, null=True, blank=True, verbose_name=_('Brand'))
    sizes = models.JSONField(default=list, blank=True, verbose_name=_('Sizes'))
    material = models.CharField(max_length=100, null=True, blank=True, verbose_name=_('Material'))
    colors = models.CharField(max_length=200, null=True, blank=True, verbose_name=_('Colors'))
    aliases = models.JSONField(
        default=list,
        blank=True,
        verbose_name=_('Aliases'),
        help_text=_('Alternative spellings'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    created_by_id = models.CharField(max_length=150, blank=True, default='')
    created_by_label = models.CharField(max_length=150, blank=True, default='')

    class Meta:
        verbose_name = _('Master product')
        verbose_name_plural = _('Master products')
        ordering = ['name_lower']

    def save(self, *args, **kwargs):
        self.name_lower = self.name.strip().lower()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.name
