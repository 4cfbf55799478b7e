"""
Stockroom Admin with Unfold theme.

This module provides Unfold-styled admin classes for Stockroom models.
To use, add 'stockroom.contrib.admin_unfold' to INSTALLED_APPS after 'stockroom'.

The admins will automatically register the Unfold versions.
"""

import logging

from django.contrib import admin
from django.utils.translation import gettext_lazy as _
from unfold.decorators import action, display

from stockroom.contrib.admin_unfold.base import BaseModelAdmin, format_quantity
from stockroom.models import MasterProduct, Movement, MovementType, Product, Unit

logger = logging.getLogger(__name__)


# =============================================================================
# HELPERS
# =============================================================================


def _format_datetime(dt):
    """Format datetime as DD/MM/YY · HH:MM."""
    if dt:
        return dt.strftime('%d/%m/%y · %H:%M')
    return '-'


# =============================================================================
# PRODUCT ADMIN
# =============================================================================


@admin.register(Product)
class ProductAdmin(BaseModelAdmin):
    """Admin for Product. Quantity is read-only: it moves through the ledger."""

    list_display = ['name', 'code_display', 'category', 'brand', 'sizes', 'quantity_display']
    list_filter = ['category', 'brand']
    search_fields = ['key', 'barcode', 'name', 'brand']
    readonly_fields = ['quantity', 'match_key', 'created_at', 'created_by_label',
                       'updated_at', 'updated_by_label']
    actions = ['recalculate']

    # Unfold options
    compressed_fields = True
    warn_unsaved_form = True

    def has_delete_permission(self, request, obj=None):
        return False

    @display(description=_('Barcode'))
    def code_display(self, obj):
        return obj.code

    @display(description=_('Quantity'))
    def quantity_display(self, obj):
        return format_quantity(obj.quantity)

    @action(description=_('Recalculate quantity from ledger'))
    def recalculate(self, request, queryset):
        fixed = 0
        for product in queryset:
            stored = product.quantity
            if product.recalculate(fix=True) != stored:
                fixed += 1
        self.message_user(request, _('{count} product(s) corrected.').format(count=fixed))


# =============================================================================
# UNIT ADMIN
# =============================================================================


@admin.register(Unit)
class UnitAdmin(BaseModelAdmin):
    """Admin for serialized units. Status is read-only."""

    list_display = ['serial', 'product', 'status', 'last_moved_display', 'last_moved_by_label']
    list_filter = ['status']
    search_fields = ['serial', 'product__name', 'product__key']
    readonly_fields = ['status', 'last_moved_at', 'last_moved_by_id',
                       'last_moved_by_label', 'moved_note', 'created_at']

    compressed_fields = True

    @display(description=_('Last moved'))
    def last_moved_display(self, obj):
        return _format_datetime(obj.last_moved_at)


# =============================================================================
# MOVEMENT ADMIN
# =============================================================================


@admin.register(Movement)
class MovementAdmin(BaseModelAdmin):
    """Admin for Movement (read-only)."""

    list_display = ['timestamp_display', 'type', 'product_name', 'delta_display',
                    'unit_serial', 'client_name', 'actor_label']
    list_filter = ['type', 'category', 'timestamp']
    search_fields = ['product_name', 'barcode', 'unit_serial', 'client_name']
    readonly_fields = ['type', 'product', 'product_name', 'barcode', 'category',
                       'brand', 'sizes', 'unit_serial',
                       'quantity', 'actor_id', 'actor_label', 'client_name',
                       'client_address', 'supplier_name', 'note', 'metadata',
                       'timestamp']
    date_hierarchy = 'timestamp'

    compressed_fields = True

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @display(description=_('Date/Time'))
    def timestamp_display(self, obj):
        return _format_datetime(obj.timestamp)

    @display(description=_('Change'))
    def delta_display(self, obj):
        sign = '+' if obj.type == MovementType.INCOMING else ''
        return f"{sign}{format_quantity(obj.delta)}"


# =============================================================================
# MASTER PRODUCT ADMIN
# =============================================================================


@admin.register(MasterProduct)
class MasterProductAdmin(BaseModelAdmin):
    """Admin for master products."""

    list_display = ['name', 'category', 'brand', 'created_at']
    list_filter = ['category', 'brand']
    search_fields = ['name', 'name_lower']
    readonly_fields = ['created_at', 'created_by_label']

    compressed_fields = True
    warn_unsaved_form = True
