"""
Stockroom Admin — basic fallback (works without Unfold).

For the Unfold-styled version, add 'stockroom.contrib.admin_unfold' to INSTALLED_APPS.
When the Unfold contrib is loaded, this module does nothing (avoids double registration).

Provides views for back-office work:
- Product: catalog fields editable, quantity read-only
- Unit: list + status filter, status read-only
- Movement: read-only audit trail
- MasterProduct: list + edit
"""

import logging

from django.apps import apps
from django.contrib import admin
from django.utils.translation import gettext_lazy as _

logger = logging.getLogger(__name__)

# Skip registration if the Unfold contrib is installed (it will register its own admins)
if not apps.is_installed('stockroom.contrib.admin_unfold'):
    from stockroom.models import MasterProduct, Movement, Product, Unit

    # =========================================================================
    # PRODUCT ADMIN
    # =========================================================================

    @admin.register(Product)
    class ProductAdmin(admin.ModelAdmin):
        """Product admin. Quantity only changes through the ledger."""

        list_display = ['name', 'code_display', 'category', 'brand', 'sizes', 'quantity']
        list_filter = ['category', 'brand']
        search_fields = ['key', 'barcode', 'name', 'brand']
        readonly_fields = ['quantity', 'match_key', 'created_at', 'created_by_label',
                           'updated_at', 'updated_by_label']

        def has_delete_permission(self, request, obj=None):
            return False

        @admin.display(description=_('Barcode'))
        def code_display(self, obj):
            return obj.code

        @admin.action(description=_('Recalculate quantity from ledger'))
        def recalculate(self, request, queryset):
            fixed = 0
            for product in queryset:
                stored = product.quantity
                if product.recalculate(fix=True) != stored:
                    fixed += 1
            self.message_user(request, _('{count} product(s) corrected.').format(count=fixed))

        actions = ['recalculate']

    # =========================================================================
    # UNIT ADMIN
    # =========================================================================

    @admin.register(Unit)
    class UnitAdmin(admin.ModelAdmin):
        """Unit admin. Status only changes through the ledger."""

        list_display = ['serial', 'product', 'status', 'last_moved_at', 'last_moved_by_label']
        list_filter = ['status']
        search_fields = ['serial', 'product__name', 'product__key']
        readonly_fields = ['status', 'last_moved_at', 'last_moved_by_id',
                           'last_moved_by_label', 'moved_note', 'created_at']

    # =========================================================================
    # MOVEMENT ADMIN (read-only audit trail)
    # =========================================================================

    @admin.register(Movement)
    class MovementAdmin(admin.ModelAdmin):
        """Movement admin — read-only. Immutable audit trail."""

        list_display = ['timestamp', 'type', 'product_name', 'quantity',
                        'unit_serial', 'client_name', 'actor_label']
        list_filter = ['type', 'category', 'timestamp']
        search_fields = ['product_name', 'barcode', 'unit_serial', 'client_name']
        readonly_fields = ['type', 'product', 'product_name', 'barcode', 'category',
                           'brand', 'sizes', 'unit_serial',
                           'quantity', 'actor_id', 'actor_label', 'client_name',
                           'client_address', 'supplier_name', 'note', 'metadata',
                           'timestamp']
        date_hierarchy = 'timestamp'

        def has_add_permission(self, request):
            return False

        def has_change_permission(self, request, obj=None):
            return False

        def has_delete_permission(self, request, obj=None):
            return False

    # =========================================================================
    # MASTER PRODUCT ADMIN
    # =========================================================================

    @admin.register(MasterProduct)
    class MasterProductAdmin(admin.ModelAdmin):
        """Master product admin — editable."""

        list_display = ['name', 'category', 'brand', 'created_at']
        list_filter = ['category', 'brand']
        search_fields = ['name', 'name_lower']
        readonly_fields = ['created_at', 'created_by_label']
