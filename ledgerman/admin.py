"""
Ledgerman Admin.

Provides views for production debugging:
- Category, Item, Warehouse: list + edit
- Movement: read-only audit trail (stock only changes via the service)
- InventoryPolicy, ChannelListing: editable
- ChannelConnection: editable, credentials kept off the list
- SyncJob: read-only with "retry now" action
- StockTransfer, StockAudit: read-only
"""

import logging

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from ledgerman.models import (
    Category,
    ChannelConnection,
    ChannelListing,
    InventoryPolicy,
    Item,
    Movement,
    StockAudit,
    StockTransfer,
    SyncJob,
    Warehouse,
)
from ledgerman.services.ledger import StockLedger
from ledgerman.services.sync import InventorySync

logger = logging.getLogger(__name__)


class ReadOnlyAdmin(admin.ModelAdmin):
    """Admin that never writes."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =========================================================================
# CATALOG
# =========================================================================

@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'user', 'sort_order']
    search_fields = ['name']
    ordering = ['user', 'sort_order']


class InventoryPolicyInline(admin.StackedInline):
    model = InventoryPolicy
    fields = ['mode', 'buffer', 'min_visible', 'exclusive_provider']
    extra = 0


class ChannelListingInline(admin.TabularInline):
    model = ChannelListing
    fields = ['provider', 'channel_product_id', 'channel_option_id', 'external_sku', 'is_active']
    extra = 0


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    """Item admin: stock is computed, never edited."""

    list_display = ['name', 'size', 'category', 'user', 'sku', 'barcode', 'stock_display']
    list_filter = ['category', 'low_stock_alert']
    search_fields = ['name', 'sku', 'barcode']
    readonly_fields = ['stock_display', 'created_at', 'updated_at']
    inlines = [InventoryPolicyInline, ChannelListingInline]

    def save_formset(self, request, form, formset, change):
        # Inline policies and listings belong to the item's owner
        instances = formset.save(commit=False)
        for obj in formset.deleted_objects:
            obj.delete()
        for instance in instances:
            instance.user = form.instance.user
            instance.save()
        formset.save_m2m()

    @admin.display(description=_('Stock'))
    def stock_display(self, obj):
        if obj.pk is None:
            return '-'
        totals = StockLedger.totals(obj)
        if totals.pending_in:
            return f"{totals.stock} (+{totals.pending_in})"
        return totals.stock


# =========================================================================
# MOVEMENT ADMIN (read-only audit trail)
# =========================================================================

@admin.register(Movement)
class MovementAdmin(ReadOnlyAdmin):
    list_display = ['date', 'item', 'type', 'count', 'price', 'fulfills', 'memo']
    list_filter = ['type', 'date']
    search_fields = ['memo', 'item__name']
    date_hierarchy = 'date'


# =========================================================================
# CHANNEL SYNC
# =========================================================================

@admin.register(ChannelListing)
class ChannelListingAdmin(admin.ModelAdmin):
    list_display = ['item', 'provider', 'channel_product_id', 'channel_option_id', 'is_active']
    list_filter = ['provider', 'is_active']
    search_fields = ['channel_product_id', 'channel_option_id', 'external_sku']


@admin.register(ChannelConnection)
class ChannelConnectionAdmin(admin.ModelAdmin):
    list_display = ['provider', 'user', 'is_active', 'updated_at']
    list_filter = ['provider', 'is_active']


@admin.register(SyncJob)
class SyncJobAdmin(ReadOnlyAdmin):
    """Sync job admin: read-only with retry action."""

    list_display = ['id', 'item', 'provider', 'target_qty', 'status', 'attempts',
                    'next_run_at', 'last_error']
    list_filter = ['status', 'provider']
    search_fields = ['last_error']
    actions = ['retry_jobs']

    @admin.action(description=_('Retry failed jobs now'))
    def retry_jobs(self, request, queryset):
        count = InventorySync.retry(queryset)
        self.message_user(request, _('%(count)d job(s) queued again.') % {'count': count})
        logger.info("admin.sync.retry", extra={"count": count, "user": str(request.user)})


# =========================================================================
# WAREHOUSES
# =========================================================================

@admin.register(Warehouse)
class WarehouseAdmin(admin.ModelAdmin):
    list_display = ['name', 'location', 'user']
    search_fields = ['name', 'location']


@admin.register(StockTransfer)
class StockTransferAdmin(ReadOnlyAdmin):
    list_display = ['created_at', 'item', 'from_warehouse', 'to_warehouse', 'quantity', 'reason']


@admin.register(StockAudit)
class StockAuditAdmin(ReadOnlyAdmin):
    list_display = ['created_at', 'item', 'warehouse', 'expected_quantity',
                    'actual_quantity', 'difference']
