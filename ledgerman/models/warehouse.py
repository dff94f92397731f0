"""
Warehouse models: storage locations, transfers between them, and audits.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class Warehouse(models.Model):
    """A place where a user keeps stock."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='ledger_warehouses',
        verbose_name=_('User'),
    )
    name = models.CharField(max_length=100, verbose_name=_('Name'))
    location = models.CharField(max_length=200, blank=True, default='', verbose_name=_('Location'))
    description = models.TextField(blank=True, default='', verbose_name=_('Description'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Warehouse')
        verbose_name_plural = _('Warehouses')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name


class StockTransfer(models.Model):
    """Quantity of an item moved from one warehouse to another."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='+')
    item = models.ForeignKey(
        'ledgerman.Item',
        on_delete=models.CASCADE,
        related_name='transfers',
        verbose_name=_('Item'),
    )
    from_warehouse = models.ForeignKey(
        Warehouse,
        on_delete=models.CASCADE,
        related_name='transfers_out',
        verbose_name=_('From'),
    )
    to_warehouse = models.ForeignKey(
        Warehouse,
        on_delete=models.CASCADE,
        related_name='transfers_in',
        verbose_name=_('To'),
    )
    quantity = models.PositiveIntegerField(verbose_name=_('Quantity'))
    reason = models.CharField(max_length=255, blank=True, default='', verbose_name=_('Reason'))
    status = models.CharField(max_length=20, default='COMPLETED', verbose_name=_('Status'))
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Stock Transfer')
        verbose_name_plural = _('Stock Transfers')
        ordering = ['-created_at', '-id']

    def __str__(self) -> str:
        return f"{self.quantity}x {self.item}: {self.from_warehouse} → {self.to_warehouse}"


class StockAudit(models.Model):
    """Physical count of an item in a warehouse against what was expected."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='+')
    item = models.ForeignKey(
        'ledgerman.Item',
        on_delete=models.CASCADE,
        related_name='audits',
        verbose_name=_('Item'),
    )
    warehouse = models.ForeignKey(
        Warehouse,
        on_delete=models.CASCADE,
        related_name='audits',
        verbose_name=_('Warehouse'),
    )
    expected_quantity = models.PositiveIntegerField(verbose_name=_('Expected'))
    actual_quantity = models.PositiveIntegerField(verbose_name=_('Counted'))
    difference = models.IntegerField(verbose_name=_('Difference'))
    notes = models.TextField(blank=True, default='', verbose_name=_('Notes'))
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Stock Audit')
        verbose_name_plural = _('Stock Audits')
        ordering = ['-created_at', '-id']

    def __str__(self) -> str:
        sign = '+' if self.difference > 0 else ''
        return f"{self.item} @ {self.warehouse}: {sign}{self.difference}"
