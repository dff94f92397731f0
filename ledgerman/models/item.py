"""
Item model: a trackable product or variant.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class Item(models.Model):
    """
    Product/variant owned by one user.

    Stock is never stored here: it is always derived from the item's
    movements (see ledgerman.services.ledger).
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='ledger_items',
        verbose_name=_('User'),
    )
    category = models.ForeignKey(
        'ledgerman.Category',
        on_delete=models.PROTECT,
        related_name='items',
        verbose_name=_('Category'),
    )
    name = models.CharField(max_length=200, verbose_name=_('Name'))
    size = models.CharField(
        max_length=100,
        blank=True,
        default='',
        verbose_name=_('Size / variant'),
    )
    image_url = models.URLField(max_length=500, blank=True, default='', verbose_name=_('Image'))
    barcode = models.CharField(max_length=64, null=True, blank=True, verbose_name=_('Barcode'))
    sku = models.CharField(max_length=64, null=True, blank=True, verbose_name=_('SKU'))
    memo = models.TextField(blank=True, default='', verbose_name=_('Memo'))

    low_stock_alert = models.BooleanField(default=False, verbose_name=_('Low stock alert'))
    low_stock_threshold = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name=_('Low stock threshold'),
        help_text=_('Alert when stock is at or below this value'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Item')
        verbose_name_plural = _('Items')
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'barcode'],
                name='unique_item_barcode_per_user',
            ),
            models.UniqueConstraint(
                fields=['user', 'sku'],
                name='unique_item_sku_per_user',
            ),
        ]
        indexes = [
            models.Index(fields=['user', 'category'], name='ledger_item_user_cat_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.size})" if self.size else self.name
