"""
InventoryPolicy model: per-item channel visibility rules.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from ledgerman.models.enums import InventoryMode, Provider


class InventoryPolicy(models.Model):
    """
    How much of an item's stock each channel gets to see.

    Created lazily on first write; items without a row use NORMAL mode,
    buffer 1, min_visible 1.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='+',
        verbose_name=_('User'),
    )
    item = models.OneToOneField(
        'ledgerman.Item',
        on_delete=models.CASCADE,
        related_name='inventory_policy',
        verbose_name=_('Item'),
    )
    mode = models.CharField(
        max_length=10,
        choices=InventoryMode.choices,
        default=InventoryMode.NORMAL,
        verbose_name=_('Mode'),
    )
    buffer = models.PositiveIntegerField(
        default=1,
        verbose_name=_('Buffer'),
        help_text=_('Units held back from every channel in NORMAL mode'),
    )
    min_visible = models.PositiveIntegerField(
        default=1,
        verbose_name=_('Minimum visible'),
        help_text=_('Floor published while any stock remains'),
    )
    exclusive_provider = models.CharField(
        max_length=10,
        choices=Provider.choices,
        null=True,
        blank=True,
        verbose_name=_('Exclusive channel'),
        help_text=_('Only used in EXCLUSIVE mode'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Inventory Policy')
        verbose_name_plural = _('Inventory Policies')

    def __str__(self) -> str:
        if self.mode == InventoryMode.EXCLUSIVE:
            return f"{self.item}: EXCLUSIVE → {self.exclusive_provider or '?'}"
        return f"{self.item}: NORMAL (buffer {self.buffer}, min {self.min_visible})"
