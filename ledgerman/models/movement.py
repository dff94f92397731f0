"""
Movement model: append-only ledger of stock events.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from ledgerman.models.enums import MovementType


class MovementQuerySet(models.QuerySet):
    """Custom QuerySet for Movement with convenience filters."""

    def for_item(self, item):
        return self.filter(item=item)

    def purchases(self):
        return self.filter(type=MovementType.PURCHASE)

    def arrivals_for(self, purchase):
        """IN movements recorded against a PURCHASE."""
        return self.filter(type=MovementType.IN, fulfills=purchase)


class Movement(models.Model):
    """
    One stock-affecting or stock-ordering event.

    Rules:
    - IN never carries a price
    - PURCHASE always carries a price > 0 and never changes stock
    - fulfills is only set on IN movements created by a purchase arrival
    - Totals are always recomputed from the full history, never cached

    Movements are written only through ledgerman.services, which normalize
    the input and check stock before saving.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='ledger_movements',
        verbose_name=_('User'),
    )
    item = models.ForeignKey(
        'ledgerman.Item',
        on_delete=models.CASCADE,
        related_name='movements',
        verbose_name=_('Item'),
    )
    type = models.CharField(
        max_length=10,
        choices=MovementType.choices,
        db_index=True,
        verbose_name=_('Type'),
    )
    count = models.PositiveIntegerField(default=1, verbose_name=_('Quantity'))
    price = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name=_('Unit price'),
        help_text=_('Empty for IN. Required for PURCHASE.'),
    )
    date = models.DateField(default=timezone.localdate, db_index=True, verbose_name=_('Date'))
    memo = models.TextField(blank=True, default='', verbose_name=_('Memo'))

    fulfills = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='arrivals',
        limit_choices_to={'type': MovementType.PURCHASE},
        verbose_name=_('Fulfills purchase'),
    )
    warehouse = models.ForeignKey(
        'ledgerman.Warehouse',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='movements',
        verbose_name=_('Warehouse'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = MovementQuerySet.as_manager()

    class Meta:
        verbose_name = _('Movement')
        verbose_name_plural = _('Movements')
        ordering = ['date', 'id']
        indexes = [
            models.Index(fields=['user', 'item', 'type'], name='ledger_mov_user_item_type_idx'),
            models.Index(fields=['fulfills', 'type'], name='ledger_mov_fulfills_type_idx'),
        ]

    @property
    def stock_effect(self) -> int:
        """Signed contribution to on-hand stock."""
        if self.type == MovementType.IN:
            return self.count
        if self.type == MovementType.OUT:
            return -self.count
        return 0

    def __str__(self) -> str:
        return f"{self.type} {self.count} | {self.item_id} @ {self.date}"
