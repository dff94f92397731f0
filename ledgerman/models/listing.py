"""
ChannelListing model: item ↔ external channel product mapping.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from ledgerman.models.enums import Provider


class ChannelListing(models.Model):
    """Where an item is sold on one external channel."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='+',
        verbose_name=_('User'),
    )
    item = models.ForeignKey(
        'ledgerman.Item',
        on_delete=models.CASCADE,
        related_name='listings',
        verbose_name=_('Item'),
    )
    provider = models.CharField(
        max_length=10,
        choices=Provider.choices,
        verbose_name=_('Channel'),
    )
    channel_product_id = models.CharField(max_length=100, null=True, blank=True)
    channel_option_id = models.CharField(max_length=100, null=True, blank=True)
    external_sku = models.CharField(max_length=100, null=True, blank=True)
    is_active = models.BooleanField(default=True, verbose_name=_('Active'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Channel Listing')
        verbose_name_plural = _('Channel Listings')
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'provider', 'item'],
                name='unique_listing_per_channel_item',
            ),
        ]

    def __str__(self) -> str:
        ref = self.channel_option_id or self.channel_product_id or '?'
        return f"{self.provider}:{ref} → {self.item}"
