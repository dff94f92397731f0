"""
ChannelConnection model: a user's account on one sales channel.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from ledgerman.models.enums import Provider


class ChannelConnection(models.Model):
    """
    Credentials a channel client uses to act for one user.

    The credentials payload is provider-specific (API keys, vendor ids,
    OAuth tokens) and is passed to the client as-is.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='ledger_channel_connections',
        verbose_name=_('User'),
    )
    provider = models.CharField(
        max_length=10,
        choices=Provider.choices,
        verbose_name=_('Channel'),
    )
    credentials = models.JSONField(default=dict, verbose_name=_('Credentials'))
    is_active = models.BooleanField(default=True, verbose_name=_('Active'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Channel Connection')
        verbose_name_plural = _('Channel Connections')
        ordering = ['provider']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'provider'],
                name='unique_connection_per_channel',
            ),
        ]

    def __str__(self) -> str:
        state = '' if self.is_active else ' (inactive)'
        return f"{self.provider} connection of {self.user}{state}"
