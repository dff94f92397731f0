"""
Channel connections: the credentials each user keeps per sales channel.

Channel clients look a connection up with connection_for() when they need
to act for the listing's owner.
"""

import logging
from collections.abc import Mapping

from ledgerman.exceptions import LedgerError
from ledgerman.models.connection import ChannelConnection
from ledgerman.services.visibility import normalize_provider

logger = logging.getLogger('ledgerman')


class ChannelConnections:
    """Connection persistence methods."""

    @classmethod
    def connections(cls, user):
        return ChannelConnection.objects.filter(user=user).order_by('provider')

    @classmethod
    def connection_for(cls, user, provider) -> ChannelConnection | None:
        """The user's active connection to a channel, or None."""
        return ChannelConnection.objects.filter(
            user=user, provider=normalize_provider(provider), is_active=True,
        ).first()

    @classmethod
    def set_connection(cls, user, provider, credentials,
                       is_active: bool = True) -> ChannelConnection:
        """
        Create or replace the user's connection to a channel.

        Raises:
            LedgerError('INVALID_PROVIDER'): Unknown channel
            LedgerError('CREDENTIALS_REQUIRED'): credentials is not a mapping
        """
        provider = normalize_provider(provider)
        if not isinstance(credentials, Mapping):
            raise LedgerError('CREDENTIALS_REQUIRED', provider=provider)

        connection, created = ChannelConnection.objects.update_or_create(
            user=user,
            provider=provider,
            defaults={'credentials': dict(credentials), 'is_active': bool(is_active)},
        )
        logger.info(
            "ledger.connection.saved",
            extra={"user_id": user.pk, "provider": provider, "created": created},
        )
        return connection

    @classmethod
    def remove_connection(cls, user, provider) -> None:
        """
        Raises:
            LedgerError('NOT_FOUND'): No connection to this channel
        """
        provider = normalize_provider(provider)
        deleted, _ = ChannelConnection.objects.filter(user=user, provider=provider).delete()
        if not deleted:
            raise LedgerError('NOT_FOUND', what='connection', provider=provider)
        logger.info("ledger.connection.removed", extra={"user_id": user.pk, "provider": provider})
