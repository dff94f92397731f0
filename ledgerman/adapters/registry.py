"""
Channel client registry: provider → ChannelClient.

Usage:
    from ledgerman.adapters import get_channel_client

    client = get_channel_client("NAVER")
    result = client.update_stock(listing=listing, target_qty=7)

Settings:
    LEDGERMAN = {
        "CHANNEL_CLIENTS": {
            "NAVER": "myshop.channels.NaverCommerceClient",
            "COUPANG": "myshop.channels.CoupangWingClient",
        },
    }

Providers without a configured client use StubChannelClient. Unknown
provider strings fall back to the ETC client.
"""

from __future__ import annotations

import logging
import threading

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from ledgerman.adapters.noop import StubChannelClient
from ledgerman.conf import ledgerman_settings
from ledgerman.models.enums import Provider
from ledgerman.protocols.channel import ChannelClient

logger = logging.getLogger(__name__)


# Cached client instances
_lock = threading.Lock()
_clients: dict[str, ChannelClient] = {}


def _load_client(provider: str) -> ChannelClient:
    client_path = ledgerman_settings.CHANNEL_CLIENTS.get(provider)
    if not client_path:
        return StubChannelClient(provider)

    try:
        client_class = import_string(client_path)
    except ImportError as e:
        raise ImproperlyConfigured(
            f"Failed to import channel client '{client_path}' for {provider}: {e}"
        ) from e

    client = client_class()
    logger.debug("Loaded channel client for %s: %s", provider, client_path)
    return client


def get_channel_client(provider: str) -> ChannelClient:
    """
    Return the client for a provider.

    Raises:
        ImproperlyConfigured: If a configured client path cannot be imported
    """
    key = str(provider or "").upper()
    if key not in Provider.values:
        key = Provider.ETC.value

    client = _clients.get(key)
    if client is None:
        with _lock:
            client = _clients.get(key)
            if client is None:  # double-checked
                client = _load_client(key)
                _clients[key] = client
    return client


def reset_channel_clients() -> None:
    """Reset the cached clients. Useful for testing."""
    with _lock:
        _clients.clear()
