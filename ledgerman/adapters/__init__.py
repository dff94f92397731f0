"""
Ledgerman Adapters.

Implementations of protocols for external systems.
"""

from ledgerman.adapters.noop import StubChannelClient
from ledgerman.adapters.registry import get_channel_client, reset_channel_clients

__all__ = [
    "StubChannelClient",
    "get_channel_client",
    "reset_channel_clients",
]
