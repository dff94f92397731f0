"""
Ledgerman Protocols.

Defines interfaces for external system integration.
"""

from ledgerman.protocols.channel import ChannelClient, ChannelUpdateResult

__all__ = [
    "ChannelClient",
    "ChannelUpdateResult",
]
