"""
Channel Client Protocol: Interface for publishing stock to sales channels.

Ledgerman defines this protocol; each marketplace integration implements it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ledgerman.models.listing import ChannelListing


@dataclass(frozen=True)
class ChannelUpdateResult:
    """Outcome of a stock update on an external channel."""

    ok: bool
    message: str | None = None


@runtime_checkable
class ChannelClient(Protocol):
    """
    Protocol for external channel stock updates.

    Implementations must be idempotent: the sync runner may call
    update_stock again with the same or a newer target after a failure.
    Errors may be reported either by raising or by returning ok=False.
    """

    def update_stock(self, listing: ChannelListing, target_qty: int) -> ChannelUpdateResult:
        """
        Set the quantity shown for a listing.

        Args:
            listing: The channel listing (product/option identifiers)
            target_qty: Quantity to publish (>= 0)

        Returns:
            ChannelUpdateResult
        """
        ...
