"""
Stub channel clients: log the update and report success.

These implement the ChannelClient protocol without calling any marketplace
API. Every provider uses one until a real client is configured:

    LEDGERMAN = {
        "CHANNEL_CLIENTS": {"NAVER": "myshop.channels.NaverCommerceClient"},
    }

WARNING: A stub never changes anything on the channel. Jobs will show
SUCCEEDED even though no quantity was published.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ledgerman.protocols.channel import ChannelUpdateResult

if TYPE_CHECKING:
    from ledgerman.models.listing import ChannelListing

logger = logging.getLogger(__name__)


class StubChannelClient:
    """Logging-only client for one provider."""

    def __init__(self, provider: str = "ETC"):
        self.provider = provider

    def update_stock(self, listing: ChannelListing, target_qty: int) -> ChannelUpdateResult:
        logger.info(
            "channel.stub.update_stock",
            extra={
                "provider": self.provider,
                "listing_id": getattr(listing, "pk", None),
                "channel_product_id": getattr(listing, "channel_product_id", None),
                "channel_option_id": getattr(listing, "channel_option_id", None),
                "target_qty": target_qty,
            },
        )
        return ChannelUpdateResult(ok=True)

    def __repr__(self) -> str:
        return f"<StubChannelClient {self.provider}>"
