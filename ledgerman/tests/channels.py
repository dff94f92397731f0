"""
Channel clients used by the tests.
"""

from ledgerman.protocols.channel import ChannelUpdateResult


class RecordingChannelClient:
    """Accepts every update and remembers it."""

    calls: list[tuple[int, int]] = []

    def update_stock(self, listing, target_qty):
        type(self).calls.append((listing.pk, target_qty))
        return ChannelUpdateResult(ok=True)


class FailingChannelClient:
    """Channel API is down."""

    def update_stock(self, listing, target_qty):
        raise ConnectionError("channel unreachable")


class RejectingChannelClient:
    """Channel answers but refuses the update."""

    def update_stock(self, listing, target_qty):
        return ChannelUpdateResult(ok=False, message="option is not on sale")
