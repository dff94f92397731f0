"""
Visibility policy engine: how much stock each channel gets to show.

compute_targets() is pure; VisibilityPolicies reads policies and listings
from the database and writes them.
"""

from dataclasses import dataclass
from typing import Iterable

from ledgerman.exceptions import LedgerError
from ledgerman.models.enums import InventoryMode, Provider
from ledgerman.models.listing import ChannelListing
from ledgerman.models.policy import InventoryPolicy
from ledgerman.services.items import get_item
from ledgerman.services.ledger import StockLedger


@dataclass(frozen=True)
class VisibilityPolicy:
    mode: str = InventoryMode.NORMAL
    buffer: int = 1
    min_visible: int = 1
    exclusive_provider: str | None = None

    @classmethod
    def from_model(cls, policy: InventoryPolicy | None) -> 'VisibilityPolicy':
        if policy is None:
            return DEFAULT_POLICY
        return cls(
            mode=policy.mode or InventoryMode.NORMAL,
            buffer=policy.buffer if policy.buffer is not None else 1,
            min_visible=policy.min_visible if policy.min_visible is not None else 1,
            exclusive_provider=policy.exclusive_provider or None,
        )


DEFAULT_POLICY = VisibilityPolicy()


@dataclass(frozen=True)
class SyncTarget:
    """Quantity one listing should publish."""

    provider: str
    listing_id: int
    target_qty: int


def visible_quantity(central_stock: int, policy: VisibilityPolicy, provider: str) -> int:
    """
    Quantity to publish on one channel.

    - No stock: 0, whatever the policy says.
    - EXCLUSIVE with a designated channel: everything there, 0 elsewhere.
    - Otherwise: max(min_visible, stock - buffer). May exceed true stock
      when stock is below min_visible.
    """
    if central_stock <= 0:
        return 0
    if policy.mode == InventoryMode.EXCLUSIVE and policy.exclusive_provider:
        return central_stock if provider == policy.exclusive_provider else 0
    return max(0, max(policy.min_visible, central_stock - policy.buffer))


def compute_targets(central_stock: int, policy: VisibilityPolicy | None,
                    listings: Iterable) -> list[SyncTarget]:
    """One SyncTarget per listing, in the order given."""
    policy = policy or DEFAULT_POLICY
    return [
        SyncTarget(
            provider=listing.provider,
            listing_id=listing.pk,
            target_qty=visible_quantity(central_stock, policy, listing.provider),
        )
        for listing in listings
    ]


def normalize_provider(raw, allow_none: bool = False) -> str | None:
    """Canonical provider name or raise INVALID_PROVIDER."""
    if raw in (None, '') and allow_none:
        return None
    value = str(raw or '').strip().upper()
    if value not in Provider.values:
        raise LedgerError('INVALID_PROVIDER', provider=raw)
    return value


def _non_negative(raw, field: str) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise LedgerError('INVALID_QUANTITY', field=field, requested=raw) from None
    if value < 0:
        raise LedgerError('INVALID_QUANTITY', field=field, requested=raw)
    return value


class VisibilityPolicies:
    """Policy and listing persistence plus target computation."""

    @classmethod
    def policy_for(cls, item) -> VisibilityPolicy:
        policy = InventoryPolicy.objects.filter(item=item).first()
        return VisibilityPolicy.from_model(policy)

    @classmethod
    def set_policy(cls, user, item, mode=None, buffer=None,
                   min_visible=None, exclusive_provider=None) -> InventoryPolicy:
        """
        Create or update an item's policy. Omitted fields keep their value.

        exclusive_provider is always overwritten (None clears it).
        """
        item = get_item(user, item)
        defaults = {'exclusive_provider': normalize_provider(exclusive_provider, allow_none=True)}
        if mode is not None:
            value = str(mode).strip().upper()
            if value not in InventoryMode.values:
                raise LedgerError('INVALID_MODE', mode=mode)
            defaults['mode'] = value
        if buffer is not None:
            defaults['buffer'] = _non_negative(buffer, 'buffer')
        if min_visible is not None:
            defaults['min_visible'] = _non_negative(min_visible, 'min_visible')

        policy, _ = InventoryPolicy.objects.update_or_create(
            item=item, defaults={'user': user, **defaults},
        )
        return policy

    @classmethod
    def set_listing(cls, user, item, provider, channel_product_id=None,
                    channel_option_id=None, external_sku=None,
                    is_active: bool = True) -> ChannelListing:
        """Create or replace the listing of an item on one channel."""
        item = get_item(user, item)
        listing, _ = ChannelListing.objects.update_or_create(
            user=user,
            provider=normalize_provider(provider),
            item=item,
            defaults={
                'channel_product_id': channel_product_id,
                'channel_option_id': channel_option_id,
                'external_sku': external_sku,
                'is_active': bool(is_active),
            },
        )
        return listing

    @classmethod
    def deactivate_listing(cls, user, item, provider) -> int:
        """Stop syncing an item to a channel. Returns rows changed."""
        item = get_item(user, item)
        return ChannelListing.objects.filter(
            user=user, item=item, provider=normalize_provider(provider),
        ).update(is_active=False)

    @classmethod
    def active_listings(cls, user, item):
        return ChannelListing.objects.filter(user=user, item=item, is_active=True).order_by('id')

    @classmethod
    def targets_for(cls, user, item) -> tuple[int, list[SyncTarget]]:
        """(central stock, targets for every active listing) of an item."""
        item = get_item(user, item)
        central = StockLedger.stock(item)
        targets = compute_targets(central, cls.policy_for(item), cls.active_listings(user, item))
        return central, targets
