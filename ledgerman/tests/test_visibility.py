"""
Tests for visibility policies and channel targets.
"""

from types import SimpleNamespace

import pytest

from ledgerman import LedgerError, inventory
from ledgerman.models import ChannelListing, InventoryPolicy
from ledgerman.services.visibility import (
    DEFAULT_POLICY,
    SyncTarget,
    VisibilityPolicy,
    compute_targets,
    visible_quantity,
)


def listing(pk, provider):
    return SimpleNamespace(pk=pk, provider=provider)


class TestVisibleQuantity:
    """Pure policy arithmetic."""

    @pytest.mark.parametrize('stock', [0, -1, -40])
    def test_no_stock_shows_nothing(self, stock):
        exclusive = VisibilityPolicy(mode='EXCLUSIVE', exclusive_provider='NAVER')
        generous = VisibilityPolicy(buffer=0, min_visible=5)

        assert visible_quantity(stock, DEFAULT_POLICY, 'NAVER') == 0
        assert visible_quantity(stock, exclusive, 'NAVER') == 0
        assert visible_quantity(stock, generous, 'COUPANG') == 0

    def test_default_keeps_one_back(self):
        assert visible_quantity(10, DEFAULT_POLICY, 'NAVER') == 9

    def test_min_visible_wins_over_buffer(self):
        """Low stock still shows min_visible, even above true stock."""
        policy = VisibilityPolicy(buffer=3, min_visible=2)

        assert visible_quantity(1, policy, 'NAVER') == 2
        assert visible_quantity(4, policy, 'NAVER') == 2
        assert visible_quantity(10, policy, 'NAVER') == 7

    def test_zero_min_visible_floors_at_zero(self):
        policy = VisibilityPolicy(buffer=5, min_visible=0)
        assert visible_quantity(3, policy, 'KREAM') == 0

    def test_exclusive_channel_gets_everything(self):
        policy = VisibilityPolicy(mode='EXCLUSIVE', buffer=4, exclusive_provider='KREAM')

        assert visible_quantity(6, policy, 'KREAM') == 6
        assert visible_quantity(6, policy, 'NAVER') == 0

    def test_exclusive_without_provider_behaves_normally(self):
        policy = VisibilityPolicy(mode='EXCLUSIVE', buffer=2, min_visible=1)
        assert visible_quantity(6, policy, 'NAVER') == 4


class TestComputeTargets:

    def test_one_target_per_listing(self):
        policy = VisibilityPolicy(mode='EXCLUSIVE', exclusive_provider='COUPANG')
        listings = [listing(1, 'NAVER'), listing(2, 'COUPANG'), listing(3, 'ELEVENST')]

        targets = compute_targets(8, policy, listings)

        assert targets == [
            SyncTarget('NAVER', 1, 0),
            SyncTarget('COUPANG', 2, 8),
            SyncTarget('ELEVENST', 3, 0),
        ]

    def test_missing_policy_uses_defaults(self):
        assert compute_targets(5, None, [listing(9, 'ETC')]) == [SyncTarget('ETC', 9, 4)]

    def test_no_listings(self):
        assert compute_targets(5, DEFAULT_POLICY, []) == []


@pytest.mark.django_db
@pytest.mark.usefixtures('no_autosync')
class TestPolicies:
    """Tests for set_policy() and targets_for()."""

    def test_item_without_policy_gets_defaults(self, item):
        assert inventory.policy_for(item) == DEFAULT_POLICY

    def test_set_policy(self, user, item):
        policy = inventory.set_policy(
            user, item, mode='exclusive', buffer=0, exclusive_provider='naver',
        )

        assert policy.mode == 'EXCLUSIVE'
        assert policy.buffer == 0
        assert policy.min_visible == 1
        assert policy.exclusive_provider == 'NAVER'
        assert InventoryPolicy.objects.filter(item=item).count() == 1

    def test_set_policy_updates_in_place(self, user, item):
        inventory.set_policy(user, item, buffer=3, exclusive_provider='NAVER')
        policy = inventory.set_policy(user, item, min_visible=2)

        assert policy.buffer == 3
        assert policy.min_visible == 2
        assert policy.exclusive_provider is None
        assert InventoryPolicy.objects.filter(item=item).count() == 1

    @pytest.mark.parametrize('kwargs,code', [
        ({'mode': 'HIDDEN'}, 'INVALID_MODE'),
        ({'exclusive_provider': 'AMAZON'}, 'INVALID_PROVIDER'),
        ({'buffer': -1}, 'INVALID_QUANTITY'),
        ({'min_visible': 'many'}, 'INVALID_QUANTITY'),
    ])
    def test_set_policy_validation(self, user, item, kwargs, code):
        with pytest.raises(LedgerError) as exc:
            inventory.set_policy(user, item, **kwargs)
        assert exc.value.code == code

    def test_targets_for(self, user, stocked_item, naver_listing, coupang_listing):
        inventory.set_policy(user, stocked_item, mode='EXCLUSIVE', exclusive_provider='NAVER')

        central, targets = inventory.targets_for(user, stocked_item)

        assert central == 10
        assert targets == [
            SyncTarget('NAVER', naver_listing.pk, 10),
            SyncTarget('COUPANG', coupang_listing.pk, 0),
        ]

    def test_inactive_listings_get_no_target(self, user, stocked_item, naver_listing,
                                             coupang_listing):
        inventory.deactivate_listing(user, stocked_item, 'COUPANG')

        _, targets = inventory.targets_for(user, stocked_item)

        assert targets == [SyncTarget('NAVER', naver_listing.pk, 9)]


@pytest.mark.django_db
@pytest.mark.usefixtures('no_autosync')
class TestListings:

    def test_set_listing_upserts(self, user, item, naver_listing):
        updated = inventory.set_listing(user, item, 'naver', channel_product_id='NV-2002')

        assert updated.pk == naver_listing.pk
        assert updated.channel_product_id == 'NV-2002'
        assert updated.channel_option_id is None
        assert ChannelListing.objects.filter(item=item).count() == 1

    def test_reactivate_listing(self, user, item, naver_listing):
        assert inventory.deactivate_listing(user, item, 'NAVER') == 1
        listing = inventory.set_listing(user, item, 'NAVER', channel_product_id='NV-1001')
        assert listing.is_active

    def test_unknown_provider(self, user, item):
        with pytest.raises(LedgerError) as exc:
            inventory.set_listing(user, item, 'AMAZON')
        assert exc.value.code == 'INVALID_PROVIDER'

    def test_listing_for_other_users_item(self, other_user, item):
        with pytest.raises(LedgerError) as exc:
            inventory.set_listing(other_user, item, 'NAVER')
        assert exc.value.code == 'NOT_FOUND'
