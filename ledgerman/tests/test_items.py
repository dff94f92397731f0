"""
Tests for the item catalog.
"""

import pytest
from django.db import IntegrityError

from ledgerman import LedgerError, inventory
from ledgerman.models import Category, InventoryPolicy, Item, Movement, SyncJob


pytestmark = pytest.mark.django_db


class TestCategories:

    def test_create_is_idempotent_per_name(self, user):
        first = inventory.create_category(user, ' Boots ')
        again = inventory.create_category(user, 'Boots')

        assert first.pk == again.pk
        assert first.name == 'Boots'

    def test_name_required(self, user):
        with pytest.raises(LedgerError) as exc:
            inventory.create_category(user, '   ')
        assert exc.value.code == 'NAME_REQUIRED'


class TestItems:

    def test_blank_codes_stored_as_null(self, user, category):
        a = inventory.create_item(user, category, 'A', barcode='', sku='  ')
        b = inventory.create_item(user, category, 'B', barcode='', sku='')

        assert a.barcode is None and a.sku is None
        assert b.barcode is None

    def test_duplicate_sku_rejected(self, user, category):
        inventory.create_item(user, category, 'A', sku='SKU-1')
        with pytest.raises(IntegrityError):
            inventory.create_item(user, category, 'B', sku='SKU-1')

    def test_same_sku_for_other_user(self, user, other_user, category):
        theirs = inventory.create_category(other_user, 'Sneakers')
        inventory.create_item(user, category, 'A', sku='SKU-1')
        assert inventory.create_item(other_user, theirs, 'A', sku='SKU-1').pk

    def test_alert_gets_default_threshold(self, user, category):
        item = inventory.create_item(user, category, 'A', low_stock_alert=True)
        assert item.low_stock_threshold == 10

    def test_foreign_category(self, other_user, category):
        with pytest.raises(LedgerError) as exc:
            inventory.create_item(other_user, category, 'A')
        assert exc.value.code == 'NOT_FOUND'

    def test_update_item(self, user, item):
        updated = inventory.update_item(user, item, name=' Air Runner II ', size='275',
                                        barcode='', owner='ignored')

        assert updated.name == 'Air Runner II'
        assert updated.size == '275'
        assert updated.barcode is None

    def test_update_requires_name(self, user, item):
        with pytest.raises(LedgerError) as exc:
            inventory.update_item(user, item, name='')
        assert exc.value.code == 'NAME_REQUIRED'

    def test_set_low_stock_alert(self, user, item):
        assert inventory.set_low_stock_alert(user, item, True).low_stock_threshold == 10
        assert inventory.set_low_stock_alert(user, item, True, threshold=-2).low_stock_threshold == 0

    def test_delete_cascades(self, user, stocked_item, naver_listing):
        inventory.set_policy(user, stocked_item, buffer=2)
        inventory.sync_item(user, stocked_item)

        inventory.delete_item(user, stocked_item)

        assert not Item.objects.exists()
        assert not Movement.objects.exists()
        assert not InventoryPolicy.objects.exists()
        assert not SyncJob.objects.exists()

    def test_delete_other_users_item(self, other_user, item):
        with pytest.raises(LedgerError) as exc:
            inventory.delete_item(other_user, item)
        assert exc.value.code == 'NOT_FOUND'


class TestCategoryChanges:
    """Tests for update_category() and delete_category()."""

    def test_rename_and_reorder(self, user, category):
        updated = inventory.update_category(user, category, name=' Runners ', sort_order='3')

        assert updated.name == 'Runners'
        assert updated.sort_order == 3

    def test_rename_to_taken_name(self, user, category):
        inventory.create_category(user, 'Boots')

        with pytest.raises(LedgerError) as exc:
            inventory.update_category(user, category, name='Boots')
        assert exc.value.code == 'DUPLICATE_NAME'

    def test_keeping_own_name_is_fine(self, user, category):
        assert inventory.update_category(user, category, name='Sneakers').name == 'Sneakers'

    @pytest.mark.parametrize('kwargs,code', [
        ({'name': ''}, 'NAME_REQUIRED'),
        ({'sort_order': 'first'}, 'INVALID_SORT_ORDER'),
    ])
    def test_update_validation(self, user, category, kwargs, code):
        with pytest.raises(LedgerError) as exc:
            inventory.update_category(user, category, **kwargs)
        assert exc.value.code == code

    def test_delete_moves_items_to_uncategorized(self, user, category, item):
        fallback = inventory.delete_category(user, category)

        item.refresh_from_db()
        assert fallback.name == 'Uncategorized'
        assert item.category == fallback
        assert not Category.objects.filter(pk=category.pk).exists()

    def test_uncategorized_cannot_be_deleted(self, user, category):
        fallback = inventory.uncategorized(user)

        with pytest.raises(LedgerError) as exc:
            inventory.delete_category(user, fallback)
        assert exc.value.code == 'PROTECTED_CATEGORY'

    def test_uncategorized_name_from_settings(self, user, category, settings):
        settings.LEDGERMAN = {'UNCATEGORIZED_NAME': 'Misc'}
        assert inventory.delete_category(user, category).name == 'Misc'

    def test_delete_other_users_category(self, other_user, category):
        with pytest.raises(LedgerError) as exc:
            inventory.delete_category(other_user, category)
        assert exc.value.code == 'NOT_FOUND'


class TestBarcodeLookup:

    def test_found(self, user, category):
        item = inventory.create_item(user, category, 'A', barcode='8801234567890')
        assert inventory.find_by_barcode(user, ' 8801234567890 ') == item

    def test_missing_or_foreign(self, user, other_user, category):
        inventory.create_item(user, category, 'A', barcode='8801234567890')

        assert inventory.find_by_barcode(user, '000') is None
        assert inventory.find_by_barcode(other_user, '8801234567890') is None

    def test_blank_barcode(self, user):
        with pytest.raises(LedgerError) as exc:
            inventory.find_by_barcode(user, '  ')
        assert exc.value.code == 'BARCODE_REQUIRED'
