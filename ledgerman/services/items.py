"""
Items and categories: user-scoped catalog bookkeeping.

Every lookup is scoped by the owning user: another user's item is
reported as NOT_FOUND, never as a permission error.
"""

import logging

from django.db import transaction

from ledgerman.conf import ledgerman_settings
from ledgerman.exceptions import LedgerError
from ledgerman.models.category import Category
from ledgerman.models.item import Item

logger = logging.getLogger('ledgerman')

ITEM_FIELDS = ('name', 'size', 'image_url', 'barcode', 'sku', 'memo',
               'low_stock_alert', 'low_stock_threshold')


def _pk(obj):
    return getattr(obj, 'pk', obj)


def _blank_to_none(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def get_item(user, item, for_update: bool = False) -> Item:
    """Resolve an Item instance or pk owned by user."""
    qs = Item.objects.all()
    if for_update:
        qs = qs.select_for_update()
    try:
        return qs.get(pk=_pk(item), user=user)
    except (Item.DoesNotExist, ValueError, TypeError):
        raise LedgerError('NOT_FOUND', what='item', id=_pk(item)) from None


def get_category(user, category) -> Category:
    try:
        return Category.objects.get(pk=_pk(category), user=user)
    except (Category.DoesNotExist, ValueError, TypeError):
        raise LedgerError('NOT_FOUND', what='category', id=_pk(category)) from None


class ItemCatalog:
    """Category and item bookkeeping."""

    @classmethod
    def create_category(cls, user, name: str, sort_order: int = 0) -> Category:
        name = (name or '').strip()
        if not name:
            raise LedgerError('NAME_REQUIRED', what='category')
        category, _ = Category.objects.get_or_create(
            user=user, name=name, defaults={'sort_order': sort_order},
        )
        return category

    @classmethod
    def update_category(cls, user, category, name=None, sort_order=None) -> Category:
        """
        Rename and/or reorder a category. Omitted fields keep their value.

        Raises:
            LedgerError('NAME_REQUIRED'): Blank name
            LedgerError('DUPLICATE_NAME'): Another category already has the name
            LedgerError('INVALID_SORT_ORDER'): sort_order is not a whole number
        """
        category = get_category(user, category)
        if name is not None:
            name = str(name).strip()
            if not name:
                raise LedgerError('NAME_REQUIRED', what='category')
            if Category.objects.filter(user=user, name=name).exclude(pk=category.pk).exists():
                raise LedgerError('DUPLICATE_NAME', what='category', name=name)
            category.name = name
        if sort_order is not None:
            try:
                category.sort_order = int(sort_order)
            except (TypeError, ValueError):
                raise LedgerError('INVALID_SORT_ORDER', sort_order=sort_order) from None
        category.save()
        return category

    @classmethod
    def uncategorized(cls, user) -> Category:
        """The user's fallback category, created on first use."""
        category, _ = Category.objects.get_or_create(
            user=user,
            name=ledgerman_settings.UNCATEGORIZED_NAME,
            defaults={'sort_order': 0},
        )
        return category

    @classmethod
    def delete_category(cls, user, category) -> Category:
        """
        Delete a category, moving its items to the uncategorized one.

        Returns:
            The category that received the items

        Raises:
            LedgerError('PROTECTED_CATEGORY'): Deleting the uncategorized category
        """
        with transaction.atomic():
            target = get_category(user, category)
            fallback = cls.uncategorized(user)
            if fallback.pk == target.pk:
                raise LedgerError('PROTECTED_CATEGORY', id=target.pk)

            moved = Item.objects.filter(user=user, category=target).update(category=fallback)
            target.delete()

        logger.info(
            "ledger.category.deleted",
            extra={"category_id": _pk(category), "moved_items": moved, "user_id": user.pk},
        )
        return fallback

    @classmethod
    def create_item(cls, user, category, name: str, **fields) -> Item:
        """
        Create an item in one of the user's categories.

        Blank barcode/SKU are stored as NULL so they never collide.
        """
        name = (name or '').strip()
        if not name:
            raise LedgerError('NAME_REQUIRED', what='item')

        data = {k: v for k, v in fields.items() if k in ITEM_FIELDS}
        data['barcode'] = _blank_to_none(data.get('barcode'))
        data['sku'] = _blank_to_none(data.get('sku'))
        if data.get('low_stock_alert') and data.get('low_stock_threshold') is None:
            data['low_stock_threshold'] = ledgerman_settings.DEFAULT_LOW_STOCK_THRESHOLD

        item = Item.objects.create(
            user=user,
            category=get_category(user, category),
            name=name,
            **data,
        )
        logger.info("ledger.item.created", extra={"item_id": item.pk, "user_id": user.pk})
        return item

    @classmethod
    def find_by_barcode(cls, user, barcode) -> Item | None:
        """The user's item with this barcode, or None."""
        barcode = str(barcode or '').strip()
        if not barcode:
            raise LedgerError('BARCODE_REQUIRED')
        return Item.objects.filter(user=user, barcode=barcode).select_related('category').first()

    @classmethod
    def update_item(cls, user, item, category=None, **fields) -> Item:
        """Update the given fields only."""
        with transaction.atomic():
            item = get_item(user, item, for_update=True)
            if category is not None:
                item.category = get_category(user, category)
            for key, value in fields.items():
                if key not in ITEM_FIELDS:
                    continue
                if key in ('barcode', 'sku'):
                    value = _blank_to_none(value)
                if key == 'name':
                    value = (value or '').strip()
                    if not value:
                        raise LedgerError('NAME_REQUIRED', what='item')
                setattr(item, key, value)
            item.save()
            return item

    @classmethod
    def set_low_stock_alert(cls, user, item, enabled: bool, threshold: int | None = None) -> Item:
        item = get_item(user, item)
        item.low_stock_alert = bool(enabled)
        if threshold is not None:
            item.low_stock_threshold = max(0, int(threshold))
        elif item.low_stock_alert and item.low_stock_threshold is None:
            item.low_stock_threshold = ledgerman_settings.DEFAULT_LOW_STOCK_THRESHOLD
        item.save(update_fields=['low_stock_alert', 'low_stock_threshold', 'updated_at'])
        return item

    @classmethod
    def delete_item(cls, user, item) -> None:
        """Delete an item with its movements, policy, listings and jobs."""
        item = get_item(user, item)
        item_id = item.pk
        item.delete()
        logger.info("ledger.item.deleted", extra={"item_id": item_id, "user_id": user.pk})
