"""
Enums for Ledgerman models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class MovementType(models.TextChoices):
    """
    Kind of ledger entry.

    IN:       Goods received. Adds to on-hand stock.
    OUT:      Goods sold or issued. Subtracts from on-hand stock.
    PURCHASE: Goods ordered from a supplier. Does not touch on-hand stock;
              tracked against the IN movements that fulfill it.
    """
    IN = 'IN', _('In')
    OUT = 'OUT', _('Out')
    PURCHASE = 'PURCHASE', _('Purchase')


class Provider(models.TextChoices):
    """External sales channels."""
    NAVER = 'NAVER', _('Naver Smart Store')
    COUPANG = 'COUPANG', _('Coupang')
    ELEVENST = 'ELEVENST', _('11st')
    KREAM = 'KREAM', _('KREAM')
    ETC = 'ETC', _('Other')


class InventoryMode(models.TextChoices):
    """
    How central stock is exposed to channels.

    NORMAL:    Every channel sees stock minus a safety buffer.
    EXCLUSIVE: One designated channel sees everything, the rest see zero.
    """
    NORMAL = 'NORMAL', _('Normal')
    EXCLUSIVE = 'EXCLUSIVE', _('Exclusive')


class SyncJobStatus(models.TextChoices):
    """Sync job lifecycle status."""
    PENDING = 'PENDING', _('Pending')         # Waiting for next_run_at
    RUNNING = 'RUNNING', _('Running')         # Claimed by a runner
    SUCCEEDED = 'SUCCEEDED', _('Succeeded')   # Channel accepted the quantity
    FAILED = 'FAILED', _('Failed')            # Gave up after max attempts
