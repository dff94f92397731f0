"""
Ledgerman configuration.

Usage in settings.py:
    LEDGERMAN = {
        "CHANNEL_CLIENTS": {"NAVER": "myshop.channels.NaverCommerceClient"},
        "SYNC_BATCH_LIMIT": 20,
        "SYNC_MAX_ATTEMPTS": 5,
        "SYNC_LOCK_TTL_MINUTES": 15,
        "AUTO_SYNC": True,
    }
"""

from dataclasses import dataclass, field
from typing import Any

from django.conf import settings


@dataclass
class LedgermanSettings:
    """Ledgerman configuration settings."""

    # Provider -> dotted path of a ChannelClient class
    CHANNEL_CLIENTS: dict[str, str] = field(default_factory=dict)

    # Default batch size for run_due()
    SYNC_BATCH_LIMIT: int = 20

    # Failures before a job becomes FAILED
    SYNC_MAX_ATTEMPTS: int = 5

    # Retry delay (minutes) after attempt 1, 2, ...; last entry repeats
    SYNC_BACKOFF_MINUTES: tuple[int, ...] = (1, 5, 15, 30, 60)

    # RUNNING jobs locked longer than this are reclaimed (0 = never)
    SYNC_LOCK_TTL_MINUTES: int = 15

    # Enqueue channel sync after movements on items with active listings
    AUTO_SYNC: bool = True

    # Threshold used when an item enables alerts without its own threshold
    DEFAULT_LOW_STOCK_THRESHOLD: int = 10

    # Category that receives the items of a deleted category
    UNCATEGORIZED_NAME: str = 'Uncategorized'


def get_ledgerman_settings() -> LedgermanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "LEDGERMAN", {})
    return LedgermanSettings(**{
        k: v for k, v in user_settings.items()
        if k in LedgermanSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_ledgerman_settings(), name)


ledgerman_settings = _LazySettings()
