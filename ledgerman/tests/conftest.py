"""
Pytest fixtures for Ledgerman tests.
"""

from datetime import timedelta

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone

from ledgerman import inventory
from ledgerman.adapters import reset_channel_clients


User = get_user_model()


@pytest.fixture(autouse=True)
def fresh_channel_clients():
    """Channel clients are cached per process; start every test clean."""
    reset_channel_clients()
    yield
    reset_channel_clients()


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username='seller',
        password='testpass123'
    )


@pytest.fixture
def other_user(db):
    """A second user whose data must stay invisible to `user`."""
    return User.objects.create_user(
        username='other',
        password='testpass123'
    )


@pytest.fixture
def category(user):
    """Create a test category."""
    return inventory.create_category(user, 'Sneakers')


@pytest.fixture
def item(user, category):
    """Create a test item without channel listings."""
    return inventory.create_item(user, category, 'Air Runner', size='270')


@pytest.fixture
def stocked_item(user, item):
    """Item with 10 units on hand."""
    inventory.record(user, item, 'IN', 10)
    return item


@pytest.fixture
def naver_listing(user, item):
    """Active Naver listing for item."""
    return inventory.set_listing(
        user, item, 'NAVER',
        channel_product_id='NV-1001',
        channel_option_id='OPT-270',
    )


@pytest.fixture
def coupang_listing(user, item):
    """Active Coupang listing for item."""
    return inventory.set_listing(
        user, item, 'COUPANG',
        channel_product_id='CP-55',
    )


@pytest.fixture
def channel_clients(settings):
    """
    Route providers to test clients.

    Usage:
        channel_clients(NAVER='ledgerman.tests.channels.FailingChannelClient')
    """
    def configure(**paths):
        settings.LEDGERMAN = {**getattr(settings, 'LEDGERMAN', {}), 'CHANNEL_CLIENTS': paths}
        reset_channel_clients()
    return configure


@pytest.fixture
def no_autosync(settings):
    """Disable enqueueing after movements."""
    settings.LEDGERMAN = {**getattr(settings, 'LEDGERMAN', {}), 'AUTO_SYNC': False}


@pytest.fixture
def today():
    """Return today's date."""
    return timezone.localdate()


@pytest.fixture
def yesterday():
    return timezone.localdate() - timedelta(days=1)
