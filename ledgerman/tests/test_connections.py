"""
Tests for channel connections.
"""

import pytest

from ledgerman import LedgerError, inventory
from ledgerman.models import ChannelConnection


pytestmark = pytest.mark.django_db


NAVER_CREDENTIALS = {'client_id': 'abc', 'client_secret': 's3cret'}


class TestConnections:

    def test_set_connection(self, user):
        connection = inventory.set_connection(user, 'naver', NAVER_CREDENTIALS)

        assert connection.provider == 'NAVER'
        assert connection.credentials == NAVER_CREDENTIALS
        assert connection.is_active

    def test_set_connection_replaces(self, user):
        first = inventory.set_connection(user, 'NAVER', NAVER_CREDENTIALS)
        second = inventory.set_connection(user, 'NAVER', {'client_id': 'xyz'}, is_active=False)

        assert second.pk == first.pk
        assert ChannelConnection.objects.get().credentials == {'client_id': 'xyz'}

    @pytest.mark.parametrize('provider,credentials,code', [
        ('AMAZON', NAVER_CREDENTIALS, 'INVALID_PROVIDER'),
        ('NAVER', None, 'CREDENTIALS_REQUIRED'),
        ('NAVER', 'token', 'CREDENTIALS_REQUIRED'),
    ])
    def test_validation(self, user, provider, credentials, code):
        with pytest.raises(LedgerError) as exc:
            inventory.set_connection(user, provider, credentials)
        assert exc.value.code == code

    def test_connections_are_per_user(self, user, other_user):
        inventory.set_connection(user, 'KREAM', {'token': 'a'})
        inventory.set_connection(user, 'COUPANG', {'token': 'b'})
        inventory.set_connection(other_user, 'NAVER', {'token': 'c'})

        assert [c.provider for c in inventory.connections(user)] == ['COUPANG', 'KREAM']

    def test_connection_for_skips_inactive(self, user):
        inventory.set_connection(user, 'NAVER', NAVER_CREDENTIALS, is_active=False)
        assert inventory.connection_for(user, 'NAVER') is None

        inventory.set_connection(user, 'NAVER', NAVER_CREDENTIALS)
        assert inventory.connection_for(user, 'naver').credentials == NAVER_CREDENTIALS

    def test_remove_connection(self, user):
        inventory.set_connection(user, 'NAVER', NAVER_CREDENTIALS)

        inventory.remove_connection(user, 'NAVER')

        assert not ChannelConnection.objects.exists()

    def test_remove_missing_connection(self, user):
        with pytest.raises(LedgerError) as exc:
            inventory.remove_connection(user, 'NAVER')
        assert exc.value.code == 'NOT_FOUND'
