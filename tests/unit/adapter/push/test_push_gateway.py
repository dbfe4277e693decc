"""Unit tests for the push notification gateways."""

import pytest

from board.adapter.error import ProviderError
from board.adapter.push import HttpPushGateway, MockPushGateway
from board.domain.value import NotificationKind
from tests.conftest import new_user_id


class TestHttpPushGateway:
    """Tests for HttpPushGateway."""

    @pytest.mark.asyncio
    async def test_unreachable_service_raises_provider_error(self):
        # Arrange - nothing listens on port 9
        gateway = HttpPushGateway("http://127.0.0.1:9/notify", timeout_seconds=1.0)

        # Act & Assert
        with pytest.raises(ProviderError):
            await gateway.notify(
                new_user_id(), NotificationKind.COMMENT, {"title": "New comment"}
            )


class TestMockPushGateway:
    """Tests for MockPushGateway."""

    @pytest.mark.asyncio
    async def test_records_notifications_per_recipient(self):
        gateway = MockPushGateway()
        alice, bob = new_user_id(), new_user_id()

        await gateway.notify(alice, NotificationKind.REPLY, {"title": "a"})
        await gateway.notify(bob, NotificationKind.COMMENT_LIKE, {"title": "b"})

        assert [n.kind for n in gateway.sent_to(alice)] == [NotificationKind.REPLY]
        assert len(gateway.sent) == 2

    @pytest.mark.asyncio
    async def test_fail_flag_raises(self):
        gateway = MockPushGateway()
        gateway.fail = True

        with pytest.raises(ProviderError):
            await gateway.notify(new_user_id(), NotificationKind.REPLY, {})
