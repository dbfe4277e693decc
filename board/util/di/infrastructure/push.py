"""Push notification infrastructure providers."""

from dishka import Scope, provide

from board.adapter.push import HttpPushGateway
from board.config import Settings
from board.domain.service import NotificationGateway
from board.util.di.base import ProviderBase
from board.util.error import ConfigurationError


class PushProvider(ProviderBase):
    """Push notification component base."""

    __mock_component__ = "push"


class ProdPushProvider(PushProvider):
    """Production push provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_notification_gateway(self, settings: Settings) -> NotificationGateway:
        """Provide HTTP push gateway.

        Raises:
            ConfigurationError: If notifications are enabled without an endpoint
        """
        if settings.notifications.enabled and not settings.notifications.endpoint_url:
            raise ConfigurationError("Push endpoint URL must be configured")
        return HttpPushGateway(
            endpoint_url=settings.notifications.endpoint_url,
            api_key=settings.notifications.api_key,
            timeout_seconds=settings.notifications.timeout_seconds,
        )
