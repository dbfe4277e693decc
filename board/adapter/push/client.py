"""Push notification gateways.

The HTTP gateway posts one JSON document per notification to the push
service, which owns device tokens and delivery.
"""

from dataclasses import dataclass

import httpx
import logfire

from board.adapter.error import ProviderError
from board.domain.service.notification import NotificationGateway
from board.domain.value import NotificationKind, UserId


class HttpPushGateway(NotificationGateway):
    """Sends notifications to the push service over HTTP."""

    def __init__(
        self,
        endpoint_url: str,
        api_key: str | None = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        """Initialize push gateway.

        Args:
            endpoint_url: Push service endpoint receiving notification JSON
            api_key: Bearer token for the push service, if it requires one
            timeout_seconds: Request timeout
        """
        self.endpoint_url = endpoint_url
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds

    async def notify(
        self, user_id: UserId, kind: NotificationKind, payload: dict[str, str]
    ) -> None:
        """Deliver one notification.

        Raises:
            ProviderError: If the push service rejected the request or was
                unreachable
        """
        body = {"user_id": str(user_id), "type": kind.value, **payload}
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.endpoint_url,
                    json=body,
                    headers=headers,
                    timeout=self.timeout_seconds,
                )
        except httpx.HTTPError as e:
            logfire.error("Push notification HTTP error", error=str(e))
            raise ProviderError(f"HTTP error sending notification: {e}") from e

        if response.status_code >= 400:
            logfire.error(
                "Push notification rejected",
                status_code=response.status_code,
                error=response.text,
            )
            raise ProviderError(f"Push service returned {response.status_code}")

        logfire.info(
            "Push notification sent", user_id=str(user_id), kind=kind.value
        )


@dataclass(frozen=True)
class SentNotification:
    """A notification recorded by the mock gateway."""

    user_id: UserId
    kind: NotificationKind
    payload: dict[str, str]


class MockPushGateway(NotificationGateway):
    """Records notifications instead of sending them."""

    def __init__(self) -> None:
        self.sent: list[SentNotification] = []
        self.fail = False

    async def notify(
        self, user_id: UserId, kind: NotificationKind, payload: dict[str, str]
    ) -> None:
        """Record the notification, or fail when ``fail`` is set."""
        if self.fail:
            raise ProviderError("Mock push gateway failure")
        self.sent.append(SentNotification(user_id=user_id, kind=kind, payload=payload))

    def sent_to(self, user_id: UserId) -> list[SentNotification]:
        """Notifications recorded for one recipient."""
        return [n for n in self.sent if n.user_id == user_id]
