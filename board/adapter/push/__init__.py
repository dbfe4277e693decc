"""Push notification adapter."""

from .client import HttpPushGateway, MockPushGateway, SentNotification

__all__ = ["HttpPushGateway", "MockPushGateway", "SentNotification"]
