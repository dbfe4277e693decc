"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from board.config import AuthSettings, CommentSettings, Settings
from board.util.di.base import ProviderBase
from board.util.tasks import BackgroundTaskDispatcher


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_comment_settings(self, settings: Settings) -> CommentSettings:
        """Provide comment settings."""
        return settings.comments

    @provide(scope=Scope.APP)
    def provide_task_dispatcher(self) -> BackgroundTaskDispatcher:
        """Provide the application-wide background task dispatcher."""
        return BackgroundTaskDispatcher()
