"""Domain layer DI providers."""

from dishka import Scope, provide

from board.config import AuthSettings, CommentSettings, Settings
from board.domain.repository import (
    CommentRepository,
    LikeRepository,
    ThreadRepository,
    TransactionManager,
)
from board.domain.service import (
    AuthGuard,
    CommentService,
    CounterLedger,
    DeletionPolicy,
    NotificationGateway,
    NotificationService,
    PaginationEngine,
    ProfileDirectory,
    ProfileService,
    ThreadResolver,
    ThreadService,
)
from board.util.di.base import ProviderBase
from board.util.tasks import BackgroundTaskDispatcher


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_guard(self, auth_settings: AuthSettings) -> AuthGuard:
        """Provide token verification service."""
        return AuthGuard(auth_settings=auth_settings)

    @provide
    def get_thread_resolver(
        self, comment_repository: CommentRepository, settings: CommentSettings
    ) -> ThreadResolver:
        """Provide reply tree resolver."""
        return ThreadResolver(
            comment_repository=comment_repository,
            filter_batch_size=settings.filter_batch_size,
        )

    @provide
    def get_pagination_engine(
        self,
        comment_repository: CommentRepository,
        thread_resolver: ThreadResolver,
        settings: CommentSettings,
    ) -> PaginationEngine:
        """Provide root comment pagination."""
        return PaginationEngine(
            comment_repository=comment_repository,
            thread_resolver=thread_resolver,
            settings=settings,
        )

    @provide
    def get_counter_ledger(self) -> CounterLedger:
        """Provide counter ledger."""
        return CounterLedger()

    @provide
    def get_deletion_policy(
        self, counter_ledger: CounterLedger, settings: CommentSettings
    ) -> DeletionPolicy:
        """Provide deletion policy."""
        return DeletionPolicy(counter_ledger=counter_ledger, settings=settings)

    @provide
    def get_profile_service(
        self, profile_directory: ProfileDirectory, settings: Settings
    ) -> ProfileService:
        """Provide batched profile resolution."""
        return ProfileService(
            profile_directory=profile_directory,
            batch_size=settings.profiles.batch_size,
            unknown_name=settings.comments.unknown_author_name,
        )

    @provide
    def get_notification_service(
        self,
        gateway: NotificationGateway,
        dispatcher: BackgroundTaskDispatcher,
        settings: Settings,
    ) -> NotificationService:
        """Provide background notification service."""
        return NotificationService(
            gateway=gateway,
            dispatcher=dispatcher,
            preview_length=settings.comments.notification_preview_length,
            enabled=settings.notifications.enabled,
        )

    @provide
    def get_comment_service(
        self,
        thread_repository: ThreadRepository,
        like_repository: LikeRepository,
        transaction_manager: TransactionManager,
        pagination_engine: PaginationEngine,
        counter_ledger: CounterLedger,
        deletion_policy: DeletionPolicy,
        profile_service: ProfileService,
        notification_service: NotificationService,
        settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            thread_repository=thread_repository,
            like_repository=like_repository,
            transaction_manager=transaction_manager,
            pagination_engine=pagination_engine,
            counter_ledger=counter_ledger,
            deletion_policy=deletion_policy,
            profile_service=profile_service,
            notification_service=notification_service,
            settings=settings,
        )

    @provide
    def get_thread_service(
        self,
        transaction_manager: TransactionManager,
        counter_ledger: CounterLedger,
        profile_service: ProfileService,
        notification_service: NotificationService,
    ) -> ThreadService:
        """Provide thread domain service."""
        return ThreadService(
            transaction_manager=transaction_manager,
            counter_ledger=counter_ledger,
            profile_service=profile_service,
            notification_service=notification_service,
        )
