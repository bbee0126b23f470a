"""Push-notification service."""

from typing import Sequence

from git_source.config.settings import Settings
from git_source.core.models.notification import NotificationResult
from git_source.git.uri import RepositoryURI
from git_source.notifications.matcher import PushNotificationMatcher
from git_source.notifications.registry import SourceRegistry
from git_source.notifications.scheduler import IndexingScheduler
from git_source.traits.composer import TraitComposer


class NotificationService:
    """Service for incoming commit notifications."""

    def __init__(self, matcher: PushNotificationMatcher) -> None:
        self._matcher = matcher

    @classmethod
    def create(
        cls,
        registry: SourceRegistry,
        scheduler: IndexingScheduler,
        settings: Settings,
    ) -> "NotificationService":
        composer = TraitComposer(
            ignore_tag_discovery_trait=settings.ignore_tag_discovery_trait
        )
        return cls(PushNotificationMatcher(registry, scheduler, composer=composer))

    def notify_commit(
        self,
        origin: str,
        url: str,
        sha1: str | None = None,
        branches: Sequence[str] | None = None,
    ) -> NotificationResult:
        """Route a commit notification to the sources it concerns.

        Raises InvalidURIError if ``url`` is not a repository locator.
        """
        RepositoryURI.parse(url)
        return self._matcher.on_notify_commit(
            origin=origin,
            uri=url,
            sha1=sha1,
            branches=branches or (),
        )
