"""Routing push notifications to the sources they concern."""

from typing import Sequence

import structlog

from git_source.core.exceptions import InvalidURIError
from git_source.core.models.head import Head, Revision
from git_source.core.models.notification import (
    AffectedHead,
    MessageContributor,
    NotificationEvent,
    NotificationResult,
    TriggeredContributor,
)
from git_source.core.security import PrivilegeScope
from git_source.git.uri import UriMatcher, loosely_matches
from git_source.notifications.registry import SourceRegistry
from git_source.notifications.scheduler import IndexingScheduler
from git_source.sources.models import GitSource, SourceOwner
from git_source.traits.builtin import IgnorePushNotificationsTrait
from git_source.traits.composer import TraitComposer
from git_source.traits.context import DiscoveryConfig

logger = structlog.get_logger(__name__)


class PushNotificationMatcher:
    """Decides which tracked sources a notification concerns.

    The registry is read under ``scope``, which defaults to the elevated
    system scope: sources a caller cannot see still get notified, since
    scheduling work grants no access to the resulting builds.

    When the notification names branches, each matching source gets one
    head per branch (or none if its filters exclude the branch). Without
    branches, every matching source's owner is asked to re-index.
    """

    def __init__(
        self,
        registry: SourceRegistry,
        scheduler: IndexingScheduler,
        uri_matcher: UriMatcher = loosely_matches,
        composer: TraitComposer | None = None,
        scope: PrivilegeScope | None = None,
    ) -> None:
        self._registry = registry
        self._scheduler = scheduler
        self._uri_matcher = uri_matcher
        self._composer = composer or TraitComposer()
        self._scope = scope or PrivilegeScope.system()

    def on_notify_commit(
        self,
        origin: str,
        uri: str,
        sha1: str | None = None,
        branches: Sequence[str] = (),
    ) -> NotificationResult:
        """Match a notification against every tracked source.

        A ``uri`` that cannot be compared with a source's remote makes
        that source non-matching; it never aborts the call.
        """
        event = NotificationEvent(
            origin=origin,
            uri=uri,
            sha1=sha1 or None,
            branches=tuple(b for b in branches if b),
        )
        entries = self._registry.entries(self._scope)

        if event.branches:
            result = self._match_branches(event, entries)
        else:
            result = self._match_sources(event, entries)

        if not result.consumed:
            result.contributors.append(
                MessageContributor(message=f"No git consumers for URI {uri}")
            )
        logger.info(
            "Push notification processed",
            origin=origin,
            uri=uri,
            branches=list(event.branches),
            consumed=result.consumed,
            contributors=len(result.contributors),
        )
        return result

    def _matching_config(self, source: GitSource, uri: str) -> DiscoveryConfig | None:
        """The source's config if it listens to ``uri``, else None.

        Only matching sources are composed.
        """
        traits = tuple(source.traits)
        if TraitComposer.find(traits, IgnorePushNotificationsTrait) is not None:
            return None
        try:
            matched = self._uri_matcher(uri, source.remote)
        except (InvalidURIError, ValueError) as exc:
            logger.debug(
                "Skipping source, locators cannot be compared",
                source_id=source.id,
                remote=source.remote,
                uri=uri,
                error=str(exc),
            )
            return None
        if not matched:
            return None
        return self._composer.compose(traits)

    def _match_branches(
        self,
        event: NotificationEvent,
        entries: list[tuple[SourceOwner, GitSource]],
    ) -> NotificationResult:
        result = NotificationResult(event=event)
        matches = []
        for owner, source in entries:
            config = self._matching_config(source, event.uri)
            if config is not None:
                matches.append((owner, source, config))

        for branch in event.branches:
            for owner, source, config in matches:
                result.consumed = True
                result.affected.append(self._affected_head(owner, source, config, event, branch))
                result.contributors.append(
                    MessageContributor(
                        message=f"Notified {owner.full_display_name} of changes to {branch}"
                    )
                )
        return result

    @staticmethod
    def _affected_head(
        owner: SourceOwner,
        source: GitSource,
        config: DiscoveryConfig,
        event: NotificationEvent,
        branch: str,
    ) -> AffectedHead:
        head = Head(name=branch)
        if config.is_excluded(source, head):
            logger.debug(
                "Branch excluded by source filters",
                owner=owner.full_name,
                source_id=source.id,
                branch=branch,
            )
            return AffectedHead(owner=owner.full_name, source_id=source.id, branch=branch)
        revision = Revision(head=head, hash=event.sha1) if event.sha1 else None
        return AffectedHead(
            owner=owner.full_name,
            source_id=source.id,
            branch=branch,
            head=head,
            revision=revision,
        )

    def _match_sources(
        self,
        event: NotificationEvent,
        entries: list[tuple[SourceOwner, GitSource]],
    ) -> NotificationResult:
        result = NotificationResult(event=event)
        for owner, source in entries:
            if self._matching_config(source, event.uri) is None:
                continue
            logger.debug(
                "Triggering indexing",
                owner=owner.full_display_name,
                origin=event.origin,
            )
            self._scheduler.schedule_indexing(owner, source, event.origin)
            result.contributors.append(
                TriggeredContributor(owner=owner.full_display_name, owner_url=owner.url)
            )
            result.consumed = True
        return result
