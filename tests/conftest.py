"""Pytest configuration and fixtures."""

import pytest

from factories import GitSourceFactory, SourceOwnerFactory
from git_source.core.models.legacy import LegacyConfig
from git_source.core.models.scm import GitExtension, RepositoryBrowser
from git_source.core.security import TransportSecurityPolicy
from git_source.notifications.matcher import PushNotificationMatcher
from git_source.notifications.registry import InMemorySourceRegistry
from git_source.sources.models import GitSource, SourceOwner

REPO_REMOTE = "https://example.com/org/repo.git"


class RecordingScheduler:
    """Captures indexing requests instead of running them."""

    def __init__(self) -> None:
        self.requests: list[tuple[str, str, str | None]] = []

    def schedule_indexing(self, owner, source, origin=None) -> None:
        self.requests.append((owner.full_name, source.id, origin))


@pytest.fixture
def scheduler() -> RecordingScheduler:
    return RecordingScheduler()


@pytest.fixture
def registry() -> InMemorySourceRegistry:
    return InMemorySourceRegistry()


@pytest.fixture
def matcher(registry: InMemorySourceRegistry, scheduler: RecordingScheduler) -> PushNotificationMatcher:
    return PushNotificationMatcher(registry, scheduler)


@pytest.fixture
def repo_source() -> GitSource:
    """A source tracking https://example.com/org/repo.git."""
    return GitSourceFactory(id="repo", remote=REPO_REMOTE)


@pytest.fixture
def repo_owner(repo_source: GitSource) -> SourceOwner:
    return SourceOwnerFactory(
        full_name="folder/repo",
        display_name="Repo",
        sources=[repo_source],
    )


@pytest.fixture
def fips_policy() -> TransportSecurityPolicy:
    return TransportSecurityPolicy(fips_mode=True)


@pytest.fixture
def full_legacy_config() -> LegacyConfig:
    """A legacy configuration where every field is set."""
    return LegacyConfig(
        remote_name="upstream",
        raw_ref_specs="+refs/heads/*:refs/remotes/upstream/* +refs/pull/*:refs/remotes/upstream/pr/*",
        includes="main feature/*",
        excludes="feature/wip*",
        ignore_on_push_notifications=True,
        browser=RepositoryBrowser(kind="github", url="https://github.com/org/repo"),
        git_tool="jgit",
        extensions=[GitExtension(type="clean_before_checkout")],
    )
