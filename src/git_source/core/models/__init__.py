"""Domain models for git-source."""

from git_source.core.models.head import Head, HeadCategory, Revision
from git_source.core.models.legacy import LegacyConfig
from git_source.core.models.notification import (
    AffectedHead,
    MessageContributor,
    NotificationEvent,
    NotificationResult,
    ResponseContributor,
    TriggeredContributor,
)
from git_source.core.models.scm import GitExtension, RepositoryBrowser

__all__ = [
    "Head",
    "HeadCategory",
    "Revision",
    "LegacyConfig",
    "GitExtension",
    "RepositoryBrowser",
    "NotificationEvent",
    "NotificationResult",
    "AffectedHead",
    "ResponseContributor",
    "TriggeredContributor",
    "MessageContributor",
]
