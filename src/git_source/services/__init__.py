"""Business logic services for git-source."""

from git_source.services.notification import NotificationService
from git_source.services.sources import SourceService

__all__ = [
    "NotificationService",
    "SourceService",
]
