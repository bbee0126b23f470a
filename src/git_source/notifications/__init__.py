"""Push-notification routing."""

from git_source.notifications.matcher import PushNotificationMatcher
from git_source.notifications.registry import InMemorySourceRegistry, SourceRegistry
from git_source.notifications.scheduler import (
    IndexingRequest,
    IndexingScheduler,
    LoggingIndexingScheduler,
    QueueIndexingScheduler,
)

__all__ = [
    "PushNotificationMatcher",
    "SourceRegistry",
    "InMemorySourceRegistry",
    "IndexingRequest",
    "IndexingScheduler",
    "LoggingIndexingScheduler",
    "QueueIndexingScheduler",
]
