"""Core domain models and interfaces for git-source."""

from git_source.core.exceptions import (
    ConfigurationError,
    GitSourceError,
    InsecureTransportError,
    InvalidURIError,
    SourceNotFoundError,
    TraitConversionError,
    ValidationError,
)
from git_source.core.models import (
    AffectedHead,
    GitExtension,
    Head,
    HeadCategory,
    LegacyConfig,
    MessageContributor,
    NotificationEvent,
    NotificationResult,
    RepositoryBrowser,
    ResponseContributor,
    Revision,
    TriggeredContributor,
)

__all__ = [
    # Models
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
    # Exceptions
    "GitSourceError",
    "ConfigurationError",
    "InsecureTransportError",
    "ValidationError",
    "InvalidURIError",
    "TraitConversionError",
    "SourceNotFoundError",
]
