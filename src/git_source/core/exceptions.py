"""Exception hierarchy for git-source."""

from typing import Any


class GitSourceError(Exception):
    """Base exception for all git-source errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(GitSourceError):
    """A source configuration was rejected."""


class InsecureTransportError(ConfigurationError):
    """A credential would be sent over a transport the policy does not allow."""


class ValidationError(GitSourceError):
    """Input failed validation."""


class InvalidURIError(ValidationError):
    """A repository locator could not be parsed."""


class TraitConversionError(GitSourceError):
    """A legacy extension cannot be expressed as a trait."""


class SourceNotFoundError(GitSourceError):
    """No tracked source or owner with the requested identity."""
