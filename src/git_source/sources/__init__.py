"""Tracked sources."""

from git_source.sources.models import GitSource, SourceOwner

__all__ = ["GitSource", "SourceOwner"]
