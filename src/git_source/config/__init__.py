"""Configuration for git-source."""

from git_source.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
