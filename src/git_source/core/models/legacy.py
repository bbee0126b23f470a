"""The flat configuration used before sources were configured through traits."""

from typing import Any, ClassVar, Mapping

from pydantic import BaseModel, Field

from git_source.core.models.scm import GitExtension, RepositoryBrowser

DEFAULT_INCLUDES = "*"
DEFAULT_EXCLUDES = ""


class LegacyConfig(BaseModel):
    """Snapshot of the legacy source fields.

    Read once, when a stored source without traits is loaded, and never
    written back.
    """

    remote_name: str | None = Field(default=None, alias="remoteName")
    raw_ref_specs: str | None = Field(default=None, alias="rawRefSpecs")
    includes: str | None = None
    excludes: str | None = None
    ignore_on_push_notifications: bool = Field(
        default=False, alias="ignoreOnPushNotifications"
    )
    browser: RepositoryBrowser | None = None
    git_tool: str | None = Field(default=None, alias="gitTool")
    extensions: list[GitExtension] | None = None

    KEYS: ClassVar[frozenset[str]] = frozenset(
        {
            "remoteName",
            "remote_name",
            "rawRefSpecs",
            "raw_ref_specs",
            "includes",
            "excludes",
            "ignoreOnPushNotifications",
            "ignore_on_push_notifications",
            "browser",
            "gitTool",
            "git_tool",
            "extensions",
        }
    )

    class Config:
        frozen = True
        populate_by_name = True

    @property
    def has_custom_filter(self) -> bool:
        """True unless includes/excludes are absent or the defaults."""
        return (self.includes is not None and self.includes != DEFAULT_INCLUDES) or (
            self.excludes is not None and self.excludes != DEFAULT_EXCLUDES
        )

    @classmethod
    def split(cls, data: Mapping[str, Any]) -> tuple["LegacyConfig", dict[str, Any]]:
        """Separate legacy keys from the rest of a stored source mapping."""
        legacy = {k: v for k, v in data.items() if k in cls.KEYS}
        remaining = {k: v for k, v in data.items() if k not in cls.KEYS}
        return cls.model_validate(legacy), remaining
