"""Built-in trait variants."""

import re
from typing import TYPE_CHECKING, ClassVar, Hashable

from pydantic import field_validator

from git_source.core.models.head import Head
from git_source.core.models.legacy import DEFAULT_EXCLUDES, DEFAULT_INCLUDES
from git_source.core.models.scm import GitExtension, RepositoryBrowser
from git_source.git.refspec import DEFAULT_REMOTE_NAME
from git_source.traits.base import SourceTrait
from git_source.traits.context import DiscoveryContext, HeadPrefilter

if TYPE_CHECKING:
    from git_source.sources.models import GitSource


class BranchDiscoveryTrait(SourceTrait):
    """Discover branches."""

    kind: ClassVar[str] = "branch_discovery"

    def decorate_context(self, context: DiscoveryContext) -> None:
        context.want_branches()


class TagDiscoveryTrait(SourceTrait):
    """Discover tags."""

    kind: ClassVar[str] = "tag_discovery"

    def decorate_context(self, context: DiscoveryContext) -> None:
        context.want_tags()


def wildcard_pattern(patterns: str) -> re.Pattern[str]:
    """Compile space-separated wildcard patterns into one regex.

    ``*`` matches any run of characters, ``/`` included. Everything else
    is literal.
    """
    alternatives = [
        re.escape(token).replace(r"\*", ".*") for token in patterns.split(" ") if token
    ]
    if not alternatives:
        return re.compile(r"(?!)")
    return re.compile("|".join(f"(?:{a})" for a in alternatives))


class WildcardHeadPrefilter(HeadPrefilter):
    """Excludes heads not matching the includes or matching the excludes."""

    def __init__(self, includes: str, excludes: str) -> None:
        self._includes = wildcard_pattern(includes)
        self._excludes = wildcard_pattern(excludes)

    def is_excluded(self, source: "GitSource | None", head: Head) -> bool:
        return (
            self._includes.fullmatch(head.name) is None
            or self._excludes.fullmatch(head.name) is not None
        )


class WildcardFilterTrait(SourceTrait):
    """Filter heads by name with wildcard include/exclude patterns."""

    kind: ClassVar[str] = "wildcard_filter"

    includes: str = DEFAULT_INCLUDES
    excludes: str = DEFAULT_EXCLUDES

    def decorate_context(self, context: DiscoveryContext) -> None:
        context.with_prefilter(WildcardHeadPrefilter(self.includes, self.excludes))


class RemoteNameTrait(SourceTrait):
    """Use a remote name other than ``origin``."""

    kind: ClassVar[str] = "remote_name"

    remote_name: str = DEFAULT_REMOTE_NAME

    @field_validator("remote_name")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip() or DEFAULT_REMOTE_NAME

    def decorate_context(self, context: DiscoveryContext) -> None:
        context.with_remote_name(self.remote_name)


class RefSpecsTrait(SourceTrait):
    """Fetch with explicit ref-spec templates instead of the default."""

    kind: ClassVar[str] = "refspecs"

    templates: tuple[str, ...]

    def decorate_context(self, context: DiscoveryContext) -> None:
        for template in self.templates:
            context.with_ref_spec(template)


class IgnorePushNotificationsTrait(SourceTrait):
    """Opt the source out of push notifications."""

    kind: ClassVar[str] = "ignore_push_notifications"

    def decorate_context(self, context: DiscoveryContext) -> None:
        context.with_ignore_on_push_notifications(True)


class BrowserTrait(SourceTrait):
    """Link changes to a repository browser."""

    kind: ClassVar[str] = "browser"

    browser: RepositoryBrowser

    def decorate_context(self, context: DiscoveryContext) -> None:
        context.with_browser(self.browser)


class GitToolTrait(SourceTrait):
    """Use a specific git installation."""

    kind: ClassVar[str] = "git_tool"

    git_tool: str

    def decorate_context(self, context: DiscoveryContext) -> None:
        context.with_git_tool(self.git_tool)


class ExtensionTrait(SourceTrait):
    """Wraps a legacy SCM extension.

    One trait is kept per extension type, not one for all extensions.
    """

    kind: ClassVar[str] = "extension"

    extension: GitExtension

    @property
    def identity(self) -> Hashable:
        return (type(self), self.extension.type)

    def decorate_context(self, context: DiscoveryContext) -> None:
        context.with_extension(self.extension)


BUILTIN_TRAITS: tuple[type[SourceTrait], ...] = (
    BranchDiscoveryTrait,
    TagDiscoveryTrait,
    WildcardFilterTrait,
    RemoteNameTrait,
    RefSpecsTrait,
    IgnorePushNotificationsTrait,
    BrowserTrait,
    GitToolTrait,
    ExtensionTrait,
)


def default_traits() -> tuple[SourceTrait, ...]:
    """Traits a new source starts with."""
    return (BranchDiscoveryTrait(),)
