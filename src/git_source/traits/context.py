"""The mutable discovery context traits write into."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from pydantic import BaseModel

from git_source.core.models.head import Head
from git_source.core.models.scm import GitExtension, RepositoryBrowser
from git_source.git.refspec import DEFAULT_REMOTE_NAME, REF_SPEC_DEFAULT, expand_template

if TYPE_CHECKING:
    from git_source.sources.models import GitSource


class HeadPrefilter(ABC):
    """Excludes candidate heads before they are considered discoverable."""

    @abstractmethod
    def is_excluded(self, source: "GitSource | None", head: Head) -> bool:
        """Return True if the head must not be discovered."""


class DiscoveryConfig(BaseModel):
    """The effective configuration after all traits have been applied."""

    ref_spec_templates: tuple[str, ...]
    ref_specs: tuple[str, ...]
    prefilters: tuple[HeadPrefilter, ...] = ()
    ignore_on_push_notifications: bool = False
    remote_name: str = DEFAULT_REMOTE_NAME
    browser: RepositoryBrowser | None = None
    git_tool: str | None = None
    extensions: tuple[GitExtension, ...] = ()
    wants_branches: bool = False
    wants_tags: bool = False
    fetch_tags: bool = False

    class Config:
        frozen = True
        arbitrary_types_allowed = True

    def is_excluded(self, source: "GitSource | None", head: Head) -> bool:
        """A head is excluded if any prefilter excludes it."""
        return any(f.is_excluded(source, head) for f in self.prefilters)


class DiscoveryContext:
    """Accumulates trait contributions for one discovery or notification.

    Built fresh on every use and never stored, so configuration changes
    are picked up immediately.
    """

    def __init__(self, ignore_tag_discovery_trait: bool = False) -> None:
        self._ignore_tag_discovery_trait = ignore_tag_discovery_trait
        self._ref_spec_templates: list[str] = []
        self._prefilters: list[HeadPrefilter] = []
        self._ignore_on_push_notifications = False
        self._remote_name: str | None = None
        self._browser: RepositoryBrowser | None = None
        self._git_tool: str | None = None
        self._extensions: list[GitExtension] = []
        self._wants_branches = False
        self._wants_tags = False

    # --- contributions ---

    def with_ref_spec(self, template: str) -> "DiscoveryContext":
        if template not in self._ref_spec_templates:
            self._ref_spec_templates.append(template)
        return self

    def with_prefilter(self, prefilter: HeadPrefilter) -> "DiscoveryContext":
        self._prefilters.append(prefilter)
        return self

    def with_ignore_on_push_notifications(self, ignore: bool) -> "DiscoveryContext":
        self._ignore_on_push_notifications = ignore
        return self

    def with_remote_name(self, remote_name: str | None) -> "DiscoveryContext":
        self._remote_name = remote_name
        return self

    def with_browser(self, browser: RepositoryBrowser | None) -> "DiscoveryContext":
        self._browser = browser
        return self

    def with_git_tool(self, git_tool: str | None) -> "DiscoveryContext":
        self._git_tool = git_tool
        return self

    def with_extension(self, extension: GitExtension) -> "DiscoveryContext":
        self._extensions.append(extension)
        return self

    def want_branches(self, include: bool = True) -> "DiscoveryContext":
        self._wants_branches = include
        return self

    def want_tags(self, include: bool = True) -> "DiscoveryContext":
        self._wants_tags = include
        return self

    # --- derivations ---

    @property
    def remote_name(self) -> str:
        return self._remote_name or DEFAULT_REMOTE_NAME

    @property
    def ref_spec_templates(self) -> list[str]:
        """Accumulated templates, or the default template when none were added."""
        return list(self._ref_spec_templates) or [REF_SPEC_DEFAULT]

    def effective_ref_specs(self) -> list[str]:
        return [expand_template(t, self.remote_name) for t in self.ref_spec_templates]

    def ignores_push_notifications(self) -> bool:
        return self._ignore_on_push_notifications

    def prefilters(self) -> list[HeadPrefilter]:
        return list(self._prefilters)

    def is_excluded(self, source: "GitSource | None", head: Head) -> bool:
        return any(f.is_excluded(source, head) for f in self._prefilters)

    @property
    def fetch_tags(self) -> bool:
        return self._wants_tags or self._ignore_tag_discovery_trait

    def build(self) -> DiscoveryConfig:
        """Freeze the current state."""
        return DiscoveryConfig(
            ref_spec_templates=tuple(self.ref_spec_templates),
            ref_specs=tuple(self.effective_ref_specs()),
            prefilters=tuple(self._prefilters),
            ignore_on_push_notifications=self._ignore_on_push_notifications,
            remote_name=self.remote_name,
            browser=self._browser,
            git_tool=self._git_tool,
            extensions=tuple(self._extensions),
            wants_branches=self._wants_branches,
            wants_tags=self._wants_tags,
            fetch_tags=self.fetch_tags,
        )
