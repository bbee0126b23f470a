"""Tracked git sources and the owners that hold them."""

from typing import Any, Iterable
from uuid import uuid4

import structlog
from pydantic import (
    BaseModel,
    Field,
    PrivateAttr,
    ValidationInfo,
    field_serializer,
    field_validator,
    model_validator,
)

from git_source.core.exceptions import InvalidURIError, SourceNotFoundError
from git_source.core.models.legacy import LegacyConfig
from git_source.core.models.scm import GitExtension, RepositoryBrowser
from git_source.core.security import (
    PrivilegeScope,
    TransportSecurityPolicy,
    get_transport_policy,
)
from git_source.git.uri import RepositoryURI
from git_source.traits.base import SourceTrait
from git_source.traits.builtin import (
    BrowserTrait,
    ExtensionTrait,
    GitToolTrait,
    IgnorePushNotificationsTrait,
    default_traits,
)
from git_source.traits.composer import TraitComposer, as_set_list
from git_source.traits.migration import LegacyConfigMigrator
from git_source.traits.refspecs import RefSpecTemplateResolver
from git_source.traits.registry import TraitRegistry, default_registry

logger = structlog.get_logger(__name__)


def _context_value(info: ValidationInfo, key: str) -> Any:
    return (info.context or {}).get(key)


class GitSource(BaseModel):
    """A remote repository tracked as a set of discoverable heads.

    Behavior comes entirely from ``traits``. The trait tuple is only ever
    replaced as a whole, so readers always see a consistent snapshot.
    ``remote`` is fixed once validated; pointing at another repository
    means building a new source, which runs the transport check again.

    Validation context keys: ``trait_registry`` (TraitRegistry) and
    ``transport_policy`` (TransportSecurityPolicy).
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    remote: str = Field(frozen=True)
    credentials_id: str | None = None
    traits: tuple[SourceTrait, ...] = Field(default_factory=default_traits)

    _transport_policy: TransportSecurityPolicy = PrivateAttr(default=None)
    _trait_registry: TraitRegistry = PrivateAttr(default=None)

    @model_validator(mode="before")
    @classmethod
    def _resolve_legacy(cls, data: Any, info: ValidationInfo) -> Any:
        if not isinstance(data, dict):
            return data
        migrator = LegacyConfigMigrator(_context_value(info, "trait_registry"))
        return migrator.resolve(data)

    @field_validator("traits", mode="before")
    @classmethod
    def _parse_traits(cls, value: Any, info: ValidationInfo) -> Any:
        registry = _context_value(info, "trait_registry") or default_registry()
        return as_set_list(registry.parse(item) for item in value)

    @model_validator(mode="after")
    def _check_transport(self, info: ValidationInfo) -> "GitSource":
        self._transport_policy = (
            _context_value(info, "transport_policy") or get_transport_policy()
        )
        self._trait_registry = _context_value(info, "trait_registry") or default_registry()
        self._transport_policy.require_secure(self.credentials_id, self.remote)
        return self

    @field_serializer("traits")
    def _serialize_traits(self, traits: tuple[SourceTrait, ...]) -> list[dict[str, Any]]:
        return [trait.to_dict() for trait in traits]

    @classmethod
    def from_legacy(
        cls,
        remote: str,
        legacy: LegacyConfig,
        id: str | None = None,
        credentials_id: str | None = None,
        registry: TraitRegistry | None = None,
    ) -> "GitSource":
        """Create a source from the flat legacy field set."""
        data: dict[str, Any] = {
            "remote": remote,
            "credentials_id": credentials_id,
            "traits": LegacyConfigMigrator(registry).migrate(legacy),
        }
        if id is not None:
            data["id"] = id
        return cls.model_validate(data, context={"trait_registry": registry})

    # --- mutation ---

    def set_traits(self, traits: Iterable[SourceTrait | None]) -> None:
        self.traits = as_set_list(traits)

    def set_credentials_id(self, credentials_id: str | None) -> None:
        """Change credentials; rejected without change if the transport is insecure."""
        self._transport_policy.require_secure(credentials_id, self.remote)
        self.credentials_id = credentials_id

    def set_browser(self, browser: RepositoryBrowser | None) -> None:
        replacement = BrowserTrait(browser=browser) if browser is not None else None
        self.traits = TraitComposer.replace(self.traits, BrowserTrait, replacement)

    def set_git_tool(self, git_tool: str | None) -> None:
        git_tool = (git_tool or "").strip() or None
        replacement = GitToolTrait(git_tool=git_tool) if git_tool is not None else None
        self.traits = TraitComposer.replace(self.traits, GitToolTrait, replacement)

    def set_extensions(self, extensions: Iterable[GitExtension] | None) -> None:
        """Replace every extension trait with conversions of ``extensions``."""
        traits = [t for t in self.traits if not isinstance(t, ExtensionTrait)]
        for extension in extensions or []:
            trait = self._trait_registry.convert_extension(extension)
            if trait is not None:
                traits.append(trait)
        self.set_traits(traits)

    # --- derived, read-only views ---

    @property
    def ignore_on_push_notifications(self) -> bool:
        return TraitComposer.find(self.traits, IgnorePushNotificationsTrait) is not None

    @property
    def raw_ref_specs(self) -> str:
        """Space-separated ref specs, as the legacy field held them."""
        return RefSpecTemplateResolver.to_raw(self.traits)

    @property
    def ref_specs(self) -> list[str]:
        return list(TraitComposer().compose(self.traits).ref_specs)

    @property
    def name(self) -> str:
        try:
            return RepositoryURI.parse(self.remote).humanish_name or self.remote
        except InvalidURIError:
            return self.remote


class SourceOwner(BaseModel):
    """A job or project that tracks one or more sources."""

    full_name: str
    display_name: str | None = None
    url: str | None = None
    allowed_principals: frozenset[str] | None = None
    sources: list[GitSource] = Field(default_factory=list)

    @property
    def full_display_name(self) -> str:
        return self.display_name or self.full_name

    def is_visible_to(self, scope: PrivilegeScope) -> bool:
        return scope.can_see(self.allowed_principals)

    def get_source(self, source_id: str) -> GitSource:
        for source in self.sources:
            if source.id == source_id:
                return source
        raise SourceNotFoundError(
            f"Source not found: {source_id}",
            details={"owner": self.full_name, "source_id": source_id},
        )
