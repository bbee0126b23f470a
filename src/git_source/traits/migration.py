"""One-shot translation of legacy source fields into traits."""

from typing import Any, Mapping

import structlog

from git_source.core.models.legacy import (
    DEFAULT_EXCLUDES,
    DEFAULT_INCLUDES,
    LegacyConfig,
)
from git_source.git.refspec import DEFAULT_REMOTE_NAME
from git_source.traits.base import SourceTrait
from git_source.traits.builtin import (
    BranchDiscoveryTrait,
    BrowserTrait,
    GitToolTrait,
    IgnorePushNotificationsTrait,
    RemoteNameTrait,
    WildcardFilterTrait,
)
from git_source.traits.composer import as_set_list
from git_source.traits.refspecs import RefSpecTemplateResolver
from git_source.traits.registry import TraitRegistry, default_registry

logger = structlog.get_logger(__name__)


class LegacyConfigMigrator:
    """Translates a LegacyConfig into the equivalent trait list.

    Every condition is evaluated against the legacy values themselves,
    never against traits produced by an earlier step.
    """

    def __init__(self, registry: TraitRegistry | None = None) -> None:
        self._registry = registry or default_registry()

    def migrate(self, legacy: LegacyConfig) -> tuple[SourceTrait, ...]:
        traits: list[SourceTrait] = [BranchDiscoveryTrait()]

        if legacy.has_custom_filter:
            traits.append(
                WildcardFilterTrait(
                    includes=legacy.includes if legacy.includes is not None else DEFAULT_INCLUDES,
                    excludes=legacy.excludes if legacy.excludes is not None else DEFAULT_EXCLUDES,
                )
            )

        for extension in legacy.extensions or []:
            trait = self._registry.convert_extension(extension)
            if trait is not None:
                traits.append(trait)

        remote_name = legacy.remote_name
        if remote_name and remote_name.strip() and remote_name != DEFAULT_REMOTE_NAME:
            traits.append(RemoteNameTrait(remote_name=remote_name))

        if legacy.git_tool and legacy.git_tool.strip():
            traits.append(GitToolTrait(git_tool=legacy.git_tool.strip()))

        if legacy.browser is not None:
            traits.append(BrowserTrait(browser=legacy.browser))

        if legacy.ignore_on_push_notifications:
            traits.append(IgnorePushNotificationsTrait())

        refspecs = RefSpecTemplateResolver.resolve(legacy.raw_ref_specs, remote_name)
        if refspecs is not None:
            traits.append(refspecs)

        return as_set_list(traits)

    def resolve(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Migrate a stored source mapping if it has no traits yet.

        A mapping that already carries traits is returned without its
        legacy keys, which are then never read.
        """
        if data.get("traits") is not None:
            return {k: v for k, v in data.items() if k not in LegacyConfig.KEYS}

        legacy, remaining = LegacyConfig.split(data)
        remaining["traits"] = self.migrate(legacy)
        if any(key in LegacyConfig.KEYS for key in data):
            logger.info(
                "Migrated legacy source configuration",
                source_id=remaining.get("id"),
                traits=[t.kind for t in remaining["traits"]],
            )
        return remaining
