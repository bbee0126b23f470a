"""Pluggable traits that shape how a source discovers heads."""

from git_source.traits.base import SourceTrait
from git_source.traits.builtin import (
    BranchDiscoveryTrait,
    BrowserTrait,
    ExtensionTrait,
    GitToolTrait,
    IgnorePushNotificationsTrait,
    RefSpecsTrait,
    RemoteNameTrait,
    TagDiscoveryTrait,
    WildcardFilterTrait,
    WildcardHeadPrefilter,
    default_traits,
)
from git_source.traits.composer import TraitComposer, as_set_list
from git_source.traits.context import DiscoveryConfig, DiscoveryContext, HeadPrefilter
from git_source.traits.migration import LegacyConfigMigrator
from git_source.traits.refspecs import RefSpecTemplateResolver
from git_source.traits.registry import (
    ExtensionTraitDescriptor,
    TraitDescriptor,
    TraitRegistry,
    default_registry,
)

__all__ = [
    "SourceTrait",
    "BranchDiscoveryTrait",
    "TagDiscoveryTrait",
    "WildcardFilterTrait",
    "WildcardHeadPrefilter",
    "RemoteNameTrait",
    "RefSpecsTrait",
    "IgnorePushNotificationsTrait",
    "BrowserTrait",
    "GitToolTrait",
    "ExtensionTrait",
    "default_traits",
    "TraitComposer",
    "as_set_list",
    "DiscoveryConfig",
    "DiscoveryContext",
    "HeadPrefilter",
    "LegacyConfigMigrator",
    "RefSpecTemplateResolver",
    "TraitDescriptor",
    "ExtensionTraitDescriptor",
    "TraitRegistry",
    "default_registry",
]
