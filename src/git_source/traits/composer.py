"""Applying trait lists to discovery contexts."""

from typing import Iterable, TypeVar

from git_source.traits.base import SourceTrait
from git_source.traits.context import DiscoveryConfig, DiscoveryContext

T = TypeVar("T", bound=SourceTrait)


def as_set_list(traits: Iterable[SourceTrait | None]) -> tuple[SourceTrait, ...]:
    """Collapse traits so each identity appears once.

    A later trait replaces an earlier one of the same identity but keeps
    the earlier one's position.
    """
    unique: dict = {}
    for trait in traits:
        if trait is not None:
            unique[trait.identity] = trait
    return tuple(unique.values())


class TraitComposer:
    """Builds effective discovery configuration from ordered traits."""

    def __init__(self, ignore_tag_discovery_trait: bool = False) -> None:
        self._ignore_tag_discovery_trait = ignore_tag_discovery_trait

    def new_context(self) -> DiscoveryContext:
        return DiscoveryContext(ignore_tag_discovery_trait=self._ignore_tag_discovery_trait)

    def apply(
        self, traits: Iterable[SourceTrait], context: DiscoveryContext
    ) -> DiscoveryContext:
        """Apply traits to the context strictly in order."""
        # Snapshot first: the caller's list may be replaced while we iterate
        for trait in tuple(traits):
            trait.decorate_context(context)
        return context

    def compose(self, traits: Iterable[SourceTrait]) -> DiscoveryConfig:
        return self.apply(traits, self.new_context()).build()

    @staticmethod
    def find(traits: Iterable[SourceTrait], trait_type: type[T]) -> T | None:
        """First trait of the given type, or None."""
        for trait in traits:
            if isinstance(trait, trait_type):
                return trait
        return None

    @staticmethod
    def replace(
        traits: Iterable[SourceTrait],
        trait_type: type[SourceTrait],
        replacement: SourceTrait | None,
    ) -> tuple[SourceTrait, ...]:
        """Drop every trait of the given type, then append the replacement."""
        kept = [t for t in traits if not isinstance(t, trait_type)]
        if replacement is not None:
            kept.append(replacement)
        return as_set_list(kept)
