"""Catalog of known trait kinds and extension converters."""

from functools import lru_cache
from typing import Any, Callable, Mapping

import structlog

from git_source.core.exceptions import TraitConversionError, ValidationError
from git_source.core.models.scm import GitExtension
from git_source.traits.base import SourceTrait
from git_source.traits.builtin import (
    BUILTIN_TRAITS,
    BranchDiscoveryTrait,
    ExtensionTrait,
    RefSpecsTrait,
    TagDiscoveryTrait,
    WildcardFilterTrait,
)

logger = structlog.get_logger(__name__)

CATEGORY_WITHIN_REPOSITORY = "Within repository"
CATEGORY_ADDITIONAL = "Additional"

_WITHIN_REPOSITORY = (
    BranchDiscoveryTrait,
    TagDiscoveryTrait,
    WildcardFilterTrait,
    RefSpecsTrait,
)

ExtensionConverter = Callable[[GitExtension], SourceTrait | None]


class TraitDescriptor:
    """Metadata about one trait kind."""

    def __init__(
        self,
        trait_class: type[SourceTrait],
        display_name: str | None = None,
        category: str | None = None,
    ) -> None:
        self.trait_class = trait_class
        self.kind = trait_class.kind
        self.display_name = display_name or trait_class.__name__
        if category is None:
            category = (
                CATEGORY_WITHIN_REPOSITORY
                if trait_class in _WITHIN_REPOSITORY
                else CATEGORY_ADDITIONAL
            )
        self.category = category


class ExtensionTraitDescriptor(TraitDescriptor):
    """Converts legacy extensions of one type into traits."""

    def __init__(
        self,
        extension_type: str,
        converter: ExtensionConverter | None = None,
        display_name: str | None = None,
    ) -> None:
        super().__init__(ExtensionTrait, display_name or extension_type, CATEGORY_ADDITIONAL)
        self.extension_type = extension_type
        self._converter = converter

    def accepts(self, extension: GitExtension) -> bool:
        return extension.type == self.extension_type

    def convert_to_trait(self, extension: GitExtension) -> SourceTrait | None:
        """Convert without loss, or raise TraitConversionError."""
        if self._converter is not None:
            return self._converter(extension)
        return ExtensionTrait(extension=extension)


def _unsupported(reason: str) -> ExtensionConverter:
    def convert(extension: GitExtension) -> SourceTrait | None:
        raise TraitConversionError(
            f"Extension {extension.type} cannot be used with a branch source: {reason}",
            details={"extension": extension.type},
        )

    return convert


class TraitRegistry:
    """Known trait kinds, keyed by ``kind``, plus extension descriptors."""

    def __init__(self) -> None:
        self._traits: dict[str, TraitDescriptor] = {}
        self._extensions: list[ExtensionTraitDescriptor] = []

    def register(self, descriptor: TraitDescriptor) -> None:
        if isinstance(descriptor, ExtensionTraitDescriptor):
            self._extensions.append(descriptor)
            self._traits.setdefault(descriptor.kind, TraitDescriptor(ExtensionTrait))
        else:
            self._traits[descriptor.kind] = descriptor

    def descriptors(self) -> list[TraitDescriptor]:
        return [*self._traits.values(), *self._extensions]

    def categories(self) -> dict[str, list[TraitDescriptor]]:
        """Descriptors grouped for display."""
        grouped: dict[str, list[TraitDescriptor]] = {}
        for descriptor in self.descriptors():
            if descriptor.trait_class is ExtensionTrait and not isinstance(
                descriptor, ExtensionTraitDescriptor
            ):
                continue
            grouped.setdefault(descriptor.category, []).append(descriptor)
        return grouped

    def parse(self, data: SourceTrait | Mapping[str, Any]) -> SourceTrait:
        """Build a trait from its stored form ``{"kind": ..., **fields}``."""
        if isinstance(data, SourceTrait):
            return data
        if not isinstance(data, Mapping) or "kind" not in data:
            raise ValidationError(
                "Stored trait must be a mapping with a 'kind'",
                details={"trait": repr(data)},
            )
        kind = data["kind"]
        descriptor = self._traits.get(kind)
        if descriptor is None:
            raise ValidationError(f"Unknown trait kind: {kind}", details={"kind": kind})
        fields = {k: v for k, v in data.items() if k != "kind"}
        return descriptor.trait_class.model_validate(fields)

    def convert_extension(self, extension: GitExtension) -> SourceTrait | None:
        """Convert an extension using the first descriptor able to.

        Returns None when none can; failures are logged, never raised.
        """
        for descriptor in self._extensions:
            if not descriptor.accepts(extension):
                continue
            try:
                trait = descriptor.convert_to_trait(extension)
            except TraitConversionError as exc:
                logger.warning(
                    "Could not convert extension to a trait",
                    extension=extension.type,
                    error=exc.message,
                )
                continue
            if trait is not None:
                return trait
        logger.debug(
            "No trait accepts extension, dropping it",
            extension=extension.type,
        )
        return None


@lru_cache
def default_registry() -> TraitRegistry:
    """Registry with the built-in traits and common extension types."""
    registry = TraitRegistry()
    for trait_class in BUILTIN_TRAITS:
        if trait_class is not ExtensionTrait:
            registry.register(TraitDescriptor(trait_class))
    for extension_type in (
        "clean_before_checkout",
        "clean_after_checkout",
        "clone_option",
        "checkout_option",
        "submodule_option",
        "prune_stale_branch",
        "user_identity",
        "lfs_pull",
        "sparse_checkout_paths",
    ):
        registry.register(ExtensionTraitDescriptor(extension_type))
    registry.register(
        ExtensionTraitDescriptor(
            "local_branch",
            _unsupported("the local branch is always the discovered head"),
        )
    )
    return registry
