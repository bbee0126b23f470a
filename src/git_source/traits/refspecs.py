"""Translating between flat ref-spec strings and RefSpecs traits."""

from typing import Iterable

from git_source.git.refspec import (
    DEFAULT_REMOTE_NAME,
    REF_SPEC_DEFAULT,
    canonical_defaults,
    expand_template,
)
from git_source.traits.base import SourceTrait
from git_source.traits.builtin import RefSpecsTrait, RemoteNameTrait


class RefSpecTemplateResolver:
    """Resolves legacy ``rawRefSpecs`` strings into templates and back."""

    @staticmethod
    def resolve(raw_ref_specs: str | None, remote_name: str | None = None) -> RefSpecsTrait | None:
        """Turn a space-separated ref-spec string into a RefSpecsTrait.

        Returns None when the whole string is one of the canonical defaults
        (nothing needs configuring) or when it holds no ref specs at all.
        Default tokens inside a longer string become the placeholder
        template so a later remote rename still applies to them.
        """
        if raw_ref_specs is None:
            return None
        defaults = canonical_defaults(remote_name)
        if raw_ref_specs.strip() in defaults:
            return None

        templates: list[str] = []
        for token in raw_ref_specs.split(" "):
            if not token.strip():
                continue
            templates.append(REF_SPEC_DEFAULT if token in defaults else token)

        if not templates:
            return None
        return RefSpecsTrait(templates=tuple(templates))

    @staticmethod
    def serialize(trait: RefSpecsTrait | None, remote_name: str | None = None) -> str:
        """Expand a trait's templates into a flat, space-separated string."""
        name = remote_name or DEFAULT_REMOTE_NAME
        if trait is None:
            return expand_template(REF_SPEC_DEFAULT, name)
        return " ".join(expand_template(t, name) for t in trait.templates)

    @classmethod
    def to_raw(cls, traits: Iterable[SourceTrait]) -> str:
        """The legacy ``rawRefSpecs`` equivalent of a trait list."""
        remote_name: str | None = None
        refspecs: RefSpecsTrait | None = None
        for trait in traits:
            if remote_name is None and isinstance(trait, RemoteNameTrait):
                remote_name = trait.remote_name
            if refspecs is None and isinstance(trait, RefSpecsTrait):
                refspecs = trait
        return cls.serialize(refspecs, remote_name)
