"""Source management service."""

import json
from pathlib import Path
from typing import Any, Mapping

import structlog
from pydantic import ValidationError as PydanticValidationError

from git_source.core.exceptions import ConfigurationError
from git_source.core.security import PrivilegeScope, TransportSecurityPolicy
from git_source.notifications.registry import InMemorySourceRegistry
from git_source.sources.models import SourceOwner
from git_source.traits.registry import TraitRegistry

logger = structlog.get_logger(__name__)


class SourceService:
    """Registers, removes and loads tracked source owners."""

    def __init__(
        self,
        registry: InMemorySourceRegistry,
        trait_registry: TraitRegistry | None = None,
        transport_policy: TransportSecurityPolicy | None = None,
    ) -> None:
        self._registry = registry
        self._trait_registry = trait_registry
        self._transport_policy = transport_policy

    @property
    def registry(self) -> InMemorySourceRegistry:
        return self._registry

    def _context(self) -> dict[str, Any]:
        return {
            "trait_registry": self._trait_registry,
            "transport_policy": self._transport_policy,
        }

    def parse_owner(self, data: Mapping[str, Any]) -> SourceOwner:
        """Validate an owner mapping, migrating any legacy-form sources."""
        return SourceOwner.model_validate(data, context=self._context())

    def register_owner(self, data: Mapping[str, Any]) -> SourceOwner:
        owner = self.parse_owner(data)
        self._registry.add_owner(owner)
        return owner

    def remove_owner(self, full_name: str) -> SourceOwner:
        return self._registry.remove_owner(full_name)

    def list_owners(self, scope: PrivilegeScope) -> list[SourceOwner]:
        return self._registry.owners(scope)

    def load_file(self, path: str | Path) -> int:
        """Register every owner listed in a JSON sources file.

        A missing file is not an error. Returns the number of owners loaded.
        """
        path = Path(path)
        if not path.exists():
            logger.info("No sources file, starting empty", path=str(path))
            return 0

        try:
            items = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigurationError(
                f"Sources file is not valid JSON: {path}",
                details={"path": str(path), "error": str(exc)},
            ) from exc
        if not isinstance(items, list):
            raise ConfigurationError(
                f"Sources file must contain a list of owners: {path}",
                details={"path": str(path)},
            )

        owners = []
        for item in items:
            try:
                owners.append(self.parse_owner(item))
            except PydanticValidationError as exc:
                raise ConfigurationError(
                    f"Invalid owner in sources file: {path}",
                    details={"path": str(path), "errors": exc.errors()},
                ) from exc
        for owner in owners:
            self._registry.add_owner(owner)

        logger.info("Sources file loaded", path=str(path), owners=len(owners))
        return len(owners)
