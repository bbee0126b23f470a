"""The set of tracked sources."""

import threading
from typing import Iterable, Protocol

import structlog

from git_source.core.exceptions import SourceNotFoundError
from git_source.core.security import PrivilegeScope
from git_source.sources.models import GitSource, SourceOwner

logger = structlog.get_logger(__name__)


class SourceRegistry(Protocol):
    """Read access to every tracked source."""

    def entries(self, scope: PrivilegeScope) -> list[tuple[SourceOwner, GitSource]]:
        """Snapshot of (owner, source) pairs visible to the scope."""
        ...


class InMemorySourceRegistry:
    """Thread-safe registry of owners kept in memory.

    Readers get a copied snapshot; the lock is never held while a caller
    iterates, so concurrent edits are either fully seen or not at all.
    """

    def __init__(self, owners: Iterable[SourceOwner] = ()) -> None:
        self._lock = threading.Lock()
        self._owners: dict[str, SourceOwner] = {}
        for owner in owners:
            self.add_owner(owner)

    def add_owner(self, owner: SourceOwner) -> None:
        """Add an owner, replacing any owner with the same full name."""
        with self._lock:
            self._owners[owner.full_name] = owner
        logger.debug(
            "Owner registered",
            owner=owner.full_name,
            sources=len(owner.sources),
        )

    def remove_owner(self, full_name: str) -> SourceOwner:
        with self._lock:
            owner = self._owners.pop(full_name, None)
        if owner is None:
            raise SourceNotFoundError(
                f"Owner not found: {full_name}",
                details={"owner": full_name},
            )
        logger.debug("Owner removed", owner=full_name)
        return owner

    def get_owner(self, full_name: str) -> SourceOwner:
        with self._lock:
            owner = self._owners.get(full_name)
        if owner is None:
            raise SourceNotFoundError(
                f"Owner not found: {full_name}",
                details={"owner": full_name},
            )
        return owner

    def owners(self, scope: PrivilegeScope) -> list[SourceOwner]:
        with self._lock:
            owners = list(self._owners.values())
        return [owner for owner in owners if owner.is_visible_to(scope)]

    def entries(self, scope: PrivilegeScope) -> list[tuple[SourceOwner, GitSource]]:
        return [
            (owner, source)
            for owner in self.owners(scope)
            for source in list(owner.sources)
        ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._owners)
