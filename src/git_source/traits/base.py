"""The shared trait interface."""

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Hashable

from pydantic import BaseModel

if TYPE_CHECKING:
    from git_source.traits.context import DiscoveryContext


class SourceTrait(BaseModel):
    """A self-contained contribution to how a source discovers heads.

    Each concrete trait declares a ``kind`` used when traits are stored,
    and applies itself to a DiscoveryContext. A source holds at most one
    trait per ``identity``.
    """

    kind: ClassVar[str] = ""

    class Config:
        frozen = True

    @abstractmethod
    def decorate_context(self, context: "DiscoveryContext") -> None:
        """Contribute this trait's behavior to the context."""

    @property
    def identity(self) -> Hashable:
        return type(self)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, **self.model_dump(mode="json")}
