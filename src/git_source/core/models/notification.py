"""Push-notification events and their results."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, SerializeAsAny

from git_source.core.models.head import Head, Revision


class NotificationEvent(BaseModel):
    """A "something changed" signal from a repository host."""

    origin: str
    uri: str
    sha1: str | None = None
    branches: tuple[str, ...] = ()
    received_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        frozen = True


class ResponseContributor(BaseModel):
    """One part of the response to a notification."""

    class Config:
        frozen = True

    def headers(self) -> list[tuple[str, str]]:
        return []

    def body(self) -> str:
        raise NotImplementedError


class TriggeredContributor(ResponseContributor):
    """An owner had indexing scheduled."""

    owner: str
    owner_url: str | None = None

    def headers(self) -> list[tuple[str, str]]:
        return [("Triggered", self.owner_url or self.owner)]

    def body(self) -> str:
        return f"Scheduled indexing of {self.owner}"


class MessageContributor(ResponseContributor):
    """A plain informational line."""

    message: str

    def body(self) -> str:
        return self.message


class AffectedHead(BaseModel):
    """The outcome of one branch notification for one matching source.

    ``head`` is None when the source's filters exclude the branch.
    ``revision`` is None when the head is known but the commit is not.
    """

    owner: str
    source_id: str
    branch: str
    head: Head | None = None
    revision: Revision | None = None

    class Config:
        frozen = True

    @property
    def excluded(self) -> bool:
        return self.head is None


class NotificationResult(BaseModel):
    """Everything a notification produced."""

    event: NotificationEvent
    contributors: list[SerializeAsAny[ResponseContributor]] = Field(default_factory=list)
    affected: list[AffectedHead] = Field(default_factory=list)
    consumed: bool = False

    def heads_for(self, source_id: str) -> dict[Head, Revision | None]:
        """Map each affected head of a source to its revision."""
        return {
            item.head: item.revision
            for item in self.affected
            if item.source_id == source_id and item.head is not None
        }

    def body(self) -> str:
        return "".join(f"{c.body()}\n" for c in self.contributors)
