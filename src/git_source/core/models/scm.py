"""Values carried by browser, tool and extension configuration."""

from typing import Any

from pydantic import BaseModel, Field


class RepositoryBrowser(BaseModel):
    """A repository web browser, e.g. ``github`` at ``https://github.com/org/repo``."""

    kind: str
    url: str | None = None

    class Config:
        frozen = True


class GitExtension(BaseModel):
    """A legacy SCM extension: a type name plus its options."""

    type: str
    options: dict[str, Any] = Field(default_factory=dict)

    class Config:
        frozen = True
