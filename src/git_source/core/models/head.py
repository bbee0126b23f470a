"""Head and revision models."""

from enum import Enum

from pydantic import BaseModel


class HeadCategory(str, Enum):
    """Category a discovered head is grouped under."""

    BRANCH = "branch"
    TAG = "tag"


class Head(BaseModel):
    """A named branch or tag reference."""

    name: str
    category: HeadCategory = HeadCategory.BRANCH

    class Config:
        frozen = True

    def __str__(self) -> str:
        return self.name


class Revision(BaseModel):
    """A head bound to a specific commit."""

    head: Head
    hash: str

    class Config:
        frozen = True
