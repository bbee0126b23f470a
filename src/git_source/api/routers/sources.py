"""Tracked source endpoints."""

from typing import Any

from fastapi import APIRouter, HTTPException, Response, status
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from git_source.api.dependencies import SourceServiceDep
from git_source.core.exceptions import GitSourceError, SourceNotFoundError
from git_source.core.security import PrivilegeScope
from git_source.sources.models import GitSource, SourceOwner

router = APIRouter(prefix="/sources")


# --- Response models ---

class SourceResponse(BaseModel):
    """A source with its derived configuration."""

    id: str
    remote: str
    credentials_id: str | None
    traits: list[dict[str, Any]]
    ref_specs: list[str]
    raw_ref_specs: str
    ignore_on_push_notifications: bool

    @classmethod
    def from_source(cls, source: GitSource) -> "SourceResponse":
        return cls(
            id=source.id,
            remote=source.remote,
            credentials_id=source.credentials_id,
            traits=[trait.to_dict() for trait in source.traits],
            ref_specs=source.ref_specs,
            raw_ref_specs=source.raw_ref_specs,
            ignore_on_push_notifications=source.ignore_on_push_notifications,
        )


class OwnerResponse(BaseModel):
    """An owner and its sources."""

    full_name: str
    display_name: str
    url: str | None = None
    sources: list[SourceResponse] = Field(default_factory=list)

    @classmethod
    def from_owner(cls, owner: SourceOwner) -> "OwnerResponse":
        return cls(
            full_name=owner.full_name,
            display_name=owner.full_display_name,
            url=owner.url,
            sources=[SourceResponse.from_source(s) for s in owner.sources],
        )


# --- Endpoints ---

@router.get("", response_model=list[OwnerResponse])
async def list_sources(service: SourceServiceDep) -> list[OwnerResponse]:
    """List every tracked owner."""
    owners = service.list_owners(PrivilegeScope.system())
    return [OwnerResponse.from_owner(owner) for owner in owners]


@router.post("", response_model=OwnerResponse, status_code=status.HTTP_201_CREATED)
async def register_owner(
    payload: dict[str, Any],
    service: SourceServiceDep,
) -> OwnerResponse:
    """Register an owner; sources may use the trait form or the legacy fields."""
    try:
        owner = service.register_owner(payload)
    except PydanticValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=exc.errors(include_url=False, include_context=False),
        )
    except GitSourceError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.message,
        )
    return OwnerResponse.from_owner(owner)


@router.delete("/{full_name:path}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_owner(full_name: str, service: SourceServiceDep) -> Response:
    """Stop tracking an owner."""
    try:
        service.remove_owner(full_name)
    except SourceNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Owner not found: {full_name}",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
