"""Commit notification endpoint."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, Request, status
from fastapi.responses import PlainTextResponse

from git_source.api.dependencies import NotificationServiceDep
from git_source.core.exceptions import InvalidURIError

router = APIRouter(prefix="/git")


def _split_branches(branches: str | None) -> list[str]:
    return [b.strip() for b in (branches or "").split(",") if b.strip()]


@router.api_route("/notifyCommit", methods=["GET", "POST"], response_class=PlainTextResponse)
async def notify_commit(
    request: Request,
    service: NotificationServiceDep,
    url: Annotated[str, Query(min_length=1, description="Repository URL that changed")],
    branches: Annotated[str | None, Query(description="Comma-separated branch names")] = None,
    sha1: Annotated[str | None, Query(description="Commit the branches now point at")] = None,
) -> PlainTextResponse:
    """Tell every source tracking ``url`` that it changed."""
    origin = request.client.host if request.client else "unknown"
    try:
        result = service.notify_commit(
            origin=origin,
            url=url,
            sha1=sha1,
            branches=_split_branches(branches),
        )
    except InvalidURIError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.message,
        )

    response = PlainTextResponse(result.body())
    for contributor in result.contributors:
        for name, value in contributor.headers():
            response.headers.append(name, value)
    return response
