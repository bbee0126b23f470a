"""Health check endpoint."""

from fastapi import APIRouter

from git_source import __version__
from git_source.api.dependencies import SettingsDep

router = APIRouter()


@router.get("/health")
async def health(settings: SettingsDep) -> dict[str, str | bool]:
    return {
        "status": "ok",
        "version": __version__,
        "environment": settings.environment,
        "fips_mode": settings.fips_mode,
    }
