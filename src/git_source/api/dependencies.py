"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from git_source.config import Settings
from git_source.services.notification import NotificationService
from git_source.services.sources import SourceService


def get_settings_dep(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_notification_service(request: Request) -> NotificationService:
    """Get the notification service from app state."""
    return request.app.state.notification_service


def get_source_service(request: Request) -> SourceService:
    """Get the source service from app state."""
    return request.app.state.source_service


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings_dep)]
NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]
SourceServiceDep = Annotated[SourceService, Depends(get_source_service)]
