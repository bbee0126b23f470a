"""Transport-security policy and privilege scopes."""

from functools import lru_cache

import structlog
from pydantic import BaseModel

from git_source.config.settings import get_settings
from git_source.core.exceptions import InsecureTransportError

logger = structlog.get_logger(__name__)


class TransportSecurityPolicy:
    """Decides whether a credential may be used with a remote.

    Only restrictive in FIPS mode, where credentials must not travel over
    plain ``http:``.
    """

    def __init__(self, fips_mode: bool = False) -> None:
        self.fips_mode = fips_mode

    def is_transport_secure(self, credentials_id: str | None, remote: str | None) -> bool:
        if not self.fips_mode:
            return True
        if not credentials_id or not remote:
            return True
        return not remote.strip().lower().startswith("http:")

    def require_secure(self, credentials_id: str | None, remote: str | None) -> None:
        """Raise InsecureTransportError if the combination is not allowed."""
        if not self.is_transport_secure(credentials_id, remote):
            message = "Credentials cannot be used with a non-TLS remote URL while FIPS mode is enabled"
            logger.error(message, remote=remote, credentials_id=credentials_id)
            raise InsecureTransportError(
                message,
                details={"remote": remote, "credentials_id": credentials_id},
            )


@lru_cache
def get_transport_policy() -> TransportSecurityPolicy:
    """Policy built from the application settings."""
    return TransportSecurityPolicy(fips_mode=get_settings().fips_mode)


class PrivilegeScope(BaseModel):
    """Who a registry read is performed as.

    An elevated scope sees every owner; any other scope only sees owners
    that are public or list its principal.
    """

    principal: str
    elevated: bool = False
    read_only: bool = True

    class Config:
        frozen = True

    @classmethod
    def system(cls) -> "PrivilegeScope":
        return cls(principal="SYSTEM", elevated=True)

    @classmethod
    def anonymous(cls) -> "PrivilegeScope":
        return cls(principal="anonymous")

    def can_see(self, allowed_principals: frozenset[str] | None) -> bool:
        if self.elevated or allowed_principals is None:
            return True
        return self.principal in allowed_principals
