"""Repository locator parsing and loose equivalence."""

import re
from typing import Callable
from urllib.parse import urlsplit

from pydantic import BaseModel

from git_source.core.exceptions import InvalidURIError

# user@host:path, the scp-like form understood by git
_SCP_RE = re.compile(r"^(?:(?P<user>[^@/:]+)@)?(?P<host>[^@/:\[\]]+):(?!//)(?P<path>.*)$")
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")

# Raises InvalidURIError or ValueError for a locator it cannot compare
UriMatcher = Callable[[str, str], bool]


class RepositoryURI(BaseModel):
    """A parsed repository locator."""

    scheme: str | None = None
    user: str | None = None
    host: str | None = None
    port: int | None = None
    path: str = ""

    class Config:
        frozen = True

    @classmethod
    def parse(cls, value: str) -> "RepositoryURI":
        """Parse a URL-form or scp-like git locator.

        Raises InvalidURIError when the value is neither.
        """
        text = (value or "").strip()
        if not text or any(ch.isspace() for ch in text):
            raise InvalidURIError(
                f"Not a repository URI: {value!r}",
                details={"uri": value},
            )

        if _SCHEME_RE.match(text):
            try:
                parts = urlsplit(text)
                port = parts.port
            except ValueError as exc:
                raise InvalidURIError(
                    f"Not a repository URI: {value!r}",
                    details={"uri": value, "reason": str(exc)},
                ) from exc
            if parts.scheme.lower() != "file" and not parts.hostname:
                raise InvalidURIError(
                    f"Repository URI has no host: {value!r}",
                    details={"uri": value},
                )
            return cls(
                scheme=parts.scheme.lower(),
                user=parts.username,
                host=parts.hostname,
                port=port,
                path=parts.path,
            )

        scp_match = _SCP_RE.match(text)
        if scp_match:
            return cls(
                scheme="ssh",
                user=scp_match.group("user"),
                host=scp_match.group("host").lower(),
                path=scp_match.group("path"),
            )

        # Bare local path
        return cls(path=text)

    @property
    def humanish_name(self) -> str:
        """Last path segment without a ``.git`` suffix, e.g. ``repo``."""
        segments = [s for s in self.path.split("/") if s]
        if not segments:
            return ""
        name = segments[-1]
        if name == ".git" and len(segments) > 1:
            name = segments[-2]
        return re.sub(r"\.git$", "", name)

    def normalized_path(self) -> str:
        return normalize_path(self.path)


def normalize_path(path: str) -> str:
    """Strip one leading slash, one trailing slash and one ``.git`` suffix."""
    if path.startswith("/"):
        path = path[1:]
    if path.endswith("/"):
        path = path[:-1]
    if path.endswith(".git"):
        path = path[:-4]
    return path


def loosely_matches(uri_a: str, uri_b: str) -> bool:
    """Whether two locators point at the same repository.

    Hosts must be equal and paths equal after normalization. Scheme, port
    and user-info are ignored, so ``https://host/org/repo`` matches
    ``git@host:org/repo.git``.
    """
    lhs = RepositoryURI.parse(uri_a)
    rhs = RepositoryURI.parse(uri_b)
    return lhs.host == rhs.host and lhs.normalized_path() == rhs.normalized_path()
