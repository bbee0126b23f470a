"""Git locator and ref-spec helpers."""

from git_source.git.refspec import (
    DEFAULT_REMOTE_NAME,
    REF_SPEC_DEFAULT,
    REF_SPEC_REMOTE_NAME_PLACEHOLDER,
    REF_SPEC_TAGS,
    expand_template,
)
from git_source.git.uri import RepositoryURI, UriMatcher, loosely_matches

__all__ = [
    "DEFAULT_REMOTE_NAME",
    "REF_SPEC_DEFAULT",
    "REF_SPEC_REMOTE_NAME_PLACEHOLDER",
    "REF_SPEC_TAGS",
    "RepositoryURI",
    "UriMatcher",
    "expand_template",
    "loosely_matches",
]
