"""Ref-spec templates and remote-name placeholder expansion.

Templates are treated as opaque text. The only thing recognized inside
them is the ``@{remote}`` placeholder, matched case-insensitively.
"""

import re

DEFAULT_REMOTE_NAME = "origin"

REF_SPEC_REMOTE_NAME_PLACEHOLDER = "@{remote}"

REF_SPEC_DEFAULT = "+refs/heads/*:refs/remotes/@{remote}/*"

REF_SPEC_TAGS = "+refs/tags/*:refs/tags/*"

_PLACEHOLDER_RE = re.compile(re.escape(REF_SPEC_REMOTE_NAME_PLACEHOLDER), re.IGNORECASE)


def expand_template(template: str, remote_name: str | None = None) -> str:
    """Substitute the remote name into every placeholder of a template."""
    name = remote_name or DEFAULT_REMOTE_NAME
    return _PLACEHOLDER_RE.sub(lambda _: name, template)


def default_ref_spec(remote_name: str | None = None) -> str:
    """The canonical branch ref spec for a remote."""
    return expand_template(REF_SPEC_DEFAULT, remote_name)


def canonical_defaults(remote_name: str | None = None) -> set[str]:
    """Ref-spec strings that mean "use the default template".

    Always contains the ``origin`` form; when a remote name is given
    its expanded form is included too.
    """
    defaults = {default_ref_spec(DEFAULT_REMOTE_NAME)}
    if remote_name is not None:
        defaults.add(f"+refs/heads/*:refs/remotes/{remote_name}/*")
    return defaults
