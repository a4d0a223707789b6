"""Template spec strings.

A template spec names a template file and, optionally, one block in it::

    "GameListingPage"            file GameListingPage, block GameListingPage
    "games/GameListingPage"      file games/GameListingPage, block GameListingPage
    "games/GameListingPage:Row"  file games/GameListingPage, block Row
    "games/GameListingPage:"     file games/GameListingPage, whole file

The file part has no extension; the renderer appends one. Every place
that accepts a spec string resolves it through ``parse_template_spec``.
"""

from typing import NamedTuple


class TemplateRef(NamedTuple):
    """A resolved (file, block) pair. An empty block means the whole file."""

    file_name: str
    block_name: str

    def __str__(self) -> str:
        return f"{self.file_name}[{self.block_name}]"


def base_name(path: str) -> str:
    """Return the part of *path* after the last ``/``."""
    return path.rpartition("/")[2]


def parse_template_spec(spec: str) -> TemplateRef:
    """Split *spec* at its last ``:`` into file and block names.

    Without a ``:`` the block name is the base name of the file. With one,
    everything after it is the block name, verbatim, including ``""``.
    """
    file_name, sep, block_name = spec.rpartition(":")
    if not sep:
        return TemplateRef(spec, base_name(spec))
    return TemplateRef(file_name, block_name)


def resolve_template(view_name: str, spec: str | None = None) -> TemplateRef:
    """Resolve the template a view renders with.

    An explicit *spec* wins; otherwise the file and block are both the
    view's name.
    """
    if spec is not None:
        return parse_template_spec(spec)
    return TemplateRef(view_name, view_name)
