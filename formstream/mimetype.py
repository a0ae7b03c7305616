"""
Resolve MIME types from file extensions.

``MimetypeResolver`` answers from the static table in
:mod:`formstream.mimetable`. ``CustomMimetypeResolver`` adds an override layer
checked first. Unknown extensions resolve to an empty string.
"""

from __future__ import annotations

from collections.abc import Mapping

from formstream.mimetable import MIME_TYPES
from formstream.utils import extension as _extension


def _normalize(extension: str) -> str:
    extension = extension.lower()
    if extension.startswith("."):
        extension = extension[1:]
    return extension


class MimetypeResolver:
    """Lookup against the built-in extension table."""

    def from_extension(self, extension: str) -> str:
        return MIME_TYPES.get(_normalize(extension), "")

    def from_filename(self, filename: str) -> str:
        ext = _extension(filename)
        if not ext:
            return ""
        return self.from_extension(ext)


class CustomMimetypeResolver(MimetypeResolver):
    """
    Resolver with caller-provided mappings.

    Mappings given here or through :meth:`add_mimetype` win over the
    built-in table. The built-in table itself is never modified.

    Args:
        mimetypes: Initial ``extension -> mimetype`` mapping
    """

    def __init__(self, mimetypes: Mapping[str, str] | None = None) -> None:
        self._mimetypes: dict[str, str] = {}
        for ext, mimetype in (mimetypes or {}).items():
            self._mimetypes[_normalize(ext)] = mimetype

    def add_mimetype(self, extension: str, mimetype: str) -> CustomMimetypeResolver:
        self._mimetypes[_normalize(extension)] = mimetype
        return self

    def from_extension(self, extension: str) -> str:
        ext = _normalize(extension)
        if ext in self._mimetypes:
            return self._mimetypes[ext]
        return super().from_extension(ext)
