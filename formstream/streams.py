"""
Byte stream abstraction consumed and produced by the builder.

A :class:`Stream` wraps a binary file-like object. Stream factories turn raw
content (``str``/``bytes`` or open binary files) into streams. Two factory
shapes are accepted:

- :class:`StreamFactory` with separate ``create_stream`` and
  ``create_stream_from_file`` methods,
- :class:`LegacyStreamFactory` with a single ``create_stream`` that
  dispatches on the input type itself.

:func:`adapt_factory` wraps either shape once so callers only deal with
``_StreamAdapter.create``.
"""

from __future__ import annotations

import io
import os
from typing import IO, Any

from formstream.errors import InvalidInputError

MEMORY_LOCATOR = "memory://"

_BYTES_TYPES = (bytes, bytearray, memoryview)


def _is_file_like(obj: Any) -> bool:
    return callable(getattr(obj, "read", None))


def _is_binary_file(obj: Any) -> bool:
    """File-like objects whose read() yields bytes; text-mode files are excluded."""
    if not _is_file_like(obj) or isinstance(obj, io.TextIOBase):
        return False
    mode = getattr(obj, "mode", None)
    return not isinstance(mode, str) or "b" in mode


class Stream:
    """
    Binary stream over a file-like object.

    Args:
        fileobj: Binary file-like object (``io.BytesIO``, ``open(path, "rb")``...)
        size: Known size in bytes; measured by seeking when omitted
        locator: Logical source of the data (path or URI). Defaults to the
            file object's ``name`` when that is a string.
    """

    def __init__(
        self,
        fileobj: IO[bytes],
        size: int | None = None,
        locator: str | None = None,
    ) -> None:
        self._fileobj = fileobj
        self._size = size
        self._locator = locator
        self._eof = False

    @property
    def fileobj(self) -> IO[bytes]:
        return self._fileobj

    @property
    def locator(self) -> str | None:
        if self._locator is not None:
            return self._locator
        name = getattr(self._fileobj, "name", None)
        return name if isinstance(name, str) else None

    @property
    def size(self) -> int | None:
        """Size in bytes, or None if it cannot be known without reading."""
        if self._size is not None:
            return self._size
        if self.seekable():
            try:
                pos = self._fileobj.tell()
                end = self._fileobj.seek(0, os.SEEK_END)
                self._fileobj.seek(pos)
            except (OSError, ValueError):
                return None
            return end
        return None

    def seekable(self) -> bool:
        check = getattr(self._fileobj, "seekable", None)
        if callable(check):
            return bool(check())
        return callable(getattr(self._fileobj, "seek", None))

    def readable(self) -> bool:
        check = getattr(self._fileobj, "readable", None)
        if callable(check):
            return bool(check())
        return _is_file_like(self._fileobj)

    def rewind(self) -> None:
        self._fileobj.seek(0)
        self._eof = False

    def tell(self) -> int:
        return self._fileobj.tell()

    def eof(self) -> bool:
        return self._eof

    def read(self, size: int = -1) -> bytes:
        data = self._fileobj.read(size)
        if not data and size != 0:
            self._eof = True
        return data

    def getvalue(self) -> bytes:
        """Return the whole content from offset 0 (or the remainder if unseekable)."""
        if self.readable():
            if self.seekable():
                self.rewind()
            data = self._fileobj.read()
            self._eof = True
            return data
        getvalue = getattr(self._fileobj, "getvalue", None)
        if callable(getvalue):
            return getvalue()
        return b""

    def close(self) -> None:
        self._fileobj.close()

    @property
    def closed(self) -> bool:
        return bool(getattr(self._fileobj, "closed", False))

    def __bytes__(self) -> bytes:
        return self.getvalue()

    def __enter__(self) -> Stream:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<Stream locator={self.locator!r} size={self.size!r}>"


class StreamFactory:
    """Factory with one method per input kind."""

    def create_stream(self, content: str | bytes = b"") -> Stream:
        if isinstance(content, str):
            content = content.encode("utf-8")
        return Stream(io.BytesIO(content), locator=MEMORY_LOCATOR)

    def create_stream_from_file(self, fileobj: IO[bytes]) -> Stream:
        return Stream(fileobj)


class LegacyStreamFactory:
    """Factory with a single entry point that dispatches on the input type."""

    def create_stream(self, body: Any = None) -> Stream:
        if isinstance(body, Stream):
            return body
        if body is None:
            body = b""
        if isinstance(body, str):
            body = body.encode("utf-8")
        if isinstance(body, _BYTES_TYPES):
            return Stream(io.BytesIO(bytes(body)), locator=MEMORY_LOCATOR)
        if _is_binary_file(body):
            return Stream(body)
        raise InvalidInputError(
            f"Cannot create a stream from {type(body).__name__!r}"
        )


class _StreamAdapter:
    """Uniform ``create`` over either factory shape."""

    def __init__(self, factory: Any) -> None:
        self.factory = factory

    def create(self, content: Any) -> Stream:
        if isinstance(content, Stream):
            return content
        return self._create(content)

    def _create(self, content: Any) -> Stream:
        raise NotImplementedError


class _FactoryAdapter(_StreamAdapter):
    def _create(self, content: Any) -> Stream:
        if isinstance(content, str):
            return self.factory.create_stream(content)
        if isinstance(content, _BYTES_TYPES):
            return self.factory.create_stream(bytes(content))
        if _is_binary_file(content):
            return self.factory.create_stream_from_file(content)
        raise InvalidInputError(
            "Content must be a str, bytes, a binary file object or a Stream, "
            f"got {type(content).__name__!r}"
        )


class _LegacyFactoryAdapter(_StreamAdapter):
    def _create(self, content: Any) -> Stream:
        if not isinstance(content, (str, *_BYTES_TYPES)) and not _is_binary_file(content):
            raise InvalidInputError(
                "Content must be a str, bytes, a binary file object or a Stream, "
                f"got {type(content).__name__!r}"
            )
        return self.factory.create_stream(content)


def adapt_factory(factory: Any) -> _StreamAdapter:
    """Pick the adapter matching the factory's shape."""
    if isinstance(factory, _StreamAdapter):
        return factory
    if callable(getattr(factory, "create_stream_from_file", None)):
        return _FactoryAdapter(factory)
    if callable(getattr(factory, "create_stream", None)):
        return _LegacyFactoryAdapter(factory)
    raise TypeError(f"{type(factory).__name__!r} is not a stream factory")
