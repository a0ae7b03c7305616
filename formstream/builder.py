from __future__ import annotations

import logging
import tempfile
import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from formstream.headers import PartHeaders
from formstream.mimetype import MimetypeResolver
from formstream.streams import MEMORY_LOCATOR, Stream, StreamFactory, adapt_factory
from formstream.utils import basename

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1024 * 1024
DEFAULT_SPOOL_SIZE = 2 * 1024 * 1024

# Locators that do not name a persisted file, so they never become a filename.
_TRANSIENT_LOCATORS = (MEMORY_LOCATOR, "data:")

HeadersLike = Mapping[str, str] | Iterable[tuple[str, str]]


@dataclass(frozen=True)
class Part:
    content: Stream
    headers: PartHeaders


class MultipartStreamBuilder:
    """
    Assemble a ``multipart/form-data`` body from named parts.

    Parts are written in the order they were added. Large bodies are copied
    in ``chunk_size`` reads into an output buffer that stays in memory up to
    ``spool_size`` bytes and then moves to a temporary file.

    Args:
        stream_factory: ``StreamFactory`` or ``LegacyStreamFactory`` used to
            wrap raw content (default: ``StreamFactory()``)
        mimetype_resolver: Resolver used to derive ``Content-Type`` from
            filenames (default: ``MimetypeResolver()``)
        chunk_size: Bytes read from a part per copy step
        spool_size: Output size kept in memory before spilling to disk
    """

    def __init__(
        self,
        stream_factory: Any = None,
        mimetype_resolver: MimetypeResolver | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        spool_size: int = DEFAULT_SPOOL_SIZE,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._streams = adapt_factory(
            stream_factory if stream_factory is not None else StreamFactory()
        )
        self._mimetype_resolver = mimetype_resolver or MimetypeResolver()
        self.chunk_size = chunk_size
        self.spool_size = spool_size
        self._boundary: str | None = None
        self._parts: list[Part] = []

    @property
    def parts(self) -> tuple[Part, ...]:
        return tuple(self._parts)

    @property
    def mimetype_resolver(self) -> MimetypeResolver:
        return self._mimetype_resolver

    @property
    def content_type(self) -> str:
        """Value for the request's ``Content-Type`` header."""
        return f"multipart/form-data; boundary={self.get_boundary()}"

    def __len__(self) -> int:
        return len(self._parts)

    def add_part(
        self, content: Any, headers: HeadersLike | None = None
    ) -> MultipartStreamBuilder:
        """Add content with exactly the given headers."""
        stream = self._streams.create(content)
        part = Part(stream, PartHeaders(headers))
        self._parts.append(part)
        logger.debug(
            "Added part #%d with %d header(s)", len(self._parts), len(part.headers)
        )
        return self

    def add_named_part(
        self,
        name: str,
        content: Any,
        headers: HeadersLike | None = None,
        filename: str | None = None,
    ) -> MultipartStreamBuilder:
        """
        Add a form field or file under ``name``.

        Content-Disposition, Content-Length and Content-Type are filled in
        unless present in ``headers`` (matched case-insensitively). Without an
        explicit ``filename`` the stream's locator (file path) is used, except
        for in-memory and ``data:`` sources.
        """
        stream = self._streams.create(content)
        if not filename:
            filename = None
            locator = stream.locator
            if locator and not locator.startswith(_TRANSIENT_LOCATORS):
                filename = locator
        part_headers = PartHeaders(headers)
        self._prepare_headers(name, stream, filename, part_headers)
        return self.add_part(stream, part_headers)

    def _prepare_headers(
        self,
        name: str,
        stream: Stream,
        filename: str | None,
        headers: PartHeaders,
    ) -> None:
        if "content-disposition" not in headers:
            disposition = f'form-data; name="{name}"'
            if filename is not None:
                disposition += f'; filename="{basename(filename)}"'
            headers.add("Content-Disposition", disposition)

        if "content-length" not in headers:
            length = stream.size
            if length:
                headers.add("Content-Length", str(length))

        if "content-type" not in headers and filename is not None:
            mimetype = self._mimetype_resolver.from_filename(filename)
            if mimetype:
                headers.add("Content-Type", mimetype)

    def build(self) -> Stream:
        """Write all parts and the closing delimiter, return the body rewound to 0."""
        boundary = self.get_boundary()
        delimiter = f"--{boundary}\r\n".encode("utf-8")
        buffer = tempfile.SpooledTemporaryFile(max_size=self.spool_size, mode="w+b")
        for part in self._parts:
            buffer.write(delimiter)
            buffer.write(part.headers.encode())
            buffer.write(b"\r\n")
            self._copy_body(part.content, buffer)
            buffer.write(b"\r\n")
        buffer.write(f"--{boundary}--\r\n".encode("utf-8"))
        size = buffer.tell()
        buffer.seek(0)
        if getattr(buffer, "_rolled", False):
            logger.debug(
                "Multipart body exceeded %d bytes, spilled to a temporary file",
                self.spool_size,
            )
        logger.debug(
            "Built multipart body: %d part(s), %d bytes, boundary=%s",
            len(self._parts),
            size,
            boundary,
        )
        return self._streams.create(buffer)

    def _copy_body(self, content: Stream, buffer: Any) -> None:
        if content.seekable():
            content.rewind()
        if content.readable():
            while not content.eof():
                buffer.write(content.read(self.chunk_size))
        else:
            buffer.write(bytes(content))

    def get_boundary(self) -> str:
        if self._boundary is None:
            self._boundary = uuid.uuid4().hex
            logger.debug("Generated boundary %s", self._boundary)
        return self._boundary

    def set_boundary(self, boundary: str) -> MultipartStreamBuilder:
        # Part bodies are not scanned for the boundary.
        self._boundary = boundary
        return self

    def set_mimetype_resolver(
        self, resolver: MimetypeResolver
    ) -> MultipartStreamBuilder:
        self._mimetype_resolver = resolver
        return self

    def reset(self) -> MultipartStreamBuilder:
        """Drop all parts and the boundary so the builder can start a new body."""
        self._parts = []
        self._boundary = None
        return self
