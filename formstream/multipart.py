from __future__ import annotations

from typing import IO

from formstream.builder import MultipartStreamBuilder
from formstream.mimetype import MimetypeResolver

DEFAULT_CONTENT_TYPE = "application/octet-stream"

FileValue = bytes | IO[bytes] | tuple[str, bytes | IO[bytes], str | None]


def build_multipart(
    data: dict[str, str] | None,
    files: dict[str, FileValue],
    boundary: str | None = None,
    mimetype_resolver: MimetypeResolver | None = None,
) -> tuple[str, bytes]:
    """
    Build a multipart/form-data body in one call.
    `files` values can be bytes, a binary file object, or
    (filename, content, content_type|None). Bare bytes use the field name as
    filename; a missing content type is resolved from the filename and falls
    back to application/octet-stream.
    """
    resolver = mimetype_resolver or MimetypeResolver()
    builder = MultipartStreamBuilder(mimetype_resolver=resolver)
    if boundary is not None:
        builder.set_boundary(boundary)
    if data:
        for k, v in data.items():
            builder.add_named_part(k, v)
    for field, val in files.items():
        if isinstance(val, tuple):
            filename, content, ctype = val
        elif isinstance(val, (bytes, bytearray)):
            filename, content, ctype = field, val, None
        else:
            name = getattr(val, "name", None)
            filename = name if isinstance(name, str) else field
            content, ctype = val, None
        ctype = ctype or resolver.from_filename(filename) or DEFAULT_CONTENT_TYPE
        builder.add_named_part(
            field, content, headers={"Content-Type": ctype}, filename=filename
        )
    with builder.build() as body:
        payload = body.getvalue()
    return builder.content_type, payload
