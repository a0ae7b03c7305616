"""
Static extension to MIME type table.

Keys are lowercase extensions without the leading dot. The entries follow
Apache's ``mime.types`` for the formats commonly uploaded through forms.
The stdlib ``mimetypes`` registry is not used here because it reads
``/etc/mime.types`` and friends, so its answers differ from host to host.
"""

from __future__ import annotations

from typing import Final

MIME_TYPES: Final[dict[str, str]] = {
    # Images
    "bmp": "image/bmp",
    "gif": "image/gif",
    "ico": "image/x-icon",
    "jpe": "image/jpeg",
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "png": "image/png",
    "psd": "image/vnd.adobe.photoshop",
    "svg": "image/svg+xml",
    "svgz": "image/svg+xml",
    "tif": "image/tiff",
    "tiff": "image/tiff",
    "webp": "image/webp",
    "avif": "image/avif",
    "heic": "image/heic",
    # Audio
    "aac": "audio/x-aac",
    "flac": "audio/x-flac",
    "m4a": "audio/mp4",
    "mid": "audio/midi",
    "midi": "audio/midi",
    "mp3": "audio/mpeg",
    "mpga": "audio/mpeg",
    "oga": "audio/ogg",
    "ogg": "audio/ogg",
    "opus": "audio/ogg",
    "wav": "audio/x-wav",
    "weba": "audio/webm",
    "wma": "audio/x-ms-wma",
    # Video
    "3gp": "video/3gpp",
    "avi": "video/x-msvideo",
    "flv": "video/x-flv",
    "m4v": "video/x-m4v",
    "mkv": "video/x-matroska",
    "mov": "video/quicktime",
    "mp4": "video/mp4",
    "mpeg": "video/mpeg",
    "mpg": "video/mpeg",
    "ogv": "video/ogg",
    "qt": "video/quicktime",
    "webm": "video/webm",
    "wmv": "video/x-ms-wmv",
    # Text
    "css": "text/css",
    "csv": "text/csv",
    "htm": "text/html",
    "html": "text/html",
    "ics": "text/calendar",
    "log": "text/plain",
    "md": "text/markdown",
    "rtx": "text/richtext",
    "text": "text/plain",
    "tsv": "text/tab-separated-values",
    "txt": "text/plain",
    "vcf": "text/x-vcard",
    "yaml": "text/yaml",
    "yml": "text/yaml",
    # Application
    "ai": "application/postscript",
    "atom": "application/atom+xml",
    "bin": "application/octet-stream",
    "bz": "application/x-bzip",
    "bz2": "application/x-bzip2",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "dot": "application/msword",
    "eps": "application/postscript",
    "epub": "application/epub+zip",
    "exe": "application/x-msdownload",
    "gz": "application/x-gzip",
    "jar": "application/java-archive",
    "js": "application/javascript",
    "json": "application/json",
    "jsonld": "application/ld+json",
    "mjs": "application/javascript",
    "odp": "application/vnd.oasis.opendocument.presentation",
    "ods": "application/vnd.oasis.opendocument.spreadsheet",
    "odt": "application/vnd.oasis.opendocument.text",
    "pdf": "application/pdf",
    "ppt": "application/vnd.ms-powerpoint",
    "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "ps": "application/postscript",
    "rar": "application/x-rar-compressed",
    "rss": "application/rss+xml",
    "rtf": "application/rtf",
    "sh": "application/x-sh",
    "sql": "application/sql",
    "swf": "application/x-shockwave-flash",
    "tar": "application/x-tar",
    "tgz": "application/x-gzip",
    "torrent": "application/x-bittorrent",
    "wasm": "application/wasm",
    "xhtml": "application/xhtml+xml",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "xml": "application/xml",
    "xsl": "application/xml",
    "7z": "application/x-7z-compressed",
    "zip": "application/zip",
    # Fonts
    "otf": "font/otf",
    "ttf": "font/ttf",
    "woff": "font/woff",
    "woff2": "font/woff2",
}
