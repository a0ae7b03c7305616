from __future__ import annotations

import os
import re


def _separators() -> str:
    if os.sep != "/":
        return "/" + os.sep
    return "/"


def basename(path: str) -> str:
    """
    Return the trailing component of ``path``.

    Unlike ``os.path.basename`` trailing separators are trimmed first, so
    ``"dir/name/"`` yields ``"name"``. Matching is plain character matching,
    the active locale never changes the result.
    """
    separators = _separators()
    path = path.rstrip(separators)
    match = re.search(f"[^{re.escape(separators)}]+$", path)
    return match.group(0) if match else ""


def extension(filename: str) -> str:
    """Return the extension of the last path component, without the dot."""
    name = basename(filename)
    if "." not in name:
        return ""
    return name.rpartition(".")[2]
