from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping


def _sanitize_header(name: str, value: str) -> tuple[str, str]:
    """
    Sanitize header name and value to prevent header injection (CRLF injection)
    inside a part's header block.
    Strips CR, LF, and null bytes from both name and value.
    """
    clean_name = name.replace("\r", "").replace("\n", "").replace("\x00", "")
    clean_value = value.replace("\r", "").replace("\n", "").replace("\x00", "")
    return clean_name, clean_value


class PartHeaders:
    """
    Ordered headers of a single part.

    Entries keep their insertion order and original casing, which is what
    gets written to the wire. Presence checks are case-insensitive through a
    lowercase index.
    """

    def __init__(
        self, headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None
    ) -> None:
        self._items: list[tuple[str, str]] = []
        self._index: dict[str, int] = {}
        if headers is None:
            return
        pairs = headers.items() if isinstance(headers, Mapping) else headers
        for name, value in pairs:
            self.add(name, value)

    def add(self, name: str, value: str | int) -> None:
        name, value = _sanitize_header(str(name), str(value))
        self._index.setdefault(name.lower(), len(self._items))
        self._items.append((name, value))

    def get(self, name: str, default: str | None = None) -> str | None:
        pos = self._index.get(name.lower())
        if pos is None:
            return default
        return self._items[pos][1]

    def items(self) -> list[tuple[str, str]]:
        return list(self._items)

    def encode(self) -> bytes:
        """Render the header block, one ``Name: value\\r\\n`` line per entry."""
        return "".join(f"{name}: {value}\r\n" for name, value in self._items).encode(
            "utf-8"
        )

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._index

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PartHeaders):
            return self._items == other._items
        return NotImplemented

    def __repr__(self) -> str:
        return f"PartHeaders({self._items!r})"
