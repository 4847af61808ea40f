"""Link reference map for Garabato.

The block-level parser collects link reference definitions and hands the
result to the inline parser as a ReferenceMap. The inline parser only
performs lookups; it never adds or removes entries.

Thread Safety:
ReferenceMap is read-only after construction and safe to share across
threads and concurrent parse calls.

"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping

# Pattern for whitespace normalization
_WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_label(label: str) -> str:
    """Normalize a link reference label for matching.

    Label matching is case-insensitive (Unicode case fold) and treats any
    run of whitespace, including line endings, as a single space.

    Args:
        label: Raw label text

    Returns:
        Normalized label

    """
    return _WHITESPACE_PATTERN.sub(" ", label.strip()).casefold()


class ReferenceMap(Mapping[str, tuple[str, str]]):
    """Read-only mapping of normalized labels to ``(url, title)`` pairs.

    Keys are normalized on construction so a map built from raw labels
    behaves the same as one built from already-normalized labels. When two
    raw labels normalize to the same key the first one wins.

    Usage:
        refs = ReferenceMap({"Foo  Bar": ("/url", "title")})
        refs.lookup("foo bar")  # ("/url", "title")

    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, tuple[str, str]] | None = None) -> None:
        normalized: dict[str, tuple[str, str]] = {}
        for label, (url, title) in (entries or {}).items():
            normalized.setdefault(normalize_label(label), (url, title))
        self._entries = normalized

    def lookup(self, label: str) -> tuple[str, str] | None:
        """Find the ``(url, title)`` for a raw label, or None."""
        return self._entries.get(normalize_label(label))

    def __getitem__(self, label: str) -> tuple[str, str]:
        return self._entries[normalize_label(label)]

    def __contains__(self, label: object) -> bool:
        return isinstance(label, str) and normalize_label(label) in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ReferenceMap({self._entries!r})"


__all__ = [
    "ReferenceMap",
    "normalize_label",
]
