"""Emphasis parsing for Garabato.

Resolves runs of ``*`` or ``_`` into Emph/Strong by recursive descent.
An opener commits to the first matching closer it meets; when none comes,
the delimiters are emitted as literal text followed by the contents that
were already parsed. Nothing is ever re-parsed, so cost stays linear in
the input for each nesting level.

Thread Safety:
All methods are stateless or use instance-local state only.
Safe for concurrent use when each parser instance is used by one thread.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from garabato.nodes import Emph, Inline, Inlines, Str, Strong
from garabato.parsing.charsets import WHITESPACE
from garabato.utils.logger import get_logger, log_literal_fallback

if TYPE_CHECKING:
    from collections.abc import Iterable

    from garabato.config import ParseConfig

logger = get_logger(__name__)


def _wrap(node_cls: type[Emph] | type[Strong], contents: Iterable[Inline]) -> Inlines:
    """Wrap contents in a single node, or nothing if contents are empty."""
    children = tuple(contents)
    if not children:
        return ()
    return (node_cls(children),)


class EmphasisMixin:
    """Mixin for emphasis and strong emphasis.

    Required Host Attributes:
        - _config: ParseConfig
        - _depth: int

    Required Host Methods:
        - _parse_inline_at(text, pos) -> tuple[Inlines, int]
        - _parse_space(text, pos) -> tuple[Inlines, int]

    """

    _config: ParseConfig
    _depth: int

    def _try_parse_enclosure(self, text: str, pos: int, delim: str) -> tuple[Inlines, int] | None:
        """Parse material enclosed in one, two or three delimiters.

        A run followed by whitespace never opens, and runs of four or more
        are literal.
        """
        text_len = len(text)
        end = pos
        while end < text_len and text[end] == delim:
            end += 1
        run = text[pos:end]

        if end < text_len and text[end] in WHITESPACE:
            space, after = self._parse_space(text, end)
            return (Str(run), *space), after

        count = end - pos
        if count > 3:
            return (Str(run),), end

        if self._depth >= self._config.max_nesting:
            log_literal_fallback(logger, self._config.max_nesting, pos, run)
            return (Str(run),), end

        self._depth += 1
        try:
            if count == 3:
                return self._parse_three(text, end, delim)
            if count == 2:
                return self._parse_two(text, end, delim, ())
            return self._parse_one(text, end, delim, ())
        finally:
            self._depth -= 1

    def _parse_one(
        self, text: str, pos: int, delim: str, prefix: Inlines
    ) -> tuple[Inlines, int]:
        """Parse until a single delimiter and emit Emph.

        A double delimiter met on the way starts a nested Strong.
        """
        text_len = len(text)
        double = delim * 2
        contents: list[Inline] = list(prefix)

        while pos < text_len:
            if text[pos] == delim:
                if not (text.startswith(double, pos) and text[pos + 2 : pos + 3] != delim):
                    break
                if self._depth >= self._config.max_nesting:
                    contents.append(Str(double))
                    pos += 2
                    continue
                self._depth += 1
                try:
                    inner, pos = self._parse_two(text, pos + 2, delim, ())
                finally:
                    self._depth -= 1
                contents.extend(inner)
                continue
            inlines, pos = self._parse_inline_at(text, pos)
            contents.extend(inlines)

        if pos < text_len and text[pos] == delim:
            return _wrap(Emph, contents), pos + 1
        return (Str(delim), *contents), pos

    def _parse_two(
        self, text: str, pos: int, delim: str, prefix: Inlines
    ) -> tuple[Inlines, int]:
        """Parse until a double delimiter and emit Strong."""
        text_len = len(text)
        double = delim * 2
        contents: list[Inline] = list(prefix)

        while pos < text_len and not text.startswith(double, pos):
            inlines, pos = self._parse_inline_at(text, pos)
            contents.extend(inlines)

        if pos < text_len:
            return _wrap(Strong, contents), pos + 2
        return (Str(double), *contents), pos

    def _parse_three(self, text: str, pos: int, delim: str) -> tuple[Inlines, int]:
        """Parse after a triple delimiter.

        A triple closer yields Strong around Emph. A double closer emits
        Strong and keeps looking for the single one; a single closer emits
        Emph and keeps looking for the double one.
        """
        text_len = len(text)
        contents: list[Inline] = []

        while pos < text_len and text[pos] != delim:
            inlines, pos = self._parse_inline_at(text, pos)
            contents.extend(inlines)

        if text.startswith(delim * 3, pos):
            return _wrap(Strong, _wrap(Emph, contents)), pos + 3
        if text.startswith(delim * 2, pos):
            return self._parse_one(text, pos + 2, delim, _wrap(Strong, contents))
        if pos < text_len:
            return self._parse_two(text, pos + 1, delim, _wrap(Emph, contents))
        return (Str(delim * 3), *contents), pos
