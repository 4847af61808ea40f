"""Core inline parsing for Garabato.

Provides the driver loop and the simple inline forms: word runs,
whitespace, code spans and the escape/symbol fallback.

Every ``_try_parse_*`` method returns ``(inlines, new_pos)`` on success or
None on failure, and a failing method never consumes input. The driver
relies on this to fall through to the next alternative.

Thread Safety:
All methods are stateless or use instance-local state only.
Safe for concurrent use when each parser instance is used by one thread.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from garabato.errors import ParseError
from garabato.nodes import Code, Inline, Inlines, LineBreak, Space, Str
from garabato.parsing.charsets import (
    ASCII_ALNUM,
    ASCII_PUNCTUATION,
    WHITESPACE,
    is_uri_scheme,
)
from garabato.parsing.inline.scan_index import InlineScanIndex

if TYPE_CHECKING:
    from garabato.config import ParseConfig
    from garabato.references import ReferenceMap


def scan_code_span(text: str, pos: int) -> tuple[str, int] | None:
    """Scan a backtick code span starting at pos.

    The opening fence is a run of N backticks; the span ends at the first
    later run of exactly N backticks. Longer or shorter runs are content.

    Returns:
        (raw_content, end_pos) or None if the fence is never closed.

    """
    return InlineScanIndex(text).code_span(pos)


class InlineParsingCoreMixin:
    """Driver and simple inline forms.

    Required Host Attributes:
        - _refmap: ReferenceMap
        - _config: ParseConfig
        - _depth: int
        - _indexes: dict[str, InlineScanIndex]

    Required Host Methods (from other mixins):
        - _try_parse_math(text, pos) -> tuple | None
        - _try_parse_enclosure(text, pos, delim) -> tuple | None
        - _try_parse_link(text, pos) -> tuple | None
        - _try_parse_image(text, pos) -> tuple | None
        - _try_parse_raw_html(text, pos) -> tuple | None
        - _try_parse_autolink(text, pos) -> tuple | None
        - _try_parse_entity(text, pos) -> tuple | None
        - _try_parse_uri(text, colon_pos, scheme) -> tuple | None

    """

    _refmap: ReferenceMap
    _config: ParseConfig
    _depth: int
    _indexes: dict[str, InlineScanIndex]

    def _scan_index(self, text: str) -> InlineScanIndex:
        """Scan tables for text, built once per distinct text."""
        index = self._indexes.get(text)
        if index is None:
            index = self._indexes[text] = InlineScanIndex(text)
        return index

    def _parse_inlines(self, text: str) -> Inlines:
        """Parse a whole span into inlines.

        Raises:
            ParseError: If a step fails to advance (a grammar gap).
        """
        result: list[Inline] = []
        pos = 0
        text_len = len(text)
        while pos < text_len:
            inlines, new_pos = self._parse_inline_at(text, pos)
            if new_pos <= pos:
                raise ParseError.at_offset("Inline parser made no progress", text, pos)
            result.extend(inlines)
            pos = new_pos
        return tuple(result)

    def _parse_inline_at(self, text: str, pos: int) -> tuple[Inlines, int]:
        """Parse one inline element at pos, trying alternatives in priority order.

        First characters of the alternatives are disjoint except for ``<``
        (raw HTML before autolink), so dispatching on the current character
        keeps the priority order intact.
        """
        char = text[pos]

        if char in ASCII_ALNUM:
            return self._parse_word(text, pos)

        if char in WHITESPACE:
            return self._parse_space(text, pos)

        if char == "$" and self._config.math_enabled:
            result = self._try_parse_math(text, pos)
            if result is not None:
                return result

        # Underscores right after a word character never open emphasis
        if char == "*" or (char == "_" and not (pos > 0 and text[pos - 1].isalnum())):
            result = self._try_parse_enclosure(text, pos, char)
            if result is not None:
                return result

        if char == "`":
            return self._parse_code(text, pos)

        if char == "[":
            result = self._try_parse_link(text, pos)
            if result is not None:
                return result

        if char == "!":
            result = self._try_parse_image(text, pos)
            if result is not None:
                return result

        if char == "<":
            result = self._try_parse_raw_html(text, pos)
            if result is None:
                result = self._try_parse_autolink(text, pos)
            if result is not None:
                return result

        if char == "&":
            result = self._try_parse_entity(text, pos)
            if result is not None:
                return result

        return self._parse_symbol(text, pos)

    def _parse_word(self, text: str, pos: int) -> tuple[Inlines, int]:
        """Parse an ASCII alphanumeric run, or a bare URI if it names a scheme.

        Underscores between two alphanumerics belong to the word, so
        ``snake_case_word`` stays a single run.
        """
        text_len = len(text)
        end = pos + 1
        while end < text_len:
            char = text[end]
            if char in ASCII_ALNUM:
                end += 1
                continue
            if char == "_":
                run_end = end
                while run_end < text_len and text[run_end] == "_":
                    run_end += 1
                if run_end < text_len and text[run_end] in ASCII_ALNUM:
                    end = run_end
                    continue
            break

        word = text[pos:end]
        if (
            self._config.autolinks_enabled
            and end < text_len
            and text[end] == ":"
            and is_uri_scheme(word)
        ):
            result = self._try_parse_uri(text, end, word)
            if result is not None:
                return result
        return (Str(word),), end

    def _parse_space(self, text: str, pos: int) -> tuple[Inlines, int]:
        """Parse a whitespace run.

        A run containing a newline whose preceding spaces number two or more
        is a hard break; every other run is a single Space.
        """
        text_len = len(text)
        end = pos
        while end < text_len and text[end] in WHITESPACE:
            end += 1

        run = text[pos:end]
        newline = run.find("\n")
        if newline >= 2 and run.endswith("  ", 0, newline):
            return (LineBreak(),), end
        return (Space(),), end

    def _parse_code(self, text: str, pos: int) -> tuple[Inlines, int]:
        """Parse a code span; an unclosed fence is literal text."""
        index = self._scan_index(text)
        span = index.code_span(pos)
        if span is None:
            end = index.backtick_run_end(pos)
            return (Str(text[pos:end]),), end
        content, end = span
        return (Code(content.strip()),), end

    def _parse_symbol(self, text: str, pos: int) -> tuple[Inlines, int]:
        """Fallback: backslash escape or a literal character.

        Runs of non-ASCII, non-space characters are kept together.
        """
        text_len = len(text)
        char = text[pos]

        if char == "\\":
            if pos + 1 < text_len:
                next_char = text[pos + 1]
                if next_char in ASCII_PUNCTUATION:
                    return (Str(next_char),), pos + 2
                if next_char == "\n":
                    return (LineBreak(),), pos + 2
            return (Str("\\"),), pos + 1

        if not char.isascii():
            end = pos + 1
            while end < text_len and not text[end].isascii() and not text[end].isspace():
                end += 1
            return (Str(text[pos:end]),), end

        return (Str(char),), pos + 1
