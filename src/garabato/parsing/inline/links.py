"""Link and image parsing for Garabato.

Handles inline links, reference links and images.

A bracketed label is parsed first, then three forms are tried in order:
- Inline link: [label](url "title")
- Reference link: [label][ref], [label][] or [label]
- Fallback: literal brackets around the parsed label contents

Label precedence: backslash escapes beat brackets, nested brackets beat
code spans, and code spans beat everything else, so
``[a link `with a ](/url)` character`` contains no link.

Closing delimiters are looked up in the parser's InlineScanIndex, so an
unclosed ``[``, ``(``, ``<`` or title quote costs O(1) rather than a scan
to the end of the text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from garabato.nodes import Image, Inlines, Link, Str
from garabato.parsing.charsets import WHITESPACE
from garabato.parsing.inline.scan_index import InlineScanIndex, unescape
from garabato.utils.logger import get_logger, log_literal_fallback

if TYPE_CHECKING:
    from garabato.config import ParseConfig
    from garabato.references import ReferenceMap

logger = get_logger(__name__)


def parse_link_label(text: str, pos: int) -> tuple[str, int] | None:
    """Parse a bracketed link label starting at pos.

    Nested brackets must balance; brackets inside code spans and escaped
    brackets do not count. An unclosed backtick run is plain content.

    Args:
        text: The full text being parsed
        pos: Position of the opening [

    Returns:
        (raw_label, end_pos) or None if the label is never closed

    """
    return _label_at(InlineScanIndex(text), pos)


def _label_at(index: InlineScanIndex, pos: int) -> tuple[str, int] | None:
    text = index.text
    if pos >= len(text) or text[pos] != "[":
        return None
    close = index.label_close(pos)
    if close is None:
        return None
    return text[pos + 1 : close], close + 1


def _skip_spaces(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] == " ":
        pos += 1
    return pos


def _skip_spnl(text: str, pos: int) -> int:
    """Skip spaces, at most one newline, then spaces again."""
    pos = _skip_spaces(text, pos)
    if pos < len(text) and text[pos] == "\n":
        pos = _skip_spaces(text, pos + 1)
    return pos


def _scan_link_url(index: InlineScanIndex, pos: int) -> tuple[int, int, int] | None:
    """Scan a link destination starting at pos.

    Either angle-bracket delimited (<url>, may contain spaces) or raw.
    Raw destinations stop at whitespace or an unbalanced ``)``; an unclosed
    ``(`` is left out of the URL. Newlines are never allowed.

    Returns:
        (start, stop, end_pos) where text[start:stop] is the still-escaped
        URL, or None if an angle-bracket URL is unclosed

    """
    text = index.text
    if pos < len(text) and text[pos] == "<":
        close = index.pointy_end(pos)
        if close is None:
            return None
        return pos + 1, close, close + 1

    stop, cut = index.url_end(pos)
    return pos, stop if cut is None else cut, stop


def _scan_link_title(index: InlineScanIndex, pos: int) -> tuple[int, int, int] | None:
    """Scan a link title enclosed in ", ' or ().

    The character after the opener must not be whitespace or ``)``. A
    quote followed by an alphanumeric never closes (``it's``); a quote
    preceded by whitespace opens a nested quotation. Parenthesized titles
    may nest balanced parentheses.

    Returns:
        (start, stop, end_pos) or None if no valid title is found

    """
    text = index.text
    if pos + 1 >= len(text) or text[pos] not in "\"'(":
        return None
    first = text[pos + 1]
    if first in WHITESPACE or first == ")":
        return None

    close = index.title_close(pos)
    if close is None:
        return None
    return pos + 1, close, close + 1


class LinkParsingMixin:
    """Mixin for link and image parsing.

    Required Host Attributes:
        - _refmap: ReferenceMap
        - _config: ParseConfig
        - _depth: int

    Required Host Methods:
        - _parse_inlines(text) -> Inlines
        - _scan_index(text) -> InlineScanIndex

    """

    _refmap: ReferenceMap
    _config: ParseConfig
    _depth: int

    def _try_parse_link(self, text: str, pos: int) -> tuple[Inlines, int] | None:
        """Try to parse a link at position.

        Once the label parses, this always succeeds: either as a link or as
        the literal-bracket fallback.
        """
        if text[pos] != "[":
            return None

        if self._depth >= self._config.max_nesting:
            log_literal_fallback(logger, self._config.max_nesting, pos, "[")
            return None

        label = _label_at(self._scan_index(text), pos)
        if label is None:
            return None
        raw_label, after = label

        self._depth += 1
        try:
            children = self._parse_inlines(raw_label)
        finally:
            self._depth -= 1

        result = self._try_parse_inline_link(text, after, children)
        if result is None:
            result = self._try_parse_reference_link(text, after, raw_label, children)
        if result is None:
            result = (Str("["), *children, Str("]")), after
        return result

    def _try_parse_inline_link(
        self, text: str, pos: int, children: Inlines
    ) -> tuple[Inlines, int] | None:
        """Parse ``(url "title")`` following a label.

        Escapes in the URL and title are resolved only once the closing
        ``)`` has been found.
        """
        text_len = len(text)
        if pos >= text_len or text[pos] != "(":
            return None

        index = self._scan_index(text)
        dest = _scan_link_url(index, _skip_spaces(text, pos + 1))
        if dest is None:
            return None
        url_start, url_stop, pos = dest

        title_span = _scan_link_title(index, _skip_spnl(text, pos))
        if title_span is not None:
            pos = _skip_spaces(text, title_span[2])
        else:
            pos = _skip_spnl(text, pos)

        if pos >= text_len or text[pos] != ")":
            return None
        url = unescape(text[url_start:url_stop])
        title = "" if title_span is None else unescape(text[title_span[0] : title_span[1]])
        return (Link(children, url, title),), pos + 1

    def _try_parse_reference_link(
        self, text: str, pos: int, raw_label: str, children: Inlines
    ) -> tuple[Inlines, int] | None:
        """Resolve ``[label][ref]``, ``[label][]`` or ``[label]`` against the map."""
        ref = raw_label
        end = pos

        second = _label_at(self._scan_index(text), _skip_spnl(text, pos))
        if second is not None:
            ref_label, end = second
            if ref_label:
                ref = ref_label

        found = self._refmap.lookup(ref)
        if found is None:
            return None
        url, title = found
        return (Link(children, url, title),), end

    def _try_parse_image(self, text: str, pos: int) -> tuple[Inlines, int] | None:
        """Try to parse an image: ``!`` followed by a link.

        Only a parse that produced exactly one Link becomes an Image;
        otherwise the ``!`` stays literal in front of whatever was parsed.
        """
        if text[pos] != "!":
            return None

        if pos + 1 < len(text) and text[pos + 1] == "[":
            result = self._try_parse_link(text, pos + 1)
            if result is not None:
                inlines, end = result
                if len(inlines) == 1 and isinstance(inlines[0], Link):
                    link = inlines[0]
                    return (Image(link.label, link.url, link.title),), end
                return (Str("!"), *inlines), end

        return (Str("!"),), pos + 1
