"""Special inline parsing for Garabato.

Handles raw HTML, autolinks (angle-bracket and bare URIs), entities and
math spans. HTML and entities are kept verbatim: the parser never
normalizes or decodes them.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import NamedTuple

from garabato.nodes import Entity, Inline, Inlines, Link, Math, RawHtml, Str
from garabato.parsing.charsets import (
    ASCII_ALNUM,
    ASCII_LETTERS,
    DIGITS,
    HEX_DIGITS,
    TAG_NAME_CHARS,
    URI_TRAILING_PUNCTUATION,
    is_uri_scheme,
    scan_while,
    uri_step,
)

# Angle autolink body: no whitespace or "<" before the closing ">"
_AUTOLINK_BODY = re.compile(r"[^\s<>]+>")


class HtmlTagType(Enum):
    """Kind of HTML tag recognised by parse_html_tag."""

    OPENING = "opening"
    CLOSING = "closing"
    SELF_CLOSING = "self_closing"


class HtmlTag(NamedTuple):
    """A recognised HTML tag.

    Attributes:
        kind: Opening, closing or self-closing.
        name: Tag name, lowercased.
        raw: The whole tag exactly as it appeared in the source.

    """

    kind: HtmlTagType
    name: str
    raw: str


def _scan_quoted(text: str, pos: int) -> int | None:
    """Scan a single- or double-quoted attribute value; return end or None."""
    if pos >= len(text) or text[pos] not in "\"'":
        return None
    close = text.find(text[pos], pos + 1)
    if close == -1:
        return None
    return close + 1


def _scan_html_attribute(text: str, pos: int) -> int | None:
    """Scan whitespace plus one attribute (name, optional = value).

    Values are double-quoted, single-quoted, bare alphanumeric or empty.
    """
    text_len = len(text)
    i = pos
    while i < text_len and text[i].isspace():
        i += 1
    if i == pos or i >= text_len:
        return None
    if not (text[i].isalpha() or text[i] in "_:"):
        return None

    i += 1
    while i < text_len and (text[i] in ASCII_ALNUM or text[i] in ":-_."):
        i += 1

    if i < text_len and text[i] == "=":
        i += 1
        quoted_end = _scan_quoted(text, i)
        if quoted_end is not None:
            return quoted_end
        while i < text_len and text[i].isalnum():
            i += 1
    return i


def parse_html_tag(text: str, pos: int) -> tuple[HtmlTag, int] | None:
    """Parse an HTML open, close or self-closing tag at pos.

    Grammar: ``<`` optional ``/``, a tag name of ASCII alphanumerics plus
    ``?`` and ``!``, attributes, trailing whitespace or ``/``, then ``>``.

    Returns:
        (HtmlTag, end_pos) or None if not a tag

    """
    text_len = len(text)
    if pos >= text_len or text[pos] != "<":
        return None

    i = pos + 1
    closing = i < text_len and text[i] == "/"
    if closing:
        i += 1

    name_start = i
    while i < text_len and text[i] in TAG_NAME_CHARS:
        i += 1
    if i == name_start:
        return None
    name = text[name_start:i]

    while (attr_end := _scan_html_attribute(text, i)) is not None:
        i = attr_end

    final_start = i
    while i < text_len and (text[i].isspace() or text[i] == "/"):
        i += 1
    if i >= text_len or text[i] != ">":
        return None

    if closing:
        kind = HtmlTagType.CLOSING
    elif text[final_start:i].endswith("/"):
        kind = HtmlTagType.SELF_CLOSING
    else:
        kind = HtmlTagType.OPENING
    return HtmlTag(kind=kind, name=name.lower(), raw=text[pos : i + 1]), i + 1


def parse_entity(text: str, pos: int) -> tuple[str, int] | None:
    """Parse an entity reference at position.

    Supports:
    - Named: &amp; &copy; (ASCII letters)
    - Decimal: &#digits;
    - Hexadecimal: &#xhex; or &#Xhex;

    Returns:
        (verbatim_entity, new_position) if valid, None otherwise.

    """
    text_len = len(text)
    if pos >= text_len or text[pos] != "&":
        return None

    i = pos + 1
    if i < text_len and text[i] in ASCII_LETTERS:
        while i < text_len and text[i] in ASCII_LETTERS:
            i += 1
    elif i < text_len and text[i] == "#":
        i += 1
        if i < text_len and text[i] in DIGITS:
            while i < text_len and text[i] in DIGITS:
                i += 1
        elif i < text_len and text[i] in "xX":
            i += 1
            hex_start = i
            while i < text_len and text[i] in HEX_DIGITS:
                i += 1
            if i == hex_start:
                return None
        else:
            return None
    else:
        return None

    if i < text_len and text[i] == ";":
        return text[pos : i + 1], i + 1
    return None


def _entity_inlines(text: str) -> Inlines:
    """Split text into Str runs and verbatim entities."""
    result: list[Inline] = []
    pos = 0
    text_len = len(text)
    while pos < text_len:
        amp = text.find("&", pos)
        if amp == -1:
            result.append(Str(text[pos:]))
            break
        if amp > pos:
            result.append(Str(text[pos:amp]))
        entity = parse_entity(text, amp)
        if entity is not None:
            result.append(Entity(entity[0]))
            pos = entity[1]
        else:
            result.append(Str("&"))
            pos = amp + 1
    return tuple(result)


def _autolink(uri: str) -> Link:
    return Link(_entity_inlines(uri), uri, "")


def _email_link(address: str) -> Link:
    return Link((Str(address),), f"mailto:{address}", "")


class SpecialInlineMixin:
    """Mixin for raw HTML, autolinks, entities and math.

    Required Host Methods:
        - _scan_index(text) -> InlineScanIndex

    """

    def _try_parse_raw_html(self, text: str, pos: int) -> tuple[Inlines, int] | None:
        """Try to parse a raw HTML tag or comment."""
        tag = parse_html_tag(text, pos)
        if tag is not None:
            html_tag, end = tag
            return (RawHtml(html_tag.raw),), end

        if text.startswith("<!--", pos):
            close = self._scan_index(text).comment_close(pos + 4)
            if close is not None:
                return (RawHtml(text[pos : close + 3]),), close + 3
        return None

    def _try_parse_autolink(self, text: str, pos: int) -> tuple[Inlines, int] | None:
        """Try to parse ``<scheme:rest>`` or ``<user@host>``.

        No whitespace is allowed inside the brackets. An ``@`` before any
        ``:`` makes an email link; otherwise the part before ``:`` must be
        a known scheme.
        """
        if text[pos] != "<":
            return None
        match = _AUTOLINK_BODY.match(text, pos + 1)
        if match is None:
            return None
        close = match.end() - 1
        body = text[pos + 1 : close]

        for sep_idx, char in enumerate(body):
            if char in ":@":
                break
        else:
            return None
        if sep_idx == 0:
            return None

        if body[sep_idx] == "@":
            return (_email_link(body),), close + 1
        if is_uri_scheme(body[:sep_idx]):
            return (_autolink(body),), close + 1
        return None

    def _try_parse_uri(self, text: str, colon_pos: int, scheme: str) -> tuple[Inlines, int] | None:
        """Parse a bare URI after a known scheme and its colon.

        One trailing character from ``.;?!:,`` is left out of the link and
        emitted as literal text.
        """
        start = colon_pos + 1
        end = scan_while(text, start, 0, uri_step)
        if end == start:
            return None

        rest = text[start:end]
        if rest[-1] in URI_TRAILING_PUNCTUATION:
            return (_autolink(f"{scheme}:{rest[:-1]}"), Str(rest[-1])), end
        return (_autolink(f"{scheme}:{rest}"),), end

    def _try_parse_entity(self, text: str, pos: int) -> tuple[Inlines, int] | None:
        """Try to parse an entity reference, kept verbatim."""
        entity = parse_entity(text, pos)
        if entity is None:
            return None
        raw, end = entity
        return (Entity(raw),), end

    def _try_parse_math(self, text: str, pos: int) -> tuple[Inlines, int] | None:
        """Try to parse ``$math$``.

        The content must be non-empty with no whitespace at either edge,
        and the closing ``$`` must not be followed by a digit, so prices
        like ``$5 and $6`` stay literal.

        ``$$`` is two literal dollar signs rather than an empty Math node.
        An empty span carries nothing to render, and reading ``$$`` as
        literal keeps ``$$x$`` parsing as ``$`` then ``Math("x")``.
        """
        if text[pos] != "$":
            return None
        close = text.find("$", pos + 1)
        if close == -1:
            return None

        content = text[pos + 1 : close]
        if not content or content[0].isspace() or content[-1].isspace():
            return None
        if close + 1 < len(text) and text[close + 1] in DIGITS:
            return None
        return (Math(content),), close + 1
