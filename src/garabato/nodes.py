"""Typed inline nodes for Garabato.

All nodes are frozen dataclasses with slots for:
- Immutability: a parsed sequence can be shared across threads
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: match statements work naturally

Node Hierarchy:
Inline
├── Str
├── Space
├── LineBreak
├── Emph
├── Strong
├── Code
├── Link
├── Image
├── RawHtml
├── Entity
└── Math

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass

# =============================================================================
# Leaf Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Str:
    """Literal run of text."""

    text: str


@dataclass(frozen=True, slots=True)
class Space:
    """Whitespace run or soft line break.

    Renderers typically emit a single space or newline.

    """


@dataclass(frozen=True, slots=True)
class LineBreak:
    """Hard line break.

    Markdown: two trailing spaces before a newline, or ``\\`` + newline
    HTML: <br />

    """


@dataclass(frozen=True, slots=True)
class Code:
    """Inline code.

    Markdown: `code`
    HTML: <code>code</code>

    """

    text: str


@dataclass(frozen=True, slots=True)
class RawHtml:
    """Verbatim HTML tag or comment, stored exactly as matched."""

    text: str


@dataclass(frozen=True, slots=True)
class Entity:
    """Verbatim entity reference such as ``&amp;`` or ``&#x1F600;``.

    Never decoded; renderers pass it through unchanged.

    """

    text: str


@dataclass(frozen=True, slots=True)
class Math:
    """Inline math expression.

    Markdown: $E = mc^2$

    """

    text: str


# =============================================================================
# Container Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Emph:
    """Emphasized (italic) text.

    Markdown: *text* or _text_
    HTML: <em>text</em>

    """

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Strong:
    """Strong (bold) text.

    Markdown: **text** or __text__
    HTML: <strong>text</strong>

    """

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Link:
    """Hyperlink.

    Markdown: [text](url "title"), [text][ref], <scheme:...> or a bare URI
    HTML: <a href="url" title="title">text</a>

    """

    label: tuple[Inline, ...]
    url: str
    title: str = ""


@dataclass(frozen=True, slots=True)
class Image:
    """Image.

    Markdown: ![alt](url "title")
    HTML: <img src="url" alt="alt" title="title">

    """

    label: tuple[Inline, ...]
    url: str
    title: str = ""


# PEP 695 type alias for inline elements
type Inline = Str | Space | LineBreak | Emph | Strong | Code | Link | Image | RawHtml | Entity | Math

# Output of every inline parser; concatenation is plain tuple addition
type Inlines = tuple[Inline, ...]

# Nodes that carry nested inline sequences, keyed by field name
CONTAINER_FIELDS: dict[type, str] = {
    Emph: "children",
    Strong: "children",
    Link: "label",
    Image: "label",
}


__all__ = [
    "CONTAINER_FIELDS",
    "Code",
    "Emph",
    "Entity",
    "Image",
    "Inline",
    "Inlines",
    "LineBreak",
    "Link",
    "Math",
    "RawHtml",
    "Space",
    "Str",
    "Strong",
]
