"""Extract plain text from Garabato inline nodes.

Example:
    >>> from garabato import parse_inlines, extract_text
    >>> extract_text(parse_inlines(None, "Hello **World** &amp; co"))
    'Hello World & co'
"""

import html
from collections.abc import Iterable

from garabato.nodes import (
    Code,
    Emph,
    Entity,
    Image,
    Inline,
    LineBreak,
    Link,
    Math,
    RawHtml,
    Space,
    Str,
    Strong,
)


def extract_text(node: Inline | Iterable[Inline]) -> str:
    """Extract plain text from a node or a sequence of nodes.

    Recursively walks the tree, concatenating text content. Skips RawHtml.
    Space contributes a space, LineBreak a newline. Entities are decoded
    here only; the nodes themselves keep the verbatim reference.

    Args:
        node: An inline node, or any iterable of them (e.g. parse output).

    Returns:
        Concatenated plain text.

    """
    match node:
        case Str(text=text) | Code(text=text) | Math(text=text):
            return text
        case Entity(text=text):
            return html.unescape(text)
        case Space():
            return " "
        case LineBreak():
            return "\n"
        case RawHtml():
            return ""
        case Emph(children=children) | Strong(children=children):
            return extract_text(children)
        case Link(label=label) | Image(label=label):
            return extract_text(label)
        case _:
            return "".join(extract_text(child) for child in node)
