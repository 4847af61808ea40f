"""
Garabato: Inline Markdown Parser for Python

Resolves the text of a single block element (paragraph, heading, ...) into
typed inline nodes: emphasis, strong, code spans, links, images,
autolinks, raw HTML, entities, math and line breaks. Link references are
looked up in a read-only ReferenceMap supplied by the block parser.

Quick Start:
    >>> from garabato import parse_inlines
    >>> parse_inlines(None, "*hello* world")
    (Emph(children=(Str(text='hello'),)), Space(), Str(text='world'))

    >>> from garabato import ReferenceMap
    >>> refs = ReferenceMap({"foo": ("/url", "title")})
    >>> parse_inlines(refs, "[bar][foo]")
    (Link(label=(Str(text='bar'),), url='/url', title='title'),)
"""

from collections.abc import Mapping

from garabato.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from garabato.errors import GarabatoError, ParseError
from garabato.nodes import (
    Code,
    Emph,
    Entity,
    Image,
    Inline,
    Inlines,
    LineBreak,
    Link,
    Math,
    RawHtml,
    Space,
    Str,
    Strong,
)
from garabato.parser import InlineParser
from garabato.parsing.charsets import URI_SCHEMES, is_uri_scheme
from garabato.parsing.inline import (
    HtmlTag,
    HtmlTagType,
    parse_html_tag,
    parse_link_label,
)
from garabato.references import ReferenceMap, normalize_label
from garabato.serialization import from_dict, from_json, to_dict, to_json
from garabato.text import extract_text

__version__ = "0.1.0"


def parse_inlines(
    refmap: Mapping[str, tuple[str, str]] | None,
    text: str,
) -> Inlines:
    """Parse inline Markdown into typed nodes.

    Args:
        refmap: Link references (normalized label -> (url, title)); None
            for no references
        text: Inline text of one block element

    Returns:
        Tuple of inline nodes covering the whole input

    Raises:
        ParseError: If the grammar fails to consume the input (a bug)

    Example:
        >>> parse_inlines(None, "http://example.com.")
        (Link(label=(Str(text='http://example.com'),), url='http://example.com', title=''), Str(text='.'))
    """
    return InlineParser(text, refmap).parse()


__all__ = [
    # Main API
    "parse_inlines",
    "InlineParser",
    "ReferenceMap",
    "normalize_label",
    "extract_text",
    # Configuration
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Errors
    "GarabatoError",
    "ParseError",
    # Primitives for block parsers
    "HtmlTag",
    "HtmlTagType",
    "parse_html_tag",
    "parse_link_label",
    "URI_SCHEMES",
    "is_uri_scheme",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Nodes
    "Inline",
    "Inlines",
    "Str",
    "Space",
    "LineBreak",
    "Emph",
    "Strong",
    "Code",
    "Link",
    "Image",
    "RawHtml",
    "Entity",
    "Math",
]
