"""Inline parsing subsystem for Garabato.

Provides mixins for parsing inline Markdown content:
- Emphasis and strong (*, _)
- Code spans (`)
- Links, images and reference lookup
- Raw HTML and comments
- Autolinks (<...> and bare URIs)
- Entities (&name;)
- Math ($expression$)

Architecture:
Recursive descent over the source string. Each sub-parser returns
``(inlines, new_pos)`` or None, and None always means nothing was consumed.

"""

from __future__ import annotations

from garabato.parsing.inline.core import InlineParsingCoreMixin, scan_code_span
from garabato.parsing.inline.emphasis import EmphasisMixin
from garabato.parsing.inline.links import LinkParsingMixin, parse_link_label
from garabato.parsing.inline.scan_index import InlineScanIndex
from garabato.parsing.inline.special import (
    HtmlTag,
    HtmlTagType,
    SpecialInlineMixin,
    parse_entity,
    parse_html_tag,
)


class InlineParsingMixin(
    InlineParsingCoreMixin,
    EmphasisMixin,
    LinkParsingMixin,
    SpecialInlineMixin,
):
    """Combined inline parsing mixin.

    Combines all inline parsing functionality into a single mixin
    that can be inherited by the InlineParser class.

    Required Host Attributes:
        - _refmap: ReferenceMap
        - _config: ParseConfig
        - _depth: int
        - _indexes: dict[str, InlineScanIndex]

    """

    pass


__all__ = [
    # Mixins
    "InlineParsingMixin",
    "InlineParsingCoreMixin",
    "EmphasisMixin",
    "LinkParsingMixin",
    "SpecialInlineMixin",
    # Primitives
    "InlineScanIndex",
    "HtmlTag",
    "HtmlTagType",
    "parse_entity",
    "parse_html_tag",
    "parse_link_label",
    "scan_code_span",
]
