"""Parsing internals for Garabato.

- charsets: character classes, the URI scheme set and scan_while
- inline: the inline parser mixins and primitive token parsers
"""

from garabato.parsing.inline import InlineParsingMixin

__all__ = [
    "InlineParsingMixin",
]
