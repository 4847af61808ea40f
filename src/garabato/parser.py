"""Recursive descent inline parser producing typed nodes.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `InlineParsingCoreMixin`: driver loop, words, whitespace, code, escapes
- `EmphasisMixin`: * and _ enclosures
- `LinkParsingMixin`: links, images, reference lookup
- `SpecialInlineMixin`: raw HTML, autolinks, entities, math

Thread Safety:
- Parser produces immutable nodes (frozen dataclasses)
- Configuration is read from ContextVar (thread-local)
- The reference map is never mutated, so one map can serve many threads

"""

from __future__ import annotations

from collections.abc import Mapping

from garabato.config import get_parse_config
from garabato.nodes import Inlines
from garabato.parsing import InlineParsingMixin
from garabato.parsing.inline.scan_index import InlineScanIndex
from garabato.references import ReferenceMap


class InlineParser(InlineParsingMixin):
    """Inline parser for one text span.

    Usage:
        >>> parser = InlineParser("*hello* world")
        >>> parser.parse()
        (Emph(children=(Str(text='hello'),)), Space(), Str(text='world'))

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. Configuration is captured from the ContextVar when
        the parser is created.

    """

    __slots__ = (
        "_source",
        "_refmap",
        "_config",
        # Current emphasis/bracket nesting, bounded by config.max_nesting
        "_depth",
        # Scan tables keyed by the text they index (the source and each label)
        "_indexes",
    )

    def __init__(
        self,
        source: str,
        refmap: Mapping[str, tuple[str, str]] | None = None,
    ) -> None:
        """Initialize parser with source text.

        Args:
            source: Inline text already isolated by a block parser
            refmap: Link references; plain mappings are wrapped in a
                ReferenceMap so lookups are normalized

        """
        self._source = source
        self._refmap = refmap if isinstance(refmap, ReferenceMap) else ReferenceMap(refmap)
        self._config = get_parse_config()
        self._depth = 0
        self._indexes: dict[str, InlineScanIndex] = {}

    def parse(self) -> Inlines:
        """Parse the source into a sequence of inline nodes.

        Raises:
            ParseError: If the grammar fails to consume the whole input.

        """
        return self._parse_inlines(self._source)
