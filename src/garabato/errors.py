"""Exception classes for Garabato.

Local parser mismatches are ordinary control flow (sub-parsers return
``None``) and never raise. Only a broken grammar invariant surfaces here.
"""

from __future__ import annotations


class GarabatoError(Exception):
    """Base exception for all Garabato errors.
    
    Subclass this for specific error categories.
    """

    pass


class ParseError(GarabatoError):
    """Inline parse could not consume the whole input.
    
    Raised when a driver step fails to advance. This indicates a gap in
    the grammar and should not occur on any input.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        remainder: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.
        
        Args:
            message: Error description
            lineno: Line number where parsing stopped (1-indexed)
            col_offset: Column offset where parsing stopped (1-indexed)
            remainder: Unparsed tail of the input (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.remainder = remainder

        location = ""
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        detail = ""
        if remainder is not None:
            preview = remainder if len(remainder) <= 40 else remainder[:40] + "..."
            detail = f" (unparsed: {preview!r})"

        super().__init__(f"{location}{message}{detail}")

    @classmethod
    def at_offset(cls, message: str, text: str, offset: int) -> ParseError:
        """Build an error for ``text`` stopped at ``offset``."""
        lineno = text.count("\n", 0, offset) + 1
        line_start = text.rfind("\n", 0, offset) + 1
        return cls(
            message,
            lineno=lineno,
            col_offset=offset - line_start + 1,
            remainder=text[offset:],
        )
