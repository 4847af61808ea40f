"""Precomputed scan tables for one inline text.

Link labels, destinations, titles, code spans and HTML comments all scan
forward until a closing delimiter. Repeating those scans from every
candidate opener costs O(n^2) on input such as ``"[" * n``, where no
opener ever closes. The tables here answer the same questions in O(1) or
O(log n) after one right-to-left pass over the text.

Each table is built on first use. A scan that starts at position ``i`` is
resolved from the answers already computed for positions after ``i``. A
nested opener is resolved by jumping past its own closer.

Thread Safety:
InlineScanIndex instances belong to one parser and one text.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

import re
from bisect import bisect_left
from dataclasses import dataclass, field

from garabato.parsing.charsets import WHITESPACE, is_escapable

# Table entry for "never closes"
_NONE = -1

_ESCAPE_PATTERN = re.compile(r"\\([!-/:-@\[-`{-~])")


def unescape(text: str) -> str:
    """Resolve backslash escapes of ASCII punctuation."""
    return _ESCAPE_PATTERN.sub(r"\1", text)


@dataclass(slots=True)
class InlineScanIndex:
    """Closing-delimiter lookups for one text.

    Usage:
        index = InlineScanIndex("[a [b]](/u)")
        index.label_close(0)      # 6
        index.url_end(8)          # (10, None)

    Complexity:
        - first use of a table: O(n)
        - label_close(), url_end(), pointy_end(), title_close(): O(1)
        - code_span(), comment_close(): O(log n)

    """

    text: str
    _run_ends: list[int] | None = field(default=None, init=False, repr=False)
    # Fence length -> sorted start positions of maximal backtick runs
    _runs_by_length: dict[int, list[int]] | None = field(default=None, init=False, repr=False)
    _label_closes: list[int] | None = field(default=None, init=False, repr=False)
    _url_stops: list[int] | None = field(default=None, init=False, repr=False)
    _url_cuts: list[int] | None = field(default=None, init=False, repr=False)
    _pointy_closes: list[int] | None = field(default=None, init=False, repr=False)
    _title_closes: dict[str, list[int]] = field(default_factory=dict, init=False, repr=False)
    _comment_closes: list[int] | None = field(default=None, init=False, repr=False)

    def _escape_at(self, i: int) -> bool:
        text = self.text
        return text[i] == "\\" and i + 1 < len(text) and is_escapable(text[i + 1])

    # Code spans

    def _build_runs(self) -> None:
        text = self.text
        text_len = len(text)
        run_ends = [0] * (text_len + 1)
        run_ends[text_len] = text_len
        by_length: dict[int, list[int]] = {}
        for i in range(text_len - 1, -1, -1):
            if text[i] != "`":
                run_ends[i] = i
                continue
            run_ends[i] = run_ends[i + 1] if text[i + 1 : i + 2] == "`" else i + 1
            if i == 0 or text[i - 1] != "`":
                by_length.setdefault(run_ends[i] - i, []).append(i)
        for starts in by_length.values():
            starts.reverse()
        self._run_ends = run_ends
        self._runs_by_length = by_length

    def backtick_run_end(self, pos: int) -> int:
        """End of the backtick run starting at pos (pos itself if none)."""
        if self._run_ends is None:
            self._build_runs()
        assert self._run_ends is not None
        return self._run_ends[pos]

    def _code_span_close(self, pos: int) -> int:
        """Start of the run that closes a code span opened at pos."""
        fence_end = self.backtick_run_end(pos)
        fence_len = fence_end - pos
        if fence_len == 0:
            return _NONE
        assert self._runs_by_length is not None
        starts = self._runs_by_length.get(fence_len)
        if not starts:
            return _NONE
        k = bisect_left(starts, fence_end)
        return starts[k] if k < len(starts) else _NONE

    def code_span(self, pos: int) -> tuple[str, int] | None:
        """Code span opened by the backtick run at pos.

        The span ends at the first later run of exactly the same length.

        Returns:
            (raw_content, end_pos) or None if the fence is never closed.

        """
        close = self._code_span_close(pos)
        if close == _NONE:
            return None
        fence_end = self.backtick_run_end(pos)
        return self.text[fence_end:close], close + (fence_end - pos)

    # Link labels

    def _build_label_closes(self) -> list[int]:
        text = self.text
        text_len = len(text)
        closes = [_NONE] * (text_len + 2)
        for i in range(text_len - 1, -1, -1):
            char = text[i]
            if char == "]":
                closes[i] = i
            elif char == "[":
                inner = closes[i + 1]
                closes[i] = _NONE if inner == _NONE else closes[inner + 1]
            elif char == "\\":
                closes[i] = closes[i + 2] if self._escape_at(i) else closes[i + 1]
            elif char == "`":
                span = self._code_span_close(i)
                if span == _NONE:
                    closes[i] = closes[self.backtick_run_end(i)]
                else:
                    closes[i] = closes[span + self.backtick_run_end(i) - i]
            else:
                closes[i] = closes[i + 1]
        return closes

    def label_close(self, pos: int) -> int | None:
        """Position of the ``]`` closing the label opened at pos.

        Nested brackets must balance. Escaped brackets and brackets inside
        code spans do not count; an unclosed backtick run is plain content.
        """
        if self._label_closes is None:
            self._label_closes = self._build_label_closes()
        close = self._label_closes[pos + 1]
        return None if close == _NONE else close

    # Link destinations

    def _build_url_tables(self) -> None:
        text = self.text
        text_len = len(text)
        stops = list(range(text_len + 2))
        cuts = [_NONE] * (text_len + 2)
        for i in range(text_len - 1, -1, -1):
            char = text[i]
            if char in " \n" or char == ")":
                continue
            if char == "\\":
                if self._escape_at(i):
                    stops[i], cuts[i] = stops[i + 2], cuts[i + 2]
                continue
            if char == "(":
                inner = stops[i + 1]
                if inner < text_len and text[inner] == ")":
                    stops[i], cuts[i] = stops[inner + 1], cuts[inner + 1]
                else:
                    stops[i], cuts[i] = inner, i
                continue
            stops[i], cuts[i] = stops[i + 1], cuts[i + 1]
        self._url_stops = stops
        self._url_cuts = cuts

    def url_end(self, pos: int) -> tuple[int, int | None]:
        """Where a raw destination starting at pos stops.

        The scan stops at a space, a newline, a backslash that escapes
        nothing, an unbalanced ``)`` or the end of text.

        Returns:
            (stop_pos, cut) where cut is the first ``(`` left unclosed at
            the stop, or None when every ``(`` was balanced.

        """
        if self._url_stops is None:
            self._build_url_tables()
        assert self._url_stops is not None and self._url_cuts is not None
        cut = self._url_cuts[pos]
        return self._url_stops[pos], None if cut == _NONE else cut

    def pointy_end(self, pos: int) -> int | None:
        """Position of the ``>`` closing a destination opened by ``<`` at pos.

        None if a line break or the end of text comes first.
        """
        if self._pointy_closes is None:
            text = self.text
            closes = [_NONE] * (len(text) + 2)
            for i in range(len(text) - 1, -1, -1):
                char = text[i]
                if char == ">":
                    closes[i] = i
                elif char in "\r\n":
                    closes[i] = _NONE
                elif self._escape_at(i):
                    closes[i] = closes[i + 2]
                else:
                    closes[i] = closes[i + 1]
            self._pointy_closes = closes
        close = self._pointy_closes[pos + 1]
        return None if close == _NONE else close

    # Link titles

    def _build_title_closes(self, opener: str) -> list[int]:
        text = self.text
        text_len = len(text)
        closer = ")" if opener == "(" else opener
        closes = [_NONE] * (text_len + 2)
        for i in range(text_len - 1, -1, -1):
            if self._escape_at(i):
                closes[i] = closes[i + 2]
                continue
            char = text[i]
            following = text[i + 1] if i + 1 < text_len else ""
            if char == closer and (opener == "(" or not following.isalnum()):
                closes[i] = i
            elif char == opener and (
                opener == "("
                or (
                    i > 0
                    and text[i - 1] in WHITESPACE
                    and following
                    and following not in WHITESPACE
                )
            ):
                inner = closes[i + 1]
                closes[i] = _NONE if inner == _NONE else closes[inner + 1]
            else:
                closes[i] = closes[i + 1]
        return closes

    def title_close(self, pos: int) -> int | None:
        """Position of the delimiter closing the title opened at pos.

        A quote followed by an alphanumeric never closes; a quote between
        whitespace and a non-space opens a nested quotation. Parentheses
        nest when balanced.
        """
        opener = self.text[pos]
        closes = self._title_closes.get(opener)
        if closes is None:
            closes = self._title_closes[opener] = self._build_title_closes(opener)
        close = closes[pos + 1]
        return None if close == _NONE else close

    # HTML comments

    def comment_close(self, pos: int) -> int | None:
        """Start of the first ``-->`` at or after pos."""
        if self._comment_closes is None:
            self._comment_closes = [m.start() for m in re.finditer("-->", self.text)]
        k = bisect_left(self._comment_closes, pos)
        return self._comment_closes[k] if k < len(self._comment_closes) else None
