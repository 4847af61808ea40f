"""Tests for emphasis and strong emphasis.

Delimiter runs of ``*`` and ``_`` open one, two or three levels. An opener
commits to the first matching closer; unmatched delimiters are literal.
"""

import pytest

from garabato import (
    Code,
    Emph,
    ParseConfig,
    Space,
    Str,
    Strong,
    extract_text,
    parse_config_context,
    parse_inlines,
)


def parse(text: str):
    return parse_inlines(None, text)


class TestBasicEmphasis:
    """Single, double and triple delimiters."""

    @pytest.mark.parametrize("delim", ["*", "_"])
    def test_emph(self, delim: str) -> None:
        assert parse(f"{delim}foo{delim}") == (Emph((Str("foo"),)),)

    @pytest.mark.parametrize("delim", ["*", "_"])
    def test_strong(self, delim: str) -> None:
        assert parse(f"{delim * 2}foo{delim * 2}") == (Strong((Str("foo"),)),)

    @pytest.mark.parametrize("delim", ["*", "_"])
    def test_triple_is_strong_around_emph(self, delim: str) -> None:
        assert parse(f"{delim * 3}foo{delim * 3}") == (Strong((Emph((Str("foo"),)),)),)

    def test_emph_in_sentence(self) -> None:
        assert parse("*hello* world") == (Emph((Str("hello"),)), Space(), Str("world"))

    def test_emph_spans_words(self) -> None:
        assert parse("*foo bar*") == (Emph((Str("foo"), Space(), Str("bar"))),)


class TestNestedEmphasis:
    """Emphasis inside emphasis."""

    def test_strong_inside_emph(self) -> None:
        assert parse("*foo **bar** baz*") == (
            Emph((Str("foo"), Space(), Strong((Str("bar"),)), Space(), Str("baz"))),
        )

    def test_emph_inside_strong(self) -> None:
        assert parse("**foo *bar* baz**") == (
            Strong((Str("foo"), Space(), Emph((Str("bar"),)), Space(), Str("baz"))),
        )

    def test_triple_closed_by_double_then_single(self) -> None:
        assert parse("***foo** bar*") == (
            Emph((Strong((Str("foo"),)), Space(), Str("bar"))),
        )

    def test_triple_closed_by_single_then_double(self) -> None:
        assert parse("***foo* bar**") == (
            Strong((Emph((Str("foo"),)), Space(), Str("bar"))),
        )

    def test_code_span_hides_delimiter(self) -> None:
        assert parse("*foo `*` bar*") == (
            Emph((Str("foo"), Space(), Code("*"), Space(), Str("bar"))),
        )


class TestLiteralDelimiters:
    """Delimiters that do not produce emphasis."""

    def test_unclosed_emph(self) -> None:
        assert parse("*foo") == (Str("*"), Str("foo"))

    def test_unclosed_strong(self) -> None:
        assert parse("**foo") == (Str("**"), Str("foo"))

    def test_lone_delimiter(self) -> None:
        assert parse("**") == (Str("**"),)

    def test_unclosed_triple(self) -> None:
        assert parse("***foo") == (Str("***"), Str("foo"))

    def test_triple_closed_by_double_only(self) -> None:
        assert parse("***foo** bar") == (
            Str("*"),
            Strong((Str("foo"),)),
            Space(),
            Str("bar"),
        )

    def test_triple_closed_by_single_only(self) -> None:
        assert parse("***foo* bar") == (
            Str("**"),
            Emph((Str("foo"),)),
            Space(),
            Str("bar"),
        )

    def test_opener_followed_by_space(self) -> None:
        assert parse("* foo*") == (Str("*"), Space(), Str("foo"), Str("*"))

    def test_run_of_four_is_literal(self) -> None:
        assert parse("****") == (Str("****"),)

    def test_intraword_underscore(self) -> None:
        assert parse("snake_case_word") == (Str("snake_case_word"),)

    def test_underscore_emph_keeps_inner_underscores(self) -> None:
        assert parse("_foo_bar_") == (Emph((Str("foo_bar"),)),)

    def test_intraword_star_still_opens(self) -> None:
        assert parse("a*b*") == (Str("a"), Emph((Str("b"),)))


class TestNestingLimit:
    """Nesting is bounded by ParseConfig.max_nesting."""

    def test_delimiter_past_limit_is_literal(self) -> None:
        with parse_config_context(ParseConfig(max_nesting=1)):
            result = parse("*a *b* c*")
        assert result == (
            Emph((Str("a"), Space(), Str("*"), Str("b"))),
            Space(),
            Str("c"),
            Str("*"),
        )

    def test_zero_nesting_disables_emphasis(self) -> None:
        with parse_config_context(ParseConfig(max_nesting=0)):
            assert parse("*a*") == (Str("*"), Str("a"), Str("*"))

    def test_deep_alternation_does_not_overflow(self) -> None:
        text = "*a **b " * 2000
        result = parse(text)
        assert isinstance(result, tuple)
        assert extract_text(result).count("a") == 2000
