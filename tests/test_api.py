"""Tests for the high-level Garabato API."""


class TestParseInlinesFunction:
    """Tests for the parse_inlines() function."""

    def test_returns_tuple(self) -> None:
        from garabato import parse_inlines

        assert parse_inlines(None, "x") == parse_inlines({}, "x")
        assert isinstance(parse_inlines(None, "x"), tuple)

    def test_mixed_paragraph(self) -> None:
        """A paragraph exercising most inline forms at once."""
        from garabato import (
            Code,
            Emph,
            Entity,
            LineBreak,
            Link,
            Math,
            RawHtml,
            ReferenceMap,
            Space,
            Str,
            Strong,
            parse_inlines,
        )

        refs = ReferenceMap({"docs": ("/docs", "Docs")})
        text = "*Hi* **you**: `x` [docs] $y$ <br> &amp;  \nsee http://a.io."
        assert parse_inlines(refs, text) == (
            Emph((Str("Hi"),)),
            Space(),
            Strong((Str("you"),)),
            Str(":"),
            Space(),
            Code("x"),
            Space(),
            Link((Str("docs"),), "/docs", "Docs"),
            Space(),
            Math("y"),
            Space(),
            RawHtml("<br>"),
            Space(),
            Entity("&amp;"),
            LineBreak(),
            Str("see"),
            Space(),
            Link((Str("http://a.io"),), "http://a.io", ""),
            Str("."),
        )

    def test_refmap_is_not_mutated(self) -> None:
        from garabato import ReferenceMap, parse_inlines

        refs = ReferenceMap({"foo": ("/url", "")})
        parse_inlines(refs, "[foo] [bar][baz] [x][]")
        assert dict(refs.items()) == {"foo": ("/url", "")}


class TestInlineParserClass:
    """Tests for the InlineParser class."""

    def test_basic_usage(self) -> None:
        from garabato import Emph, InlineParser, Space, Str

        parser = InlineParser("*hello* world")
        assert parser.parse() == (Emph((Str("hello"),)), Space(), Str("world"))

    def test_parse_is_repeatable(self) -> None:
        from garabato import InlineParser

        parser = InlineParser("[a](/u) *b*")
        assert parser.parse() == parser.parse()

    def test_default_refmap_is_empty(self) -> None:
        from garabato import InlineParser, Str

        assert InlineParser("[foo]").parse() == (Str("["), Str("foo"), Str("]"))


class TestNodes:
    """Nodes are immutable, hashable values."""

    def test_frozen(self) -> None:
        import dataclasses

        import pytest

        from garabato import Str

        node = Str("a")
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.text = "b"  # type: ignore[misc]

    def test_equality_and_hash(self) -> None:
        from garabato import Emph, Link, Str

        a = Link((Emph((Str("x"),)),), "/u")
        b = Link((Emph((Str("x"),)),), "/u", "")
        assert a == b
        assert hash(a) == hash(b)

    def test_pattern_matching(self) -> None:
        from garabato import Link, parse_inlines

        match parse_inlines(None, "<http://a.io>"):
            case (Link(url=url),):
                assert url == "http://a.io"
            case other:
                raise AssertionError(f"unexpected parse: {other!r}")


class TestPublicExports:
    """Every name in __all__ is importable."""

    def test_all_names_resolve(self) -> None:
        import garabato

        for name in garabato.__all__:
            assert hasattr(garabato, name), name
