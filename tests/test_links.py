"""Tests for links, images and reference lookup."""

from garabato import (
    Code,
    Emph,
    Image,
    Link,
    ParseConfig,
    ReferenceMap,
    Space,
    Str,
    extract_text,
    parse_config_context,
    parse_inlines,
    parse_link_label,
)

REFS = ReferenceMap({"foo": ("/url", "title")})


def parse(text: str, refs=None):
    return parse_inlines(refs, text)


class TestParseLinkLabel:
    """Tests for the bracketed label scanner."""

    def test_simple(self) -> None:
        assert parse_link_label("[foo]", 0) == ("foo", 5)

    def test_nested_brackets(self) -> None:
        assert parse_link_label("[a [b] c] rest", 0) == ("a [b] c", 9)

    def test_escaped_bracket(self) -> None:
        assert parse_link_label("[a \\] b]", 0) == ("a \\] b", 8)

    def test_code_span_absorbs_bracket(self) -> None:
        assert parse_link_label("[a `]` b]", 0) == ("a `]` b", 9)

    def test_unclosed_backtick_is_content(self) -> None:
        assert parse_link_label("[a ` b]", 0) == ("a ` b", 7)

    def test_unclosed(self) -> None:
        assert parse_link_label("[unclosed", 0) is None

    def test_not_at_bracket(self) -> None:
        assert parse_link_label("foo]", 0) is None

    def test_offset(self) -> None:
        assert parse_link_label("see [x] here", 4) == ("x", 7)


class TestInlineLinks:
    """Tests for [label](url "title")."""

    def test_url_and_title(self) -> None:
        assert parse('[link](/uri "title")') == (Link((Str("link"),), "/uri", "title"),)

    def test_url_only(self) -> None:
        assert parse("[link](/uri)") == (Link((Str("link"),), "/uri", ""),)

    def test_empty_destination(self) -> None:
        assert parse("[link]()") == (Link((Str("link"),), "", ""),)

    def test_pointy_destination_may_contain_spaces(self) -> None:
        assert parse("[link](</my uri>)") == (Link((Str("link"),), "/my uri", ""),)

    def test_pointy_destination_rejects_newline(self) -> None:
        result = parse("[link](</my\nuri>)")
        assert not any(isinstance(node, Link) for node in result)

    def test_balanced_parens_in_url(self) -> None:
        assert parse("[a](/wiki/X_(Y))") == (Link((Str("a"),), "/wiki/X_(Y)", ""),)

    def test_escape_in_url(self) -> None:
        assert parse("[a](/u\\*rl)") == (Link((Str("a"),), "/u*rl", ""),)

    def test_single_quoted_title(self) -> None:
        assert parse("[a](/u 'it's here')") == (Link((Str("a"),), "/u", "it's here"),)

    def test_nested_quotes_in_title(self) -> None:
        assert parse('[a](/u "a "quoted" word")') == (
            Link((Str("a"),), "/u", 'a "quoted" word'),
        )

    def test_parenthesized_title(self) -> None:
        assert parse("[a](/u (title))") == (Link((Str("a"),), "/u", "title"),)

    def test_title_on_next_line(self) -> None:
        assert parse('[a](/u\n"t")') == (Link((Str("a"),), "/u", "t"),)

    def test_spaces_before_close(self) -> None:
        assert parse("[a]( /u  )") == (Link((Str("a"),), "/u", ""),)

    def test_emphasis_in_label(self) -> None:
        assert parse("[*foo*](/u)") == (Link((Emph((Str("foo"),)),), "/u", ""),)

    def test_code_span_in_label(self) -> None:
        assert parse("[a `]` b](/u)") == (
            Link((Str("a"), Space(), Code("]"), Space(), Str("b")), "/u", ""),
        )

    def test_code_span_beats_link(self) -> None:
        result = parse("[a link `with a ](/url)` character")
        assert not any(isinstance(node, Link) for node in result)
        assert Code("with a ](/url)") in result

    def test_link_inside_code_span(self) -> None:
        assert parse("`[a](b)`") == (Code("[a](b)"),)

    def test_unclosed_paren_is_not_link(self) -> None:
        result = parse("[a](/u")
        assert result[:3] == (Str("["), Str("a"), Str("]"))


class TestReferenceLinks:
    """Tests for reference links resolved through the ReferenceMap."""

    def test_full_reference(self) -> None:
        assert parse("[bar][foo]", REFS) == (Link((Str("bar"),), "/url", "title"),)

    def test_collapsed_reference(self) -> None:
        assert parse("[foo][]", REFS) == (Link((Str("foo"),), "/url", "title"),)

    def test_shortcut_reference(self) -> None:
        assert parse("[foo]", REFS) == (Link((Str("foo"),), "/url", "title"),)

    def test_case_insensitive(self) -> None:
        assert parse("[FOO]", REFS) == (Link((Str("FOO"),), "/url", "title"),)

    def test_whitespace_normalized(self) -> None:
        refs = ReferenceMap({"foo bar": ("/fb", "")})
        assert parse("[Foo \n Bar]", refs) == (
            Link((Str("Foo"), Space(), Str("Bar")), "/fb", ""),
        )

    def test_second_label_after_space(self) -> None:
        assert parse("[bar] [foo]", REFS) == (Link((Str("bar"),), "/url", "title"),)

    def test_missing_reference_is_literal(self) -> None:
        assert parse("[baz]", REFS) == (Str("["), Str("baz"), Str("]"))

    def test_missing_reference_keeps_parsed_label(self) -> None:
        assert parse("[*baz*]") == (Str("["), Emph((Str("baz"),)), Str("]"))

    def test_nested_brackets_fall_back_around_inner_link(self) -> None:
        assert parse("[[foo]]", REFS) == (
            Str("["),
            Link((Str("foo"),), "/url", "title"),
            Str("]"),
        )

    def test_inline_beats_reference(self) -> None:
        assert parse("[foo](/other)", REFS) == (Link((Str("foo"),), "/other", ""),)

    def test_plain_dict_accepted(self) -> None:
        assert parse("[Foo]", {"FOO": ("/u", "t")}) == (Link((Str("Foo"),), "/u", "t"),)

    def test_none_refmap(self) -> None:
        assert parse("[foo]", None) == (Str("["), Str("foo"), Str("]"))


class TestImages:
    """Tests for ![label](url)."""

    def test_inline_image(self) -> None:
        assert parse('![alt](/img.png "T")') == (Image((Str("alt"),), "/img.png", "T"),)

    def test_reference_image(self) -> None:
        assert parse("![foo]", REFS) == (Image((Str("foo"),), "/url", "title"),)

    def test_unresolved_image_keeps_bang(self) -> None:
        assert parse("![baz]") == (Str("!"), Str("["), Str("baz"), Str("]"))

    def test_lone_bang(self) -> None:
        assert parse("hi!") == (Str("hi"), Str("!"))

    def test_bang_with_unclosed_bracket(self) -> None:
        assert parse("![unclosed") == (Str("!"), Str("["), Str("unclosed"))


class TestLinkNesting:
    """Bracket nesting is bounded by ParseConfig.max_nesting."""

    def test_deep_brackets_do_not_overflow(self) -> None:
        text = "[" * 500 + "x" + "]" * 500
        result = parse(text)
        assert extract_text(result) == text
        assert not any(isinstance(node, Link) for node in result)

    def test_limit_zero_keeps_brackets_literal(self) -> None:
        with parse_config_context(ParseConfig(max_nesting=0)):
            assert parse("[a](/u)") == (
                Str("["),
                Str("a"),
                Str("]"),
                Str("("),
                Str("/"),
                Str("u"),
                Str(")"),
            )
