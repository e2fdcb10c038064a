"""Tests for the nested css statement lexer."""

import pytest

from scopecss.css.lexer import Lexer, ParseError
from scopecss.css.tokens import Close, Declaration, Open


def lines(source: str) -> list:
    return Lexer(source).process()


# ---------------------------------------------------------------------------
# Statement splitting
# ---------------------------------------------------------------------------


class TestStatements:
    def test_open_declaration_close(self):
        assert lines(".a { color : red ; }") == [
            Open(".a"),
            Declaration("color:red;"),
            Close(),
        ]

    def test_nested_blocks(self):
        assert lines(".a{ &:hover{ color:blue; } }") == [
            Open(".a"),
            Open("&:hover"),
            Declaration("color:blue;"),
            Close(),
            Close(),
        ]

    def test_missing_terminator_before_close(self):
        assert lines(".a{color:red}") == [Open(".a"), Declaration("color:red;"), Close()]

    def test_doubled_terminator_is_dropped(self):
        assert lines(".a{color:red;;}") == [Open(".a"), Declaration("color:red;"), Close()]

    def test_empty_source(self):
        assert lines("") == []
        assert lines("   \n\t ") == []

    def test_str_of_lines(self):
        assert [str(line) for line in lines(".a{color:red;}")] == [".a{", "color:red;", "}"]


# ---------------------------------------------------------------------------
# Whitespace
# ---------------------------------------------------------------------------


class TestWhitespace:
    def test_combinators_are_tightened(self):
        assert lines(".a > .b ~ .c + .d , .e{")[0] == Open(".a>.b~.c+.d,.e")

    def test_descendant_space_is_kept(self):
        assert lines(".a   .b\n\t.c{")[0] == Open(".a .b .c")

    def test_media_prelude(self):
        assert lines("@media  (min-width: 600px)  and (color) {")[0] == Open(
            "@media (min-width:600px) and (color)"
        )

    def test_calc_keeps_operator_spaces(self):
        assert lines(".a{width:calc(1px + 2px);}")[1] == Declaration("width:calc(1px + 2px);")

    def test_values_keep_single_spaces(self):
        assert lines(".a{margin: 0   auto ;}")[1] == Declaration("margin:0 auto;")


# ---------------------------------------------------------------------------
# Comments, strings and parentheses
# ---------------------------------------------------------------------------


class TestVerbatim:
    def test_comments_are_removed(self):
        source = "/* header */ .a{ // trailing\n color:red; /* inline */ }"
        assert lines(source) == [Open(".a"), Declaration("color:red;"), Close()]

    def test_url_is_not_a_line_comment(self):
        source = ".a{background:url(http://example.com/a.png);}"
        assert lines(source)[1] == Declaration("background:url(http://example.com/a.png);")

    def test_semicolon_inside_parentheses(self):
        source = ".a{background:url(data:image/png;base64,AAAA);}"
        assert lines(source)[1] == Declaration("background:url(data:image/png;base64,AAAA);")

    def test_brace_closes_open_parenthesis(self):
        lexer = Lexer(".a{width:calc(1px;} .b{")
        assert lexer.process() == [
            Open(".a"),
            Declaration("width:calc(1px;;"),
            Close(),
            Open(".b"),
        ]
        assert len(lexer.errors) == 1

    def test_semicolon_inside_closed_parentheses_is_literal(self):
        lexer = Lexer(".a{x:f(a;b);}")
        assert lexer.process()[1] == Declaration("x:f(a;b);")
        assert lexer.errors == []

    def test_braces_inside_strings(self):
        assert lines('.a::after{content:"}";}') == [
            Open(".a::after"),
            Declaration('content:"}";'),
            Close(),
        ]

    def test_escaped_quote_inside_string(self):
        assert lines(r".a{content:'it\'s';}")[1] == Declaration(r"content:'it\'s';")


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------


class TestErrors:
    def test_unclosed_comment(self):
        lexer = Lexer(".a{color:red;} /* never closed")
        assert lexer.process() == [Open(".a"), Declaration("color:red;"), Close()]
        assert len(lexer.errors) == 1
        assert isinstance(lexer.errors[0], ParseError)

    def test_unclosed_string(self):
        lexer = Lexer('.a{content:"oops\n}')
        lexer.process()
        assert any("String" in str(error) for error in lexer.errors)

    def test_unterminated_trailing_declaration(self):
        lexer = Lexer("color:red")
        assert lexer.process() == [Declaration("color:red;")]
        assert len(lexer.errors) == 1

    def test_line_numbers(self):
        tokens = Lexer(".a{\ncolor:red;\n}").process()
        assert tokens[1].line == 2

    def test_error_message_includes_line(self):
        error = ParseError("Comment not closed", 3)
        assert error.line == 3
        assert "line 3" in str(error)


class TestDeclaration:
    def test_name_and_value(self):
        decl = Declaration("Animation-Name:spin;")
        assert decl.name == "animation-name"
        assert decl.value == "spin"

    def test_value_keeps_later_colons(self):
        assert Declaration("background:url(http://x);").value == "url(http://x)"

    def test_without_colon(self):
        assert Declaration("oops;").value == ""
