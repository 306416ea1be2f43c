"""Test punctuation, operators, comments, whitespace and token positions."""

import pytest

from loxexpr.lexer import scan
from loxexpr.tokens import KEYWORDS, Position, TokenKind


class TestSingleCharacter:
    @pytest.mark.parametrize(
        "source, kind",
        [
            ("(", TokenKind.LEFT_PAREN),
            (")", TokenKind.RIGHT_PAREN),
            ("{", TokenKind.LEFT_BRACE),
            ("}", TokenKind.RIGHT_BRACE),
            (",", TokenKind.COMMA),
            (".", TokenKind.DOT),
            ("-", TokenKind.MINUS),
            ("+", TokenKind.PLUS),
            (";", TokenKind.SEMICOLON),
            ("/", TokenKind.SLASH),
            ("*", TokenKind.STAR),
            (":", TokenKind.COLON),
            ("?", TokenKind.QUESTION),
        ],
    )
    def test_punctuation(self, lex, source, kind):
        tokens = lex(source)
        assert [t.kind for t in tokens] == [kind]
        assert tokens[0].lexeme == source
        assert tokens[0].length == 1

    def test_adjacent(self, kinds):
        assert kinds("(){}") == [
            TokenKind.LEFT_PAREN,
            TokenKind.RIGHT_PAREN,
            TokenKind.LEFT_BRACE,
            TokenKind.RIGHT_BRACE,
        ]


class TestOperators:
    @pytest.mark.parametrize(
        "source, kind",
        [
            ("!", TokenKind.BANG),
            ("!=", TokenKind.BANG_EQUAL),
            ("=", TokenKind.EQUAL),
            ("==", TokenKind.EQUAL_EQUAL),
            (">", TokenKind.GREATER),
            (">=", TokenKind.GREATER_EQUAL),
            ("<", TokenKind.LESS),
            ("<=", TokenKind.LESS_EQUAL),
        ],
    )
    def test_one_or_two_chars(self, lex, source, kind):
        tokens = lex(source)
        assert [t.kind for t in tokens] == [kind]
        assert tokens[0].lexeme == source

    def test_maximal_munch(self, kinds):
        assert kinds("===") == [TokenKind.EQUAL_EQUAL, TokenKind.EQUAL]

    def test_separated_not_combined(self, kinds):
        assert kinds("! =") == [TokenKind.BANG, TokenKind.EQUAL]

    def test_bang_before_operand(self, kinds):
        assert kinds("!true") == [TokenKind.BANG, TokenKind.TRUE]


class TestComments:
    def test_comment_produces_no_token(self, kinds):
        assert kinds("// nothing here") == []

    def test_comment_ends_at_newline(self, kinds):
        assert kinds("// note\n1") == [TokenKind.NUMBER]

    def test_code_before_comment(self, kinds):
        assert kinds("1 // one") == [TokenKind.NUMBER]

    def test_slash_alone_is_division(self, kinds):
        assert kinds("4 / 2") == [TokenKind.NUMBER, TokenKind.SLASH, TokenKind.NUMBER]


class TestWhitespace:
    def test_only_whitespace(self, kinds):
        assert kinds(" \t\r\n ") == []

    def test_newline_advances_line(self, lex):
        tokens = lex("1\n+")
        assert tokens[1].position == Position(2, 1, 2)

    def test_crlf(self, lex):
        tokens = lex("1\r\n2")
        assert tokens[1].line == 2
        assert tokens[1].column == 1


class TestPositions:
    def test_simple_sum(self):
        tokens = scan("1 + 2")
        assert [(t.kind, t.lexeme) for t in tokens] == [
            (TokenKind.NUMBER, "1"),
            (TokenKind.PLUS, "+"),
            (TokenKind.NUMBER, "2"),
            (TokenKind.EOF, ""),
        ]
        assert [t.position for t in tokens] == [
            Position(1, 1, 0),
            Position(1, 3, 2),
            Position(1, 5, 4),
            Position(1, 6, 5),
        ]

    def test_two_char_operator_position(self, lex):
        tokens = lex("a >= b")
        assert tokens[1].column == 3
        assert tokens[1].length == 2

    def test_token_forwards_position(self, lex):
        tok = lex("  x")[0]
        assert (tok.line, tok.column, tok.offset) == (1, 3, 2)


class TestEof:
    def test_empty_source(self):
        tokens = scan("")
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.EOF
        assert tokens[0].position == Position(1, 1, 0)

    def test_exactly_one_eof(self):
        tokens = scan("1 + 2 // trailing\n")
        eofs = [t for t in tokens if t.kind == TokenKind.EOF]
        assert len(eofs) == 1
        assert tokens[-1] is eofs[0]

    def test_eof_at_end_of_input(self):
        tokens = scan("ab\ncd")
        assert tokens[-1].position == Position(2, 3, 5)


class TestKeywordTable:
    def test_contains_full_set(self):
        assert set(KEYWORDS) == {
            "and", "class", "else", "false", "fun", "for", "if", "nil",
            "or", "print", "return", "super", "this", "true", "var", "while",
        }

    def test_read_only(self):
        with pytest.raises(TypeError):
            KEYWORDS["let"] = TokenKind.VAR  # type: ignore[index]
