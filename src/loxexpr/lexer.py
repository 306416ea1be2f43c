"""Scanner: converts source text into a flat token list."""

from __future__ import annotations

from loxexpr.errors import LexError
from loxexpr.tokens import KEYWORDS, Position, Token, TokenKind, is_alnum, is_alpha, is_digit

_SINGLE: dict[str, TokenKind] = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "-": TokenKind.MINUS,
    "+": TokenKind.PLUS,
    ";": TokenKind.SEMICOLON,
    "*": TokenKind.STAR,
    ":": TokenKind.COLON,
    "?": TokenKind.QUESTION,
}

# char -> (kind alone, kind when followed by '=')
_WITH_EQUAL: dict[str, tuple[TokenKind, TokenKind]] = {
    "!": (TokenKind.BANG, TokenKind.BANG_EQUAL),
    "=": (TokenKind.EQUAL, TokenKind.EQUAL_EQUAL),
    "<": (TokenKind.LESS, TokenKind.LESS_EQUAL),
    ">": (TokenKind.GREATER, TokenKind.GREATER_EQUAL),
}


class Scanner:
    """Tokenize source text into a list of Token objects."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._tokens: list[Token] = []
        self._start = 0  # offset of the first character of the current lexeme
        self._current = 0  # offset of the character being considered
        self._line = 1
        self._col = 1
        self._start_pos = Position(1, 1, 0)

    def scan(self) -> list[Token]:
        """Scan the full source and return the token list, ending in EOF."""
        while not self._at_end():
            self._start = self._current
            self._start_pos = self._current_pos()
            self._scan_token()

        end = self._current_pos()
        self._tokens.append(Token(TokenKind.EOF, "", end, 0))
        return self._tokens

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    def _at_end(self) -> bool:
        return self._current >= len(self._source)

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._current)

    def _peek(self, offset: int = 0) -> str:
        idx = self._current + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._current]
        self._current += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _match(self, expected: str) -> bool:
        if self._peek() != expected:
            return False
        self._advance()
        return True

    def _add(self, kind: TokenKind, lexeme: str | None = None) -> None:
        if lexeme is None:
            lexeme = self._source[self._start : self._current]
        length = self._current - self._start
        self._tokens.append(Token(kind, lexeme, self._start_pos, length))

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        ch = self._advance()

        if ch in _SINGLE:
            self._add(_SINGLE[ch])
            return

        if ch in _WITH_EQUAL:
            alone, combined = _WITH_EQUAL[ch]
            self._add(combined if self._match("=") else alone)
            return

        if ch == "/":
            if self._match("/"):
                # Comment runs to end of line
                while not self._at_end() and self._peek() != "\n":
                    self._advance()
            else:
                self._add(TokenKind.SLASH)
            return

        if ch in " \r\t\n":
            return

        if ch == '"':
            self._string()
            return

        if is_digit(ch):
            self._number()
            return

        if is_alpha(ch):
            self._identifier()
            return

        raise LexError(f"unexpected character '{ch}'", self._start_pos)

    # ------------------------------------------------------------------
    # Literals
    # ------------------------------------------------------------------

    def _string(self) -> None:
        while not self._at_end() and self._peek() != '"':
            self._advance()

        if self._at_end():
            raise LexError("unterminated string literal", self._start_pos).with_help(
                "add a closing '\"'"
            )

        self._advance()  # closing quote
        self._add(TokenKind.STRING, self._source[self._start + 1 : self._current - 1])

    def _number(self) -> None:
        while is_digit(self._peek()):
            self._advance()

        # A dot only belongs to the number when a digit follows it
        if self._peek() == "." and is_digit(self._peek(1)):
            self._advance()
            while is_digit(self._peek()):
                self._advance()

        self._add(TokenKind.NUMBER)

    def _identifier(self) -> None:
        while is_alnum(self._peek()):
            self._advance()
        text = self._source[self._start : self._current]
        self._add(KEYWORDS.get(text, TokenKind.IDENTIFIER))


def scan(source: str) -> list[Token]:
    """Convenience function: scan source text and return the token list."""
    return Scanner(source).scan()
