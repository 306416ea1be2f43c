"""Recursive descent parser: converts a token list into an expression tree.

Precedence, lowest to highest::

    expression -> comma
    comma      -> ternary ( "," ternary )*
    ternary    -> equality ( "?" expression ":" ternary )?
    equality   -> comparison ( ( "!=" | "==" ) comparison )*
    comparison -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term       -> factor ( ( "-" | "+" ) factor )*
    factor     -> unary ( ( "/" | "*" ) unary )*
    unary      -> ( "!" | "-" ) unary | primary
    primary    -> NUMBER | STRING | "true" | "false" | "nil" | "(" expression ")"
"""

from __future__ import annotations

from typing import Callable

from loxexpr.ast import Binary, Expr, Grouping, Literal, Ternary, Unary
from loxexpr.errors import ParseError, unexpected_token
from loxexpr.tokens import Token, TokenKind

# Each nested group costs about fourteen Python frames, so the default stays
# well below the interpreter's recursion limit of 1000.
DEFAULT_MAX_DEPTH = 48

_EQUALITY = (TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL)
_COMPARISON = (
    TokenKind.GREATER,
    TokenKind.GREATER_EQUAL,
    TokenKind.LESS,
    TokenKind.LESS_EQUAL,
)
_TERM = (TokenKind.MINUS, TokenKind.PLUS)
_FACTOR = (TokenKind.SLASH, TokenKind.STAR)
_UNARY = (TokenKind.BANG, TokenKind.MINUS)


class Parser:
    """Recursive descent parser over a scanned token list."""

    def __init__(self, tokens: list[Token], max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        if not tokens or tokens[-1].kind != TokenKind.EOF:
            raise ValueError("token list must end with an EOF token")
        self._tokens = tokens
        self._pos = 0
        self._depth = 0
        self._max_depth = max_depth

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _at(self, *kinds: TokenKind) -> bool:
        return self._peek().kind in kinds

    def _at_eof(self) -> bool:
        return self._peek().kind == TokenKind.EOF

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        if tok.kind != TokenKind.EOF:
            self._pos += 1
        return tok

    def _match(self, *kinds: TokenKind) -> Token | None:
        if self._at(*kinds):
            return self._advance()
        return None

    def _expect(self, kind: TokenKind, expected: str, message: str) -> Token:
        tok = self._peek()
        if tok.kind != kind:
            found = tok.lexeme if tok.kind != TokenKind.EOF else "end of input"
            raise unexpected_token(expected, found, tok.position, message)
        return self._advance()

    def _enter(self) -> None:
        """Count one level of nesting, failing past the configured bound."""
        self._depth += 1
        if self._depth > self._max_depth:
            raise ParseError("expression nested too deeply", self._peek().position).with_help(
                f"split the expression or raise max_depth (currently {self._max_depth})"
            )

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def parse(self) -> Expr:
        try:
            expr = self._expression()
        except RecursionError:
            # max_depth was raised past what the interpreter stack can hold
            raise ParseError(
                "expression nested too deeply", self._peek().position
            ).with_help("lower max_depth or split the expression") from None
        if not self._at_eof():
            tok = self._peek()
            raise ParseError(f"expected end of expression, found '{tok.lexeme}'", tok.position)
        return expr

    # ------------------------------------------------------------------
    # Precedence levels
    # ------------------------------------------------------------------

    def _expression(self) -> Expr:
        self._enter()
        expr = self._comma()
        self._depth -= 1
        return expr

    def _binary(self, operand: Callable[[], Expr], kinds: tuple[TokenKind, ...]) -> Expr:
        """Parse a left-associative run of ``operand (op operand)*``."""
        expr = operand()
        while self._at(*kinds):
            op = self._advance()
            right = operand()
            expr = Binary(expr, op, right)
        return expr

    def _comma(self) -> Expr:
        return self._binary(self._ternary, (TokenKind.COMMA,))

    def _ternary(self) -> Expr:
        condition = self._equality()

        if self._match(TokenKind.QUESTION) is None:
            return condition

        saved = self._depth
        self._enter()
        then_branch = self._expression()
        self._expect(TokenKind.COLON, ":", "expected ':' after then-branch")
        else_branch = self._ternary()  # right associative
        self._depth = saved
        return Ternary(condition, then_branch, else_branch)

    def _equality(self) -> Expr:
        return self._binary(self._comparison, _EQUALITY)

    def _comparison(self) -> Expr:
        return self._binary(self._term, _COMPARISON)

    def _term(self) -> Expr:
        return self._binary(self._factor, _TERM)

    def _factor(self) -> Expr:
        return self._binary(self._unary, _FACTOR)

    def _unary(self) -> Expr:
        op = self._match(*_UNARY)
        if op is None:
            return self._primary()

        self._enter()
        right = self._unary()
        self._depth -= 1
        return Unary(op, right)

    def _primary(self) -> Expr:
        tok = self._peek()

        if tok.kind == TokenKind.FALSE:
            self._advance()
            return Literal(False)
        if tok.kind == TokenKind.TRUE:
            self._advance()
            return Literal(True)
        if tok.kind == TokenKind.NIL:
            self._advance()
            return Literal(None)
        if tok.kind == TokenKind.NUMBER:
            self._advance()
            return Literal(float(tok.lexeme))
        if tok.kind == TokenKind.STRING:
            self._advance()
            return Literal(tok.lexeme)

        if tok.kind == TokenKind.LEFT_PAREN:
            self._advance()
            inner = self._expression()
            self._expect(TokenKind.RIGHT_PAREN, ")", "expected ')' after expression")
            return Grouping(inner)

        if tok.kind == TokenKind.EOF:
            raise ParseError("unexpected token: end of input", tok.position).with_help(
                "the expression is incomplete"
            )
        raise ParseError(f"unexpected token '{tok.lexeme}'", tok.position)


def parse(tokens: list[Token], max_depth: int = DEFAULT_MAX_DEPTH) -> Expr:
    """Convenience function: parse a token list into a single expression."""
    return Parser(tokens, max_depth).parse()
