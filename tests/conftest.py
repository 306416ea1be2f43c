"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from loxexpr.ast import Expr
from loxexpr.eval import evaluate
from loxexpr.lexer import scan
from loxexpr.parser import parse
from loxexpr.tokens import Token, TokenKind
from loxexpr.values import Value


@pytest.fixture
def lex():
    """Return a helper that scans source and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        tokens = scan(source)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.kind != TokenKind.EOF]

    return _lex


@pytest.fixture
def kinds(lex):
    """Return a helper that scans source and returns the token kinds (excluding EOF)."""

    def _kinds(source: str) -> list[TokenKind]:
        return [t.kind for t in lex(source)]

    return _kinds


@pytest.fixture
def parse_source():
    """Return a helper that scans and parses source into an expression tree."""

    def _parse(source: str) -> Expr:
        return parse(scan(source))

    return _parse


@pytest.fixture
def run(parse_source):
    """Return a helper that scans, parses, and evaluates source."""

    def _run(source: str) -> Value:
        return evaluate(parse_source(source))

    return _run
