"""Scanner, parser and tree-walking evaluator for a small Lox expression language."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from loxexpr.values import Value

__version__ = "0.1.0"


def run(source: str) -> Value:
    """Scan, parse, and evaluate a single expression."""
    from loxexpr.eval import evaluate
    from loxexpr.lexer import scan
    from loxexpr.parser import parse

    tokens = scan(source)
    expr = parse(tokens)
    return evaluate(expr)
