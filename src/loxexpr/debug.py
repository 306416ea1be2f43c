"""--debug expression dump in Lisp, Polish or RPN notation."""

from __future__ import annotations

import sys
from enum import Enum
from typing import TextIO

from loxexpr.ast import Binary, Expr, Grouping, Literal, Ternary, Unary
from loxexpr.values import format_number


class Notation(Enum):
    LISP = "lisp"  # fully parenthesized prefix
    POLISH = "polish"  # flat prefix
    RPN = "rpn"  # postfix


def dump_ast(
    expr: Expr, notation: Notation = Notation.LISP, *, file: TextIO | None = None
) -> None:
    """Print *expr* in the given notation to *file* (default: stderr)."""
    if file is None:
        file = sys.stderr
    file.write(format_expr(expr, notation) + "\n")


def format_expr(expr: Expr, notation: Notation = Notation.LISP) -> str:
    """Render the tree (not its value) as text. Performs no evaluation.

    Raises ValueError when the tree is too deep for the interpreter stack.
    """
    try:
        return _format(expr, notation)
    except RecursionError:
        raise ValueError("expression nested too deeply to print") from None


def _format(expr: Expr, notation: Notation) -> str:
    if isinstance(expr, Literal):
        return _format_literal(expr)
    if isinstance(expr, Grouping):
        inner = _format(expr.inner, notation)
        if notation == Notation.LISP:
            return f"(group {inner})"
        return inner
    if isinstance(expr, Unary):
        right = _format(expr.right, notation)
        if notation == Notation.RPN:
            return f"{right} {expr.operator.lexeme}"
        return f"({expr.operator.lexeme} {right})"
    if isinstance(expr, Binary):
        return _format_op(
            expr.operator.lexeme,
            (_format(expr.left, notation), _format(expr.right, notation)),
            notation,
        )
    if isinstance(expr, Ternary):
        return _format_op(
            "?:",
            (
                _format(expr.condition, notation),
                _format(expr.then_branch, notation),
                _format(expr.else_branch, notation),
            ),
            notation,
        )
    raise TypeError(f"not an expression node: {type(expr).__name__}")


def _format_op(name: str, operands: tuple[str, ...], notation: Notation) -> str:
    args = " ".join(operands)
    if notation == Notation.LISP:
        return f"({name} {args})"
    if notation == Notation.POLISH:
        return f"{name} {args}"
    return f"{args} {name}"


def _format_literal(node: Literal) -> str:
    value = node.value
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value)
    return f'"{value}"'
