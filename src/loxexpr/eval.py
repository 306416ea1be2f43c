"""Tree-walking evaluator that reduces an expression tree to a runtime value."""

from __future__ import annotations

import operator
from typing import Callable

from loxexpr.ast import Binary, Expr, Grouping, Literal, Ternary, Unary
from loxexpr.errors import EvalError, division_by_zero, invalid_operand_types
from loxexpr.tokens import Position, Token, TokenKind
from loxexpr.values import Value, is_equal, is_number, is_truthy, type_name

# Operators whose operands must both be numbers
_NUMERIC: dict[TokenKind, Callable[[float, float], Value]] = {
    TokenKind.MINUS: operator.sub,
    TokenKind.STAR: operator.mul,
    TokenKind.SLASH: operator.truediv,
    TokenKind.GREATER: operator.gt,
    TokenKind.GREATER_EQUAL: operator.ge,
    TokenKind.LESS: operator.lt,
    TokenKind.LESS_EQUAL: operator.le,
}


def evaluate(expr: Expr) -> Value:
    """Evaluate *expr* and return its value. Raises EvalError on operand violations.

    Trees too deep for the interpreter stack (long operator chains, or trees
    built by hand rather than by the parser) raise EvalError as well.
    """
    try:
        return _evaluate(expr)
    except RecursionError:
        raise EvalError("expression nested too deeply", _root_position(expr)).with_help(
            "split the expression into smaller parts"
        ) from None


def _root_position(expr: Expr) -> Position:
    while isinstance(expr, Grouping):
        expr = expr.inner
    if isinstance(expr, (Unary, Binary)):
        return expr.operator.position
    return Position(1, 1, 0)


def _evaluate(expr: Expr) -> Value:
    if isinstance(expr, Literal):
        return expr.value
    if isinstance(expr, Grouping):
        return _evaluate(expr.inner)
    if isinstance(expr, Unary):
        return _eval_unary(expr)
    if isinstance(expr, Binary):
        return _eval_binary(expr)
    if isinstance(expr, Ternary):
        return _eval_ternary(expr)
    raise TypeError(f"not an expression node: {type(expr).__name__}")


# ---------------------------------------------------------------------------
# Unary
# ---------------------------------------------------------------------------


def _eval_unary(expr: Unary) -> Value:
    right = _evaluate(expr.right)
    op = expr.operator

    if op.kind == TokenKind.MINUS:
        if not is_number(right):
            raise EvalError("operand must be a number", op.position).with_help(
                f"'-' cannot negate a {type_name(right)}"
            )
        return -right
    if op.kind == TokenKind.BANG:
        return not is_truthy(right)

    raise EvalError(f"invalid unary operator '{op.lexeme}'", op.position)


# ---------------------------------------------------------------------------
# Binary
# ---------------------------------------------------------------------------


def _eval_binary(expr: Binary) -> Value:
    left = _evaluate(expr.left)
    right = _evaluate(expr.right)
    op = expr.operator

    if op.kind == TokenKind.COMMA:
        return right

    if op.kind == TokenKind.PLUS:
        if is_number(left) and is_number(right):
            return left + right
        if isinstance(left, str) and isinstance(right, str):
            return left + right
        raise invalid_operand_types(
            "operands must be two numbers or two strings",
            op.lexeme,
            type_name(left),
            type_name(right),
            op.position,
        )

    if op.kind == TokenKind.EQUAL_EQUAL:
        return is_equal(left, right)
    if op.kind == TokenKind.BANG_EQUAL:
        return not is_equal(left, right)

    if op.kind in _NUMERIC:
        return _numeric(op, left, right)

    raise EvalError(f"invalid binary operator '{op.lexeme}'", op.position)


def _numeric(op: Token, left: Value, right: Value) -> Value:
    if not (is_number(left) and is_number(right)):
        raise invalid_operand_types(
            "operands must be numbers",
            op.lexeme,
            type_name(left),
            type_name(right),
            op.position,
        )
    if op.kind == TokenKind.SLASH and right == 0.0:
        raise division_by_zero(op.position)
    return _NUMERIC[op.kind](left, right)


# ---------------------------------------------------------------------------
# Ternary
# ---------------------------------------------------------------------------


def _eval_ternary(expr: Ternary) -> Value:
    # Only the selected branch is evaluated
    if is_truthy(_evaluate(expr.condition)):
        return _evaluate(expr.then_branch)
    return _evaluate(expr.else_branch)
