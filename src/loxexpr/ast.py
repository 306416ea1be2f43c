"""Expression tree node types produced by the parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from loxexpr.tokens import Token

# Number | String | Bool | Nil
LiteralValue = Union[float, str, bool, None]


@dataclass(frozen=True, slots=True)
class Literal:
    """A number, string, boolean or nil constant."""

    value: LiteralValue


@dataclass(frozen=True, slots=True)
class Grouping:
    """Parenthesized expression."""

    inner: Expr


@dataclass(frozen=True, slots=True)
class Unary:
    """Prefix operator: ``-x`` or ``!x``."""

    operator: Token
    right: Expr


@dataclass(frozen=True, slots=True)
class Binary:
    """Infix operator, including the comma operator."""

    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True, slots=True)
class Ternary:
    """Conditional expression: ``condition ? then_branch : else_branch``."""

    condition: Expr
    then_branch: Expr
    else_branch: Expr


Expr = Union[Literal, Grouping, Unary, Binary, Ternary]
