"""Runtime values and the rules that apply to them."""

from __future__ import annotations

from typing import Union

# Structurally the same as LiteralValue today; kept apart so runtime-only
# values can be added without touching the tree.
Value = Union[float, str, bool, None]


def is_truthy(value: Value) -> bool:
    """Only ``false`` is falsy; every other value, nil included, is truthy."""
    if isinstance(value, bool):
        return value
    return True


def type_name(value: Value) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, float):
        return "number"
    return "string"


def is_number(value: Value) -> bool:
    return isinstance(value, float)


def is_equal(a: Value, b: Value) -> bool:
    """Values are equal only when they share a runtime type and compare equal."""
    if type_name(a) != type_name(b):
        return False
    return a == b


def stringify(value: Value) -> str:
    """Render a value the way the shell prints results."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value)
    return value


def format_number(n: float) -> str:
    if n.is_integer() and abs(n) < 1e16:
        return str(int(n))
    return repr(n)
