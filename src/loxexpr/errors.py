"""Error types with formatted source context."""

from __future__ import annotations

from enum import Enum

from loxexpr.tokens import Position


class ErrorKind(Enum):
    SYNTAX = "syntax"  # malformed lexeme
    PARSE = "parse"  # grammar violation
    RUNTIME = "runtime"  # operand violations found during evaluation
    TYPE = "type"  # reserved for static checking


class LoxError(Exception):
    """Base class for every error raised by the scanner, parser and evaluator."""

    kind: ErrorKind = ErrorKind.RUNTIME

    def __init__(self, message: str, position: Position, hint: str | None = None) -> None:
        self.message = message
        self.position = position
        self.help = hint
        super().__init__(f"[{position.line}:{position.column}] {message}")

    def with_help(self, hint: str) -> LoxError:
        """Attach a remediation hint and return the same error."""
        self.help = hint
        return self

    def format(self, source: str, filename: str = "<input>") -> str:
        lines = source.splitlines(keepends=True)
        line_idx = self.position.line - 1
        col = self.position.column

        # Build the source line (strip trailing newline for display)
        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        pad = " " * (col - 1)

        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        result = (
            f"error[{self.kind.value}]: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}^"
        )
        if self.help:
            result += f"\n{' ' * gutter_width}= help: {self.help}"
        return result


class LexError(LoxError):
    """Raised on the first malformed lexeme."""

    kind = ErrorKind.SYNTAX


class ParseError(LoxError):
    """Raised on the first grammar violation."""

    kind = ErrorKind.PARSE


class EvalError(LoxError):
    """Raised on operand violations during evaluation."""

    kind = ErrorKind.RUNTIME


class TypeCheckError(LoxError):
    kind = ErrorKind.TYPE


def unexpected_token(
    expected: str, found: str, position: Position, message: str | None = None
) -> ParseError:
    """Missing-token error. *message* replaces the generic ``expected X, found Y`` text."""
    return ParseError(
        message or f"expected '{expected}', found '{found}'",
        position,
        hint=f"try using '{expected}' instead",
    )


def division_by_zero(position: Position) -> EvalError:
    return EvalError("division by zero", position, hint="ensure the denominator is not zero")


def invalid_operand_types(
    message: str, op: str, left: str, right: str, position: Position
) -> EvalError:
    """Operand error naming both runtime types, e.g. ``string and number``."""
    return EvalError(
        f"{message} (got {left} and {right})",
        position,
        hint=f"the '{op}' operator requires compatible types",
    )
