"""Command-line interface: run a file or start an interactive prompt."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from loxexpr.debug import Notation
from loxexpr.errors import EvalError, LexError, LoxError, ParseError
from loxexpr.parser import DEFAULT_MAX_DEPTH
from loxexpr.values import Value

CONFIG_NAME = "loxexpr.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None
    notation: Notation
    debug: bool
    max_depth: int
    prompt: str


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="loxexpr",
        description="Evaluate Lox expressions from a file or an interactive prompt",
    )
    p.add_argument("input", nargs="?", help="Source file (default: interactive prompt)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument(
        "--notation",
        choices=[n.value for n in Notation],
        default=None,
        help="Notation for --debug output (default: lisp)",
    )
    p.add_argument(
        "--max-depth",
        type=int,
        default=None,
        metavar="N",
        help=f"Maximum expression nesting depth (default: {DEFAULT_MAX_DEPTH})",
    )
    p.add_argument("--debug", action="store_true", help="Dump the expression tree to stderr")
    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def parse_notation(s: str) -> Notation:
    """Parse a notation name, case-insensitively."""
    try:
        return Notation(s.lower())
    except ValueError:
        choices = ", ".join(n.value for n in Notation)
        raise argparse.ArgumentTypeError(
            f"invalid notation '{s}' (expected one of: {choices})"
        ) from None


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input) if args.input else None
    search_dir = Path(".")
    if input_file is not None and input_file.parent.parts:
        search_dir = input_file.parent

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir)

    notation = Notation.LISP
    cfg_notation = config.get("notation")
    if isinstance(cfg_notation, str):
        notation = parse_notation(cfg_notation)
    if args.notation is not None:
        notation = parse_notation(args.notation)

    debug = config.get("debug") is True or args.debug

    max_depth = DEFAULT_MAX_DEPTH
    cfg_depth = config.get("max_depth")
    if isinstance(cfg_depth, int) and not isinstance(cfg_depth, bool):
        max_depth = cfg_depth
    if args.max_depth is not None:
        max_depth = args.max_depth
    if max_depth < 1:
        raise argparse.ArgumentTypeError(f"max depth must be positive: {max_depth}")

    prompt = "> "
    cfg_prompt = config.get("prompt")
    if isinstance(cfg_prompt, str):
        prompt = cfg_prompt

    return CliOptions(
        input_file=input_file,
        notation=notation,
        debug=debug,
        max_depth=max_depth,
        prompt=prompt,
    )


def run_source(source: str, options: CliOptions) -> Value:
    """Scan, parse, optionally dump, and evaluate one unit of source."""
    from loxexpr.debug import dump_ast
    from loxexpr.eval import evaluate
    from loxexpr.lexer import scan
    from loxexpr.parser import parse

    expr = parse(scan(source), options.max_depth)

    if options.debug:
        try:
            dump_ast(expr, options.notation)
        except ValueError as exc:
            print(f"debug: {exc}", file=sys.stderr)

    return evaluate(expr)


def run_file(path: Path, options: CliOptions) -> int:
    """Evaluate the whole input file as one expression and print the result."""
    from loxexpr.values import stringify

    source = path.read_text(encoding="utf-8")
    filename = str(path)

    try:
        value = run_source(source, options)
    except (LexError, ParseError) as exc:
        print(exc.format(source, filename), file=sys.stderr)
        return 1
    except EvalError as exc:
        print(exc.format(source, filename), file=sys.stderr)
        return 2

    print(stringify(value))
    return 0


def run_prompt(options: CliOptions) -> None:
    """Read-eval-print loop. Stops on end of input or an empty line."""
    from loxexpr.values import stringify

    while True:
        try:
            line = input(options.prompt)
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            break
        if not line.strip():
            break

        try:
            value = run_source(line, options)
        except LoxError as exc:
            print(exc.format(line, "<stdin>"), file=sys.stderr)
            continue
        print(stringify(value))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.input_file is None:
        run_prompt(options)
        return 0

    try:
        return run_file(options.input_file, options)
    except OSError as exc:
        print(f"error: cannot read {options.input_file}: {exc.strerror}", file=sys.stderr)
        return 2
