"""
Turtle CLI Entrypoint.

Lexes and parses a turtle program and prints the resulting tree.

Features:
    - Read source from `.logo` files, inline strings (`-s`) or stdin (`-`).
    - Parse the built-in sample program when no source is given.
    - Print the tree in constructor notation or as JSON.
    - Optionally print the token stream first.
    - Keyword aliases from a JSON file (`--aliases`, or `TURTLE_ALIASES`).
    - Launch an interactive REPL.

Example usage:
    turtlelang square.logo
    turtlelang -s "repeat 4 [ forward 10 right 90 ]" --json
    turtlelang -s "fd 10 rt 90" --abbrev
    turtlelang --repl

Functions:
    run_turtle(...) -> int:
        Executes the pipeline (read → lex → parse → print) and returns an exit status.

    main(argv=None) -> int:
        Parses CLI arguments and dispatches to `run_turtle` or the REPL.
"""

import argparse
import json
import os
import sys

from turtlelang.turtle_aliases import AliasError, KeywordAliases
from turtlelang.turtle_ast import format_node
from turtlelang.turtle_constants import SAMPLE_PROGRAM
from turtlelang.turtle_errors import NestingTooDeep
from turtlelang.turtle_parser import parse_source

ALIASES_ENV = "TURTLE_ALIASES"


def read_source(source: str | None, is_string: bool = False) -> str:
    """
    Resolves the program text.

    Args:
        source (str | None): Raw text (with `is_string`), a `.logo` path, `-` for
            stdin, or None for the built-in sample program.
        is_string (bool): Treat `source` as program text.

    Raises:
        ValueError: If `source` is a path that does not end with '.logo'.
        OSError: If the file cannot be read.
    """
    if source is None:
        return SAMPLE_PROGRAM
    if is_string:
        return source
    if source == "-":
        return sys.stdin.read()
    if not source.endswith(".logo"):
        raise ValueError("Only .logo files are supported.")
    with open(source, encoding="utf-8") as f:
        return f.read()


def load_aliases(path: str | None, abbrev: bool = False) -> KeywordAliases | None:
    """Builds the alias table from `--abbrev`, `--aliases` or `TURTLE_ALIASES`."""
    path = path or os.getenv(ALIASES_ENV)
    if path is None and not abbrev:
        return None
    aliases = KeywordAliases.logo_abbreviations() if abbrev else KeywordAliases()
    if path:
        aliases.load_from_json(path)
    return aliases


def run_turtle(
    source: str | None = None,
    is_string: bool = False,
    strict: bool = False,
    aliases: KeywordAliases | None = None,
    as_json: bool = False,
    show_tokens: bool = False,
) -> int:
    """
    Run the pipeline: read, lex, parse and print the tree.

    Args:
        source (str | None): See `read_source`.
        is_string (bool): Treat `source` as program text.
        strict (bool): Reject characters the lexer does not recognize.
        aliases (KeywordAliases | None): Keyword alias table for the lexer.
        as_json (bool): Print the tree as a JSON list of node dicts.
        show_tokens (bool): Print the token stream before the tree.

    Returns:
        int: 0 on success, 1 if the program is malformed, unreadable or nested
            too deeply to print.

    Side Effects:
        - Prints the tree and residual stack to stdout.
        - Prints errors to stderr.
    """
    try:
        text = read_source(source, is_string)
    except (OSError, ValueError) as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        return 1

    result = parse_source(text, strict=strict, aliases=aliases)

    if show_tokens:
        print(f"[tokens] >>> {result.tokens}")

    if result.error is not None:
        print(f"[error] >>> {result.error.kind}: {result.error}", file=sys.stderr)
        return 1

    try:
        if as_json:
            payload = [node.to_dict() for node in result.expressions]
            lines = [json.dumps(payload, indent=2)]
        else:
            lines = [format_node(node) for node in result.expressions]
    except RecursionError:
        err = NestingTooDeep("nesting too deep")
        print(f"[error] >>> {err.kind}: {err}", file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    print(f"[stack] >>> {result.stack}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the turtle CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as program text instead of a file path.
        - `--strict`: Fail on characters that are not part of any token.
        - `--aliases`: JSON file of keyword aliases.
        - `--abbrev`: Enable the `fd`/`bk`/`rt`/`lt` abbreviations.
        - `--json`: Print the tree as JSON.
        - `--tokens`: Print the token stream.
        - `--repl`: Launch the interactive REPL.
    """
    parser = argparse.ArgumentParser(prog="turtlelang")
    parser.add_argument(
        "source",
        nargs="?",
        help="A .logo file, '-' for stdin, or raw source (with -s)",
    )
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject characters that are not part of any token",
    )
    parser.add_argument(
        "--aliases",
        metavar="JSON",
        help=f"Keyword alias file (default: ${ALIASES_ENV})",
    )
    parser.add_argument(
        "--abbrev", action="store_true", help="Enable fd/bk/rt/lt abbreviations"
    )
    parser.add_argument(
        "--json", dest="as_json", action="store_true", help="Print the tree as JSON"
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print the token stream first"
    )
    parser.add_argument(
        "--repl", action="store_true", help="Launch interactive REPL instead"
    )

    args = parser.parse_args(argv)

    try:
        aliases = load_aliases(args.aliases, args.abbrev)
    except AliasError as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        for conflict in e.conflicts:
            print(f" - {conflict}", file=sys.stderr)
        return 1

    if args.repl:
        from turtlelang.turtle_repl import start_repl

        start_repl(strict=args.strict, aliases=aliases)
        return 0

    return run_turtle(
        source=args.source,
        is_string=args.string,
        strict=args.strict,
        aliases=aliases,
        as_json=args.as_json,
        show_tokens=args.tokens,
    )


if __name__ == "__main__":
    sys.exit(main())
