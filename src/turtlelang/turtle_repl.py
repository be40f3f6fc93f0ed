"""
Interactive read-parse-print loop for the turtle language.

Each entry is lexed and parsed as soon as it forms a complete program. While a
`[` or `to` block is still open the REPL keeps reading with a `... ` prompt and
parses the accumulated lines together once the block closes.

Commands (only at the `>>> ` prompt):
    exit, quit   leave the REPL
    tokens       toggle printing of the token stream
    aliases      list the keyword aliases in effect
"""

from turtlelang.turtle_aliases import KeywordAliases
from turtlelang.turtle_ast import format_node
from turtlelang.turtle_errors import NestingTooDeep, UnclosedBlock
from turtlelang.turtle_parser import ParseResult, parse_source


def report(result: ParseResult, show_tokens: bool = False) -> None:
    if show_tokens:
        print(f"[tokens] >>> {result.tokens}")
    error = result.error
    if error is None:
        try:
            lines = [format_node(node) for node in result.expressions]
        except RecursionError:
            error = NestingTooDeep("nesting too deep")
    if error is not None:
        print("[error] >>>")
        print(f"{error.kind}: {error}")
        return
    for line in lines:
        print(line)


def show_aliases(aliases: KeywordAliases | None) -> None:
    if not aliases:
        print("[aliases] >>> none configured")
        return
    print(f"[aliases] >>> {len(aliases)} configured")
    print(aliases.report())


def start_repl(strict: bool = False, aliases: KeywordAliases | None = None) -> None:
    print("Turtle REPL. Type 'exit' or 'quit' to leave.")
    show_tokens = False
    src_lines: list[str] = []

    while True:
        try:
            prompt = ">>> " if not src_lines else "... "
            line = input(prompt)
        except (KeyboardInterrupt, EOFError):
            print("\nExiting Turtle REPL.")
            return

        if not src_lines:
            command = line.strip().lower()
            if command in ("exit", "quit"):
                print("Exiting Turtle REPL.")
                return
            if command == "tokens":
                show_tokens = not show_tokens
                print(f"[mode] >>> Token echo {'ON' if show_tokens else 'OFF'}")
                continue
            if command == "aliases":
                show_aliases(aliases)
                continue
            if not command:
                continue

        src_lines.append(line)
        result = parse_source("\n".join(src_lines), strict=strict, aliases=aliases)
        if isinstance(result.error, UnclosedBlock):
            continue

        src_lines = []
        report(result, show_tokens)


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
