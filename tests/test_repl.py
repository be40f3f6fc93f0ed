import builtins
from collections.abc import Callable, Iterable

import pytest

from turtlelang.turtle_aliases import KeywordAliases
from turtlelang.turtle_parser import parse_source
from turtlelang.turtle_repl import report, start_repl


def feed(lines: Iterable[str]) -> Callable[[str], str]:
    it = iter(lines)

    def fake_input(prompt: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return fake_input


def run(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    lines: list[str],
    **kwargs: object,
) -> list[str]:
    monkeypatch.setattr(builtins, "input", feed(lines))
    start_repl(**kwargs)  # type: ignore[arg-type]
    return capsys.readouterr().out.splitlines()


def test_repl_quit(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    out = run(monkeypatch, capsys, ["quit"])
    assert out[0] == "Turtle REPL. Type 'exit' or 'quit' to leave."
    assert out[-1] == "Exiting Turtle REPL."


def test_repl_exit_is_case_insensitive(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    out = run(monkeypatch, capsys, ["  EXIT "])
    assert out[-1] == "Exiting Turtle REPL."


def test_repl_eof_exits(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    out = run(monkeypatch, capsys, [])
    assert out[-1] == "Exiting Turtle REPL."


def test_repl_keyboard_interrupt(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def interrupt(prompt: str) -> str:
        raise KeyboardInterrupt

    monkeypatch.setattr(builtins, "input", interrupt)
    start_repl()
    assert "Exiting Turtle REPL." in capsys.readouterr().out


def test_repl_single_line(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    out = run(monkeypatch, capsys, ["forward 10 right 90", "quit"])
    assert out[1:3] == ["Forward(Number(10))", "Right(Number(90))"]


def test_repl_empty_input_skipped(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    out = run(monkeypatch, capsys, ["   ", "quit"])
    assert out == ["Turtle REPL. Type 'exit' or 'quit' to leave.", "Exiting Turtle REPL."]


def test_repl_continues_open_blocks(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    prompts: list[str] = []
    lines = iter(["to sq :s", "repeat 4 [", "forward :s right 90", "]", "end", "quit"])

    def fake_input(prompt: str) -> str:
        prompts.append(prompt)
        return next(lines)

    monkeypatch.setattr(builtins, "input", fake_input)
    start_repl()
    out = capsys.readouterr().out.splitlines()
    assert prompts == [">>> ", "... ", "... ", "... ", "... ", ">>> "]
    assert out[1] == (
        'ProcedureDef(Identifier("sq"), [Variable(":s")], '
        '[Repeat(Number(4), [Forward(Variable(":s")), Right(Number(90))])])'
    )


def test_repl_quit_inside_block_is_source(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    out = run(monkeypatch, capsys, ["repeat 2 [", "quit", "]", "exit"])
    assert out[1] == 'Repeat(Number(2), [Call(Identifier("quit"), [])])'
    assert out[-1] == "Exiting Turtle REPL."


def test_repl_reports_errors_and_recovers(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    out = run(monkeypatch, capsys, ["forward 10 ]", "back 1", "quit"])
    assert out[1] == "[error] >>>"
    assert out[2].startswith("UnmatchedCloser: 1:12:")
    assert out[3] == "Back(Number(1))"


def test_repl_token_echo_toggle(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    out = run(monkeypatch, capsys, ["tokens", "left 5", "tokens", "quit"])
    assert out[1] == "[mode] >>> Token echo ON"
    assert out[2] == "[tokens] >>> [Token(LEFT, left), Token(NUMBER, 5)]"
    assert out[3] == "Left(Number(5))"
    assert out[4] == "[mode] >>> Token echo OFF"


def test_repl_strict_and_aliases(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    aliases = KeywordAliases.logo_abbreviations()
    out = run(
        monkeypatch, capsys, ["fd 1", "fd 1;", "quit"], strict=True, aliases=aliases
    )
    assert out[1] == "Forward(Number(1))"
    assert out[2] == "[error] >>>"
    assert out[3].startswith("LexError:")


def test_report_prints_tree(capsys: pytest.CaptureFixture[str]) -> None:
    report(parse_source("square 5"))
    assert capsys.readouterr().out == 'Call(Identifier("square"), [Number(5)])\n'


def test_report_tree_too_deep_to_print(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def overflow(node: object) -> str:
        raise RecursionError

    monkeypatch.setattr("turtlelang.turtle_repl.format_node", overflow)
    report(parse_source("forward 1"))
    assert capsys.readouterr().out.splitlines() == [
        "[error] >>>",
        "NestingTooDeep: nesting too deep",
    ]


def test_repl_reports_deep_nesting(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    depth = 1000
    source = "repeat 1 [ " * depth + "forward 1" + " ]" * depth
    out = run(monkeypatch, capsys, [source, "back 1", "quit"])
    assert out[1] == "[error] >>>"
    assert out[2].startswith("NestingTooDeep:")
    assert out[3] == "Back(Number(1))"


def test_repl_aliases_command(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    aliases = KeywordAliases.logo_abbreviations()
    out = run(monkeypatch, capsys, ["aliases", "quit"], aliases=aliases)
    assert out[1] == "[aliases] >>> 4 configured"
    assert out[2:6] == aliases.report().splitlines()
    assert out[2].strip() == "bk → back"


def test_repl_aliases_command_without_aliases(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    out = run(monkeypatch, capsys, ["aliases", "quit"])
    assert out[1] == "[aliases] >>> none configured"


def test_repl_aliases_inside_block_is_source(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    out = run(monkeypatch, capsys, ["repeat 2 [", "aliases", "]", "quit"])
    assert out[1] == 'Repeat(Number(2), [Call(Identifier("aliases"), [])])'
