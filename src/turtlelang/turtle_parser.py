"""
Turtle Language Parser

Recursive-descent parser turning a token list into a list of `ASTNode`
statements.

Supported Constructs
--------------------
- Movement: `forward N`, `back N`, `right N`, `left N` where N is a number or
  a `:variable`
- Repetition: `repeat N [ ... ]`
- Procedure definitions: `to name :a :b ... end`
- Procedure calls: `name arg arg ...` (numbers and variables, greedy)

Block Matching
--------------
Each `[` and `to` pushes its token onto `Parser.stack`; each `]` and `end`
pops it and checks the pair. A nested `build()` call returns to its caller as
soon as it consumes the closer of its own block, so recursion depth follows
source nesting. Whatever is left on the stack once input runs out is an
unclosed block.

Entry Points
------------
- `Parser.parse()`: parse a full program, raising on malformed input.
- `Parser.build()`: parse statements until input ends or a block closes.
- `parse_source()`: lex + parse, returning a `ParseResult` instead of raising.

Raises
------
TurtleSyntaxError
    `UnexpectedToken`, `UnexpectedEndOfInput`, `UnmatchedCloser` or
    `UnclosedBlock` from `Parser.parse()`.

`parse_source()` additionally reports blocks nested beyond the interpreter
recursion limit as `NestingTooDeep` instead of letting `RecursionError` escape.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from turtlelang.turtle_aliases import KeywordAliases
from turtlelang.turtle_ast import (
    ASTNode,
    call,
    direction,
    format_program,
    identifier,
    number,
    procedure,
    repeat,
    variable,
)
from turtlelang.turtle_constants import CLOSERS, DIRECTION_TOKENS, OPENERS
from turtlelang.turtle_errors import (
    NestingTooDeep,
    TurtleSyntaxError,
    UnclosedBlock,
    UnexpectedEndOfInput,
    UnexpectedToken,
    UnmatchedCloser,
)
from turtlelang.turtle_lexer import Token, tokenize

# opener token type -> source text, for error messages
OPENER_TEXT = {"LBRACKET": "[", "TO": "to"}


class Parser:
    """
    Turtle Parser Class

    Attributes
    ----------
    tokens : list[Token]
        The input token stream. A trailing EOF token is optional.
    position : int
        Index of the next unconsumed token.
    stack : list[Token]
        Opener tokens (`[` or `to`) of the blocks currently open.
    """

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens: list[Token] = tokens
        self.position: int = 0
        self.stack: list[Token] = []

    def current(self) -> Token:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        last = self.tokens[-1] if self.tokens else None
        if last is not None and last.type == "EOF":
            return last
        return Token("EOF", "EOF", last.line if last else 0, last.col if last else 0)

    def advance(self) -> Token:
        tok = self.current()
        if tok.type != "EOF":
            self.position += 1
        return tok

    def at_end(self) -> bool:
        return self.current().type == "EOF"

    def residual_stack(self) -> list[str]:
        return [tok.type for tok in self.stack]

    def expect_failure(self, tok: Token, expected: str) -> TurtleSyntaxError:
        if tok.type == "EOF":
            return UnexpectedEndOfInput(
                f"unexpected end of input; expected {expected}",
                expected=expected,
                line=tok.line,
                col=tok.col,
            )
        return UnexpectedToken(
            f"unexpected token {tok.type} '{tok.value}'; expected {expected}",
            token=tok,
            expected=expected,
        )

    def parse(self) -> list[ASTNode]:
        """Parse a full program and verify every block was closed."""
        exps = self.build()
        if self.stack:
            opener = self.stack[-1]
            closer = OPENERS[opener.type]
            raise UnclosedBlock(
                f"unclosed block '{OPENER_TEXT[opener.type]}'; expected closing token '{closer}'",
                token=opener,
                expected=f"'{closer}'",
            )
        return exps

    def build(self) -> list[ASTNode]:
        """Parse statements until input is exhausted or this block's closer is consumed."""
        exps: list[ASTNode] = []

        while not self.at_end():
            tok = self.advance()

            if tok.type in DIRECTION_TOKENS:
                exps.append(
                    direction(
                        DIRECTION_TOKENS[tok.type],
                        self.parse_amount(),
                        line=tok.line,
                        col=tok.col,
                    )
                )
            elif tok.type == "REPEAT":
                exps.append(self.parse_repeat(tok))
            elif tok.type == "TO":
                exps.append(self.parse_procedure(tok))
            elif tok.type in CLOSERS:
                self.pop_stack(tok)
                return exps
            elif tok.type == "IDENT":
                exps.append(self.parse_call(tok))
            else:
                raise self.expect_failure(tok, "command")

        return exps

    def parse_amount(self) -> ASTNode:
        """Parse the single number or variable that follows a movement or `repeat`."""
        tok = self.advance()
        if tok.type == "NUMBER":
            return number(tok.value, line=tok.line, col=tok.col)  # type: ignore[arg-type]
        if tok.type == "VAR":
            return variable(str(tok.value), line=tok.line, col=tok.col)
        raise self.expect_failure(tok, "variable")

    def parse_name(self) -> ASTNode:
        tok = self.advance()
        if tok.type != "IDENT":
            raise self.expect_failure(tok, "identifier")
        return identifier(str(tok.value), line=tok.line, col=tok.col)

    def parse_repeat(self, repeat_tok: Token) -> ASTNode:
        """Parse `repeat COUNT [ BODY ]`; the `repeat` token is already consumed.

        The block is opened on the stack before the `[` is checked, so a
        missing bracket leaves it in the residual stack. Once the `[` is seen
        it replaces the placeholder, so unclosed-block errors point at it.
        """
        count = self.parse_amount()
        self.stack.append(Token("LBRACKET", "[", repeat_tok.line, repeat_tok.col))

        bracket = self.advance()
        if bracket.type != "LBRACKET":
            raise self.expect_failure(bracket, "'['")
        self.stack[-1] = bracket

        body = self.build()
        return repeat(count, body, line=repeat_tok.line, col=repeat_tok.col)

    def parse_procedure(self, to_tok: Token) -> ASTNode:
        """Parse `to NAME :param ... BODY end`; the `to` token is already consumed."""
        name = self.parse_name()
        self.stack.append(to_tok)

        params: list[ASTNode] = []
        while self.current().type == "VAR":
            tok = self.advance()
            params.append(variable(str(tok.value), line=tok.line, col=tok.col))

        body = self.build()
        return procedure(name, params, body, line=to_tok.line, col=to_tok.col)

    def parse_call(self, name_tok: Token) -> ASTNode:
        """Parse a procedure call; arguments run until the first non-argument token."""
        args: list[ASTNode] = []
        while self.current().type in ("NUMBER", "VAR"):
            tok = self.advance()
            if tok.type == "NUMBER":
                args.append(number(tok.value, line=tok.line, col=tok.col))  # type: ignore[arg-type]
            else:
                args.append(variable(str(tok.value), line=tok.line, col=tok.col))

        name = identifier(str(name_tok.value), line=name_tok.line, col=name_tok.col)
        return call(name, args, line=name_tok.line, col=name_tok.col)

    def pop_stack(self, closer: Token) -> None:
        """Close the innermost open block with `closer`.

        Raises:
            UnmatchedCloser: If no block is open or the innermost one is of the other kind.
        """
        opener = CLOSERS[closer.type]
        if not self.stack or self.stack.pop().type != opener:
            raise UnmatchedCloser(
                f"unmatched closer '{closer.value}'; expected opening token "
                f"'{OPENER_TEXT[opener]}' before it",
                token=closer,
                expected=f"'{OPENER_TEXT[opener]}'",
            )


@dataclass
class ParseResult:
    """Outcome of `parse_source`: either a program or the error that stopped it."""

    expressions: list[ASTNode] = field(default_factory=list)
    stack: list[str] = field(default_factory=list)
    tokens: list[Token] = field(default_factory=list)
    error: TurtleSyntaxError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        if self.error is not None:
            return f"{self.error.kind}: {self.error}"
        return format_program(self.expressions)


def parse_source(
    source: str, strict: bool = False, aliases: KeywordAliases | None = None
) -> ParseResult:
    """Lex and parse `source`, reporting failure in the result instead of raising."""
    result = ParseResult()
    try:
        result.tokens = tokenize(source, strict=strict, aliases=aliases)
        parser = Parser(result.tokens)
        try:
            result.expressions = parser.parse()
        except RecursionError:
            raise NestingTooDeep(
                "nesting too deep",
                token=parser.stack[-1] if parser.stack else None,
            ) from None
        finally:
            result.stack = parser.residual_stack()
    except TurtleSyntaxError as e:
        result.error = e
        result.expressions = []
    return result


__all__ = ["ParseResult", "Parser", "parse_source"]
